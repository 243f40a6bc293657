"""
Shell integration for wt-manager.

A child process cannot change its parent's working directory, so `wt` is
a shell function that runs wt-manager with WT_CD_FILE pointing at a
temporary file and cds to whatever path wt-manager writes there.
"""

import sys


BASH_INTEGRATION = r'''# wt-manager shell integration
# Add to ~/.bashrc:
#     eval "$({executable} --init bash)"

wt() {{
    local cd_file exit_code target
    cd_file="$(mktemp "${{TMPDIR:-/tmp}}/wt-cd.XXXXXX")" || return 1
    WT_CD_FILE="$cd_file" command {executable} "$@"
    exit_code=$?
    if [[ -s "$cd_file" ]]; then
        target="$(<"$cd_file")"
        cd "$target" || exit_code=$?
    fi
    rm -f "$cd_file"
    return $exit_code
}}

_wt_completion() {{
    local IFS=$'\n'
    COMPREPLY=( $(command {executable} --complete "$COMP_CWORD" "${{COMP_WORDS[@]}}" 2>/dev/null) )
}}

complete -F _wt_completion wt
'''

SHELLS = {
    'bash': BASH_INTEGRATION,
}


def render_integration(shell: str, executable: str = 'wt-manager') -> str:
    """Return the integration script for shell."""
    return SHELLS[shell].format(executable=executable)


def print_integration(shell: str) -> int:
    """Print the integration script for shell."""
    if shell not in SHELLS:
        print(f"Unsupported shell: {shell} (supported: {', '.join(sorted(SHELLS))})", file=sys.stderr)
        return 1
    sys.stdout.write(render_integration(shell))
    return 0


INSTALL_HELP = """Worktree Manager

To install, add this line to your ~/.bashrc:
    eval "$(wt-manager --init bash)"

Then restart your terminal or run:
    source ~/.bashrc

The 'wt' command will then be available with tab completion.

Usage examples:
    wt feature-x                  # Create/switch to feature-x worktree
    wt feature-x git status       # Run git status in worktree
    wt --list                     # List current project's worktrees
    wt --list-all                 # List all sibling projects' worktrees
    wt --rm feature-x             # Remove feature-x worktree
    wt --project myapp feature-y  # Work with myapp's feature-y worktree
"""
