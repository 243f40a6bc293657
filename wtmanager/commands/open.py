"""
Command for switching to, or running a command in, a worktree.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from wtmanager.core import WorktreeProject, WorktreeManagerError


CD_FILE_ENV = 'WT_CD_FILE'


def request_cd(path: Path) -> None:
    """Ask the calling shell to change into path.

    The bash integration points WT_CD_FILE at a temporary file and cds to
    whatever is written there. Without it the path is printed instead.
    Progress messages go to stderr so only the path reaches stdout.
    """
    cd_file = os.environ.get(CD_FILE_ENV)
    if cd_file:
        Path(cd_file).write_text(str(path))
    else:
        print(path)


def run_in_worktree(path: Path, command: List[str], verbose: bool = False) -> int:
    """Run command inside path and return its exit status."""
    if verbose:
        print(f"Running in {path}: {' '.join(command)}", file=sys.stderr)

    try:
        result = subprocess.run(command, cwd=path)
    except FileNotFoundError:
        print(f"{command[0]}: command not found", file=sys.stderr)
        return 127
    except PermissionError:
        print(f"{command[0]}: permission denied", file=sys.stderr)
        return 126
    return result.returncode


def open_worktree(
    project: WorktreeProject,
    worktree: str,
    command: Optional[List[str]] = None,
    project_name: Optional[str] = None
) -> int:
    """Create or reuse a worktree, then cd into it or run command there."""
    if project_name:
        project = WorktreeProject.sibling(project, project_name)

    try:
        path, _ = project.ensure_worktree(worktree, announce_project=bool(project_name))
    except WorktreeManagerError as e:
        print(e, file=sys.stderr)
        return 1

    if not command:
        request_cd(path)
        return 0

    return run_in_worktree(path, command, project.verbose)
