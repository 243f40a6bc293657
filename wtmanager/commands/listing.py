"""
Commands for listing worktrees.
"""

from wtmanager.core import WorktreeProject, list_all_worktrees


def list_worktrees(project: WorktreeProject) -> int:
    """List worktrees of the current project."""
    print(f"=== Worktrees for {project.name} ===")

    if not project.worktrees_dir.is_dir():
        print("  No worktrees found")
        return 0

    for name in project.list_worktrees():
        print(f"  • {name}")
    return 0


def list_all(project: WorktreeProject) -> int:
    """List worktrees of every project sharing the parent directory."""
    worktrees_base = project.worktrees_base
    if not worktrees_base.is_dir():
        print("No worktrees directory found")
        return 0

    print("=== All Worktrees ===")
    for project_name, worktrees in list_all_worktrees(worktrees_base).items():
        print("")
        print(f"[{project_name}]")
        for name in worktrees:
            print(f"  • {name}")
    return 0
