"""
Command for removing a worktree.
"""

from wtmanager.core import WorktreeProject


def remove_worktree(project: WorktreeProject, worktree: str, force: bool = False) -> int:
    """Remove a worktree of the current project via git worktree remove."""
    path = project.remove_worktree(worktree, force=force)
    if project.verbose:
        print(f"Removed worktree: {path}")
    return 0
