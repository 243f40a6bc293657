"""
Core wt-manager functionality - project discovery and worktree management.
"""

import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import git
from git import Repo


class WorktreeManagerError(Exception):
    """Base exception for wt-manager operations."""
    pass


class NotFoundError(WorktreeManagerError):
    """A named project or worktree does not exist."""
    pass


def find_git_root(start: Optional[Path] = None) -> Path:
    """Find the nearest directory at or above start with a .git directory.

    Linked worktrees carry a .git file rather than a directory, so they
    resolve to whatever main repository encloses them, if any. The
    filesystem root is never considered.
    """
    directory = Path(start) if start else Path.cwd()
    directory = directory.absolute()

    while directory != directory.parent:
        if (directory / '.git').is_dir():
            return directory
        directory = directory.parent

    raise WorktreeManagerError("Not in a git repository")


def list_subdirectories(directory: Path) -> List[str]:
    """Names of visible subdirectories, in glob order."""
    if not directory.is_dir():
        return []
    return sorted(
        entry.name for entry in directory.iterdir()
        if entry.is_dir() and not entry.name.startswith('.')
    )


def sibling_projects(parent_dir: Path) -> List[str]:
    """Names of git repositories living directly in parent_dir."""
    return [
        name for name in list_subdirectories(parent_dir)
        if (parent_dir / name / '.git').is_dir()
    ]


def list_all_worktrees(worktrees_base: Path) -> Dict[str, List[str]]:
    """Map every project under worktrees_base to its worktree names."""
    return {
        project: list_subdirectories(worktrees_base / project)
        for project in list_subdirectories(worktrees_base)
    }


class WorktreeProject:
    """A main repository and the worktrees kept beside it."""

    def __init__(self, project_dir, settings=None, verbose: bool = False):
        """Open the repository at project_dir."""
        if settings is None:
            from .config import Settings
            settings = Settings()

        self.project_dir = Path(project_dir)
        self.settings = settings
        self.verbose = verbose
        try:
            self.repo = Repo(self.project_dir)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            raise WorktreeManagerError(f"Not a Git repository: {self.project_dir}")

    @classmethod
    def discover(cls, start: Optional[Path] = None, settings=None, verbose: bool = False) -> 'WorktreeProject':
        """Open the project enclosing start (defaults to the current directory)."""
        return cls(find_git_root(start), settings, verbose)

    @classmethod
    def sibling(cls, anchor: 'WorktreeProject', name: str) -> 'WorktreeProject':
        """Open the project called name next to anchor."""
        project_dir = anchor.parent_dir / name
        if not project_dir.is_dir() or not (project_dir / '.git').is_dir():
            raise NotFoundError(f"Project not found: {project_dir}")
        return cls(project_dir, anchor.settings, anchor.verbose)

    @property
    def name(self) -> str:
        return self.project_dir.name

    @property
    def parent_dir(self) -> Path:
        return self.project_dir.parent

    @property
    def worktrees_base(self) -> Path:
        """Directory holding the worktrees of every sibling project."""
        return self.parent_dir / self.settings.worktrees_dir

    @property
    def worktrees_dir(self) -> Path:
        """Directory holding this project's worktrees."""
        return self.worktrees_base / self.name

    def worktree_path(self, worktree: str) -> Path:
        return self.worktrees_dir / worktree

    def list_worktrees(self) -> List[str]:
        return list_subdirectories(self.worktrees_dir)

    def branch_name(self, worktree: str) -> str:
        """Branch checked out by a newly created worktree."""
        prefix = self.settings.resolve_branch_prefix()
        if prefix:
            return f"{prefix}/{worktree}"
        return worktree

    def branch_exists(self, branch: str) -> bool:
        """Check whether a local branch already exists."""
        return branch in [head.name for head in self.repo.heads]

    def ensure_worktree(self, worktree: str, announce_project: bool = False) -> Tuple[Path, bool]:
        """Return the worktree path, creating the worktree if it is missing."""
        path = self.worktree_path(worktree)
        if path.is_dir():
            if self.verbose:
                print(f"Using existing worktree: {path}", file=sys.stderr)
            return path, False

        if announce_project:
            print(f"Creating new worktree: {worktree} for project {self.name}", file=sys.stderr)
        else:
            print(f"Creating new worktree: {worktree}", file=sys.stderr)

        self.worktrees_dir.mkdir(parents=True, exist_ok=True)
        self.create_worktree(path, self.branch_name(worktree))
        return path, True

    def create_worktree(self, path: Path, branch: str) -> None:
        """Add a worktree at path on branch, creating the branch if needed."""
        args = ['git', 'worktree', 'add', str(path)]
        if self.branch_exists(branch):
            args.append(branch)
        else:
            args.extend(['-b', branch])

        if self.verbose:
            print(f"Running: {' '.join(args)}", file=sys.stderr)

        result = subprocess.run(args, cwd=self.project_dir, capture_output=True, text=True)
        if result.returncode != 0:
            raise WorktreeManagerError(f"Failed to create worktree: {result.stderr.strip()}")

        # git reports progress on both streams; stdout is reserved for the cd path
        for output in (result.stdout, result.stderr):
            if output:
                sys.stderr.write(output)

    def remove_worktree(self, worktree: str, force: bool = False) -> Path:
        """Remove a worktree by name."""
        path = self.worktree_path(worktree)
        if not path.is_dir():
            raise NotFoundError(f"Worktree not found: {path}")

        args = ['git', 'worktree', 'remove']
        if force:
            args.append('--force')
        args.append(str(path))

        if self.verbose:
            print(f"Running: {' '.join(args)}", file=sys.stderr)

        result = subprocess.run(args, cwd=self.project_dir, capture_output=True, text=True)
        if result.returncode != 0:
            raise WorktreeManagerError(f"Failed to remove worktree: {result.stderr.strip()}")
        return path
