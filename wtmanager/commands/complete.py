"""
Tab-completion candidates for the wt shell function.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional

from wtmanager.core import (
    WorktreeManagerError,
    find_git_root,
    list_subdirectories,
    sibling_projects,
)


FLAGS = ['--list', '--list-all', '--rm', '--project']


def path_commands(path: Optional[str] = None) -> List[str]:
    """Executable names found on PATH."""
    if path is None:
        path = os.environ.get('PATH', '')

    commands = set()
    for directory in path.split(os.pathsep):
        if not directory or not os.path.isdir(directory):
            continue
        try:
            entries = os.listdir(directory)
        except OSError:
            continue
        for entry in entries:
            full_path = os.path.join(directory, entry)
            if os.path.isfile(full_path) and os.access(full_path, os.X_OK):
                commands.add(entry)
    return sorted(commands)


def _filter(candidates: Iterable[str], current: str) -> List[str]:
    return [candidate for candidate in candidates if candidate.startswith(current)]


def completion_candidates(words: List[str], cword: int, settings, start: Optional[Path] = None) -> List[str]:
    """Compute candidates for words[cword], where words[0] is the command name."""
    current = words[cword] if cword < len(words) else ''

    try:
        git_root = find_git_root(start)
    except WorktreeManagerError:
        git_root = None

    def worktrees_of(project_name: str) -> List[str]:
        if git_root is None:
            return []
        return list_subdirectories(git_root.parent / settings.worktrees_dir / project_name)

    if cword == 1:
        candidates = list(FLAGS)
        if git_root is not None:
            candidates.extend(worktrees_of(git_root.name))
        return _filter(candidates, current)

    first = words[1] if len(words) > 1 else ''

    if first == '--rm':
        if cword == 2 and git_root is not None:
            return _filter(worktrees_of(git_root.name), current)
        return []

    if first == '--project':
        if git_root is None:
            return []
        if cword == 2:
            return _filter(sibling_projects(git_root.parent), current)
        if cword == 3:
            return _filter(worktrees_of(words[2]), current)
        return []

    if first in ('--list', '--list-all'):
        return []

    if cword == 2:
        return _filter(path_commands(), current)
    return []


def complete(words: List[str], cword: int, settings) -> int:
    """Print completion candidates, one per line."""
    for candidate in completion_candidates(words, cword, settings):
        print(candidate)
    return 0
