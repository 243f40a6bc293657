"""
CLI interface for wt-manager.
"""

import sys
import argparse
from typing import Optional, List

from . import __version__
from .config import Settings, describe_settings, load_settings
from .core import NotFoundError, WorktreeProject, WorktreeManagerError
from .commands.complete import complete
from .commands.listing import list_all, list_worktrees
from .commands.open import open_worktree
from .commands.remove import remove_worktree
from .commands.shell import INSTALL_HELP, print_integration


USAGE = """Usage:
  wt <worktree> [command...]           # Work with worktree in current repo
  wt --list                             # List worktrees for current repo
  wt --list-all                         # List all worktrees for sibling repos
  wt --rm <worktree>                    # Remove worktree
  wt --project <project> <worktree>     # Work with specific project's worktree"""


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='wt',
        description='Create, switch to and remove sibling Git worktrees',
        usage='%(prog)s [options] <worktree> [command...]',
        allow_abbrev=False
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    # Actions other than the default worktree switch
    actions = parser.add_mutually_exclusive_group()
    actions.add_argument('--list', action='store_true', help='List worktrees for current repo')
    actions.add_argument('--list-all', action='store_true', help='List worktrees for all sibling repos')
    actions.add_argument('--rm', nargs='?', const='', metavar='WORKTREE', help='Remove worktree')
    actions.add_argument('--project', nargs='?', const='', metavar='PROJECT', help="Work with a sibling project's worktree")
    actions.add_argument('--init', nargs='?', const='', metavar='SHELL', help='Print shell integration (bash)')
    actions.add_argument('--config', action='store_true', help='Show effective configuration')
    actions.add_argument('--complete', type=int, metavar='CWORD', help=argparse.SUPPRESS)

    parser.add_argument('--force', action='store_true', help='Force removal with --rm')

    parser.add_argument('worktree', nargs='?', help='Worktree name')
    parser.add_argument('command', nargs=argparse.REMAINDER, help='Command to run in the worktree')

    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    if args is None:
        args = sys.argv[1:]

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        return dispatch(parsed_args)
    except NotFoundError as e:
        print(e, file=sys.stderr)
        return 1
    except WorktreeManagerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


def dispatch(args) -> int:
    """Route parsed arguments to a command handler."""
    if args.init is not None:
        if not args.init:
            print(INSTALL_HELP, end='')
            return 0
        return print_integration(args.init)

    if args.complete is not None:
        try:
            settings = load_settings()
        except WorktreeManagerError:
            settings = Settings()
        words = ([args.worktree] if args.worktree is not None else []) + list(args.command)
        return complete(words, args.complete, settings)

    if args.force and args.rm is None:
        print("Usage: wt --rm <worktree> [--force]")
        return 1

    settings = load_settings()

    if args.config:
        for key, value in describe_settings(settings).items():
            print(f"{key} = {value}")
        return 0

    if args.rm is not None:
        if not args.rm:
            print("Usage: wt --rm <worktree>")
            return 1
        project = WorktreeProject.discover(settings=settings, verbose=args.verbose)
        return remove_worktree(project, args.rm, force=args.force)

    if args.project is not None:
        if not args.project or not args.worktree:
            print("Usage: wt --project <project> <worktree> [command...]")
            return 1
        project = WorktreeProject.discover(settings=settings, verbose=args.verbose)
        return open_worktree(project, args.worktree, args.command, project_name=args.project)

    if args.list:
        project = WorktreeProject.discover(settings=settings, verbose=args.verbose)
        return list_worktrees(project)

    if args.list_all:
        project = WorktreeProject.discover(settings=settings, verbose=args.verbose)
        return list_all(project)

    if not args.worktree:
        print(USAGE)
        return 1

    project = WorktreeProject.discover(settings=settings, verbose=args.verbose)
    return open_worktree(project, args.worktree, args.command)


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == '__main__':
    run()
