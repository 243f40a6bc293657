"""
wt-manager - A Python CLI tool for managing sibling Git worktrees.

Worktrees for every project in a directory live side by side under
<parent>/.worktrees/<project>/<worktree>, one branch per worktree.
"""

__version__ = "0.1.0"
__author__ = "wt-manager"
