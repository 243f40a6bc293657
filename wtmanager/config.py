"""
Configuration loading for wt-manager.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .core import WorktreeManagerError


DEFAULT_WORKTREES_DIR = '.worktrees'

ENV_OVERRIDES = {
    'branch_prefix': 'WT_BRANCH_PREFIX',
    'worktrees_dir': 'WT_WORKTREES_DIR',
}


@dataclass
class Settings:
    """Effective wt-manager settings."""

    branch_prefix: Optional[str] = None
    worktrees_dir: str = DEFAULT_WORKTREES_DIR
    sources: Dict[str, str] = field(default_factory=dict)

    def resolve_branch_prefix(self) -> str:
        """Prefix for new branches, falling back to $USER."""
        if self.branch_prefix is not None:
            return self.branch_prefix
        return os.environ.get('USER', '')


def config_path() -> Path:
    """Path to the configuration file."""
    explicit = os.environ.get('WT_CONFIG')
    if explicit:
        return Path(explicit).expanduser()

    config_home = os.environ.get('XDG_CONFIG_HOME')
    base = Path(config_home) if config_home else Path.home() / '.config'
    return base / 'wt-manager' / 'config.toml'


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the TOML configuration file."""
    path = path or config_path()
    if not path.exists():
        return {'options': {}}

    try:
        with open(path, 'rb') as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise WorktreeManagerError(f"Invalid configuration file {path}: {e}")
    except OSError as e:
        raise WorktreeManagerError(f"Cannot read configuration file {path}: {e}")

    options = config.get('options', {})
    if not isinstance(options, dict):
        raise WorktreeManagerError(f"Invalid configuration file {path}: [options] must be a table")
    config['options'] = options
    return config


def load_settings(path: Optional[Path] = None) -> Settings:
    """Build settings from the config file and environment overrides."""
    path = path or config_path()
    options = load_config(path)['options']
    settings = Settings()

    for key in ENV_OVERRIDES:
        if key in options:
            value = options[key]
            if not isinstance(value, str):
                raise WorktreeManagerError(f"Option '{key}' in {path} must be a string")
            setattr(settings, key, value)
            settings.sources[key] = str(path)

    for key, env_name in ENV_OVERRIDES.items():
        if env_name in os.environ:
            setattr(settings, key, os.environ[env_name])
            settings.sources[key] = f"${env_name}"

    if not settings.worktrees_dir:
        raise WorktreeManagerError("worktrees_dir must not be empty")

    return settings


def describe_settings(settings: Settings) -> Dict[str, str]:
    """Human readable view of the effective settings."""
    prefix = settings.resolve_branch_prefix()
    if settings.branch_prefix is None:
        prefix_source = '$USER'
    else:
        prefix_source = settings.sources.get('branch_prefix', 'default')

    return {
        'config_file': str(config_path()),
        'branch_prefix': f"{prefix!r} ({prefix_source})",
        'worktrees_dir': f"{settings.worktrees_dir!r} ({settings.sources.get('worktrees_dir', 'default')})",
    }
