"""Settings for the unused CSS pruner, read from the environment (and .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Tuple

from dotenv import load_dotenv


DEFAULT_IGNORE_PREFIXES = 'ant-,ng-,mat-,cdk-'
DEFAULT_MARKUP_EXTENSIONS = '.html,.htm'
DEFAULT_STYLESHEET_EXTENSIONS = '.css,.scss,.less'
DEFAULT_SKIP_DIRS = 'node_modules,.git,dist,build,.angular,.cache'


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name: str, default: str) -> List[str]:
    """Comma-separated env value -> list, blanks dropped, whitespace trimmed."""
    raw = os.getenv(name, default)
    return [s.strip() for s in raw.split(',') if s.strip()]


def _env_extensions(name: str, default: str) -> Tuple[str, ...]:
    exts = []
    for ext in _env_list(name, default):
        ext = ext.lower()
        if not ext.startswith('.'):
            ext = '.' + ext
        exts.append(ext)
    return tuple(exts)


@dataclass
class PruneSettings:
    """Configuration for a pruning run. CLI flags override these after construction."""

    ignore_prefixes: List[str] = field(default_factory=lambda: _env_list("PRUNE_IGNORE_PREFIXES", DEFAULT_IGNORE_PREFIXES))
    markup_extensions: Tuple[str, ...] = field(
        default_factory=lambda: _env_extensions("PRUNE_MARKUP_EXTENSIONS", DEFAULT_MARKUP_EXTENSIONS)
    )
    stylesheet_extensions: Tuple[str, ...] = field(
        default_factory=lambda: _env_extensions("PRUNE_STYLESHEET_EXTENSIONS", DEFAULT_STYLESHEET_EXTENSIONS)
    )
    skip_dirs: List[str] = field(default_factory=lambda: _env_list("PRUNE_SKIP_DIRS", DEFAULT_SKIP_DIRS))

    backup: bool = field(default_factory=lambda: _env_flag("PRUNE_BACKUP", "true"))
    backup_suffix: str = field(default_factory=lambda: os.getenv("PRUNE_BACKUP_SUFFIX", ".prune.bak"))
    dry_run: bool = field(default_factory=lambda: _env_flag("PRUNE_DRY_RUN", "false"))
    verbose: bool = field(default_factory=lambda: _env_flag("PRUNE_VERBOSE", "false"))


def load_settings(env_file=None) -> PruneSettings:
    load_dotenv(env_file)
    return PruneSettings()
