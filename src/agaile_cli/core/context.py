"""Immutable per-invocation context shared by every operation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from agaile_cli.core.config import AgaileConfig, find_project_root, load_config
from agaile_cli.core.constants import (
    AGAILE_DIR,
    CONFIG_FILENAME,
    CORE_INSTRUCTIONS_SUBDIR,
    DEFAULT_ENVIRONMENT,
    ENV_VAR_CONFIG,
    ENV_VAR_ENVIRONMENT,
    TEMPLATES_SUBDIR,
)
from agaile_cli.tracking.ledger import TrackingLedger, load_ledger


@dataclass(frozen=True)
class ProjectContext:
    """Configuration, project root and ledger snapshot for one invocation."""

    config_path: Path
    config: AgaileConfig
    project_root: Path
    environment: str
    ledger: TrackingLedger

    @property
    def config_dir(self) -> Path:
        return self.config_path.parent

    @property
    def instructions_dir(self) -> Path:
        return (self.project_root / self.config.instructions_dir).resolve()

    @property
    def core_instructions_dir(self) -> Path:
        return self.instructions_dir / CORE_INSTRUCTIONS_SUBDIR

    @property
    def templates_dir(self) -> Path:
        return self.config_dir.joinpath(*TEMPLATES_SUBDIR)

    @property
    def ledger_path(self) -> Path:
        return (self.project_root / self.config.master_tracking).resolve()


def default_config_path(cwd: Path | None = None) -> Path:
    """Return the config path from ``AGAILE_CONFIG`` or ``./.agaile-os/config.yml``."""
    override = os.environ.get(ENV_VAR_CONFIG)
    if override:
        return Path(override).expanduser().resolve()
    return ((cwd or Path.cwd()) / AGAILE_DIR / CONFIG_FILENAME).resolve()


def build_context(config_path: Path, environment: str | None = None) -> ProjectContext:
    """Load config and ledger into a :class:`ProjectContext`.

    Raises:
        ConfigError: If the config cannot be loaded.
        LedgerLoadError: If the tracking ledger exists but cannot be read.
    """
    config_path = config_path.resolve()
    config = load_config(config_path)
    project_root = find_project_root(config_path)
    env = environment or os.environ.get(ENV_VAR_ENVIRONMENT) or DEFAULT_ENVIRONMENT
    ledger = load_ledger((project_root / config.master_tracking).resolve())
    return ProjectContext(
        config_path=config_path,
        config=config,
        project_root=project_root,
        environment=env,
        ledger=ledger,
    )


__all__ = ["ProjectContext", "build_context", "default_config_path"]
