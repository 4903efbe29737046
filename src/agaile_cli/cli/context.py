"""Context loading for CLI commands; fatal load errors become exit code 1."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from agaile_cli.core.config import ConfigError
from agaile_cli.core.context import ProjectContext, build_context, default_config_path
from agaile_cli.tracking.ledger import LedgerLoadError

console = Console(stderr=True)


def load_context_or_exit(config_path: Path | None) -> ProjectContext:
    path = config_path or default_config_path()
    try:
        return build_context(path)
    except (ConfigError, LedgerLoadError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


__all__ = ["load_context_or_exit"]
