"""Rendering helpers shared by the CLI commands."""

from __future__ import annotations

import json
import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.tree import Tree

from agaile_cli.template.asset_generator import GenerationReport
from agaile_cli.workflow.models import WorkflowResult

_STEP_SYMBOLS = {
    "done": "[green]●[/green]",
    "pending": "[green dim]○[/green dim]",
    "error": "[red]●[/red]",
    "skipped": "[yellow]○[/yellow]",
}


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route library logging through Rich on stderr."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=verbose,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def print_json(data: Any) -> None:
    # Plain print keeps the payload machine-readable (no Rich markup/wrapping).
    print(json.dumps(data, indent=2, default=str))


def render_workflow(result: WorkflowResult) -> Tree:
    """Tree of steps: completed, failed, and never attempted."""
    tree = Tree(f"[cyan]Workflow: {result.command}[/cyan] [bright_black]({result.state})[/bright_black]", guide_style="grey50")
    by_step = {r.step: r for r in result.results}
    for step in result.steps:
        outcome = by_step.get(step)
        if outcome is None:
            status, detail = "pending", "not attempted"
        elif outcome.success:
            status, detail = "done", ""
        elif step.critical:
            status, detail = "error", outcome.error or ""
        else:
            status, detail = "skipped", f"non-critical: {outcome.error}"

        label = f"Step {step.number}: {step.name}"
        symbol = _STEP_SYMBOLS[status]
        if status == "pending":
            line = f"{symbol} [bright_black]{label} ({detail})[/bright_black]"
        elif detail:
            line = f"{symbol} [white]{label}[/white] [bright_black]({detail})[/bright_black]"
        else:
            line = f"{symbol} [white]{label}[/white]"
        tree.add(line)
    return tree


def render_generation(report: GenerationReport) -> Table:
    table = Table(title="Generated Commands", show_lines=False)
    table.add_column("IDE", style="cyan")
    table.add_column("Output Directory")
    table.add_column("Generated", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    for ide_report in report.integrations:
        table.add_row(
            ide_report.ide,
            str(ide_report.output_dir),
            str(len(ide_report.generated)),
            str(len(ide_report.failures)),
        )
    for ide in report.skipped:
        table.add_row(f"[dim]{ide}[/dim]", "[dim]not enabled[/dim]", "-", "-")
    return table


__all__ = ["configure_logging", "print_json", "render_generation", "render_workflow"]
