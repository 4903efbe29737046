"""``agaile-commands generate`` and ``agaile-commands watch``."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from typing_extensions import Annotated

from agaile_cli.cli.context import load_context_or_exit
from agaile_cli.cli.ui import print_json, render_generation
from agaile_cli.core.context import ProjectContext
from agaile_cli.template.asset_generator import GenerationReport, generate_all_commands
from agaile_cli.template.watcher import InstructionWatcher

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to .agaile-os/config.yml (default: ./.agaile-os/config.yml)"),
]


def _report(report: GenerationReport, json_output: bool) -> None:
    if json_output:
        print_json(report.to_dict())
        return
    if report.error:
        console.print(f"[red]Error:[/red] {report.error}")
        return
    console.print(f"Found {len(report.instruction_files)} instruction files")
    console.print(render_generation(report))
    for ide_report in report.integrations:
        if ide_report.error:
            console.print(f"[red]✗[/red] {ide_report.ide}: {ide_report.error}")
        for name, reason in ide_report.failures.items():
            console.print(f"[red]✗[/red] {ide_report.ide}/{name}: {reason}")


def _regenerate(ctx: ProjectContext, json_output: bool = False) -> GenerationReport:
    report = generate_all_commands(ctx)
    _report(report, json_output)
    return report


def generate(
    config: ConfigOption = None,
    json_output: Annotated[bool, typer.Option("--json", help="Machine-readable JSON output")] = False,
) -> None:
    """Generate IDE command files from every instruction document."""
    ctx = load_context_or_exit(config)
    report = _regenerate(ctx, json_output)
    if report.error or report.has_failures:
        raise typer.Exit(1)


def watch(
    config: ConfigOption = None,
    interval: Annotated[float, typer.Option("--interval", help="Polling interval in seconds")] = 0.5,
    debounce: Annotated[float, typer.Option("--debounce", help="Delay before regenerating after a change")] = 0.1,
) -> None:
    """Generate once, then regenerate whenever an instruction changes."""
    ctx = load_context_or_exit(config)
    _regenerate(ctx)

    watcher = InstructionWatcher(
        ctx.instructions_dir,
        on_change=lambda changed: _regenerate(ctx),
        interval=interval,
        debounce=debounce,
    )
    console.print(f"[cyan]Watching for changes in:[/cyan] {ctx.instructions_dir}")
    watcher.run()
    console.print("\n[yellow]Watch stopped[/yellow]")


__all__ = ["generate", "watch"]
