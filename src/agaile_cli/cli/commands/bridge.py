"""``agaile execute``, ``agaile status`` and ``agaile commands``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from typing_extensions import Annotated

from agaile_cli.bridge.service import CommandBridge, OutcomeStatus
from agaile_cli.cli.context import load_context_or_exit
from agaile_cli.cli.ui import print_json, render_workflow
from agaile_cli.hil.gate import ApprovalMode

console = Console(stderr=True)

EXIT_FAILED = 1
EXIT_BLOCKED = 3

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to .agaile-os/config.yml (default: ./.agaile-os/config.yml)"),
]


def execute(
    command: Annotated[str, typer.Argument(help="Command name (instruction file under instructions/core)")],
    ide: Annotated[str, typer.Argument(help="Source IDE issuing the command")] = "cli",
    parameters: Annotated[str, typer.Argument(help="JSON object of workflow parameters")] = "{}",
    feature: Annotated[Optional[str], typer.Option("--feature", "-f", help="Feature name used to look up the HIL phase")] = None,
    approval: Annotated[ApprovalMode, typer.Option("--approval", help="Approval mode (auto refuses gated commands)")] = ApprovalMode.AUTO,
    config: ConfigOption = None,
) -> None:
    """Execute a workflow command through the HIL approval gate.

    Examples:
        agaile execute create-spec claude_code '{"feature": "login"}'
        agaile execute deploy --feature checkout --approval manual
    """
    try:
        params = json.loads(parameters)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON parameters: {e}")
        raise typer.Exit(2)
    if not isinstance(params, dict):
        console.print("[red]Error:[/red] Parameters must be a JSON object")
        raise typer.Exit(2)

    ctx = load_context_or_exit(config)
    bridge = CommandBridge(ctx)

    console.print(f"[bold]AgAIle OS Command Bridge[/bold] [dim]{command} via {ide}[/dim]")
    outcome = bridge.execute_command(
        command,
        source_ide=ide,
        feature_name=feature,
        parameters=params,
        approval=approval,
    )

    if outcome.result is not None:
        console.print(render_workflow(outcome.result))
    print_json(outcome.to_dict())

    if outcome.status == OutcomeStatus.BLOCKED:
        console.print(f"[yellow]{outcome.message}[/yellow]")
        raise typer.Exit(EXIT_BLOCKED)
    if outcome.status == OutcomeStatus.FAILED:
        console.print(f"[red]Command execution failed:[/red] {outcome.error}")
        raise typer.Exit(EXIT_FAILED)


def status(config: ConfigOption = None) -> None:
    """Show project root, HIL settings and available commands as JSON."""
    ctx = load_context_or_exit(config)
    print_json(CommandBridge(ctx).status())


def commands(config: ConfigOption = None) -> None:
    """List available commands."""
    ctx = load_context_or_exit(config)
    names = CommandBridge(ctx).available_commands()
    if not names:
        console.print("[yellow]No commands found.[/yellow]")
        return
    typer.echo("Available Commands:")
    for name in names:
        typer.echo(f"  - {name}")


__all__ = ["commands", "execute", "status"]
