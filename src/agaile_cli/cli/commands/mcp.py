"""``agaile mcp install``: register MCP servers from a JSON file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from typing_extensions import Annotated

from agaile_cli.mcp.installer import (
    DEFAULT_SERVERS_FILE,
    McpConfigError,
    McpInstaller,
    load_server_definitions,
)

app = typer.Typer(
    name="mcp",
    help="Manage MCP server registrations",
    no_args_is_help=True,
)

console = Console()


@app.command()
def install(
    source: Annotated[Optional[Path], typer.Option("--from", help="Server definition file (default: .claude/mcp.json)")] = None,
    scope: Annotated[str, typer.Option("--scope", help="Registration scope: project, user or local")] = "project",
    replace: Annotated[bool, typer.Option("--replace", help="Remove and re-add servers that already exist")] = False,
    executable: Annotated[str, typer.Option("--executable", help="CLI used to register servers")] = "claude",
) -> None:
    """Add every server from the ``mcpServers`` map."""
    path = source or (Path.cwd() / DEFAULT_SERVERS_FILE)
    try:
        servers = load_server_definitions(path)
    except McpConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not servers:
        console.print("No servers found in mcpServers. Nothing to install.")
        return

    installer = McpInstaller(executable=executable)
    try:
        report = installer.install(servers, scope=scope, replace=replace)
    except McpConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    for name in report.added:
        console.print(f"[green]✔[/green] Added {name}")
    for name in report.skipped:
        console.print(f"[yellow]Skipping {name}[/yellow] (already exists). Use --replace to overwrite.")

    if report.failures:
        console.print("\n[red]Some servers failed to add:[/red]")
        for name, error in report.failures.items():
            console.print(f"- {name}: {error}")
        raise typer.Exit(1)

    console.print("\n[bold green]All servers added successfully.[/bold green]")


__all__ = ["app", "install"]
