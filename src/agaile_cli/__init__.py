"""
AgAIle OS CLI - IDE command generation and HIL-gated workflow execution.

Usage:
    agaile execute <command> [ide] [json-parameters]
    agaile status
    agaile commands
    agaile mcp install [--replace] [--scope project|user|local] [--from PATH]

    agaile-commands generate
    agaile-commands watch
"""

import typer
from typing_extensions import Annotated

from agaile_cli.cli.commands import bridge as bridge_commands
from agaile_cli.cli.commands import generate as generate_commands
from agaile_cli.cli.commands import mcp as mcp_commands
from agaile_cli.cli.ui import configure_logging

__version__ = "0.1.0"

VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Show debug logging on stderr")
]

app = typer.Typer(
    name="agaile",
    help="AgAIle OS Command Bridge - execute workflow commands from any IDE",
    add_completion=False,
    no_args_is_help=True,
)

commands_app = typer.Typer(
    name="agaile-commands",
    help="AgAIle OS Command Processor - generate IDE commands from instructions",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def callback(verbose: VerboseOption = False):
    """Execute workflow commands through the HIL approval gate."""
    configure_logging(verbose)


@commands_app.callback()
def commands_callback(verbose: VerboseOption = False):
    """Generate IDE-specific command files from unified instructions."""
    configure_logging(verbose)


app.command(name="execute")(bridge_commands.execute)
app.command(name="status")(bridge_commands.status)
app.command(name="commands")(bridge_commands.commands)
app.add_typer(mcp_commands.app, name="mcp")

commands_app.command(name="generate")(generate_commands.generate)
commands_app.command(name="watch")(generate_commands.watch)


def main():
    app()


def commands_main():
    commands_app()


if __name__ == "__main__":
    main()
