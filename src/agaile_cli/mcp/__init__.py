"""MCP server installation helpers."""

from .installer import (
    InstallReport,
    McpCommandError,
    McpConfigError,
    McpInstaller,
    ProcessResult,
    load_server_definitions,
    run_process,
)

__all__ = [
    "InstallReport",
    "McpCommandError",
    "McpConfigError",
    "McpInstaller",
    "ProcessResult",
    "load_server_definitions",
    "run_process",
]
