"""CLI command modules for agaile.

Each module holds the implementation of one command group; registration
happens in :mod:`agaile_cli`.
"""

from . import bridge, generate, mcp

__all__ = ["bridge", "generate", "mcp"]
