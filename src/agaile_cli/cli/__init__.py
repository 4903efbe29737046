"""CLI helpers exposed for other modules."""

from .ui import configure_logging, print_json, render_generation, render_workflow

__all__ = ["configure_logging", "print_json", "render_generation", "render_workflow"]
