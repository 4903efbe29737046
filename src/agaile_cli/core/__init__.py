"""Core configuration and context exports."""

from .config import AgaileConfig, ConfigError, IntegrationConfig, find_project_root, load_config
from .context import ProjectContext, build_context, default_config_path

__all__ = [
    "AgaileConfig",
    "ConfigError",
    "IntegrationConfig",
    "ProjectContext",
    "build_context",
    "default_config_path",
    "find_project_root",
    "load_config",
]
