"""Shared path constants and defaults for the AgAIle OS project layout."""

from __future__ import annotations

AGAILE_DIR = ".agaile-os"
CONFIG_FILENAME = "config.yml"

DEFAULT_INSTRUCTIONS_DIR = f"{AGAILE_DIR}/instructions"
CORE_INSTRUCTIONS_SUBDIR = "core"
DEFAULT_MASTER_TRACKING = f"{AGAILE_DIR}/MASTER_TRACKING.md"
GENERATED_COMMANDS_DIR = f"{AGAILE_DIR}/generated"
TEMPLATES_SUBDIR = ("commands", "templates")

# Files whose presence marks a project root.
PROJECT_MARKERS = ("package.json", ".git")

DEFAULT_PROJECT_TYPE = "default"
DEFAULT_PHASE = "development"
DEFAULT_ENVIRONMENT = "development"

ENV_VAR_ENVIRONMENT = "AGAILE_ENV"
ENV_VAR_CONFIG = "AGAILE_CONFIG"

__all__ = [
    "AGAILE_DIR",
    "CONFIG_FILENAME",
    "CORE_INSTRUCTIONS_SUBDIR",
    "DEFAULT_ENVIRONMENT",
    "DEFAULT_INSTRUCTIONS_DIR",
    "DEFAULT_MASTER_TRACKING",
    "DEFAULT_PHASE",
    "DEFAULT_PROJECT_TYPE",
    "ENV_VAR_CONFIG",
    "ENV_VAR_ENVIRONMENT",
    "GENERATED_COMMANDS_DIR",
    "PROJECT_MARKERS",
    "TEMPLATES_SUBDIR",
]
