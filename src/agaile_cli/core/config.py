"""Project configuration loading.

Reads ``.agaile-os/config.yml`` once per invocation and exposes the
recognized sections as an immutable :class:`AgaileConfig`. Nested mappings
are wrapped in read-only proxies so nothing downstream can mutate them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from ruamel.yaml import YAML

from agaile_cli.core.constants import (
    DEFAULT_INSTRUCTIONS_DIR,
    DEFAULT_MASTER_TRACKING,
    DEFAULT_PHASE,
    DEFAULT_PROJECT_TYPE,
    PROJECT_MARKERS,
)

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class ConfigError(RuntimeError):
    """Raised when config.yml cannot be read or parsed."""


@dataclass(frozen=True)
class IntegrationConfig:
    """Per-IDE generation settings from the ``integrations`` section."""

    key: str
    enabled: bool = False
    commands_directory: str | None = None
    template: str | None = None


@dataclass(frozen=True)
class AgaileConfig:
    """Recognized configuration sections, immutable after load."""

    instructions_dir: str = DEFAULT_INSTRUCTIONS_DIR
    project_type: str = DEFAULT_PROJECT_TYPE
    integrations: tuple[IntegrationConfig, ...] = ()
    template_mappings: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    hil_enabled: bool = False
    hil_phases: tuple[str, ...] = ()
    hil_default_phase: str = DEFAULT_PHASE
    hil_command_phases: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    operation_overrides: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    environment_overrides: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    default_approval_level: str | None = None
    master_tracking: str = DEFAULT_MASTER_TRACKING
    framework_version: str = "unknown"

    def integration(self, key: str) -> IntegrationConfig | None:
        for integration in self.integrations:
            if integration.key == key:
                return integration
        return None

    @property
    def enabled_integrations(self) -> tuple[IntegrationConfig, ...]:
        return tuple(i for i in self.integrations if i.enabled)


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    return value if isinstance(value, Mapping) else _EMPTY


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _ordered_phases(raw: Any) -> tuple[str, ...]:
    # Phases may be given as a list or as a mapping whose values are ordered.
    if isinstance(raw, Mapping):
        raw = list(raw.values())
    if isinstance(raw, (list, tuple)):
        return tuple(str(phase) for phase in raw)
    return ()


def _nested_values(section: Mapping[str, Any], inner_key: str) -> Mapping[str, str]:
    values: dict[str, str] = {}
    for name, entry in section.items():
        if isinstance(entry, Mapping):
            value = _optional_str(entry.get(inner_key))
            if value is not None:
                values[str(name)] = value
    return MappingProxyType(values)


def parse_config(data: Mapping[str, Any]) -> AgaileConfig:
    """Build an :class:`AgaileConfig` from an already-parsed mapping."""
    default_type = _section(_section(data, "project_types"), "default")

    integrations = tuple(
        IntegrationConfig(
            key=str(key),
            enabled=bool(entry.get("enabled", False)),
            commands_directory=_optional_str(entry.get("commands_directory")),
            template=_optional_str(entry.get("template")),
        )
        for key, entry in _section(data, "integrations").items()
        if isinstance(entry, Mapping)
    )

    mappings = _section(_section(data, "command_generation"), "mappings")
    hil = _section(data, "hil_workflow")

    tracking_path = (
        _optional_str(_section(data, "feature_tracking").get("master_tracking"))
        or _optional_str(_section(data, "project").get("master_tracking"))
        or DEFAULT_MASTER_TRACKING
    )

    return AgaileConfig(
        instructions_dir=_optional_str(default_type.get("instructions")) or DEFAULT_INSTRUCTIONS_DIR,
        project_type=_optional_str(default_type.get("name")) or DEFAULT_PROJECT_TYPE,
        integrations=integrations,
        template_mappings=_nested_values(mappings, "template"),
        hil_enabled=bool(hil.get("enabled", False)),
        hil_phases=_ordered_phases(hil.get("phases")),
        hil_default_phase=_optional_str(hil.get("default_phase")) or DEFAULT_PHASE,
        hil_command_phases=_nested_values(_section(hil, "commands"), "phase"),
        operation_overrides=_nested_values(
            _section(data, "operation_overrides"), "minimum_approval_level"
        ),
        environment_overrides=_nested_values(
            _section(data, "environment_overrides"), "approval_level"
        ),
        default_approval_level=_optional_str(
            _section(data, "user_preferences").get("default_approval_level")
        ),
        master_tracking=tracking_path,
        framework_version=_optional_str(_section(data, "framework").get("version")) or "unknown",
    )


def load_config(config_path: Path) -> AgaileConfig:
    """Load and parse the YAML config file.

    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping.
    """
    yaml = YAML(typ="safe")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {config_path}") from exc
    except Exception as exc:
        logger.error("Failed to load config: %s", exc)
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config in {config_path} must be a mapping at the top level")

    return parse_config(data)


def find_project_root(config_path: Path, markers: tuple[str, ...] = PROJECT_MARKERS) -> Path:
    """Walk up from the config directory until a project marker is found.

    Falls back to the directory holding the config file.
    """
    start = config_path.resolve().parent
    current = start
    while current != current.parent:
        if any((current / marker).exists() for marker in markers):
            return current
        current = current.parent
    return start


__all__ = [
    "AgaileConfig",
    "ConfigError",
    "IntegrationConfig",
    "find_project_root",
    "load_config",
    "parse_config",
]
