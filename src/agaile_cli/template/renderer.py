"""Template variables and ``${name}`` substitution."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Iterable, Mapping

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_MODEL = "opus"
DEFAULT_COLOR = "blue"
DEFAULT_AGENT = "general-purpose"

DEFAULT_INTEGRATION_POINTS = ("AgAIle OS HIL Workflow", "MASTER_TRACKING.md updates")
DEFAULT_CONTEXT_REQUIREMENTS = ("Project context from .agaile-os/", "Current HIL phase status")
DEFAULT_EXPECTED_OUTCOMES = (
    "Successful workflow execution",
    "Updated project tracking",
    "HIL phase progression",
)


@dataclass(frozen=True)
class CommandVariables:
    """Every variable a command template may reference."""

    command_name: str
    command_description: str
    instruction_path: str
    source_instruction: str
    model: str
    color: str
    agent_integration: str
    integration_points: str
    context_requirements: str
    expected_outcomes: str
    trigger: str
    project_type: str
    dependencies: str

    def as_mapping(self) -> dict[str, str]:
        return asdict(self)


TEMPLATE_VARIABLES = frozenset(f.name for f in fields(CommandVariables))


def command_name_for(path: Path) -> str:
    """Command name is the file name without its extension."""
    return path.stem


def format_bullets(values: Any, defaults: Iterable[str]) -> str:
    if not isinstance(values, list) or not values:
        values = list(defaults)
    return "\n".join(f"- {value}" for value in values)


def format_dependencies(values: Any) -> str:
    if not isinstance(values, list) or not values:
        return "None"
    return ", ".join(str(value) for value in values)


def _text(metadata: Mapping[str, Any], key: str, default: str) -> str:
    # Falsy values (empty, false, 0) count as absent.
    value = metadata.get(key)
    if not value:
        return default
    return str(value)


def build_variables(
    instruction_path: Path,
    metadata: Mapping[str, Any],
    project_root: Path,
    project_type: str,
) -> CommandVariables:
    """Merge instruction metadata with path- and config-derived defaults."""
    basename = command_name_for(instruction_path)
    try:
        relative = instruction_path.resolve().relative_to(project_root.resolve()).as_posix()
    except ValueError:
        relative = instruction_path.as_posix()

    return CommandVariables(
        command_name=_text(metadata, "name", basename),
        command_description=_text(metadata, "description", f"Execute {basename} workflow"),
        instruction_path=relative,
        source_instruction=relative,
        model=_text(metadata, "model", DEFAULT_MODEL),
        color=_text(metadata, "color", DEFAULT_COLOR),
        agent_integration=_text(metadata, "agent", DEFAULT_AGENT),
        integration_points=format_bullets(metadata.get("integrations"), DEFAULT_INTEGRATION_POINTS),
        context_requirements=format_bullets(metadata.get("context"), DEFAULT_CONTEXT_REQUIREMENTS),
        expected_outcomes=format_bullets(metadata.get("outcomes"), DEFAULT_EXPECTED_OUTCOMES),
        trigger=_text(metadata, "trigger", f"@{basename}"),
        project_type=project_type,
        dependencies=format_dependencies(metadata.get("dependencies")),
    )


def apply_template(template_text: str, variables: CommandVariables | Mapping[str, Any]) -> str:
    """Substitute ``${name}`` placeholders; unknown names are left verbatim."""
    mapping = variables.as_mapping() if isinstance(variables, CommandVariables) else variables

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in mapping:
            return str(mapping[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, template_text)


def unresolved_placeholders(template_text: str) -> list[str]:
    """Placeholder names in ``template_text`` that no variable will fill."""
    seen: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(template_text):
        name = match.group(1)
        if name not in TEMPLATE_VARIABLES and name not in seen:
            seen.append(name)
    return seen


__all__ = [
    "CommandVariables",
    "PLACEHOLDER_PATTERN",
    "TEMPLATE_VARIABLES",
    "apply_template",
    "build_variables",
    "command_name_for",
    "format_bullets",
    "format_dependencies",
    "unresolved_placeholders",
]
