"""IDE command file generation from instruction documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from agaile_cli.core.config import IntegrationConfig
from agaile_cli.core.constants import GENERATED_COMMANDS_DIR
from agaile_cli.core.context import ProjectContext
from agaile_cli.template.includes import IncludeError
from agaile_cli.template.instruction import load_instruction
from agaile_cli.template.renderer import (
    CommandVariables,
    apply_template,
    build_variables,
    command_name_for,
)

logger = logging.getLogger(__name__)

FALLBACK_TEMPLATE = "claude_command.md"

IDE_COMMAND_CONFIG: dict[str, dict[str, str]] = {
    "claude_code": {"dir": ".claude/commands", "template": "claude_command.md"},
    "cursor": {"dir": ".cursor/commands", "template": "cursor_command.md"},
}


class TemplateNotFoundError(FileNotFoundError):
    """Raised when the template configured for an IDE does not exist."""


@dataclass(frozen=True)
class GeneratedCommand:
    content: str
    metadata: dict[str, Any]
    variables: CommandVariables


@dataclass
class IntegrationReport:
    """Outcome of generating commands for one IDE."""

    ide: str
    output_dir: Path
    generated: list[Path] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None or bool(self.failures)

    def to_dict(self) -> dict[str, object]:
        return {
            "ide": self.ide,
            "output_dir": str(self.output_dir),
            "generated": [str(p) for p in self.generated],
            "failures": dict(self.failures),
            "error": self.error,
        }


@dataclass
class GenerationReport:
    instruction_files: list[Path] = field(default_factory=list)
    integrations: list[IntegrationReport] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def total_generated(self) -> int:
        return sum(len(r.generated) for r in self.integrations)

    @property
    def has_failures(self) -> bool:
        return self.error is not None or any(r.failed for r in self.integrations)

    def to_dict(self) -> dict[str, object]:
        return {
            "instruction_files": [str(p) for p in self.instruction_files],
            "integrations": [r.to_dict() for r in self.integrations],
            "skipped": list(self.skipped),
            "total_generated": self.total_generated,
            "error": self.error,
        }


def find_instruction_files(directory: Path) -> list[Path]:
    """All ``*.md`` files under ``directory``, recursively, in stable order."""
    return sorted(p for p in directory.rglob("*.md") if p.is_file())


def resolve_output_dir(ctx: ProjectContext, integration: IntegrationConfig) -> Path:
    if integration.commands_directory:
        configured = integration.commands_directory
    elif integration.key in IDE_COMMAND_CONFIG:
        configured = IDE_COMMAND_CONFIG[integration.key]["dir"]
    else:
        configured = f"{GENERATED_COMMANDS_DIR}/{integration.key}"
    return (ctx.project_root / configured).resolve()


def resolve_template_path(ctx: ProjectContext, ide: str) -> Path:
    integration = ctx.config.integration(ide)
    template_file = (
        (integration.template if integration else None)
        or ctx.config.template_mappings.get(ide)
        or IDE_COMMAND_CONFIG.get(ide, {}).get("template")
        or FALLBACK_TEMPLATE
    )
    return ctx.templates_dir / template_file


def generate_command(ctx: ProjectContext, instruction_path: Path, ide: str) -> GeneratedCommand | None:
    """Render one instruction for one IDE.

    Returns None when the IDE is not enabled.

    Raises:
        TemplateNotFoundError: If the IDE's template file is missing.
        IncludeError: On include cycles or excessive nesting.
        OSError: If the instruction or template cannot be read.
        UnicodeDecodeError: If the instruction or template is not valid UTF-8.
    """
    integration = ctx.config.integration(ide)
    if integration is None or not integration.enabled:
        logger.info("Skipping %s - not enabled in config", ide)
        return None

    instruction = load_instruction(instruction_path)

    template_path = resolve_template_path(ctx, ide)
    if not template_path.is_file():
        raise TemplateNotFoundError(f"Template not found: {template_path}")
    template_text = template_path.read_text(encoding="utf-8")

    variables = build_variables(
        instruction_path,
        instruction.metadata,
        ctx.project_root,
        ctx.config.project_type,
    )
    return GeneratedCommand(
        content=apply_template(template_text, variables),
        metadata=instruction.metadata,
        variables=variables,
    )


def generate_all_commands(ctx: ProjectContext) -> GenerationReport:
    """Regenerate every command file for every enabled IDE."""
    report = GenerationReport()
    instructions_dir = ctx.instructions_dir

    if not instructions_dir.is_dir():
        report.error = f"Instructions directory not found: {instructions_dir}"
        logger.error(report.error)
        return report

    report.instruction_files = find_instruction_files(instructions_dir)
    logger.info("Found %d instruction files", len(report.instruction_files))

    for integration in ctx.config.integrations:
        if not integration.enabled:
            report.skipped.append(integration.key)
            continue

        output_dir = resolve_output_dir(ctx, integration)
        ide_report = IntegrationReport(ide=integration.key, output_dir=output_dir)
        report.integrations.append(ide_report)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            ide_report.error = f"Cannot create output directory {output_dir}: {exc}"
            logger.error(ide_report.error)
            continue
        logger.info("Generating commands for %s", integration.key)

        for instruction_path in report.instruction_files:
            name = command_name_for(instruction_path)
            output_path = output_dir / f"{name}.md"
            try:
                command = generate_command(ctx, instruction_path, integration.key)
                if command is None:
                    continue
                output_path.write_text(command.content, encoding="utf-8")
            except (IncludeError, OSError, UnicodeDecodeError) as exc:
                logger.error("Failed to generate command for %s: %s", instruction_path, exc)
                ide_report.failures[name] = str(exc)
                continue
            ide_report.generated.append(output_path)
            logger.debug("Generated: %s", output_path)

        logger.info(
            "Total generated for %s: %d commands", integration.key, len(ide_report.generated)
        )

    return report


__all__ = [
    "FALLBACK_TEMPLATE",
    "GeneratedCommand",
    "GenerationReport",
    "IDE_COMMAND_CONFIG",
    "IntegrationReport",
    "TemplateNotFoundError",
    "find_instruction_files",
    "generate_all_commands",
    "generate_command",
    "resolve_output_dir",
    "resolve_template_path",
]
