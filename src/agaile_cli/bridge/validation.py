"""Pre-execution checks for bridge commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from agaile_cli.core.constants import PROJECT_MARKERS
from agaile_cli.core.context import ProjectContext

INSTRUCTION_NOT_FOUND = "INSTRUCTION_NOT_FOUND"
INSTRUCTION_LOAD_FAILED = "INSTRUCTION_LOAD_FAILED"
INVALID_PROJECT = "INVALID_PROJECT"
DEPENDENCIES_MISSING = "DEPENDENCIES_MISSING"
WORKFLOW_FAILED = "WORKFLOW_FAILED"
APPROVAL_REQUIRED = "APPROVAL_REQUIRED"

_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    INSTRUCTION_NOT_FOUND: (
        "Check if AgAIle OS is properly installed",
        "Run .agaile-os/setup/install.sh to reinstall",
    ),
    INSTRUCTION_LOAD_FAILED: (
        "Check the instruction file and its @includes for cycles or unreadable files",
    ),
    INVALID_PROJECT: (
        "Run the command from the project root",
        "Make sure the project has a package.json or a git repository",
    ),
    DEPENDENCIES_MISSING: (
        "Install project dependencies: pnpm install",
        "Check database configuration",
    ),
    APPROVAL_REQUIRED: (
        "Request required approval from team lead",
        "Check HIL workflow phase requirements",
    ),
}

# Paths, any one of which satisfies a command-specific requirement.
COMMAND_REQUIREMENTS: dict[str, tuple[str, tuple[str, ...]]] = {
    "db-migrate": ("Database connection", ("prisma/schema.prisma",)),
    "verify-deployment": ("Deployment configuration", ("vercel.json", ".vercel")),
}


def suggestions_for(code: str | None) -> list[str]:
    return list(_SUGGESTIONS.get(code or "", ()))


@dataclass
class ValidationResult:
    """Structured validation outcome with remediation hints."""

    valid: bool
    code: str | None = None
    reason: str | None = None
    missing: list[str] = field(default_factory=list)

    @property
    def suggestions(self) -> list[str]:
        return suggestions_for(self.code)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"valid": self.valid}
        if not self.valid:
            payload.update(
                {
                    "code": self.code,
                    "reason": self.reason,
                    "missing": list(self.missing),
                    "suggestions": self.suggestions,
                }
            )
        return payload


def instruction_path(ctx: ProjectContext, command: str) -> Path:
    return ctx.core_instructions_dir / f"{command}.md"


def missing_dependencies(project_root: Path, command: str) -> list[str]:
    missing: list[str] = []
    if (project_root / "package.json").exists() and not (project_root / "node_modules").exists():
        missing.append("node_modules (run package install)")
    requirement = COMMAND_REQUIREMENTS.get(command)
    if requirement is not None:
        label, candidates = requirement
        if not any((project_root / candidate).exists() for candidate in candidates):
            missing.append(label)
    return missing


def validate_command(ctx: ProjectContext, command: str) -> ValidationResult:
    path = instruction_path(ctx, command)
    if not path.is_file():
        return ValidationResult(
            valid=False,
            code=INSTRUCTION_NOT_FOUND,
            reason=f"Instruction file not found: {path}",
        )

    if not any((ctx.project_root / marker).exists() for marker in PROJECT_MARKERS):
        return ValidationResult(
            valid=False,
            code=INVALID_PROJECT,
            reason="Not a valid project directory",
        )

    missing = missing_dependencies(ctx.project_root, command)
    if missing:
        return ValidationResult(
            valid=False,
            code=DEPENDENCIES_MISSING,
            reason=f"Dependencies not satisfied: {', '.join(missing)}",
            missing=missing,
        )

    return ValidationResult(valid=True)


__all__ = [
    "APPROVAL_REQUIRED",
    "COMMAND_REQUIREMENTS",
    "DEPENDENCIES_MISSING",
    "INSTRUCTION_LOAD_FAILED",
    "INSTRUCTION_NOT_FOUND",
    "INVALID_PROJECT",
    "ValidationResult",
    "WORKFLOW_FAILED",
    "instruction_path",
    "missing_dependencies",
    "suggestions_for",
    "validate_command",
]
