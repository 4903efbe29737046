"""Human-in-the-loop approval gate.

Decides whether a command may run automatically, based on the feature's
current phase in MASTER_TRACKING.md and the configured approval levels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from agaile_cli.core.config import AgaileConfig
from agaile_cli.core.context import ProjectContext
from agaile_cli.core.constants import DEFAULT_PHASE

logger = logging.getLogger(__name__)

NO_APPROVAL = "NONE"
FALLBACK_APPROVAL_LEVEL = "CONFIRM"


class ApprovalMode(StrEnum):
    """How the caller intends to approve a command.

    - AUTO: no human is present; anything requiring approval is refused
    - MANUAL: a human has already approved the invocation
    """

    AUTO = "auto"
    MANUAL = "manual"


@dataclass(frozen=True)
class HILStatus:
    current_phase: str
    approval_level: str
    command_phase: str

    @property
    def requires_approval(self) -> bool:
        return self.approval_level != NO_APPROVAL

    def to_dict(self) -> dict[str, object]:
        return {
            "current_phase": self.current_phase,
            "approval_level": self.approval_level,
            "requires_approval": self.requires_approval,
            "command_phase": self.command_phase,
        }


@dataclass(frozen=True)
class GateDecision:
    status: HILStatus
    mode: ApprovalMode

    @property
    def blocked(self) -> bool:
        return self.status.requires_approval and self.mode == ApprovalMode.AUTO

    def message(self, command: str) -> str:
        if self.blocked:
            return (
                f"Command {command} requires {self.status.approval_level} approval "
                f"in {self.status.current_phase} phase"
            )
        return f"Command {command} cleared for execution in {self.status.current_phase} phase"


def resolve_approval_level(
    config: AgaileConfig,
    command: str,
    environment: str,
) -> str:
    """Resolve the approval level using the precedence chain.

    Precedence (highest to lowest):
    1. ``operation_overrides.<command>.minimum_approval_level``
    2. ``environment_overrides.<environment>.approval_level``
    3. ``user_preferences.default_approval_level``
    4. ``CONFIRM``
    """
    level = (
        config.operation_overrides.get(command)
        or config.environment_overrides.get(environment)
        or config.default_approval_level
        or FALLBACK_APPROVAL_LEVEL
    )
    return level.upper()


def next_phase(phases: tuple[str, ...], current: str) -> str:
    """Phase after ``current``; the last (or an unknown) phase maps to itself."""
    try:
        index = phases.index(current)
    except ValueError:
        return current
    if index < len(phases) - 1:
        return phases[index + 1]
    return current


class HILGate:
    """Phase lookup and approval checks bound to one :class:`ProjectContext`."""

    def __init__(self, ctx: ProjectContext):
        self.ctx = ctx

    @property
    def default_phase(self) -> str:
        return self.ctx.config.hil_default_phase or DEFAULT_PHASE

    def current_phase(self, feature_name: str | None) -> str:
        if not feature_name:
            return self.default_phase
        return self.ctx.ledger.find_phase(feature_name) or self.default_phase

    def required_approval_level(self, command: str) -> str:
        return resolve_approval_level(self.ctx.config, command, self.ctx.environment)

    def next_phase(self, current: str) -> str:
        return next_phase(self.ctx.config.hil_phases, current)

    def check(self, command: str, feature_name: str | None = None) -> HILStatus:
        return HILStatus(
            current_phase=self.current_phase(feature_name),
            approval_level=self.required_approval_level(command),
            command_phase=self.ctx.config.hil_command_phases.get(command, DEFAULT_PHASE),
        )

    def evaluate(
        self,
        command: str,
        feature_name: str | None = None,
        mode: ApprovalMode = ApprovalMode.AUTO,
    ) -> GateDecision:
        decision = GateDecision(status=self.check(command, feature_name), mode=mode)
        if decision.blocked:
            logger.info(decision.message(command))
        return decision


__all__ = [
    "ApprovalMode",
    "FALLBACK_APPROVAL_LEVEL",
    "GateDecision",
    "HILGate",
    "HILStatus",
    "NO_APPROVAL",
    "next_phase",
    "resolve_approval_level",
]
