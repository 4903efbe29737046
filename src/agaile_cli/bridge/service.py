"""IDE-agnostic command execution.

``CommandBridge.execute_command`` runs the full pipeline for one command:
validation, instruction loading, the HIL gate, the workflow itself, a
ledger append and a history record. Every outcome comes back as a
:class:`CommandOutcome`; only config/ledger load errors (raised while
building the :class:`ProjectContext`) escape as exceptions.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from agaile_cli.bridge.history import ExecutionHistory, ExecutionRecord
from agaile_cli.bridge.validation import (
    APPROVAL_REQUIRED,
    INSTRUCTION_LOAD_FAILED,
    WORKFLOW_FAILED,
    ValidationResult,
    instruction_path,
    suggestions_for,
    validate_command,
)
from agaile_cli.core.context import ProjectContext
from agaile_cli.hil.gate import ApprovalMode, HILGate
from agaile_cli.template.includes import IncludeError
from agaile_cli.template.instruction import Instruction, load_instruction
from agaile_cli.tracking.ledger import append_execution
from agaile_cli.workflow.executor import WorkflowExecutor
from agaile_cli.workflow.models import WorkflowResult

logger = logging.getLogger(__name__)

STATUS_HISTORY_SIZE = 10


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    BLOCKED = "blocked"
    FAILED = "failed"


@dataclass
class CommandOutcome:
    command: str
    status: OutcomeStatus
    message: str
    result: WorkflowResult | None = None
    hil_phase: str | None = None
    next_phase: str | None = None
    approval_level: str | None = None
    error: str | None = None
    code: str | None = None
    suggestions: list[str] = field(default_factory=list)
    tracking_updated: bool = False

    @property
    def success(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @property
    def requires_approval(self) -> bool:
        return self.status == OutcomeStatus.BLOCKED

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "success": self.success,
            "status": str(self.status),
            "command": self.command,
            "message": self.message,
        }
        if self.result is not None:
            payload["result"] = self.result.to_dict()
        if self.hil_phase is not None:
            payload["hil_phase"] = self.hil_phase
        if self.next_phase is not None:
            payload["next_phase"] = self.next_phase
        if self.approval_level is not None:
            payload["approval_level"] = self.approval_level
            payload["requires_approval"] = self.requires_approval
        if self.error is not None:
            payload["error"] = self.error
            payload["code"] = self.code
        if self.suggestions:
            payload["suggestions"] = list(self.suggestions)
        if self.status != OutcomeStatus.BLOCKED:
            payload["tracking_updated"] = self.tracking_updated
        return payload


class CommandBridge:
    """Dispatch named workflow commands for any IDE."""

    def __init__(
        self,
        ctx: ProjectContext,
        executor: WorkflowExecutor | None = None,
        history: ExecutionHistory | None = None,
    ):
        self.ctx = ctx
        self.executor = executor or WorkflowExecutor()
        self.history = history or ExecutionHistory()
        self.gate = HILGate(ctx)

    def validate_command(self, command: str) -> ValidationResult:
        return validate_command(self.ctx, command)

    def load_instruction(self, command: str) -> Instruction:
        return load_instruction(instruction_path(self.ctx, command))

    def execute_command(
        self,
        command: str,
        *,
        source_ide: str = "unknown",
        feature_name: str | None = None,
        parameters: dict[str, Any] | None = None,
        approval: ApprovalMode = ApprovalMode.AUTO,
    ) -> CommandOutcome:
        started = time.monotonic()
        logger.info("Command: %s (source IDE: %s)", command, source_ide)

        validation = self.validate_command(command)
        if not validation.valid:
            return self._fail(
                command,
                source_ide,
                started,
                code=validation.code,
                error=f"Command validation failed: {validation.reason}",
            )

        try:
            instruction = self.load_instruction(command)
        except (IncludeError, OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to load instruction for %s: %s", command, exc)
            return self._fail(
                command,
                source_ide,
                started,
                code=INSTRUCTION_LOAD_FAILED,
                error=f"Command instruction could not be loaded: {exc}",
            )

        decision = self.gate.evaluate(command, feature_name, approval)
        status = decision.status
        if decision.blocked:
            return CommandOutcome(
                command=command,
                status=OutcomeStatus.BLOCKED,
                message=decision.message(command),
                hil_phase=status.current_phase,
                approval_level=status.approval_level,
                code=APPROVAL_REQUIRED,
                suggestions=suggestions_for(APPROVAL_REQUIRED),
            )

        result = self.executor.run(
            command,
            instruction.content,
            parameters=parameters,
            metadata=instruction.metadata,
        )
        tracking_updated = append_execution(
            self.ctx.ledger_path,
            command,
            source_ide,
            result,
        )

        if not result.success:
            outcome = self._fail(
                command,
                source_ide,
                started,
                code=WORKFLOW_FAILED,
                error=result.error or "Workflow failed",
            )
            outcome.result = result
            outcome.hil_phase = status.current_phase
            outcome.approval_level = status.approval_level
            outcome.tracking_updated = tracking_updated
            return outcome

        self._record(command, source_ide, True, None, started)
        return CommandOutcome(
            command=command,
            status=OutcomeStatus.SUCCESS,
            message=f"Command {command} executed successfully",
            result=result,
            hil_phase=status.current_phase,
            next_phase=self.gate.next_phase(status.current_phase),
            approval_level=status.approval_level,
            tracking_updated=tracking_updated,
        )

    def _fail(
        self,
        command: str,
        source_ide: str,
        started: float,
        *,
        code: str | None,
        error: str,
    ) -> CommandOutcome:
        logger.error("Command execution failed: %s", error)
        self._record(command, source_ide, False, error, started)
        return CommandOutcome(
            command=command,
            status=OutcomeStatus.FAILED,
            message=f"Command {command} failed",
            error=error,
            code=code,
            suggestions=suggestions_for(code),
        )

    def _record(
        self,
        command: str,
        source_ide: str,
        success: bool,
        error: str | None,
        started: float,
    ) -> None:
        self.history.record(
            ExecutionRecord(
                command=command,
                source_ide=source_ide,
                success=success,
                error=error,
                duration=time.monotonic() - started,
            )
        )

    def available_commands(self) -> list[str]:
        directory = self.ctx.core_instructions_dir
        if not directory.is_dir():
            return []
        return sorted(p.stem for p in directory.glob("*.md") if p.is_file())

    def status(self) -> dict[str, Any]:
        last = self.history.last
        return {
            "project_root": str(self.ctx.project_root),
            "config_version": self.ctx.config.framework_version,
            "environment": self.ctx.environment,
            "command_history": [r.to_dict() for r in self.history.recent(STATUS_HISTORY_SIZE)],
            "hil_workflow_enabled": self.ctx.config.hil_enabled,
            "available_commands": self.available_commands(),
            "last_execution": last.to_dict() if last else None,
        }


__all__ = ["CommandBridge", "CommandOutcome", "OutcomeStatus"]
