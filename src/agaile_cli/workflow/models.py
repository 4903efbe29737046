"""Workflow data types: steps, step results and the overall run result."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class WorkflowState(StrEnum):
    """Lifecycle of a single workflow run."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class WorkflowStep:
    number: int
    name: str
    body: str
    critical: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "number": self.number,
            "name": self.name,
            "critical": self.critical,
        }


@dataclass(frozen=True)
class StepContext:
    """Inputs handed to a step runner alongside the step itself."""

    command: str
    parameters: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StepResult:
    step: WorkflowStep
    success: bool
    output: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "step": self.step.name,
            "number": self.step.number,
            "success": self.success,
        }
        if self.success:
            payload["result"] = self.output
        else:
            payload["error"] = self.error
        return payload


@dataclass
class WorkflowResult:
    command: str
    steps: list[WorkflowStep] = field(default_factory=list)
    state: WorkflowState = WorkflowState.PENDING
    results: list[StepResult] = field(default_factory=list)
    current_step: int | None = None
    failed_step: WorkflowStep | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def completed_steps(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed_steps(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def success(self) -> bool:
        return self.state == WorkflowState.COMPLETED

    @property
    def duration(self) -> float:
        if self.started_at is None or self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    @property
    def error(self) -> str | None:
        if self.failed_step is None:
            return None
        failure = next(
            (r for r in self.results if r.step == self.failed_step and not r.success), None
        )
        detail = failure.error if failure else "unknown error"
        return f"Critical step failed: {self.failed_step.name} - {detail}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "state": str(self.state),
            "total_steps": self.total_steps,
            "completed_steps": self.completed_steps,
            "failed_steps": self.failed_steps,
            "results": [r.to_dict() for r in self.results],
            "success": self.success,
            "failed_step": self.failed_step.name if self.failed_step else None,
            "duration": self.duration,
            "timestamp": self.finished_at.isoformat() if self.finished_at else None,
        }


__all__ = [
    "StepContext",
    "StepResult",
    "WorkflowResult",
    "WorkflowState",
    "WorkflowStep",
]
