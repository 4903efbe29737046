"""Fail-fast sequential workflow execution.

Steps are handed one at a time to a *step runner*: any callable taking the
step and a :class:`StepContext` and returning a result. Raising from the
runner marks the step failed. The default runner only records what would be
done; pass a different runner to perform real side effects.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from agaile_cli.workflow.models import (
    StepContext,
    StepResult,
    WorkflowResult,
    WorkflowState,
    WorkflowStep,
)
from agaile_cli.workflow.parser import parse_workflow_steps

logger = logging.getLogger(__name__)

StepRunner = Callable[[WorkflowStep, StepContext], Any]


def describe_step(step: WorkflowStep, context: StepContext) -> dict[str, Any]:
    """Default runner: declare the step as executed without side effects."""
    logger.debug("Executing: %s", step.body[:100])
    return {
        "step_name": step.name,
        "executed": True,
        "parameters": dict(context.parameters),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


class WorkflowExecutor:
    """Run parsed workflow steps in order through a pluggable runner."""

    def __init__(self, step_runner: StepRunner | None = None):
        self.step_runner = step_runner or describe_step

    def run(
        self,
        command: str,
        instruction_text: str,
        parameters: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> WorkflowResult:
        steps = parse_workflow_steps(instruction_text)
        return self.run_steps(command, steps, parameters, metadata)

    def run_steps(
        self,
        command: str,
        steps: list[WorkflowStep],
        parameters: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> WorkflowResult:
        context = StepContext(
            command=command,
            parameters=dict(parameters or {}),
            metadata=dict(metadata or {}),
        )
        result = WorkflowResult(command=command, steps=list(steps))
        result.started_at = datetime.now(timezone.utc)
        logger.info("Executing workflow: %s (%d steps)", command, len(steps))

        for index, step in enumerate(steps, start=1):
            result.state = WorkflowState.RUNNING
            result.current_step = index
            logger.info("Step %d: %s", index, step.name)
            try:
                output = self.step_runner(step, context)
            except Exception as exc:
                logger.error("Step %d failed: %s", index, exc)
                result.results.append(StepResult(step=step, success=False, error=str(exc)))
                if step.critical:
                    result.failed_step = step
                    result.state = WorkflowState.FAILED
                    break
                continue
            result.results.append(StepResult(step=step, success=True, output=output))
            logger.info("Step %d completed", index)

        if result.state != WorkflowState.FAILED:
            result.state = WorkflowState.COMPLETED
        result.current_step = None
        result.finished_at = datetime.now(timezone.utc)
        return result


__all__ = ["StepRunner", "WorkflowExecutor", "describe_step"]
