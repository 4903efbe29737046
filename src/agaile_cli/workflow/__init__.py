"""Workflow step parsing and execution."""

from .executor import StepRunner, WorkflowExecutor, describe_step
from .models import StepContext, StepResult, WorkflowResult, WorkflowState, WorkflowStep
from .parser import parse_workflow_steps

__all__ = [
    "StepContext",
    "StepResult",
    "StepRunner",
    "WorkflowExecutor",
    "WorkflowResult",
    "WorkflowState",
    "WorkflowStep",
    "describe_step",
    "parse_workflow_steps",
]
