"""Command bridge: validated, HIL-gated workflow execution."""

from .history import ExecutionHistory, ExecutionRecord, MAX_HISTORY
from .service import CommandBridge, CommandOutcome, OutcomeStatus
from .validation import ValidationResult, validate_command

__all__ = [
    "CommandBridge",
    "CommandOutcome",
    "ExecutionHistory",
    "ExecutionRecord",
    "MAX_HISTORY",
    "OutcomeStatus",
    "ValidationResult",
    "validate_command",
]
