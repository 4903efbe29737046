"""Human-in-the-loop approval gating."""

from .gate import (
    FALLBACK_APPROVAL_LEVEL,
    NO_APPROVAL,
    ApprovalMode,
    GateDecision,
    HILGate,
    HILStatus,
    next_phase,
    resolve_approval_level,
)

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
