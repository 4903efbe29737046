"""Tracking ledger (MASTER_TRACKING.md) helpers."""

from .ledger import (
    LedgerLoadError,
    TrackingLedger,
    append_execution,
    format_execution_entry,
    load_ledger,
)

__all__ = [
    "LedgerLoadError",
    "TrackingLedger",
    "append_execution",
    "format_execution_entry",
    "load_ledger",
]
