"""MASTER_TRACKING.md access.

The ledger is free-form markdown. This module only ever reads it whole,
searches it for ``phase:`` annotations, and appends execution log entries.
Prior content is never rewritten.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from agaile_cli.workflow.models import WorkflowResult

logger = logging.getLogger(__name__)


class LedgerLoadError(RuntimeError):
    """Raised when an existing tracking ledger cannot be read."""


@dataclass(frozen=True)
class TrackingLedger:
    """Snapshot of the ledger taken at process start."""

    path: Path
    text: str = ""

    @property
    def exists(self) -> bool:
        return bool(self.text)

    def find_phase(self, feature_name: str) -> str | None:
        """Return the ``phase:`` value recorded under ``<feature_name>:``, if any."""
        if not feature_name or not self.text:
            return None
        pattern = re.compile(
            rf"{re.escape(feature_name)}:\s*\n(?:[^\n]*\n)*?\s*phase:\s*([^\n]+)",
            re.IGNORECASE,
        )
        match = pattern.search(self.text)
        if match is None:
            return None
        return match.group(1).strip() or None


def load_ledger(path: Path) -> TrackingLedger:
    """Read the ledger once. A missing file yields an empty ledger."""
    if not path.exists():
        logger.debug("Tracking ledger not found at %s", path)
        return TrackingLedger(path=path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LedgerLoadError(f"Failed to read tracking ledger {path}: {exc}") from exc
    return TrackingLedger(path=path, text=text)


def format_execution_entry(
    command_name: str,
    source_ide: str,
    success: bool,
    completed_steps: int,
    total_steps: int,
    timestamp: datetime | None = None,
) -> str:
    moment = (timestamp or datetime.now(timezone.utc)).isoformat()
    return (
        "\n<!-- Command Execution Log -->\n"
        f"<!-- {moment}: {command_name} executed via {source_ide} -->\n"
        f"<!-- Success: {str(success).lower()}, Steps: {completed_steps}/{total_steps} -->\n"
    )


def append_execution(
    path: Path,
    command_name: str,
    source_ide: str,
    result: WorkflowResult,
) -> bool:
    """Append an entry recording the outcome of ``result`` to the ledger.

    Returns False (after logging a warning) when the write fails; the caller's
    command result is left untouched.
    """
    entry = format_execution_entry(
        command_name,
        source_ide,
        result.success,
        result.completed_steps,
        result.total_steps,
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(entry)
    except OSError as exc:
        logger.warning("Failed to update tracking ledger %s: %s", path, exc)
        return False
    logger.info("Tracking updated: %s", path)
    return True


__all__ = [
    "LedgerLoadError",
    "TrackingLedger",
    "append_execution",
    "format_execution_entry",
    "load_ledger",
]
