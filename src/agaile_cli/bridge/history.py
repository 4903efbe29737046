"""In-memory command execution history for a single process."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

MAX_HISTORY = 100


@dataclass(frozen=True)
class ExecutionRecord:
    command: str
    source_ide: str
    success: bool
    error: str | None = None
    duration: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "command": self.command,
            "source_ide": self.source_ide,
            "success": self.success,
            "error": self.error,
            "duration": self.duration,
        }


class ExecutionHistory:
    """Bounded history; the oldest record is evicted once the limit is hit."""

    def __init__(self, limit: int = MAX_HISTORY):
        self._records: deque[ExecutionRecord] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._records)

    def record(self, entry: ExecutionRecord) -> None:
        self._records.append(entry)

    def records(self) -> list[ExecutionRecord]:
        return list(self._records)

    def recent(self, count: int) -> list[ExecutionRecord]:
        if count <= 0:
            return []
        return list(self._records)[-count:]

    @property
    def last(self) -> ExecutionRecord | None:
        return self._records[-1] if self._records else None


__all__ = ["ExecutionHistory", "ExecutionRecord", "MAX_HISTORY"]
