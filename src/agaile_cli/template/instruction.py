"""Instruction document loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from agaile_cli.template.frontmatter import extract_metadata
from agaile_cli.template.includes import DEFAULT_MAX_DEPTH, resolve_includes
from agaile_cli.template.renderer import command_name_for


@dataclass(frozen=True)
class Instruction:
    """An instruction document after include expansion."""

    path: Path
    raw_text: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return command_name_for(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": str(self.path),
            "metadata": self.metadata,
        }


def load_instruction(path: Path, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Instruction:
    """Read ``path``, expand its includes, and extract metadata from the result.

    Raises:
        OSError: If the instruction itself cannot be read.
        IncludeError: On include cycles or excessive nesting.
    """
    raw = path.read_text(encoding="utf-8")
    content = resolve_includes(raw, path.parent, max_depth=max_depth, source=path)
    return Instruction(
        path=path,
        raw_text=raw,
        content=content,
        metadata=extract_metadata(content),
    )


__all__ = ["Instruction", "load_instruction"]
