"""Recursive ``@path`` include expansion for instruction documents.

Each ``@fragment`` token (``@`` followed by non-whitespace) is replaced by
the referenced file's contents, which are expanded in turn relative to that
file's own directory. Missing or unreadable targets become inline HTML
comments so a single bad reference never sinks the whole document.

Cyclic chains and runaway nesting raise :class:`IncludeError` subclasses
instead of recursing forever.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

INCLUDE_PATTERN = re.compile(r"@(\S+)")
DEFAULT_MAX_DEPTH = 32


class IncludeError(RuntimeError):
    """Base class for include expansion failures."""


class IncludeCycleError(IncludeError):
    """Raised when a file includes itself, directly or transitively."""

    def __init__(self, chain: list[Path]):
        self.chain = chain
        joined = " -> ".join(str(p) for p in chain)
        super().__init__(f"Include cycle detected: {joined}")


class IncludeDepthError(IncludeError):
    """Raised when nesting exceeds the configured maximum depth."""

    def __init__(self, max_depth: int, path: Path):
        self.max_depth = max_depth
        self.path = path
        super().__init__(f"Include depth limit of {max_depth} exceeded at {path}")


def missing_include_marker(fragment: str) -> str:
    return f"<!-- MISSING INCLUDE: {fragment} -->"


def error_include_marker(fragment: str) -> str:
    return f"<!-- ERROR PROCESSING INCLUDE: {fragment} -->"


def resolve_includes(
    text: str,
    base_dir: Path,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    source: Path | None = None,
) -> str:
    """Expand every include token in ``text``.

    Args:
        text: Document text to expand.
        base_dir: Directory that relative fragments resolve against.
        max_depth: Maximum nesting level before :class:`IncludeDepthError`.
        source: Path of the file ``text`` came from, so that a file
            including itself is caught as a cycle.

    Returns:
        The flattened document. Text without tokens is returned unchanged.
    """
    chain = [source.resolve()] if source is not None else []
    return _expand(text, base_dir, chain, 0, max_depth)


def _expand(text: str, base_dir: Path, chain: list[Path], depth: int, max_depth: int) -> str:
    pieces: list[str] = []
    cursor = 0
    for match in INCLUDE_PATTERN.finditer(text):
        pieces.append(text[cursor : match.start()])
        pieces.append(_include(match.group(1), base_dir, chain, depth, max_depth))
        cursor = match.end()
    if cursor == 0:
        return text
    pieces.append(text[cursor:])
    return "".join(pieces)


def _include(fragment: str, base_dir: Path, chain: list[Path], depth: int, max_depth: int) -> str:
    try:
        target = (base_dir / fragment).resolve()
        found = target.exists()
    except (OSError, ValueError) as exc:
        logger.warning("Failed to process include %s: %s", fragment, exc)
        return error_include_marker(fragment)

    if not found:
        logger.warning("Include file not found: %s", target)
        return missing_include_marker(fragment)

    if target in chain:
        raise IncludeCycleError([*chain, target])
    if depth >= max_depth:
        raise IncludeDepthError(max_depth, target)

    try:
        content = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Failed to process include %s: %s", fragment, exc)
        return error_include_marker(fragment)

    return _expand(content, target.parent, [*chain, target], depth + 1, max_depth)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "INCLUDE_PATTERN",
    "IncludeCycleError",
    "IncludeDepthError",
    "IncludeError",
    "error_include_marker",
    "missing_include_marker",
    "resolve_includes",
]
