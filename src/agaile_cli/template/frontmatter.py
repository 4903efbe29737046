"""Leading YAML metadata block extraction."""

from __future__ import annotations

import logging
import re
from typing import Any

from ruamel.yaml import YAML

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def _parse_block(block: str) -> dict[str, Any]:
    yaml = YAML(typ="safe")
    try:
        data = yaml.load(block)
    except Exception as exc:
        logger.warning("Failed to parse frontmatter: %s", exc)
        return {}
    if not isinstance(data, dict):
        return {}
    return data


def extract_metadata(text: str) -> dict[str, Any]:
    """Return the metadata mapping from a leading ``---`` block.

    Never raises: an absent block, malformed YAML, or a non-mapping document
    all yield an empty dict.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}
    return _parse_block(match.group(1))


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return ``(metadata, body)`` with the metadata block removed from the body."""
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}, text
    return _parse_block(match.group(1)), text[match.end():]


__all__ = ["FRONTMATTER_PATTERN", "extract_metadata", "split_frontmatter"]
