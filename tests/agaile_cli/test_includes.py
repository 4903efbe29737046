"""Tests for @path include expansion."""

from __future__ import annotations

from pathlib import Path

import pytest

from agaile_cli.template.includes import (
    IncludeCycleError,
    IncludeDepthError,
    resolve_includes,
)


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "text",
    ["", "plain text", "# Heading\n\nNo includes here.\n", "trailing at sign @"],
)
def test_text_without_tokens_is_unchanged(tmp_path: Path, text: str) -> None:
    assert resolve_includes(text, tmp_path) == text


def test_include_is_substituted_in_place(tmp_path: Path) -> None:
    _write(tmp_path / "snippet.md", "SNIPPET")

    result = resolve_includes("before @snippet.md after", tmp_path)

    assert result == "before SNIPPET after"


def test_nested_includes_resolve_relative_to_each_file(tmp_path: Path) -> None:
    # A includes B (in sub/), B includes C relative to sub/
    _write(tmp_path / "sub" / "b.md", "B-start @deeper/c.md B-end")
    _write(tmp_path / "sub" / "deeper" / "c.md", "C-content")
    a = _write(tmp_path / "a.md", "A @sub/b.md")

    result = resolve_includes(a.read_text(encoding="utf-8"), tmp_path, source=a)

    assert result == "A B-start C-content B-end"
    assert "@" not in result


def test_missing_include_becomes_marker(tmp_path: Path) -> None:
    result = resolve_includes("x @missing/file.md y", tmp_path)
    assert result == "x <!-- MISSING INCLUDE: missing/file.md --> y"


def test_unreadable_include_becomes_error_marker(tmp_path: Path) -> None:
    (tmp_path / "folder").mkdir()

    result = resolve_includes("@folder", tmp_path)

    assert result == "<!-- ERROR PROCESSING INCLUDE: folder -->"


def test_processing_continues_after_missing_include(tmp_path: Path) -> None:
    _write(tmp_path / "ok.md", "OK")

    result = resolve_includes("@nope.md @ok.md", tmp_path)

    assert result == "<!-- MISSING INCLUDE: nope.md --> OK"


def test_cyclic_includes_raise(tmp_path: Path) -> None:
    _write(tmp_path / "a.md", "A @b.md")
    _write(tmp_path / "b.md", "B @a.md")

    with pytest.raises(IncludeCycleError) as excinfo:
        resolve_includes("@a.md", tmp_path)

    assert [p.name for p in excinfo.value.chain] == ["a.md", "b.md", "a.md"]


def test_self_include_from_source_raises(tmp_path: Path) -> None:
    source = _write(tmp_path / "self.md", "me @self.md")

    with pytest.raises(IncludeCycleError):
        resolve_includes(source.read_text(encoding="utf-8"), tmp_path, source=source)


def test_depth_limit_raises(tmp_path: Path) -> None:
    for index in range(5):
        _write(tmp_path / f"level{index}.md", f"L{index} @level{index + 1}.md")
    _write(tmp_path / "level5.md", "bottom")

    assert resolve_includes("@level0.md", tmp_path).endswith("bottom")
    with pytest.raises(IncludeDepthError):
        resolve_includes("@level0.md", tmp_path, max_depth=3)
