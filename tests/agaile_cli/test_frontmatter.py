"""Tests for leading metadata block extraction."""

from __future__ import annotations

from agaile_cli.template.frontmatter import extract_metadata, split_frontmatter


def test_recognized_keys_are_extracted() -> None:
    text = """---
name: create-spec
description: Create a spec
model: sonnet
color: green
agent: spec-writer
integrations:
  - Linear
  - GitHub
context: [Roadmap]
outcomes: [Spec file]
trigger: /spec
dependencies:
  - plan-product
---
Body
"""
    metadata = extract_metadata(text)

    assert metadata == {
        "name": "create-spec",
        "description": "Create a spec",
        "model": "sonnet",
        "color": "green",
        "agent": "spec-writer",
        "integrations": ["Linear", "GitHub"],
        "context": ["Roadmap"],
        "outcomes": ["Spec file"],
        "trigger": "/spec",
        "dependencies": ["plan-product"],
    }


def test_malformed_block_yields_empty_mapping() -> None:
    text = "---\nname: [unclosed\n  bad: : :\n---\nBody\n"
    assert extract_metadata(text) == {}


def test_non_mapping_block_yields_empty_mapping() -> None:
    assert extract_metadata("---\n- a\n- b\n---\nBody\n") == {}


def test_absent_block_yields_empty_mapping() -> None:
    assert extract_metadata("# Title\n\nname: not metadata\n") == {}


def test_block_must_start_the_document() -> None:
    text = "Intro line\n---\nname: late\n---\n"
    assert extract_metadata(text) == {}


def test_split_frontmatter_separates_body() -> None:
    metadata, body = split_frontmatter("---\nname: demo\n---\n# Body\n")

    assert metadata == {"name": "demo"}
    assert body == "# Body\n"


def test_split_frontmatter_without_block_returns_text() -> None:
    assert split_frontmatter("# Body\n") == ({}, "# Body\n")
