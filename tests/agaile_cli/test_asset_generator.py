"""Tests for command catalog generation."""

from __future__ import annotations

from pathlib import Path

import pytest

from agaile_cli.core.config import IntegrationConfig
from agaile_cli.template.asset_generator import (
    TemplateNotFoundError,
    find_instruction_files,
    generate_all_commands,
    generate_command,
    resolve_output_dir,
)


def _outputs(directory: Path) -> dict[str, bytes]:
    return {p.name: p.read_bytes() for p in sorted(directory.glob("*.md"))}


def test_find_instruction_files_is_recursive_and_sorted(ctx) -> None:
    files = find_instruction_files(ctx.instructions_dir)

    assert [p.name for p in files] == ["create-spec.md", "deploy.md", "lint.md", "preamble.md"]


def test_generate_all_writes_one_file_per_instruction_and_ide(ctx, project: Path) -> None:
    report = generate_all_commands(ctx)

    claude_dir = project / ".claude" / "commands"
    cursor_dir = project / ".cursor" / "custom-commands"
    assert sorted(_outputs(claude_dir)) == ["create-spec.md", "deploy.md", "lint.md", "preamble.md"]
    assert sorted(_outputs(cursor_dir)) == ["create-spec.md", "deploy.md", "lint.md", "preamble.md"]
    assert report.total_generated == 8
    assert report.skipped == ["windsurf"]
    assert not report.has_failures


def test_generated_content_substitutes_variables(ctx, project: Path) -> None:
    generate_all_commands(ctx)

    content = (project / ".claude" / "commands" / "create-spec.md").read_text(encoding="utf-8")
    assert "description: Create a feature spec" in content
    assert "model: sonnet" in content
    assert "# /create-spec" in content
    assert "Source: .agaile-os/instructions/core/create-spec.md" in content
    assert "Project type: nextjs" in content
    assert "- Linear" in content
    assert "plan-product" in content
    assert "${" not in content

    cursor = (project / ".cursor" / "custom-commands" / "deploy.md").read_text(encoding="utf-8")
    assert cursor == "# deploy (blue)\n\nTrigger: @deploy\n"


def test_disabled_integration_writes_nothing(ctx, project: Path) -> None:
    generate_all_commands(ctx)

    assert not (project / ".agaile-os" / "generated" / "windsurf").exists()


def test_generation_is_idempotent(ctx, project: Path) -> None:
    generate_all_commands(ctx)
    first = _outputs(project / ".claude" / "commands")

    generate_all_commands(ctx)
    second = _outputs(project / ".claude" / "commands")

    assert first == second


def test_existing_output_is_overwritten(ctx, project: Path) -> None:
    target = project / ".claude" / "commands" / "lint.md"
    target.parent.mkdir(parents=True)
    target.write_text("stale", encoding="utf-8")

    generate_all_commands(ctx)

    assert target.read_text(encoding="utf-8") != "stale"


def test_missing_template_fails_only_that_ide(make_context, project: Path) -> None:
    (project / ".agaile-os" / "commands" / "templates" / "cursor_command.md").unlink()
    ctx = make_context()

    report = generate_all_commands(ctx)

    by_ide = {r.ide: r for r in report.integrations}
    assert len(by_ide["claude_code"].generated) == 4
    assert by_ide["cursor"].generated == []
    assert set(by_ide["cursor"].failures) == {"create-spec", "deploy", "lint", "preamble"}
    assert report.has_failures


def test_include_cycle_fails_single_instruction(ctx, project: Path) -> None:
    core = project / ".agaile-os" / "instructions" / "core"
    (core / "loop.md").write_text("@loop.md", encoding="utf-8")

    report = generate_all_commands(ctx)

    claude = next(r for r in report.integrations if r.ide == "claude_code")
    assert "loop" in claude.failures
    assert len(claude.generated) == 4


def test_missing_instructions_directory_reports_error(make_context, project: Path) -> None:
    config = (project / ".agaile-os" / "config.yml").read_text(encoding="utf-8")
    ctx = make_context(config=config.replace(".agaile-os/instructions", "nowhere"))

    report = generate_all_commands(ctx)

    assert report.error is not None
    assert report.integrations == []


def test_generate_command_returns_none_for_disabled_ide(ctx) -> None:
    path = ctx.core_instructions_dir / "lint.md"
    assert generate_command(ctx, path, "windsurf") is None
    assert generate_command(ctx, path, "unknown-ide") is None


def test_generate_command_raises_for_missing_template(make_context, project: Path) -> None:
    (project / ".agaile-os" / "commands" / "templates" / "claude_command.md").unlink()
    ctx = make_context()

    with pytest.raises(TemplateNotFoundError):
        generate_command(ctx, ctx.core_instructions_dir / "lint.md", "claude_code")


@pytest.mark.parametrize(
    ("integration", "expected"),
    [
        (IntegrationConfig("claude_code", True), ".claude/commands"),
        (IntegrationConfig("cursor", True), ".cursor/commands"),
        (IntegrationConfig("cursor", True, commands_directory="custom/dir"), "custom/dir"),
        (IntegrationConfig("zed", True), ".agaile-os/generated/zed"),
    ],
)
def test_resolve_output_dir(ctx, project: Path, integration: IntegrationConfig, expected: str) -> None:
    assert resolve_output_dir(ctx, integration) == (project / expected).resolve()


def test_undecodable_instruction_fails_only_that_instruction(ctx, project: Path) -> None:
    (project / ".agaile-os" / "instructions" / "core" / "bad.md").write_bytes(b"\xff\xfe bad")

    report = generate_all_commands(ctx)

    claude = next(r for r in report.integrations if r.ide == "claude_code")
    assert "bad" in claude.failures
    assert len(claude.generated) == 4
    assert report.has_failures


def test_unwritable_output_path_is_recorded(ctx, project: Path) -> None:
    (project / ".claude" / "commands" / "lint.md").mkdir(parents=True)

    report = generate_all_commands(ctx)

    claude = next(r for r in report.integrations if r.ide == "claude_code")
    assert "lint" in claude.failures
    assert len(claude.generated) == 3


def test_output_directory_blocked_by_file_fails_that_ide(ctx, project: Path) -> None:
    (project / ".claude").write_text("not a directory", encoding="utf-8")

    report = generate_all_commands(ctx)

    by_ide = {r.ide: r for r in report.integrations}
    assert by_ide["claude_code"].error is not None
    assert by_ide["claude_code"].generated == []
    assert len(by_ide["cursor"].generated) == 4
    assert report.has_failures
    assert report.to_dict()["integrations"][0]["error"] == by_ide["claude_code"].error
