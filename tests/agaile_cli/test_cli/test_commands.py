"""CLI tests for the agaile and agaile-commands entry points."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from agaile_cli import app, commands_app

runner = CliRunner()


def _json_payload(output: str) -> dict:
    """Extract the top-level JSON object printed among other console output."""
    lines = output.splitlines()
    start = lines.index("{")
    end = len(lines) - 1 - lines[::-1].index("}")
    return json.loads("\n".join(lines[start : end + 1]))


def _config(project: Path) -> str:
    return str(project / ".agaile-os" / "config.yml")


def test_commands_lists_instructions(project: Path) -> None:
    result = runner.invoke(app, ["commands", "--config", _config(project)])

    assert result.exit_code == 0
    assert "Available Commands:" in result.output
    assert "  - create-spec" in result.output
    assert "  - lint" in result.output


def test_execute_ungated_command_succeeds(project: Path) -> None:
    result = runner.invoke(app, ["execute", "lint", "cursor", '{"fix": true}', "--config", _config(project)])

    assert result.exit_code == 0
    payload = _json_payload(result.output)
    assert payload["success"] is True
    assert payload["result"]["completed_steps"] == 1
    assert payload["tracking_updated"] is True


def test_execute_gated_command_is_blocked(project: Path) -> None:
    result = runner.invoke(app, ["execute", "deploy", "--feature", "checkout", "--config", _config(project)])

    assert result.exit_code == 3
    payload = _json_payload(result.output)
    assert payload["status"] == "blocked"
    assert payload["hil_phase"] == "review"


def test_execute_gated_command_with_manual_approval(project: Path) -> None:
    result = runner.invoke(app, ["execute", "deploy", "--approval", "manual", "--config", _config(project)])

    assert result.exit_code == 0


def test_execute_rejects_invalid_parameters(project: Path) -> None:
    result = runner.invoke(app, ["execute", "lint", "cli", "{not json", "--config", _config(project)])

    assert result.exit_code == 2
    assert "Invalid JSON parameters" in result.output


def test_execute_rejects_non_object_parameters(project: Path) -> None:
    result = runner.invoke(app, ["execute", "lint", "cli", "[1, 2]", "--config", _config(project)])

    assert result.exit_code == 2


def test_execute_unknown_command_fails(project: Path) -> None:
    result = runner.invoke(app, ["execute", "nope", "--config", _config(project)])

    assert result.exit_code == 1
    assert _json_payload(result.output)["code"] == "INSTRUCTION_NOT_FOUND"


def test_missing_config_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["status", "--config", str(tmp_path / "missing.yml")])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_status_reports_project(project: Path) -> None:
    result = runner.invoke(app, ["status", "--config", _config(project)])

    assert result.exit_code == 0
    payload = _json_payload(result.output)
    assert payload["config_version"] == "2.1.0"
    assert payload["environment"] == "development"
    assert payload["last_execution"] is None


def test_generate_writes_ide_commands(project: Path) -> None:
    result = runner.invoke(commands_app, ["generate", "--json", "--config", _config(project)])

    assert result.exit_code == 0
    payload = _json_payload(result.output)
    assert payload["skipped"] == ["windsurf"]
    assert (project / ".claude" / "commands" / "create-spec.md").is_file()
    assert (project / ".cursor" / "custom-commands" / "deploy.md").is_file()


def test_mcp_install_reports_failures(tmp_path: Path) -> None:
    servers = tmp_path / "mcp.json"
    servers.write_text(json.dumps({"mcpServers": {"linear": {"command": "npx"}}}), encoding="utf-8")

    result = runner.invoke(
        app,
        ["mcp", "install", "--from", str(servers), "--executable", "agaile-missing-cli-xyz"],
    )

    assert result.exit_code == 1
    assert "linear" in result.output


def test_mcp_install_rejects_bad_scope(tmp_path: Path) -> None:
    servers = tmp_path / "mcp.json"
    servers.write_text(json.dumps({"mcpServers": {"linear": {}}}), encoding="utf-8")

    result = runner.invoke(app, ["mcp", "install", "--from", str(servers), "--scope", "galaxy"])

    assert result.exit_code == 2
