"""Register MCP servers from a JSON definition file through the ``claude`` CLI."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

logger = logging.getLogger(__name__)

VALID_SCOPES = ("project", "user", "local")
DEFAULT_EXECUTABLE = "claude"
DEFAULT_SERVERS_FILE = Path(".claude") / "mcp.json"


class McpConfigError(ValueError):
    """Raised when the server definition file is missing or malformed."""


class McpCommandError(RuntimeError):
    """Raised when an ``mcp`` subcommand exits non-zero."""


@dataclass
class ProcessResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""


ProcessRunner = Callable[[list[str]], ProcessResult]


def run_process(args: list[str], timeout: int = 120) -> ProcessResult:
    """Run an external command and normalize failures into a return code."""
    try:
        completed = subprocess.run(
            args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
        return ProcessResult(
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
    except FileNotFoundError:
        return ProcessResult(returncode=127, stderr=f"{args[0]} executable not found on PATH")
    except subprocess.TimeoutExpired:
        return ProcessResult(returncode=124, stderr=f"command timed out: {' '.join(args)}")


def load_server_definitions(path: Path) -> dict[str, Any]:
    """Return the ``mcpServers`` mapping from ``path``."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise McpConfigError(f"Failed to read {path}: {exc}") from exc
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise McpConfigError(f"Invalid JSON in {path}: {exc}") from exc

    servers = parsed.get("mcpServers") if isinstance(parsed, dict) else None
    if not isinstance(servers, dict):
        raise McpConfigError("Config must be an object with a mcpServers map.")
    return servers


@dataclass
class InstallReport:
    added: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, object]:
        return {
            "added": list(self.added),
            "skipped": list(self.skipped),
            "failures": dict(self.failures),
            "success": self.success,
        }


class McpInstaller:
    def __init__(
        self,
        executable: str = DEFAULT_EXECUTABLE,
        runner: ProcessRunner = run_process,
    ):
        self.executable = executable
        self.runner = runner

    def _run(self, *args: str) -> ProcessResult:
        return self.runner([self.executable, "mcp", *args])

    def _check(self, *args: str) -> None:
        result = self._run(*args)
        if result.returncode != 0:
            detail = result.stderr.strip()
            message = f"{self.executable} mcp {' '.join(args)} exited with code {result.returncode}"
            raise McpCommandError(f"{message}: {detail}" if detail else message)

    def server_exists(self, name: str) -> bool:
        return self._run("get", name).returncode == 0

    def install(
        self,
        servers: dict[str, Any],
        *,
        scope: str = "project",
        replace: bool = False,
    ) -> InstallReport:
        """Add every server, continuing past individual failures."""
        if scope not in VALID_SCOPES:
            raise McpConfigError(f"--scope must be one of {', '.join(VALID_SCOPES)}")

        report = InstallReport()
        for name, server_config in servers.items():
            logger.info("Installing MCP server: %s", name)
            try:
                if self.server_exists(name):
                    if not replace:
                        logger.info("Skipping %s (already exists)", name)
                        report.skipped.append(name)
                        continue
                    logger.info("Found existing %s; removing before re-adding", name)
                    self._check("remove", name)
                self._check("add-json", "--scope", scope, name, json.dumps(server_config))
            except McpCommandError as exc:
                logger.error("Failed to add %s: %s", name, exc)
                report.failures[name] = str(exc)
                continue
            report.added.append(name)
        return report


__all__ = [
    "DEFAULT_SERVERS_FILE",
    "InstallReport",
    "McpCommandError",
    "McpConfigError",
    "McpInstaller",
    "ProcessResult",
    "VALID_SCOPES",
    "load_server_definitions",
    "run_process",
]
