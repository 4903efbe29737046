from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from agaile_cli.core.context import ProjectContext, build_context

DEFAULT_CONFIG = """\
framework:
  version: 2.1.0
project_types:
  default:
    name: nextjs
    instructions: .agaile-os/instructions
integrations:
  claude_code:
    enabled: true
  cursor:
    enabled: true
    commands_directory: .cursor/custom-commands
  windsurf:
    enabled: false
hil_workflow:
  enabled: true
  phases:
    - planning
    - development
    - review
    - release
  commands:
    deploy:
      phase: release
operation_overrides:
  lint:
    minimum_approval_level: NONE
user_preferences:
  default_approval_level: CONFIRM
feature_tracking:
  master_tracking: .agaile-os/MASTER_TRACKING.md
"""

CLAUDE_TEMPLATE = """\
---
description: ${command_description}
model: ${model}
---
# /${command_name}

Source: ${source_instruction}
Project type: ${project_type}

## Integration Points
${integration_points}

## Dependencies
${dependencies}
"""

CURSOR_TEMPLATE = "# ${command_name} (${color})\n\nTrigger: ${trigger}\n"

LEDGER = """\
# Master Tracking

## Features

checkout:
  owner: team-a
  phase: review

search:
  phase: planning
"""


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A minimal node project with AgAIle OS config, templates and instructions."""
    root = tmp_path / "project"
    root.mkdir()
    write(root / "package.json", "{}\n")
    (root / "node_modules").mkdir()

    agaile = root / ".agaile-os"
    write(agaile / "config.yml", DEFAULT_CONFIG)
    write(agaile / "commands" / "templates" / "claude_command.md", CLAUDE_TEMPLATE)
    write(agaile / "commands" / "templates" / "cursor_command.md", CURSOR_TEMPLATE)
    write(agaile / "MASTER_TRACKING.md", LEDGER)

    core = agaile / "instructions" / "core"
    write(
        core / "create-spec.md",
        """---
description: Create a feature spec
model: sonnet
integrations:
  - Linear
dependencies:
  - plan-product
---
@../shared/preamble.md

### Step 1: Gather requirements
Ask the user.

### Step 2: Write spec
Write it down.
""",
    )
    write(
        core / "deploy.md",
        """---
description: Deploy the app
---
### Step 1: Build
Run the build.

### Step 2: Ship
Push it.
""",
    )
    write(core / "lint.md", "### Step 1: Run linter\nRun it.\n")
    write(agaile / "instructions" / "shared" / "preamble.md", "Follow the house rules.")
    return root


@pytest.fixture()
def make_context(project: Path) -> Callable[..., ProjectContext]:
    def _make(environment: str = "development", config: str | None = None) -> ProjectContext:
        config_path = project / ".agaile-os" / "config.yml"
        if config is not None:
            config_path.write_text(config, encoding="utf-8")
        return build_context(config_path, environment=environment)

    return _make


@pytest.fixture()
def ctx(make_context) -> ProjectContext:
    return make_context()
