"""Split an instruction body into ``Step N: name`` sections."""

from __future__ import annotations

import re

from agaile_cli.workflow.models import WorkflowStep

STEP_HEADING = re.compile(r"^#{1,6}[ \t]*Step[ \t]+(\d+):[ \t]*(.+?)[ \t]*$", re.MULTILINE)
OPTIONAL_SUFFIX = re.compile(r"\s*\(optional\)$", re.IGNORECASE)


def parse_workflow_steps(text: str) -> list[WorkflowStep]:
    """Return steps in document order.

    A step's body runs from its heading to the next step heading (or the end
    of the text). A name ending in ``(optional)`` marks the step non-critical.
    """
    headings = list(STEP_HEADING.finditer(text))
    steps: list[WorkflowStep] = []
    for index, match in enumerate(headings):
        end = headings[index + 1].start() if index + 1 < len(headings) else len(text)
        name = match.group(2).strip()
        critical = OPTIONAL_SUFFIX.search(name) is None
        if not critical:
            name = OPTIONAL_SUFFIX.sub("", name)
        steps.append(
            WorkflowStep(
                number=int(match.group(1)),
                name=name,
                body=text[match.end():end].strip(),
                critical=critical,
            )
        )
    return steps


__all__ = ["STEP_HEADING", "parse_workflow_steps"]
