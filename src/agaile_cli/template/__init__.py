"""Command generation: includes, metadata, templates and the catalog builder."""

from .asset_generator import (
    GenerationReport,
    TemplateNotFoundError,
    find_instruction_files,
    generate_all_commands,
    generate_command,
)
from .frontmatter import extract_metadata, split_frontmatter
from .includes import (
    IncludeCycleError,
    IncludeDepthError,
    IncludeError,
    resolve_includes,
)
from .instruction import Instruction, load_instruction
from .renderer import (
    CommandVariables,
    TEMPLATE_VARIABLES,
    apply_template,
    build_variables,
    unresolved_placeholders,
)
from .watcher import InstructionWatcher

__all__ = [
    "CommandVariables",
    "GenerationReport",
    "IncludeCycleError",
    "IncludeDepthError",
    "IncludeError",
    "Instruction",
    "InstructionWatcher",
    "TEMPLATE_VARIABLES",
    "TemplateNotFoundError",
    "apply_template",
    "build_variables",
    "extract_metadata",
    "find_instruction_files",
    "generate_all_commands",
    "generate_command",
    "load_instruction",
    "resolve_includes",
    "split_frontmatter",
    "unresolved_placeholders",
]
