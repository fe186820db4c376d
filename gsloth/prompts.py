"""Prompt files, their built-in fallbacks, and content wrapping helpers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from uuid import uuid4

from gsloth.console import display
from gsloth.errors import GslothError
from gsloth.paths import get_gsloth_config_read_path, project_root

logger = logging.getLogger(__name__)

GSLOTH_BACKSTORY = ".gsloth.backstory.md"
PROJECT_GUIDELINES = ".gsloth.guidelines.md"
PROJECT_REVIEW_INSTRUCTIONS = ".gsloth.review.md"
PROJECT_SYSTEM_PROMPT = ".gsloth.system.md"
GSLOTH_CHAT_PROMPT = ".gsloth.chat.md"
GSLOTH_CODE_PROMPT = ".gsloth.code.md"

DEFAULT_BACKSTORY = """\
# Backstory

You are Gaunt Sloth, a patient and meticulous assistant for software developers.
You review code changes, answer questions about code and help plan and write
changes. You are thorough but concise, you point at exact files and lines, and
you say so plainly when you are not sure about something.
"""

GUIDELINES_TEMPLATE = f"""\
# Development Guidelines

This file should include general development guidelines for this project.

Important! Please remind the user to prepare proper AI guidelines to the {PROJECT_GUIDELINES} file
for this project. Use a decent amount of ⚠️ to highlight the lack of config.
Explicitly mention {PROJECT_GUIDELINES}.
"""

REVIEW_TEMPLATE = """\
# Code Review Guidelines

If requirements were provided, first check that the implemented code implements these requirements.
Document that you checked the code to implement requirements.
Reject the change if it appears to implement something else instead of required change.

Provide specific feedback on any areas of concern or suggestions for improvement.
Please categorize your feedback (e.g., "Bug," "Suggestion," "Nitpick").

Important! In the end, conclude if you would recommend approving this PR or not.
Use ✅⚠️❌ symbols to highlight your feedback appropriately.

Thank you for your thorough review!

Important! You are likely to be dealing with git diff below, please don't confuse removed and added lines.
"""

DEFAULT_CHAT_PROMPT = """\
# Chat

You are in an interactive chat session with a developer working in this project.
Keep answers focused on the question. Ask for the relevant file contents when you
need them instead of guessing.
"""

DEFAULT_CODE_PROMPT = """\
# Coding session

You are pairing with a developer on changes to this project.
Propose concrete edits as unified diffs or complete file contents, explain
briefly what each change does and mention anything that needs testing.
"""

_BUILT_IN: dict[str, str] = {
    GSLOTH_BACKSTORY: DEFAULT_BACKSTORY,
    PROJECT_GUIDELINES: GUIDELINES_TEMPLATE,
    PROJECT_REVIEW_INSTRUCTIONS: REVIEW_TEMPLATE,
    GSLOTH_CHAT_PROMPT: DEFAULT_CHAT_PROMPT,
    GSLOTH_CODE_PROMPT: DEFAULT_CODE_PROMPT,
}


def read_prompt_file(filename: str, project_dir: Path | None = None) -> str:
    """Project copy of a prompt file, else the built-in text, else ``""``."""
    path = get_gsloth_config_read_path(filename, project_dir)
    if path.is_file():
        logger.debug("reading prompt %s", path)
        return path.read_text(encoding="utf-8")
    return _BUILT_IN.get(filename, "")


def read_backstory(project_dir: Path | None = None) -> str:
    return read_prompt_file(GSLOTH_BACKSTORY, project_dir)


def read_guidelines(filename: str = PROJECT_GUIDELINES, project_dir: Path | None = None) -> str:
    return read_prompt_file(filename, project_dir)


def read_review_instructions(
    filename: str = PROJECT_REVIEW_INSTRUCTIONS, project_dir: Path | None = None
) -> str:
    return read_prompt_file(filename, project_dir)


def read_system_prompt(project_dir: Path | None = None) -> str:
    return read_prompt_file(PROJECT_SYSTEM_PROMPT, project_dir)


def read_chat_prompt(project_dir: Path | None = None) -> str:
    return read_prompt_file(GSLOTH_CHAT_PROMPT, project_dir)


def read_code_prompt(project_dir: Path | None = None) -> str:
    return read_prompt_file(GSLOTH_CODE_PROMPT, project_dir)


def build_system_prompt(*parts: str) -> str:
    return "\n".join(part for part in parts if part)


def wrap_content(
    content: str,
    wrap_block_prefix: str = "block",
    prefix: str = "content",
    always_wrap: bool = False,
) -> str:
    """Fence ``content`` in a tag with a random suffix so the model can't be
    tricked into treating embedded text as a closing tag.

    Empty content is returned unchanged unless ``always_wrap`` is set.
    """
    if not (content or always_wrap):
        return content
    block = f"{wrap_block_prefix}-{str(uuid4())[:7]}"
    return f"\nProvided {prefix} follows within {block} block\n<{block}>\n{content}\n</{block}>\n"


def read_file_from_project_dir(file_name: str, project_dir: Path | None = None) -> str:
    path = project_root(project_dir) / file_name
    display(f"Reading file {file_name}...")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise GslothError(f"Error reading file at: {path} ({e})") from e


def read_multiple_files(file_names: Iterable[str], project_dir: Path | None = None) -> str:
    """Read each file and wrap it in its own ``file`` block."""
    return "\n\n".join(
        wrap_content(read_file_from_project_dir(name, project_dir), "file", f"file {name}", True)
        for name in file_names
    )
