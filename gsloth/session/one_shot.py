"""One-shot commands: assemble messages, invoke the model once, write the report."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from gsloth.config.models import GthConfig
from gsloth.core.runner import invoke
from gsloth.llm.models import Message
from gsloth.output.writer import ReportWriter
from gsloth.prompts import (
    build_system_prompt,
    read_backstory,
    read_guidelines,
    read_multiple_files,
    read_review_instructions,
    read_system_prompt,
)
from gsloth.providers import get_content_from_provider, get_requirements_from_provider

logger = logging.getLogger(__name__)


async def _run(
    command: str, source: str, preamble: str, content: str, config: GthConfig
) -> Path | None:
    messages = [
        Message(role="system", content=preamble),
        Message(role="user", content=content),
    ]
    logger.debug("%s: invoking model for %s", command, source)
    reply = await invoke(command, messages, config)
    return ReportWriter(config).write(source, reply)


async def ask_question(
    source: str, preamble: str, content: str, config: GthConfig
) -> Path | None:
    """Answer a question; returns the report path (None if not written)."""
    return await _run("ask", source, preamble, content, config)


async def review(
    source: str, preamble: str, diff: str, config: GthConfig, command: str = "review"
) -> Path | None:
    """Review ``diff``; returns the report path (None if not written)."""
    return await _run(command, source, preamble, diff, config)


def review_preamble(config: GthConfig, project_dir: Path | None = None) -> str:
    return build_system_prompt(
        read_backstory(project_dir),
        read_guidelines(config.project_guidelines, project_dir),
        read_review_instructions(config.project_review_instructions, project_dir),
        read_system_prompt(project_dir),
    )


def ask_preamble(config: GthConfig, project_dir: Path | None = None) -> str:
    return build_system_prompt(
        read_backstory(project_dir),
        read_guidelines(config.project_guidelines, project_dir),
        read_system_prompt(project_dir),
    )


def _join(parts: Sequence[str | None]) -> str:
    return "\n".join(part for part in parts if part)


async def run_review_command(
    config: GthConfig,
    content_id: str | None = None,
    *,
    files: Sequence[str] = (),
    requirements_id: str | None = None,
    requirements_provider: str | None = None,
    content_provider: str | None = None,
    message: str | None = None,
    stdin: str | None = None,
) -> Path | None:
    """``gsloth review``: requirements, provided content, files, stdin, message."""
    requirements = await get_requirements_from_provider(
        config, requirements_provider or config.requirements_provider_for("review"), requirements_id
    )
    provided = await get_content_from_provider(
        config, content_provider or config.content_provider_for("review"), content_id
    )
    content = _join(
        [requirements, provided, read_multiple_files(files) if files else None, stdin, message]
    )
    return await review("REVIEW", review_preamble(config), content, config, "review")


async def run_pr_command(
    config: GthConfig,
    pr_id: str,
    requirements_id: str | None = None,
    *,
    files: Sequence[str] = (),
    requirements_provider: str | None = None,
) -> Path | None:
    """``gsloth pr``: requirements, then files, then the PR diff."""
    requirements = await get_requirements_from_provider(
        config, requirements_provider or config.requirements_provider_for("pr"), requirements_id
    )
    diff = await get_content_from_provider(config, config.content_provider_for("pr"), pr_id)
    content = _join([requirements, read_multiple_files(files) if files else None, diff])
    return await review(f"PR-{pr_id}", review_preamble(config), content, config, "pr")


async def run_ask_command(
    config: GthConfig,
    message: str,
    *,
    files: Sequence[str] = (),
    stdin: str | None = None,
) -> Path | None:
    """``gsloth ask``: the question, then files, then stdin."""
    content = _join([message, read_multiple_files(files) if files else None, stdin])
    return await ask_question("ASK", ask_preamble(config), content, config)
