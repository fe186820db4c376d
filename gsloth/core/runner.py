"""Runs chat-model turns against thread memory and reports progress."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from typing import Any, Literal

from gsloth.config.models import GthConfig
from gsloth.console import (
    ProgressIndicator,
    display,
    display_debug,
    display_error,
    display_info,
    display_success,
    display_warning,
    stream,
)
from gsloth.core.memory import MemorySaver, RunConfig
from gsloth.llm.models import Message

logger = logging.getLogger(__name__)

StatusLevel = Literal["info", "warning", "error", "success", "debug", "display", "stream"]
StatusCallback = Callable[[StatusLevel, str], None]

_STATUS_HANDLERS: dict[str, Callable[[str], None]] = {
    "info": display_info,
    "warning": display_warning,
    "error": display_error,
    "success": display_success,
    "debug": display_debug,
    "display": display,
    "stream": stream,
}


def default_status_callback(level: StatusLevel, message: str) -> None:
    _STATUS_HANDLERS.get(level, display)(message)


def normalize_content(content: Any) -> str:
    """Coerce a model reply into text.

    Lists of content parts are joined; dict parts contribute their ``text``.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and "text" in part:
                parts.append(str(part["text"]))
            else:
                parts.append(normalize_content(part))
        return "".join(parts)
    if isinstance(content, dict):
        return json.dumps(content)
    return "" if content is None else str(content)


class AgentRunner:
    """Sends conversation turns to the configured model.

    Call ``init`` once, ``process_messages`` per turn, and ``cleanup`` when
    done. History for each thread lives in the checkpointer, so a turn only
    carries the new messages.
    """

    def __init__(self, status_update: StatusCallback = default_status_callback) -> None:
        self.status_update = status_update
        self.verbose = False
        self.config: GthConfig | None = None
        self.memory: MemorySaver | None = None
        self.run_config: RunConfig | None = None

    def init(
        self,
        command: str | None,
        config: GthConfig,
        memory: MemorySaver | None = None,
        run_config: RunConfig | None = None,
    ) -> None:
        self.config = config.for_command(command) if command else config
        self.memory = memory or MemorySaver()
        self.run_config = run_config or RunConfig()
        self.verbose = self.verbose or self.config.llm.verbose
        logger.debug(
            "runner ready: command=%s model=%s filesystem=%s thread=%s",
            command,
            self.config.model_label,
            self.config.filesystem,
            self.run_config.thread_id,
        )

    async def process_messages(
        self, messages: Sequence[Message], run_config: RunConfig | None = None
    ) -> str:
        """Run one turn and return the assistant's reply text."""
        if self.config is None or self.memory is None:
            raise RuntimeError("AgentRunner not initialized. Call init() first.")
        run_config = run_config or self.run_config or RunConfig()
        history = self.memory.get(run_config.thread_id) + list(messages)
        llm = self.config.llm
        if self.verbose:
            for message in messages:
                logger.debug("-> %s: %s", message.role, message.content)

        if self.config.stream_output:
            chunks: list[str] = []
            async for chunk in llm.generate_stream(history):
                text = normalize_content(chunk)
                chunks.append(text)
                self.status_update("stream", text)
            self.status_update("stream", "\n")
            reply = "".join(chunks)
        else:
            async with ProgressIndicator("Thinking"):
                response = await llm.generate(history)
            reply = normalize_content(response.content)
            self.status_update("display", reply)

        if self.verbose:
            logger.debug("<- assistant: %s", reply)
        self.memory.put(run_config.thread_id, [*messages, Message(role="assistant", content=reply)])
        return reply

    async def cleanup(self) -> None:
        self.config = None
        self.memory = None
        self.run_config = None


async def invoke(
    command: str | None,
    messages: Sequence[Message],
    config: GthConfig,
    run_config: RunConfig | None = None,
    memory: MemorySaver | None = None,
) -> str:
    """Run a single turn on a fresh runner. Model errors propagate unchanged."""
    runner = AgentRunner()
    runner.init(command, config, memory, run_config)
    try:
        return await runner.process_messages(messages, run_config)
    finally:
        await runner.cleanup()
