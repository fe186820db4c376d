"""Interactive chat and code sessions.

A session moves IDLE -> SESSION_STARTED -> AWAITING_INPUT, then alternates
AWAITING_INPUT and PROCESSING until it reaches EXITED. ``next_state`` holds
the input rules; ``InteractiveSession`` drives the loop.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gsloth.config.models import GthConfig
from gsloth.console import console, display, display_info, format_input_prompt
from gsloth.core.memory import MemorySaver, RunConfig
from gsloth.core.runner import AgentRunner
from gsloth.errors import SessionError
from gsloth.llm.models import Message
from gsloth.output.writer import append_to_file, resolve_output_path
from gsloth.prompts import (
    build_system_prompt,
    read_backstory,
    read_chat_prompt,
    read_code_prompt,
    read_guidelines,
    read_system_prompt,
)

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "/exit"})

# Returns None on EOF or Ctrl+C.
ReadLine = Callable[[str], Awaitable[str | None]]


class SessionState(Enum):
    IDLE = "idle"
    SESSION_STARTED = "session_started"
    AWAITING_INPUT = "awaiting_input"
    PROCESSING = "processing"
    EXITED = "exited"


def is_exit_command(line: str) -> bool:
    return line.strip().lower() in EXIT_COMMANDS


def next_state(line: str | None, *, first_prompt: bool) -> SessionState:
    """State after reading ``line`` while AWAITING_INPUT.

    EOF/interrupt (None) and exit commands end the session. Blank input ends
    it only on the very first prompt; later it just prompts again.
    """
    if line is None or is_exit_command(line):
        return SessionState.EXITED
    if not line.strip():
        return SessionState.EXITED if first_prompt else SessionState.AWAITING_INPUT
    return SessionState.PROCESSING


@dataclass(frozen=True)
class SessionConfig:
    mode: str
    read_mode_prompt: Callable[[Path | None], str]
    description: str
    ready_message: str
    exit_message: str


CHAT_SESSION = SessionConfig(
    mode="chat",
    read_mode_prompt=read_chat_prompt,
    description="Start an interactive chat session with Gaunt Sloth",
    ready_message="\nGaunt Sloth is ready to chat. Type your prompt.",
    exit_message="Type 'exit' or hit Ctrl+C to exit chat\n",
)

CODE_SESSION = SessionConfig(
    mode="code",
    read_mode_prompt=read_code_prompt,
    description="Interactively write code with Gaunt Sloth",
    ready_message="\nGaunt Sloth is ready to code. Type your prompt.",
    exit_message="Type 'exit' or hit Ctrl+C to exit code session\n",
)


async def console_read_line(prompt: str) -> str | None:
    """Read a line from the terminal on a daemon thread.

    ``asyncio.run`` joins its default executor on shutdown, so a blocked
    ``input()`` there would keep Ctrl+C from ending the session.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str | None] = loop.create_future()

    def deliver(line: str | None, error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(line)

    def read() -> None:
        line, error = None, None
        try:
            line = console.input(prompt)
        except (EOFError, KeyboardInterrupt):
            pass
        except Exception as e:
            error = e
        try:
            loop.call_soon_threadsafe(deliver, line, error)
        except RuntimeError:
            # Loop already closed; nobody is waiting for this line.
            logger.debug("dropping terminal input read after shutdown")

    threading.Thread(target=read, name="gsloth-input", daemon=True).start()
    return await future


class InteractiveSession:
    """One chat/code session sharing a thread id across all its turns."""

    def __init__(
        self,
        session_config: SessionConfig,
        config: GthConfig,
        *,
        read_line: ReadLine = console_read_line,
        runner: AgentRunner | None = None,
        project_dir: Path | None = None,
    ) -> None:
        self.session_config = session_config
        self.config = config
        self.project_dir = project_dir
        self.state = SessionState.IDLE
        self.turns = 0
        self.memory = MemorySaver()
        self.run_config = RunConfig()
        self.transcript_path = resolve_output_path(config, session_config.mode, project_dir)
        self._read_line = read_line
        self._runner = runner or AgentRunner()

    @property
    def mode(self) -> str:
        return self.session_config.mode

    def system_prompt(self) -> str:
        return build_system_prompt(
            read_backstory(self.project_dir),
            read_guidelines(self.config.project_guidelines, self.project_dir),
            self.session_config.read_mode_prompt(self.project_dir),
            read_system_prompt(self.project_dir),
        )

    async def start(self, message: str | None = None) -> None:
        """Run the session until the user exits."""
        self._runner.init(self.mode, self.config, self.memory, self.run_config)
        self.state = SessionState.SESSION_STARTED
        if self.transcript_path:
            display_info(f"{self.mode} session will be logged to {self.transcript_path}\n")
        display_info(f"Model: {self.config.model_label}")
        try:
            if message and message.strip():
                if is_exit_command(message):
                    self.state = SessionState.EXITED
                else:
                    await self.process(message)
            else:
                display(self.session_config.ready_message)
                display_info(self.session_config.exit_message)
            if self.state is not SessionState.EXITED:
                await self._loop()
        except (KeyboardInterrupt, asyncio.CancelledError):
            self.state = SessionState.EXITED
            raise
        finally:
            await self._runner.cleanup()
        display("Exiting...")

    async def _loop(self) -> None:
        self.state = SessionState.AWAITING_INPUT
        while self.state is SessionState.AWAITING_INPUT:
            line = await self._read_line(format_input_prompt())
            self.state = next_state(line, first_prompt=self.turns == 0)
            if self.state is SessionState.PROCESSING:
                await self.process(line)
                display("\n")
                display_info(self.session_config.exit_message)

    async def process(self, user_input: str) -> str:
        """Send one user turn; the first turn carries the system prompt."""
        self.state = SessionState.PROCESSING
        messages: list[Message] = []
        if self.turns == 0:
            messages.append(Message(role="system", content=self.system_prompt()))
        messages.append(Message(role="user", content=user_input))

        self._log(f"## User\n\n{user_input}\n\n## Assistant\n\n")
        try:
            reply = await self._runner.process_messages(messages, self.run_config)
        except Exception as e:
            logger.debug("%s turn failed", self.mode, exc_info=True)
            raise SessionError(f"Error in {self.mode} command: {e}") from e
        self._log(f"{reply}\n\n")

        self.turns += 1
        self.state = SessionState.AWAITING_INPUT
        return reply

    def _log(self, text: str) -> None:
        if self.transcript_path:
            append_to_file(self.transcript_path, text)
