"""Terminal output helpers built on a shared rich Console."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from rich.console import Console

logger = logging.getLogger(__name__)

console = Console(soft_wrap=True, highlight=False)


def set_use_colour(enabled: bool) -> None:
    console.no_color = not enabled


def display(message: str) -> None:
    console.print(message, markup=False)


def display_info(message: str) -> None:
    console.print(message, style="dim", markup=False)


def display_success(message: str) -> None:
    console.print(message, style="green", markup=False)


def display_warning(message: str) -> None:
    logger.debug("warning: %s", message)
    console.print(message, style="yellow", markup=False)


def display_error(message: str) -> None:
    logger.debug("error: %s", message)
    console.print(message, style="red", markup=False)


def display_debug(message: str | BaseException) -> None:
    """Debug output goes to the log only."""
    if isinstance(message, BaseException):
        logger.debug("%s", message, exc_info=message)
    else:
        logger.debug("%s", message)


def stream(chunk: str) -> None:
    """Write a streamed model chunk without a trailing newline."""
    console.print(chunk, end="", markup=False, style=None)


def format_input_prompt(text: str = "  > ") -> str:
    return f"[bold magenta]{text}[/bold magenta]"


class ProgressIndicator:
    """Prints ``message`` then a dot every ``interval`` seconds until closed.

    Used as an async context manager around a single awaited call::

        async with ProgressIndicator("Thinking"):
            response = await llm.generate(messages)
    """

    def __init__(self, message: str, interval: float = 1.0) -> None:
        self.message = message
        self.interval = interval
        self._task: asyncio.Task | None = None

    async def _tick(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            console.print(".", end="", markup=False)

    async def __aenter__(self) -> ProgressIndicator:
        console.print(f"{self.message}.", end="", markup=False)
        self._task = asyncio.create_task(self._tick())
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        console.print()
