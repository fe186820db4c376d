"""Thread-scoped conversation memory."""

from __future__ import annotations

from collections.abc import Iterable
from uuid import uuid4

from pydantic import BaseModel, Field

from gsloth.llm.models import Message


class RunConfig(BaseModel):
    """Identifies one conversation thread.

    One per one-shot command; an interactive session reuses its RunConfig
    for every turn.
    """

    thread_id: str = Field(default_factory=lambda: str(uuid4()))


class MemorySaver:
    """In-process checkpointer: message history keyed by thread id."""

    def __init__(self) -> None:
        self._threads: dict[str, list[Message]] = {}

    def get(self, thread_id: str) -> list[Message]:
        return list(self._threads.get(thread_id, ()))

    def put(self, thread_id: str, messages: Iterable[Message]) -> None:
        self._threads.setdefault(thread_id, []).extend(messages)
