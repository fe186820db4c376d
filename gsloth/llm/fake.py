"""Scripted chat model used by tests and the ``fake`` preset."""

from __future__ import annotations

import re
from collections.abc import AsyncIterator, Sequence

from gsloth.llm.base import ChatModel
from gsloth.llm.models import LLMConfig, LLMResponse, Message


class FakeChatModel(ChatModel):
    """Replies with ``responses`` in order, cycling when exhausted.

    Every conversation it receives is kept in ``calls``.
    """

    def __init__(self, responses: Sequence[str], model: str = "fake") -> None:
        super().__init__(LLMConfig(provider="fake", model=model))
        if not responses:
            raise ValueError("FakeChatModel needs at least one response")
        self.responses = list(responses)
        self.calls: list[list[Message]] = []
        self._index = 0

    def _next(self, messages: Sequence[Message]) -> str:
        self.calls.append(list(messages))
        reply = self.responses[self._index % len(self.responses)]
        self._index += 1
        return reply

    async def generate(self, messages: Sequence[Message]) -> LLMResponse:
        return LLMResponse(content=self._next(messages), model=self.config.model)

    async def generate_stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        for piece in re.split(r"(\s+)", self._next(messages)):
            if piece:
                yield piece
