"""Abstract chat-model interface for gsloth."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from gsloth.llm.models import LLMConfig, LLMResponse, Message


class ChatModel(ABC):
    """Provider-agnostic chat model.

    Adapters receive the full conversation (system, user and assistant
    messages in order) and implement both one-shot and streaming generation.
    ``verbose`` is flipped by ``--verbose`` so adapters and the runner can
    log outbound traffic.
    """

    def __init__(self, config: LLMConfig) -> None:
        self.config = config
        self.verbose = False

    @property
    def model_name(self) -> str:
        return self.config.model

    @abstractmethod
    async def generate(self, messages: Sequence[Message]) -> LLMResponse:
        """Generate a complete response (one-shot)."""
        ...

    @abstractmethod
    def generate_stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        """Yield response text chunks as they arrive."""
        ...


def split_system(messages: Sequence[Message]) -> tuple[str, list[Message]]:
    """Separate system messages (joined) from the chat turns.

    For APIs that take the system prompt as a separate parameter.
    """
    system = "\n".join(m.content for m in messages if m.role == "system")
    return system, [m for m in messages if m.role != "system"]


def to_role_dicts(messages: Sequence[Message]) -> list[dict[str, str]]:
    return [{"role": m.role, "content": m.content} for m in messages]
