"""Anthropic Claude adapter for gsloth."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Any

from anthropic import APIError, AsyncAnthropic, RateLimitError

from gsloth.llm.base import ChatModel, split_system, to_role_dicts
from gsloth.llm.models import LLMConfig, LLMError, LLMResponse, Message, TokenUsage

_DEFAULT_MAX_TOKENS = 4096


class ClaudeProvider(ChatModel):
    """Claude adapter using the Anthropic async SDK."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncAnthropic(
            api_key=config.api_key,  # falls back to ANTHROPIC_API_KEY env var
            max_retries=2,
        )

    def _request(self, messages: Sequence[Message]) -> dict[str, Any]:
        system, turns = split_system(messages)
        request: dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens or _DEFAULT_MAX_TOKENS,
            "messages": to_role_dicts(turns),
        }
        if system:
            request["system"] = system
        if self.config.temperature is not None:
            request["temperature"] = self.config.temperature
        return request

    async def generate(self, messages: Sequence[Message]) -> LLMResponse:
        try:
            message = await self._client.messages.create(**self._request(messages))
            text = "".join(
                block.text for block in message.content if getattr(block, "type", "") == "text"
            )
            return LLMResponse(
                content=text,
                usage=TokenUsage(
                    input_tokens=message.usage.input_tokens,
                    output_tokens=message.usage.output_tokens,
                ),
                model=message.model,
            )
        except APIError as e:
            raise LLMError(
                "claude", "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e

    async def generate_stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        try:
            async with self._client.messages.stream(**self._request(messages)) as stream:
                async for text in stream.text_stream:
                    yield text
        except APIError as e:
            raise LLMError(
                "claude", "generate_stream", e, retryable=isinstance(e, RateLimitError)
            ) from e
