"""OpenAI adapter for gsloth.

Also serves the OpenAI-compatible vendors (DeepSeek, Groq, xAI, OpenRouter)
through ``base_url``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Any

from openai import APIError, AsyncOpenAI, RateLimitError

from gsloth.llm.base import ChatModel, to_role_dicts
from gsloth.llm.models import LLMConfig, LLMError, LLMResponse, Message, TokenUsage


class OpenAIProvider(ChatModel):
    """OpenAI adapter using the async SDK."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        self._client = AsyncOpenAI(
            api_key=config.api_key,  # falls back to OPENAI_API_KEY env var
            base_url=config.base_url,
            default_headers=config.default_headers or None,
            max_retries=2,
        )

    def _request(self, messages: Sequence[Message]) -> dict[str, Any]:
        request: dict[str, Any] = {
            "model": self.config.model,
            "messages": to_role_dicts(messages),
        }
        if self.config.max_tokens is not None:
            request["max_tokens"] = self.config.max_tokens
        if self.config.temperature is not None:
            request["temperature"] = self.config.temperature
        return request

    async def generate(self, messages: Sequence[Message]) -> LLMResponse:
        try:
            response = await self._client.chat.completions.create(**self._request(messages))
        except APIError as e:
            raise LLMError(
                self.config.provider, "generate", e, retryable=isinstance(e, RateLimitError)
            ) from e
        choice = response.choices[0]
        usage = response.usage
        return LLMResponse(
            content=choice.message.content or "",
            usage=TokenUsage(
                input_tokens=usage.prompt_tokens if usage else 0,
                output_tokens=usage.completion_tokens if usage else 0,
            ),
            model=response.model,
        )

    async def generate_stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        try:
            stream = await self._client.chat.completions.create(
                **self._request(messages), stream=True
            )
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                if delta.content:
                    yield delta.content
        except APIError as e:
            raise LLMError(
                self.config.provider,
                "generate_stream",
                e,
                retryable=isinstance(e, RateLimitError),
            ) from e
