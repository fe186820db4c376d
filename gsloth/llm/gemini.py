"""Google Gemini adapter for gsloth (AI Studio key or Vertex AI)."""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from gsloth.llm.base import ChatModel, split_system
from gsloth.llm.models import LLMConfig, LLMError, LLMResponse, Message, TokenUsage


def _is_retryable(error: genai_errors.APIError) -> bool:
    return error.code == 429


class GeminiProvider(ChatModel):
    """Gemini adapter using the google-genai async client."""

    def __init__(self, config: LLMConfig) -> None:
        super().__init__(config)
        if config.vertexai:
            self._client = genai.Client(
                vertexai=True, project=config.project, location=config.location
            )
        else:
            self._client = genai.Client(api_key=config.api_key)

    def _contents(self, turns: Sequence[Message]) -> list[types.Content]:
        return [
            types.Content(
                role="model" if m.role == "assistant" else "user",
                parts=[types.Part(text=m.content)],
            )
            for m in turns
        ]

    def _generation_config(self, system: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=system or None,
            max_output_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )

    async def generate(self, messages: Sequence[Message]) -> LLMResponse:
        system, turns = split_system(messages)
        try:
            response = await self._client.aio.models.generate_content(
                model=self.config.model,
                contents=self._contents(turns),
                config=self._generation_config(system),
            )
        except genai_errors.APIError as e:
            raise LLMError("gemini", "generate", e, retryable=_is_retryable(e)) from e
        usage = response.usage_metadata
        return LLMResponse(
            content=response.text or "",
            usage=TokenUsage(
                input_tokens=(usage.prompt_token_count or 0) if usage else 0,
                output_tokens=(usage.candidates_token_count or 0) if usage else 0,
            ),
            model=self.config.model,
        )

    async def generate_stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        system, turns = split_system(messages)
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self.config.model,
                contents=self._contents(turns),
                config=self._generation_config(system),
            )
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except genai_errors.APIError as e:
            raise LLMError("gemini", "generate_stream", e, retryable=_is_retryable(e)) from e
