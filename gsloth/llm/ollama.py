"""Ollama adapter for gsloth."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any
from urllib.parse import urlparse

import httpx

from gsloth.llm.base import ChatModel, to_role_dicts
from gsloth.llm.models import LLMConfig, LLMError, LLMResponse, Message, TokenUsage

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"


def _validate_base_url(url: str) -> str:
    """Reject non-http(s) schemes and CRLF in the configured base URL."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Ollama base_url must be http(s), got {parsed.scheme}")
    if "\r" in url or "\n" in url:
        raise ValueError("CRLF injection detected in base_url")
    if parsed.hostname not in {"localhost", "127.0.0.1", "::1", "0.0.0.0"}:
        logger.warning("Ollama base_url %s is not localhost", parsed.hostname)
    return url


class OllamaProvider(ChatModel):
    """Ollama adapter using its REST API via httpx."""

    def __init__(self, config: LLMConfig, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(config)
        self._base_url = _validate_base_url((config.base_url or DEFAULT_BASE_URL).rstrip("/"))
        self._transport = transport

    def _payload(self, messages: Sequence[Message], stream: bool) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": to_role_dicts(messages),
            "stream": stream,
        }
        options = {}
        if self.config.temperature is not None:
            options["temperature"] = self.config.temperature
        if self.config.max_tokens is not None:
            options["num_predict"] = self.config.max_tokens
        if options:
            payload["options"] = options
        return payload

    async def generate(self, messages: Sequence[Message]) -> LLMResponse:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=120.0) as client:
                resp = await client.post(
                    f"{self._base_url}/api/chat", json=self._payload(messages, False)
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise LLMError("ollama", "generate", e) from e

        return LLMResponse(
            content=data.get("message", {}).get("content", ""),
            usage=TokenUsage(
                input_tokens=data.get("prompt_eval_count", 0),
                output_tokens=data.get("eval_count", 0),
            ),
            model=self.config.model,
        )

    async def generate_stream(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=120.0) as client:
                async with client.stream(
                    "POST", f"{self._base_url}/api/chat", json=self._payload(messages, True)
                ) as resp:
                    resp.raise_for_status()
                    async for line in resp.aiter_lines():
                        if not line:
                            continue
                        text = json.loads(line).get("message", {}).get("content", "")
                        if text:
                            yield text
        except httpx.HTTPError as e:
            raise LLMError("ollama", "generate_stream", e) from e
