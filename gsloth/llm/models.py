"""Pydantic models for the LLM subsystem."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class LLMError(Exception):
    """Wraps provider-specific exceptions with context."""

    def __init__(
        self, provider: str, operation: str, cause: Exception, retryable: bool = False
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.retryable = retryable
        super().__init__(f"{provider} {operation} failed: {cause}")
        self.__cause__ = cause


class Message(BaseModel):
    """One conversation entry sent to or received from a chat model."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class LLMConfig(BaseModel):
    """Settings handed to a chat-model adapter by a preset."""

    provider: str
    model: str
    max_tokens: int | None = None
    temperature: float | None = None
    api_key: str | None = None
    base_url: str | None = None
    default_headers: dict[str, str] = Field(default_factory=dict)
    vertexai: bool = False
    project: str | None = None
    location: str | None = None


class TokenUsage(BaseModel):
    """Token usage stats from a single LLM call."""

    input_tokens: int = 0
    output_tokens: int = 0


class LLMResponse(BaseModel):
    """Structured response from an LLM provider."""

    content: str
    usage: TokenUsage = Field(default_factory=TokenUsage)
    model: str
