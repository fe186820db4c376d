"""Tests for the LLM subsystem: models and adapters (SDKs mocked)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import httpx
import pytest
from anthropic import APIError as AnthropicAPIError
from anthropic import RateLimitError as AnthropicRateLimitError
from openai import APIError as OpenAIAPIError
from pydantic import ValidationError

from gsloth.llm.base import split_system
from gsloth.llm.claude import ClaudeProvider
from gsloth.llm.fake import FakeChatModel
from gsloth.llm.gemini import GeminiProvider
from gsloth.llm.models import LLMConfig, LLMError, LLMResponse, Message, TokenUsage
from gsloth.llm.ollama import OllamaProvider
from gsloth.llm.openai_adapter import OpenAIProvider

CONVERSATION = [
    Message(role="system", content="be brief"),
    Message(role="user", content="hi"),
    Message(role="assistant", content="hello"),
    Message(role="user", content="again"),
]


# ---------------------------------------------------------------------------
# Model smoke tests
# ---------------------------------------------------------------------------


class TestLLMModels:
    def test_message_is_frozen(self):
        message = Message(role="user", content="hi")
        with pytest.raises(ValidationError):
            message.content = "changed"

    def test_message_role_checked(self):
        with pytest.raises(ValidationError):
            Message(role="tool", content="x")

    def test_llm_config_defaults(self):
        cfg = LLMConfig(provider="anthropic", model="claude-3")
        assert cfg.max_tokens is None
        assert cfg.temperature is None
        assert cfg.api_key is None
        assert cfg.vertexai is False

    def test_llm_response_default_usage(self):
        resp = LLMResponse(content="hello", model="m")
        assert resp.usage == TokenUsage(input_tokens=0, output_tokens=0)

    def test_llm_error_context(self):
        cause = RuntimeError("boom")
        err = LLMError("openai", "generate", cause, retryable=True)
        assert str(err) == "openai generate failed: boom"
        assert err.retryable
        assert err.__cause__ is cause

    def test_split_system(self):
        system, turns = split_system(CONVERSATION)
        assert system == "be brief"
        assert [m.role for m in turns] == ["user", "assistant", "user"]


# ---------------------------------------------------------------------------
# ClaudeProvider
# ---------------------------------------------------------------------------


class TestClaudeProvider:
    @pytest.mark.asyncio
    async def test_generate(self):
        provider = ClaudeProvider(LLMConfig(provider="anthropic", model="claude", api_key="k"))
        message = MagicMock()
        message.content = [SimpleNamespace(type="text", text="Hi "), SimpleNamespace(type="text", text="there")]
        message.usage = SimpleNamespace(input_tokens=3, output_tokens=5)
        message.model = "claude"
        create = AsyncMock(return_value=message)

        with patch.object(provider._client.messages, "create", create):
            result = await provider.generate(CONVERSATION)

        assert result.content == "Hi there"
        assert result.usage.output_tokens == 5
        kwargs = create.call_args.kwargs
        assert kwargs["system"] == "be brief"
        assert kwargs["max_tokens"] == 4096
        assert "temperature" not in kwargs
        assert [m["role"] for m in kwargs["messages"]] == ["user", "assistant", "user"]

    @pytest.mark.asyncio
    async def test_wraps_api_error(self):
        provider = ClaudeProvider(LLMConfig(provider="anthropic", model="claude", api_key="k"))
        error = AnthropicAPIError(message="bad", request=Mock(), body=None)

        with patch.object(provider._client.messages, "create", side_effect=error):
            with pytest.raises(LLMError) as exc_info:
                await provider.generate(CONVERSATION)

        assert exc_info.value.provider == "claude"
        assert exc_info.value.operation == "generate"
        assert not exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_rate_limit_retryable(self):
        provider = ClaudeProvider(LLMConfig(provider="anthropic", model="claude", api_key="k"))
        error = AnthropicRateLimitError(message="slow down", response=Mock(), body=None)

        with patch.object(provider._client.messages, "create", side_effect=error):
            with pytest.raises(LLMError) as exc_info:
                await provider.generate(CONVERSATION)

        assert exc_info.value.retryable


# ---------------------------------------------------------------------------
# OpenAIProvider
# ---------------------------------------------------------------------------


def _completion(text):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(prompt_tokens=7, completion_tokens=9),
        model="gpt-4o",
    )


async def _chunks(*texts):
    yield SimpleNamespace(choices=[])
    for text in texts:
        yield SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text))])


class TestOpenAIProvider:
    @pytest.mark.asyncio
    async def test_generate_sends_whole_conversation(self):
        provider = OpenAIProvider(LLMConfig(provider="openai", model="gpt-4o", api_key="k"))
        create = AsyncMock(return_value=_completion("answer"))

        with patch.object(provider._client.chat.completions, "create", create):
            result = await provider.generate(CONVERSATION)

        assert result.content == "answer"
        assert result.usage.input_tokens == 7
        kwargs = create.call_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "be brief"}
        assert len(kwargs["messages"]) == 4
        assert "max_tokens" not in kwargs

    @pytest.mark.asyncio
    async def test_generate_passes_limits_when_set(self):
        provider = OpenAIProvider(
            LLMConfig(provider="openai", model="gpt-4o", api_key="k", max_tokens=50, temperature=0.1)
        )
        create = AsyncMock(return_value=_completion(None))

        with patch.object(provider._client.chat.completions, "create", create):
            result = await provider.generate(CONVERSATION)

        assert result.content == ""
        assert create.call_args.kwargs["max_tokens"] == 50
        assert create.call_args.kwargs["temperature"] == 0.1

    @pytest.mark.asyncio
    async def test_stream(self):
        provider = OpenAIProvider(LLMConfig(provider="openai", model="gpt-4o", api_key="k"))
        create = AsyncMock(return_value=_chunks("Hel", None, "lo"))

        with patch.object(provider._client.chat.completions, "create", create):
            chunks = [c async for c in provider.generate_stream(CONVERSATION)]

        assert chunks == ["Hel", "lo"]
        assert create.call_args.kwargs["stream"] is True

    @pytest.mark.asyncio
    async def test_wraps_api_error_with_vendor_name(self):
        provider = OpenAIProvider(
            LLMConfig(provider="deepseek", model="d", api_key="k", base_url="https://api.deepseek.com")
        )
        error = OpenAIAPIError(message="bad", request=Mock(), body=None)

        with patch.object(provider._client.chat.completions, "create", side_effect=error):
            with pytest.raises(LLMError) as exc_info:
                await provider.generate(CONVERSATION)

        assert exc_info.value.provider == "deepseek"


# ---------------------------------------------------------------------------
# GeminiProvider (mocked genai)
# ---------------------------------------------------------------------------


class TestGeminiProvider:
    @pytest.mark.asyncio
    @patch("gsloth.llm.gemini.genai")
    async def test_generate(self, mock_genai):
        response = MagicMock()
        response.text = "Hello from Gemini"
        response.usage_metadata = SimpleNamespace(prompt_token_count=15, candidates_token_count=42)
        client = mock_genai.Client.return_value
        client.aio.models.generate_content = AsyncMock(return_value=response)

        provider = GeminiProvider(LLMConfig(provider="gemini", model="gemini-2.5-pro", api_key="k"))
        result = await provider.generate(CONVERSATION)

        assert result.content == "Hello from Gemini"
        assert result.usage.input_tokens == 15
        assert result.usage.output_tokens == 42
        kwargs = client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-pro"
        assert kwargs["config"].system_instruction == "be brief"
        assert [c.role for c in kwargs["contents"]] == ["user", "model", "user"]

    @pytest.mark.asyncio
    @patch("gsloth.llm.gemini.genai")
    async def test_stream(self, mock_genai):
        async def stream():
            for text in ["a", "", "b"]:
                yield SimpleNamespace(text=text)

        client = mock_genai.Client.return_value
        client.aio.models.generate_content_stream = AsyncMock(return_value=stream())

        provider = GeminiProvider(LLMConfig(provider="gemini", model="g", api_key="k"))
        chunks = [c async for c in provider.generate_stream(CONVERSATION)]

        assert chunks == ["a", "b"]

    @patch("gsloth.llm.gemini.genai")
    def test_vertex_client(self, mock_genai):
        GeminiProvider(
            LLMConfig(provider="vertexai", model="g", vertexai=True, project="p", location="l")
        )
        mock_genai.Client.assert_called_once_with(vertexai=True, project="p", location="l")


# ---------------------------------------------------------------------------
# OllamaProvider (mocked httpx)
# ---------------------------------------------------------------------------


class TestOllamaProvider:
    @pytest.mark.asyncio
    async def test_generate(self):
        provider = OllamaProvider(LLMConfig(provider="ollama", model="llama3"))

        mock_response = MagicMock()
        mock_response.json.return_value = {
            "message": {"content": "Hello from Ollama"},
            "prompt_eval_count": 10,
            "eval_count": 25,
        }
        mock_response.raise_for_status = MagicMock()

        mock_client = AsyncMock()
        mock_client.post.return_value = mock_response
        mock_client.__aenter__ = AsyncMock(return_value=mock_client)
        mock_client.__aexit__ = AsyncMock(return_value=False)

        with patch("gsloth.llm.ollama.httpx.AsyncClient", return_value=mock_client):
            result = await provider.generate(CONVERSATION)

        assert result.content == "Hello from Ollama"
        assert result.usage.input_tokens == 10
        payload = mock_client.post.call_args.kwargs["json"]
        assert payload["stream"] is False
        assert len(payload["messages"]) == 4

    @pytest.mark.asyncio
    async def test_stream(self):
        def handler(request):
            assert request.url.path == "/api/chat"
            return httpx.Response(
                200,
                text='{"message": {"content": "Hel"}}\n\n{"message": {"content": "lo"}}\n',
            )

        provider = OllamaProvider(
            LLMConfig(provider="ollama", model="llama3"), transport=httpx.MockTransport(handler)
        )
        chunks = [c async for c in provider.generate_stream(CONVERSATION)]
        assert chunks == ["Hel", "lo"]

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self):
        provider = OllamaProvider(
            LLMConfig(provider="ollama", model="llama3"),
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )
        with pytest.raises(LLMError, match="ollama generate failed"):
            await provider.generate(CONVERSATION)

    def test_rejects_bad_scheme(self):
        with pytest.raises(ValueError, match="http"):
            OllamaProvider(LLMConfig(provider="ollama", model="m", base_url="file:///etc"))


# ---------------------------------------------------------------------------
# FakeChatModel
# ---------------------------------------------------------------------------


class TestFakeChatModel:
    @pytest.mark.asyncio
    async def test_cycles_responses(self):
        fake = FakeChatModel(["one", "two"])
        replies = [(await fake.generate(CONVERSATION)).content for _ in range(3)]
        assert replies == ["one", "two", "one"]
        assert len(fake.calls) == 3

    @pytest.mark.asyncio
    async def test_stream_reassembles(self):
        fake = FakeChatModel(["First LLM message"])
        chunks = [c async for c in fake.generate_stream(CONVERSATION)]
        assert len(chunks) > 1
        assert "".join(chunks) == "First LLM message"

    def test_needs_responses(self):
        with pytest.raises(ValueError):
            FakeChatModel([])
