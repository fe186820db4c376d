"""The supported vendors."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from gsloth.errors import ConfigError
from gsloth.llm.base import ChatModel
from gsloth.llm.claude import ClaudeProvider
from gsloth.llm.fake import FakeChatModel
from gsloth.llm.gemini import GeminiProvider
from gsloth.llm.models import LLMConfig
from gsloth.llm.ollama import DEFAULT_BASE_URL, OllamaProvider
from gsloth.presets.base import Preset


class AnthropicPreset(Preset):
    name = "anthropic"
    label = "Anthropic"
    default_model = "claude-sonnet-4-20250514"
    adapter = ClaudeProvider
    env_vars = ("ANTHROPIC_API_KEY",)


class OpenAIPreset(Preset):
    name = "openai"
    label = "OpenAI"
    default_model = "gpt-4o"
    env_vars = ("OPENAI_API_KEY",)


class DeepSeekPreset(Preset):
    name = "deepseek"
    label = "DeepSeek"
    default_model = "deepseek-reasoner"
    base_url = "https://api.deepseek.com"
    env_vars = ("DEEPSEEK_API_KEY",)
    env_first = True


class GroqPreset(Preset):
    name = "groq"
    label = "Groq"
    default_model = "deepseek-r1-distill-llama-70b"
    base_url = "https://api.groq.com/openai/v1"
    env_vars = ("GROQ_API_KEY",)


class XAIPreset(Preset):
    name = "xai"
    label = "xAI"
    default_model = "grok-4-0709"
    base_url = "https://api.x.ai/v1"
    env_vars = ("XAI_API_KEY",)


class OpenRouterPreset(Preset):
    name = "openrouter"
    label = "OpenRouter"
    default_model = "moonshotai/kimi-k2"
    base_url = "https://openrouter.ai/api/v1"
    default_headers = {
        "HTTP-Referer": "https://gaunt-sloth-assistant.github.io/",
        "X-Title": "Gaunt Sloth Assistant",
    }
    env_vars = ("OPEN_ROUTER_API_KEY", "OPENROUTER_API_KEY")
    key_required = True


class GeminiPreset(Preset):
    name = "gemini"
    label = "Gemini"
    default_model = "gemini-2.5-pro"
    adapter = GeminiProvider
    env_vars = ("GEMINI_API_KEY",)


class GoogleGenAIPreset(Preset):
    name = "google-genai"
    label = "Google AI Studio"
    default_model = "gemini-2.5-pro"
    adapter = GeminiProvider
    env_vars = ("GOOGLE_API_KEY",)


class VertexAIPreset(Preset):
    """Gemini through Vertex AI with application-default credentials."""

    name = "vertexai"
    label = "Google Vertex AI"
    default_model = "gemini-2.5-pro"
    adapter = GeminiProvider
    default_location = "us-central1"

    def init_message(self, config_file_name: str) -> str:
        return (
            "For Google VertexAI you likely to need to do `gcloud auth login` "
            "and `gcloud auth application-default login`."
        )

    def build_llm_config(
        self, llm_config: Mapping[str, Any], environ: Mapping[str, str] | None = None
    ) -> LLMConfig:
        env = os.environ if environ is None else environ
        return LLMConfig(
            provider=self.name,
            model=llm_config.get("model") or self.default_model,
            vertexai=True,
            project=llm_config.get("project") or env.get("GOOGLE_CLOUD_PROJECT"),
            location=llm_config.get("location")
            or env.get("GOOGLE_CLOUD_LOCATION")
            or self.default_location,
            max_tokens=llm_config.get("maxTokens"),
            temperature=llm_config.get("temperature"),
        )


class OllamaPreset(Preset):
    name = "ollama"
    label = "Ollama"
    default_model = "llama3"
    adapter = OllamaProvider
    base_url = DEFAULT_BASE_URL

    def init_message(self, config_file_name: str) -> str:
        return (
            f"Make sure Ollama is running at {self.base_url} and the model "
            f"from {config_file_name} is pulled (ollama pull {self.default_model})."
        )


class FakePreset(Preset):
    """Scripted replies for tests; never offered by ``init``."""

    name = "fake"
    label = "Fake"
    default_model = "fake"
    supports_init = False

    def init(self, config_file_name) -> None:
        raise ConfigError("The fake LLM is for tests only and has no starter config.")

    def process_json_config(self, llm_config: Mapping[str, Any]) -> ChatModel:
        responses = llm_config.get("responses")
        if not isinstance(responses, list) or not responses:
            raise ConfigError("Fake LLM requires 'responses' array in config")
        return FakeChatModel([str(r) for r in responses], model=llm_config.get("model") or "fake")
