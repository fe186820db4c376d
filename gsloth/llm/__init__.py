"""Chat-model abstraction layer."""

from gsloth.llm.base import ChatModel
from gsloth.llm.claude import ClaudeProvider
from gsloth.llm.fake import FakeChatModel
from gsloth.llm.gemini import GeminiProvider
from gsloth.llm.models import LLMConfig, LLMError, LLMResponse, Message, TokenUsage
from gsloth.llm.ollama import OllamaProvider
from gsloth.llm.openai_adapter import OpenAIProvider

__all__ = [
    "ChatModel",
    "ClaudeProvider",
    "FakeChatModel",
    "GeminiProvider",
    "LLMConfig",
    "LLMError",
    "LLMResponse",
    "Message",
    "OllamaProvider",
    "OpenAIProvider",
    "TokenUsage",
]
