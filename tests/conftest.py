"""Shared test fixtures for gsloth."""

import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from gsloth.config.models import GthConfig
from gsloth.llm.base import ChatModel
from gsloth.llm.fake import FakeChatModel
from gsloth.llm.models import LLMConfig, LLMResponse, TokenUsage


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Run the test from an empty project directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_llm():
    return FakeChatModel(["First LLM message"])


@pytest.fixture
def sample_config(fake_llm):
    return GthConfig(llm=fake_llm)


@pytest.fixture
def buffered_config(fake_llm):
    return GthConfig(llm=fake_llm, stream_output=False)


@pytest.fixture
def mock_chat_model():
    model = MagicMock(spec=ChatModel)
    model.config = LLMConfig(provider="anthropic", model="test-model")
    model.model_name = "test-model"
    model.verbose = False
    model.generate = AsyncMock(
        return_value=LLMResponse(
            content="Generated reply.",
            usage=TokenUsage(input_tokens=100, output_tokens=250),
            model="test-model",
        )
    )
    return model


@pytest.fixture
def fake_config_file(project_dir):
    path = project_dir / ".gsloth.config.json"
    path.write_text(json.dumps({"llm": {"type": "fake", "responses": ["First LLM message"]}}))
    return path
