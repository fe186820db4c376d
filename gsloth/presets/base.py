"""Vendor preset: starter config plus JSON-config to chat-model translation."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from gsloth.console import display_warning
from gsloth.errors import ConfigError
from gsloth.llm.base import ChatModel
from gsloth.llm.models import LLMConfig
from gsloth.llm.openai_adapter import OpenAIProvider
from gsloth.output.writer import write_file_if_not_exists


def _first(llm_config: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = llm_config.get(key)
        if value is not None:
            return value
    return None


class Preset:
    """One supported vendor.

    Subclasses set the class attributes; most only differ in the adapter,
    the base URL and where the API key comes from.
    """

    name: str = ""
    label: str = ""
    default_model: str = ""
    adapter: type[ChatModel] = OpenAIProvider
    base_url: str | None = None
    default_headers: dict[str, str] = {}
    # Environment variables consulted for the key, in order.
    env_vars: tuple[str, ...] = ()
    # When True the environment beats ``apiKey`` from the config file.
    env_first: bool = False
    key_required: bool = False
    supports_init: bool = True

    # -- init ---------------------------------------------------------------

    def starter_config(self) -> str:
        return json.dumps({"llm": {"type": self.name, "model": self.default_model}}, indent=2) + "\n"

    def init_message(self, config_file_name: str) -> str:
        names = " or ".join(self.env_vars)
        return (
            f"You need to update your {config_file_name} to add your {self.label} API key, "
            f"or define {names} environment variable."
        )

    def init(self, config_file_name: str | Path) -> None:
        """Write the starter JSON config unless the file already exists."""
        name = str(config_file_name)
        if not name.endswith(".json"):
            raise ConfigError("Only JSON config is supported.")
        write_file_if_not_exists(Path(name), self.starter_config())
        display_warning(self.init_message(name))

    # -- credentials ----------------------------------------------------------

    def key_sources(
        self, llm_config: Mapping[str, Any], environ: Mapping[str, str]
    ) -> list[tuple[str, str | None]]:
        """Ordered ``(source, value)`` pairs; the first non-empty value wins."""
        sources: list[tuple[str, str | None]] = []
        custom = llm_config.get("apiKeyEnvironmentVariable")
        if custom:
            sources.append((f"env:{custom}", environ.get(custom)))
        configured = [("config:apiKey", _first(llm_config, "apiKey", "api_key"))]
        from_env = [(f"env:{var}", environ.get(var)) for var in self.env_vars]
        sources.extend(from_env + configured if self.env_first else configured + from_env)
        return sources

    def resolve_api_key(
        self, llm_config: Mapping[str, Any], environ: Mapping[str, str] | None = None
    ) -> str | None:
        env = os.environ if environ is None else environ
        for _source, value in self.key_sources(llm_config, env):
            if value:
                return value
        return None

    # -- materialisation --------------------------------------------------

    def build_llm_config(
        self, llm_config: Mapping[str, Any], environ: Mapping[str, str] | None = None
    ) -> LLMConfig:
        api_key = self.resolve_api_key(llm_config, environ)
        if self.key_required and not api_key:
            raise ConfigError(
                f"You need to define {' or '.join(self.env_vars)} environment variable, "
                "or set apiKey in your config file."
            )
        nested = llm_config.get("configuration") or {}
        return LLMConfig(
            provider=self.name,
            model=llm_config.get("model") or self.default_model,
            api_key=api_key,
            base_url=_first(llm_config, "baseURL", "baseUrl", "base_url")
            or nested.get("baseURL")
            or self.base_url,
            default_headers=dict(self.default_headers),
            max_tokens=_first(llm_config, "maxTokens", "max_tokens"),
            temperature=llm_config.get("temperature"),
        )

    def process_json_config(self, llm_config: Mapping[str, Any]) -> ChatModel:
        """Build the chat model described by the ``llm`` section of a config file."""
        return self.adapter(self.build_llm_config(llm_config))
