"""Pydantic models for gsloth configuration."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gsloth.llm.base import ChatModel

Filesystem = Literal["all", "read", "none"] | list[str]
CommandName = Literal["review", "pr", "ask", "chat", "code"]


class _ConfigModel(BaseModel):
    """Accepts camelCase keys from config files as well as field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CommandConfig(_ConfigModel):
    """Per-command overrides; unset fields fall back to the top-level config."""

    content_provider: str | None = None
    requirements_provider: str | None = None
    filesystem: Filesystem | None = None


class CommandsConfig(_ConfigModel):
    review: CommandConfig = Field(default_factory=CommandConfig)
    pr: CommandConfig = Field(default_factory=CommandConfig)
    ask: CommandConfig = Field(default_factory=CommandConfig)
    chat: CommandConfig = Field(default_factory=CommandConfig)
    code: CommandConfig = Field(default_factory=CommandConfig)


COMMAND_DEFAULTS: dict[str, CommandConfig] = {
    "pr": CommandConfig(content_provider="github", requirements_provider="github"),
    "code": CommandConfig(filesystem="all"),
}


class GthConfig(_ConfigModel):
    """Fully resolved configuration. Frozen once loaded."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        arbitrary_types_allowed=True,
        frozen=True,
    )

    llm: ChatModel
    content_provider: str = "file"
    requirements_provider: str = "file"
    project_guidelines: str = ".gsloth.guidelines.md"
    project_review_instructions: str = ".gsloth.review.md"
    filesystem: Filesystem = "read"
    stream_output: bool = True
    write_output_to_file: bool | str = True
    use_colour: bool = True
    debug_log: bool = False
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    requirements_provider_config: dict[str, dict[str, Any]] = Field(default_factory=dict)
    content_provider_config: dict[str, dict[str, Any]] = Field(default_factory=dict)
    model_display_name: str | None = None

    @property
    def model_label(self) -> str:
        """Model name for display; falls back to the handle's own name."""
        return self.model_display_name or self.llm.model_name

    def command_config(self, command: str) -> CommandConfig:
        """Built-in command defaults overlaid with what the user configured."""
        default = COMMAND_DEFAULTS.get(command, CommandConfig())
        user = getattr(self.commands, command, None)
        if user is None:
            return default
        return default.model_copy(update=user.model_dump(exclude_none=True))

    def content_provider_for(self, command: str) -> str:
        return self.command_config(command).content_provider or self.content_provider

    def requirements_provider_for(self, command: str) -> str:
        return self.command_config(command).requirements_provider or self.requirements_provider

    def for_command(self, command: str) -> GthConfig:
        """Copy with the command's ``filesystem`` override applied."""
        override = self.command_config(command).filesystem
        if override is None:
            return self
        return self.model_copy(update={"filesystem": override})


class CommandLineConfigOverrides(BaseModel):
    """Values from global CLI options applied on top of the config file."""

    custom_config_path: str | None = None
    verbose: bool | None = None
    write_output_to_file: bool | str | None = None
    # Skip reading piped stdin, for runners that leave an idle pipe open.
    no_pipe: bool = False
