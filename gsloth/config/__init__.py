"""Configuration models and loader."""

from gsloth.config.loader import create_project_config, init_config
from gsloth.config.models import (
    CommandConfig,
    CommandLineConfigOverrides,
    CommandsConfig,
    GthConfig,
)

__all__ = [
    "CommandConfig",
    "CommandLineConfigOverrides",
    "CommandsConfig",
    "GthConfig",
    "create_project_config",
    "init_config",
]
