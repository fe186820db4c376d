"""Config discovery and loading.

Resolution order: ``--config`` path, then ``.gsloth.config.py``,
``.gsloth.config.json`` and ``.gsloth.config.yaml``. Each built-in name is
looked up in ``.gsloth/.gsloth-settings/`` before the project root.
"""

from __future__ import annotations

import importlib
import importlib.util
import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from gsloth.config.models import CommandLineConfigOverrides, GthConfig
from gsloth.console import display_info, display_warning, set_use_colour
from gsloth.errors import ConfigError
from gsloth.log import DEBUG_LOG_FILE, init_debug_logging
from gsloth.output.writer import write_file_if_not_exists
from gsloth.paths import (
    get_gsloth_config_read_path,
    get_gsloth_config_write_path,
    get_gsloth_file_path,
)
from gsloth.presets import AVAILABLE_DEFAULT_CONFIGS, get_preset
from gsloth.prompts import (
    GUIDELINES_TEMPLATE,
    PROJECT_GUIDELINES,
    PROJECT_REVIEW_INSTRUCTIONS,
    REVIEW_TEMPLATE,
)

logger = logging.getLogger(__name__)

USER_PROJECT_CONFIG_PY = ".gsloth.config.py"
USER_PROJECT_CONFIG_JSON = ".gsloth.config.json"
USER_PROJECT_CONFIG_YAML = ".gsloth.config.yaml"
CONFIG_FILE_NAMES = (USER_PROJECT_CONFIG_PY, USER_PROJECT_CONFIG_JSON, USER_PROJECT_CONFIG_YAML)


def find_config_file(
    overrides: CommandLineConfigOverrides, project_dir: Path | None = None
) -> Path:
    if overrides.custom_config_path:
        path = Path(overrides.custom_config_path)
        if not path.exists():
            raise ConfigError(f'Provided manual config "{path}" does not exist')
        return path
    for name in CONFIG_FILE_NAMES:
        path = get_gsloth_config_read_path(name, project_dir)
        if path.exists():
            return path
    raise ConfigError(
        f"No configuration file found. Please create one of: {', '.join(CONFIG_FILE_NAMES)} "
        "in your project directory, or run `gsloth init <vendor>`."
    )


def init_config(
    overrides: CommandLineConfigOverrides | None = None, project_dir: Path | None = None
) -> GthConfig:
    """Load, materialise and validate the project configuration."""
    overrides = overrides or CommandLineConfigOverrides()
    path = find_config_file(overrides, project_dir)
    logger.debug("loading config from %s", path)

    if path.suffix == ".py":
        raw = _load_python_config(path)
    elif path.suffix == ".json":
        raw = _process_data_config(_read_json(path), path)
    elif path.suffix in (".yaml", ".yml"):
        raw = _process_data_config(_read_yaml(path), path)
    else:
        raise ConfigError(f"Unsupported config file type: {path.name}")

    config = _merge_config(raw, overrides)
    if config.debug_log:
        init_debug_logging(get_gsloth_file_path(DEBUG_LOG_FILE, project_dir))
    set_use_colour(config.use_colour)
    return config


def _read_json(path: Path) -> Any:
    try:
        return _expand_env_vars(json.loads(path.read_text(encoding="utf-8")))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return _expand_env_vars(yaml.safe_load(f))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def _process_data_config(raw: Any, path: Path) -> dict[str, Any]:
    """Turn the ``llm`` section of a JSON/YAML config into a chat model."""
    llm = raw.get("llm") if isinstance(raw, dict) else None
    if not isinstance(llm, dict) or not llm.get("type"):
        raise ConfigError(f"{path} is not in valid format. Should at least define llm.type")
    preset = get_preset(llm["type"])
    try:
        model = preset.process_json_config(llm)
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(f"Error processing LLM config from {path}: {e}") from e
    data = {k: v for k, v in raw.items() if k not in ("modelDisplayName", "model_display_name")}
    data["llm"] = model
    data["model_display_name"] = llm.get("model") or preset.default_model
    return data


def _load_python_config(path: Path) -> dict[str, Any]:
    """Run ``configure(import_module)`` from a Python config file."""
    try:
        spec = importlib.util.spec_from_file_location("gsloth_project_config", path)
        if spec is None or spec.loader is None:
            raise ConfigError(f"Cannot import {path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        configure = getattr(module, "configure", None)
        if not callable(configure):
            raise ConfigError(f"{path} must define configure(import_module)")
        result = configure(importlib.import_module)
    except ConfigError:
        raise
    except Exception as e:
        raise ConfigError(f"Failed to read config from {path}: {e}") from e

    if isinstance(result, GthConfig):
        return dict(result)
    if not isinstance(result, dict):
        raise ConfigError(f"configure() in {path} must return a dict, got {type(result).__name__}")
    return dict(result)


def _set_key(raw: dict[str, Any], field: str, alias: str, value: Any) -> None:
    raw.pop(alias, None)
    raw[field] = value


def _merge_config(raw: dict[str, Any], overrides: CommandLineConfigOverrides) -> GthConfig:
    if raw.get("llm") is None:
        raise ConfigError("No LLM configuration found. Define llm in your config file.")
    raw = dict(raw)
    if overrides.write_output_to_file is not None:
        _set_key(raw, "write_output_to_file", "writeOutputToFile", overrides.write_output_to_file)
    try:
        config = GthConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e
    if overrides.verbose:
        config.llm.verbose = True
    return config


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


def write_project_review_preamble(project_dir: Path | None = None) -> None:
    write_file_if_not_exists(
        get_gsloth_config_write_path(PROJECT_GUIDELINES, project_dir), GUIDELINES_TEMPLATE
    )
    write_file_if_not_exists(
        get_gsloth_config_write_path(PROJECT_REVIEW_INSTRUCTIONS, project_dir), REVIEW_TEMPLATE
    )


def create_project_config(config_type: str, project_dir: Path | None = None) -> Path:
    """Scaffold guidelines, review instructions and a JSON config for a vendor."""
    if config_type not in AVAILABLE_DEFAULT_CONFIGS:
        raise ConfigError(
            f"Unknown config type: {config_type}. "
            f"Available options: {', '.join(AVAILABLE_DEFAULT_CONFIGS)}"
        )
    display_info("Setting up your project\n")
    write_project_review_preamble(project_dir)
    display_warning(f"Make sure you add as much detail as possible to your {PROJECT_GUIDELINES}.\n")

    display_info(f"Creating project config for {config_type}")
    config_path = get_gsloth_config_write_path(USER_PROJECT_CONFIG_JSON, project_dir)
    get_preset(config_type).init(config_path)
    return config_path
