"""Static registry of vendor presets."""

from gsloth.errors import ConfigError
from gsloth.presets.base import Preset
from gsloth.presets.vendors import (
    AnthropicPreset,
    DeepSeekPreset,
    FakePreset,
    GeminiPreset,
    GoogleGenAIPreset,
    GroqPreset,
    OllamaPreset,
    OpenAIPreset,
    OpenRouterPreset,
    VertexAIPreset,
    XAIPreset,
)

PRESETS: dict[str, Preset] = {
    preset.name: preset
    for preset in (
        VertexAIPreset(),
        AnthropicPreset(),
        GroqPreset(),
        DeepSeekPreset(),
        OpenAIPreset(),
        GoogleGenAIPreset(),
        XAIPreset(),
        OpenRouterPreset(),
        GeminiPreset(),
        OllamaPreset(),
        FakePreset(),
    )
}

AVAILABLE_DEFAULT_CONFIGS: tuple[str, ...] = tuple(
    name for name, preset in PRESETS.items() if preset.supports_init
)


def get_preset(name: str) -> Preset:
    preset = PRESETS.get(name)
    if preset is None:
        raise ConfigError(
            f"Unsupported LLM type: {name!r}. Supported: {', '.join(PRESETS)}"
        )
    return preset


__all__ = ["AVAILABLE_DEFAULT_CONFIGS", "PRESETS", "Preset", "get_preset"]
