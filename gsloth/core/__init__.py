"""Model invocation: thread memory, run config and the agent runner."""

from gsloth.core.memory import MemorySaver, RunConfig
from gsloth.core.runner import AgentRunner, default_status_callback, invoke, normalize_content

__all__ = [
    "AgentRunner",
    "MemorySaver",
    "RunConfig",
    "default_status_callback",
    "invoke",
    "normalize_content",
]
