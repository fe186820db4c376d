"""Session orchestration: one-shot commands and interactive sessions."""

from gsloth.session.interactive import (
    CHAT_SESSION,
    CODE_SESSION,
    InteractiveSession,
    SessionConfig,
    SessionState,
    next_state,
)
from gsloth.session.one_shot import (
    ask_question,
    review,
    run_ask_command,
    run_pr_command,
    run_review_command,
)

__all__ = [
    "CHAT_SESSION",
    "CODE_SESSION",
    "InteractiveSession",
    "SessionConfig",
    "SessionState",
    "ask_question",
    "next_state",
    "review",
    "run_ask_command",
    "run_pr_command",
    "run_review_command",
]
