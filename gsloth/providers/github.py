"""GitHub PR diffs and issues through the ``gh`` CLI.

Expects https://cli.github.com/ to be installed and authenticated.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from gsloth.console import ProgressIndicator, display_error, display_success, display_warning
from gsloth.providers.base import ContentProvider

logger = logging.getLogger(__name__)

GH_HINT = "Consider checking if gh cli (https://cli.github.com/) is installed and authenticated."


class GhCommandError(RuntimeError):
    def __init__(self, args: tuple[str, ...], returncode: int, stderr: str) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"gh {' '.join(args)} exited with {returncode}: {stderr.strip()}")


async def run_gh(*args: str) -> str:
    """Run ``gh`` with ``args`` and return its stdout."""
    logger.debug("running gh %s", " ".join(args))
    proc = await asyncio.create_subprocess_exec(
        "gh",
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        raise GhCommandError(args, proc.returncode, stderr.decode("utf-8", "replace"))
    return stdout.decode("utf-8", "replace")


async def _fetch(args: tuple[str, ...], loading: str, loaded: str) -> str | None:
    try:
        async with ProgressIndicator(loading):
            output = await run_gh(*args)
    except (OSError, GhCommandError) as e:
        display_error(str(e))
        display_error(f'Failed to call "gh {" ".join(args)}", see message above for details.')
        display_warning(GH_HINT)
        return None
    display_success(loaded)
    return output


class GitHubPrDiffProvider(ContentProvider):
    """``gh pr diff <id>``."""

    name = "github"

    async def get(self, config: dict[str, Any] | None, item_id: str | None) -> str | None:
        if not item_id:
            display_warning("No GitHub PR number provided")
            return None
        diff = await _fetch(("pr", "diff", item_id), "Loading PR diff", "Loaded PR diff.")
        if diff is not None and not diff.strip():
            display_warning(f"GitHub PR {item_id} has an empty diff")
            return None
        return diff


class GitHubIssueProvider(ContentProvider):
    """``gh issue view <id>``."""

    name = "github"

    async def get(self, config: dict[str, Any] | None, item_id: str | None) -> str | None:
        if not item_id:
            display_warning("No GitHub issue number provided")
            return None
        issue = await _fetch(
            ("issue", "view", item_id), f"Loading GitHub issue #{item_id}", "Loaded GitHub issue."
        )
        if issue is None:
            return None
        return f"GitHub Issue: #{item_id}\n\n{issue}"
