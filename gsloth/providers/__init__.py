"""Provider registries: where review content and requirements come from."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gsloth.console import display_error
from gsloth.providers.base import ContentProvider
from gsloth.providers.file import FileProvider
from gsloth.providers.github import GitHubIssueProvider, GitHubPrDiffProvider
from gsloth.providers.jira import JiraIssueProvider, JiraLegacyIssueProvider
from gsloth.providers.text import TextProvider

if TYPE_CHECKING:
    from gsloth.config.models import GthConfig

REQUIREMENTS_PROVIDERS: dict[str, type[ContentProvider]] = {
    "jira-legacy": JiraLegacyIssueProvider,
    "jira": JiraIssueProvider,
    "github": GitHubIssueProvider,
    "github-issue": GitHubIssueProvider,
    "text": TextProvider,
    "file": FileProvider,
}

CONTENT_PROVIDERS: dict[str, type[ContentProvider]] = {
    "github": GitHubPrDiffProvider,
    "text": TextProvider,
    "file": FileProvider,
}


async def get_from_provider(
    registry: dict[str, type[ContentProvider]],
    name: str | None,
    item_id: str | None,
    provider_config: dict | None = None,
) -> str | None:
    """Look ``name`` up in ``registry`` and fetch ``item_id``.

    Unknown names are reported and skipped.
    """
    if not name:
        return None
    cls = registry.get(name)
    if cls is None:
        display_error(f"Unknown provider: {name}. Continuing without it.")
        return None
    return await cls().get(provider_config, item_id)


async def get_requirements_from_provider(
    config: GthConfig, name: str | None, item_id: str | None
) -> str | None:
    return await get_from_provider(
        REQUIREMENTS_PROVIDERS, name, item_id, config.requirements_provider_config.get(name or "")
    )


async def get_content_from_provider(
    config: GthConfig, name: str | None, item_id: str | None
) -> str | None:
    return await get_from_provider(
        CONTENT_PROVIDERS, name, item_id, config.content_provider_config.get(name or "")
    )


__all__ = [
    "CONTENT_PROVIDERS",
    "REQUIREMENTS_PROVIDERS",
    "ContentProvider",
    "FileProvider",
    "GitHubIssueProvider",
    "GitHubPrDiffProvider",
    "JiraIssueProvider",
    "JiraLegacyIssueProvider",
    "TextProvider",
    "get_content_from_provider",
    "get_from_provider",
    "get_requirements_from_provider",
]
