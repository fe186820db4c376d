"""Jira issue providers (Atlassian cloud REST API v2)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import httpx

from gsloth.console import ProgressIndicator, display_error, display_warning
from gsloth.providers.base import ContentProvider

logger = logging.getLogger(__name__)

JIRA_CLOUD_API_ROOT = "https://api.atlassian.com/ex/jira/"
ISSUE_FIELDS = "summary,description"


def format_issue(item_id: str, data: Mapping[str, Any]) -> str:
    fields = data.get("fields") or {}
    summary = fields.get("summary") or ""
    description = fields.get("description") or ""
    return f"Jira Issue: {item_id}\nSummary: {summary}\n\nDescription:\n{description}"


class _JiraBase(ContentProvider):
    """Shared fetch; subclasses decide URL and credentials."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._environ = environ
        self._transport = transport

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def _setting(self, config: Mapping[str, Any], env_var: str, key: str) -> str | None:
        return self.environ.get(env_var) or config.get(key)

    async def _fetch(self, url: str, username: str, token: str) -> dict[str, Any]:
        async with httpx.AsyncClient(transport=self._transport, timeout=30.0) as client:
            resp = await client.get(
                url,
                params={"fields": ISSUE_FIELDS},
                auth=(username, token),
                headers={"Accept": "application/json"},
            )
            resp.raise_for_status()
            return resp.json()

    async def _get_issue(self, item_id: str, url: str, username: str, token: str) -> str | None:
        try:
            async with ProgressIndicator(f"Fetching Jira issue {item_id}"):
                data = await self._fetch(url, username, token)
        except httpx.HTTPStatusError as e:
            display_error(
                f"Failed to get Jira issue {item_id}: HTTP {e.response.status_code}"
            )
            return None
        except (httpx.HTTPError, ValueError) as e:
            display_error(f"Failed to get Jira issue {item_id}: {e}")
            return None
        return format_issue(item_id, data)


class JiraIssueProvider(_JiraBase):
    """Jira cloud with a personal access token.

    ``JIRA_USERNAME``, ``JIRA_API_PAT_TOKEN`` and ``JIRA_CLOUD_ID`` override
    ``username``, ``token`` and ``cloudId`` from the provider config.
    """

    name = "jira"

    async def get(self, config: dict[str, Any] | None, item_id: str | None) -> str | None:
        if not item_id:
            display_warning("No Jira issue ID provided")
            return None
        config = config or {}
        username = self._setting(config, "JIRA_USERNAME", "username")
        token = self._setting(config, "JIRA_API_PAT_TOKEN", "token")
        cloud_id = self._setting(config, "JIRA_CLOUD_ID", "cloudId")
        if not username:
            display_warning("Missing Jira username. Set JIRA_USERNAME or username in config.")
            return None
        if not token:
            display_warning("Missing Jira PAT token. Set JIRA_API_PAT_TOKEN or token in config.")
            return None
        if not cloud_id:
            display_warning("Missing Jira cloud ID. Set JIRA_CLOUD_ID or cloudId in config.")
            return None
        url = f"{JIRA_CLOUD_API_ROOT}{cloud_id}/rest/api/2/issue/{item_id}"
        return await self._get_issue(item_id, url, username, token)


class JiraLegacyIssueProvider(_JiraBase):
    """Jira with a legacy API token against ``baseUrl``.

    ``baseUrl`` is the issue endpoint prefix, e.g.
    ``https://company.atlassian.net/rest/api/2/issue/``.
    """

    name = "jira-legacy"

    async def get(self, config: dict[str, Any] | None, item_id: str | None) -> str | None:
        if not item_id:
            display_warning("No Jira issue ID provided")
            return None
        config = config or {}
        base_url = config.get("baseUrl")
        username = self._setting(config, "JIRA_USERNAME", "username")
        token = self._setting(config, "JIRA_LEGACY_API_TOKEN", "token")
        if not base_url:
            display_warning("Missing Jira baseUrl in requirementsProviderConfig.jira-legacy")
            return None
        if not username:
            display_warning("Missing Jira username. Set JIRA_USERNAME or username in config.")
            return None
        if not token:
            display_warning("Missing Jira token. Set JIRA_LEGACY_API_TOKEN or token in config.")
            return None
        return await self._get_issue(item_id, f"{base_url}{item_id}", username, token)
