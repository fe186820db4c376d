"""Tests for content and requirements providers."""

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from gsloth.config.models import GthConfig
from gsloth.providers import (
    CONTENT_PROVIDERS,
    REQUIREMENTS_PROVIDERS,
    get_content_from_provider,
    get_requirements_from_provider,
)
from gsloth.providers.file import FileProvider
from gsloth.providers.github import GitHubIssueProvider, GitHubPrDiffProvider, run_gh
from gsloth.providers.jira import JiraIssueProvider, JiraLegacyIssueProvider, format_issue
from gsloth.providers.text import TextProvider


def _process(stdout=b"", stderr=b"", returncode=0):
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.returncode = returncode
    return proc


# ---------------------------------------------------------------------------
# text / file
# ---------------------------------------------------------------------------


class TestTextProvider:
    @pytest.mark.asyncio
    async def test_passes_through(self):
        assert await TextProvider().get(None, "some text") == "some text"

    @pytest.mark.asyncio
    async def test_none(self):
        assert await TextProvider().get(None, None) is None


class TestFileProvider:
    @pytest.mark.asyncio
    async def test_reads_relative_to_project(self, project_dir):
        (project_dir / "req.md").write_text("requirements")
        assert await FileProvider().get(None, "req.md") == "requirements"

    @pytest.mark.asyncio
    async def test_no_id(self, project_dir):
        assert await FileProvider().get(None, None) is None

    @pytest.mark.asyncio
    async def test_missing_file(self, project_dir, capsys):
        assert await FileProvider().get(None, "missing.md") is None
        assert "Error reading file at" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# GitHub via gh
# ---------------------------------------------------------------------------


class TestRunGh:
    @pytest.mark.asyncio
    async def test_returns_stdout(self):
        exec_mock = AsyncMock(return_value=_process(stdout=b"diff --git a b"))
        with patch("gsloth.providers.github.asyncio.create_subprocess_exec", exec_mock):
            assert await run_gh("pr", "diff", "42") == "diff --git a b"
        assert exec_mock.call_args.args[:4] == ("gh", "pr", "diff", "42")

    @pytest.mark.asyncio
    async def test_non_zero_exit(self):
        exec_mock = AsyncMock(return_value=_process(stderr=b"not found", returncode=1))
        with patch("gsloth.providers.github.asyncio.create_subprocess_exec", exec_mock):
            with pytest.raises(RuntimeError, match="not found"):
                await run_gh("pr", "diff", "42")


class TestGitHubPrDiffProvider:
    @pytest.mark.asyncio
    async def test_diff(self):
        with patch("gsloth.providers.github.run_gh", AsyncMock(return_value="+added")) as gh:
            assert await GitHubPrDiffProvider().get(None, "42") == "+added"
        gh.assert_awaited_once_with("pr", "diff", "42")

    @pytest.mark.asyncio
    async def test_no_id_warns(self, capsys):
        assert await GitHubPrDiffProvider().get(None, None) is None
        assert "No GitHub PR number provided" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_gh_missing(self, capsys):
        exec_mock = AsyncMock(side_effect=FileNotFoundError("gh"))
        with patch("gsloth.providers.github.asyncio.create_subprocess_exec", exec_mock):
            assert await GitHubPrDiffProvider().get(None, "42") is None
        out = capsys.readouterr().out
        assert 'Failed to call "gh pr diff 42"' in out
        assert "cli.github.com" in out

    @pytest.mark.asyncio
    async def test_gh_failure(self):
        exec_mock = AsyncMock(return_value=_process(stderr=b"auth", returncode=4))
        with patch("gsloth.providers.github.asyncio.create_subprocess_exec", exec_mock):
            assert await GitHubPrDiffProvider().get(None, "42") is None

    @pytest.mark.asyncio
    async def test_empty_diff(self):
        with patch("gsloth.providers.github.run_gh", AsyncMock(return_value="  \n")):
            assert await GitHubPrDiffProvider().get(None, "42") is None


class TestGitHubIssueProvider:
    @pytest.mark.asyncio
    async def test_prefixed(self):
        with patch("gsloth.providers.github.run_gh", AsyncMock(return_value="title: Bug")) as gh:
            result = await GitHubIssueProvider().get(None, "7")
        assert result == "GitHub Issue: #7\n\ntitle: Bug"
        gh.assert_awaited_once_with("issue", "view", "7")


# ---------------------------------------------------------------------------
# Jira
# ---------------------------------------------------------------------------

ISSUE_JSON = {"fields": {"summary": "Add login", "description": "Users can log in."}}
EXPECTED_ISSUE = "Jira Issue: PROJ-1\nSummary: Add login\n\nDescription:\nUsers can log in."


def _basic(user, token):
    return "Basic " + base64.b64encode(f"{user}:{token}".encode()).decode()


class TestJiraIssueProvider:
    @pytest.mark.asyncio
    async def test_fetches_issue(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["fields"] = request.url.params["fields"]
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=ISSUE_JSON)

        provider = JiraIssueProvider(environ={}, transport=httpx.MockTransport(handler))
        result = await provider.get(
            {"username": "me@example.com", "token": "pat", "cloudId": "cloud"}, "PROJ-1"
        )

        assert result == EXPECTED_ISSUE
        assert seen["url"].startswith(
            "https://api.atlassian.com/ex/jira/cloud/rest/api/2/issue/PROJ-1"
        )
        assert seen["fields"] == "summary,description"
        assert seen["auth"] == _basic("me@example.com", "pat")

    @pytest.mark.asyncio
    async def test_environment_over_config(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers["Authorization"]
            seen["path"] = request.url.path
            return httpx.Response(200, json=ISSUE_JSON)

        environ = {"JIRA_USERNAME": "env-user", "JIRA_API_PAT_TOKEN": "env-pat", "JIRA_CLOUD_ID": "env-cloud"}
        provider = JiraIssueProvider(environ=environ, transport=httpx.MockTransport(handler))
        await provider.get({"username": "cfg", "token": "cfg", "cloudId": "cfg"}, "PROJ-1")

        assert seen["auth"] == _basic("env-user", "env-pat")
        assert seen["path"].startswith("/ex/jira/env-cloud/")

    @pytest.mark.asyncio
    async def test_missing_token_warns(self, capsys):
        provider = JiraIssueProvider(environ={})
        assert await provider.get({"username": "u", "cloudId": "c"}, "PROJ-1") is None
        assert "JIRA_API_PAT_TOKEN" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_no_id(self):
        assert await JiraIssueProvider(environ={}).get({}, None) is None

    @pytest.mark.asyncio
    async def test_http_error_reported(self, capsys):
        provider = JiraIssueProvider(
            environ={}, transport=httpx.MockTransport(lambda request: httpx.Response(404))
        )
        result = await provider.get({"username": "u", "token": "t", "cloudId": "c"}, "PROJ-1")
        assert result is None
        assert "HTTP 404" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_network_error_reported(self, capsys):
        def handler(request):
            raise httpx.ConnectError("refused")

        provider = JiraIssueProvider(environ={}, transport=httpx.MockTransport(handler))
        result = await provider.get({"username": "u", "token": "t", "cloudId": "c"}, "PROJ-1")
        assert result is None
        assert "refused" in capsys.readouterr().out


class TestJiraLegacyIssueProvider:
    @pytest.mark.asyncio
    async def test_uses_base_url(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=ISSUE_JSON)

        provider = JiraLegacyIssueProvider(
            environ={"JIRA_LEGACY_API_TOKEN": "legacy"}, transport=httpx.MockTransport(handler)
        )
        result = await provider.get(
            {"baseUrl": "https://acme.atlassian.net/rest/api/2/issue/", "username": "u"}, "PROJ-1"
        )

        assert result == EXPECTED_ISSUE
        assert seen["url"].startswith("https://acme.atlassian.net/rest/api/2/issue/PROJ-1")
        assert seen["auth"] == _basic("u", "legacy")

    @pytest.mark.asyncio
    async def test_missing_base_url(self, capsys):
        provider = JiraLegacyIssueProvider(environ={})
        assert await provider.get({"username": "u", "token": "t"}, "PROJ-1") is None
        assert "baseUrl" in capsys.readouterr().out


def test_format_issue_handles_missing_fields():
    assert format_issue("X-1", {}) == "Jira Issue: X-1\nSummary: \n\nDescription:\n"


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------


class TestRegistries:
    def test_names(self):
        assert set(REQUIREMENTS_PROVIDERS) == {
            "jira-legacy", "jira", "github", "github-issue", "text", "file"
        }
        assert set(CONTENT_PROVIDERS) == {"github", "text", "file"}
        assert REQUIREMENTS_PROVIDERS["github"] is GitHubIssueProvider
        assert CONTENT_PROVIDERS["github"] is GitHubPrDiffProvider

    @pytest.mark.asyncio
    async def test_unknown_provider(self, sample_config, capsys):
        assert await get_content_from_provider(sample_config, "nope", "1") is None
        assert "Unknown provider: nope. Continuing without it." in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_no_provider_name(self, sample_config):
        assert await get_requirements_from_provider(sample_config, None, "1") is None

    @pytest.mark.asyncio
    async def test_passes_provider_config(self, fake_llm):
        config = GthConfig(
            llm=fake_llm, requirements_provider_config={"jira": {"cloudId": "abc"}}
        )
        with patch.object(JiraIssueProvider, "get", AsyncMock(return_value="issue")) as get:
            assert await get_requirements_from_provider(config, "jira", "PROJ-1") == "issue"
        get.assert_awaited_once_with({"cloudId": "abc"}, "PROJ-1")
