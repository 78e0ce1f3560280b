"""Jira REST client.

Contains:
- JiraClient: get issues and projects, search with JQL, post comments
"""

from typing import Optional

import httpx
from loguru import logger

from pushbrief.config import JiraSettings
from pushbrief.jira.exceptions import JiraAuthError, JiraError, JiraNotFoundError
from pushbrief.jira.models import JiraIssue, JiraProject


API_PREFIX = "/rest/api/3"
DEFAULT_TIMEOUT = 30.0
MAX_SEARCH_RESULTS = 100


class JiraClient:
    """Thin client over the Jira Cloud REST API (v3) using basic auth.

    Args:
        settings: Host, username and API token.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        settings: JiraSettings,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not settings.is_complete:
            raise JiraError("Jira host, username and password/API token are required.")

        self.settings = settings
        self._client = httpx.Client(
            base_url=settings.host.rstrip("/"),
            auth=(settings.username, settings.password),
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "JiraClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{API_PREFIX}{path}"
        logger.debug("Jira {} {}", method, url)

        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise JiraError(f"Jira request failed: {method} {url}: {e}")

        if response.status_code in (401, 403):
            raise JiraAuthError(
                f"Jira rejected the credentials (HTTP {response.status_code}) for {url}"
            )
        if response.status_code == 404:
            raise JiraNotFoundError(f"Not found in Jira: {url}")
        if response.is_error:
            raise JiraError(
                f"Jira HTTP request failed: status code {response.status_code}, "
                f"URL: {url}\nError message: {response.text}"
            )
        return response

    def get_issue(self, issue_key: str) -> JiraIssue:
        """Get an issue by key (e.g. PROJECT-123)."""
        response = self._request(
            "GET",
            f"/issue/{issue_key}",
            params={"fields": "summary,description,status,project,assignee"},
        )
        return JiraIssue.from_api(response.json())

    def get_projects(self) -> list[JiraProject]:
        response = self._request("GET", "/project")
        return [JiraProject(key=p["key"], name=p.get("name", "")) for p in response.json()]

    def get_issues(self, project_key: str, active_only: bool = False) -> list[JiraIssue]:
        """Search the issues of a project.

        Args:
            project_key: The project key.
            active_only: Only return unresolved issues.

        Returns:
            Up to 100 issues ordered by priority, then most recently updated.
        """
        jql = f"project = {project_key}"
        if active_only:
            jql += " AND resolution = Unresolved"
        jql += " ORDER BY priority ASC, updated DESC"

        response = self._request(
            "GET",
            "/search/jql",
            params={
                "jql": jql,
                "maxResults": MAX_SEARCH_RESULTS,
                "fields": "summary,status,assignee",
            },
        )
        return [JiraIssue.from_api(issue) for issue in response.json().get("issues", [])]

    def add_comment(self, issue_key: str, comment: dict) -> None:
        """Add a comment to an issue.

        Args:
            issue_key: The issue key.
            comment: Request body, {"body": <Atlassian Document Format doc>}.
        """
        self._request("POST", f"/issue/{issue_key}/comment", json=comment)

    def create_commit_message(self, issue_key: str, message: Optional[str] = None) -> str:
        """Create a commit message from an issue's summary.

        Falls back to the key (and message) alone if the issue cannot be read.

        Args:
            issue_key: The issue key.
            message: Additional text for the message body.

        Returns:
            "<KEY>: <summary>" followed by a blank line and the message, if any.
        """
        try:
            issue = self.get_issue(issue_key)
        except JiraError as e:
            logger.debug("Could not read issue {}: {}", issue_key, e)
            if message:
                return f"{issue_key}: {message}"
            return issue_key

        commit_message = f"{issue_key}: {issue.summary}"
        if message:
            commit_message += f"\n\n{message}"
        return commit_message
