"""Tests for pushbrief.jira.client module."""

import json

import httpx
import pytest

from pushbrief.config import JiraSettings
from pushbrief.jira import JiraAuthError, JiraClient, JiraError, JiraNotFoundError


SETTINGS = JiraSettings(host="https://example.atlassian.net/", username="me@example.com", password="token")

ISSUE = {
    "key": "PROJ-12",
    "fields": {
        "summary": "Export reports as CSV",
        "status": {"name": "In Progress"},
        "project": {"key": "PROJ", "name": "Project"},
        "assignee": {"displayName": "Jane Doe"},
        "description": None,
    },
}


def _client(handler):
    return JiraClient(SETTINGS, transport=httpx.MockTransport(handler))


class TestJiraClientInit:
    """Tests for JiraClient construction."""

    def test_requires_complete_settings(self):
        """Test missing credentials are rejected up front."""
        with pytest.raises(JiraError):
            JiraClient(JiraSettings(host="https://example.atlassian.net"))


class TestGetIssue:
    """Tests for JiraClient.get_issue."""

    def test_returns_issue(self):
        """Test the issue is fetched with basic auth and parsed."""
        seen = {}

        def handler(request):
            seen["request"] = request
            return httpx.Response(200, json=ISSUE)

        with _client(handler) as client:
            issue = client.get_issue("PROJ-12")

        request = seen["request"]
        assert request.url.path == "/rest/api/3/issue/PROJ-12"
        assert request.url.host == "example.atlassian.net"
        assert request.headers["Authorization"].startswith("Basic ")
        assert issue.summary == "Export reports as CSV"
        assert issue.status == "In Progress"
        assert issue.project.key == "PROJ"
        assert issue.assignee == "Jane Doe"

    def test_not_found(self):
        """Test a 404 raises JiraNotFoundError."""
        with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(JiraNotFoundError):
                client.get_issue("PROJ-999")

    @pytest.mark.parametrize("status_code", [401, 403])
    def test_auth_errors(self, status_code):
        """Test rejected credentials raise JiraAuthError."""
        with _client(lambda request: httpx.Response(status_code)) as client:
            with pytest.raises(JiraAuthError):
                client.get_issue("PROJ-12")

    def test_server_error(self):
        """Test other HTTP errors include the response text."""
        with _client(lambda request: httpx.Response(500, text="oops")) as client:
            with pytest.raises(JiraError) as exc_info:
                client.get_issue("PROJ-12")

        assert "500" in str(exc_info.value)
        assert "oops" in str(exc_info.value)

    def test_transport_error(self):
        """Test network failures become JiraError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with _client(handler) as client:
            with pytest.raises(JiraError):
                client.get_issue("PROJ-12")


class TestProjectsAndIssues:
    """Tests for get_projects and get_issues."""

    def test_get_projects(self):
        """Test projects are listed."""
        projects = [{"key": "PROJ", "name": "Project"}, {"key": "OPS", "name": "Operations"}]

        with _client(lambda request: httpx.Response(200, json=projects)) as client:
            result = client.get_projects()

        assert [p.key for p in result] == ["PROJ", "OPS"]

    def test_get_issues_active_only(self):
        """Test the JQL filters unresolved issues and orders them."""
        seen = {}

        def handler(request):
            seen["params"] = request.url.params
            seen["path"] = request.url.path
            return httpx.Response(200, json={"issues": [ISSUE]})

        with _client(handler) as client:
            issues = client.get_issues("PROJ", active_only=True)

        assert seen["path"] == "/rest/api/3/search/jql"
        assert seen["params"]["jql"] == (
            "project = PROJ AND resolution = Unresolved ORDER BY priority ASC, updated DESC"
        )
        assert seen["params"]["maxResults"] == "100"
        assert issues[0].key == "PROJ-12"

    def test_get_issues_all(self):
        """Test without active_only there is no resolution filter."""
        seen = {}

        def handler(request):
            seen["jql"] = request.url.params["jql"]
            return httpx.Response(200, json={"issues": []})

        with _client(handler) as client:
            assert client.get_issues("PROJ") == []

        assert seen["jql"] == "project = PROJ ORDER BY priority ASC, updated DESC"


class TestAddComment:
    """Tests for JiraClient.add_comment."""

    def test_posts_body(self):
        """Test the comment is posted as JSON."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "1"})

        comment = {"body": {"type": "doc", "version": 1, "content": []}}
        with _client(handler) as client:
            client.add_comment("PROJ-12", comment)

        assert seen == {"method": "POST", "path": "/rest/api/3/issue/PROJ-12/comment", "body": comment}


class TestCreateCommitMessage:
    """Tests for JiraClient.create_commit_message."""

    def test_summary_only(self):
        """Test the key and summary form the title."""
        with _client(lambda request: httpx.Response(200, json=ISSUE)) as client:
            assert client.create_commit_message("PROJ-12") == "PROJ-12: Export reports as CSV"

    def test_with_message(self):
        """Test an extra message becomes the body."""
        with _client(lambda request: httpx.Response(200, json=ISSUE)) as client:
            message = client.create_commit_message("PROJ-12", "Adds the CSV writer")

        assert message == "PROJ-12: Export reports as CSV\n\nAdds the CSV writer"

    def test_falls_back_when_issue_unreadable(self):
        """Test the key alone (or with the message) is used on errors."""
        with _client(lambda request: httpx.Response(404)) as client:
            assert client.create_commit_message("PROJ-12") == "PROJ-12"
            assert client.create_commit_message("PROJ-12", "Fix") == "PROJ-12: Fix"
