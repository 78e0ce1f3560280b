"""Jira-related exception classes.

Contains:
- JiraError: Base exception for Jira errors
- JiraAuthError: Raised on 401/403 responses
- JiraNotFoundError: Raised when an issue or project does not exist
"""


class JiraError(Exception):
    """Base exception for Jira-related errors."""

    pass


class JiraAuthError(JiraError):
    """Raised when Jira rejects the credentials."""

    pass


class JiraNotFoundError(JiraError):
    """Raised when the requested Jira resource does not exist."""

    pass
