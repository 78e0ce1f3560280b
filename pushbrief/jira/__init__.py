"""Jira integration for pushbrief."""

from pushbrief.jira.branch import (
    issue_key_from_branch,
    normalize_branch_name,
)
from pushbrief.jira.client import JiraClient
from pushbrief.jira.exceptions import JiraAuthError, JiraError, JiraNotFoundError
from pushbrief.jira.models import JiraIssue, JiraProject

__all__ = [
    "JiraClient",
    "JiraError",
    "JiraAuthError",
    "JiraNotFoundError",
    "JiraIssue",
    "JiraProject",
    "issue_key_from_branch",
    "normalize_branch_name",
]
