"""Pydantic models for the parts of Jira responses pushbrief uses."""

from typing import Any, Optional

from pydantic import BaseModel


class JiraProject(BaseModel):
    key: str
    name: str


class JiraIssue(BaseModel):
    """An issue as returned by get_issue or a JQL search."""

    key: str
    summary: str
    status: str = ""
    description: Any = None
    project: Optional[JiraProject] = None
    assignee: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict) -> "JiraIssue":
        """Build an issue from a REST API issue object."""
        fields = data.get("fields") or {}
        project = fields.get("project")
        assignee = fields.get("assignee")

        return cls(
            key=data["key"],
            summary=fields.get("summary") or "",
            status=(fields.get("status") or {}).get("name", ""),
            description=fields.get("description"),
            project=JiraProject(key=project["key"], name=project.get("name", "")) if project else None,
            assignee=assignee.get("displayName") if assignee else None,
        )
