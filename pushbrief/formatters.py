"""Rendering of the change model for terminals, APIs and commit messages.

Every function here is stateless and never mutates the records it is given.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel, field_validator

from pushbrief.git.models import (
    ChangedFileEntry,
    CommitRecord,
    FileDiff,
    RepositoryInfo,
)


# ============================================================
# DIFF PRESENTATION
# ============================================================


class DiffLineKind(Enum):
    """How a patch line should be highlighted."""

    ADDITION = "addition"
    DELETION = "deletion"
    HUNK_HEADER = "hunk_header"
    CONTEXT = "context"
    BLANK = "blank"


def classify_diff_line(line: str) -> DiffLineKind:
    """Classify a patch line by its first character."""
    if not line:
        return DiffLineKind.BLANK
    if line.startswith("+"):
        return DiffLineKind.ADDITION
    if line.startswith("-"):
        return DiffLineKind.DELETION
    if line.startswith("@"):
        return DiffLineKind.HUNK_HEADER
    return DiffLineKind.CONTEXT


@dataclass(frozen=True)
class PatchWindow:
    """The part of a patch to display.

    Attributes:
        head: Lines shown from the start of the patch.
        tail: Lines shown from the end of the patch (empty unless truncated).
        total_lines: Number of lines in the full patch.
        omitted_lines: Lines reported as not shown (0 unless truncated).
    """

    head: list[str]
    total_lines: int
    tail: list[str] = field(default_factory=list)
    omitted_lines: int = 0

    @property
    def truncated(self) -> bool:
        return self.omitted_lines > 0

    @property
    def shown_lines(self) -> int:
        return self.total_lines - self.omitted_lines

    @property
    def marker(self) -> Optional[str]:
        if not self.truncated:
            return None
        return f"... {self.omitted_lines} lines not shown ..."

    @property
    def lines(self) -> list[str]:
        if not self.truncated:
            return list(self.head)
        return [*self.head, self.marker, *self.tail]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def truncate_patch(patch: str, max_lines: int = 100) -> PatchWindow:
    """Window a patch for display, keeping its start and end.

    If the patch has more than max_lines lines, the first max_lines // 2
    and the last max_lines // 2 lines are kept and the marker reports
    total - max_lines omitted lines.

    Args:
        patch: The full patch text.
        max_lines: Maximum number of lines to show; 0 means unlimited.

    Returns:
        The lines to display and whether truncation happened.
    """
    lines = patch.split("\n")
    total = len(lines)

    if max_lines <= 0 or total <= max_lines:
        return PatchWindow(head=lines, total_lines=total)

    half = max_lines // 2
    return PatchWindow(
        head=lines[:half],
        tail=lines[total - half:] if half else [],
        total_lines=total,
        omitted_lines=total - max_lines,
    )


# ============================================================
# MACHINE (API) OUTPUT
# ============================================================


def changes_to_api(
    entries: Sequence[ChangedFileEntry],
    diffs: Optional[Sequence[FileDiff]] = None,
) -> list[dict]:
    """Serialize changes for JSON/YAML output and LLM prompts.

    Without diffs, one record per changed file. With diffs, one record per
    diff including its patch; diffs split out of a combined diff carry no
    status code, so it is looked up from the matching status entry.

    Args:
        entries: Changed files from the status reader.
        diffs: Diffs for those files, if requested.

    Returns:
        A list of {file, status, status_code[, patch]} dictionaries.
    """
    if diffs is None:
        return [
            {
                "file": entry.path,
                "status": entry.status_label,
                "status_code": entry.status_code.strip(),
            }
            for entry in entries
        ]

    codes_by_path = {}
    for entry in entries:
        codes_by_path[entry.path] = entry.status_code
        codes_by_path.setdefault(entry.target_path, entry.status_code)

    return [
        {
            "file": diff.path,
            "status": diff.status_label,
            "status_code": (diff.status_code or codes_by_path.get(diff.path, "")).strip(),
            "patch": diff.patch,
        }
        for diff in diffs
    ]


def repository_info_to_dict(info: RepositoryInfo) -> dict:
    return {
        "remote_url": info.remote_url,
        "total_commits": info.total_commits,
        "contributors": [{"name": c.name, "commits": c.commits} for c in info.contributors],
        "current_branch": info.current_branch,
    }


def commits_to_dicts(commits: Sequence[CommitRecord]) -> list[dict]:
    return [
        {
            "hash": c.hash,
            "author": c.author,
            "email": c.email,
            "date": c.date,
            "message": c.message,
        }
        for c in commits
    ]


# ============================================================
# COMMIT MESSAGES
# ============================================================


class CommitMessageJSON(BaseModel):
    """Pydantic model for structured commit message data.

    Attributes:
        title: The commit message title (imperative mood, max 72 chars recommended).
        body_bullets: List of bullet points describing changes (2-7 items recommended).
    """

    title: str
    body_bullets: list[str]

    @field_validator("title")
    @classmethod
    def title_must_not_be_empty(cls, v: str) -> str:
        """Ensure title is not empty."""
        if not v or not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @field_validator("body_bullets")
    @classmethod
    def bullets_must_not_be_empty(cls, v: list[str]) -> list[str]:
        """Ensure body_bullets list is not empty and items are not empty."""
        if not v:
            raise ValueError("body_bullets cannot be empty")
        cleaned = [bullet.strip() for bullet in v if bullet and bullet.strip()]
        if not cleaned:
            raise ValueError("body_bullets must contain at least one non-empty item")
        return cleaned


def sanitize_title(title: str, max_length: int = 72) -> str:
    """Sanitize and truncate the commit title to max_length characters.

    Args:
        title: The raw title string.
        max_length: Maximum allowed length (default 72 for git best practices).

    Returns:
        A sanitized single-line title, truncated if necessary.
    """
    # Strip whitespace and take only the first line
    title = title.strip().split("\n")[0].strip()

    if len(title) > max_length:
        title = title[: max_length - 3].rstrip() + "..."

    return title


def render_commit_message(data: CommitMessageJSON, issue_key: Optional[str] = None) -> str:
    """Render a CommitMessageJSON into a formatted commit message string.

    Args:
        data: The structured commit message data.
        issue_key: Optional Jira issue key to prefix the title with.

    Returns:
        A formatted commit message string with title, blank line, and bullet points.

    Example output:
        PROJ-12: Add user authentication feature

        - Implement login and logout endpoints
        - Add session management middleware
    """
    if issue_key:
        title = sanitize_title(f"{issue_key}: {data.title}")
    else:
        title = sanitize_title(data.title)

    bullets = "\n".join(f"- {bullet.strip()}" for bullet in data.body_bullets)

    return f"{title}\n\n{bullets}"
