"""Data models for repository state.

Contains:
- ChangedFileEntry: One line of porcelain status output
- FileDiff: The patch for a single file
- Contributor: An author and their commit count
- RepositoryInfo: Remote, commit count, contributors and branch
- CommitRecord: One parsed commit log line
"""

from dataclasses import dataclass, field


UNTRACKED_STATUS = "??"
DEFAULT_DIFF_STATUS = "Modified"


@dataclass(frozen=True)
class ChangedFileEntry:
    """A changed file as reported by ``git status --porcelain``."""

    path: str
    status_code: str  # Raw two-character XY token, e.g. " M", "A ", "??"
    status_label: str

    @property
    def is_untracked(self) -> bool:
        return self.status_code == UNTRACKED_STATUS

    @property
    def target_path(self) -> str:
        """Path to pass to git, the destination side of a rename."""
        if " -> " in self.path:
            return self.path.split(" -> ", 1)[1]
        return self.path


@dataclass(frozen=True)
class FileDiff:
    """Patch text for one file."""

    path: str
    patch: str
    status_label: str = DEFAULT_DIFF_STATUS
    # Empty when the diff was split out of a combined diff
    status_code: str = ""


@dataclass(frozen=True)
class Contributor:
    name: str
    commits: int


@dataclass(frozen=True)
class RepositoryInfo:
    remote_url: str
    total_commits: int
    current_branch: str
    contributors: list[Contributor] = field(default_factory=list)


@dataclass(frozen=True)
class CommitRecord:
    hash: str
    author: str
    email: str
    date: str  # YYYY-MM-DD HH:MM:SS, local time
    message: str

    @property
    def short_hash(self) -> str:
        return self.hash[:8]
