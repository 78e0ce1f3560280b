"""Access to a local git repository.

Contains:
- GitRepository: Validates the path once, then answers status, diff,
  commit log and repository information queries
- parse_commit_log: Parse pipe-delimited ``git log`` output
- parse_shortlog: Parse ``git shortlog -sn`` output
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from pushbrief.git.diff import collect_diffs
from pushbrief.git.exceptions import (
    CommitLogParseError,
    GitError,
    NotAGitRepositoryError,
)
from pushbrief.git.models import (
    ChangedFileEntry,
    CommitRecord,
    Contributor,
    FileDiff,
    RepositoryInfo,
)
from pushbrief.git.runner import CommandResult, Runner, is_inside_work_tree, run_command
from pushbrief.git.status import parse_status_output


COMMIT_LOG_FORMAT = "%H|%an|%ae|%at|%s"
COMMIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_SHORTLOG_RE = re.compile(r"^\s*(\d+)\s+(.+)$")


def parse_commit_log(output: str) -> list[CommitRecord]:
    """Parse ``git log --pretty=format:%H|%an|%ae|%at|%s`` output.

    The subject is the last field and may itself contain '|'.

    Args:
        output: Raw log output.

    Returns:
        Commits in log order.

    Raises:
        CommitLogParseError: If a line has fewer than five fields or a bad timestamp.
    """
    commits = []

    for line in output.split("\n"):
        if not line:
            continue

        fields = line.split("|", 4)
        if len(fields) != 5:
            raise CommitLogParseError(
                f"Expected 5 fields in commit log line, got {len(fields)}: {line}"
            )

        commit_hash, author, email, timestamp, message = fields
        try:
            date = datetime.fromtimestamp(int(timestamp)).strftime(COMMIT_DATE_FORMAT)
        except ValueError:
            raise CommitLogParseError(f"Invalid commit timestamp '{timestamp}' in line: {line}")

        commits.append(
            CommitRecord(
                hash=commit_hash,
                author=author,
                email=email,
                date=date,
                message=message,
            )
        )

    return commits


def parse_shortlog(output: str) -> list[Contributor]:
    """Parse ``git shortlog -sn`` output into contributors.

    Lines that do not look like "<count> <name>" are skipped.
    """
    contributors = []
    for line in output.split("\n"):
        match = _SHORTLOG_RE.match(line)
        if match:
            contributors.append(
                Contributor(name=match.group(2).strip(), commits=int(match.group(1)))
            )
    return contributors


class GitRepository:
    """A git working tree at a fixed path.

    Construction fails with NotAGitRepositoryError before any other git
    command runs if the path is not inside a work tree.
    """

    def __init__(self, repo_path: Union[str, Path], runner: Runner = run_command):
        self.repo_path = Path(repo_path)
        self._runner = runner

        if not is_inside_work_tree(self.repo_path, runner):
            raise NotAGitRepositoryError(
                f"The specified path '{self.repo_path}' is not a git repository."
            )

    def run(self, args: list[str]) -> CommandResult:
        """Run a git command in the repository without raising on failure."""
        return self._runner(args, self.repo_path)

    def _git(self, args: list[str]) -> str:
        """Run git and return stdout with trailing newlines removed.

        Raises:
            GitError: If the command fails.
        """
        result = self._runner(args, self.repo_path)
        if not result.success:
            raise GitError(
                f"Git command failed: git {' '.join(args)}\n{result.stderr.strip()}"
            )
        return result.stdout.rstrip("\n")

    def get_current_branch(self) -> str:
        return self._git(["rev-parse", "--abbrev-ref", "HEAD"]).strip()

    def get_latest_commits(self, count: int = 5) -> list[CommitRecord]:
        """Get the latest commits.

        Args:
            count: Number of commits to retrieve.

        Returns:
            Parsed commits, newest first.

        Raises:
            GitError: If git log fails (e.g. no commits yet).
            CommitLogParseError: If a line is malformed.
        """
        output = self._git(
            ["log", f"--pretty=format:{COMMIT_LOG_FORMAT}", "-n", str(count)]
        )
        return parse_commit_log(output)

    def get_remote_url(self) -> str:
        """Get the origin remote URL, or an empty string if none is set."""
        result = self._runner(["config", "--get", "remote.origin.url"], self.repo_path)
        if not result.success:
            return ""
        return result.stdout.strip()

    def get_repo_info(self) -> RepositoryInfo:
        """Get remote URL, commit count, contributors and current branch."""
        total_commits = self._git(["rev-list", "--count", "HEAD"]).strip()
        shortlog = self._git(["shortlog", "-sn", "HEAD"])

        return RepositoryInfo(
            remote_url=self.get_remote_url(),
            total_commits=int(total_commits or 0),
            current_branch=self.get_current_branch(),
            contributors=parse_shortlog(shortlog),
        )

    def get_changed_files(self) -> list[ChangedFileEntry]:
        """Get changed files from ``git status --porcelain``."""
        return parse_status_output(self._git(["status", "--porcelain"]))

    def get_diffs(
        self,
        staged: bool = False,
        entries: Optional[list[ChangedFileEntry]] = None,
    ) -> list[FileDiff]:
        """Get one FileDiff per changed file.

        Args:
            staged: Diff the index instead of the working tree.
            entries: Changed files already read from status, if any.

        Returns:
            FileDiff records, empty when nothing changed.
        """
        if entries is None:
            entries = self.get_changed_files()
        return collect_diffs(self._runner, self.repo_path, entries, staged=staged)
