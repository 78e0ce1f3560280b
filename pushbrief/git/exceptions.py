"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NotAGitRepositoryError: Raised when the path is not inside a work tree
- CommitLogParseError: Raised when a log line cannot be parsed
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NotAGitRepositoryError(GitError):
    """Raised when the given path is not a git repository."""

    pass


class CommitLogParseError(GitError):
    """Raised when a commit log line has the wrong number of fields."""

    pass
