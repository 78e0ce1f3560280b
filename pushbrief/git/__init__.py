"""Git access for pushbrief.

This package turns raw git output into a structured change model:
- exceptions: GitError, NotAGitRepositoryError, CommitLogParseError
- runner: CommandResult, run_command, is_inside_work_tree
- models: ChangedFileEntry, FileDiff, Contributor, RepositoryInfo, CommitRecord
- status: classify_status, parse_status_output, is_staged_entry
- diff: parse_unified_diff, collect_diffs and the diff strategies
- repository: GitRepository, parse_commit_log, parse_shortlog
- context: build_context_bundle, format_file_changes
"""

# Exceptions
from pushbrief.git.exceptions import (
    CommitLogParseError,
    GitError,
    NotAGitRepositoryError,
)

# Runner
from pushbrief.git.runner import (
    CommandResult,
    is_inside_work_tree,
    run_command,
)

# Models
from pushbrief.git.models import (
    ChangedFileEntry,
    CommitRecord,
    Contributor,
    FileDiff,
    RepositoryInfo,
)

# Status
from pushbrief.git.status import (
    STATUS_LABELS,
    classify_status,
    is_staged_entry,
    parse_status_output,
)

# Diff
from pushbrief.git.diff import (
    DIFF_STRATEGIES,
    collect_diffs,
    combined_diff_strategy,
    parse_unified_diff,
    per_file_diff_strategy,
)

# Repository
from pushbrief.git.repository import (
    GitRepository,
    parse_commit_log,
    parse_shortlog,
)

# Context bundle builder
from pushbrief.git.context import (
    build_context_bundle,
    format_file_changes,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotAGitRepositoryError",
    "CommitLogParseError",
    # Runner
    "CommandResult",
    "run_command",
    "is_inside_work_tree",
    # Models
    "ChangedFileEntry",
    "FileDiff",
    "Contributor",
    "RepositoryInfo",
    "CommitRecord",
    # Status
    "STATUS_LABELS",
    "classify_status",
    "parse_status_output",
    "is_staged_entry",
    # Diff
    "parse_unified_diff",
    "combined_diff_strategy",
    "per_file_diff_strategy",
    "DIFF_STRATEGIES",
    "collect_diffs",
    # Repository
    "GitRepository",
    "parse_commit_log",
    "parse_shortlog",
    # Context
    "build_context_bundle",
    "format_file_changes",
]
