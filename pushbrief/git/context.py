"""Git context bundle builder.

Contains:
- build_context_bundle: Build the context bundle sent to the LLM
- format_file_changes: Group changed files into a human-readable summary
"""

from pushbrief.git.exceptions import GitError
from pushbrief.git.models import ChangedFileEntry, FileDiff
from pushbrief.git.repository import GitRepository
from pushbrief.git.status import is_staged_entry


def build_context_bundle(
    repo: GitRepository,
    staged: bool = True,
    max_chars: int = 50000,
) -> str:
    """Build the complete context bundle for the LLM.

    Args:
        repo: The repository to describe.
        staged: Describe staged changes instead of the working tree.
        max_chars: Maximum characters for the diff section.

    Returns:
        A formatted string containing all git context sections.

    Raises:
        GitError: If status or branch cannot be read.
    """
    branch = repo.get_current_branch()
    entries = repo.get_changed_files()
    if staged:
        # Avoid confusing the LLM with unstaged/untracked files
        entries = [e for e in entries if is_staged_entry(e)]

    try:
        last_commits = [c.message for c in repo.get_latest_commits(5)]
    except GitError:
        # No commits yet in the repo
        last_commits = []

    diffs = repo.get_diffs(staged=staged, entries=entries)

    commits_formatted = "\n".join(f"- {commit}" for commit in last_commits) if last_commits else "- (no commits yet)"

    return f"""[BRANCH]
{branch}

[FILE_CHANGES]
{format_file_changes(entries)}

[LAST_5_COMMITS]
{commits_formatted}

[DIFF]
{_join_diffs(diffs, max_chars)}"""


def _join_diffs(diffs: list[FileDiff], max_chars: int) -> str:
    diff = "\n".join(d.patch for d in diffs)
    if not diff:
        return "(no diff)"
    if len(diff) > max_chars:
        diff = diff[:max_chars] + "\n...[truncated]\n"
    return diff


def format_file_changes(entries: list[ChangedFileEntry]) -> str:
    """Group changed files into a human-readable summary.

    This helps the LLM understand which files are NEW (didn't exist before)
    versus MODIFIED (already existed and are being changed).

    Args:
        entries: Changed files from the status reader.

    Returns:
        Human-readable summary of file changes.
    """
    new_files = []
    modified_files = []
    deleted_files = []
    renamed_files = []
    other_files = []

    for entry in entries:
        code = entry.status_code.strip()

        # Handle renames: "R  old -> new"
        if " -> " in entry.path:
            renamed_files.append(entry.path)
        elif code == "??" or code.startswith("A"):
            new_files.append(entry.path)
        elif code.startswith("D"):
            deleted_files.append(entry.path)
        elif "M" in code:
            modified_files.append(entry.path)
        else:
            other_files.append(f"{entry.path} ({entry.status_label})")

    lines = []
    if new_files:
        lines.append("New files (did not exist before this commit):")
        lines.extend(f"  + {f}" for f in new_files)
    if modified_files:
        lines.append("Modified files (already existed, now changed):")
        lines.extend(f"  ~ {f}" for f in modified_files)
    if deleted_files:
        lines.append("Deleted files:")
        lines.extend(f"  - {f}" for f in deleted_files)
    if renamed_files:
        lines.append("Renamed files:")
        lines.extend(f"  > {f}" for f in renamed_files)
    if other_files:
        lines.append("Other changes:")
        lines.extend(f"  * {f}" for f in other_files)

    return "\n".join(lines) if lines else "(no files)"
