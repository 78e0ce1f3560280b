"""Issue key extraction from branch names."""

import re
from typing import Optional


# Common branch naming patterns
BRANCH_ISSUE_PATTERNS = [
    re.compile(r"^([A-Z]+-\d+)"),  # PROJECT-123
    re.compile(r"^([A-Z]+)[-_](\d+)"),  # PROJECT-123 or PROJECT_123
    re.compile(r"^feature/([A-Z]+-\d+)"),
    re.compile(r"^bugfix/([A-Z]+-\d+)"),
    re.compile(r"^hotfix/([A-Z]+-\d+)"),
]


def normalize_branch_name(branch: str) -> str:
    """Reduce "type/KEY-1-description" to "KEY-1-DESCRIPTION".

    Branches without a '/' are returned unchanged.
    """
    if "/" in branch:
        return branch.split("/")[1].upper()
    return branch


def issue_key_from_branch(branch: str) -> Optional[str]:
    """Extract a Jira issue key from a branch name.

    Args:
        branch: The git branch name.

    Returns:
        The issue key (e.g. "PROJ-123") or None if no pattern matches.
    """
    for candidate in (branch, normalize_branch_name(branch)):
        for pattern in BRANCH_ISSUE_PATTERNS:
            match = pattern.match(candidate)
            if match:
                if match.lastindex == 2:
                    # PROJECT_123 style, normalize the separator
                    return f"{match.group(1)}-{match.group(2)}"
                return match.group(1)
    return None
