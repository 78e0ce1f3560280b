"""Git status parsing.

Contains:
- STATUS_LABELS: Single-letter (and untracked) status code labels
- classify_status: Turn a porcelain XY code into a human-readable label
- parse_status_output: Parse porcelain v1 output into ChangedFileEntry records
- is_staged_entry: Check whether an entry has content in the index
"""

from pushbrief.git.models import ChangedFileEntry


STATUS_LABELS = {
    "M": "Modified",
    "A": "Added",
    "D": "Deleted",
    "R": "Renamed",
    "C": "Copied",
    "U": "Updated but unmerged",
    "??": "Untracked",
}

UNKNOWN_STATUS = "Unknown status"


def classify_status(status_code: str) -> str:
    """Classify a porcelain status code.

    The code is stripped of surrounding spaces and looked up exactly first,
    so " M", "M " and "M" are all "Modified". Two-letter codes that do not
    match are split into their index and working tree columns.

    Args:
        status_code: The raw XY status token.

    Returns:
        A human-readable label.
    """
    code = status_code.strip()

    if code in STATUS_LABELS:
        return STATUS_LABELS[code]

    if len(code) != 2:
        return UNKNOWN_STATUS

    index_label = "" if code[0] == " " else STATUS_LABELS.get(code[0], "Unknown")
    working_label = "" if code[1] == " " else STATUS_LABELS.get(code[1], "Unknown")

    if index_label and working_label:
        return f"{index_label} in index, {working_label} in working tree"
    if index_label:
        return f"{index_label} in index"
    if working_label:
        return f"{working_label} in working tree"
    return UNKNOWN_STATUS


def parse_status_output(output: str) -> list[ChangedFileEntry]:
    """Parse ``git status --porcelain`` output.

    Lines are "XY path": the first two characters are the status code and
    the path starts at offset 3. Blank lines, lines shorter than three
    characters and lines with an empty path are skipped; this never raises.

    Args:
        output: Raw porcelain output. Leading spaces must be preserved.

    Returns:
        Entries in the order git printed them.
    """
    entries = []

    for line in output.split("\n"):
        line = line.rstrip("\r")
        if not line:
            continue
        # Branch header from --branch
        if line.startswith("##"):
            continue
        if len(line) < 3:
            continue

        status_code = line[:2]
        path = line[3:]
        if not path:
            continue

        entries.append(
            ChangedFileEntry(
                path=path,
                status_code=status_code,
                status_label=classify_status(status_code),
            )
        )

    return entries


def is_staged_entry(entry: ChangedFileEntry) -> bool:
    """Check whether a status entry has staged (index) changes.

    The first porcelain column is the index status. Anything other than a
    space or '?' means something is staged.

    Args:
        entry: The status entry.

    Returns:
        True if the file has staged changes.
    """
    first_col = entry.status_code[0]
    return first_col != " " and first_col != "?"
