"""Git diff extraction.

Contains:
- parse_unified_diff: Split a multi-file unified diff into per-file patches
- combined_diff_strategy: One ``git diff`` for every file, split by header
- per_file_diff_strategy: One ``git diff -- <path>`` per changed file
- DIFF_STRATEGIES: The strategies tried in order by collect_diffs
- collect_diffs: Produce FileDiff records for a list of changed files
"""

import re
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from loguru import logger

from pushbrief.git.exceptions import GitError
from pushbrief.git.models import ChangedFileEntry, FileDiff
from pushbrief.git.runner import Runner


# Format: diff --git a/path b/path
_DIFF_HEADER_PREFIX = "diff --git a/"
_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")

# Lines that name the destination path inside a file section
_DEST_PATH_PREFIXES = ("rename to ", "copy to ", "+++ b/")

DiffStrategy = Callable[
    [Runner, Union[str, Path], Sequence[ChangedFileEntry], bool], list[FileDiff]
]


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _symmetric_header_path(header: str) -> Optional[str]:
    """Path from a ``diff --git a/X b/X`` header whose two sides match.

    Splitting at the midpoint keeps paths that themselves contain " b/"
    intact. Returns None when the sides differ (renames and copies).
    """
    rest = header[len(_DIFF_HEADER_PREFIX):]
    half = (len(rest) - 3) // 2
    if half > 0 and rest[half:half + 3] == " b/" and rest[:half] == rest[half + 3:]:
        return rest[:half]
    return None


def _section_path(lines: list[str]) -> str:
    path = _symmetric_header_path(lines[0])
    if path is not None:
        return path

    for line in lines[1:]:
        if line.startswith("@@"):
            break
        for prefix in _DEST_PATH_PREFIXES:
            if line.startswith(prefix):
                # git pads ---/+++ names containing spaces with a tab
                return line[len(prefix):].rstrip("\t")

    return _DIFF_HEADER_RE.match(lines[0]).group(2)


def parse_unified_diff(diff_output: str) -> list[FileDiff]:
    """Split unified diff output into one FileDiff per file section.

    A ``diff --git a/X b/Y`` line opens a section for path Y; every line up
    to the next header belongs to it. Each patch keeps its own header line,
    matching what ``git diff -- <path>`` prints for a single file. Lines
    before the first header are ignored.

    When X and Y differ, Y is read from the section's ``rename to``,
    ``copy to`` or ``+++ b/`` line, since the header alone is ambiguous
    for paths containing " b/".

    The status of a file cannot be recovered from the diff alone, so every
    entry is labelled "Modified".

    Args:
        diff_output: Raw output of ``git diff``.

    Returns:
        FileDiff records in header order, or an empty list if no header was found.
    """
    sections: list[list[str]] = []

    for line in _split_lines(diff_output):
        if _DIFF_HEADER_RE.match(line):
            sections.append([line])
        elif sections:
            sections[-1].append(line)

    return [
        FileDiff(path=_section_path(lines), patch="\n".join(lines))
        for lines in sections
    ]


def _diff_args(staged: bool, path: Optional[str] = None) -> list[str]:
    args = ["diff"]
    if staged:
        args.append("--cached")
    if path is not None:
        args += ["--", path]
    return args


def _read_diff(runner: Runner, cwd: Union[str, Path], args: list[str]) -> str:
    """Run a diff command, treating any failure as an empty diff."""
    try:
        result = runner(args, cwd)
    except GitError as e:
        logger.debug("git {} failed: {}", " ".join(args), e)
        return ""
    if not result.success:
        logger.debug("git {} failed: {}", " ".join(args), result.stderr.strip())
        return ""
    return result.stdout.rstrip("\n")


def combined_diff_strategy(
    runner: Runner,
    cwd: Union[str, Path],
    entries: Sequence[ChangedFileEntry],
    staged: bool,
) -> list[FileDiff]:
    """Fetch one diff covering every file and split it per file.

    Every entry is labelled "Modified" regardless of its real status.
    """
    diff_output = _read_diff(runner, cwd, _diff_args(staged))
    if not diff_output.strip():
        logger.debug("Combined diff is empty, no fast path available")
        return []
    return parse_unified_diff(diff_output)


def per_file_diff_strategy(
    runner: Runner,
    cwd: Union[str, Path],
    entries: Sequence[ChangedFileEntry],
    staged: bool,
) -> list[FileDiff]:
    """Fetch a diff for each changed file individually.

    Untracked files have no staged content and are skipped in staged mode;
    in working tree mode an untracked file with no diff gets a placeholder
    patch. Files that end up with no content are left out.
    """
    diffs = []

    for entry in entries:
        if staged and entry.is_untracked:
            continue

        patch = _read_diff(runner, cwd, _diff_args(staged, entry.target_path))

        if not patch.strip():
            if staged:
                # Nothing staged for this file
                continue
            if entry.is_untracked:
                patch = f"New file: {entry.path}\n"
            else:
                continue

        diffs.append(
            FileDiff(
                path=entry.path,
                patch=patch,
                status_label=entry.status_label,
                status_code=entry.status_code,
            )
        )

    return diffs


DIFF_STRATEGIES: tuple[DiffStrategy, ...] = (
    combined_diff_strategy,
    per_file_diff_strategy,
)


def collect_diffs(
    runner: Runner,
    cwd: Union[str, Path],
    entries: Sequence[ChangedFileEntry],
    staged: bool = False,
    strategies: Sequence[DiffStrategy] = DIFF_STRATEGIES,
) -> list[FileDiff]:
    """Collect per-file diffs for the changed files.

    Strategies are tried in order and the first non-empty result wins.
    No diff command runs when there are no changed files.

    Args:
        runner: Command runner used for every git call.
        cwd: Repository working directory.
        entries: Changed files from the status reader.
        staged: Diff the index instead of the working tree.
        strategies: Strategies to try, in order.

    Returns:
        FileDiff records from the first strategy that found any, or an empty list.
    """
    if not entries:
        return []

    for strategy in strategies:
        diffs = strategy(runner, cwd, entries, staged)
        if diffs:
            logger.debug("{} produced {} diff(s)", strategy.__name__, len(diffs))
            return diffs

    return []
