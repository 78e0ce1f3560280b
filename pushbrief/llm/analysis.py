"""Change analysis with an LLM.

Contains:
- count_changes: Count added and removed lines in a patch
- select_files_for_analysis: Pick the files that fit in one prompt
- build_analysis_prompt: Build the combined prompt for several files
- analyze_changes: Run one analysis request and validate the result
"""

from typing import Sequence

from loguru import logger
from pydantic import ValidationError

from pushbrief.git.models import FileDiff
from pushbrief.llm.base import BaseLLMProvider, parse_json_response
from pushbrief.llm.exceptions import JSONParseError
from pushbrief.llm.models import ChangeAnalysis, FileAnalysis
from pushbrief.llm.prompts import (
    ANALYSIS_EMPTY_PROMPT,
    ANALYSIS_FILE_SEPARATOR,
    ANALYSIS_FILE_TEMPLATE,
    ANALYSIS_SYSTEM_PROMPT,
    ANALYSIS_USER_PROMPT_TEMPLATE,
)


MAX_PROMPT_CHARS = 10000


def count_changes(patch: str) -> tuple[int, int]:
    """Count added and removed lines, ignoring the ---/+++ file headers.

    Returns:
        (additions, deletions)
    """
    additions = patch.count("\n+") - patch.count("\n+++")
    deletions = patch.count("\n-") - patch.count("\n---")
    return additions, deletions


def build_analysis_prompt(diffs: Sequence[FileDiff]) -> str:
    """Build one prompt covering every given file."""
    if not diffs:
        return ANALYSIS_EMPTY_PROMPT

    sections = []
    total_additions = 0
    total_deletions = 0

    for diff in diffs:
        additions, deletions = count_changes(diff.patch)
        total_additions += additions
        total_deletions += deletions
        sections.append(
            ANALYSIS_FILE_TEMPLATE.format(
                path=diff.path,
                status=diff.status_label or "Unknown",
                additions=additions,
                deletions=deletions,
                patch=diff.patch,
            )
        )

    return ANALYSIS_USER_PROMPT_TEMPLATE.format(
        total_additions=total_additions,
        total_deletions=total_deletions,
        files=ANALYSIS_FILE_SEPARATOR.join(sections),
    )


def select_files_for_analysis(
    diffs: Sequence[FileDiff],
    max_chars: int = MAX_PROMPT_CHARS,
) -> list[FileDiff]:
    """Pick the smallest patches whose total size fits the prompt budget.

    Files are taken smallest first while their patches fit in what the
    prompt template leaves of the budget.

    Args:
        diffs: Candidate diffs.
        max_chars: Budget for the whole prompt; the template itself counts against it.

    Returns:
        The selected diffs, smallest patch first.
    """
    overhead = len(
        ANALYSIS_USER_PROMPT_TEMPLATE.format(total_additions=0, total_deletions=0, files="")
    )
    budget = max_chars - overhead
    selected = []
    total = 0

    for diff in sorted(diffs, key=lambda d: len(d.patch)):
        size = len(diff.patch)
        if total + size <= budget:
            selected.append(diff)
            total += size
        else:
            logger.debug("Skipping {} ({} chars) to stay within the prompt budget", diff.path, size)

    return selected


def analyze_changes(
    provider: BaseLLMProvider,
    diffs: Sequence[FileDiff],
    max_chars: int = MAX_PROMPT_CHARS,
) -> dict[str, FileAnalysis]:
    """Analyze changed files with a single LLM request.

    Args:
        provider: The LLM provider.
        diffs: Diffs with patches.
        max_chars: Budget for the prompt.

    Returns:
        Analysis per file path, for the selected files the model answered for.
        Empty if no file fits the budget.

    Raises:
        MissingAPIKeyError: If the API key is not set.
        JSONParseError: If the response is not valid analysis JSON.
        LLMError: For other LLM-related errors.
    """
    selected = select_files_for_analysis(diffs, max_chars)
    if not selected:
        return {}

    result = provider.complete(ANALYSIS_SYSTEM_PROMPT, build_analysis_prompt(selected))
    logger.debug(
        "Analysis used {} input / {} output tokens", result.input_tokens, result.output_tokens
    )

    parsed = parse_json_response(result.text)
    try:
        analysis = ChangeAnalysis(**parsed)
    except ValidationError as e:
        raise JSONParseError(
            f"LLM response does not match expected schema.\n"
            f"Error: {e}\n"
            f"Parsed JSON: {parsed}"
        )

    return {
        diff.path: analysis.files[diff.path]
        for diff in selected
        if diff.path in analysis.files
    }
