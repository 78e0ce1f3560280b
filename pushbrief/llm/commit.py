"""Commit message generation with an LLM."""

from pydantic import ValidationError

from pushbrief.formatters import CommitMessageJSON
from pushbrief.llm.base import BaseLLMProvider, parse_json_response
from pushbrief.llm.exceptions import JSONParseError
from pushbrief.llm.prompts import COMMIT_SYSTEM_PROMPT, COMMIT_USER_PROMPT_TEMPLATE


def validate_commit_json(parsed: dict) -> CommitMessageJSON:
    """Validate parsed JSON against the CommitMessageJSON schema.

    Raises:
        JSONParseError: If validation fails.
    """
    try:
        return CommitMessageJSON(**parsed)
    except ValidationError as e:
        raise JSONParseError(
            f"LLM response does not match expected schema.\n"
            f"Error: {e}\n"
            f"Parsed JSON: {parsed}"
        )


def generate_commit_message(provider: BaseLLMProvider, context_bundle: str) -> CommitMessageJSON:
    """Generate a structured commit message from a git context bundle.

    Args:
        provider: The LLM provider.
        context_bundle: Output of build_context_bundle().

    Returns:
        The validated commit message.

    Raises:
        MissingAPIKeyError: If the API key is not set.
        JSONParseError: If the LLM response cannot be parsed.
        LLMError: For other LLM-related errors.
    """
    user_prompt = COMMIT_USER_PROMPT_TEMPLATE.format(context_bundle=context_bundle)
    result = provider.complete(COMMIT_SYSTEM_PROMPT, user_prompt)
    return validate_commit_json(parse_json_response(result.text))
