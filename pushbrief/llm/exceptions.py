"""Errors raised while talking to an LLM provider.

Contains:
- LLMError: Base class; also wraps SDK failures from the provider calls
- MissingAPIKeyError: No key in the options, environment or credentials file
- JSONParseError: A commit message or change analysis reply that cannot be used
"""


class LLMError(Exception):
    """A provider call failed or its reply was unusable."""

    pass


class MissingAPIKeyError(LLMError):
    """The provider's API key could not be resolved.

    The message names the environment variable to set and the
    ``pushbrief config set-key`` command that stores it.
    """

    pass


class JSONParseError(LLMError):
    """The reply is not a JSON object, or does not fit the expected schema.

    Raised for commit messages that fail CommitMessageJSON validation and
    for change analyses whose ``files`` map does not match ChangeAnalysis.
    """

    pass
