"""LLM provider module for pushbrief.

This module provides a unified interface to the supported LLM providers.
"""

from pushbrief.config import LLMProvider, LLMSettings
from pushbrief.llm.analysis import analyze_changes
from pushbrief.llm.base import BaseLLMProvider
from pushbrief.llm.commit import generate_commit_message
from pushbrief.llm.exceptions import JSONParseError, LLMError, MissingAPIKeyError
from pushbrief.llm.models import ChangeAnalysis, FileAnalysis, LLMResult


def get_provider(settings: LLMSettings) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        settings: Resolved provider, model and credentials.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    if settings.provider == LLMProvider.OPENAI:
        from pushbrief.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(settings)

    elif settings.provider == LLMProvider.ANTHROPIC:
        from pushbrief.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(settings)

    else:
        raise ValueError(f"Unsupported provider: {settings.provider}")


__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "JSONParseError",
    "LLMResult",
    "FileAnalysis",
    "ChangeAnalysis",
    "get_provider",
    "analyze_changes",
    "generate_commit_message",
]
