"""Base classes and shared utilities for LLM providers."""

import json
from abc import ABC, abstractmethod

from pushbrief.config import LLMSettings, get_api_key_env_var
from pushbrief.llm.exceptions import JSONParseError, MissingAPIKeyError
from pushbrief.llm.models import LLMResult


def parse_json_response(raw_response: str) -> dict:
    """Parse the LLM response as JSON.

    Args:
        raw_response: The raw text response from the LLM.

    Returns:
        The parsed JSON as a dictionary.

    Raises:
        JSONParseError: If parsing fails.
    """
    cleaned = raw_response.strip()

    # Remove markdown code fences if the model included them despite instructions
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    # Find the first { and last }
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")

    if first_brace != -1 and last_brace != -1 and last_brace > first_brace:
        cleaned = cleaned[first_brace:last_brace + 1]

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise JSONParseError(
            f"Failed to parse LLM response as JSON.\n"
            f"Error: {e}\n"
            f"Raw response:\n{raw_response}"
        )

    if not isinstance(parsed, dict):
        raise JSONParseError(f"Expected a JSON object, got: {raw_response}")
    return parsed


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Providers only know how to send a system and user prompt and return the
    text; prompt building and response validation live in the callers.
    """

    #: Human-readable provider name for error messages
    name = "LLM"

    def __init__(self, settings: LLMSettings):
        self.settings = settings
        self.model = settings.model

    def get_api_key(self) -> str:
        """Get the API key resolved into the settings.

        Raises:
            MissingAPIKeyError: If no key was found.
        """
        if self.settings.api_key:
            return self.settings.api_key

        env_var = get_api_key_env_var(self.settings.provider)
        raise MissingAPIKeyError(
            f"{self.name} API key not found. Set it using:\n"
            f"  1. Environment variable: export {env_var}=your_key_here\n"
            f"  2. Run: pushbrief config set-key {self.settings.provider.value}\n"
            f"  3. Manually add to ~/.pushbrief/credentials"
        )

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str, json_mode: bool = True) -> LLMResult:
        """Send the prompts and return the model's text.

        Args:
            system_prompt: The system instructions.
            user_prompt: The user message.
            json_mode: Ask the API for a JSON object when it supports that.

        Returns:
            An LLMResult with the raw text and token usage.

        Raises:
            MissingAPIKeyError: If the API key is not set.
            LLMError: If the API call fails.
        """
        pass
