"""Configuration for pushbrief.

Values are resolved once per command and passed to the components that
need them; nothing here is mutated at runtime.

Resolution order for every setting:
1. Command-line option
2. Environment variable (a repo-level .env file is loaded too)
3. ~/.pushbrief/config.yaml and ~/.pushbrief/credentials
4. Built-in default
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from pushbrief import global_config


class LLMProvider(Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================

DEFAULT_PROVIDER = LLMProvider.OPENAI
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.7


# ============================================================
# AVAILABLE MODELS PER PROVIDER
# ============================================================

AVAILABLE_MODELS = {
    LLMProvider.OPENAI: [
        "gpt-4.1",
        "gpt-4.1-mini",
        "gpt-4o",
        "gpt-4o-mini",
    ],
    LLMProvider.ANTHROPIC: [
        "claude-sonnet-4-20250514",
        "claude-3-5-sonnet-latest",
        "claude-3-5-haiku-latest",
    ],
}

DEFAULT_MODELS = {
    LLMProvider.OPENAI: DEFAULT_MODEL,
    LLMProvider.ANTHROPIC: "claude-3-5-haiku-latest",
}


# ============================================================
# ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
}

OPENAI_BASE_URI_ENV_VAR = "OPENAI_BASE_URI"

JIRA_HOST_ENV_VAR = "JIRA_HOST"
JIRA_USERNAME_ENV_VAR = "JIRA_USERNAME"
JIRA_PASSWORD_ENV_VAR = "JIRA_PASSWORD"
JIRA_DEFAULT_ISSUE_ENV_VAR = "JIRA_DEFAULT_ISSUE"
JIRA_DEFAULT_PROJECT_ENV_VAR = "JIRA_DEFAULT_PROJECT"

LOG_LEVEL_ENV_VAR = "PUSHBRIEF_LOG_LEVEL"


@dataclass(frozen=True)
class LLMSettings:
    """Everything a provider needs to make a request."""

    provider: LLMProvider
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE


@dataclass(frozen=True)
class JiraSettings:
    """Jira connection settings. Any field may still be empty."""

    host: str = ""
    username: str = ""
    password: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.host and self.username and self.password)


def load_env() -> None:
    """Load a .env file from the current directory tree, without overriding the environment."""
    load_dotenv(find_dotenv(usecwd=True), override=False)


def _first(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]


def resolve_llm_settings(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
) -> LLMSettings:
    """Resolve LLM settings from options, environment and the global config.

    Args:
        provider: Provider name from the command line.
        model: Model name from the command line.
        api_key: API key from the command line.

    Returns:
        The resolved settings. The API key may still be None; providers
        raise MissingAPIKeyError when they need it.

    Raises:
        ValueError: If the provider name is not supported.
    """
    config = global_config.load_global_config()

    active_provider = global_config.get_active_provider()
    if provider:
        llm_provider = LLMProvider(provider.lower())
    else:
        llm_provider = LLMProvider(active_provider) if active_provider else DEFAULT_PROVIDER

    # The stored model belongs to the stored provider only
    configured_model = global_config.get_active_model() if active_provider == llm_provider.value else None
    env_var = get_api_key_env_var(llm_provider)

    base_url = None
    if llm_provider == LLMProvider.OPENAI:
        base_url = _first(os.getenv(OPENAI_BASE_URI_ENV_VAR), config.get("base_url"))

    max_tokens = config.get("max_tokens")
    temperature = config.get("temperature")

    return LLMSettings(
        provider=llm_provider,
        model=_first(model, configured_model) or DEFAULT_MODELS[llm_provider],
        api_key=_first(api_key, os.getenv(env_var), global_config.get_credential(env_var)),
        base_url=base_url,
        max_tokens=int(max_tokens) if max_tokens is not None else DEFAULT_MAX_TOKENS,
        temperature=float(temperature) if temperature is not None else DEFAULT_TEMPERATURE,
    )


def resolve_jira_settings(
    host: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> JiraSettings:
    """Resolve Jira settings from options, environment and the global config.

    Returns:
        JiraSettings with empty strings for anything not found.
    """
    jira = global_config.get_jira_config()

    return JiraSettings(
        host=_first(host, os.getenv(JIRA_HOST_ENV_VAR), jira.get("host")) or "",
        username=_first(username, os.getenv(JIRA_USERNAME_ENV_VAR), jira.get("username")) or "",
        password=_first(
            password,
            os.getenv(JIRA_PASSWORD_ENV_VAR),
            global_config.get_credential(JIRA_PASSWORD_ENV_VAR),
        ) or "",
    )


def get_default_issue(option: Optional[str] = None) -> Optional[str]:
    """Default Jira issue key from the command line or JIRA_DEFAULT_ISSUE."""
    return _first(option, os.getenv(JIRA_DEFAULT_ISSUE_ENV_VAR))


def get_default_project() -> Optional[str]:
    """Default Jira project from JIRA_DEFAULT_PROJECT or the config file."""
    return _first(
        os.getenv(JIRA_DEFAULT_PROJECT_ENV_VAR),
        global_config.get_jira_config().get("default_project"),
    )
