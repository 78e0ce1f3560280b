"""Global configuration management for pushbrief.

Handles user-level configuration stored in ~/.pushbrief/:
- config.yaml: Provider, model and Jira connection settings
- credentials: API keys and the Jira API token
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".pushbrief"

_CREDENTIALS_HEADER = (
    "# pushbrief credentials\n"
    "# This file stores API keys for LLM providers and Jira\n"
    "# Format: KEY_NAME=your_key_here\n\n"
)


def get_global_config_dir() -> Path:
    """Get the global pushbrief configuration directory.

    Returns:
        Path to ~/.pushbrief/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.pushbrief/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        GlobalConfigError: If the file cannot be read or parsed.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.pushbrief/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _read_credentials_file(credentials_file: Path) -> Dict[str, str]:
    credentials = {}
    with open(credentials_file, "r") as f:
        for line in f:
            line = line.strip()
            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue
            # Parse KEY=value format
            if "=" in line:
                key, value = line.split("=", 1)
                credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load secrets from ~/.pushbrief/credentials.

    Returns:
        Dictionary mapping environment variable names to values.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        return _read_credentials_file(credentials_file)
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(key_name: str, value: str) -> None:
    """Save or update a secret in the credentials file.

    Args:
        key_name: Environment variable name (e.g., "OPENAI_API_KEY")
        value: The secret value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[key_name] = value

    try:
        with open(credentials_file, "w") as f:
            f.write(_CREDENTIALS_HEADER)
            for key, val in existing_creds.items():
                f.write(f"{key}={val}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(key_name: str) -> Optional[str]:
    """Get a secret from the credentials file, or None if absent."""
    return load_credentials().get(key_name)


def get_active_provider() -> Optional[str]:
    """Get the configured LLM provider name, or None if not configured."""
    return load_global_config().get("provider")


def get_active_model() -> Optional[str]:
    """Get the model stored with the active provider, or None if not configured."""
    return load_global_config().get("model")


def set_provider_and_model(provider: str, model: str) -> None:
    """Set the active provider and model in global config.

    Args:
        provider: The LLM provider name.
        model: The model name to use.
    """
    config = load_global_config()
    config["provider"] = provider
    config["model"] = model
    save_global_config(config)


def get_jira_config() -> Dict[str, Any]:
    """Get the jira section (host, username, default_project) of the global config."""
    return load_global_config().get("jira") or {}


def set_jira_config(
    host: Optional[str] = None,
    username: Optional[str] = None,
    default_project: Optional[str] = None,
) -> None:
    """Update the jira section of the global config, leaving unset fields untouched."""
    config = load_global_config()
    jira = config.get("jira") or {}

    if host is not None:
        jira["host"] = host.rstrip("/")
    if username is not None:
        jira["username"] = username
    if default_project is not None:
        jira["default_project"] = default_project

    config["jira"] = jira
    save_global_config(config)


def is_configured() -> bool:
    return get_config_file_path().exists()
