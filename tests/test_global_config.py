"""Tests for pushbrief.global_config module."""

import os
import stat

import pytest
import yaml

from pushbrief import global_config
from pushbrief.global_config import (
    GlobalConfigError,
    get_active_model,
    get_active_provider,
    get_credential,
    get_jira_config,
    is_configured,
    load_credentials,
    load_global_config,
    save_credential,
    save_global_config,
    set_jira_config,
    set_provider_and_model,
)


class TestGlobalConfigFile:
    """Tests for loading and saving config.yaml."""

    def test_load_returns_empty_if_missing(self, isolated_config):
        """Test load returns empty dict if no config file."""
        assert load_global_config() == {}
        assert not is_configured()

    def test_save_creates_file(self, isolated_config):
        """Test saving config creates the directory and file."""
        save_global_config({"provider": "anthropic", "model": "claude-3-5-haiku-latest"})

        content = yaml.safe_load((isolated_config / "config.yaml").read_text())
        assert content["provider"] == "anthropic"
        assert is_configured()

    def test_load_rejects_non_mapping(self, isolated_config):
        """Test a YAML list is reported as an error."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.yaml").write_text("- a\n- b\n")

        with pytest.raises(GlobalConfigError):
            load_global_config()

    def test_load_rejects_bad_yaml(self, isolated_config):
        """Test unparsable YAML is reported as an error."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.yaml").write_text("provider: [unclosed\n")

        with pytest.raises(GlobalConfigError):
            load_global_config()

    def test_provider_and_model(self, isolated_config):
        """Test the active provider and model round through the file."""
        set_provider_and_model("openai", "gpt-4o")

        assert get_active_provider() == "openai"
        assert get_active_model() == "gpt-4o"

    def test_jira_section_update(self, isolated_config):
        """Test unset Jira fields are left untouched."""
        set_jira_config(host="https://example.atlassian.net/", username="me")
        set_jira_config(default_project="PROJ")

        assert get_jira_config() == {
            "host": "https://example.atlassian.net",
            "username": "me",
            "default_project": "PROJ",
        }

    def test_config_dir_is_patched(self, isolated_config):
        """Test tests never touch the real home directory."""
        assert global_config.get_global_config_dir() == isolated_config


class TestCredentials:
    """Tests for credentials management."""

    def test_load_returns_empty_if_missing(self, isolated_config):
        """Test load returns empty dict if no credentials file."""
        assert load_credentials() == {}

    def test_parses_file(self, isolated_config):
        """Test comments and blank lines are skipped."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "credentials").write_text(
            "# comment\n\nOPENAI_API_KEY=sk-123\nJIRA_PASSWORD = token=with=equals\n"
        )

        assert load_credentials() == {
            "OPENAI_API_KEY": "sk-123",
            "JIRA_PASSWORD": "token=with=equals",
        }

    def test_save_updates_and_restricts_permissions(self, isolated_config):
        """Test saving keeps other keys and makes the file owner-only."""
        save_credential("OPENAI_API_KEY", "sk-1")
        save_credential("JIRA_PASSWORD", "secret")
        save_credential("OPENAI_API_KEY", "sk-2")

        assert get_credential("OPENAI_API_KEY") == "sk-2"
        assert get_credential("JIRA_PASSWORD") == "secret"
        assert get_credential("ANTHROPIC_API_KEY") is None

        mode = stat.S_IMODE(os.stat(isolated_config / "credentials").st_mode)
        assert mode == 0o600
