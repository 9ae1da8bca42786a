"""
Tests for Configuration Settings

Tests cover credential loading, reporting of missing credentials, .env
file generation and the configuration summary.
"""

import pytest
import dataclasses
from itertools import combinations
from unittest.mock import patch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import settings
from config.settings import TwitterCredentials, load_credentials, write_env_file, get_config_summary
from utils.exceptions import ConfigurationError, XPosterError


def _missing_subsets():
    """Every non-empty subset of the required credential fields."""
    fields = settings.REQUIRED_CREDENTIALS
    for size in range(1, len(fields) + 1):
        for subset in combinations(fields, size):
            yield subset


# =============================================================================
# Credential Loading Tests
# =============================================================================

class TestLoadCredentials:
    """Tests for load_credentials()."""

    def test_loads_all_values(self, full_environ):
        creds = load_credentials(full_environ)

        assert creds == TwitterCredentials(
            api_key="test-api-key",
            api_secret="test-api-secret",
            access_token="test-access-token",
            access_token_secret="test-access-token-secret",
            bearer_token="test-bearer-token"
        )

    def test_bearer_token_optional(self, full_environ):
        del full_environ["TWITTER_BEARER_TOKEN"]

        creds = load_credentials(full_environ)

        assert creds.bearer_token is None
        assert creds.api_key == "test-api-key"

    def test_empty_bearer_token_is_none(self, full_environ):
        full_environ["TWITTER_BEARER_TOKEN"] = ""

        assert load_credentials(full_environ).bearer_token is None

    @pytest.mark.parametrize("missing", list(_missing_subsets()))
    def test_reports_every_missing_field(self, full_environ, missing):
        """All missing fields are named in the error, in declaration order."""
        for name in missing:
            del full_environ[settings.CREDENTIAL_ENV_VARS[name]]

        with pytest.raises(ConfigurationError) as exc_info:
            load_credentials(full_environ)

        assert exc_info.value.missing == missing
        assert f"Missing required Twitter API credentials: {', '.join(missing)}" in str(exc_info.value)

    def test_empty_string_counts_as_missing(self, full_environ):
        full_environ["TWITTER_API_SECRET"] = ""
        full_environ["TWITTER_ACCESS_TOKEN"] = ""

        with pytest.raises(ConfigurationError) as exc_info:
            load_credentials(full_environ)

        assert exc_info.value.missing == ("api_secret", "access_token")

    def test_error_includes_hint(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_credentials({})

        message = str(exc_info.value)
        assert message.startswith(
            "Missing required Twitter API credentials: api_key, api_secret, access_token, access_token_secret"
        )
        assert message.endswith("Please check your .env file or run the setup command.")

    def test_configuration_error_is_app_error(self):
        with pytest.raises(XPosterError):
            load_credentials({})

    def test_reads_process_environment_by_default(self, full_environ):
        with patch.dict(os.environ, full_environ, clear=True):
            creds = load_credentials()

        assert creds.access_token_secret == "test-access-token-secret"

    def test_credentials_are_immutable(self, credentials):
        with pytest.raises(dataclasses.FrozenInstanceError):
            credentials.api_key = "other"


# =============================================================================
# .env File Tests
# =============================================================================

class TestWriteEnvFile:
    """Tests for write_env_file()."""

    def test_writes_all_credentials(self, credentials, tmp_path):
        path = str(tmp_path / ".env")

        result = write_env_file(credentials, path)

        assert result == path
        with open(path, encoding="utf-8") as f:
            content = f.read()
        assert content == (
            "# X (Twitter) API Credentials\n"
            "TWITTER_API_KEY=test-api-key\n"
            "TWITTER_API_SECRET=test-api-secret\n"
            "TWITTER_ACCESS_TOKEN=test-access-token\n"
            "TWITTER_ACCESS_TOKEN_SECRET=test-access-token-secret\n"
            "TWITTER_BEARER_TOKEN=test-bearer-token\n"
        )

    def test_bearer_token_placeholder(self, credentials, tmp_path):
        path = str(tmp_path / ".env")

        write_env_file(dataclasses.replace(credentials, bearer_token=None), path)

        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
        assert lines[-1] == "# TWITTER_BEARER_TOKEN=your_bearer_token_here"

    def test_written_file_loads_back(self, credentials, tmp_path):
        """A written file parses back into the same credentials."""
        from dotenv import dotenv_values

        path = str(tmp_path / ".env")
        write_env_file(credentials, path)

        assert load_credentials(dotenv_values(path)) == credentials

    def test_defaults_to_working_directory(self, credentials, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        path = write_env_file(credentials)

        assert path == str(tmp_path / ".env")
        assert os.path.exists(path)


# =============================================================================
# Summary Tests
# =============================================================================

class TestConfigSummary:
    """Tests for get_config_summary()."""

    def test_reports_presence_not_values(self, credentials):
        summary = get_config_summary(dataclasses.replace(credentials, bearer_token=None))

        assert summary["credentials"] == {
            "api_key": True,
            "api_secret": True,
            "access_token": True,
            "access_token_secret": True,
            "bearer_token": False,
        }
        assert "test-api-key" not in str(summary)

    def test_without_credentials(self):
        summary = get_config_summary(None)

        assert not any(summary["credentials"].values())

    def test_env_file_state(self, credentials, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert get_config_summary(credentials)["env_file"]["exists"] is False
        write_env_file(credentials)
        assert get_config_summary(credentials)["env_file"] == {
            "path": str(tmp_path / ".env"),
            "exists": True,
        }

    def test_twitter_settings(self, credentials):
        assert get_config_summary(credentials)["twitter_settings"]["character_limit"] == 280
