"""
Tests for client configuration and environment defaults.

Run with: python -m pytest opencode_client/tests/test_config.py -v
"""

import logging

import pytest
import requests

from opencode_client import ClientConfig, ConfigurationError, OpencodeClient, RetryPolicy
from opencode_client.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_SSE_CONNECT_TIMEOUT,
    DEFAULT_TIMEOUT,
    log_config_summary,
    validate_base_url,
)


class TestFromEnv:
    """Tests for ClientConfig.from_env."""

    def test_defaults_when_environment_empty(self):
        """Test library defaults apply with no arguments and no variables."""
        config = ClientConfig.from_env(environ={})

        assert config.base_url == "http://localhost:54321/"
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.max_retries == DEFAULT_MAX_RETRIES
        assert config.sse_connect_timeout == DEFAULT_SSE_CONNECT_TIMEOUT
        assert config.http_client is None
        assert config.retry_policy == RetryPolicy()

    def test_environment_variables_are_read(self):
        """Test OPENCODE_* variables override the defaults."""
        env = {
            "OPENCODE_BASE_URL": "https://example.com/api",
            "OPENCODE_DEFAULT_TIMEOUT": "12.5",
            "OPENCODE_MAX_RETRIES": "4",
            "OPENCODE_SSE_CONNECT_TIMEOUT": "3",
        }
        config = ClientConfig.from_env(environ=env)

        assert config.base_url == "https://example.com/api/"
        assert config.timeout == 12.5
        assert config.max_retries == 4
        assert config.sse_connect_timeout == 3.0

    def test_explicit_arguments_win_over_environment(self):
        """Test arguments take precedence over variables."""
        env = {"OPENCODE_BASE_URL": "http://env:1", "OPENCODE_MAX_RETRIES": "7"}
        config = ClientConfig.from_env(base_url="http://arg:2", max_retries=0, environ=env)

        assert config.base_url == "http://arg:2/"
        assert config.max_retries == 0

    def test_unparsable_environment_value(self):
        """Test a non-numeric variable raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="OPENCODE_MAX_RETRIES"):
            ClientConfig.from_env(environ={"OPENCODE_MAX_RETRIES": "many"})

    def test_config_is_frozen(self):
        config = ClientConfig.from_env(environ={})
        with pytest.raises(AttributeError):
            config.timeout = 1


class TestValidation:
    """Tests for option validation."""

    @pytest.mark.parametrize("url", ["ftp://host", "localhost:4096", "http://", ""])
    def test_invalid_base_url(self, url):
        """Test bad schemes and missing hosts are rejected."""
        with pytest.raises(ConfigurationError):
            ClientConfig.from_env(base_url=url, environ={})

    def test_base_url_keeps_path_prefix_and_query(self):
        assert validate_base_url("http://h:1/prefix?directory=/x") == "http://h:1/prefix/?directory=/x"

    @pytest.mark.parametrize("timeout", [0, -1, True])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ConfigurationError):
            ClientConfig.from_env(timeout=timeout, environ={})

    @pytest.mark.parametrize("retries", [-1, 11, 1.5])
    def test_invalid_max_retries(self, retries):
        """Test the retry budget must be an integer from 0 to 10."""
        with pytest.raises(ConfigurationError):
            ClientConfig.from_env(max_retries=retries, environ={})

    def test_retry_bounds_accepted(self):
        assert ClientConfig.from_env(max_retries=0, environ={}).max_retries == 0
        assert ClientConfig.from_env(max_retries=10, environ={}).max_retries == 10

    def test_http_client_must_be_session(self):
        with pytest.raises(ConfigurationError, match="requests.Session"):
            ClientConfig.from_env(http_client=object(), environ={})

    def test_configuration_error_is_value_error(self):
        """Test callers catching ValueError also see configuration errors."""
        with pytest.raises(ValueError):
            OpencodeClient(base_url="not a url")


class TestLogConfigSummary:
    """Tests for log_config_summary."""

    def test_header_values_are_redacted(self, caplog):
        """Test header names are logged but their values are not."""
        config = ClientConfig.from_env(headers={"Authorization": "Bearer secret"}, environ={})

        with caplog.at_level(logging.DEBUG, logger="opencode_client.config"):
            summary = log_config_summary(config)

        assert summary["headers"] == {"Authorization": "***"}
        assert "secret" not in caplog.text
        assert "Authorization" in caplog.text

    def test_custom_transport_flag(self):
        config = ClientConfig.from_env(http_client=requests.Session(), environ={})
        assert log_config_summary(config)["custom_transport"] is True


class TestClientLifecycle:
    """Tests for OpencodeClient construction and close."""

    def test_owned_session_is_closed(self, monkeypatch):
        """Test a client-created session is closed on exit."""
        closed = []
        monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(self))

        with OpencodeClient(base_url="http://h:1") as client:
            pass

        assert closed == [client._session]

    def test_supplied_session_is_not_closed(self, http_session, monkeypatch):
        closed = []
        monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(self))

        with OpencodeClient(base_url="http://h:1", http_client=http_session):
            pass

        assert closed == []

    def test_resources_attached(self, client):
        """Test every resource group is reachable from the client."""
        for name in (
            "agent", "app", "auth", "command", "config", "event", "file",
            "find", "mcp", "path", "project", "session", "tool", "tui",
        ):
            assert getattr(client, name) is not None
        assert client.session.permissions is not None
        assert client.base_url == "http://opencode.test/"
