"""Tests for ClientConfig."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from httpbridge._internal.config import DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT, ClientConfig


class TestClientConfig:
    """Tests for ClientConfig validation."""

    def test_defaults(self):
        config = ClientConfig()
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.insecure_ssl is False
        assert config.proxy is None
        assert config.headers == {}
        assert config.follow_redirects is True
        assert config.max_redirects == DEFAULT_MAX_REDIRECTS
        assert config.debug is False

    def test_rejects_unknown_fields(self):
        with pytest.raises(ValidationError):
            ClientConfig(retries=3)

    def test_rejects_negative_timeout(self):
        with pytest.raises(ValidationError):
            ClientConfig(timeout=-1)

    def test_empty_user_agent_is_none(self):
        assert ClientConfig(user_agent="").user_agent is None


class TestClientConfigFromEnv:
    """Tests for ClientConfig.from_env()."""

    def test_no_vars(self):
        """Should use defaults when nothing is set."""
        with patch.dict(os.environ, {}, clear=True):
            assert ClientConfig.from_env() == ClientConfig()

    def test_with_all_vars(self):
        env = {
            "HTTPBRIDGE_TIMEOUT_MS": "2500",
            "HTTPBRIDGE_INSECURE_SSL": "1",
            "HTTPBRIDGE_PROXY": "http://proxy.local:3128",
            "HTTPBRIDGE_USER_AGENT": "scripts/1.0",
            "HTTPBRIDGE_DEBUG": "1",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ClientConfig.from_env()
        assert config.timeout == 2.5
        assert config.insecure_ssl is True
        assert config.proxy == "http://proxy.local:3128"
        assert config.user_agent == "scripts/1.0"
        assert config.debug is True

    def test_malformed_timeout_ms_raises(self):
        """Should raise ValueError when HTTPBRIDGE_TIMEOUT_MS is not an integer."""
        with patch.dict(os.environ, {"HTTPBRIDGE_TIMEOUT_MS": "soon"}, clear=True), pytest.raises(
            ValueError
        ):
            ClientConfig.from_env()
