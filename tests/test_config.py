"""Tests for configuration handling."""

import pytest

from pyhabdroid.config import RetryPolicy, ServerConfig
from pyhabdroid.exceptions import ConfigError


class TestServerConfig:
    def test_base_url_gets_trailing_slash(self) -> None:
        assert ServerConfig("http://openhab:8080").base_url == "http://openhab:8080/"

    def test_empty_url(self) -> None:
        with pytest.raises(ConfigError):
            ServerConfig("")

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("OPENHAB_URL", "https://home.example.org/")
        monkeypatch.setenv("OPENHAB_USERNAME", "admin")
        monkeypatch.setenv("OPENHAB_PASSWORD", "secret")
        monkeypatch.setenv("OPENHAB_TIMEOUT", "5")
        monkeypatch.setenv("OPENHAB_VERIFY_SSL", "false")

        config = ServerConfig.from_env()

        assert config.base_url == "https://home.example.org/"
        assert config.username == "admin"
        assert config.password == "secret"
        assert config.timeout == 5.0
        assert config.verify_ssl is False
        assert config.has_credentials is True

    def test_from_env_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("OPENHAB_URL", "http://openhab:8080")
        for name in ("OPENHAB_USERNAME", "OPENHAB_PASSWORD", "OPENHAB_TIMEOUT", "OPENHAB_VERIFY_SSL"):
            monkeypatch.delenv(name, raising=False)

        config = ServerConfig.from_env()

        assert config.username is None
        assert config.has_credentials is False
        assert config.timeout == 15
        assert config.verify_ssl is True

    def test_from_env_missing_url(self, monkeypatch) -> None:
        monkeypatch.delenv("OPENHAB_URL", raising=False)
        with pytest.raises(ConfigError):
            ServerConfig.from_env()

    def test_from_env_bad_timeout(self, monkeypatch) -> None:
        monkeypatch.setenv("OPENHAB_URL", "http://openhab:8080")
        monkeypatch.setenv("OPENHAB_TIMEOUT", "soon")
        with pytest.raises(ConfigError):
            ServerConfig.from_env()


class TestRetryPolicy:
    def test_exponential_with_cap(self) -> None:
        policy = RetryPolicy(initial_delay=10, max_delay=100)

        assert [policy.delay_for(n) for n in range(5)] == [10, 20, 40, 80, 100]

    def test_linear(self) -> None:
        policy = RetryPolicy(initial_delay=3, backoff="linear")

        assert [policy.delay_for(n) for n in range(3)] == [3, 6, 9]

    def test_defaults_match_work_manager(self) -> None:
        policy = RetryPolicy()

        assert policy.delay_for(0) == 10
        assert policy.delay_for(30) == 5 * 60 * 60

    @pytest.mark.parametrize(
        "kwargs", [{"backoff": "random"}, {"initial_delay": -1}, {"max_delay": -5}]
    )
    def test_invalid(self, kwargs) -> None:
        with pytest.raises(ConfigError):
            RetryPolicy(**kwargs)
