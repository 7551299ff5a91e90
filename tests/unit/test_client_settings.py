import logging

import pytest
from pydantic import ValidationError

from httpchain_interceptors import ClientSettings
from httpchain_interceptors.constants import LOGGER_NAME
from httpchain_interceptors.settings import configure_logging


class TestClientSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HTTPCHAIN_BASE_URL", raising=False)
        settings = ClientSettings()

        assert settings.base_url is None
        assert settings.timeout == 30.0
        assert settings.verify is True
        assert settings.log_level == "WARNING"
        assert settings.request_interceptors == []

    def test_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("HTTPCHAIN_BASE_URL", "https://api.example.com")
        monkeypatch.setenv("HTTPCHAIN_TIMEOUT", "5")
        monkeypatch.setenv("HTTPCHAIN_RAISE_FOR_STATUS", "false")
        monkeypatch.setenv("HTTPCHAIN_REQUEST_INTERCEPTORS", '["sample_interceptors:add_trace_header"]')

        settings = ClientSettings()

        assert settings.base_url == "https://api.example.com"
        assert settings.timeout == 5.0
        assert settings.raise_for_status is False
        assert settings.request_interceptors == ["sample_interceptors:add_trace_header"]

    def test_unknown_interceptor_is_rejected(self):
        with pytest.raises(ValidationError, match="Invalid interceptor function"):
            ClientSettings(response_interceptors=["sample_interceptors:missing"])

    @pytest.mark.parametrize("level", ["verbose", "debug"])
    def test_invalid_log_level(self, level):
        with pytest.raises(ValidationError):
            ClientSettings(log_level=level)

    def test_request_defaults(self):
        settings = ClientSettings(base_url="https://api.example.com", timeout=2.5, follow_redirects=False)

        defaults = settings.request_defaults()

        assert defaults.base_url == "https://api.example.com"
        assert defaults.timeout == 2.5
        assert defaults.follow_redirects is False
        assert defaults.raise_for_status is True


def test_configure_logging_sets_package_level():
    logger = logging.getLogger(LOGGER_NAME)
    previous = logger.level
    try:
        configure_logging("DEBUG")
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)
