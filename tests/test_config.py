from __future__ import annotations

import logging

import pytest

from ui.config import DEFAULT_PAGESPEED_ENDPOINT, DEFAULT_SAVE_ENDPOINT, AppConfig

_VARS = ("PAGESPEED_API_KEY", "PAGESPEED_ENDPOINT", "SAVE_ENDPOINT", "REQUEST_TIMEOUT_S", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = AppConfig.from_env()

    assert config.pagespeed_api_key is None
    assert config.pagespeed_endpoint == DEFAULT_PAGESPEED_ENDPOINT
    assert config.save_endpoint == DEFAULT_SAVE_ENDPOINT
    assert config.request_timeout_s is None
    assert config.log_level_value == logging.INFO


def test_overrides(monkeypatch):
    monkeypatch.setenv("PAGESPEED_API_KEY", " abc ")
    monkeypatch.setenv("SAVE_ENDPOINT", "http://backend:8000/api/save")
    monkeypatch.setenv("REQUEST_TIMEOUT_S", "12.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = AppConfig.from_env()

    assert config.pagespeed_api_key == "abc"
    assert config.save_endpoint == "http://backend:8000/api/save"
    assert config.request_timeout_s == 12.5
    assert config.log_level_value == logging.DEBUG


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_bad_timeout(monkeypatch, raw):
    monkeypatch.setenv("REQUEST_TIMEOUT_S", raw)
    with pytest.raises(ValueError, match="REQUEST_TIMEOUT_S"):
        AppConfig.from_env()


def test_bad_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="LOG_LEVEL"):
        AppConfig.from_env()
