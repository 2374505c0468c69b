# Copyright (c) Goodcatch.
# Licensed under the MIT license.

import dataclasses

import pytest

from fxk.core._error_codes import VALIDATION_CONFIG_INVALID, VALIDATION_CONFIG_MISSING
from fxk.core.config import DEFAULT_TIMEOUT, DEFAULT_URL, FxkConfig
from fxk.core.errors import ValidationError


def test_config_is_frozen(config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.app_id = "other"  # type: ignore[misc]


def test_endpoint_appends_method(config):
    assert config.endpoint("user/list") == "https://open.example.com/cgi/user/list"


def test_from_dict_accepts_camel_case_keys():
    cfg = FxkConfig.from_dict(
        {
            "appId": "a",
            "appSecret": "s",
            "permanentCode": "p",
            "url": "https://u/",
            "timeout": 3,
        }
    )
    assert cfg == FxkConfig(app_id="a", app_secret="s", permanent_code="p", url="https://u/", timeout=3)


def test_from_dict_reports_missing_keys():
    with pytest.raises(ValidationError) as ei:
        FxkConfig.from_dict({"app_id": "a", "url": "https://u/"})
    assert ei.value.subcode == VALIDATION_CONFIG_MISSING
    assert ei.value.details["missing"] == ["app_secret", "permanent_code", "timeout"]


def test_from_env(monkeypatch):
    monkeypatch.setenv("FXK_APP_ID", "a")
    monkeypatch.setenv("FXK_APP_SECRET", "s")
    monkeypatch.setenv("FXK_PERMANENT_CODE", "p")
    monkeypatch.delenv("FXK_URL", raising=False)
    monkeypatch.delenv("FXK_TIMEOUT", raising=False)

    cfg = FxkConfig.from_env()

    assert cfg.app_id == "a"
    assert cfg.url == DEFAULT_URL
    assert cfg.timeout == DEFAULT_TIMEOUT


def test_from_env_custom_url_and_timeout(monkeypatch):
    monkeypatch.setenv("FXK_APP_ID", "a")
    monkeypatch.setenv("FXK_APP_SECRET", "s")
    monkeypatch.setenv("FXK_PERMANENT_CODE", "p")
    monkeypatch.setenv("FXK_URL", "https://proxy.example/cgi/")
    monkeypatch.setenv("FXK_TIMEOUT", "2.5")

    cfg = FxkConfig.from_env()

    assert cfg.url == "https://proxy.example/cgi/"
    assert cfg.timeout == 2.5


def test_from_env_missing(monkeypatch):
    monkeypatch.delenv("FXK_APP_ID", raising=False)
    monkeypatch.setenv("FXK_APP_SECRET", "s")
    monkeypatch.delenv("FXK_PERMANENT_CODE", raising=False)

    with pytest.raises(ValidationError) as ei:
        FxkConfig.from_env()
    assert ei.value.details["missing"] == ["FXK_APP_ID", "FXK_PERMANENT_CODE"]


def test_from_env_bad_timeout(monkeypatch):
    monkeypatch.setenv("FXK_APP_ID", "a")
    monkeypatch.setenv("FXK_APP_SECRET", "s")
    monkeypatch.setenv("FXK_PERMANENT_CODE", "p")
    monkeypatch.setenv("FXK_TIMEOUT", "soon")

    with pytest.raises(ValidationError) as ei:
        FxkConfig.from_env()
    assert ei.value.subcode == VALIDATION_CONFIG_INVALID
