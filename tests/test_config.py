from __future__ import annotations

import pytest
from pydantic import ValidationError

from core import config
from core.config import AppSettings, write_user_env_vars


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("ORION_CLIENT_BROKER_URL", "http://orion.example:1026")
    monkeypatch.setenv("ORION_CLIENT_LOG_LEVEL", "debug")
    settings = AppSettings()
    assert settings.broker_url == "http://orion.example:1026"
    assert settings.log_level == "DEBUG"


def test_invalid_values_are_rejected(monkeypatch):
    monkeypatch.setenv("ORION_CLIENT_HTTP_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        AppSettings()


def test_unknown_log_level(monkeypatch):
    monkeypatch.setenv("ORION_CLIENT_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        AppSettings()


def test_write_user_env_vars_merges(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path / "cfg")

    write_user_env_vars({"ORION_CLIENT_BROKER_URL": "http://a:1026", "ORION_CLIENT_LOG_LEVEL": "INFO"})
    path = write_user_env_vars({"ORION_CLIENT_BROKER_URL": "http://b:1026", "ORION_CLIENT_LOG_LEVEL": None})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("#")
    assert "ORION_CLIENT_BROKER_URL=http://b:1026" in lines
    assert "ORION_CLIENT_LOG_LEVEL=INFO" in lines
