"""Tests for settings loading (core/config.py)."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_config_dir, write_user_env_vars


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSU_URL", "https://portainer.local:9443/")
    monkeypatch.setenv("PSU_INSECURE", "true")
    settings = AppSettings(_env_file=None)
    assert settings.url == "https://portainer.local:9443/"
    assert settings.insecure is True
    assert settings.api_url == "https://portainer.local:9443/api/"


def test_env_file_is_read(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("PSU_USER=admin\nPSU_PASSWORD=secret\n", encoding="utf-8")
    settings = AppSettings(_env_file=env_file)
    assert settings.user == "admin"
    assert settings.password == "secret"


def test_write_user_env_vars_merges(tmp_path: Path) -> None:
    env_path = tmp_path / "psu" / ".env"
    write_user_env_vars({"PSU_URL": "http://a", "PSU_USER": "admin"}, env_path=env_path)
    write_user_env_vars({"PSU_URL": "http://b", "PSU_PASSWORD": None}, env_path=env_path)

    lines = env_path.read_text(encoding="utf-8").splitlines()
    assert lines == ["# psu user config (.env)", "PSU_URL=http://b", "PSU_USER=admin"]


def test_user_config_dir_honours_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert get_user_config_dir() == tmp_path / "psu"


def test_log_level_is_normalised(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSU_LOG_LEVEL", " debug ")
    assert AppSettings(_env_file=None).log_level == "DEBUG"


def test_invalid_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSU_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)
