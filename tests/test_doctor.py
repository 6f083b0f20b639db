"""Tests for the doctor command (cli/doctor.py)."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cli import doctor

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSU_URL", "https://portainer.test")
    monkeypatch.setenv("PSU_AUTH_TOKEN", "token")


def test_doctor_reports_healthy_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(doctor, "_check_status", lambda settings: (True, "Portainer 2.19.4"))
    monkeypatch.setattr(doctor, "_check_auth", lambda settings: (True, "2 endpoint(s) visible"))

    result = runner.invoke(doctor.app, ["run"])

    assert result.exit_code == 0, result.output
    assert "Portainer 2.19.4" in result.output
    assert "PSU_AUTH_TOKEN" in result.output


def test_doctor_fails_when_unreachable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(doctor, "_check_status", lambda settings: (False, "connection refused"))

    def _unexpected(settings: object) -> tuple[bool, str]:
        raise AssertionError("auth must not be checked when the server is unreachable")

    monkeypatch.setattr(doctor, "_check_auth", _unexpected)

    result = runner.invoke(doctor.app, ["run"])

    assert result.exit_code == 1
    assert "connection refused" in result.output
