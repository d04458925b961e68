"""Configuration helper tests."""

from __future__ import annotations

from datetime import timedelta

import pytest

from quotebox_web.config import (
    MAX_SESSION_TTL_HOURS,
    _resolve_secret_key,
    _resolve_session_ttl,
    load_config,
)


def test_resolve_secret_key_prefers_env(monkeypatch):
    monkeypatch.setenv("QUOTEBOX_SECRET_KEY", "override-key")
    assert _resolve_secret_key() == "override-key"


def test_resolve_secret_key_generates_ephemeral(monkeypatch):
    monkeypatch.delenv("QUOTEBOX_SECRET_KEY", raising=False)
    key = _resolve_secret_key()
    assert isinstance(key, str)
    assert len(key) >= 32
    assert key != _resolve_secret_key()


def test_session_ttl_defaults_to_one_day(monkeypatch):
    monkeypatch.delenv("QUOTEBOX_SESSION_TTL_HOURS", raising=False)
    assert _resolve_session_ttl() == timedelta(hours=24)


def test_session_ttl_override_and_invalid_values(monkeypatch):
    monkeypatch.setenv("QUOTEBOX_SESSION_TTL_HOURS", "2")
    assert _resolve_session_ttl() == timedelta(hours=2)
    monkeypatch.setenv("QUOTEBOX_SESSION_TTL_HOURS", "soon")
    assert _resolve_session_ttl() == timedelta(hours=24)
    monkeypatch.setenv("QUOTEBOX_SESSION_TTL_HOURS", "-1")
    assert _resolve_session_ttl() == timedelta(hours=24)


@pytest.mark.parametrize("raw", ["inf", "-inf", "nan", "1e12", "87841"])
def test_session_ttl_rejects_unbounded_values(monkeypatch, raw):
    """Values that would overflow the session clock fall back to one day."""

    monkeypatch.setenv("QUOTEBOX_SESSION_TTL_HOURS", raw)
    assert _resolve_session_ttl() == timedelta(hours=24)


def test_session_ttl_accepts_maximum(monkeypatch):
    monkeypatch.setenv("QUOTEBOX_SESSION_TTL_HOURS", str(MAX_SESSION_TTL_HOURS))
    assert _resolve_session_ttl() == timedelta(hours=MAX_SESSION_TTL_HOURS)


def test_load_config_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("QUOTEBOX_DATABASE", f"sqlite:///{tmp_path / 'q.db'}")
    monkeypatch.setenv("QUOTEBOX_SECRET_KEY", "k")
    monkeypatch.setenv("QUOTEBOX_CSRF_ENABLED", "false")
    monkeypatch.setenv("QUOTEBOX_SECURE_COOKIES", "yes")
    config = load_config()
    assert config.database_url.endswith("q.db")
    assert config.secret_key == "k"
    assert config.csrf_enabled is False
    assert config.secure_cookies is True


def test_session_cookie_settings(app):
    assert app.config["SESSION_COOKIE_HTTPONLY"] is True
    assert app.config["SESSION_COOKIE_SAMESITE"] == "Lax"
    assert app.config["SESSION_COOKIE_SECURE"] is False
    assert app.config["PERMANENT_SESSION_LIFETIME"] == timedelta(hours=24)
