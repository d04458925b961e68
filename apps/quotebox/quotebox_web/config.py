"""Configuration helpers for the Quotebox web application.

Settings are read from environment variables so each deployment can
customize behaviour without modifying code:

* ``QUOTEBOX_DATABASE``: SQLAlchemy connection string. Defaults to a SQLite
  file inside ``instance/``.
* ``QUOTEBOX_SECRET_KEY``: Signs the session cookie and CSRF tokens. A
  one-time key is generated when unset.
* ``QUOTEBOX_SESSION_TTL_HOURS``: Fixed lifetime of a login session.
* ``QUOTEBOX_CSRF_ENABLED``: Toggles Flask-WTF CSRF protection.
* ``QUOTEBOX_SECURE_COOKIES``: Restricts the session cookie to HTTPS.
* ``QUOTEBOX_HOST``, ``QUOTEBOX_PORT`` and ``QUOTEBOX_DEBUG``: Development
  server binding used by ``flask_app.py``.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from secrets import token_urlsafe

TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
DEFAULT_SESSION_TTL_HOURS = 24
# Ten years.
MAX_SESSION_TTL_HOURS = 24 * 366 * 10
DEFAULT_PORT = 3000


@dataclass(slots=True)
class AppConfig:
    """Settings loaded from environment variables."""

    database_url: str
    secret_key: str
    session_ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS)
    csrf_enabled: bool = True
    secure_cookies: bool = False
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    debug: bool = False


def _resolve_secret_key() -> str:
    """Return a cryptographically strong secret key for Flask sessions."""

    configured = os.getenv("QUOTEBOX_SECRET_KEY")
    if configured:
        return configured

    generated = token_urlsafe(32)
    logging.getLogger("quotebox.config").warning(
        "QUOTEBOX_SECRET_KEY environment variable is not set; generated a one-time key."
    )
    return generated


def _env_flag(name: str, default: bool) -> bool:
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in TRUE_VALUES


def _resolve_session_ttl() -> timedelta:
    """Read ``QUOTEBOX_SESSION_TTL_HOURS`` falling back to 24 hours.

    Unparsable, non-finite, non-positive values and values above
    :data:`MAX_SESSION_TTL_HOURS` are ignored with a warning, so a typo in the
    environment never produces sessions that expire immediately or overflow
    the session clock.
    """

    raw_value = os.getenv("QUOTEBOX_SESSION_TTL_HOURS")
    if not raw_value:
        return timedelta(hours=DEFAULT_SESSION_TTL_HOURS)
    try:
        hours = float(raw_value)
    except ValueError:
        hours = 0
    if not math.isfinite(hours) or not 0 < hours <= MAX_SESSION_TTL_HOURS:
        logging.getLogger("quotebox.config").warning(
            "Ignoring invalid QUOTEBOX_SESSION_TTL_HOURS=%r", raw_value
        )
        return timedelta(hours=DEFAULT_SESSION_TTL_HOURS)
    return timedelta(hours=hours)


def _resolve_port() -> int:
    raw_value = os.getenv("QUOTEBOX_PORT")
    try:
        port = int(raw_value) if raw_value else DEFAULT_PORT
    except ValueError:
        port = 0
    if not 0 < port < 65536:
        logging.getLogger("quotebox.config").warning(
            "Ignoring invalid QUOTEBOX_PORT=%r", raw_value
        )
        return DEFAULT_PORT
    return port


def load_config() -> AppConfig:
    """Create an :class:`AppConfig` instance from environment variables."""

    default_db = Path("instance/quotebox.db")
    database = os.getenv("QUOTEBOX_DATABASE")
    if not database:
        default_db.parent.mkdir(parents=True, exist_ok=True)
        database = "sqlite:///" + str(default_db)
    return AppConfig(
        database_url=database,
        secret_key=_resolve_secret_key(),
        session_ttl=_resolve_session_ttl(),
        csrf_enabled=_env_flag("QUOTEBOX_CSRF_ENABLED", True),
        secure_cookies=_env_flag("QUOTEBOX_SECURE_COOKIES", False),
        host=os.getenv("QUOTEBOX_HOST", "127.0.0.1"),
        port=_resolve_port(),
        debug=_env_flag("QUOTEBOX_DEBUG", False),
    )
