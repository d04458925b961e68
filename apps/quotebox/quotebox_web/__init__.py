"""Quotebox Flask application factory."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Tuple

from flask import Flask, current_app, g, render_template


def _discover_project_root() -> Path:
    """Return the repository root by walking up the filesystem.

    Returns:
        Path: Outermost directory containing ``pyproject.toml`` or
        ``README.md``. Falls back to the package directory when no markers
        are present.
    """

    current = Path(__file__).resolve().parent
    selected = current
    for candidate in [current] + list(current.parents):
        if any((candidate / marker).exists() for marker in ("pyproject.toml", "README.md")):
            selected = candidate
    return selected


PROJECT_ROOT = _discover_project_root()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))


from flask_wtf.csrf import CSRFProtect  # noqa: E402

from .config import AppConfig, load_config  # noqa: E402
from .database import create_db_engine, init_schema  # noqa: E402
from .repositories import QuotesRepository  # noqa: E402
from .sessions import EXTENSION_KEY, SessionStore  # noqa: E402

csrf = CSRFProtect()


def create_app(config: AppConfig | None = None) -> Flask:
    """Build and configure the Quotebox Flask application instance.

    Args:
        config: Optional :class:`AppConfig` override. When ``None`` the helper
            loads configuration via :func:`load_config`, which honours the
            ``QUOTEBOX_*`` environment variables.

    Returns:
        Flask: Fully initialised application. The instance carries a
        SQLAlchemy engine stored on ``app.config['DB_ENGINE']`` for
        repositories and a :class:`SessionStore` registered under
        ``app.extensions['quotebox_sessions']``.
    """

    app = Flask(__name__, instance_relative_config=True)
    app_config = config or load_config()
    app.config.update(
        SECRET_KEY=app_config.secret_key,
        PERMANENT_SESSION_LIFETIME=app_config.session_ttl,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        SESSION_COOKIE_SECURE=app_config.secure_cookies,
        WTF_CSRF_ENABLED=app_config.csrf_enabled,
        DEBUG=app_config.debug,
        QUOTEBOX_HOST=app_config.host,
        QUOTEBOX_PORT=app_config.port,
    )
    engine = create_db_engine(app_config.database_url)
    init_schema(engine)
    app.config["DB_ENGINE"] = engine
    app.extensions[EXTENSION_KEY] = SessionStore(ttl=app_config.session_ttl)

    csrf.init_app(app)

    from .blueprints.auth import auth_bp
    from .blueprints.quotes import quotes_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(quotes_bp)

    @app.errorhandler(404)
    def not_found(_: Any) -> Tuple[str, int]:
        return render_template("404.html"), 404

    @app.errorhandler(500)
    def server_error(_: Any) -> Tuple[str, int]:
        return render_template("500.html", message="Something went wrong."), 500

    @app.teardown_appcontext
    def teardown(_: Any) -> None:
        g.pop("quotes_repo", None)

    @app.cli.command("init-db")
    def init_db_command() -> None:
        """Initialize the database tables."""

        init_schema(engine)
        import click

        click.echo("Database initialized.")

    return app


def get_repository() -> QuotesRepository:
    """Return a cached repository bound to the active Flask request.

    Returns:
        QuotesRepository: Lazily constructed instance stored on
        :mod:`flask.g` so blueprints share one repository per request.
    """

    if not hasattr(g, "quotes_repo"):
        engine = current_app.config["DB_ENGINE"]
        g.quotes_repo = QuotesRepository(engine)
    return g.quotes_repo


__all__ = ["create_app", "AppConfig", "get_repository"]
