"""Landing page, login and logout routes.

Login is a find-or-create on a plain username: no password is checked, so
anyone who types a username gets that user's quotes. This mirrors the
product's original behaviour and is a known weakness, not a safeguard.
"""

from __future__ import annotations

from typing import Union

from flask import (
    Blueprint,
    Response,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from sqlalchemy.exc import SQLAlchemyError

from .. import get_repository
from ..forms import parse_username
from ..sessions import current_session, end_session, start_session

auth_bp = Blueprint("auth", __name__)


@auth_bp.get("/")
def landing() -> Union[str, Response]:
    """Render the login form, or jump to the listing for a live session."""

    if current_session() is not None:
        return redirect(url_for("quotes.home"))
    return render_template("landing.html")


@auth_bp.post("/login")
def login() -> Union[Response, tuple]:
    """Find or create the submitted user and start a session."""

    username = parse_username(request.form)
    if username is None:
        flash("Please enter a username.", "warning")
        return redirect(url_for("auth.landing"))

    try:
        user = get_repository().find_or_create_user(username)
    except SQLAlchemyError:
        current_app.logger.exception("Error logging in %r", username)
        return render_template("500.html", message="Error logging in."), 500

    start_session(user.id, user.username)
    current_app.logger.info("User %s logged in", user.id)
    return redirect(url_for("quotes.home"))


@auth_bp.get("/logout")
def logout() -> Response:
    """End the current session and return to the landing page."""

    end_session()
    return redirect(url_for("auth.landing"))
