"""HTTP routes for managing, charting and quizzing on a user's quotes."""

from __future__ import annotations

from typing import Tuple

from flask import (
    Blueprint,
    Response,
    abort,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)
from sqlalchemy.exc import NoResultFound, SQLAlchemyError

from packages.quotebox_common import Quote

from .. import get_repository
from ..forms import parse_quote_form
from ..services import build_game_view, build_stats_payload
from ..sessions import SessionState, session_required

quotes_bp = Blueprint("quotes", __name__)


def _failure(message: str) -> Tuple[str, int]:
    """Log the active exception and render the generic error page."""

    current_app.logger.exception(message)
    return render_template("500.html", message=f"{message}."), 500


@quotes_bp.get("/home")
@session_required
def home(current: SessionState) -> str | Tuple[str, int]:
    """Render every quote owned by the session user, newest first."""

    try:
        quotes = get_repository().list_quotes(current.user_id)
    except SQLAlchemyError:
        return _failure("Error loading quotes")
    return render_template(
        "quotes/home.html",
        title="Home",
        quotes=quotes,
        username=current.username,
    )


@quotes_bp.get("/add-quote")
@session_required
def new_quote_form(current: SessionState) -> str:
    """Render the quote creation form."""

    return render_template(
        "quotes/add_quote.html", title="Add New Quote", username=current.username
    )


@quotes_bp.post("/add-quote")
@session_required
def create_quote(current: SessionState) -> Response | Tuple[str, int]:
    """Persist a new quote for the session user."""

    form_data = parse_quote_form(request.form)
    quote = Quote(
        user_id=current.user_id,
        quote_text=form_data.quote_text,
        person_name=form_data.person_name,
        location=form_data.location,
        date=form_data.date,
    )
    try:
        get_repository().create_quote(quote)
    except SQLAlchemyError:
        return _failure("Error adding quote")
    flash("Quote added.", "success")
    return redirect(url_for("quotes.home"))


@quotes_bp.get("/quotes/<int:quote_id>/edit")
@session_required
def edit_quote_form(current: SessionState, quote_id: int) -> str | Tuple[str, int]:
    """Render the edit form for an owned quote or 404."""

    try:
        quote = get_repository().get_quote(current.user_id, quote_id)
    except NoResultFound:
        abort(404)
    except SQLAlchemyError:
        return _failure("Error loading quote")
    return render_template(
        "quotes/edit_quote.html",
        title="Edit Quote",
        quote=quote,
        username=current.username,
    )


@quotes_bp.post("/quotes/<int:quote_id>/edit")
@session_required
def update_quote(current: SessionState, quote_id: int) -> Response | Tuple[str, int]:
    """Replace an owned quote's content; foreign or missing ids change nothing."""

    form_data = parse_quote_form(request.form)
    try:
        get_repository().update_quote(
            current.user_id,
            quote_id,
            quote_text=form_data.quote_text,
            person_name=form_data.person_name,
            location=form_data.location,
            date=form_data.date,
        )
    except SQLAlchemyError:
        return _failure("Error updating quote")
    return redirect(url_for("quotes.home"))


@quotes_bp.post("/quotes/<int:quote_id>/delete")
@session_required
def delete_quote(current: SessionState, quote_id: int) -> Response | Tuple[str, int]:
    """Delete an owned quote; foreign or missing ids change nothing."""

    try:
        get_repository().delete_quote(current.user_id, quote_id)
    except SQLAlchemyError:
        return _failure("Error deleting quote")
    return redirect(url_for("quotes.home"))


@quotes_bp.get("/stats")
@session_required
def stats(current: SessionState) -> str | Tuple[str, int]:
    """Render the statistics page with the user's quotes embedded as JSON."""

    try:
        quotes = get_repository().list_quotes(current.user_id)
    except SQLAlchemyError:
        return _failure("Error loading stats")
    return render_template(
        "quotes/stats.html",
        title="Statistics",
        quotes=build_stats_payload(quotes),
        username=current.username,
    )


@quotes_bp.get("/game")
@session_required
def game(current: SessionState) -> str | Tuple[str, int]:
    """Render the quiz, or a notice when fewer than two quotes exist."""

    try:
        quotes = get_repository().list_quotes(current.user_id)
    except SQLAlchemyError:
        return _failure("Error loading game")
    view = build_game_view(quotes)
    return render_template(
        "quotes/game.html",
        title="Quiz Game",
        quotes=view.quotes,
        error=view.error,
        username=current.username,
    )
