"""Route tests with CSRF protection switched on, as in production."""

from __future__ import annotations

import re
from pathlib import Path

import pytest

from quotebox_web import AppConfig, create_app
from quotebox_web.repositories import QuotesRepository

TOKEN_PATTERN = re.compile(rb'name="csrf_token" value="([^"]+)"')


@pytest.fixture()
def protected_app(tmp_path: Path):
    """Return an app built with the default CSRF setting."""

    config = AppConfig(
        database_url=f"sqlite:///{tmp_path / 'csrf.db'}",
        secret_key="testing",
    )
    application = create_app(config)
    application.config.update(TESTING=True)
    yield application


def _token(client, path: str) -> str:
    """Render ``path`` and return the first CSRF token embedded in its forms."""

    response = client.get(path)
    assert response.status_code == 200
    match = TOKEN_PATTERN.search(response.data)
    assert match is not None
    return match.group(1).decode()


def test_csrf_is_enabled_by_default(protected_app):
    assert protected_app.config["WTF_CSRF_ENABLED"] is True


def test_login_without_token_is_rejected(protected_app):
    client = protected_app.test_client()
    response = client.post("/login", data={"username": "alice"})
    assert response.status_code == 400
    repo = QuotesRepository(protected_app.config["DB_ENGINE"])
    assert repo.get_user_by_username("alice") is None


def test_quote_forms_work_with_rendered_tokens(protected_app):
    client = protected_app.test_client()
    repo = QuotesRepository(protected_app.config["DB_ENGINE"])

    response = client.post(
        "/login", data={"username": "alice", "csrf_token": _token(client, "/")}
    )
    assert response.status_code == 302

    tokenless = client.post("/add-quote", data={"quoteText": "Hi", "personName": "Bob"})
    assert tokenless.status_code == 400

    response = client.post(
        "/add-quote",
        data={
            "quoteText": "Hi",
            "personName": "Bob",
            "csrf_token": _token(client, "/add-quote"),
        },
    )
    assert response.status_code == 302
    user = repo.get_user_by_username("alice")
    (quote,) = repo.list_quotes(user.id)

    response = client.post(
        f"/quotes/{quote.id}/edit",
        data={
            "quoteText": "Hi!",
            "personName": "Bob",
            "csrf_token": _token(client, f"/quotes/{quote.id}/edit"),
        },
    )
    assert response.status_code == 302
    assert repo.get_quote(user.id, quote.id).quote_text == "Hi!"

    response = client.post(
        f"/quotes/{quote.id}/delete", data={"csrf_token": _token(client, "/home")}
    )
    assert response.status_code == 302
    assert b"No quotes yet" in client.get("/home").data
