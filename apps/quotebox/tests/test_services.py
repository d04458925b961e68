"""Tests for the stats and game view-model helpers."""

from __future__ import annotations

from datetime import datetime, timezone

from packages.quotebox_common import Quote

from quotebox_web.services import (
    NOT_ENOUGH_QUOTES_MESSAGE,
    build_game_view,
    build_stats_payload,
)


def _quote(quote_id: int) -> Quote:
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return Quote(
        id=quote_id,
        user_id=3,
        quote_text=f"text {quote_id}",
        person_name="Bob",
        created_at=stamp,
        updated_at=stamp,
    )


def test_stats_payload_carries_every_field():
    (payload,) = build_stats_payload([_quote(1)])
    assert payload == {
        "id": 1,
        "quoteText": "text 1",
        "personName": "Bob",
        "location": None,
        "date": None,
        "userId": 3,
        "createdAt": "2024-05-01T12:00:00+00:00",
        "updatedAt": "2024-05-01T12:00:00+00:00",
    }


def test_game_view_needs_two_quotes():
    for quotes in ([], [_quote(1)]):
        view = build_game_view(quotes)
        assert view.error == NOT_ENOUGH_QUOTES_MESSAGE
        assert view.quotes == []

    view = build_game_view([_quote(1), _quote(2)])
    assert view.error is None
    assert [q["id"] for q in view.quotes] == [1, 2]
