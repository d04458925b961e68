"""View-model helpers for the stats and game pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from packages.quotebox_common import Quote, quotes_to_payload

MIN_GAME_QUOTES = 2
NOT_ENOUGH_QUOTES_MESSAGE = (
    f"You need at least {MIN_GAME_QUOTES} quotes to play the game!"
)


@dataclass(slots=True)
class GameView:
    """Data handed to the quiz template.

    Exactly one of ``error`` and ``quotes`` is meaningful: either the user
    does not have enough quotes, or ``quotes`` carries the serialized set.
    """

    quotes: List[Dict[str, Any]]
    error: Optional[str] = None


def build_stats_payload(quotes: Sequence[Quote]) -> List[Dict[str, Any]]:
    """Serialize the full quote set for client-side charts."""

    return quotes_to_payload(quotes)


def build_game_view(quotes: Sequence[Quote]) -> GameView:
    """Return the quiz data, or the insufficiency notice for small sets."""

    if len(quotes) < MIN_GAME_QUOTES:
        return GameView(quotes=[], error=NOT_ENOUGH_QUOTES_MESSAGE)
    return GameView(quotes=quotes_to_payload(quotes))
