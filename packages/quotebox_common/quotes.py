"""Quote domain models and serialization helpers.

These dataclasses provide a shared representation of users and the quotes
they collect. They intentionally avoid persistence concerns so the models
can be used from the Flask UI as well as maintenance scripts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional


@dataclass(slots=True)
class User:
    """Account identified by a plain username."""

    username: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class Quote:
    """A saying attributed to a person, owned by a single user."""

    user_id: int
    quote_text: str
    person_name: str
    location: Optional[str] = None
    date: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def quote_to_payload(quote: Quote) -> Dict[str, Any]:
    """Return a JSON-ready mapping with every stored field of ``quote``.

    Keys use camelCase because the payload is consumed by browser scripts on
    the stats and game pages.
    """

    return {
        "id": quote.id,
        "quoteText": quote.quote_text,
        "personName": quote.person_name,
        "location": quote.location,
        "date": quote.date,
        "userId": quote.user_id,
        "createdAt": _isoformat(quote.created_at),
        "updatedAt": _isoformat(quote.updated_at),
    }


def quotes_to_payload(quotes: Iterable[Quote]) -> List[Dict[str, Any]]:
    """Serialize ``quotes`` preserving their order."""

    return [quote_to_payload(quote) for quote in quotes]
