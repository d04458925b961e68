"""Form parsing helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(slots=True)
class QuoteFormData:
    """Quote fields read from a create or edit submission.

    Required fields are passed through untouched; the database rejects empty
    values when the row is written.
    """

    quote_text: str
    person_name: str
    location: Optional[str]
    date: Optional[str]


def _optional(value: Optional[str]) -> Optional[str]:
    """Map a blank or missing submission to ``None``."""

    return value or None


def parse_quote_form(form: Mapping[str, str]) -> QuoteFormData:
    """Read quote fields from ``form`` without trimming or sanitizing them."""

    return QuoteFormData(
        quote_text=form.get("quoteText", ""),
        person_name=form.get("personName", ""),
        location=_optional(form.get("location")),
        date=_optional(form.get("date")),
    )


def parse_username(form: Mapping[str, str]) -> Optional[str]:
    """Return the submitted username or ``None`` when it is blank."""

    username = form.get("username", "")
    if not username.strip():
        return None
    return username
