"""Common domain models and helpers shared across Quotebox apps."""

from .quotes import Quote, User, quote_to_payload, quotes_to_payload

__all__ = [
    "Quote",
    "User",
    "quote_to_payload",
    "quotes_to_payload",
]
