"""Database access layer for the Quotebox web app.

Every query that touches a quote by id also filters on the owning user, so
callers never need a separate authorization check: a quote belonging to
someone else behaves exactly like a quote that does not exist.
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, NoResultFound

from packages.quotebox_common import Quote, User

from .database import quotes, session_scope, users


class QuotesRepository:
    """Provides user lookup and owner-scoped CRUD operations for quotes."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Return the user with exactly ``username`` or ``None``."""

        with session_scope(self._engine) as session:
            row = session.execute(
                select(users).where(users.c.username == username)
            ).one_or_none()
        return self._row_to_user(row) if row is not None else None

    def find_or_create_user(self, username: str) -> User:
        """Return the user named ``username``, creating it when missing.

        A concurrent request may insert the same username between the lookup
        and the insert. The unique constraint rejects the loser, which then
        re-reads the row created by the winner.

        Args:
            username: Exact login name; matched with the database collation.

        Returns:
            User: The existing or newly inserted account with its ``id`` set.

        Raises:
            IntegrityError: When the insert fails for a reason other than a
                lost race, for example an empty username.
        """

        existing = self.get_user_by_username(username)
        if existing is not None:
            return existing
        try:
            with session_scope(self._engine) as session:
                result = session.execute(
                    insert(users).values(username=username).returning(users.c.id)
                )
                user_id = result.scalar_one()
        except IntegrityError:
            existing = self.get_user_by_username(username)
            if existing is None:
                raise
            return existing
        return User(id=user_id, username=username)

    def list_quotes(self, user_id: int) -> List[Quote]:
        """Return every quote owned by ``user_id``, newest first."""

        with session_scope(self._engine) as session:
            rows = session.execute(
                select(quotes)
                .where(quotes.c.user_id == user_id)
                .order_by(quotes.c.created_at.desc(), quotes.c.id.desc())
            ).all()
        return [self._row_to_quote(row) for row in rows]

    def get_quote(self, user_id: int, quote_id: int) -> Quote:
        """Fetch a single quote owned by ``user_id``.

        Raises:
            NoResultFound: When the quote does not exist or belongs to another
                user.
        """

        with session_scope(self._engine) as session:
            row = session.execute(
                select(quotes).where(
                    quotes.c.id == quote_id,
                    quotes.c.user_id == user_id,
                )
            ).one_or_none()
        if row is None:
            raise NoResultFound(f"Quote {quote_id} not found")
        return self._row_to_quote(row)

    def create_quote(self, quote: Quote) -> Quote:
        """Persist a new quote and return it with an ID.

        Args:
            quote: Unsaved :class:`Quote`; ``user_id`` becomes the owner.

        Returns:
            Quote: Copy of ``quote`` carrying the generated ``id``.

        Raises:
            IntegrityError: When ``quote_text`` or ``person_name`` is empty.
            The transaction is rolled back and no row is written.
        """

        payload = {
            "user_id": quote.user_id,
            "quote_text": quote.quote_text,
            "person_name": quote.person_name,
            "location": quote.location,
            "date": quote.date,
        }
        with session_scope(self._engine) as session:
            result = session.execute(
                insert(quotes).values(**payload).returning(quotes.c.id)
            )
            quote_id = result.scalar_one()
        return replace(quote, id=quote_id)

    def update_quote(
        self,
        user_id: int,
        quote_id: int,
        *,
        quote_text: str,
        person_name: str,
        location: Optional[str],
        date: Optional[str],
    ) -> int:
        """Replace the content fields of an owned quote.

        Returns:
            int: Number of rows changed. Zero when the quote is missing or
            owned by another user.
        """

        with session_scope(self._engine) as session:
            result = session.execute(
                update(quotes)
                .where(quotes.c.id == quote_id, quotes.c.user_id == user_id)
                .values(
                    quote_text=quote_text,
                    person_name=person_name,
                    location=location,
                    date=date,
                )
            )
            return result.rowcount

    def delete_quote(self, user_id: int, quote_id: int) -> int:
        """Remove an owned quote and return the number of deleted rows."""

        with session_scope(self._engine) as session:
            result = session.execute(
                delete(quotes).where(
                    quotes.c.id == quote_id,
                    quotes.c.user_id == user_id,
                )
            )
            return result.rowcount

    @staticmethod
    def _row_to_user(row) -> User:
        """Convert a SQLAlchemy row to a :class:`User`."""

        values = row._mapping
        return User(
            id=values["id"],
            username=values["username"],
            created_at=values["created_at"],
        )

    @staticmethod
    def _row_to_quote(row) -> Quote:
        """Convert a SQLAlchemy row to a :class:`Quote`."""

        values = row._mapping
        return Quote(
            id=values["id"],
            user_id=values["user_id"],
            quote_text=values["quote_text"],
            person_name=values["person_name"],
            location=values["location"],
            date=values["date"],
            created_at=values["created_at"],
            updated_at=values["updated_at"],
        )
