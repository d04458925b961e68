"""Server-side login sessions and the ownership guard.

The browser only ever holds an opaque token inside Flask's signed cookie.
The token maps to a :class:`SessionState` kept in a :class:`SessionStore`
for the lifetime of the process. Each session expires a fixed interval after
creation; reading it never extends that deadline.
"""

from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Callable, Dict, Optional

from flask import current_app, redirect, session, url_for

logger = logging.getLogger("quotebox.sessions")

SESSION_TOKEN_KEY = "session_token"
EXTENSION_KEY = "quotebox_sessions"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class SessionState:
    """Identity bound to a login session."""

    token: str
    user_id: int
    username: str
    expires_at: datetime


class SessionStore:
    """Thread-safe in-memory mapping of session tokens to :class:`SessionState`.

    Args:
        ttl: Fixed lifetime applied to every new session.
        clock: Callable returning the current aware ``datetime``. Tests pass a
            controllable clock to exercise expiry.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, SessionState] = {}

    def create(self, user_id: int, username: str) -> SessionState:
        """Start a new session for the given user and return it.

        Args:
            user_id: Primary key of the logged-in :class:`User`.
            username: Display name cached alongside the id.

        Returns:
            SessionState: Fresh state whose ``expires_at`` is the creation
            time plus the store TTL. Expired entries are swept first.
        """

        now = self._clock()
        state = SessionState(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            username=username,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._purge_locked(now)
            self._sessions[state.token] = state
        logger.debug("Created session for user %s", user_id)
        return state

    def get(self, token: Optional[str]) -> Optional[SessionState]:
        """Return the live session for ``token``; expired entries are evicted."""

        if not token:
            return None
        with self._lock:
            state = self._sessions.get(token)
            if state is None:
                return None
            if state.expires_at <= self._clock():
                del self._sessions[token]
                logger.debug("Session for user %s expired", state.user_id)
                return None
            return state

    def delete(self, token: Optional[str]) -> None:
        """Forget ``token``. Unknown tokens are ignored."""

        if not token:
            return
        with self._lock:
            state = self._sessions.pop(token, None)
        if state is not None:
            logger.debug("Deleted session for user %s", state.user_id)

    def purge_expired(self) -> int:
        """Drop every expired session and return how many were removed."""

        with self._lock:
            return self._purge_locked(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _purge_locked(self, now: datetime) -> int:
        expired = [
            token for token, state in self._sessions.items() if state.expires_at <= now
        ]
        for token in expired:
            del self._sessions[token]
        return len(expired)


def get_session_store() -> SessionStore:
    """Return the store registered on the active application."""

    return current_app.extensions[EXTENSION_KEY]


def current_session() -> Optional[SessionState]:
    """Resolve the session referenced by the request's cookie, if any."""

    return get_session_store().get(session.get(SESSION_TOKEN_KEY))


def start_session(user_id: int, username: str) -> SessionState:
    """Replace any session held by this browser with a fresh one.

    Returns:
        SessionState: The new state; its token is written to the signed
        Flask session cookie, which is marked permanent so the browser keeps
        it for ``PERMANENT_SESSION_LIFETIME``.

    External Dependencies:
        * Reads and clears :data:`flask.session`.
        * Uses the store returned by :func:`get_session_store`.
    """

    store = get_session_store()
    store.delete(session.get(SESSION_TOKEN_KEY))
    state = store.create(user_id, username)
    session.clear()
    session.permanent = True
    session[SESSION_TOKEN_KEY] = state.token
    return state


def end_session() -> None:
    """Invalidate the server-side entry and clear the cookie."""

    get_session_store().delete(session.get(SESSION_TOKEN_KEY))
    session.clear()


def session_required(view: Callable) -> Callable:
    """Protect a view so it only runs for a live session.

    Requests without one are redirected to the landing page before the view
    executes. The resolved :class:`SessionState` is passed to the view as the
    ``current`` keyword argument.
    """

    @wraps(view)
    def wrapped(*args, **kwargs):
        state = current_session()
        if state is None:
            return redirect(url_for("auth.landing"))
        return view(*args, current=state, **kwargs)

    return wrapped
