"""
Session Service — server-side login sessions behind the signed cookie.

The cookie only carries an opaque random token; the database keeps its
SHA-256 hash, expiry and revocation flag.  All session persistence belongs
in this service, not in blueprints.
"""

import logging
from datetime import datetime, timedelta, timezone

from flask import current_app

from bountyhub.models import db
from bountyhub.models.user import UserSession
from bountyhub.utils.crypto import generate_session_token, hash_token

logger = logging.getLogger(__name__)

DEFAULT_SESSION_LIFETIME_HOURS = 24
# last_used_at is rewritten at most once per interval
LAST_USED_INTERVAL = timedelta(minutes=5)


def _lifetime() -> timedelta:
    hours = current_app.config.get("SESSION_LIFETIME_HOURS", DEFAULT_SESSION_LIFETIME_HOURS)
    return timedelta(hours=int(hours))


def create_session(user_id: int, ip_address: str | None, user_agent: str | None) -> str:
    """
    Persist a new session and return the raw token for the cookie.

    The raw token is never stored.
    """
    raw_token = generate_session_token()
    now = datetime.now(timezone.utc)
    session = UserSession(
        user_id=user_id,
        token_hash=hash_token(raw_token),
        ip_address=ip_address,
        user_agent=(user_agent or "")[:500],
        expires_at=now + _lifetime(),
        last_used_at=now,
    )
    db.session.add(session)
    db.session.commit()
    logger.info("Session opened for user %s (expires %s)", user_id, session.expires_at.isoformat())
    return raw_token


def resolve_session(raw_token: str) -> UserSession | None:
    """
    Return the active, unexpired session for a cookie token, or None.

    Expired sessions found here are revoked on the spot; live ones get
    ``last_used_at`` refreshed.
    """
    if not raw_token:
        return None
    session = UserSession.query.filter_by(token_hash=hash_token(raw_token), is_active=True).first()
    if session is None:
        return None
    if session.is_expired:
        revoke_session(session)
        return None
    _touch(session)
    return session


def _touch(session: UserSession) -> None:
    now = datetime.now(timezone.utc)
    last = session.last_used_at
    if last is not None and now - last.replace(tzinfo=timezone.utc) < LAST_USED_INTERVAL:
        return
    session.last_used_at = now
    db.session.commit()


def revoke_session(session: UserSession) -> None:
    """Mark a session as inactive and commit."""
    session.is_active = False
    db.session.commit()


def revoke_session_by_token(raw_token: str) -> bool:
    """
    Find an active session by token and revoke it.

    Returns True if a session was found and revoked, False otherwise.
    """
    session = UserSession.query.filter_by(token_hash=hash_token(raw_token), is_active=True).first()
    if session:
        session.is_active = False
        db.session.commit()
        logger.info("Session revoked for user %s", session.user_id)
        return True
    return False
