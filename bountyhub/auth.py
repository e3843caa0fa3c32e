"""
BountyHub
Authentication & Authorization Middleware.

Provides:
    - Cookie session loading: the signed Flask session carries an opaque
      token whose hash is looked up in ``user_sessions`` on every /api request
    - ``require_auth`` / ``require_role`` decorators for route handlers
    - CSRF protection for state-changing requests (JSON-only bodies)

Security model:
    - Read endpoints for programs, users, stats and resources are public
    - Mutations need a logged-in user; most also need a specific role
      (``organization`` or ``hacker``)
    - Ownership (who may touch which program/report) is decided by
      ``bountyhub.services.access``
"""

import functools
import logging

from flask import g, request
from flask import session as cookie_session

from bountyhub.core.exceptions import AccessDenied, AuthenticationError
from bountyhub.models import db
from bountyhub.models.user import USER_TYPES, User
from bountyhub.services import session_service
from bountyhub.utils.errors import E, api_error

logger = logging.getLogger(__name__)

SESSION_COOKIE_KEY = "sid"


# ── Login / logout helpers ───────────────────────────────────────────────────

def login_user(user: User) -> None:
    """Open a server-side session for *user* and bind it to the cookie."""
    raw_token = session_service.create_session(
        user.id, request.remote_addr, request.headers.get("User-Agent", ""),
    )
    cookie_session.clear()
    cookie_session.permanent = True
    cookie_session[SESSION_COOKIE_KEY] = raw_token
    g.current_user = user
    logger.info("User %s logged in", user.id)


def logout_user() -> bool:
    """Revoke the current session (if any) and clear the cookie."""
    raw_token = cookie_session.pop(SESSION_COOKIE_KEY, None)
    cookie_session.clear()
    g.current_user = None
    if not raw_token:
        return False
    return session_service.revoke_session_by_token(raw_token)


def current_user() -> User | None:
    return getattr(g, "current_user", None)


# ── Decorators ───────────────────────────────────────────────────────────────

def require_auth(f):
    """
    Decorator: require a logged-in user.

    Raises AuthenticationError (401) when the request has no valid session.
    """
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        if current_user() is None:
            raise AuthenticationError()
        return f(*args, **kwargs)

    return decorated


def require_role(role: str):
    """
    Decorator: require a logged-in user of the given type.

    Usage:
        @require_role("organization")
        def create_program(): ...
    """
    if role not in USER_TYPES:
        raise ValueError(f"Unknown role: {role}")

    def decorator(f):
        @functools.wraps(f)
        def decorated(*args, **kwargs):
            user = current_user()
            if user is None:
                raise AuthenticationError()
            if user.user_type != role:
                raise AccessDenied(user.id, request.path, f"This action requires the '{role}' role")
            return f(*args, **kwargs)
        return decorated
    return decorator


# ── CSRF protection for API ──────────────────────────────────────────────────

def _check_content_type():
    """
    For state-changing requests (POST/PUT/PATCH/DELETE) with a body, require
    Content-Type: application/json. HTML forms cannot send that content
    type, which blocks cross-site form posts riding on the session cookie.
    """
    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        ct = request.content_type or ""
        if "application/json" not in ct and request.content_length and request.content_length > 0:
            return api_error(
                E.VALIDATION_INVALID,
                "Content-Type must be application/json for state-changing requests",
                status=415,
            )
    return None


def _load_user_from_session():
    g.current_user = None
    raw_token = cookie_session.get(SESSION_COOKIE_KEY)
    if not raw_token:
        return
    user_session = session_service.resolve_session(raw_token)
    if user_session is None:
        cookie_session.pop(SESSION_COOKIE_KEY, None)
        return
    g.current_user = db.session.get(User, user_session.user_id)


# ── App-level before_request hook installer ──────────────────────────────────

def init_auth(app):
    """
    Install authentication middleware on the Flask app.

    - Resolves ``g.current_user`` for every /api request
    - Rejects non-JSON mutating requests
    """
    @app.before_request
    def _before_request_auth():
        g.current_user = None
        if not request.path.startswith("/api/"):
            return None
        if request.method == "OPTIONS":
            return None

        csrf_error = _check_content_type()
        if csrf_error:
            return csrf_error

        _load_user_from_session()
        return None

    logger.info("Auth middleware installed (session lifetime=%sh)",
                app.config.get("SESSION_LIFETIME_HOURS"))
