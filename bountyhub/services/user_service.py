"""
User Service — registration, credential checks, lookups.
"""

import logging

from bountyhub.core.exceptions import ConflictError, NotFoundError, ValidationError
from bountyhub.models import db
from bountyhub.models.user import USER_TYPE_HACKER, USER_TYPES, User
from bountyhub.utils.crypto import hash_password, verify_password
from bountyhub.utils.validation import validate_registration

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
# Registration & login
# ═══════════════════════════════════════════════════════════════
def register_user(data: dict) -> User:
    """Validate a registration payload and create the user (flushed, not committed)."""
    cleaned = validate_registration(data)

    if User.query.filter_by(username=cleaned["username"]).first():
        raise ConflictError("User", "username", cleaned["username"])
    if User.query.filter_by(email=cleaned["email"]).first():
        raise ConflictError("User", "email", cleaned["email"])

    user = User(
        username=cleaned["username"],
        email=cleaned["email"],
        password_hash=hash_password(cleaned["password"]),
        full_name=cleaned["full_name"],
        user_type=cleaned["user_type"],
        bio=cleaned["bio"],
        avatar_url=cleaned["avatar_url"],
        reputation=0,
    )
    db.session.add(user)
    db.session.flush()
    logger.info("Registered %s user %s (id=%s)", user.user_type, user.username, user.id)
    return user


def authenticate_user(username: str, password: str) -> User | None:
    """Return the user when the credentials match, else None.

    ``username`` may also be the account email.
    """
    if not username or not password:
        return None
    user = User.query.filter(
        (User.username == username) | (User.email == username)
    ).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for '%s'", username[:50])
        return None
    return user


# ═══════════════════════════════════════════════════════════════
# Lookups
# ═══════════════════════════════════════════════════════════════
def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    return user


def list_users_by_type(user_type: str) -> list[User]:
    if user_type not in USER_TYPES:
        raise ValidationError(f"Invalid user type '{user_type}'", details={"user_type": "invalid"})
    return User.query.filter_by(user_type=user_type).order_by(User.id).all()


def top_hackers(limit: int) -> list[User]:
    """Hackers ordered by reputation, highest first."""
    return (
        User.query.filter_by(user_type=USER_TYPE_HACKER)
        .order_by(User.reputation.desc(), User.id)
        .limit(limit)
        .all()
    )
