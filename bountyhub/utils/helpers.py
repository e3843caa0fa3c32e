"""Shared utility functions for blueprints.

parse_positive_int:  query-string integer parsing with a fallback
like_escape:         literal text for LIKE / ILIKE patterns
db_commit_or_error:  single commit point per request
"""
import logging

from sqlalchemy.exc import IntegrityError, OperationalError

from bountyhub.models import db
from bountyhub.utils.errors import E, api_error

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def parse_positive_int(value, default, maximum=None):
    """Parse a query-string value as a positive int, else return *default*."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed < 1:
        return default
    if maximum is not None:
        parsed = min(parsed, maximum)
    return parsed


def like_escape(value: str) -> str:
    """Escape LIKE wildcards so *value* matches literally; pass ``escape=LIKE_ESCAPE``."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ── Database commit helper ───────────────────────────────────────────────────

def db_commit_or_error():
    """Commit the current SQLAlchemy session, returning an error response on failure.

    Returns:
        None on success.
        (response, status_code) tuple on failure — ready for ``return``.

    Usage::

        err = db_commit_or_error()
        if err:
            return err

    IntegrityError → 409 (duplicate / constraint violation)
    OperationalError → 500 (connection / lock issues)
    Other → 500 (unexpected)
    """
    try:
        db.session.commit()
        return None
    except IntegrityError as exc:
        db.session.rollback()
        logger.warning("Integrity error on commit: %s", exc.orig)
        return api_error(E.CONFLICT_DUPLICATE, "Duplicate or constraint violation")
    except OperationalError:
        db.session.rollback()
        logger.exception("Database operational error on commit")
        return api_error(E.DATABASE, "Database error")
    except Exception:
        db.session.rollback()
        logger.exception("Unexpected database error on commit")
        return api_error(E.DATABASE, "Database error")
