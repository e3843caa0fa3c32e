"""
Startup diagnostics — runs once when the Flask app starts.

Checks the database and optional Redis and logs a summary banner.
"""

import logging
import sys

import redis
from flask import Flask

from bountyhub.models import db

logger = logging.getLogger(__name__)


def _row_counts() -> dict:
    from bountyhub.models.program import Program
    from bountyhub.models.report import Report
    from bountyhub.models.user import User

    return {
        "users": User.query.count(),
        "programs": Program.query.count(),
        "reports": Report.query.count(),
    }


def run_startup_diagnostics(app: Flask):
    """Run diagnostic checks during app startup (inside app context)."""
    if app.config.get("TESTING"):
        return  # skip during tests for speed

    issues: list[str] = []

    with app.app_context():
        py = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

        # ── Database connectivity ────────────────────────────────────
        db_status = "ok"
        db_uri = str(app.config.get("SQLALCHEMY_DATABASE_URI", ""))
        db_type = "PostgreSQL" if "postgresql" in db_uri else "SQLite" if "sqlite" in db_uri else "unknown"
        counts = {}
        try:
            db.session.execute(db.text("SELECT 1"))
            counts = _row_counts()
        except Exception as exc:
            db_status = f"FAILED ({exc})"
            issues.append(f"Database unreachable: {exc}")

        # ── Redis (rate-limit storage) ───────────────────────────────
        redis_url = app.config.get("RATELIMIT_STORAGE_URI", "")
        redis_status = "not configured (memory storage)"
        if redis_url.startswith("redis"):
            try:
                redis.from_url(redis_url, socket_timeout=2).ping()
                redis_status = "ok"
            except redis.RedisError:
                redis_status = "unreachable"
                issues.append("Redis unreachable — rate limits will fail open")

        data_line = ", ".join(f"{k}={v}" for k, v in counts.items()) or "n/a"
        banner = f"""
╔══════════════════════════════════════════════════════════════╗
║  BountyHub — Startup Diagnostics                             ║
╠══════════════════════════════════════════════════════════════╣
║  Python      : {py:<46s}║
║  Debug       : {str(app.debug):<46s}║
║  Database    : {f"{db_type} ({db_status})"[:46]:<46s}║
║  Data        : {data_line[:46]:<46s}║
║  Redis       : {redis_status[:46]:<46s}║
║  Tier check  : {'ENFORCED' if app.config.get('ENFORCE_REWARD_TIERS') else 'off':<46s}║
╚══════════════════════════════════════════════════════════════╝"""
        logger.info(banner)

        if issues:
            logger.warning("Startup issues detected:")
            for issue in issues:
                logger.warning("  ⚠ %s", issue)
        else:
            logger.info("✅ All startup checks passed")
