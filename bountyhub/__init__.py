"""
BountyHub
Flask Application Factory.

Usage:
    from bountyhub import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

from flask import Flask, abort, request
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from sqlalchemy import engine as _sa_engine
from sqlalchemy import event as _sa_event

from bountyhub.auth import init_auth
from bountyhub.config import config
from bountyhub.middleware.diagnostics import run_startup_diagnostics
from bountyhub.middleware.logging_config import configure_logging
from bountyhub.middleware.rate_limiter import init_rate_limits
from bountyhub.middleware.security_headers import init_security_headers
from bountyhub.middleware.timing import init_request_timing
from bountyhub.models import db
from bountyhub.utils.errors import register_error_handlers

logger = logging.getLogger(__name__)


# ── SQLite FK enforcement (global engine event) ─────────────────────────
@_sa_event.listens_for(_sa_engine.Engine, "connect")
def _enable_sqlite_fk(dbapi_conn, connection_record):
    """Enable foreign key enforcement for SQLite connections."""
    if "sqlite" in type(dbapi_conn).__module__:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


migrate = Migrate()
# Storage comes from RATELIMIT_STORAGE_URI (Redis in production, memory for dev)
limiter = Limiter(key_func=get_remote_address, default_limits=[])


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__, instance_relative_config=True)
    # Instantiated so ProductionConfig can refuse a missing DATABASE_URL / SECRET_KEY
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()],
             supports_credentials=True)
    else:
        CORS(app, supports_credentials=True)

    # ── Request guard (input length) ─────────────────────────────────────
    @app.before_request
    def _guard_request():
        max_len = app.config.get("MAX_CONTENT_LENGTH")
        if max_len and request.content_length and request.content_length > max_len:
            abort(413, description="Request body too large")

    # ── Authentication & CSRF middleware ──────────────────────────────────
    init_auth(app)

    # ── Security headers ─────────────────────────────────────────────────
    init_security_headers(app)

    # ── Request timing middleware ────────────────────────────────────────
    init_request_timing(app)

    # ── Import all models so Alembic can detect them ─────────────────────
    from bountyhub.models import program as _program_models    # noqa: F401
    from bountyhub.models import report as _report_models      # noqa: F401
    from bountyhub.models import resource as _resource_models  # noqa: F401
    from bountyhub.models import user as _user_models          # noqa: F401

    # ── Auto-create tables (CREATE IF NOT EXISTS) ────────────────────────
    if not app.config.get("TESTING"):
        with app.app_context():
            try:
                db.create_all()
                app.logger.info("db.create_all() completed successfully")
            except Exception as e:
                app.logger.warning("db.create_all() failed: %s", e)

    # ── Blueprints ───────────────────────────────────────────────────────
    from bountyhub.blueprints.auth_bp import auth_bp
    from bountyhub.blueprints.health_bp import health_bp
    from bountyhub.blueprints.program_bp import program_bp
    from bountyhub.blueprints.report_bp import report_bp
    from bountyhub.blueprints.resource_bp import resource_bp
    from bountyhub.blueprints.stats_bp import stats_bp
    from bountyhub.blueprints.user_bp import user_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(program_bp)
    app.register_blueprint(report_bp)
    app.register_blueprint(resource_bp)
    app.register_blueprint(stats_bp)
    app.register_blueprint(health_bp)

    # ── Error handlers ───────────────────────────────────────────────────
    register_error_handlers(app)

    # ── CLI commands ─────────────────────────────────────────────────────
    @app.cli.command("seed-demo")
    def seed_demo_cmd():
        """Load demo organizations, hackers, programs, reports and resources."""
        from bountyhub.services.seed_service import seed_demo_data
        count = seed_demo_data()
        logger.info("Seeded %s demo rows.", count)

    # ── Startup diagnostics ──────────────────────────────────────────────
    run_startup_diagnostics(app)

    # ── Rate limiting ────────────────────────────────────────────────────
    init_rate_limits(app, limiter)

    return app
