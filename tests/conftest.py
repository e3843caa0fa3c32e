"""
Shared pytest fixtures for the BountyHub test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Database table creation/teardown (session-scoped)
    - session: Per-test DB cleanup w/ rollback + recreate (autouse)
    - client: anonymous Flask test client
    - make_user: register a user on a fresh client (one cookie jar per user)
    - org_client / hacker_client / other_hacker_client: logged-in clients
    - program: active program owned by ``org_client``
    - report: pending report on ``program`` submitted by ``hacker_client``
"""

import itertools

import pytest

from bountyhub import create_app
from bountyhub.models import db as _db

PASSWORD = "correct-horse-42"

_seq = itertools.count(1)


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    return application


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, rollback after test, recreate tables."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Anonymous Flask test client."""
    return app.test_client()


# ── Users ────────────────────────────────────────────────────────────────


def register_payload(user_type, /, **kw):
    n = next(_seq)
    payload = {
        "username": f"{user_type}{n}",
        "email": f"{user_type}{n}@bountyhub.io",
        "password": PASSWORD,
        "full_name": f"Test {user_type.title()} {n}",
        "user_type": user_type,
    }
    payload.update(kw)
    return payload


@pytest.fixture()
def make_user(app):
    """Factory: register a user and return its logged-in client.

    The registered user's JSON is available as ``client.user``.
    """
    def _make(user_type, **kw):
        c = app.test_client()
        res = c.post("/api/auth/register", json=register_payload(user_type, **kw))
        assert res.status_code == 201, res.get_json()
        c.user = res.get_json()
        return c

    return _make


@pytest.fixture()
def org_client(make_user):
    return make_user("organization")


@pytest.fixture()
def hacker_client(make_user):
    return make_user("hacker")


@pytest.fixture()
def other_hacker_client(make_user):
    return make_user("hacker")


# ── Programs & reports ───────────────────────────────────────────────────


def program_payload(**kw):
    payload = {
        "title": "Acme Web Bounty",
        "description": "Find bugs in the Acme storefront",
        "industry": "Retail",
        "scope": "*.acme.test and the iOS app",
        "rules": "No denial of service. No social engineering.",
        "rewards": {"critical": 5000, "high": 2000, "medium": 500, "low": 100},
        "tags": ["Web", "API"],
    }
    payload.update(kw)
    return payload


def report_payload(program_id, **kw):
    payload = {
        "program_id": program_id,
        "title": "Stored XSS in profile bio",
        "description": "The bio field renders unescaped HTML",
        "severity": "high",
        "steps_to_reproduce": "1. Set bio to <script>alert(1)</script>\n2. View profile",
        "impact": "Session theft for any visitor of the profile",
    }
    payload.update(kw)
    return payload


@pytest.fixture()
def program(org_client):
    """An active program owned by ``org_client``."""
    res = org_client.post("/api/programs", json=program_payload())
    assert res.status_code == 201, res.get_json()
    return res.get_json()


@pytest.fixture()
def report(hacker_client, program):
    """A pending report on ``program`` submitted by ``hacker_client``."""
    res = hacker_client.post("/api/reports", json=report_payload(program["id"]))
    assert res.status_code == 201, res.get_json()
    return res.get_json()
