"""
Tests — cookie-session authentication.

Covers:
    - Registration (auto-login, secrets never returned, duplicates → 409)
    - Login by username or email, bad credentials → 401
    - Session endpoint, logout revocation
    - Role guards and JSON-only mutating requests
"""

from datetime import datetime, timedelta, timezone

from conftest import PASSWORD, register_payload

from bountyhub.models import db
from bountyhub.models.user import User, UserSession


class TestRegister:
    def test_register_returns_user_without_password(self, client):
        res = client.post("/api/auth/register", json=register_payload("hacker", bio="Web researcher"))
        assert res.status_code == 201
        data = res.get_json()
        assert data["user_type"] == "hacker"
        assert data["reputation"] == 0
        assert data["bio"] == "Web researcher"
        assert "password" not in data
        assert "password_hash" not in data

    def test_register_logs_in(self, client):
        client.post("/api/auth/register", json=register_payload("organization", username="acme"))
        res = client.get("/api/auth/session")
        assert res.status_code == 200
        assert res.get_json()["username"] == "acme"

    def test_password_is_hashed(self, client):
        client.post("/api/auth/register", json=register_payload("hacker", username="neo"))
        user = User.query.filter_by(username="neo").one()
        assert user.password_hash != PASSWORD
        assert user.password_hash.startswith("$2")

    def test_duplicate_username_conflict(self, client, app):
        client.post("/api/auth/register", json=register_payload("hacker", username="taken"))
        res = app.test_client().post("/api/auth/register", json=register_payload("hacker", username="taken"))
        assert res.status_code == 409
        assert res.get_json()["code"] == "ERR_CONFLICT_DUPLICATE"
        assert res.get_json()["details"]["field"] == "username"

    def test_duplicate_email_conflict(self, client, app):
        client.post("/api/auth/register", json=register_payload("hacker", email="same@bountyhub.io"))
        res = app.test_client().post(
            "/api/auth/register", json=register_payload("organization", email="same@bountyhub.io"),
        )
        assert res.status_code == 409
        assert res.get_json()["details"]["field"] == "email"

    def test_invalid_payload_lists_fields(self, client):
        res = client.post("/api/auth/register", json={
            "username": "ab", "email": "not-an-email", "password": "short",
            "full_name": "", "user_type": "admin",
        })
        assert res.status_code == 400
        body = res.get_json()
        assert body["code"] == "ERR_VALIDATION_INVALID"
        assert set(body["details"]) == {"username", "email", "password", "full_name", "user_type"}
        assert User.query.count() == 0

    def test_password_over_72_bytes(self, client):
        res = client.post("/api/auth/register", json=register_payload("hacker", password="a" * 100))
        assert res.status_code == 400
        assert res.get_json()["details"] == {"password": "must be at most 72 bytes"}
        assert User.query.count() == 0

    def test_multibyte_password_counted_in_bytes(self, client):
        # 50 characters, 75 bytes
        res = client.post("/api/auth/register", json=register_payload("hacker", password="é" * 25 + "x" * 25))
        assert res.status_code == 400
        assert "password" in res.get_json()["details"]

    def test_non_string_user_type(self, client):
        res = client.post("/api/auth/register", json=register_payload("hacker", user_type=["hacker"]))
        assert res.status_code == 400
        assert set(res.get_json()["details"]) == {"user_type"}


class TestLogin:
    def test_login_with_username(self, client, app):
        payload = register_payload("hacker")
        client.post("/api/auth/register", json=payload)

        fresh = app.test_client()
        res = fresh.post("/api/auth/login", json={"username": payload["username"], "password": PASSWORD})
        assert res.status_code == 200
        assert res.get_json()["username"] == payload["username"]
        assert fresh.get("/api/auth/session").status_code == 200

    def test_login_with_email(self, client, app):
        payload = register_payload("organization")
        client.post("/api/auth/register", json=payload)

        res = app.test_client().post("/api/auth/login", json={"username": payload["email"], "password": PASSWORD})
        assert res.status_code == 200

    def test_wrong_password(self, client, app):
        payload = register_payload("hacker")
        client.post("/api/auth/register", json=payload)

        fresh = app.test_client()
        res = fresh.post("/api/auth/login", json={"username": payload["username"], "password": "wrong-password"})
        assert res.status_code == 401
        assert res.get_json()["error"] == "Invalid credentials"
        assert fresh.get("/api/auth/session").status_code == 401

    def test_unknown_user(self, client):
        res = client.post("/api/auth/login", json={"username": "ghost", "password": PASSWORD})
        assert res.status_code == 401

    def test_missing_fields(self, client):
        res = client.post("/api/auth/login", json={"username": "someone"})
        assert res.status_code == 400

    def test_non_string_password(self, client, app):
        payload = register_payload("hacker")
        client.post("/api/auth/register", json=payload)

        res = app.test_client().post("/api/auth/login", json={"username": payload["username"], "password": 12345678})
        assert res.status_code == 400
        assert res.get_json()["code"] == "ERR_VALIDATION_REQUIRED"

    def test_non_string_username(self, client):
        res = client.post("/api/auth/login", json={"username": ["ghost"], "password": PASSWORD})
        assert res.status_code == 400


class TestSession:
    def test_session_requires_login(self, client):
        res = client.get("/api/auth/session")
        assert res.status_code == 401
        assert res.get_json()["code"] == "ERR_UNAUTHORIZED"

    def test_logout_revokes_session(self, hacker_client):
        res = hacker_client.post("/api/auth/logout")
        assert res.status_code == 200
        assert hacker_client.get("/api/auth/session").status_code == 401
        assert UserSession.query.filter_by(is_active=True).count() == 0

    def test_expired_session_rejected(self, hacker_client):
        row = UserSession.query.filter_by(user_id=hacker_client.user["id"]).one()
        row.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
        db.session.commit()

        assert hacker_client.get("/api/auth/session").status_code == 401
        assert db.session.get(UserSession, row.id).is_active is False

    def test_last_used_refreshed(self, hacker_client):
        row = UserSession.query.filter_by(user_id=hacker_client.user["id"]).one()
        assert row.last_used_at is not None

        stale = datetime.now(timezone.utc) - timedelta(hours=1)
        row.last_used_at = stale
        db.session.commit()

        assert hacker_client.get("/api/auth/session").status_code == 200
        touched = db.session.get(UserSession, row.id).last_used_at
        assert touched.replace(tzinfo=timezone.utc) > stale


class TestGuards:
    def test_hacker_cannot_create_program(self, hacker_client):
        res = hacker_client.post("/api/programs", json={"title": "x"})
        assert res.status_code == 403
        assert res.get_json()["code"] == "ERR_FORBIDDEN"

    def test_anonymous_cannot_create_program(self, client):
        res = client.post("/api/programs", json={"title": "x"})
        assert res.status_code == 401

    def test_organization_cannot_submit_report(self, org_client, program):
        res = org_client.post("/api/reports", json={"program_id": program["id"]})
        assert res.status_code == 403

    def test_non_json_body_rejected(self, org_client):
        res = org_client.post("/api/programs", data="title=x", content_type="application/x-www-form-urlencoded")
        assert res.status_code == 415
        assert res.get_json()["code"] == "ERR_VALIDATION_INVALID"
