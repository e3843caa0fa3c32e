"""
Auth Blueprint — cookie-session authentication endpoints.

  POST /api/auth/register   — Create organization/hacker account, log in
  POST /api/auth/login      — Username (or email) + password → session cookie
  POST /api/auth/logout     — Revoke session, clear cookie
  GET  /api/auth/session    — Current user
"""

from flask import Blueprint, jsonify, request

from bountyhub.auth import current_user, login_user, logout_user, require_auth
from bountyhub.services.user_service import authenticate_user, register_user
from bountyhub.utils.errors import E, api_error
from bountyhub.utils.helpers import db_commit_or_error

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


# ═══════════════════════════════════════════════════════════════
# POST /api/auth/register
# ═══════════════════════════════════════════════════════════════
@auth_bp.route("/register", methods=["POST"])
def register():
    """
    Body: { "username", "email", "password", "full_name", "user_type",
            "bio"?, "avatar_url"? }
    """
    user = register_user(request.get_json(silent=True))
    err = db_commit_or_error()
    if err:
        return err
    login_user(user)
    return jsonify(user.to_dict()), 201


# ═══════════════════════════════════════════════════════════════
# POST /api/auth/login
# ═══════════════════════════════════════════════════════════════
@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Body: { "username": "...", "password": "..." }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    username = data.get("username") or ""
    password = data.get("password") or ""

    if not isinstance(username, str) or not isinstance(password, str):
        return api_error(E.VALIDATION_REQUIRED, "Username and password must be strings")
    if not username.strip() or not password:
        return api_error(E.VALIDATION_REQUIRED, "Username and password are required")

    user = authenticate_user(username.strip(), password)
    if user is None:
        return api_error(E.UNAUTHORIZED, "Invalid credentials")

    login_user(user)
    return jsonify(user.to_dict()), 200


# ═══════════════════════════════════════════════════════════════
# POST /api/auth/logout
# ═══════════════════════════════════════════════════════════════
@auth_bp.route("/logout", methods=["POST"])
@require_auth
def logout():
    logout_user()
    return jsonify({"message": "Logged out successfully"}), 200


# ═══════════════════════════════════════════════════════════════
# GET /api/auth/session
# ═══════════════════════════════════════════════════════════════
@auth_bp.route("/session", methods=["GET"])
@require_auth
def session_info():
    return jsonify(current_user().to_dict()), 200
