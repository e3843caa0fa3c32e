"""
User blueprint — public profiles.

    GET /api/users/<id>
    GET /api/users/type/<user_type>
"""

from flask import Blueprint, jsonify

from bountyhub.services.user_service import get_user, list_users_by_type

user_bp = Blueprint("user", __name__, url_prefix="/api/users")


def _public(user):
    data = user.to_dict()
    data.pop("email", None)
    return data


@user_bp.route("/<int:user_id>", methods=["GET"])
def get_profile(user_id):
    return jsonify(_public(get_user(user_id)))


@user_bp.route("/type/<user_type>", methods=["GET"])
def list_by_type(user_type):
    users = list_users_by_type(user_type)
    return jsonify({"items": [_public(u) for u in users], "total": len(users)})
