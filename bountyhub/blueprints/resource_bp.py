"""
Resource blueprint — community learning material.

    GET  /api/resources          list (optional ``category``)
    POST /api/resources          publish (any logged-in user)
"""

from flask import Blueprint, jsonify, request

from bountyhub.auth import current_user, require_auth
from bountyhub.blueprints import paginate_query
from bountyhub.services.resource_service import create_resource, list_resources
from bountyhub.utils.helpers import db_commit_or_error

resource_bp = Blueprint("resource", __name__, url_prefix="/api/resources")


@resource_bp.route("", methods=["GET"])
def list_all():
    items, total = paginate_query(list_resources(request.args.get("category")))
    return jsonify({"items": [r.to_dict() for r in items], "total": total})


@resource_bp.route("", methods=["POST"])
@require_auth
def publish():
    resource = create_resource(current_user(), request.get_json(silent=True))
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(resource.to_dict()), 201
