"""
Stats blueprint — dashboard figures and the hacker leaderboard.

    GET /api/stats/hacker/<id>
    GET /api/stats/organization/<id>
    GET /api/leaderboard?limit=10
"""

from flask import Blueprint, jsonify, request

from bountyhub.services import stats_service
from bountyhub.utils.helpers import parse_positive_int

stats_bp = Blueprint("stats", __name__, url_prefix="/api")

LEADERBOARD_DEFAULT = 10
LEADERBOARD_MAX = 100


@stats_bp.route("/stats/hacker/<int:hacker_id>", methods=["GET"])
def hacker_stats(hacker_id):
    return jsonify(stats_service.hacker_stats(hacker_id))


@stats_bp.route("/stats/organization/<int:organization_id>", methods=["GET"])
def organization_stats(organization_id):
    return jsonify(stats_service.organization_stats(organization_id))


@stats_bp.route("/leaderboard", methods=["GET"])
def leaderboard():
    limit = parse_positive_int(request.args.get("limit"), LEADERBOARD_DEFAULT, maximum=LEADERBOARD_MAX)
    rows = stats_service.leaderboard(limit)
    return jsonify({"items": rows, "total": len(rows)})
