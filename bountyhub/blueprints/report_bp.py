"""
BountyHub
Report blueprint — submission, triage lifecycle, rewards and comments.

Endpoints:
    GET    /api/reports                     caller's reports (status, severity, program_id)
    POST   /api/reports                     submit (hacker)
    GET    /api/reports/<id>                detail (submitter or owning organization)
    PATCH  /api/reports/<id>/status         transition status (owning organization)
    POST   /api/reports/<id>/reward         assign reward (owning organization)
    GET    /api/reports/<id>/comments       thread (report parties)
    POST   /api/reports/<id>/comments       add comment (report parties)
"""

import logging

from flask import Blueprint, jsonify, request

from bountyhub.auth import current_user, require_auth, require_role
from bountyhub.blueprints import paginate_query
from bountyhub.services import report_lifecycle, report_service
from bountyhub.utils.helpers import db_commit_or_error
from bountyhub.utils.validation import validate_reward, validate_status_update

logger = logging.getLogger(__name__)

report_bp = Blueprint("report", __name__, url_prefix="/api/reports")


# ═══════════════════════════════════════════════════════════════════════════
#  REPORTS
# ═══════════════════════════════════════════════════════════════════════════

@report_bp.route("", methods=["GET"])
@require_auth
def list_reports():
    query = report_service.reports_for_user(
        current_user(),
        status=request.args.get("status"),
        severity=request.args.get("severity"),
        program_id=request.args.get("program_id", type=int),
    )
    items, total = paginate_query(query)
    return jsonify({"items": [r.to_dict() for r in items], "total": total})


@report_bp.route("", methods=["POST"])
@require_role("hacker")
def submit_report():
    report = report_service.submit_report(current_user(), request.get_json(silent=True))
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(report.to_dict()), 201


@report_bp.route("/<int:report_id>", methods=["GET"])
@require_auth
def get_report(report_id):
    return jsonify(report_service.get_report_for(current_user(), report_id).to_dict())


# ═══════════════════════════════════════════════════════════════════════════
#  LIFECYCLE
# ═══════════════════════════════════════════════════════════════════════════

@report_bp.route("/<int:report_id>/status", methods=["PATCH"])
@require_role("organization")
def update_report_status(report_id):
    """
    Body: { "status": "...", "triage_notes"?: "...", "reward_amount"?: int }

    Response is the updated report plus ``previous_status`` and
    ``reputation_awarded``.
    """
    payload = validate_status_update(request.get_json(silent=True))
    result = report_lifecycle.update_status(
        report_id,
        payload["status"],
        current_user(),
        triage_notes=payload["triage_notes"],
        reward_amount=payload["reward_amount"],
    )
    err = db_commit_or_error()
    if err:
        return err

    data = result["report"].to_dict()
    data["previous_status"] = result["previous_status"]
    data["reputation_awarded"] = result["reputation_awarded"]
    return jsonify(data)


@report_bp.route("/<int:report_id>/reward", methods=["POST"])
@require_role("organization")
def assign_reward(report_id):
    """Body: { "amount": int }"""
    amount = validate_reward(request.get_json(silent=True))
    report = report_lifecycle.assign_reward(report_id, amount, current_user())
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(report.to_dict())


# ═══════════════════════════════════════════════════════════════════════════
#  COMMENTS
# ═══════════════════════════════════════════════════════════════════════════

@report_bp.route("/<int:report_id>/comments", methods=["GET"])
@require_auth
def list_comments(report_id):
    comments = report_service.list_comments(current_user(), report_id)
    return jsonify({"items": [c.to_dict() for c in comments], "total": len(comments)})


@report_bp.route("/<int:report_id>/comments", methods=["POST"])
@require_auth
def add_comment(report_id):
    comment = report_service.add_comment(current_user(), report_id, request.get_json(silent=True))
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(comment.to_dict()), 201
