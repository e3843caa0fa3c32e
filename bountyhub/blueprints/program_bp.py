"""
BountyHub
Program blueprint — bounty program listing, detail and owner actions.

Endpoints:
    GET    /api/programs                         list/search (q, status, industry)
    GET    /api/programs/popular                 newest active programs
    GET    /api/programs/<id>                    detail
    GET    /api/programs/organization/<org_id>   programs of one organization
    POST   /api/programs                         create (organization)
    PATCH  /api/programs/<id>/status             change status (owner)
    POST   /api/programs/<id>/tags               add tags (owner)
    GET    /api/programs/<id>/reports            reports on the program (owner)
"""

import logging

from flask import Blueprint, jsonify, request

from bountyhub.auth import current_user, require_auth, require_role
from bountyhub.blueprints import paginate_query
from bountyhub.services import program_service
from bountyhub.utils.helpers import db_commit_or_error, parse_positive_int

logger = logging.getLogger(__name__)

program_bp = Blueprint("program", __name__, url_prefix="/api/programs")


# ═══════════════════════════════════════════════════════════════════════════
#  PUBLIC READS
# ═══════════════════════════════════════════════════════════════════════════

@program_bp.route("", methods=["GET"])
def list_programs():
    """List programs; ``q`` matches title, description and industry case-insensitively."""
    query = program_service.search_programs(
        request.args.get("q"),
        status=request.args.get("status"),
        industry=request.args.get("industry"),
    )
    items, total = paginate_query(query)
    return jsonify({"items": [p.to_dict() for p in items], "total": total})


@program_bp.route("/popular", methods=["GET"])
def popular_programs():
    limit = parse_positive_int(request.args.get("limit"), 3, maximum=50)
    programs = program_service.popular_programs(limit)
    return jsonify({"items": [p.to_dict() for p in programs], "total": len(programs)})


@program_bp.route("/<int:program_id>", methods=["GET"])
def get_program(program_id):
    return jsonify(program_service.get_program(program_id).to_dict())


@program_bp.route("/organization/<int:organization_id>", methods=["GET"])
def organization_programs(organization_id):
    programs = program_service.programs_for_organization(organization_id)
    return jsonify({"items": [p.to_dict() for p in programs], "total": len(programs)})


# ═══════════════════════════════════════════════════════════════════════════
#  OWNER ACTIONS
# ═══════════════════════════════════════════════════════════════════════════

@program_bp.route("", methods=["POST"])
@require_role("organization")
def create_program():
    program = program_service.create_program(current_user(), request.get_json(silent=True))
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(program.to_dict()), 201


@program_bp.route("/<int:program_id>/status", methods=["PATCH"])
@require_role("organization")
def update_program_status(program_id):
    program = program_service.update_program_status(
        program_id, request.get_json(silent=True), current_user(),
    )
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(program.to_dict())


@program_bp.route("/<int:program_id>/tags", methods=["POST"])
@require_role("organization")
def add_tags(program_id):
    data = request.get_json(silent=True) or {}
    program = program_service.add_program_tags(program_id, data.get("tags"), current_user())
    err = db_commit_or_error()
    if err:
        return err
    return jsonify(program.to_dict()), 201


@program_bp.route("/<int:program_id>/reports", methods=["GET"])
@require_auth
def list_program_reports(program_id):
    reports = program_service.program_reports(
        program_id, current_user(), status=request.args.get("status"),
    )
    return jsonify({"items": [r.to_dict() for r in reports], "total": len(reports)})
