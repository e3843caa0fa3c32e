"""Dashboard statistics and the hacker leaderboard.

All figures are computed with aggregate queries; nothing is cached.
"""
import logging

from sqlalchemy import func

from bountyhub.core.exceptions import NotFoundError
from bountyhub.models import db
from bountyhub.models.program import PROGRAM_STATUS_ACTIVE, Program
from bountyhub.models.report import REPORT_STATUS_ACCEPTED, REPORT_STATUS_PENDING, RESOLVED_STATUSES, Report
from bountyhub.models.user import User
from bountyhub.services.user_service import top_hackers

logger = logging.getLogger(__name__)


def _get_user_of_type(user_id: int, user_type: str, label: str) -> User:
    user = db.session.get(User, user_id)
    if not user or user.user_type != user_type:
        raise NotFoundError(label, user_id)
    return user


def _earnings(hacker_id: int) -> int:
    total = (
        db.session.query(func.coalesce(func.sum(Report.reward_amount), 0))
        .filter(Report.hacker_id == hacker_id)
        .scalar()
    )
    return int(total or 0)


def hacker_stats(hacker_id: int) -> dict:
    """
    Hacker dashboard figures.

      active_hunts     — programs currently accepting reports
      submissions      — reports submitted by the hacker
      accepted_reports — submissions in accepted or fixed state
      earnings         — sum of assigned rewards
    """
    hacker = _get_user_of_type(hacker_id, "hacker", "Hacker")

    base = Report.query.filter_by(hacker_id=hacker.id)
    return {
        "hacker_id": hacker.id,
        "active_hunts": Program.query.filter_by(status=PROGRAM_STATUS_ACTIVE).count(),
        "submissions": base.count(),
        "accepted_reports": base.filter(Report.status.in_(RESOLVED_STATUSES)).count(),
        "earnings": _earnings(hacker.id),
        "reputation": hacker.reputation or 0,
    }


def organization_stats(organization_id: int) -> dict:
    """
    Organization dashboard figures.

      resolved_reports counts accepted and fixed reports.
    """
    org = _get_user_of_type(organization_id, "organization", "Organization")

    programs = Program.query.filter_by(organization_id=org.id)
    reports = Report.query.join(Program, Report.program_id == Program.id).filter(
        Program.organization_id == org.id
    )
    rewards_paid = (
        db.session.query(func.coalesce(func.sum(Report.reward_amount), 0))
        .join(Program, Report.program_id == Program.id)
        .filter(Program.organization_id == org.id)
        .scalar()
    )
    return {
        "organization_id": org.id,
        "total_programs": programs.count(),
        "active_programs": programs.filter(Program.status == PROGRAM_STATUS_ACTIVE).count(),
        "total_reports": reports.count(),
        "resolved_reports": reports.filter(Report.status.in_(RESOLVED_STATUSES)).count(),
        "pending_reports": reports.filter(Report.status == REPORT_STATUS_PENDING).count(),
        "accepted_reports": reports.filter(Report.status == REPORT_STATUS_ACCEPTED).count(),
        "rewards_paid": int(rewards_paid or 0),
    }


def leaderboard(limit: int) -> list[dict]:
    """Top hackers by reputation with report counts and earnings."""
    rows = []
    for rank, hacker in enumerate(top_hackers(limit), start=1):
        entry = hacker.to_dict()
        entry.pop("email", None)
        entry["rank"] = rank
        entry["reports_count"] = Report.query.filter_by(hacker_id=hacker.id).count()
        entry["earnings"] = _earnings(hacker.id)
        rows.append(entry)
    return rows
