"""
Report Lifecycle Service

Manages report status transitions with:
  - Ownership check (only the organization owning the program)
  - Transition validation (REPORT_TRANSITIONS)
  - Reputation award on entry into ``accepted`` (exactly once)
  - Reward assignment

The status write is a compare-and-set on the previous status, and the
reputation increment is an SQL-side ``reputation + points`` update, so both
land in the caller's single commit and a concurrent accept cannot award
twice.

Usage:
    from bountyhub.services.report_lifecycle import update_status

    result = update_status(report_id=7, new_status="accepted", actor=org_user,
                           triage_notes="Confirmed on staging")
"""

import logging
from datetime import datetime, timezone

from flask import current_app

from bountyhub.core.exceptions import TransitionError, ValidationError
from bountyhub.models import db
from bountyhub.models.report import (
    REPORT_STATUS_ACCEPTED,
    REPORT_STATUSES,
    REPORT_TRANSITIONS,
    Report,
    validate_report_transition,
)
from bountyhub.models.user import User
from bountyhub.services.access import ensure_program_owner
from bountyhub.services.report_service import get_report

logger = logging.getLogger(__name__)


# Reputation points per accepted report, by severity
REPUTATION_POINTS = {
    "critical": 50,
    "high": 30,
    "medium": 15,
    "low": 5,
}
DEFAULT_REPUTATION_POINTS = 1


def reputation_points_for(severity: str) -> int:
    return REPUTATION_POINTS.get(severity, DEFAULT_REPUTATION_POINTS)


def validate_transition(report: Report, new_status: str) -> dict:
    """
    Validate whether ``new_status`` is reachable from the report's status.

    Re-applying the current status is allowed and is a no-op.

    Returns:
        {"valid": bool, "from": str, "to": str, "reason": str|None}
    """
    if new_status not in REPORT_STATUSES:
        return {"valid": False, "from": report.status, "to": new_status,
                "reason": f"Unknown status: {new_status}"}

    if new_status == report.status:
        return {"valid": True, "from": report.status, "to": new_status, "reason": None}

    if not validate_report_transition(report.status, new_status):
        allowed = ", ".join(REPORT_TRANSITIONS.get(report.status, [])) or "none"
        return {"valid": False, "from": report.status, "to": new_status,
                "reason": f"allowed next statuses: {allowed}"}

    return {"valid": True, "from": report.status, "to": new_status, "reason": None}


def _award_reputation(report: Report) -> int:
    points = reputation_points_for(report.severity)
    User.query.filter_by(id=report.hacker_id).update(
        {User.reputation: User.reputation + points},
        synchronize_session="fetch",
    )
    logger.info("Awarded %d reputation to hacker %s for report %s (%s)",
                points, report.hacker_id, report.id, report.severity)
    return points


def _check_reward_tier(report: Report, amount: int) -> None:
    if not current_app.config.get("ENFORCE_REWARD_TIERS"):
        return
    tier = (report.program.rewards or {}).get(report.severity)
    if tier is not None and amount > tier:
        raise ValidationError(
            f"Reward {amount} exceeds the program's {report.severity} tier ({tier})",
            details={"amount": amount, "tier": tier, "severity": report.severity},
        )


def update_status(
    report_id: int,
    new_status: str,
    actor: User,
    *,
    triage_notes: str | None = None,
    reward_amount: int | None = None,
) -> dict:
    """
    Execute a report status transition.

    Args:
        report_id: Report PK
        new_status: Target status
        actor: The organization performing the change
        triage_notes: Optional notes stored on the report
        reward_amount: Optional reward, applied only when moving to ``accepted``

    Returns:
        {"report", "previous_status", "new_status", "reputation_awarded"}

    Raises:
        NotFoundError, AccessDenied, ValidationError, TransitionError
    """
    report = get_report(report_id)
    ensure_program_owner(actor, report.program, "change report status")

    validation = validate_transition(report, new_status)
    if not validation["valid"]:
        if new_status not in REPORT_STATUSES:
            raise ValidationError(validation["reason"], details={"status": "invalid"})
        raise TransitionError(report.id, report.status, new_status, validation["reason"])

    apply_reward = reward_amount is not None and new_status == REPORT_STATUS_ACCEPTED
    if apply_reward:
        _check_reward_tier(report, reward_amount)

    previous_status = report.status

    if new_status != previous_status:
        changed = (
            Report.query
            .filter(Report.id == report.id, Report.status == previous_status)
            .update(
                {Report.status: new_status, Report.updated_at: datetime.now(timezone.utc)},
                synchronize_session="fetch",
            )
        )
        if changed == 0:
            db.session.refresh(report)
            raise TransitionError(report.id, report.status, new_status,
                                  "report was modified by another request")

    if triage_notes is not None:
        report.triage_notes = triage_notes

    awarded = 0
    if new_status == REPORT_STATUS_ACCEPTED and previous_status != REPORT_STATUS_ACCEPTED:
        awarded = _award_reputation(report)

    if apply_reward:
        report.reward_amount = reward_amount

    db.session.flush()
    logger.info("Report %s status %s → %s by organization %s",
                report.id, previous_status, new_status, actor.id)

    return {
        "report": report,
        "previous_status": previous_status,
        "new_status": new_status,
        "reputation_awarded": awarded,
    }


def assign_reward(report_id: int, amount: int, actor: User) -> Report:
    """Set the bounty paid for a report.

    Returns the updated Report (flushed).
    """
    report = get_report(report_id)
    ensure_program_owner(actor, report.program, "assign reward")

    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise ValidationError("amount must be a non-negative integer", details={"amount": "invalid"})
    _check_reward_tier(report, amount)

    previous = report.reward_amount
    report.reward_amount = amount
    db.session.flush()
    logger.info("Report %s reward %s → %s by organization %s", report.id, previous, amount, actor.id)
    return report
