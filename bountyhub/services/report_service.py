"""Report service layer — submission, visibility and comment threads.

Status changes, rewards and reputation live in ``report_lifecycle``.

Transaction policy: functions use flush() for ID generation, never commit().
Caller (route handler) is responsible for db.session.commit().
"""
import logging

from bountyhub.core.exceptions import AccessDenied, NotFoundError, ValidationError
from bountyhub.models import db
from bountyhub.models.program import Program
from bountyhub.models.report import REPORT_STATUS_PENDING, REPORT_STATUSES, SEVERITIES, Report, ReportComment
from bountyhub.models.user import User
from bountyhub.services.access import ensure_report_access
from bountyhub.utils.validation import validate_comment, validate_report

logger = logging.getLogger(__name__)


def get_report(report_id: int) -> Report:
    report = db.session.get(Report, report_id)
    if not report:
        raise NotFoundError("Report", report_id)
    return report


def get_report_for(user: User, report_id: int) -> Report:
    """Fetch a report the caller is allowed to read (404, then 403)."""
    report = get_report(report_id)
    ensure_report_access(user, report)
    return report


# ── Submission ───────────────────────────────────────────────────────────


def submit_report(hacker: User, data: dict) -> Report:
    """Create a pending report against an active program.

    Returns:
        Report instance (already flushed).

    Raises:
        AccessDenied: caller is not a hacker.
        NotFoundError: program does not exist.
        ValidationError: malformed payload or program not active.
    """
    if not hacker.is_hacker:
        raise AccessDenied(hacker.id, "submit report", "Only hackers can submit reports")

    cleaned = validate_report(data)

    program = db.session.get(Program, cleaned["program_id"])
    if not program:
        raise NotFoundError("Program", cleaned["program_id"])
    if not program.is_active:
        raise ValidationError(
            "Cannot submit a report to an inactive program",
            details={"program_id": program.id, "program_status": program.status},
        )

    report = Report(
        program_id=program.id,
        hacker_id=hacker.id,
        title=cleaned["title"],
        description=cleaned["description"],
        severity=cleaned["severity"],
        steps_to_reproduce=cleaned["steps_to_reproduce"],
        impact=cleaned["impact"],
        status=REPORT_STATUS_PENDING,
        reward_amount=None,
        triage_notes=None,
    )
    db.session.add(report)
    db.session.flush()

    logger.info("Report %s submitted by hacker %s to program %s (severity=%s)",
                report.id, hacker.id, program.id, report.severity)
    return report


# ── Listing ──────────────────────────────────────────────────────────────


def reports_for_user(user: User, *, status=None, severity=None, program_id=None):
    """Query of the reports a user may see.

    Hackers see their own submissions; organizations see reports filed
    against any of their programs.
    """
    if user.is_hacker:
        q = Report.query.filter(Report.hacker_id == user.id)
    else:
        q = Report.query.join(Program, Report.program_id == Program.id).filter(
            Program.organization_id == user.id
        )

    if status:
        if status not in REPORT_STATUSES:
            raise ValidationError(f"Invalid status '{status}'", details={"status": "invalid"})
        q = q.filter(Report.status == status)
    if severity:
        if severity not in SEVERITIES:
            raise ValidationError(f"Invalid severity '{severity}'", details={"severity": "invalid"})
        q = q.filter(Report.severity == severity)
    if program_id:
        q = q.filter(Report.program_id == program_id)
    return q.order_by(Report.created_at.desc(), Report.id.desc())


# ── Comments ─────────────────────────────────────────────────────────────


def list_comments(user: User, report_id: int) -> list[ReportComment]:
    report = get_report_for(user, report_id)
    return report.comments.all()


def add_comment(user: User, report_id: int, data: dict) -> ReportComment:
    """Append a comment to a report thread.

    Only the two parties of the report may post.
    """
    report = get_report_for(user, report_id)
    content = validate_comment(data)

    comment = ReportComment(report_id=report.id, user_id=user.id, content=content)
    db.session.add(comment)
    db.session.flush()
    logger.debug("Comment %s added to report %s by user %s", comment.id, report.id, user.id)
    return comment
