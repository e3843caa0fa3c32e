"""
Resource-level access rules.

Role checks (organization / hacker) happen in the route decorators in
``bountyhub.auth``; this module answers the ownership questions:

    - a report is visible to its submitting hacker and to the organization
      that owns the report's program, nobody else
    - a program (and its reports' status/reward) is managed by its owning
      organization only

Usage:
    from bountyhub.services.access import ensure_report_access

    ensure_report_access(user, report)   # raises AccessDenied
"""

from bountyhub.core.exceptions import AccessDenied
from bountyhub.models.program import Program
from bountyhub.models.report import Report
from bountyhub.models.user import User


def owns_program(user: User | None, program: Program) -> bool:
    return bool(user and user.is_organization and program.organization_id == user.id)


def can_view_report(user: User | None, report: Report) -> bool:
    """True for the submitting hacker or the owning organization."""
    if user is None:
        return False
    if user.is_hacker:
        return report.hacker_id == user.id
    return owns_program(user, report.program)


def ensure_report_access(user: User | None, report: Report) -> None:
    if not can_view_report(user, report):
        raise AccessDenied(
            getattr(user, "id", None), f"view report {report.id}",
            "You do not have access to this report",
        )


def ensure_program_owner(user: User | None, program: Program, action: str = "manage program") -> None:
    if not owns_program(user, program):
        raise AccessDenied(
            getattr(user, "id", None), action,
            "Only the organization that owns this program can do that",
        )
