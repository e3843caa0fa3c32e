"""
BountyHub
Vulnerability report domain models.

Models:
    - Report: a finding submitted by a hacker against a program
    - ReportComment: append-only discussion between hacker and organization

Lifecycle:
    pending → triaging → accepted | rejected | duplicate
    accepted → fixed
    rejected / duplicate → triaging   (reopen)
    fixed    → (terminal)
"""

from datetime import datetime, timezone

from bountyhub.models import db


# ── Constants ────────────────────────────────────────────────────────────────

SEVERITIES = {"informational", "low", "medium", "high", "critical"}

REPORT_STATUS_PENDING = "pending"
REPORT_STATUS_ACCEPTED = "accepted"
REPORT_STATUSES = {"pending", "triaging", "accepted", "rejected", "duplicate", "fixed"}

# Statuses counted as resolved on the organization dashboard
RESOLVED_STATUSES = {"accepted", "fixed"}


# ── Lifecycle Transition Guards ──────────────────────────────────────────────

REPORT_TRANSITIONS = {
    "pending":   ["triaging", "accepted", "rejected", "duplicate"],
    "triaging":  ["accepted", "rejected", "duplicate"],
    "accepted":  ["fixed"],
    "rejected":  ["triaging"],   # reopen after new evidence
    "duplicate": ["triaging"],
    "fixed":     [],
}


def validate_report_transition(old_status, new_status):
    """Return True if Report status transition is valid."""
    return new_status in REPORT_TRANSITIONS.get(old_status, [])


# ═══════════════════════════════════════════════════════════════════════════
#  REPORT
# ═══════════════════════════════════════════════════════════════════════════

class Report(db.Model):
    """
    A vulnerability report.

    Readable by the submitting hacker and the organization that owns the
    program; status and reward are set by that organization only.
    """

    __tablename__ = "reports"

    id = db.Column(db.Integer, primary_key=True)
    program_id = db.Column(
        db.Integer, db.ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    hacker_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title = db.Column(db.String(300), nullable=False)
    description = db.Column(db.Text, nullable=False)
    severity = db.Column(db.String(20), nullable=False, comment="informational | low | medium | high | critical")
    status = db.Column(db.String(20), nullable=False, default=REPORT_STATUS_PENDING, index=True)
    reward_amount = db.Column(db.Integer, nullable=True)
    triage_notes = db.Column(db.Text, nullable=True)
    steps_to_reproduce = db.Column(db.Text, nullable=False)
    impact = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))

    program = db.relationship("Program", back_populates="reports")
    hacker = db.relationship("User", back_populates="reports")
    comments = db.relationship(
        "ReportComment", back_populates="report", cascade="all, delete-orphan",
        order_by="ReportComment.id", lazy="dynamic",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "program_id": self.program_id,
            "program_title": self.program.title if self.program else "Unknown Program",
            "organization_id": self.program.organization_id if self.program else None,
            "hacker_id": self.hacker_id,
            "hacker_username": self.hacker.username if self.hacker else "Unknown Hacker",
            "title": self.title,
            "description": self.description,
            "severity": self.severity,
            "status": self.status,
            "reward_amount": self.reward_amount,
            "triage_notes": self.triage_notes,
            "steps_to_reproduce": self.steps_to_reproduce,
            "impact": self.impact,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Report {self.id}: {self.title[:40]} [{self.severity}/{self.status}]>"


class ReportComment(db.Model):
    """One message in a report thread. Never edited or deleted."""

    __tablename__ = "report_comments"

    id = db.Column(db.Integer, primary_key=True)
    report_id = db.Column(
        db.Integer, db.ForeignKey("reports.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    content = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    report = db.relationship("Report", back_populates="comments")
    author = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "report_id": self.report_id,
            "user_id": self.user_id,
            "author_username": self.author.username if self.author else None,
            "author_type": self.author.user_type if self.author else None,
            "content": self.content,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
