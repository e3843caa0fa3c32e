"""
BountyHub
Program domain models.

Models:
    - Program: vulnerability-disclosure program owned by one organization
    - ProgramTag: free-text label attached to a program

Architecture chain: User(organization) → Program → Report
"""

from datetime import datetime, timezone

from bountyhub.models import db


# ── Constants ────────────────────────────────────────────────────────────────

PROGRAM_STATUS_ACTIVE = "active"
PROGRAM_STATUSES = {"active", "inactive", "draft"}

DEFAULT_RESPONSE_TIME_HOURS = 48


class Program(db.Model):
    """
    A bug-bounty program published by an organization.

    ``rewards`` maps a severity tier to the bounty offered for it,
    e.g. ``{"critical": 10000, "high": 5000}``.
    """

    __tablename__ = "programs"

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    title = db.Column(db.String(300), nullable=False)
    description = db.Column(db.Text, nullable=False)
    industry = db.Column(db.String(100), nullable=False, default="")
    scope = db.Column(db.Text, nullable=False)
    rules = db.Column(db.Text, nullable=False)
    rewards = db.Column(db.JSON, default=dict)
    min_bounty = db.Column(db.Integer, default=0)
    max_bounty = db.Column(db.Integer, default=0)
    status = db.Column(
        db.String(20),
        default=PROGRAM_STATUS_ACTIVE,
        index=True,
        comment="active | inactive | draft",
    )
    response_time = db.Column(db.Integer, default=DEFAULT_RESPONSE_TIME_HOURS, comment="hours")

    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
                           onupdate=lambda: datetime.now(timezone.utc))

    organization = db.relationship("User", back_populates="programs")
    tags = db.relationship(
        "ProgramTag", back_populates="program", cascade="all, delete-orphan",
        order_by="ProgramTag.id",
    )
    reports = db.relationship("Report", back_populates="program", lazy="dynamic")

    @property
    def is_active(self):
        return self.status == PROGRAM_STATUS_ACTIVE

    @property
    def tag_names(self):
        return [t.tag for t in self.tags]

    def to_dict(self):
        return {
            "id": self.id,
            "organization_id": self.organization_id,
            "organization_name": self.organization.full_name if self.organization else "Unknown Organization",
            "title": self.title,
            "description": self.description,
            "industry": self.industry,
            "scope": self.scope,
            "rules": self.rules,
            "rewards": self.rewards or {},
            "min_bounty": self.min_bounty,
            "max_bounty": self.max_bounty,
            "status": self.status,
            "is_active": self.is_active,
            "response_time": self.response_time,
            "tags": self.tag_names,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Program {self.id}: {self.title[:40]} [{self.status}]>"


class ProgramTag(db.Model):
    __tablename__ = "program_tags"

    id = db.Column(db.Integer, primary_key=True)
    program_id = db.Column(
        db.Integer, db.ForeignKey("programs.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    tag = db.Column(db.String(50), nullable=False)

    program = db.relationship("Program", back_populates="tags")

    def to_dict(self):
        return {"id": self.id, "program_id": self.program_id, "tag": self.tag}
