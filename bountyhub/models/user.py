"""
BountyHub
User domain models.

Models:
    - User: organization or hacker account with reputation
    - UserSession: server-side login session backing the signed cookie
"""

import uuid
from datetime import datetime, timezone

from bountyhub.models import db


# ── Constants ────────────────────────────────────────────────────────────────

USER_TYPE_ORGANIZATION = "organization"
USER_TYPE_HACKER = "hacker"
USER_TYPES = {USER_TYPE_ORGANIZATION, USER_TYPE_HACKER}


# ═══════════════════════════════════════════════════════════════
# 1. USERS
# ═══════════════════════════════════════════════════════════════
class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    email = db.Column(db.String(200), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    full_name = db.Column(db.String(200), nullable=False)
    user_type = db.Column(db.String(20), nullable=False, index=True, comment="organization | hacker")
    bio = db.Column(db.Text, default="")
    avatar_url = db.Column(db.String(500), default="")
    reputation = db.Column(db.Integer, nullable=False, default=0, comment="hacker-only, grows on accepted reports")
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    sessions = db.relationship("UserSession", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    programs = db.relationship("Program", back_populates="organization", lazy="dynamic")
    reports = db.relationship("Report", back_populates="hacker", lazy="dynamic")

    @property
    def is_organization(self):
        return self.user_type == USER_TYPE_ORGANIZATION

    @property
    def is_hacker(self):
        return self.user_type == USER_TYPE_HACKER

    def to_dict(self):
        # password_hash is never serialized
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "full_name": self.full_name,
            "user_type": self.user_type,
            "bio": self.bio or "",
            "avatar_url": self.avatar_url or "",
            "reputation": self.reputation or 0,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<User {self.id}: {self.username} ({self.user_type})>"


# ═══════════════════════════════════════════════════════════════
# 2. SESSIONS
# ═══════════════════════════════════════════════════════════════
class UserSession(db.Model):
    __tablename__ = "user_sessions"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    token_hash = db.Column(db.String(64), nullable=False, index=True)  # SHA-256 of the cookie token
    ip_address = db.Column(db.String(45))
    user_agent = db.Column(db.String(500))
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    expires_at = db.Column(db.DateTime, nullable=False)
    last_used_at = db.Column(db.DateTime)

    user = db.relationship("User", back_populates="sessions")

    @property
    def is_expired(self):
        return datetime.now(timezone.utc) > self.expires_at.replace(tzinfo=timezone.utc)
