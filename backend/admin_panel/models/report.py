"""Abuse report model"""
from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import relationship

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.time import utcnow

REPORT_TARGET_TYPES = ("user", "message", "room", "media")
REPORT_REASONS = (
    "spam",
    "harassment",
    "inappropriate_content",
    "fake_account",
    "copyright_violation",
    "violence",
    "hate_speech",
    "adult_content",
    "other",
)
REPORT_STATUSES = ("pending", "reviewed", "resolved", "dismissed")
REPORT_PRIORITIES = ("low", "medium", "high", "urgent")
REPORT_ADMIN_ACTIONS = ("no_action", "warning_sent", "content_removed", "user_suspended", "user_banned")


class Report(Base):
    __tablename__ = "reports"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    reporter_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    target_type = Column(String(10), nullable=False)  # user|message|room|media
    target_id = Column(String(36), nullable=False, index=True)
    reason = Column(String(30), nullable=False)
    description = Column(String(500), nullable=True)
    status = Column(String(10), nullable=False, default="pending", index=True)
    priority = Column(String(10), nullable=False, default="medium", index=True)

    # Resolution, filled in by the moderating admin
    admin_id = Column(String(36), ForeignKey("admins.id"), nullable=True)
    admin_action = Column(String(20), nullable=True)
    admin_notes = Column(Text, nullable=True)
    action_date = Column(DateTime, nullable=True)

    evidence = Column(JSON, nullable=False, default=list)  # [{type, url, description}]

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    reporter = relationship("User")
    admin = relationship("Admin")
