"""Admin audit log model"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import relationship

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.time import utcnow


class AdminLog(Base):
    """AdminLog model - append-only record of sensitive admin actions.

    ``admin_id`` is null for failed logins where no admin could be resolved.
    """

    __tablename__ = "admin_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    admin_id = Column(String(36), ForeignKey("admins.id"), nullable=True, index=True)
    action = Column(String(50), nullable=False, index=True)
    target = Column(String(255), nullable=True)
    target_type = Column(String(20), nullable=True, index=True)
    details = Column(JSON, nullable=False, default=dict)
    success = Column(Boolean, nullable=False, default=True, index=True)
    error_message = Column(Text, nullable=True)
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    admin = relationship("Admin")
