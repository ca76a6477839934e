"""Chat application user model (read and moderated, not owned, by the panel)"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.time import utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    name = Column(String(20), nullable=False)
    last_name = Column(String(20), nullable=False, default="")
    username = Column(String(20), unique=True, nullable=False, index=True)
    phone = Column(String(32), unique=True, nullable=False, index=True)
    avatar = Column(String(500), nullable=True)
    biography = Column(String(70), nullable=False, default="")
    status = Column(String(10), nullable=False, default="offline", index=True)  # online|offline
    password_hash = Column(String(255), nullable=False)

    is_blocked = Column(Boolean, default=False, nullable=False, index=True)
    block_reason = Column(String(500), nullable=True)
    blocked_at = Column(DateTime, nullable=True)
    blocked_by = Column(String(36), ForeignKey("admins.id"), nullable=True)
    warnings_count = Column(Integer, default=0, nullable=False)
    last_warning = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.last_name or ''}".strip()
