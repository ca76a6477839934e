"""Chat message model"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.time import utcnow


class Message(Base):
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    room_id = Column(String(36), ForeignKey("rooms.id"), nullable=False, index=True)
    message = Column(Text, nullable=True)
    file_data = Column(JSON, nullable=True)   # {name, size, type, url}
    voice_data = Column(JSON, nullable=True)  # {src, duration}
    is_edited = Column(Boolean, default=False, nullable=False)

    is_reported = Column(Boolean, default=False, nullable=False, index=True)
    report_count = Column(Integer, default=0, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_by = Column(String(36), ForeignKey("admins.id"), nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    room = relationship("Room")
    sender = relationship("User")
