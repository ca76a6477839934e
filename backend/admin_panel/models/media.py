"""Uploaded media model"""
from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Integer, JSON, String

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.time import utcnow


class Media(Base):
    __tablename__ = "media"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    sender_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    room_id = Column(String(36), ForeignKey("rooms.id"), nullable=False, index=True)
    url = Column(String(1000), nullable=True)
    filename = Column(String(255), nullable=True)
    mimetype = Column(String(100), nullable=True, index=True)
    size = Column(BigInteger, default=0, nullable=False)  # bytes

    is_reported = Column(Boolean, default=False, nullable=False, index=True)
    report_count = Column(Integer, default=0, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False, index=True)
    deleted_by = Column(String(36), ForeignKey("admins.id"), nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    scan_result = Column(JSON, nullable=True)  # {isScanned, isSafe, threats, scannedAt}

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
