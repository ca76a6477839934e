"""Room model: private chats, groups and channels"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.time import utcnow

room_participants = Table(
    "room_participants",
    Base.metadata,
    Column("room_id", String(36), ForeignKey("rooms.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True),
)

room_admins = Table(
    "room_admins",
    Base.metadata,
    Column("room_id", String(36), ForeignKey("rooms.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    name = Column(String(255), nullable=False)
    type = Column(String(10), nullable=False, index=True)  # group|private|channel
    avatar = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    creator_id = Column(String(36), ForeignKey("users.id"), nullable=True, index=True)

    is_blocked = Column(Boolean, default=False, nullable=False, index=True)
    block_reason = Column(String(500), nullable=True)
    blocked_at = Column(DateTime, nullable=True)
    blocked_by = Column(String(36), ForeignKey("admins.id"), nullable=True)
    is_reported = Column(Boolean, default=False, nullable=False, index=True)
    report_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    participants = relationship("User", secondary=room_participants, lazy="selectin")
    admins = relationship("User", secondary=room_admins, lazy="selectin")
