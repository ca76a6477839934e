"""Message, room, media, report and system-setting schemas"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from admin_panel.schemas.base import CamelModel


class MessageResponse(CamelModel):
    id: str
    sender_id: str
    room_id: str
    message: Optional[str] = None
    file_data: Optional[Dict[str, Any]] = None
    voice_data: Optional[Dict[str, Any]] = None
    is_edited: bool
    is_reported: bool
    report_count: int
    is_deleted: bool
    deleted_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime


class MediaResponse(CamelModel):
    id: str
    sender_id: str
    room_id: str
    url: Optional[str] = None
    filename: Optional[str] = None
    mimetype: Optional[str] = None
    size: int
    is_reported: bool
    report_count: int
    is_deleted: bool
    deleted_by: Optional[str] = None
    deleted_at: Optional[datetime] = None
    scan_result: Optional[Dict[str, Any]] = None
    created_at: datetime


class RoomResponse(CamelModel):
    id: str
    name: str
    type: str
    avatar: Optional[str] = None
    description: Optional[str] = None
    creator_id: Optional[str] = None
    participant_count: int = 0
    is_blocked: bool
    block_reason: Optional[str] = None
    blocked_at: Optional[datetime] = None
    is_reported: bool
    report_count: int
    created_at: datetime


class ReportResponse(CamelModel):
    id: str
    reporter_id: str
    target_type: str
    target_id: str
    reason: str
    description: Optional[str] = None
    status: str
    priority: str
    admin_id: Optional[str] = None
    admin_action: Optional[str] = None
    admin_notes: Optional[str] = None
    action_date: Optional[datetime] = None
    evidence: List[Dict[str, Any]] = []
    created_at: datetime


class RoomActionRequest(CamelModel):
    action: Literal["block", "unblock"]
    reason: Optional[str] = None


class ReportActionRequest(CamelModel):
    action: Literal["resolve", "dismiss"]
    admin_action: Optional[
        Literal["no_action", "warning_sent", "content_removed", "user_suspended", "user_banned"]
    ] = None
    notes: Optional[str] = None


class SystemSettingResponse(CamelModel):
    key: str
    value: Any = None
    category: str
    description: Optional[str] = None
    data_type: str
    is_public: bool
    last_modified_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class SettingUpdateRequest(CamelModel):
    value: Any
