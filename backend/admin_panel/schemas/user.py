"""User schemas"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from admin_panel.schemas.base import CamelModel

USER_UPDATE_FIELDS = ("name", "last_name", "username", "biography", "avatar")


class UserResponse(CamelModel):
    id: str
    name: str
    last_name: str = ""
    full_name: str
    username: str
    phone: str
    avatar: Optional[str] = None
    biography: str = ""
    status: str
    is_blocked: bool
    block_reason: Optional[str] = None
    blocked_at: Optional[datetime] = None
    blocked_by: Optional[str] = None
    warnings_count: int = 0
    last_warning: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserActionRequest(CamelModel):
    """Body of PATCH /users"""

    user_id: str
    action: Literal["update", "block", "unblock", "warn"]
    reason: Optional[str] = None

    # Editable profile fields (action == "update")
    name: Optional[str] = Field(None, min_length=3, max_length=20)
    last_name: Optional[str] = Field(None, max_length=20)
    username: Optional[str] = Field(None, min_length=3, max_length=20)
    biography: Optional[str] = Field(None, max_length=70)
    avatar: Optional[str] = None


class UserDeleteRequest(CamelModel):
    reason: Optional[str] = None
    delete_messages: bool = False
    delete_media: bool = False
