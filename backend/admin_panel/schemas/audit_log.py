"""Audit log schemas"""
from datetime import datetime
from typing import Any, Dict, Optional

from admin_panel.schemas.base import CamelModel


class AdminLogResponse(CamelModel):
    id: str
    admin_id: Optional[str] = None
    action: str
    target: Optional[str] = None
    target_type: Optional[str] = None
    details: Dict[str, Any] = {}
    success: bool
    error_message: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime
