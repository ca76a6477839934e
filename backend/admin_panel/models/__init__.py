"""Database models"""
from admin_panel.models.admin import Admin
from admin_panel.models.audit_log import AdminLog
from admin_panel.models.media import Media
from admin_panel.models.message import Message
from admin_panel.models.report import Report
from admin_panel.models.room import Room, room_admins, room_participants
from admin_panel.models.system_setting import SystemSetting
from admin_panel.models.user import User

__all__ = [
    "Admin",
    "AdminLog",
    "Media",
    "Message",
    "Report",
    "Room",
    "SystemSetting",
    "User",
    "room_admins",
    "room_participants",
]
