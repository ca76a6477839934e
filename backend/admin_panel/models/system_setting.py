"""System settings model and the defaults installed by init_admin.py"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, JSON, String

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.time import utcnow

SETTING_CATEGORIES = ("general", "security", "notifications", "features", "limits", "appearance", "backup")
SETTING_DATA_TYPES = ("string", "number", "boolean", "object", "array")


class SystemSetting(Base):
    __tablename__ = "system_settings"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(JSON, nullable=True)
    category = Column(String(20), nullable=False, index=True)
    description = Column(String(500), nullable=True)
    data_type = Column(String(10), nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)
    last_modified_by = Column(String(36), ForeignKey("admins.id"), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


DEFAULT_SETTINGS = [
    {
        "key": "app_name",
        "value": "Telegram Clone",
        "category": "general",
        "description": "Application name",
        "data_type": "string",
        "is_public": True,
    },
    {
        "key": "app_logo",
        "value": "/logo.png",
        "category": "appearance",
        "description": "Application logo",
        "data_type": "string",
        "is_public": True,
    },
    {
        "key": "max_file_size",
        "value": 50 * 1024 * 1024,  # 50MB
        "category": "limits",
        "description": "Maximum upload size in bytes",
        "data_type": "number",
        "is_public": False,
    },
    {
        "key": "max_message_length",
        "value": 4096,
        "category": "limits",
        "description": "Maximum message length",
        "data_type": "number",
        "is_public": False,
    },
    {
        "key": "registration_enabled",
        "value": True,
        "category": "security",
        "description": "Allow new registrations",
        "data_type": "boolean",
        "is_public": False,
    },
    {
        "key": "guest_access_enabled",
        "value": False,
        "category": "security",
        "description": "Allow guest access",
        "data_type": "boolean",
        "is_public": False,
    },
    {
        "key": "maintenance_mode",
        "value": False,
        "category": "general",
        "description": "Maintenance mode",
        "data_type": "boolean",
        "is_public": True,
    },
    {
        "key": "notification_sound",
        "value": True,
        "category": "notifications",
        "description": "Notification sounds",
        "data_type": "boolean",
        "is_public": True,
    },
]
