"""Admin audit trail.

Every sensitive handler records one :class:`~admin_panel.models.AdminLog` row
per phase, on success and on failure. Writing the row is best-effort: a
failure is logged and counted but never raised, so the audit trail can not
abort or mask the operation it describes.
"""
from enum import Enum
from typing import Any, Dict, Optional, Union

from fastapi import Depends, Request

from admin_panel.database import Database, get_database
from admin_panel.middleware.monitoring import record_audit_failure
from admin_panel.models.audit_log import AdminLog
from admin_panel.utils.client import get_client_ip
from admin_panel.utils.logger import logger


class AuditAction(str, Enum):
    # User actions
    USER_VIEW = "USER_VIEW"
    USER_EDIT = "USER_EDIT"
    USER_DELETE = "USER_DELETE"
    USER_BAN = "USER_BAN"
    USER_UNBAN = "USER_UNBAN"
    USER_WARN = "USER_WARN"
    # Message actions
    MESSAGE_VIEW = "MESSAGE_VIEW"
    MESSAGE_DELETE = "MESSAGE_DELETE"
    MESSAGE_EDIT = "MESSAGE_EDIT"
    # Room actions
    ROOM_VIEW = "ROOM_VIEW"
    ROOM_EDIT = "ROOM_EDIT"
    ROOM_DELETE = "ROOM_DELETE"
    ROOM_CREATE = "ROOM_CREATE"
    # Report actions
    REPORT_VIEW = "REPORT_VIEW"
    REPORT_RESOLVE = "REPORT_RESOLVE"
    REPORT_DISMISS = "REPORT_DISMISS"
    # System actions
    SYSTEM_SETTINGS_VIEW = "SYSTEM_SETTINGS_VIEW"
    SYSTEM_SETTINGS_EDIT = "SYSTEM_SETTINGS_EDIT"
    NOTIFICATION_SEND = "NOTIFICATION_SEND"
    BACKUP_CREATE = "BACKUP_CREATE"
    BACKUP_RESTORE = "BACKUP_RESTORE"
    # Admin actions
    ADMIN_LOGIN = "ADMIN_LOGIN"
    ADMIN_LOGOUT = "ADMIN_LOGOUT"
    ADMIN_CREATE = "ADMIN_CREATE"
    ADMIN_EDIT = "ADMIN_EDIT"
    ADMIN_DELETE = "ADMIN_DELETE"
    # Security actions
    PASSWORD_CHANGE = "PASSWORD_CHANGE"
    TWO_FA_GENERATE = "2FA_GENERATE"
    TWO_FA_VERIFY = "2FA_VERIFY"
    TWO_FA_ENABLE = "2FA_ENABLE"
    TWO_FA_DISABLE = "2FA_DISABLE"


class TargetType(str, Enum):
    USER = "User"
    MESSAGE = "Message"
    ROOM = "Room"
    REPORT = "Report"
    ADMIN = "Admin"
    SYSTEM = "System"
    MEDIA = "Media"


class AuditLogger:
    """Appends audit entries using its own short-lived sessions."""

    def __init__(self, database: Database):
        self.database = database

    def log_admin_action(
        self,
        admin_id: Optional[str],
        action: Union[AuditAction, str],
        target: Optional[str] = None,
        target_type: Optional[Union[TargetType, str]] = None,
        details: Optional[Dict[str, Any]] = None,
        success: bool = True,
        error_message: Optional[str] = None,
        request: Optional[Request] = None,
    ) -> None:
        action_value = action.value if isinstance(action, Enum) else action
        target_type_value = target_type.value if isinstance(target_type, Enum) else target_type

        try:
            entry = AdminLog(
                admin_id=admin_id,
                action=action_value,
                target=target,
                target_type=target_type_value,
                details=details or {},
                success=success,
                error_message=error_message,
            )
            if request is not None:
                entry.ip_address = get_client_ip(request)
                entry.user_agent = request.headers.get("user-agent")

            with self.database.session_scope() as session:
                session.add(entry)
        except Exception as exc:
            record_audit_failure(action_value)
            logger.error(
                f"Error logging admin action: {exc}",
                extra={"admin_id": admin_id, "action": action_value, "target": target},
                exc_info=True,
            )


def get_audit_logger(database: Database = Depends(get_database)) -> AuditLogger:
    return AuditLogger(database)
