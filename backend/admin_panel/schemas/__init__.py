"""Pydantic schemas for request/response validation"""
from admin_panel.schemas.admin import (
    AdminCreate,
    AdminProfile,
    AdminUpdate,
    FixPermissionsRequest,
    LoginRequest,
    TwoFactorSetupRequest,
)
from admin_panel.schemas.audit_log import AdminLogResponse
from admin_panel.schemas.user import UserActionRequest, UserDeleteRequest, UserResponse

__all__ = [
    "AdminCreate",
    "AdminProfile",
    "AdminUpdate",
    "FixPermissionsRequest",
    "LoginRequest",
    "TwoFactorSetupRequest",
    "AdminLogResponse",
    "UserActionRequest",
    "UserDeleteRequest",
    "UserResponse",
]
