"""Admin and authentication schemas"""
from datetime import datetime
from typing import Dict, Optional

from pydantic import EmailStr, Field

from admin_panel.schemas.base import CamelModel
from admin_panel.utils.permissions import Role

PermissionMatrixSchema = Dict[str, Dict[str, bool]]


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=3, description="Username or email")
    password: str = Field(..., min_length=6)
    two_factor_token: Optional[str] = Field(None, description="6-digit TOTP code")
    remember_me: bool = Field(False, description="Keep the session for 30 days instead of 1")


class TwoFactorSetupRequest(CamelModel):
    action: str = Field(..., description="generate | verify | disable")
    token: Optional[str] = None


class AdminProfile(CamelModel):
    """Admin as returned to the dashboard (no password hash or 2FA secret)"""

    id: str
    username: str
    email: str
    role: str
    permissions: PermissionMatrixSchema
    avatar: Optional[str] = None
    last_login: Optional[datetime] = None
    two_factor_enabled: bool
    is_active: bool
    created_at: Optional[datetime] = None


class AdminCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=20)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.MODERATOR
    avatar: Optional[str] = None


class AdminUpdate(CamelModel):
    role: Optional[Role] = None
    permissions: Optional[PermissionMatrixSchema] = None
    is_active: Optional[bool] = None
    avatar: Optional[str] = None


class FixPermissionsRequest(CamelModel):
    username: Optional[str] = Field(None, description="Only repair this admin (default: all admins)")


