"""Admin model: dashboard operators with role-based permissions"""
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String

from admin_panel.database import Base, generate_uuid_string
from admin_panel.utils.permissions import Role, get_role_permissions
from admin_panel.utils.time import utcnow


class Admin(Base):
    """A privileged operator of the dashboard.

    ``username`` and ``email`` are stored lower-cased so login lookups can be
    case-insensitive. Admins are never physically deleted; ``is_active`` is
    cleared instead.
    """

    __tablename__ = "admins"

    id = Column(String(36), primary_key=True, default=generate_uuid_string)
    username = Column(String(20), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.MODERATOR.value)      # superadmin|moderator|viewer
    permissions = Column(JSON, nullable=False, default=lambda: get_role_permissions(Role.MODERATOR))
    avatar = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    last_login = Column(DateTime, nullable=True)

    two_factor_enabled = Column(Boolean, default=False, nullable=False)
    two_factor_secret = Column(String(64), nullable=True)                          # pending or active TOTP secret

    login_attempts = Column(Integer, default=0, nullable=False)
    lock_until = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def is_locked(self) -> bool:
        return self.lock_until is not None and self.lock_until > utcnow()

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN.value
