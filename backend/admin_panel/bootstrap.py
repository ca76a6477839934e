"""Admin account and default-settings helpers shared by init_admin.py and the API"""
from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from admin_panel.models.admin import Admin
from admin_panel.models.system_setting import DEFAULT_SETTINGS, SystemSetting
from admin_panel.utils.auth import hash_password
from admin_panel.utils.permissions import Role, get_role_permissions


def find_admin_by_identity(db: Session, username: str, email: Optional[str] = None) -> Optional[Admin]:
    """Case-insensitive lookup by username (or e-mail, when given)."""
    criteria = [func.lower(Admin.username) == username.lower()]
    if email:
        criteria.append(func.lower(Admin.email) == email.lower())
    return db.query(Admin).filter(or_(*criteria)).first()


def create_admin(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: Role = Role.MODERATOR,
    avatar: Optional[str] = None,
) -> Admin:
    """Add a new admin with the role's default permission matrix. Does not commit."""
    admin = Admin(
        username=username.strip().lower(),
        email=email.strip().lower(),
        password_hash=hash_password(password),
        role=role.value,
        permissions=get_role_permissions(role),
        avatar=avatar,
        is_active=True,
    )
    db.add(admin)
    return admin


def ensure_admin(db: Session, username: str, email: str, password: str, role: Role) -> Tuple[Admin, bool]:
    """Return ``(admin, created)``; existing accounts are left untouched. Commits."""
    existing = find_admin_by_identity(db, username, email)
    if existing:
        return existing, False

    admin = create_admin(db, username, email, password, role)
    db.commit()
    db.refresh(admin)
    return admin, True


def ensure_default_settings(db: Session) -> List[str]:
    """Insert every missing default system setting; return the keys created. Commits."""
    existing = {key for (key,) in db.query(SystemSetting.key).all()}
    created = []
    for setting in DEFAULT_SETTINGS:
        if setting["key"] in existing:
            continue
        db.add(SystemSetting(**setting))
        created.append(setting["key"])
    db.commit()
    return created


def fix_permissions(db: Session, username: Optional[str] = None) -> List[Admin]:
    """Reset permission matrices to the role defaults.

    Applies to the admin named ``username`` (case-insensitive) or, when no
    name is given, to every admin. Returns the admins updated. Commits.
    """
    query = db.query(Admin)
    if username:
        query = query.filter(func.lower(Admin.username) == username.lower())

    admins = query.all()
    for admin in admins:
        admin.permissions = get_role_permissions(admin.role)
    db.commit()
    return admins
