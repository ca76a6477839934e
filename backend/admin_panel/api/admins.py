"""Admin account management (super-admin and admins:manage)"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from admin_panel.api.deps import require_permission
from admin_panel.bootstrap import create_admin, find_admin_by_identity, fix_permissions
from admin_panel.database import get_db
from admin_panel.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from admin_panel.i18n import translate
from admin_panel.models.admin import Admin
from admin_panel.schemas.admin import AdminCreate, AdminProfile, AdminUpdate, FixPermissionsRequest
from admin_panel.utils.audit import AuditAction, AuditLogger, TargetType, get_audit_logger
from admin_panel.utils.logger import logger
from admin_panel.utils.permissions import Action, Resource, Role, get_role_permissions, normalize_permissions

router = APIRouter(prefix="/admins", tags=["admins"])


def _get_admin_or_404(db: Session, admin_id: str) -> Admin:
    admin = db.query(Admin).filter(Admin.id == admin_id).first()
    if not admin:
        raise NotFoundError(translate("not_found", entity="Admin"))
    return admin


@router.get("")
def list_admins(
    db: Session = Depends(get_db),
    _: Admin = Depends(require_permission(Resource.ADMINS, Action.VIEW)),
):
    """List all admins, newest first (password hashes and 2FA secrets never leave the server)."""
    admins = db.query(Admin).order_by(Admin.created_at.desc()).all()
    return {"success": True, "data": [AdminProfile.model_validate(admin) for admin in admins]}


@router.post("", status_code=201)
def create_admin_account(
    request: Request,
    data: AdminCreate,
    db: Session = Depends(get_db),
    actor: Admin = Depends(require_permission(Resource.ADMINS, Action.MANAGE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Create an admin with the default permission matrix of its role."""
    if data.role == Role.SUPERADMIN and not actor.is_superadmin:
        raise AuthorizationError(translate("superadmin_role_required"))

    if find_admin_by_identity(db, data.username, data.email):
        raise ConflictError(translate("admin_exists"))

    admin = create_admin(db, data.username, data.email, data.password, data.role, data.avatar)
    db.commit()
    db.refresh(admin)

    audit.log_admin_action(
        actor.id,
        AuditAction.ADMIN_CREATE,
        target=admin.id,
        target_type=TargetType.ADMIN,
        details={"username": admin.username, "role": admin.role},
        request=request,
    )
    logger.info(f"Created admin: {admin.username}", extra={"admin_id": actor.id, "target": admin.id})

    return {"success": True, "data": AdminProfile.model_validate(admin), "message": translate("admin_created")}


@router.patch("/{admin_id}")
def update_admin_account(
    request: Request,
    admin_id: str,
    data: AdminUpdate,
    db: Session = Depends(get_db),
    actor: Admin = Depends(require_permission(Resource.ADMINS, Action.MANAGE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    Change an admin's role, permissions, active flag or avatar.

    A role change without explicit permissions resets the matrix to the new
    role's defaults. Explicit permissions are completed from the role
    defaults and unknown resource/action pairs are dropped.
    """
    admin = _get_admin_or_404(db, admin_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise ValidationError(translate("no_valid_fields"))

    if data.is_active is False and admin.id == actor.id:
        raise ValidationError(translate("cannot_deactivate_self"))

    if data.role is not None and data.role.value != admin.role:
        if admin.id == actor.id:
            raise ValidationError(translate("cannot_change_own_role"))
        if Role.SUPERADMIN in (data.role, admin.role) and not actor.is_superadmin:
            raise AuthorizationError(translate("superadmin_role_required"))

    if data.role is not None:
        admin.role = data.role.value
        if data.permissions is None:
            admin.permissions = get_role_permissions(data.role)
    if data.permissions is not None:
        admin.permissions = normalize_permissions(data.permissions, admin.role)
    if data.is_active is not None:
        admin.is_active = data.is_active
    if data.avatar is not None:
        admin.avatar = data.avatar
    db.commit()
    db.refresh(admin)

    audit.log_admin_action(
        actor.id,
        AuditAction.ADMIN_EDIT,
        target=admin.id,
        target_type=TargetType.ADMIN,
        details={"changes": sorted(changes)},
        request=request,
    )
    return {"success": True, "data": AdminProfile.model_validate(admin), "message": translate("admin_updated")}


@router.delete("/{admin_id}")
def deactivate_admin_account(
    request: Request,
    admin_id: str,
    db: Session = Depends(get_db),
    actor: Admin = Depends(require_permission(Resource.ADMINS, Action.MANAGE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Deactivate an admin. Admin rows are never deleted."""
    admin = _get_admin_or_404(db, admin_id)
    if admin.id == actor.id:
        raise ValidationError(translate("cannot_deactivate_self"))
    if admin.is_superadmin and not actor.is_superadmin:
        raise AuthorizationError(translate("superadmin_role_required"))

    admin.is_active = False
    db.commit()

    audit.log_admin_action(
        actor.id,
        AuditAction.ADMIN_DELETE,
        target=admin.id,
        target_type=TargetType.ADMIN,
        details={"username": admin.username},
        request=request,
    )
    logger.info(f"Deactivated admin: {admin.username}", extra={"admin_id": actor.id, "target": admin.id})

    return {"success": True, "message": translate("admin_deactivated")}


@router.post("/fix-permissions")
def fix_admin_permissions(
    request: Request,
    data: FixPermissionsRequest,
    db: Session = Depends(get_db),
    actor: Admin = Depends(require_permission(Resource.ADMINS, Action.MANAGE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Reset permission matrices to their role defaults for one admin or for all admins."""
    admins = fix_permissions(db, data.username)
    if data.username and not admins:
        raise NotFoundError(translate("not_found", entity="Admin"))

    audit.log_admin_action(
        actor.id,
        AuditAction.ADMIN_EDIT,
        target=data.username,
        target_type=TargetType.ADMIN,
        details={"fixPermissions": True, "count": len(admins)},
        request=request,
    )

    return {
        "success": True,
        "message": translate("permissions_fixed"),
        "data": [
            {"username": admin.username, "role": admin.role, "permissions": admin.permissions}
            for admin in admins
        ],
    }
