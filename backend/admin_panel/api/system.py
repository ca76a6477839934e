"""System settings endpoints"""
from collections import defaultdict
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from admin_panel.api.deps import require_permission
from admin_panel.database import get_db
from admin_panel.errors import NotFoundError, ValidationError
from admin_panel.i18n import translate
from admin_panel.models.admin import Admin
from admin_panel.models.system_setting import SystemSetting
from admin_panel.schemas.moderation import SettingUpdateRequest, SystemSettingResponse
from admin_panel.utils.audit import AuditAction, AuditLogger, TargetType, get_audit_logger
from admin_panel.utils.logger import logger
from admin_panel.utils.permissions import Action, Resource

router = APIRouter(prefix="/system", tags=["system"])


def value_matches_type(value: Any, data_type: str) -> bool:
    """Check a JSON value against a setting's declared data type."""
    if data_type == "string":
        return isinstance(value, str)
    if data_type == "number":
        # bool is an int subclass
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if data_type == "boolean":
        return isinstance(value, bool)
    if data_type == "object":
        return isinstance(value, dict)
    if data_type == "array":
        return isinstance(value, list)
    return False


@router.get("/settings")
def list_settings(
    request: Request,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.SYSTEM, Action.VIEW)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """All settings, grouped by category."""
    grouped = defaultdict(list)
    for setting in db.query(SystemSetting).order_by(SystemSetting.category, SystemSetting.key).all():
        grouped[setting.category].append(SystemSettingResponse.model_validate(setting))

    audit.log_admin_action(
        admin.id,
        AuditAction.SYSTEM_SETTINGS_VIEW,
        target_type=TargetType.SYSTEM,
        request=request,
    )
    return {"success": True, "data": dict(grouped)}


@router.patch("/settings/{key}")
def update_setting(
    request: Request,
    key: str,
    data: SettingUpdateRequest,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.SYSTEM, Action.EDIT)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Change one setting's value; the value must match the setting's data type."""
    setting = db.query(SystemSetting).filter(SystemSetting.key == key).first()
    if not setting:
        raise NotFoundError(translate("not_found", entity="Setting"))

    if not value_matches_type(data.value, setting.data_type):
        message = translate("setting_type_mismatch", setting=key, data_type=setting.data_type)
        raise ValidationError(message, errors={"value": message})

    previous = setting.value
    setting.value = data.value
    setting.last_modified_by = admin.id
    db.commit()
    db.refresh(setting)

    audit.log_admin_action(
        admin.id,
        AuditAction.SYSTEM_SETTINGS_EDIT,
        target=key,
        target_type=TargetType.SYSTEM,
        details={"previousValue": previous, "newValue": data.value},
        request=request,
    )
    logger.info(f"System setting changed: {key}", extra={"admin_id": admin.id, "target": key})

    return {
        "success": True,
        "data": SystemSettingResponse.model_validate(setting),
        "message": translate("setting_updated"),
    }
