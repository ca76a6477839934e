"""Audit trail query endpoint"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from admin_panel.api.deps import require_permission
from admin_panel.database import get_db
from admin_panel.models.admin import Admin
from admin_panel.models.audit_log import AdminLog
from admin_panel.schemas.audit_log import AdminLogResponse
from admin_panel.utils.permissions import Action, Resource

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("")
def query_logs(
    admin_id: Optional[str] = Query(None, alias="adminId"),
    action: Optional[str] = Query(None, description="Audit action, e.g. ADMIN_LOGIN"),
    target_type: Optional[str] = Query(None, alias="targetType"),
    success: Optional[bool] = Query(None),
    start_time: Optional[datetime] = Query(None, alias="startTime"),
    end_time: Optional[datetime] = Query(None, alias="endTime"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    _: Admin = Depends(require_permission(Resource.ADMINS, Action.VIEW)),
):
    """
    Query the admin audit trail, newest first.

    The trail is append-only: there is no endpoint that edits or deletes
    entries.
    """
    query = db.query(AdminLog)

    if admin_id:
        query = query.filter(AdminLog.admin_id == admin_id)
    if action:
        query = query.filter(AdminLog.action == action)
    if target_type:
        query = query.filter(AdminLog.target_type == target_type)
    if success is not None:
        query = query.filter(AdminLog.success == success)
    if start_time:
        query = query.filter(AdminLog.created_at >= start_time)
    if end_time:
        query = query.filter(AdminLog.created_at <= end_time)

    total = query.count()
    logs = query.order_by(AdminLog.created_at.desc()).offset(offset).limit(limit).all()

    return {
        "success": True,
        "data": {
            "logs": [AdminLogResponse.model_validate(log) for log in logs],
            "total": total,
            "limit": limit,
            "offset": offset,
        },
    }
