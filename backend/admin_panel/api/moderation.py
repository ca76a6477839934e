"""Content moderation: messages, media, rooms and user reports"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from admin_panel.api.deps import require_permission
from admin_panel.api.users import require_reason
from admin_panel.database import get_db
from admin_panel.errors import ConflictError, NotFoundError
from admin_panel.i18n import translate
from admin_panel.models.admin import Admin
from admin_panel.models.media import Media
from admin_panel.models.message import Message
from admin_panel.models.report import Report
from admin_panel.models.room import Room, room_participants
from admin_panel.schemas.moderation import (
    MediaResponse,
    MessageResponse,
    ReportActionRequest,
    ReportResponse,
    RoomActionRequest,
    RoomResponse,
)
from admin_panel.utils.audit import AuditAction, AuditLogger, TargetType, get_audit_logger
from admin_panel.utils.logger import logger
from admin_panel.utils.pagination import paginate
from admin_panel.utils.permissions import Action, Resource
from admin_panel.utils.time import utcnow

router = APIRouter(tags=["moderation"])

CLOSED_REPORT_STATUSES = ("resolved", "dismissed")


def _get_or_404(db: Session, model, entity_id: str, entity: str):
    obj = db.query(model).filter(model.id == entity_id).first()
    if not obj:
        raise NotFoundError(translate("not_found", entity=entity))
    return obj


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

@router.get("/messages")
def list_messages(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    room_id: Optional[str] = Query(None, alias="roomId"),
    sender_id: Optional[str] = Query(None, alias="senderId"),
    reported: Optional[bool] = Query(None),
    deleted: bool = Query(False, description="Include soft-deleted messages"),
    search: str = Query(""),
    db: Session = Depends(get_db),
    _: Admin = Depends(require_permission(Resource.MESSAGES, Action.VIEW)),
):
    """List messages, newest first. Soft-deleted messages are hidden unless ``deleted=true``."""
    query = db.query(Message)
    if room_id:
        query = query.filter(Message.room_id == room_id)
    if sender_id:
        query = query.filter(Message.sender_id == sender_id)
    if reported is not None:
        query = query.filter(Message.is_reported == reported)
    if not deleted:
        query = query.filter(Message.is_deleted == False)
    if search:
        query = query.filter(Message.message.ilike(f"%{search}%"))

    messages, pagination = paginate(query.order_by(Message.created_at.desc()), page, limit)
    return {
        "success": True,
        "data": {
            "messages": [MessageResponse.model_validate(message) for message in messages],
            "pagination": pagination,
        },
    }


@router.delete("/messages/{message_id}")
def delete_message(
    request: Request,
    message_id: str,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.MESSAGES, Action.DELETE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Soft-delete a message."""
    message = _get_or_404(db, Message, message_id, "Message")

    message.is_deleted = True
    message.deleted_by = admin.id
    message.deleted_at = utcnow()
    db.commit()

    audit.log_admin_action(
        admin.id,
        AuditAction.MESSAGE_DELETE,
        target=message_id,
        target_type=TargetType.MESSAGE,
        details={"roomId": message.room_id, "senderId": message.sender_id},
        request=request,
    )
    return {"success": True, "message": translate("message_deleted")}


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

@router.get("/media")
def list_media(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    mimetype: Optional[str] = Query(None, description="Prefix match, e.g. 'image/'"),
    reported: Optional[bool] = Query(None),
    deleted: bool = Query(False),
    db: Session = Depends(get_db),
    _: Admin = Depends(require_permission(Resource.MESSAGES, Action.VIEW)),
):
    """List uploaded media files, newest first."""
    query = db.query(Media)
    if mimetype:
        query = query.filter(Media.mimetype.like(f"{mimetype}%"))
    if reported is not None:
        query = query.filter(Media.is_reported == reported)
    if not deleted:
        query = query.filter(Media.is_deleted == False)

    files, pagination = paginate(query.order_by(Media.created_at.desc()), page, limit)
    return {
        "success": True,
        "data": {
            "media": [MediaResponse.model_validate(item) for item in files],
            "pagination": pagination,
        },
    }


@router.delete("/media/{media_id}")
def delete_media(
    request: Request,
    media_id: str,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.MESSAGES, Action.DELETE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Soft-delete a media file."""
    media = _get_or_404(db, Media, media_id, "Media")

    media.is_deleted = True
    media.deleted_by = admin.id
    media.deleted_at = utcnow()
    db.commit()

    audit.log_admin_action(
        admin.id,
        AuditAction.MESSAGE_DELETE,
        target=media_id,
        target_type=TargetType.MEDIA,
        details={"filename": media.filename, "size": media.size},
        request=request,
    )
    return {"success": True, "message": translate("media_deleted")}


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------

@router.get("/rooms")
def list_rooms(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    room_type: Optional[str] = Query(None, alias="type", pattern="^(group|private|channel)$"),
    blocked: Optional[bool] = Query(None),
    search: str = Query(""),
    db: Session = Depends(get_db),
    _: Admin = Depends(require_permission(Resource.ROOMS, Action.VIEW)),
):
    """List rooms with participant counts, newest first."""
    query = db.query(Room)
    if room_type:
        query = query.filter(Room.type == room_type)
    if blocked is not None:
        query = query.filter(Room.is_blocked == blocked)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Room.name.ilike(pattern), Room.description.ilike(pattern)))

    rooms, pagination = paginate(query.order_by(Room.created_at.desc()), page, limit)

    participant_counts = {}
    if rooms:
        participant_counts = dict(
            db.query(room_participants.c.room_id, func.count(room_participants.c.user_id))
            .filter(room_participants.c.room_id.in_([room.id for room in rooms]))
            .group_by(room_participants.c.room_id)
            .all()
        )

    data = []
    for room in rooms:
        item = RoomResponse.model_validate(room)
        item.participant_count = participant_counts.get(room.id, 0)
        data.append(item)

    return {"success": True, "data": {"rooms": data, "pagination": pagination}}


@router.patch("/rooms/{room_id}")
def update_room(
    request: Request,
    room_id: str,
    data: RoomActionRequest,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.ROOMS, Action.EDIT)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Block (reason of 10+ characters required) or unblock a room."""
    room = _get_or_404(db, Room, room_id, "Room")

    if data.action == "block":
        require_reason(data.reason)
        room.is_blocked = True
        room.block_reason = data.reason
        room.blocked_at = utcnow()
        room.blocked_by = admin.id
    else:
        room.is_blocked = False
        room.block_reason = None
        room.blocked_at = None
        room.blocked_by = None
    db.commit()
    db.refresh(room)

    audit.log_admin_action(
        admin.id,
        AuditAction.ROOM_EDIT,
        target=room_id,
        target_type=TargetType.ROOM,
        details={"action": data.action, "reason": data.reason},
        request=request,
    )
    logger.info(f"Room {data.action}: {room.name}", extra={"admin_id": admin.id, "target": room_id})

    item = RoomResponse.model_validate(room)
    item.participant_count = len(room.participants)
    return {"success": True, "data": item, "message": translate(f"room_{data.action}")}


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

@router.get("/reports")
def list_reports(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = Query(None, pattern="^(pending|reviewed|resolved|dismissed)$"),
    priority: Optional[str] = Query(None, pattern="^(low|medium|high|urgent)$"),
    target_type: Optional[str] = Query(None, alias="targetType", pattern="^(user|message|room|media)$"),
    db: Session = Depends(get_db),
    _: Admin = Depends(require_permission(Resource.REPORTS, Action.VIEW)),
):
    """List user reports, newest first."""
    query = db.query(Report)
    if status:
        query = query.filter(Report.status == status)
    if priority:
        query = query.filter(Report.priority == priority)
    if target_type:
        query = query.filter(Report.target_type == target_type)

    reports, pagination = paginate(query.order_by(Report.created_at.desc()), page, limit)
    return {
        "success": True,
        "data": {
            "reports": [ReportResponse.model_validate(report) for report in reports],
            "pagination": pagination,
        },
    }


@router.patch("/reports/{report_id}")
def handle_report(
    request: Request,
    report_id: str,
    data: ReportActionRequest,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.REPORTS, Action.MANAGE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    Close a report as resolved or dismissed.

    Records the handling admin, the action taken (default ``no_action``) and
    optional notes. A report that is already closed cannot be handled again.
    """
    report = _get_or_404(db, Report, report_id, "Report")
    if report.status in CLOSED_REPORT_STATUSES:
        raise ConflictError(translate("report_closed"))

    report.status = "resolved" if data.action == "resolve" else "dismissed"
    report.admin_id = admin.id
    report.admin_action = data.admin_action or "no_action"
    report.admin_notes = data.notes
    report.action_date = utcnow()
    db.commit()
    db.refresh(report)

    audit.log_admin_action(
        admin.id,
        AuditAction.REPORT_RESOLVE if data.action == "resolve" else AuditAction.REPORT_DISMISS,
        target=report_id,
        target_type=TargetType.REPORT,
        details={
            "adminAction": report.admin_action,
            "notes": data.notes,
            "targetType": report.target_type,
            "targetId": report.target_id,
        },
        request=request,
    )

    return {
        "success": True,
        "data": ReportResponse.model_validate(report),
        "message": translate(f"report_{data.action}"),
    }
