"""Chat user moderation endpoints"""
from datetime import timedelta
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic.alias_generators import to_camel
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from admin_panel.api.deps import authorize, require_permission
from admin_panel.database import get_db
from admin_panel.errors import ConflictError, NotFoundError, ValidationError
from admin_panel.i18n import translate
from admin_panel.models.admin import Admin
from admin_panel.models.media import Media
from admin_panel.models.message import Message
from admin_panel.models.report import Report
from admin_panel.models.room import Room, room_admins, room_participants
from admin_panel.models.user import User
from admin_panel.schemas.user import USER_UPDATE_FIELDS, UserActionRequest, UserDeleteRequest, UserResponse
from admin_panel.utils.audit import AuditAction, AuditLogger, TargetType, get_audit_logger
from admin_panel.utils.logger import logger
from admin_panel.utils.pagination import paginate
from admin_panel.utils.permissions import Action, Resource
from admin_panel.utils.time import utcnow

router = APIRouter(prefix="/users", tags=["users"])

MIN_REASON_LENGTH = 10
BYTES_PER_MB = 1024 * 1024
ACTIVITY_DAYS = 30
DETAIL_LIST_LIMIT = 10
MESSAGE_PREVIEW_LENGTH = 100

SORT_COLUMNS = {
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
    "name": User.name,
    "lastName": User.last_name,
    "username": User.username,
    "status": User.status,
    "warningsCount": User.warnings_count,
}

ACTION_AUDIT = {
    "update": AuditAction.USER_EDIT,
    "block": AuditAction.USER_BAN,
    "unblock": AuditAction.USER_UNBAN,
    "warn": AuditAction.USER_WARN,
}


def require_reason(reason: Optional[str]) -> str:
    """Reject a missing or too short moderation reason."""
    if not reason or len(reason.strip()) < MIN_REASON_LENGTH:
        message = translate("reason_too_short", min_length=MIN_REASON_LENGTH)
        raise ValidationError(message, errors={"reason": message})
    return reason


def _get_user_or_404(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(translate("not_found", entity="User"))
    return user


def _user_counts(db: Session, user_ids: List[str]) -> Dict[str, Dict[str, int]]:
    """Non-deleted message count and room count for each user id."""
    counts = {user_id: {"messageCount": 0, "roomCount": 0} for user_id in user_ids}
    if not user_ids:
        return counts

    message_rows = (
        db.query(Message.sender_id, func.count(Message.id))
        .filter(Message.sender_id.in_(user_ids), Message.is_deleted == False)
        .group_by(Message.sender_id)
        .all()
    )
    for user_id, count in message_rows:
        counts[user_id]["messageCount"] = count

    room_rows = (
        db.query(room_participants.c.user_id, func.count(room_participants.c.room_id))
        .filter(room_participants.c.user_id.in_(user_ids))
        .group_by(room_participants.c.user_id)
        .all()
    )
    for user_id, count in room_rows:
        counts[user_id]["roomCount"] = count

    return counts


@router.get("")
def list_users(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(""),
    status: str = Query("all", pattern="^(all|online|offline|blocked|active)$"),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.USERS, Action.VIEW)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    List chat users with search, status filter, sorting and pagination.

    Each user carries ``messageCount`` (non-deleted messages), ``roomCount``
    and ``fullName``. Unknown ``sortBy`` values fall back to ``createdAt``.
    """
    query = db.query(User)

    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(User.name.ilike(pattern), User.username.ilike(pattern), User.phone.ilike(pattern))
        )

    if status == "online":
        query = query.filter(User.status == "online")
    elif status == "offline":
        query = query.filter(User.status == "offline")
    elif status == "blocked":
        query = query.filter(User.is_blocked == True)
    elif status == "active":
        query = query.filter(User.is_blocked == False)

    column = SORT_COLUMNS.get(sort_by, User.created_at)
    query = query.order_by(column.desc() if sort_order == "desc" else column.asc())

    users, pagination = paginate(query, page, limit)
    counts = _user_counts(db, [user.id for user in users])

    data = []
    for user in users:
        item = UserResponse.model_validate(user).model_dump(by_alias=True)
        item.update(counts[user.id])
        data.append(item)

    audit.log_admin_action(
        admin.id,
        AuditAction.USER_VIEW,
        target_type=TargetType.USER,
        details={
            "page": page,
            "limit": limit,
            "search": search,
            "status": status,
            "total": pagination["totalItems"],
        },
        request=request,
    )

    return {"success": True, "data": {"users": data, "pagination": pagination}}


@router.patch("")
def update_user(
    request: Request,
    data: UserActionRequest,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.USERS, Action.EDIT)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    Apply one moderation action to a user.

    - ``update``: edit name, lastName, username, biography or avatar.
    - ``block``: requires ``users:delete`` and a reason of 10+ characters.
    - ``unblock``: requires ``users:delete``.
    - ``warn``: requires a reason of 10+ characters; increments the warning count.
    """
    user = _get_user_or_404(db, data.user_id)
    updates = {}

    if data.action == "update":
        for field in USER_UPDATE_FIELDS:
            value = getattr(data, field)
            if value is not None:
                updates[field] = value
        if not updates:
            raise ValidationError(translate("no_valid_fields"))

        if "username" in updates:
            taken = (
                db.query(User.id)
                .filter(User.username == updates["username"], User.id != user.id)
                .first()
            )
            if taken:
                raise ConflictError(translate("username_taken"))

        for field, value in updates.items():
            setattr(user, field, value)

    elif data.action == "block":
        authorize(admin, Resource.USERS, Action.DELETE)
        require_reason(data.reason)
        user.is_blocked = True
        user.block_reason = data.reason
        user.blocked_at = utcnow()
        user.blocked_by = admin.id
        user.status = "offline"

    elif data.action == "unblock":
        authorize(admin, Resource.USERS, Action.DELETE)
        user.is_blocked = False
        user.block_reason = None
        user.blocked_at = None
        user.blocked_by = None

    elif data.action == "warn":
        require_reason(data.reason)
        user.warnings_count = (user.warnings_count or 0) + 1
        user.last_warning = utcnow()

    db.commit()
    db.refresh(user)

    audit.log_admin_action(
        admin.id,
        ACTION_AUDIT[data.action],
        target=user.id,
        target_type=TargetType.USER,
        details={
            "action": data.action,
            "reason": data.reason,
            "updateData": {to_camel(k): v for k, v in updates.items()} if data.action == "update" else None,
        },
        request=request,
    )
    logger.info(
        f"User {data.action}: {user.username}",
        extra={"admin_id": admin.id, "action": data.action, "target": user.id},
    )

    return {
        "success": True,
        "data": UserResponse.model_validate(user),
        "message": translate(f"user_{data.action}"),
    }


@router.get("/{user_id}")
def get_user(
    request: Request,
    user_id: str,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.USERS, Action.VIEW)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    Full user profile: statistics, recent messages, rooms, 30-day activity
    and the reports filed about the user.
    """
    user = _get_user_or_404(db, user_id)

    message_count = (
        db.query(func.count(Message.id))
        .filter(Message.sender_id == user_id, Message.is_deleted == False)
        .scalar()
    )
    room_count = (
        db.query(func.count(room_participants.c.room_id))
        .filter(room_participants.c.user_id == user_id)
        .scalar()
    )
    media_count, storage_used = (
        db.query(func.count(Media.id), func.coalesce(func.sum(Media.size), 0))
        .filter(Media.sender_id == user_id, Media.is_deleted == False)
        .one()
    )
    report_count = db.query(func.count(Report.id)).filter(Report.reporter_id == user_id).scalar()

    recent_messages = (
        db.query(Message)
        .filter(Message.sender_id == user_id, Message.is_deleted == False)
        .order_by(Message.created_at.desc())
        .limit(DETAIL_LIST_LIMIT)
        .all()
    )

    rooms = (
        db.query(Room)
        .join(room_participants, room_participants.c.room_id == Room.id)
        .filter(room_participants.c.user_id == user_id)
        .order_by(Room.created_at.desc())
        .limit(DETAIL_LIST_LIMIT)
        .all()
    )

    day = func.date(Message.created_at)
    activity_rows = (
        db.query(day.label("day"), func.count(Message.id))
        .filter(
            Message.sender_id == user_id,
            Message.is_deleted == False,
            Message.created_at >= utcnow() - timedelta(days=ACTIVITY_DAYS),
        )
        .group_by(day)
        .order_by(day)
        .all()
    )

    reports = (
        db.query(Report)
        .filter(Report.target_type == "user", Report.target_id == user_id)
        .order_by(Report.created_at.desc())
        .limit(DETAIL_LIST_LIMIT)
        .all()
    )

    data = UserResponse.model_validate(user).model_dump(by_alias=True)
    data.update({
        "stats": {
            "messageCount": message_count or 0,
            "roomCount": room_count or 0,
            "mediaCount": media_count or 0,
            "reportCount": report_count or 0,
            "storageUsed": round((storage_used or 0) / BYTES_PER_MB),
        },
        "recentMessages": [
            {
                "id": message.id,
                "message": (message.message or "")[:MESSAGE_PREVIEW_LENGTH],
                "hasFile": bool(message.file_data),
                "hasVoice": bool(message.voice_data),
                "roomName": message.room.name if message.room else None,
                "roomType": message.room.type if message.room else None,
                "createdAt": message.created_at,
                "isEdited": message.is_edited,
            }
            for message in recent_messages
        ],
        "rooms": [
            {
                "id": room.id,
                "name": room.name,
                "type": room.type,
                "avatar": room.avatar,
                "participantCount": len(room.participants),
                "createdAt": room.created_at,
            }
            for room in rooms
        ],
        "activity": [{"date": str(day_value), "count": count} for day_value, count in activity_rows],
        "reports": [
            {
                "id": report.id,
                "reason": report.reason,
                "status": report.status,
                "reporterName": report.reporter.name if report.reporter else None,
                "adminAction": report.admin_action,
                "createdAt": report.created_at,
            }
            for report in reports
        ],
    })

    audit.log_admin_action(
        admin.id,
        AuditAction.USER_VIEW,
        target=user_id,
        target_type=TargetType.USER,
        details={"userDetails": True},
        request=request,
    )

    return {"success": True, "data": data}


@router.delete("/{user_id}")
def delete_user(
    request: Request,
    user_id: str,
    data: Optional[UserDeleteRequest] = None,
    db: Session = Depends(get_db),
    admin: Admin = Depends(require_permission(Resource.USERS, Action.DELETE)),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    Delete a user account.

    The account row is kept: the user is blocked with a deletion reason,
    optionally has their messages and media soft-deleted, and is removed from
    every room. All of it commits in one transaction or not at all.
    """
    data = data or UserDeleteRequest()
    reason = require_reason(data.reason)

    user = _get_user_or_404(db, user_id)
    username = user.username
    now = utcnow()

    try:
        user.is_blocked = True
        user.block_reason = f"{translate('delete_reason_prefix')}{reason}"
        user.blocked_at = now
        user.blocked_by = admin.id
        user.status = "offline"

        soft_delete = {"is_deleted": True, "deleted_by": admin.id, "deleted_at": now}
        if data.delete_messages:
            db.query(Message).filter(Message.sender_id == user_id).update(
                soft_delete, synchronize_session=False
            )
        if data.delete_media:
            db.query(Media).filter(Media.sender_id == user_id).update(
                soft_delete, synchronize_session=False
            )

        db.execute(room_participants.delete().where(room_participants.c.user_id == user_id))
        db.execute(room_admins.delete().where(room_admins.c.user_id == user_id))

        db.commit()
    except Exception:
        db.rollback()
        logger.error(
            f"User deletion rolled back: {user_id}",
            extra={"admin_id": admin.id, "target": user_id},
            exc_info=True,
        )
        raise

    audit.log_admin_action(
        admin.id,
        AuditAction.USER_DELETE,
        target=user_id,
        target_type=TargetType.USER,
        details={
            "reason": reason,
            "deleteMessages": data.delete_messages,
            "deleteMedia": data.delete_media,
            "username": username,
        },
        request=request,
    )
    logger.info(f"User deleted: {username}", extra={"admin_id": admin.id, "target": user_id})

    return {"success": True, "message": translate("user_deleted")}
