"""Dashboard aggregate statistics"""
from datetime import datetime, timedelta
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from admin_panel.api.deps import require_permission
from admin_panel.database import get_db
from admin_panel.models.admin import Admin
from admin_panel.models.media import Media
from admin_panel.models.message import Message
from admin_panel.models.report import Report
from admin_panel.models.room import Room
from admin_panel.models.user import User
from admin_panel.utils.permissions import Action, Resource
from admin_panel.utils.time import utcnow

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

BYTES_PER_MB = 1024 * 1024
TREND_DAYS = 7
TOP_USERS_LIMIT = 10


def growth_percentage(today: int, yesterday: int) -> float:
    """Day-over-day change in percent, rounded to one decimal.

    With no activity yesterday the change is 100 if anything happened today,
    otherwise 0.
    """
    if yesterday > 0:
        return round((today - yesterday) / yesterday * 100, 1)
    return 100.0 if today > 0 else 0.0


def _count(db: Session, model, *criteria) -> int:
    return db.query(func.count(model.id)).filter(*criteria).scalar() or 0


def _between(column, start: datetime, end: datetime):
    return column >= start, column < end


def _daily_trends(db: Session, today: datetime) -> List[Dict[str, Any]]:
    daily = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        next_day = day + timedelta(days=1)
        daily.append({
            "date": day.date().isoformat(),
            "users": _count(db, User, User.is_blocked == False, *_between(User.created_at, day, next_day)),
            "messages": _count(
                db, Message, Message.is_deleted == False, *_between(Message.created_at, day, next_day)
            ),
            "reports": _count(db, Report, *_between(Report.created_at, day, next_day)),
        })
    return daily


def _most_active_users(db: Session, since: datetime) -> List[Dict[str, Any]]:
    message_count = func.count(Message.id).label("message_count")
    rows = (
        db.query(User.id, User.username, User.name, User.avatar, message_count)
        .join(Message, Message.sender_id == User.id)
        .filter(Message.is_deleted == False, Message.created_at >= since)
        .group_by(User.id, User.username, User.name, User.avatar)
        .order_by(message_count.desc())
        .limit(TOP_USERS_LIMIT)
        .all()
    )
    return [
        {
            "id": row.id,
            "messageCount": row.message_count,
            "username": row.username,
            "name": row.name,
            "avatar": row.avatar,
        }
        for row in rows
    ]


@router.get("/stats")
def get_dashboard_stats(
    db: Session = Depends(get_db),
    _: Admin = Depends(require_permission(Resource.SYSTEM, Action.VIEW)),
):
    """
    Overview counters, today-vs-yesterday growth, breakdowns and 7-day trends.

    Days are UTC calendar days.
    """
    now = utcnow()
    today = datetime(now.year, now.month, now.day)
    yesterday = today - timedelta(days=1)
    week_ago = today - timedelta(days=7)

    # Users
    total_users = _count(db, User, User.is_blocked == False)
    online_users = _count(db, User, User.status == "online", User.is_blocked == False)
    blocked_users = _count(db, User, User.is_blocked == True)
    new_users_today = _count(db, User, User.created_at >= today, User.is_blocked == False)
    new_users_yesterday = _count(
        db, User, *_between(User.created_at, yesterday, today), User.is_blocked == False
    )

    # Messages
    total_messages = _count(db, Message, Message.is_deleted == False)
    messages_today = _count(db, Message, Message.created_at >= today, Message.is_deleted == False)
    messages_yesterday = _count(
        db, Message, *_between(Message.created_at, yesterday, today), Message.is_deleted == False
    )

    # Rooms
    total_rooms = _count(db, Room, Room.is_blocked == False)
    room_types = dict(
        db.query(Room.type, func.count(Room.id))
        .filter(Room.is_blocked == False)
        .group_by(Room.type)
        .all()
    )

    # Media
    media_today = _count(db, Media, Media.created_at >= today, Media.is_deleted == False)
    total_storage = (
        db.query(func.coalesce(func.sum(Media.size), 0)).filter(Media.is_deleted == False).scalar() or 0
    )

    # Reports
    total_reports = _count(db, Report)
    pending_reports = _count(db, Report, Report.status == "pending")
    resolved_reports = _count(db, Report, Report.status == "resolved")
    reports_today = _count(db, Report, Report.created_at >= today)
    reports_yesterday = _count(db, Report, *_between(Report.created_at, yesterday, today))

    return {
        "success": True,
        "data": {
            "overview": {
                "totalUsers": total_users,
                "onlineUsers": online_users,
                "blockedUsers": blocked_users,
                "totalMessages": total_messages,
                "totalRooms": total_rooms,
                "totalStorage": round(total_storage / BYTES_PER_MB),
                "pendingReports": pending_reports,
            },
            "growth": {
                "users": {
                    "count": new_users_today,
                    "percentage": growth_percentage(new_users_today, new_users_yesterday),
                },
                "messages": {
                    "count": messages_today,
                    "percentage": growth_percentage(messages_today, messages_yesterday),
                },
                "reports": {
                    "count": reports_today,
                    "percentage": growth_percentage(reports_today, reports_yesterday),
                },
                "media": {"count": media_today, "percentage": 0},
            },
            "breakdown": {
                "rooms": {
                    "private": room_types.get("private", 0),
                    "group": room_types.get("group", 0),
                    "channel": room_types.get("channel", 0),
                },
                "reports": {
                    "total": total_reports,
                    "pending": pending_reports,
                    "resolved": resolved_reports,
                },
            },
            "trends": {
                "daily": _daily_trends(db, today),
                "mostActiveUsers": _most_active_users(db, week_ago),
            },
        },
    }
