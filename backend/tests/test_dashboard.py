"""Tests for dashboard statistics"""
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from admin_panel.api.dashboard import growth_percentage
from admin_panel.models.media import Media
from admin_panel.models.message import Message
from admin_panel.models.report import Report
from admin_panel.models.room import Room
from admin_panel.utils.time import utcnow


def test_growth_percentage():
    """Test day-over-day growth rules"""
    assert growth_percentage(15, 10) == 50.0
    assert growth_percentage(5, 10) == -50.0
    assert growth_percentage(1, 3) == -66.7
    assert growth_percentage(3, 0) == 100.0
    assert growth_percentage(0, 0) == 0.0


def test_stats_requires_system_view(as_moderator: TestClient):
    """Test moderators cannot read dashboard stats"""
    assert as_moderator.get("/dashboard/stats").status_code == 403


def test_stats_empty(as_superadmin: TestClient):
    """Test stats on an empty database"""
    response = as_superadmin.get("/dashboard/stats")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["overview"]["totalUsers"] == 0
    assert data["growth"]["users"] == {"count": 0, "percentage": 0.0}
    assert len(data["trends"]["daily"]) == 7
    assert data["trends"]["mostActiveUsers"] == []


def test_stats(as_superadmin: TestClient, db: Session, make_user):
    """Test overview counters, breakdowns and trends"""
    now = utcnow()
    alice = make_user("alice", status="online")
    bob = make_user("bob")
    make_user("carol", is_blocked=True)

    group = Room(name="Group", type="group", participants=[alice, bob])
    channel = Room(name="Channel", type="channel", participants=[alice])
    blocked = Room(name="Blocked", type="private", is_blocked=True, participants=[bob])
    db.add_all([group, channel, blocked])
    db.commit()

    db.add_all([
        Message(sender_id=alice.id, room_id=group.id, message="1", created_at=now),
        Message(sender_id=alice.id, room_id=group.id, message="2", created_at=now),
        Message(sender_id=bob.id, room_id=group.id, message="3", created_at=now - timedelta(days=1)),
        Message(sender_id=bob.id, room_id=group.id, message="x", is_deleted=True, created_at=now),
        Media(sender_id=alice.id, room_id=group.id, filename="a", size=2 * 1024 * 1024, created_at=now),
        Report(reporter_id=bob.id, target_type="user", target_id=alice.id, reason="spam"),
        Report(reporter_id=alice.id, target_type="user", target_id=bob.id, reason="other", status="resolved"),
    ])
    db.commit()

    data = as_superadmin.get("/dashboard/stats").json()["data"]
    overview = data["overview"]
    assert overview["totalUsers"] == 2
    assert overview["onlineUsers"] == 1
    assert overview["blockedUsers"] == 1
    assert overview["totalMessages"] == 3
    assert overview["totalRooms"] == 2
    assert overview["totalStorage"] == 2
    assert overview["pendingReports"] == 1

    assert data["breakdown"]["rooms"] == {"private": 0, "group": 1, "channel": 1}
    assert data["breakdown"]["reports"] == {"total": 2, "pending": 1, "resolved": 1}
    assert data["growth"]["media"]["count"] == 1
    assert data["growth"]["reports"]["count"] == 2

    daily = data["trends"]["daily"]
    assert daily[-1]["date"] == now.date().isoformat()
    assert sum(day["messages"] for day in daily) == 3

    top = data["trends"]["mostActiveUsers"]
    assert top[0]["username"] == "alice"
    assert top[0]["messageCount"] == 2
