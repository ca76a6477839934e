"""Tests for chat user moderation endpoints"""
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from admin_panel.models.audit_log import AdminLog
from admin_panel.models.media import Media
from admin_panel.models.message import Message
from admin_panel.models.report import Report
from admin_panel.models.room import Room, room_participants
from admin_panel.models.user import User
from admin_panel.utils.time import utcnow

REASON = "Posting spam links in public groups"


def _room_with(db: Session, *users, room_type="group") -> Room:
    room = Room(name=f"{room_type} room", type=room_type, participants=list(users), admins=list(users[:1]))
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


def test_list_users(as_viewer: TestClient, make_user):
    """Test listing users with pagination block"""
    for _ in range(3):
        make_user()

    response = as_viewer.get("/users", params={"limit": 2})
    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["users"]) == 2
    assert data["pagination"] == {"current": 1, "total": 2, "pageSize": 2, "totalItems": 3}
    assert {"fullName", "messageCount", "roomCount", "isBlocked"} <= set(data["users"][0])


def test_list_users_search(as_viewer: TestClient, make_user):
    """Test searching by name, username or phone"""
    make_user("ahmed_m", name="Ahmed")
    make_user("sara_a", name="Sara", phone="+966506789012")

    by_name = as_viewer.get("/users", params={"search": "ahm"}).json()["data"]["users"]
    assert [user["username"] for user in by_name] == ["ahmed_m"]
    by_phone = as_viewer.get("/users", params={"search": "6789012"}).json()["data"]["users"]
    assert [user["username"] for user in by_phone] == ["sara_a"]


def test_list_users_status_filter(as_viewer: TestClient, make_user):
    """Test the blocked and online filters"""
    make_user("blocked_one", is_blocked=True)
    make_user("online_one", status="online")
    make_user("offline_one")

    blocked = as_viewer.get("/users", params={"status": "blocked"}).json()["data"]["users"]
    assert [user["username"] for user in blocked] == ["blocked_one"]
    online = as_viewer.get("/users", params={"status": "online"}).json()["data"]["users"]
    assert [user["username"] for user in online] == ["online_one"]
    active = as_viewer.get("/users", params={"status": "active"}).json()["data"]
    assert active["pagination"]["totalItems"] == 2


def test_list_users_sorting(as_viewer: TestClient, make_user):
    """Test sorting by username ascending"""
    make_user("charlie")
    make_user("alpha")
    make_user("bravo")

    users = as_viewer.get("/users", params={"sortBy": "username", "sortOrder": "asc"}).json()["data"]["users"]
    assert [user["username"] for user in users] == ["alpha", "bravo", "charlie"]


def test_list_users_counts(as_viewer: TestClient, db: Session, make_user):
    """Test message and room counts ignore deleted messages"""
    user = make_user()
    room = _room_with(db, user)
    db.add_all([
        Message(sender_id=user.id, room_id=room.id, message="hi"),
        Message(sender_id=user.id, room_id=room.id, message="gone", is_deleted=True),
    ])
    db.commit()

    listed = as_viewer.get("/users").json()["data"]["users"][0]
    assert listed["messageCount"] == 1
    assert listed["roomCount"] == 1


def test_list_users_invalid_status(as_viewer: TestClient):
    """Test an unknown status filter is rejected"""
    response = as_viewer.get("/users", params={"status": "sleeping"})
    assert response.status_code == 400
    assert "status" in response.json()["errors"]


def test_list_users_audited(as_viewer: TestClient, db: Session, viewer):
    """Test listing users writes a USER_VIEW entry"""
    as_viewer.get("/users", params={"search": "abc"})
    entry = db.query(AdminLog).filter(AdminLog.action == "USER_VIEW").one()
    assert entry.admin_id == viewer.id
    assert entry.details["search"] == "abc"


def test_update_user(as_moderator: TestClient, db: Session, make_user):
    """Test editing a user's profile fields"""
    user = make_user()
    response = as_moderator.patch(
        "/users", json={"userId": user.id, "action": "update", "lastName": "Saeed", "biography": "Hi"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User updated successfully"
    assert body["data"]["lastName"] == "Saeed"

    entry = db.query(AdminLog).filter(AdminLog.action == "USER_EDIT").one()
    assert entry.details["updateData"] == {"lastName": "Saeed", "biography": "Hi"}


def test_update_user_no_fields(as_moderator: TestClient, make_user):
    """Test an update without any editable field"""
    user = make_user()
    response = as_moderator.patch("/users", json={"userId": user.id, "action": "update"})
    assert response.status_code == 400
    assert response.json()["message"] == "No valid fields to update"


def test_update_user_username_taken(as_moderator: TestClient, make_user):
    """Test renaming onto another user's username"""
    make_user("taken")
    user = make_user()
    response = as_moderator.patch("/users", json={"userId": user.id, "action": "update", "username": "taken"})
    assert response.status_code == 409


def test_update_missing_user(as_moderator: TestClient):
    """Test acting on a user that does not exist"""
    response = as_moderator.patch("/users", json={"userId": "missing", "action": "warn", "reason": REASON})
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_invalid_action(as_superadmin: TestClient, make_user):
    """Test an unknown moderation action"""
    user = make_user()
    response = as_superadmin.patch("/users", json={"userId": user.id, "action": "promote"})
    assert response.status_code == 400


def test_block_and_unblock(as_superadmin: TestClient, db: Session, superadmin, make_user):
    """Test blocking records who and why, and unblocking clears it"""
    user = make_user(status="online")
    response = as_superadmin.patch("/users", json={"userId": user.id, "action": "block", "reason": REASON})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["isBlocked"] is True
    assert data["blockReason"] == REASON
    assert data["blockedBy"] == superadmin.id
    assert data["status"] == "offline"

    response = as_superadmin.patch("/users", json={"userId": user.id, "action": "unblock"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["isBlocked"] is False
    assert data["blockReason"] is None

    actions = [entry.action for entry in db.query(AdminLog).order_by(AdminLog.created_at).all()]
    assert actions == ["ADMIN_LOGIN", "USER_BAN", "USER_UNBAN"]


def test_block_requires_reason(as_superadmin: TestClient, db: Session, make_user):
    """Test blocking with a short reason changes nothing"""
    user = make_user()
    response = as_superadmin.patch("/users", json={"userId": user.id, "action": "block", "reason": "spam"})
    assert response.status_code == 400
    assert "reason" in response.json()["errors"]

    db.expire_all()
    assert db.get(User, user.id).is_blocked is False


def test_warn(as_moderator: TestClient, make_user):
    """Test warning increments the counter"""
    user = make_user()
    for expected in (1, 2):
        response = as_moderator.patch("/users", json={"userId": user.id, "action": "warn", "reason": REASON})
        assert response.status_code == 200
        assert response.json()["data"]["warningsCount"] == expected
        assert response.json()["data"]["lastWarning"] is not None


def test_get_user_details(as_viewer: TestClient, db: Session, make_user):
    """Test the user detail view with stats, rooms, activity and reports"""
    user = make_user()
    reporter = make_user()
    room = _room_with(db, user, reporter)
    db.add_all([
        Message(sender_id=user.id, room_id=room.id, message="hello"),
        Message(sender_id=user.id, room_id=room.id, message="old", created_at=utcnow() - timedelta(days=2)),
        Media(sender_id=user.id, room_id=room.id, filename="a.jpg", size=3 * 1024 * 1024),
        Report(reporter_id=reporter.id, target_type="user", target_id=user.id, reason="spam"),
    ])
    db.commit()

    response = as_viewer.get(f"/users/{user.id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == user.id
    assert data["stats"] == {
        "messageCount": 2,
        "roomCount": 1,
        "mediaCount": 1,
        "reportCount": 0,
        "storageUsed": 3,
    }
    assert len(data["recentMessages"]) == 2
    assert data["recentMessages"][0]["roomName"] == "group room"
    assert data["rooms"][0]["participantCount"] == 2
    assert sum(day["count"] for day in data["activity"]) == 2
    assert data["reports"][0]["reporterName"] == reporter.name


def test_get_missing_user(as_viewer: TestClient):
    """Test the detail view of an unknown user"""
    assert as_viewer.get("/users/missing").status_code == 404


def test_delete_user(as_superadmin: TestClient, db: Session, superadmin, make_user):
    """Test deleting blocks the user, soft-deletes content and leaves rooms"""
    user = make_user()
    other = make_user()
    room = _room_with(db, user, other)
    db.add_all([
        Message(sender_id=user.id, room_id=room.id, message="bye"),
        Media(sender_id=user.id, room_id=room.id, filename="b.png", size=10),
        Message(sender_id=other.id, room_id=room.id, message="stays"),
    ])
    db.commit()

    response = as_superadmin.request(
        "DELETE",
        f"/users/{user.id}",
        json={"reason": REASON, "deleteMessages": True, "deleteMedia": True},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "User deleted successfully"

    db.expire_all()
    deleted = db.get(User, user.id)
    assert deleted.is_blocked is True
    assert deleted.block_reason == f"Account deleted: {REASON}"
    assert deleted.blocked_by == superadmin.id
    assert db.query(Message).filter(Message.sender_id == user.id, Message.is_deleted == False).count() == 0
    assert db.query(Message).filter(Message.sender_id == other.id, Message.is_deleted == False).count() == 1
    assert db.query(Media).filter(Media.sender_id == user.id).one().is_deleted is True
    remaining = db.query(room_participants).filter(room_participants.c.user_id == user.id).count()
    assert remaining == 0

    entry = db.query(AdminLog).filter(AdminLog.action == "USER_DELETE").one()
    assert entry.details["deleteMessages"] is True
    assert entry.details["username"] == user.username


def test_delete_user_keeps_content_by_default(as_superadmin: TestClient, db: Session, make_user):
    """Test content stays unless deletion of it is requested"""
    user = make_user()
    room = _room_with(db, user)
    db.add(Message(sender_id=user.id, room_id=room.id, message="kept"))
    db.commit()

    response = as_superadmin.request("DELETE", f"/users/{user.id}", json={"reason": REASON})
    assert response.status_code == 200
    db.expire_all()
    assert db.query(Message).filter(Message.sender_id == user.id).one().is_deleted is False


def test_delete_user_short_reason(as_superadmin: TestClient, db: Session, make_user):
    """Test a short deletion reason is refused before anything changes"""
    user = make_user()
    response = as_superadmin.request("DELETE", f"/users/{user.id}", json={"reason": "bad"})
    assert response.status_code == 400

    db.expire_all()
    assert db.get(User, user.id).is_blocked is False
    assert db.query(AdminLog).filter(AdminLog.action == "USER_DELETE").count() == 0


def test_delete_user_without_body(as_superadmin: TestClient, make_user):
    """Test deleting without a body is a missing reason"""
    user = make_user()
    response = as_superadmin.delete(f"/users/{user.id}")
    assert response.status_code == 400


def test_delete_user_requires_delete_permission(as_moderator: TestClient, make_user):
    """Test moderators cannot delete users"""
    user = make_user()
    response = as_moderator.request("DELETE", f"/users/{user.id}", json={"reason": REASON})
    assert response.status_code == 403
