"""Tests for role permission matrices and endpoint authorization"""
from fastapi.testclient import TestClient

from admin_panel.utils.permissions import (
    Action,
    Resource,
    Role,
    get_role_permissions,
    has_permission,
    normalize_permissions,
)


def test_superadmin_has_every_pair():
    """Test the super-admin matrix grants every known pair"""
    matrix = get_role_permissions(Role.SUPERADMIN)
    assert all(flag for actions in matrix.values() for flag in actions.values())


def test_moderator_defaults():
    """Test the moderator matrix"""
    matrix = get_role_permissions(Role.MODERATOR)
    assert matrix["users"] == {"view": True, "edit": True, "delete": False}
    assert matrix["messages"] == {"view": True, "delete": True}
    assert matrix["rooms"] == {"view": True, "edit": False, "delete": False}
    assert matrix["reports"] == {"view": True, "manage": True}
    assert matrix["system"] == {"view": False, "edit": False}
    assert matrix["admins"] == {"view": False, "manage": False}


def test_viewer_is_read_only():
    """Test the viewer matrix only grants view on content resources"""
    matrix = get_role_permissions(Role.VIEWER)
    for resource in ("users", "messages", "rooms", "reports"):
        assert matrix[resource]["view"] is True
        assert not any(flag for action, flag in matrix[resource].items() if action != "view")
    assert not any(matrix["system"].values())
    assert not any(matrix["admins"].values())


def test_unknown_role_falls_back_to_viewer():
    """Test an unknown role gets the viewer matrix"""
    assert get_role_permissions("owner") == get_role_permissions(Role.VIEWER)


def test_role_defaults_are_copies():
    """Test mutating a returned matrix does not change the defaults"""
    matrix = get_role_permissions(Role.VIEWER)
    matrix["admins"]["manage"] = True
    assert get_role_permissions(Role.VIEWER)["admins"]["manage"] is False


def test_has_permission_unknown_pair_denied():
    """Test pairs outside the permission table are always denied"""
    matrix = {"messages": {"edit": True}, "billing": {"view": True}}
    assert has_permission(matrix, "messages", "edit") is False
    assert has_permission(matrix, "billing", "view") is False
    assert has_permission(None, Resource.USERS, Action.VIEW) is False


def test_has_permission_requires_true():
    """Test only a literal True grants access"""
    assert has_permission({"users": {"view": True}}, Resource.USERS, Action.VIEW) is True
    assert has_permission({"users": {"view": "yes"}}, Resource.USERS, Action.VIEW) is False
    assert has_permission({"users": True}, Resource.USERS, Action.VIEW) is False


def test_normalize_permissions():
    """Test partial matrices are completed from role defaults and junk is dropped"""
    matrix = normalize_permissions(
        {"users": {"delete": True, "fly": True}, "system": {"view": "yes"}, "billing": {"view": True}},
        Role.MODERATOR,
    )
    assert matrix["users"] == {"view": True, "edit": True, "delete": True}
    assert matrix["system"]["view"] is False
    assert "billing" not in matrix
    assert "fly" not in matrix["users"]


def test_viewer_cannot_edit_users(as_viewer: TestClient, make_user):
    """Test a viewer is refused a user edit"""
    user = make_user()
    response = as_viewer.patch("/users", json={"userId": user.id, "action": "warn", "reason": "x" * 12})
    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Insufficient permissions for users:edit"}


def test_moderator_cannot_block_users(as_moderator: TestClient, make_user):
    """Test blocking needs users:delete on top of users:edit"""
    user = make_user()
    response = as_moderator.patch(
        "/users", json={"userId": user.id, "action": "block", "reason": "Repeated spam in groups"}
    )
    assert response.status_code == 403
    assert "users:delete" in response.json()["message"]


def test_moderator_cannot_manage_admins(as_moderator: TestClient):
    """Test admin management is closed to moderators"""
    assert as_moderator.get("/admins").status_code == 403
    assert as_moderator.get("/logs").status_code == 403
    assert as_moderator.get("/system/settings").status_code == 403


def test_permissions_read_from_stored_matrix(as_moderator: TestClient, db, moderator):
    """Test a matrix change applies to an existing session"""
    moderator.permissions = normalize_permissions({"system": {"view": True}}, Role.MODERATOR)
    db.commit()
    assert as_moderator.get("/system/settings").status_code == 200


def test_superadmin_bypasses_matrix(as_superadmin: TestClient, db, superadmin):
    """Test a super-admin passes checks even with an empty matrix"""
    superadmin.permissions = {}
    db.commit()
    assert as_superadmin.get("/admins").status_code == 200


def test_unauthenticated_is_401_not_403(client: TestClient):
    """Test protected endpoints require a session before permissions"""
    for path in ("/users", "/admins", "/dashboard/stats", "/logs", "/system/settings", "/reports"):
        assert client.get(path).status_code == 401
