"""Tests for the admin audit trail writer"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from admin_panel.database import Database
from admin_panel.models.audit_log import AdminLog
from admin_panel.utils.audit import AuditAction, AuditLogger, TargetType


def test_log_admin_action(test_database: Database, db: Session, superadmin):
    """Test writing an entry with enum action and target type"""
    AuditLogger(test_database).log_admin_action(
        superadmin.id,
        AuditAction.ROOM_EDIT,
        target="room-1",
        target_type=TargetType.ROOM,
        details={"action": "block"},
    )

    entry = db.query(AdminLog).one()
    assert entry.admin_id == superadmin.id
    assert entry.action == "ROOM_EDIT"
    assert entry.target_type == "Room"
    assert entry.details == {"action": "block"}
    assert entry.success is True


def test_two_factor_action_values():
    """Test two-factor actions keep their stored names"""
    assert AuditAction.TWO_FA_ENABLE.value == "2FA_ENABLE"
    assert AuditAction.TWO_FA_GENERATE.value == "2FA_GENERATE"


def test_failed_login_unknown_admin(client: TestClient, db: Session, login):
    """Test a login for an unknown username is audited with no admin"""
    response = login("ghost_admin", "whatever1")
    assert response.status_code == 401

    entry = db.query(AdminLog).one()
    assert entry.admin_id is None
    assert entry.action == "ADMIN_LOGIN"
    assert entry.success is False
    assert entry.target == "ghost_admin"
    assert entry.error_message == "Admin not found"
    assert entry.ip_address is not None


def test_audit_failure_is_swallowed(db: Session, superadmin):
    """Test a broken audit store never raises into the caller"""
    broken = Database("sqlite:///./does-not-exist/audit.db")
    AuditLogger(broken).log_admin_action(superadmin.id, AuditAction.USER_VIEW)
    broken.dispose()

    assert db.query(AdminLog).count() == 0


def test_audit_failure_does_not_fail_request(client: TestClient, superadmin, login, monkeypatch):
    """Test a request still succeeds when its audit entry cannot be written"""

    def explode(self):
        raise RuntimeError("audit store unavailable")

    monkeypatch.setattr(Database, "session_scope", explode)
    response = login("admin")
    assert response.status_code == 200
