"""Tests for two-factor authentication setup and login"""
import pyotp
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from admin_panel.models.admin import Admin
from admin_panel.models.audit_log import AdminLog
from admin_panel.utils.auth import generate_2fa_secret, verify_2fa_token


def _enable_two_factor(client: TestClient) -> str:
    secret = client.post("/auth/setup-2fa", json={"action": "generate"}).json()["secret"]
    response = client.post("/auth/setup-2fa", json={"action": "verify", "token": pyotp.TOTP(secret).now()})
    assert response.status_code == 200
    return secret


def test_generate_secret(as_moderator: TestClient, db: Session, moderator: Admin):
    """Test generating a pending secret leaves 2FA disabled"""
    response = as_moderator.post("/auth/setup-2fa", json={"action": "generate"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["qrCode"].startswith("otpauth://totp/")

    db.expire_all()
    admin = db.get(Admin, moderator.id)
    assert admin.two_factor_secret == data["secret"]
    assert admin.two_factor_enabled is False


def test_verify_enables(as_moderator: TestClient, db: Session, moderator: Admin):
    """Test a correct code for the pending secret enables 2FA"""
    _enable_two_factor(as_moderator)
    db.expire_all()
    assert db.get(Admin, moderator.id).two_factor_enabled is True

    actions = {entry.action for entry in db.query(AdminLog).all()}
    assert {"2FA_GENERATE", "2FA_ENABLE"} <= actions


def test_verify_wrong_code(as_moderator: TestClient, db: Session, moderator: Admin):
    """Test a wrong code does not enable 2FA and is audited"""
    as_moderator.post("/auth/setup-2fa", json={"action": "generate"})
    response = as_moderator.post("/auth/setup-2fa", json={"action": "verify", "token": "000000"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid code"

    db.expire_all()
    assert db.get(Admin, moderator.id).two_factor_enabled is False
    failure = db.query(AdminLog).filter(AdminLog.action == "2FA_VERIFY").one()
    assert failure.success is False


def test_verify_without_secret(as_moderator: TestClient):
    """Test verifying before generating"""
    response = as_moderator.post("/auth/setup-2fa", json={"action": "verify", "token": "123456"})
    assert response.status_code == 400


def test_verify_requires_six_digit_code(as_moderator: TestClient):
    """Test a missing or short code is a validation error"""
    as_moderator.post("/auth/setup-2fa", json={"action": "generate"})
    response = as_moderator.post("/auth/setup-2fa", json={"action": "verify", "token": "123"})
    assert response.status_code == 400
    assert "token" in response.json()["errors"]


def test_invalid_action(as_moderator: TestClient):
    """Test an unknown setup action"""
    response = as_moderator.post("/auth/setup-2fa", json={"action": "rotate"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid action"


def test_login_requires_code(client: TestClient, moderator: Admin, login):
    """Test login with 2FA enabled asks for the code without opening a session"""
    login("moderator")
    _enable_two_factor(client)

    response = login("moderator")
    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["requireTwoFactor"] is True
    assert "set-cookie" not in response.headers
    assert client.get("/auth/profile").status_code == 401


def test_login_with_code(client: TestClient, moderator: Admin, login):
    """Test login with a valid TOTP code"""
    login("moderator")
    secret = _enable_two_factor(client)

    response = login("moderator", twoFactorToken=pyotp.TOTP(secret).now())
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["admin"]["twoFactorEnabled"] is True


def test_login_with_wrong_code_counts_failure(client: TestClient, db: Session, moderator: Admin, login):
    """Test a wrong TOTP code counts as a failed login"""
    login("moderator")
    _enable_two_factor(client)

    response = login("moderator", twoFactorToken="000000")
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid two-factor authentication code"

    db.expire_all()
    assert db.get(Admin, moderator.id).login_attempts == 1


def test_disable(as_moderator: TestClient, db: Session, moderator: Admin):
    """Test disabling 2FA clears the secret"""
    secret = _enable_two_factor(as_moderator)
    response = as_moderator.post("/auth/setup-2fa", json={"action": "disable", "token": pyotp.TOTP(secret).now()})
    assert response.status_code == 200

    db.expire_all()
    admin = db.get(Admin, moderator.id)
    assert admin.two_factor_enabled is False
    assert admin.two_factor_secret is None


def test_disable_when_not_enabled(as_moderator: TestClient):
    """Test disabling when 2FA is off"""
    response = as_moderator.post("/auth/setup-2fa", json={"action": "disable", "token": "123456"})
    assert response.status_code == 400
    assert response.json()["message"] == "Two-factor authentication is not enabled"


def test_verify_2fa_token_helper():
    """Test the TOTP helper accepts the current code and rejects junk"""
    secret = generate_2fa_secret("someone@example.com").secret
    assert verify_2fa_token(pyotp.TOTP(secret).now(), secret)
    assert not verify_2fa_token("abcdef", secret)
    assert not verify_2fa_token(None, secret)
    assert not verify_2fa_token("123456", None)


def test_generate_refused_while_enabled(client: TestClient, db: Session, moderator: Admin, login):
    """Test an active 2FA cannot be replaced or switched off by generating a new secret"""
    login("moderator")
    secret = _enable_two_factor(client)

    response = client.post("/auth/setup-2fa", json={"action": "generate"})
    assert response.status_code == 400
    assert response.json()["message"] == "Two-factor authentication is already enabled; disable it first"

    db.expire_all()
    admin = db.get(Admin, moderator.id)
    assert admin.two_factor_enabled is True
    assert admin.two_factor_secret == secret

    response = login("moderator")
    assert response.json()["requireTwoFactor"] is True
    assert "set-cookie" not in response.headers
