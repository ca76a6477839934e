"""Login, logout, profile and two-factor setup endpoints"""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from admin_panel.api.deps import get_current_admin, get_optional_admin
from admin_panel.config import settings
from admin_panel.database import get_db
from admin_panel.errors import AuthenticationError, ValidationError
from admin_panel.i18n import translate
from admin_panel.middleware.monitoring import record_login
from admin_panel.middleware.rate_limit import limiter
from admin_panel.models.admin import Admin
from admin_panel.schemas.admin import AdminProfile, LoginRequest, TwoFactorSetupRequest
from admin_panel.utils.audit import AuditAction, AuditLogger, TargetType, get_audit_logger
from admin_panel.utils.auth import (
    TOTP_DIGITS,
    generate_2fa_secret,
    verify_2fa_token,
    verify_password,
)
from admin_panel.utils.client import get_client_ip
from admin_panel.utils.jwt_utils import create_session_token
from admin_panel.utils.lockout import increment_login_attempts, is_account_locked, reset_login_attempts
from admin_panel.utils.logger import logger
from admin_panel.utils.time import utcnow

router = APIRouter(prefix="/auth", tags=["auth"])


def _require_code(token):
    if not token or len(token) != TOTP_DIGITS:
        raise ValidationError(
            translate("validation_failed"),
            errors={"token": translate("invalid_code")},
        )


# ---------------------------------------------------------------------------
# Login state machine
# ---------------------------------------------------------------------------

@router.post("/login")
@limiter.limit(settings.RATE_LIMIT_LOGIN)
def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    db: Session = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    Authenticate an admin and open a cookie session.

    Credential failures all answer with the same generic message so the
    response never reveals whether the username exists. When two-factor
    authentication is enabled and no code was sent, the reply is a 200 with
    ``requireTwoFactor: true`` and no session is created.
    """
    identifier = data.username.strip().lower()

    def fail(admin_id, reason, outcome, message_key):
        record_login(outcome)
        audit.log_admin_action(
            admin_id,
            AuditAction.ADMIN_LOGIN,
            target=identifier,
            target_type=TargetType.ADMIN,
            success=False,
            error_message=reason,
            request=request,
        )
        raise AuthenticationError(translate(message_key))

    admin = (
        db.query(Admin)
        .filter(or_(func.lower(Admin.username) == identifier, func.lower(Admin.email) == identifier))
        .first()
    )
    if not admin:
        fail(None, "Admin not found", "invalid_credentials", "invalid_credentials")

    if is_account_locked(admin):
        fail(admin.id, "Account locked", "locked", "account_locked")

    if not admin.is_active:
        fail(admin.id, "Account deactivated", "deactivated", "account_deactivated")

    if not verify_password(data.password, admin.password_hash):
        increment_login_attempts(db, admin)
        fail(admin.id, "Invalid password", "invalid_credentials", "invalid_credentials")

    if admin.two_factor_enabled:
        if not data.two_factor_token:
            record_login("two_factor_required")
            return {
                "success": False,
                "requireTwoFactor": True,
                "message": translate("two_factor_required"),
            }

        if not verify_2fa_token(data.two_factor_token, admin.two_factor_secret):
            increment_login_attempts(db, admin)
            fail(admin.id, "Invalid 2FA token", "invalid_2fa", "invalid_2fa_code")

    admin.last_login = utcnow()
    reset_login_attempts(db, admin)
    db.refresh(admin)

    max_age = (
        settings.SESSION_REMEMBER_EXPIRE_SECONDS if data.remember_me else settings.SESSION_EXPIRE_SECONDS
    )
    token = create_session_token(admin, expires_in=max_age)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )

    record_login("success")
    audit.log_admin_action(
        admin.id,
        AuditAction.ADMIN_LOGIN,
        target=admin.id,
        target_type=TargetType.ADMIN,
        details={
            "ipAddress": get_client_ip(request),
            "userAgent": request.headers.get("user-agent"),
            "rememberMe": data.remember_me,
        },
        request=request,
    )
    logger.info(f"Admin logged in: {admin.username}", extra={"admin_id": admin.id})

    return {
        "success": True,
        "message": translate("login_success"),
        "admin": AdminProfile.model_validate(admin),
    }


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    admin: Admin = Depends(get_optional_admin),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Clear the session cookie. Succeeds with or without a valid session."""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")

    if admin is not None:
        audit.log_admin_action(
            admin.id,
            AuditAction.ADMIN_LOGOUT,
            target=admin.id,
            target_type=TargetType.ADMIN,
            request=request,
        )
        logger.info(f"Admin logged out: {admin.username}", extra={"admin_id": admin.id})

    return {"success": True, "message": translate("logout_success")}


@router.get("/profile")
def get_profile(admin: Admin = Depends(get_current_admin)):
    """Return the authenticated admin's sanitized profile."""
    return {"success": True, "admin": AdminProfile.model_validate(admin)}


# ---------------------------------------------------------------------------
# Two-factor setup: generate -> verify (enable) -> disable
# ---------------------------------------------------------------------------

@router.post("/setup-2fa")
def setup_two_factor(
    request: Request,
    data: TwoFactorSetupRequest,
    admin: Admin = Depends(get_current_admin),
    db: Session = Depends(get_db),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """
    Manage two-factor authentication for the calling admin.

    - ``generate`` stores a new pending secret (2FA stays disabled) and
      returns it with its provisioning URI. Re-generating overwrites a
      pending secret; while 2FA is active it is refused until ``disable``.
    - ``verify`` enables 2FA once a code for the pending secret checks out.
    - ``disable`` turns 2FA off after a code for the active secret checks
      out, and clears the secret.
    """
    if data.action == "generate":
        if admin.two_factor_enabled:
            raise ValidationError(translate("2fa_already_enabled"))

        generated = generate_2fa_secret(admin.email)
        admin.two_factor_secret = generated.secret
        db.commit()

        audit.log_admin_action(
            admin.id,
            AuditAction.TWO_FA_GENERATE,
            target=admin.id,
            target_type=TargetType.ADMIN,
            request=request,
        )
        return {
            "success": True,
            "message": translate("2fa_generated"),
            "secret": generated.secret,
            "qrCode": generated.provisioning_uri,
        }

    if data.action == "verify":
        _require_code(data.token)
        if not admin.two_factor_secret:
            raise ValidationError(translate("2fa_not_generated"))

        if not verify_2fa_token(data.token, admin.two_factor_secret):
            audit.log_admin_action(
                admin.id,
                AuditAction.TWO_FA_VERIFY,
                target=admin.id,
                target_type=TargetType.ADMIN,
                success=False,
                error_message="Invalid 2FA token",
                request=request,
            )
            raise ValidationError(translate("invalid_code"))

        admin.two_factor_enabled = True
        db.commit()

        audit.log_admin_action(
            admin.id,
            AuditAction.TWO_FA_ENABLE,
            target=admin.id,
            target_type=TargetType.ADMIN,
            request=request,
        )
        logger.info(f"2FA enabled for {admin.username}", extra={"admin_id": admin.id})
        return {"success": True, "message": translate("2fa_enabled")}

    if data.action == "disable":
        _require_code(data.token)
        if not admin.two_factor_enabled:
            raise ValidationError(translate("2fa_not_enabled"))

        if not verify_2fa_token(data.token, admin.two_factor_secret):
            audit.log_admin_action(
                admin.id,
                AuditAction.TWO_FA_DISABLE,
                target=admin.id,
                target_type=TargetType.ADMIN,
                success=False,
                error_message="Invalid 2FA token",
                request=request,
            )
            raise ValidationError(translate("invalid_code"))

        admin.two_factor_enabled = False
        admin.two_factor_secret = None
        db.commit()

        audit.log_admin_action(
            admin.id,
            AuditAction.TWO_FA_DISABLE,
            target=admin.id,
            target_type=TargetType.ADMIN,
            request=request,
        )
        logger.info(f"2FA disabled for {admin.username}", extra={"admin_id": admin.id})
        return {"success": True, "message": translate("2fa_disabled")}

    raise ValidationError(translate("invalid_action"))
