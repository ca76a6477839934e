"""API dependencies for authentication and authorization.

Authentication
--------------
The session token is read from the HTTP-only ``token`` cookie set at login,
falling back to ``Authorization: Bearer <JWT>`` for API clients. A valid
token only identifies the admin: the account is reloaded on every request so
a deactivated or locked admin is rejected even while its token is unexpired.

Authorization
-------------
Permissions are checked against the admin's *stored* matrix, not the snapshot
carried in the token. Super-admins pass every check. Use
:func:`require_permission` for permission-gated endpoints and
:func:`authorize` for checks that depend on the request body.
"""
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from admin_panel.config import settings
from admin_panel.database import get_db
from admin_panel.errors import AuthenticationError, AuthorizationError
from admin_panel.i18n import translate
from admin_panel.middleware.monitoring import record_auth_failure
from admin_panel.models.admin import Admin
from admin_panel.utils.jwt_utils import decode_session_token
from admin_panel.utils.lockout import is_account_locked
from admin_panel.utils.logger import logger
from admin_panel.utils.permissions import Action, Resource, Role, has_permission

_bearer_scheme = HTTPBearer(auto_error=False)


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if token:
        return token
    if credentials:
        return credentials.credentials
    return None


def _resolve_admin(db: Session, token: Optional[str]) -> Admin:
    """Map a raw token to an active, unlocked admin. Raises AuthenticationError."""
    if not token:
        record_auth_failure("missing_token")
        raise AuthenticationError(translate("no_token"))

    try:
        payload = decode_session_token(token)
    except AuthenticationError:
        record_auth_failure("invalid_token")
        raise

    admin = db.query(Admin).filter(Admin.id == payload["sub"]).first()
    if not admin:
        record_auth_failure("admin_not_found")
        raise AuthenticationError(translate("admin_not_found"))

    if not admin.is_active:
        record_auth_failure("inactive")
        raise AuthenticationError(translate("auth_account_deactivated"))

    if is_account_locked(admin):
        record_auth_failure("locked")
        raise AuthenticationError(translate("auth_account_locked"))

    return admin


# ---------------------------------------------------------------------------
# Authentication gate
# ---------------------------------------------------------------------------

def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> Admin:
    """Require an authenticated admin.

    Returns the Admin ORM object (bound to the request session) and exposes it
    as ``request.state.admin``.
    """
    admin = _resolve_admin(db, _extract_token(request, credentials))
    request.state.admin = admin
    return admin


def get_optional_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[Admin]:
    """Like :func:`get_current_admin` but returns None instead of raising."""
    token = _extract_token(request, credentials)
    if not token:
        return None
    try:
        admin = _resolve_admin(db, token)
    except AuthenticationError as exc:
        logger.debug(f"Optional authentication rejected: {exc.message}")
        return None
    request.state.admin = admin
    return admin


# ---------------------------------------------------------------------------
# Authorization gate
# ---------------------------------------------------------------------------

def authorize(admin: Admin, resource: Resource, action: Action) -> None:
    """Raise AuthorizationError unless ``admin`` may perform ``action`` on ``resource``."""
    if admin.role == Role.SUPERADMIN.value:
        return

    if not has_permission(admin.permissions, resource, action):
        logger.warning(
            f"Permission denied: {resource.value}:{action.value}",
            extra={"admin_id": admin.id, "action": f"{resource.value}:{action.value}"},
        )
        raise AuthorizationError(
            translate("insufficient_permissions", resource=resource.value, action=action.value)
        )


def require_permission(resource: Resource, action: Action) -> Callable:
    """Return a FastAPI dependency that authenticates and then authorizes.

    Usage::

        @router.get("/users")
        def list_users(admin: Admin = Depends(require_permission(Resource.USERS, Action.VIEW))):
            ...

    Returns:
        A FastAPI-injectable callable that resolves to the Admin or raises 401/403.
    """

    def _permission_dep(admin: Admin = Depends(get_current_admin)) -> Admin:
        authorize(admin, resource, action)
        return admin

    # Give FastAPI a unique name so it doesn't collapse distinct dependencies
    _permission_dep.__name__ = f"require_{resource.value}_{action.value}"
    return _permission_dep
