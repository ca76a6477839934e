"""Session token signing and verification (HS256 JWT)"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from admin_panel.config import settings
from admin_panel.errors import AuthenticationError
from admin_panel.i18n import translate
from admin_panel.utils.logger import logger

TOKEN_TYPE = "admin"


def create_session_token(admin: Any, expires_in: Optional[int] = None) -> str:
    """Sign a session token for ``admin``.

    The token carries the admin id, username, email, role and a snapshot of
    the permission matrix at issuance time. Nothing is stored server side.

    Args:
        admin:      Admin ORM object.
        expires_in: Lifetime in seconds (defaults to ``SESSION_EXPIRE_SECONDS``).

    Returns:
        Signed JWT string.
    """
    if expires_in is None:
        expires_in = settings.SESSION_EXPIRE_SECONDS

    now = int(datetime.now(timezone.utc).timestamp())

    payload: Dict[str, Any] = {
        "sub": admin.id,
        "jti": str(uuid.uuid4()),
        "iat": now,
        "exp": now + expires_in,
        "type": TOKEN_TYPE,
        "username": admin.username,
        "email": admin.email,
        "role": admin.role,
        "permissions": admin.permissions,
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str) -> Dict[str, Any]:
    """Verify a session token and return its payload.

    Checks the signature and expiry (jose handles 'exp') and that the token is
    an admin session token with a subject.

    Raises:
        AuthenticationError: on any verification failure.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.debug(f"JWT decode failed: {exc}")
        raise AuthenticationError(translate("invalid_token"))

    if payload.get("type") != TOKEN_TYPE or not payload.get("sub"):
        raise AuthenticationError(translate("invalid_token"))

    return payload
