"""Password hashing and two-factor (TOTP) utilities"""
from typing import NamedTuple, Optional

import bcrypt
import pyotp

from admin_panel.config import settings

TOTP_DIGITS = 6


class TwoFactorSecret(NamedTuple):
    secret: str            # base32 shared secret
    provisioning_uri: str  # otpauth:// URI for authenticator apps


def hash_password(password: str) -> str:
    """Hash a password with bcrypt"""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a password against a stored bcrypt hash"""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        # Malformed hash in the database
        return False


def generate_2fa_secret(email: str) -> TwoFactorSecret:
    """Create a new TOTP secret and its provisioning URI.

    The caller stores the secret as *pending*; two-factor stays disabled until
    a code generated from it has been verified once.
    """
    secret = pyotp.random_base32(length=32)
    uri = pyotp.TOTP(secret).provisioning_uri(
        name=f"Admin Panel ({email})",
        issuer_name=settings.TOTP_ISSUER,
    )
    return TwoFactorSecret(secret=secret, provisioning_uri=uri)


def verify_2fa_token(token: Optional[str], secret: Optional[str]) -> bool:
    """Verify a 6-digit TOTP code, tolerating ``TOTP_VALID_WINDOW`` steps of drift."""
    if not token or not secret:
        return False
    token = token.strip()
    if len(token) != TOTP_DIGITS or not token.isdigit():
        return False
    return pyotp.TOTP(secret).verify(token, valid_window=settings.TOTP_VALID_WINDOW)
