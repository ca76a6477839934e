"""Rate limiting for API protection"""
from slowapi import Limiter

from admin_panel.config import settings
from admin_panel.utils.client import get_client_ip

# Keyed by client IP: sessions are not resolved here, so failed logins from
# one address share a bucket regardless of the username being tried.
limiter = Limiter(
    key_func=get_client_ip,
    default_limits=settings.RATE_LIMIT_DEFAULT,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)
