"""Middleware modules for metrics and rate limiting"""
from admin_panel.middleware.monitoring import (
    MonitoringMiddleware,
    record_audit_failure,
    record_auth_failure,
    record_login,
)
from admin_panel.middleware.rate_limit import limiter

__all__ = [
    "MonitoringMiddleware",
    "record_audit_failure",
    "record_auth_failure",
    "record_login",
    "limiter",
]
