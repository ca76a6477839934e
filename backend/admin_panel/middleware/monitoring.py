"""Monitoring and observability middleware"""
import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

from admin_panel.utils.logger import logger


# ===== Prometheus Metrics =====

# Request metrics
http_requests_total = Counter(
    "admin_panel_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

http_request_duration_seconds = Histogram(
    "admin_panel_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"]
)

# Error metrics
http_errors_total = Counter(
    "admin_panel_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "status"]
)

# Security metrics
login_attempts_total = Counter(
    "admin_panel_login_attempts_total",
    "Login attempts by outcome",
    ["outcome"]  # success, invalid_credentials, locked, deactivated, two_factor_required, invalid_2fa
)

authentication_failures_total = Counter(
    "admin_panel_authentication_failures_total",
    "Rejected session tokens",
    ["reason"]  # missing_token, invalid_token, admin_not_found, inactive, locked
)

audit_log_failures_total = Counter(
    "admin_panel_audit_log_failures_total",
    "Audit log entries that could not be written",
    ["action"]
)


def _endpoint_label(request: Request) -> str:
    # Use the route template so ids do not explode label cardinality
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class MonitoringMiddleware(BaseHTTPMiddleware):
    """Middleware for monitoring and metrics collection"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and collect metrics"""
        start_time = time.time()
        method = request.method

        # Add request ID for tracing
        request_id = request.headers.get("x-request-id", f"req_{int(time.time() * 1000)}")
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            status = response.status_code
            endpoint = _endpoint_label(request)

            duration = time.time() - start_time
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

            # Log slow requests
            if duration > 1.0:
                logger.warning(
                    f"Slow request detected: {method} {endpoint}",
                    extra={
                        "request_id": request_id,
                        "method": method,
                        "path": endpoint,
                        "duration": duration,
                        "status": status
                    }
                )

            if status >= 400:
                http_errors_total.labels(method=method, endpoint=endpoint, status=status).inc()

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration:.3f}s"

            return response

        except Exception as e:
            duration = time.time() - start_time
            endpoint = _endpoint_label(request)
            http_errors_total.labels(method=method, endpoint=endpoint, status=500).inc()

            logger.error(
                f"Request failed: {method} {endpoint}",
                extra={
                    "request_id": request_id,
                    "method": method,
                    "path": endpoint,
                    "duration": duration,
                    "error": str(e)
                },
                exc_info=True
            )
            raise


def record_login(outcome: str):
    """Record a login attempt outcome"""
    login_attempts_total.labels(outcome=outcome).inc()


def record_auth_failure(reason: str):
    """Record a rejected session token"""
    authentication_failures_total.labels(reason=reason).inc()


def record_audit_failure(action: str):
    """Record an audit entry that could not be written"""
    audit_log_failures_total.labels(action=action).inc()
