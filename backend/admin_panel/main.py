"""FastAPI application entry point"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from admin_panel import __version__
from admin_panel.api import admins, auth, dashboard, health, logs, moderation, system, users
from admin_panel.config import settings
from admin_panel.database import Database
from admin_panel.errors import AdminPanelError, ErrorKind
from admin_panel.i18n import translate
from admin_panel.middleware.rate_limit import limiter
from admin_panel.utils.logger import logger, setup_logging

# Setup logging
setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    app.state.database = Database.from_settings(settings)
    logger.info("Admin panel backend starting up", extra={
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "log_level": settings.LOG_LEVEL,
        "rate_limiting": settings.RATE_LIMIT_ENABLED,
        "monitoring": settings.METRICS_ENABLED,
    })
    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; using the insecure fallback secret")
    yield
    # Shutdown
    app.state.database.dispose()
    logger.info("Admin panel backend shutting down")


# Create FastAPI app
app = FastAPI(
    title="Admin Panel",
    description="Administration API for the Telegram clone: admin sessions, permissions, moderation and audit trail",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ===== Middleware Setup =====

# CORS (credentials allowed: the session lives in a cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Monitoring middleware
if settings.METRICS_ENABLED:
    from admin_panel.middleware.monitoring import MonitoringMiddleware
    app.add_middleware(MonitoringMiddleware)

    # Prometheus metrics
    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics", "/health", "/health/ready", "/health/live"],
        inprogress_name="admin_panel_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.instrument(app)
    instrumentator.expose(app, endpoint=settings.METRICS_PATH, include_in_schema=False)

# Rate limiting (the limiter is a no-op when RATE_LIMIT_ENABLED is false)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# ===== Route Setup =====

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(users.router)
app.include_router(moderation.router)
app.include_router(system.router)
app.include_router(admins.router)
app.include_router(logs.router)


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "service": "admin-panel",
        "version": __version__,
        "status": "operational",
        "docs": "/docs",
        "health": "/health",
        "metrics": settings.METRICS_PATH if settings.METRICS_ENABLED else None,
    }


# ===== Error Handlers =====

@app.exception_handler(AdminPanelError)
async def admin_panel_error_handler(request: Request, exc: AdminPanelError):
    """Map an error kind onto its HTTP status"""
    if exc.kind in (ErrorKind.AUTHENTICATION, ErrorKind.AUTHORIZATION):
        logger.info(
            f"{exc.kind.name.lower()} failure: {exc.message}",
            extra={"path": request.url.path, "method": request.method},
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 with one message per field"""
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors[".".join(location) or "body"] = error.get("msg", "")

    return JSONResponse(
        status_code=ErrorKind.VALIDATION.status_code,
        content={"success": False, "message": translate("validation_failed"), "errors": errors},
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors"""
    logger.warning(
        "Rate limit exceeded",
        extra={
            "path": request.url.path,
            "method": request.method,
            "client": request.client.host if request.client else "unknown",
        },
    )
    return JSONResponse(
        status_code=ErrorKind.RATE_LIMIT.status_code,
        content={"success": False, "message": translate("rate_limited"), "detail": str(exc.detail)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for uncaught errors"""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "method": request.method,
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=ErrorKind.INTERNAL.status_code,
        content={"success": False, "message": translate("internal_error")},
    )
