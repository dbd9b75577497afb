"""Main FastAPI application entry point."""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.router import router as api_router
from api.routes.health import router as health_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import limiter, rate_limit_exceeded_handler

logger = structlog.get_logger()

# Initialize structured logging
setup_logging()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=(
            "## Team task management\n\n"
            "Tasks, comments and attachments shared between the people who "
            "create and are assigned them, organised into departments, teams "
            "and workspaces with a five-level role hierarchy.\n\n"
            "### Authentication\n"
            "All endpoints except `/health` and `POST /api/auth` require a "
            "Supabase access token, either as a bearer token or in the "
            "`sb-access-token` cookie set by `POST /api/auth`:\n"
            "```\nAuthorization: Bearer <your_token>\n```\n\n"
            "### Errors\n"
            '`{"error": "...", "error_code": "..."}` with status 400, 401, '
            "403, 404 or 500.\n\n"
            "### Rate Limits\n"
            "- GET endpoints: 30 requests/minute\n"
            "- POST/PATCH/DELETE: 10 requests/minute"
        ),
        version=settings.app_version,
        debug=settings.debug,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "auth", "description": "Login, signup, logout and profile provisioning"},
            {"name": "dashboard", "description": "Task counters for the caller"},
            {"name": "tasks", "description": "Task management operations"},
            {"name": "comments", "description": "Task comment threads"},
            {"name": "attachments", "description": "Private task files with signed URLs"},
            {"name": "teams", "description": "Teams and join codes"},
            {"name": "workspaces", "description": "Workspaces and role-gated membership"},
            {"name": "users", "description": "User directory"},
            {"name": "notifications", "description": "Notification feed and read state"},
        ],
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Security & tracking middleware (LIFO order - last added = outermost)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # GZip compression for responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Session cookies need credentialed CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
