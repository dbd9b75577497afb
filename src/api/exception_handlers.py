"""Exception handlers for the FastAPI application.

Every error leaves the API as ``{"error": <message>, "error_code": <code>}``.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode, SchemaMigrationRequiredError
from domain.services.team_service import is_missing_join_code_column

logger = structlog.get_logger()


def error_response(status_code: int, error_code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "error_code": error_code},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
        )
        return error_response(exc.status_code, exc.error_code.value, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette (404 route, 405, ...)."""
        return error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Schema mismatches are plain 400s; field details only go to the log."""
        logger.info("validation_error", errors=exc.errors())
        return error_response(400, ErrorCode.VALIDATION_ERROR.value, "Invalid payload")

    @app.exception_handler(DBAPIError)
    async def database_exception_handler(request: Request, exc: DBAPIError) -> JSONResponse:
        """Constraint violations and the like surface as 400 with the driver's message."""
        if is_missing_join_code_column(exc):
            migration = SchemaMigrationRequiredError("teams.join_code")
            logger.error("schema_migration_required", column="teams.join_code")
            return error_response(
                migration.status_code, migration.error_code.value, migration.message
            )

        message = str(exc.orig) if exc.orig is not None else str(exc)
        logger.warning("database_error", error=message)
        return error_response(400, ErrorCode.DATABASE_ERROR.value, message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return error_response(500, ErrorCode.INTERNAL_ERROR.value, message)
