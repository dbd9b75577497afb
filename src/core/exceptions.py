"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"
    NOT_A_MEMBER = "NOT_A_MEMBER"

    # Not found errors (404)
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    TEAM_NOT_FOUND = "TEAM_NOT_FOUND"
    ATTACHMENT_NOT_FOUND = "ATTACHMENT_NOT_FOUND"
    NOTIFICATION_NOT_FOUND = "NOTIFICATION_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    ALREADY_A_MEMBER = "ALREADY_A_MEMBER"
    INVALID_UPLOAD = "INVALID_UPLOAD"
    IDENTITY_PROVIDER_ERROR = "IDENTITY_PROVIDER_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    BACKEND_NOT_CONFIGURED = "BACKEND_NOT_CONFIGURED"
    SCHEMA_MIGRATION_REQUIRED = "SCHEMA_MIGRATION_REQUIRED"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Input rejected before any backend call."""

    def __init__(self, message: str = "Invalid payload") -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=message,
            status_code=400,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Unauthorized",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class ForbiddenError(AppException):
    """Role rank does not allow the requested action."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class NotAMemberError(AppException):
    """User is not a member of the workspace."""

    def __init__(self, workspace_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_A_MEMBER,
            message="You are not a member of this workspace",
            status_code=403,
            details={"workspace_id": workspace_id},
        )


class TaskNotFoundError(AppException):
    """Task does not exist or is not visible to the caller."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {task_id}",
            status_code=404,
            details={"task_id": task_id},
        )


class UserNotFoundError(AppException):
    """No provisioned profile matches the requested email."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=(
                "No user found with this email. "
                "The user must log in at least once so that a profile exists."
            ),
            status_code=404,
            details={"email": email},
        )


class TeamNotFoundError(AppException):
    """No team matches the join code."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.TEAM_NOT_FOUND,
            message="Invalid team join code",
            status_code=404,
        )


class AttachmentNotFoundError(AppException):
    """Attachment does not exist on this task."""

    def __init__(self, attachment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ATTACHMENT_NOT_FOUND,
            message=f"Attachment not found: {attachment_id}",
            status_code=404,
            details={"attachment_id": attachment_id},
        )


class NotificationNotFoundError(AppException):
    """Notification not found for this user."""

    def __init__(self, notification_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOTIFICATION_NOT_FOUND,
            message=f"Notification not found: {notification_id}",
            status_code=404,
            details={"notification_id": notification_id},
        )


class AlreadyAMemberError(AppException):
    """User is already a member of the workspace."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_MEMBER,
            message="User is already a member of this workspace",
            status_code=400,
            details={"user_id": user_id},
        )


class InvalidUploadError(AppException):
    """Uploaded file rejected before reaching storage."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_UPLOAD,
            message=message,
            status_code=400,
        )


class IdentityProviderError(AppException):
    """The identity provider rejected a login, signup or logout."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.IDENTITY_PROVIDER_ERROR,
            message=message,
            status_code=400,
        )


class StorageError(AppException):
    """The object store rejected an operation."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.STORAGE_ERROR,
            message=message,
            status_code=400,
        )


class BackendConfigurationError(AppException):
    """Credentials or endpoints for an external backend are missing."""

    def __init__(self, message: str) -> None:
        super().__init__(
            error_code=ErrorCode.BACKEND_NOT_CONFIGURED,
            message=message,
            status_code=500,
        )


class SchemaMigrationRequiredError(AppException):
    """The database schema predates a column the application needs."""

    def __init__(self, column: str) -> None:
        super().__init__(
            error_code=ErrorCode.SCHEMA_MIGRATION_REQUIRED,
            message=(
                f"The database has no {column} column yet. "
                "Run the latest migrations (alembic upgrade head) and try again."
            ),
            status_code=500,
            details={"column": column},
        )
