"""Common Pydantic schemas shared across the API."""

from datetime import datetime, timezone

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standardized error response."""

    error: str
    error_code: str


class OkResponse(BaseModel):
    """Acknowledgement for mutations that return no entity."""

    ok: bool = True


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Store timestamps as naive UTC, matching the database columns."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
