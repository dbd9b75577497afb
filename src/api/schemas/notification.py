"""Pydantic schemas for Notification API."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class NotificationResponse(BaseModel):
    """Single notification in the feed."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    body: str | None = None
    read_at: datetime | None = None
    created_at: datetime


class NotificationListResponse(BaseModel):
    """Notification feed with the live unread count."""

    model_config = ConfigDict(populate_by_name=True)

    notifications: list[NotificationResponse]
    unread_count: int = Field(..., alias="unreadCount")


class NotificationAction(BaseModel):
    """PATCH body: mark one notification read, or all of them."""

    model_config = ConfigDict(extra="forbid")

    action: Literal["mark_read", "mark_all_read"]
    id: UUID | None = None


class MarkAllReadResponse(BaseModel):
    ok: bool = True
    count: int  # Number of notifications marked
