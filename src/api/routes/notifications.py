"""Notification API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_notification_service
from api.schemas.notification import (
    MarkAllReadResponse,
    NotificationAction,
    NotificationListResponse,
    NotificationResponse,
)
from api.schemas.common import OkResponse
from core.exceptions import ValidationError
from core.rate_limit import limiter
from domain.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List my notifications",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_notifications(
    request: Request,
    user: CurrentUser,
    unread: str | None = Query(None, description="`1` to list unread only"),
    limit: int | None = Query(None, description="Clamped to 1..50, default 20"),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    """Newest first, together with the live unread count."""
    notifications, unread_count = await service.list_for_user(
        user.id, unread_only=unread == "1", limit=limit
    )
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=unread_count,
    )


@router.patch(
    "",
    response_model=OkResponse | MarkAllReadResponse,
    summary="Mark notifications read",
    responses={
        400: {"description": "Invalid payload or missing id"},
        404: {"description": "Notification not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_notifications(
    request: Request,
    body: NotificationAction,
    user: CurrentUser,
    service: NotificationService = Depends(get_notification_service),
) -> OkResponse | MarkAllReadResponse:
    """
    `{"action": "mark_read", "id": ...}` marks one notification read;
    repeating it is harmless. `{"action": "mark_all_read"}` marks every
    unread notification of the caller.
    """
    if body.action == "mark_all_read":
        count = await service.mark_all_read(user.id)
        return MarkAllReadResponse(count=count)

    if body.id is None:
        raise ValidationError("Missing id")
    await service.mark_read(body.id, user.id)
    return OkResponse()
