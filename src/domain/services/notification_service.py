"""Notification service layer for creating and managing notifications."""

from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import structlog

from core.exceptions import NotificationNotFoundError
from domain.entities.notification import Notification
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DEFAULT_LIST_LIMIT = 20
MAX_LIST_LIMIT = 50


def clamp_limit(limit: int | None) -> int:
    """Clamp a requested page size into [1, MAX_LIST_LIMIT]."""
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return max(1, min(MAX_LIST_LIMIT, limit))


class NotificationService:
    """Service layer for notification creation and the read-state lifecycle.

    A notification is either unread (``read_at`` is None) or read. Nothing
    here ever moves it back.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    # --- In-transaction notification creation ---

    async def notify(
        self,
        uow: IUnitOfWork,
        actor_id: UUID,
        recipient_id: UUID | None,
        title: str,
        body: str | None = None,
    ) -> Notification | None:
        """Create a notification inside the caller's transaction.

        The caller owns the commit, so the notification lands atomically with
        the event that caused it. Returns None when the actor would be
        notifying themselves.
        """
        if recipient_id is None or recipient_id == actor_id:
            return None

        created = await uow.notifications.create(
            Notification(user_id=recipient_id, title=title, body=body)
        )
        logger.debug(
            "notification_created",
            notification_id=str(created.id),
            recipient_id=str(recipient_id),
        )
        return created

    # --- Read methods (use own UoW context) ---

    async def list_for_user(
        self,
        user_id: UUID,
        unread_only: bool = False,
        limit: int | None = None,
    ) -> tuple[list[Notification], int]:
        """Get the newest notifications and the live unread count."""
        async with self._uow_factory() as uow:
            notifications = await uow.notifications.get_for_user(
                user_id, unread_only=unread_only, limit=clamp_limit(limit)
            )
            unread_count = await uow.notifications.count_unread(user_id)
            return notifications, unread_count

    async def mark_read(self, notification_id: UUID, user_id: UUID) -> None:
        """Mark one of the user's notifications read.

        Repeating the call is a no-op that still succeeds; the first
        ``read_at`` is kept.
        """
        async with self._uow_factory() as uow:
            success = await uow.notifications.mark_read(
                notification_id, user_id, datetime.utcnow()
            )
            if not success:
                raise NotificationNotFoundError(str(notification_id))
            await uow.commit()

    async def mark_all_read(self, user_id: UUID) -> int:
        """Mark all of the user's notifications read. Returns count of marked."""
        async with self._uow_factory() as uow:
            count = await uow.notifications.mark_all_read(user_id, datetime.utcnow())
            await uow.commit()
            logger.info("notifications_marked_read", user_id=str(user_id), count=count)
            return count
