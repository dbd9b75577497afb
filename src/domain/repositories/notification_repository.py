"""Notification repository protocol."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from domain.entities.notification import Notification


class INotificationRepository(Protocol):
    """Repository interface for Notification entities.

    Every method is scoped by ``user_id``; no call can touch another
    user's notifications.
    """

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        ...

    async def get(self, notification_id: UUID, user_id: UUID) -> Notification | None:
        """Get one of the user's notifications."""
        ...

    async def get_for_user(
        self, user_id: UUID, unread_only: bool = False, limit: int = 20
    ) -> list[Notification]:
        """Get the user's notifications, newest first."""
        ...

    async def count_unread(self, user_id: UUID) -> int:
        """Live count of the user's unread notifications."""
        ...

    async def mark_read(self, notification_id: UUID, user_id: UUID, read_at: datetime) -> bool:
        """Set read_at if still unread. Returns False if no such notification."""
        ...

    async def mark_all_read(self, user_id: UUID, read_at: datetime) -> int:
        """Mark every unread notification of the user read. Returns count updated."""
        ...
