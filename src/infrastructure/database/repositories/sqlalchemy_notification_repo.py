"""SQLAlchemy implementation of Notification repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.notification import Notification
from infrastructure.database.models import NotificationModel


class SQLAlchemyNotificationRepository:
    """SQLAlchemy implementation of INotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, notification: Notification) -> Notification:
        """Create a new notification."""
        model = self._to_model(notification)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get(self, notification_id: UUID, user_id: UUID) -> Notification | None:
        """Get one of the user's notifications."""
        stmt = select(NotificationModel).where(
            NotificationModel.id == notification_id,
            NotificationModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_for_user(
        self, user_id: UUID, unread_only: bool = False, limit: int = 20
    ) -> list[Notification]:
        """Get the user's notifications, newest first."""
        stmt = select(NotificationModel).where(NotificationModel.user_id == user_id)
        if unread_only:
            stmt = stmt.where(NotificationModel.read_at.is_(None))
        stmt = stmt.order_by(NotificationModel.created_at.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def count_unread(self, user_id: UUID) -> int:
        """Get the count of unread notifications for a user."""
        stmt = select(func.count(NotificationModel.id)).where(
            NotificationModel.user_id == user_id,
            NotificationModel.read_at.is_(None),
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def mark_read(self, notification_id: UUID, user_id: UUID, read_at: datetime) -> bool:
        """Mark one notification read. An already-read row keeps its timestamp."""
        existing = await self.get(notification_id, user_id)
        if existing is None:
            return False

        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
                NotificationModel.read_at.is_(None),
            )
            .values(read_at=read_at)
        )
        await self._session.execute(stmt)
        return True

    async def mark_all_read(self, user_id: UUID, read_at: datetime) -> int:
        """Mark all unread notifications read for a user. Returns count updated."""
        stmt = (
            update(NotificationModel)
            .where(
                NotificationModel.user_id == user_id,
                NotificationModel.read_at.is_(None),
            )
            .values(read_at=read_at)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[return-value]

    def _to_entity(self, model: NotificationModel) -> Notification:
        """Convert ORM model to domain entity."""
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            body=model.body,
            read_at=model.read_at,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Notification) -> NotificationModel:
        """Convert domain entity to ORM model."""
        return NotificationModel(
            id=entity.id,
            user_id=entity.user_id,
            title=entity.title,
            body=entity.body,
            read_at=entity.read_at,
            created_at=entity.created_at,
        )
