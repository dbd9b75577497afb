"""SQLAlchemy implementation of TaskAttachment repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.attachment import TaskAttachment
from infrastructure.database.models import TaskAttachmentModel


class SQLAlchemyAttachmentRepository:
    """SQLAlchemy implementation of IAttachmentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> TaskAttachment | None:
        """Get an attachment by ID."""
        stmt = select(TaskAttachmentModel).where(TaskAttachmentModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[UUID]) -> dict[UUID, TaskAttachment]:
        """Get several attachments keyed by ID."""
        if not ids:
            return {}
        stmt = select(TaskAttachmentModel).where(TaskAttachmentModel.id.in_(list(set(ids))))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def get_for_task(self, task_id: UUID) -> list[TaskAttachment]:
        """Get the attachments of a task, newest first."""
        stmt = (
            select(TaskAttachmentModel)
            .where(TaskAttachmentModel.task_id == task_id)
            .order_by(TaskAttachmentModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, attachment: TaskAttachment) -> TaskAttachment:
        """Record an uploaded object."""
        model = self._to_model(attachment)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_task_ids(self) -> set[UUID]:
        """IDs of all tasks that have at least one attachment."""
        stmt = select(TaskAttachmentModel.task_id).distinct()
        result = await self._session.execute(stmt)
        return set(result.scalars())

    async def count_for_tasks(self, task_ids: list[UUID]) -> int:
        """Count attachments across the given tasks."""
        if not task_ids:
            return 0
        stmt = select(func.count(TaskAttachmentModel.id)).where(
            TaskAttachmentModel.task_id.in_(task_ids)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    def _to_entity(self, model: TaskAttachmentModel) -> TaskAttachment:
        """Convert ORM model to domain entity."""
        return TaskAttachment(
            id=model.id,
            task_id=model.task_id,
            uploader_id=model.uploader_id,
            storage_path=model.storage_path,
            file_name=model.file_name,
            mime_type=model.mime_type,
            size_bytes=model.size_bytes,
            created_at=model.created_at,
        )

    def _to_model(self, entity: TaskAttachment) -> TaskAttachmentModel:
        """Convert domain entity to ORM model."""
        return TaskAttachmentModel(
            id=entity.id,
            task_id=entity.task_id,
            uploader_id=entity.uploader_id,
            storage_path=entity.storage_path,
            file_name=entity.file_name,
            mime_type=entity.mime_type,
            size_bytes=entity.size_bytes,
            created_at=entity.created_at,
        )
