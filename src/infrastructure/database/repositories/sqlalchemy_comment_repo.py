"""SQLAlchemy implementation of TaskComment repository."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.comment import TaskComment
from infrastructure.database.models import TaskCommentModel


class SQLAlchemyCommentRepository:
    """SQLAlchemy implementation of ICommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_for_task(self, task_id: UUID) -> list[TaskComment]:
        """Get the comments of a task in posting order."""
        stmt = (
            select(TaskCommentModel)
            .where(TaskCommentModel.task_id == task_id)
            .order_by(TaskCommentModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, comment: TaskComment) -> TaskComment:
        """Create a new comment."""
        model = self._to_model(comment)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_task_ids(self) -> set[UUID]:
        """IDs of all tasks that have at least one comment."""
        stmt = select(TaskCommentModel.task_id).distinct()
        result = await self._session.execute(stmt)
        return set(result.scalars())

    async def count_for_tasks(self, task_ids: list[UUID]) -> int:
        """Count comments across the given tasks."""
        if not task_ids:
            return 0
        stmt = select(func.count(TaskCommentModel.id)).where(
            TaskCommentModel.task_id.in_(task_ids)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    def _to_entity(self, model: TaskCommentModel) -> TaskComment:
        """Convert ORM model to domain entity."""
        return TaskComment(
            id=model.id,
            task_id=model.task_id,
            author_id=model.author_id,
            attachment_id=model.attachment_id,
            content=model.content,
            created_at=model.created_at,
        )

    def _to_model(self, entity: TaskComment) -> TaskCommentModel:
        """Convert domain entity to ORM model."""
        return TaskCommentModel(
            id=entity.id,
            task_id=entity.task_id,
            author_id=entity.author_id,
            attachment_id=entity.attachment_id,
            content=entity.content,
            created_at=entity.created_at,
        )
