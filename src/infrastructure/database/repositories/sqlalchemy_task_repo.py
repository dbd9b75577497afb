"""SQLAlchemy implementation of Task repository."""

from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.task import Task, TaskFilters, TaskPriority, TaskStatus
from infrastructure.database.models import (
    TaskAttachmentModel,
    TaskCommentModel,
    TaskModel,
)


class SQLAlchemyTaskRepository:
    """SQLAlchemy implementation of ITaskRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID."""
        stmt = select(TaskModel).where(TaskModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_visible(
        self,
        user_id: UUID,
        filters: TaskFilters,
        task_ids: set[UUID] | None = None,
    ) -> list[Task]:
        """List tasks created by or assigned to the user, newest first."""
        stmt = select(TaskModel).where(
            or_(TaskModel.created_by == user_id, TaskModel.assigned_to == user_id)
        )

        if filters.status is not None:
            stmt = stmt.where(TaskModel.status == filters.status.value)
        if filters.team_id is not None:
            stmt = stmt.where(TaskModel.team_id == filters.team_id)
        if filters.workspace_id is not None:
            stmt = stmt.where(TaskModel.workspace_id == filters.workspace_id)
        if filters.assigned_to is not None:
            stmt = stmt.where(TaskModel.assigned_to == filters.assigned_to)
        if filters.created_by is not None:
            stmt = stmt.where(TaskModel.created_by == filters.created_by)
        if filters.search:
            pattern = f"%{filters.search}%"
            stmt = stmt.where(
                or_(TaskModel.title.ilike(pattern), TaskModel.description.ilike(pattern))
            )
        if task_ids is not None:
            stmt = stmt.where(TaskModel.id.in_(list(task_ids)))

        stmt = stmt.order_by(TaskModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        model = self._to_model(task)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        stmt = select(TaskModel).where(TaskModel.id == task.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Task {task.id} not found")

        # created_by is never rewritten
        model.title = task.title
        model.description = task.description
        model.status = task.status.value
        model.priority = task.priority.value
        model.due_date = task.due_date
        model.assigned_to = task.assigned_to
        model.team_id = task.team_id
        model.department_id = task.department_id
        model.rating = task.rating
        model.review_comment = task.review_comment
        model.updated_at = task.updated_at

        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, id: UUID) -> bool:
        """Delete a task together with its comments and attachment rows."""
        stmt = select(TaskModel.id).where(TaskModel.id == id)
        if (await self._session.execute(stmt)).scalar_one_or_none() is None:
            return False

        await self._session.execute(delete(TaskCommentModel).where(TaskCommentModel.task_id == id))
        await self._session.execute(
            delete(TaskAttachmentModel).where(TaskAttachmentModel.task_id == id)
        )
        await self._session.execute(delete(TaskModel).where(TaskModel.id == id))
        return True

    def _to_entity(self, model: TaskModel) -> Task:
        """Convert ORM model to domain entity."""
        return Task(
            id=model.id,
            title=model.title,
            description=model.description,
            status=TaskStatus(model.status),
            priority=TaskPriority(model.priority),
            due_date=model.due_date,
            rating=model.rating,
            review_comment=model.review_comment,
            department_id=model.department_id,
            team_id=model.team_id,
            workspace_id=model.workspace_id,
            created_by=model.created_by,
            assigned_to=model.assigned_to,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Task) -> TaskModel:
        """Convert domain entity to ORM model."""
        return TaskModel(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            status=entity.status.value,
            priority=entity.priority.value,
            due_date=entity.due_date,
            rating=entity.rating,
            review_comment=entity.review_comment,
            department_id=entity.department_id,
            team_id=entity.team_id,
            workspace_id=entity.workspace_id,
            created_by=entity.created_by,
            assigned_to=entity.assigned_to,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
