"""Task service layer with business logic."""

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import structlog

from core.exceptions import TaskNotFoundError, ValidationError
from domain.entities.task import Task, TaskFilters, TaskPriority, TaskStats, TaskStatus
from domain.policy import can_access_task
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService

logger = structlog.get_logger()

DUE_SOON_WINDOW = timedelta(days=7)

# Fields a PATCH may touch. created_by and workspace_id are fixed at creation.
PATCHABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "status",
        "priority",
        "due_date",
        "assigned_to",
        "team_id",
        "department_id",
        "rating",
        "review_comment",
    }
)


async def require_visible_task(uow: IUnitOfWork, task_id: UUID, user_id: UUID) -> Task:
    """Load a task the user may see, or raise 404.

    Tasks the user cannot see are indistinguishable from missing ones.
    """
    task = await uow.tasks.get(task_id)
    if task is None or not can_access_task(user_id, task):
        raise TaskNotFoundError(str(task_id))
    return task


class TaskService:
    """Service layer for Task business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        notification_service: Optional["NotificationService"] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._notification = notification_service

    async def list_tasks(self, user_id: UUID, filters: TaskFilters) -> list[Task]:
        """List visible tasks matching every given filter, newest first."""
        async with self._uow_factory() as uow:
            task_ids: set[UUID] | None = None
            if "comments" in filters.has:
                task_ids = await uow.comments.get_task_ids()
            if "attachments" in filters.has:
                with_attachments = await uow.attachments.get_task_ids()
                task_ids = with_attachments if task_ids is None else task_ids & with_attachments

            if task_ids is not None and not task_ids:
                return []

            return await uow.tasks.list_visible(user_id, filters, task_ids)

    async def get_task(self, task_id: UUID, user_id: UUID) -> Task:
        """Get a single visible task."""
        async with self._uow_factory() as uow:
            return await require_visible_task(uow, task_id, user_id)

    async def create(
        self,
        user_id: UUID,
        title: str,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: datetime | None = None,
        assigned_to: UUID | None = None,
        team_id: UUID | None = None,
        workspace_id: UUID | None = None,
        department_id: UUID | None = None,
    ) -> Task:
        """Create a task owned by the caller, assigned to the caller by default."""
        task = Task(
            title=title,
            description=description,
            priority=priority,
            due_date=due_date,
            created_by=user_id,
            assigned_to=assigned_to or user_id,
            team_id=team_id,
            workspace_id=workspace_id,
            department_id=department_id,
        )

        async with self._uow_factory() as uow:
            created = await uow.tasks.create(task)
            await self._notify_assignee(uow, created, user_id)
            await uow.commit()

        logger.info("task_created", task_id=str(created.id), user_id=str(user_id))
        return created

    async def update(self, task_id: UUID, user_id: UUID, changes: dict[str, Any]) -> Task:
        """Apply a partial update to a visible task.

        ``changes`` holds only the fields the client sent; an explicit None
        clears a nullable field.
        """
        unknown = set(changes) - PATCHABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields not patchable: {', '.join(sorted(unknown))}")

        async with self._uow_factory() as uow:
            task = await require_visible_task(uow, task_id, user_id)
            previous_assignee = task.assigned_to

            for name, value in changes.items():
                if name == "status" and value is not None:
                    value = TaskStatus(value)
                elif name == "priority" and value is not None:
                    value = TaskPriority(value)
                setattr(task, name, value)

            task.updated_at = datetime.utcnow()
            updated = await uow.tasks.update(task)

            if updated.assigned_to is not None and updated.assigned_to != previous_assignee:
                await self._notify_assignee(uow, updated, user_id)

            await uow.commit()
            return updated

    async def delete(self, task_id: UUID, user_id: UUID) -> bool:
        """Delete a visible task with its comments and attachment records."""
        async with self._uow_factory() as uow:
            await require_visible_task(uow, task_id, user_id)
            deleted = await uow.tasks.delete(task_id)
            await uow.commit()

        logger.info("task_deleted", task_id=str(task_id), user_id=str(user_id))
        return deleted

    async def dashboard_stats(self, user_id: UUID) -> TaskStats:
        """Aggregate counts over the tasks visible to the user."""
        async with self._uow_factory() as uow:
            tasks = await uow.tasks.list_visible(user_id, TaskFilters())
            task_ids = [t.id for t in tasks]
            comments_count = await uow.comments.count_for_tasks(task_ids)
            attachments_count = await uow.attachments.count_for_tasks(task_ids)

        now = datetime.utcnow()
        soon = now + DUE_SOON_WINDOW
        stats = TaskStats(
            total=len(tasks),
            comments_count=comments_count,
            attachments_count=attachments_count,
        )

        for task in tasks:
            stats.by_status[task.status.value] += 1
            if task.assigned_to == user_id:
                stats.assigned_to_me += 1
            if task.created_by == user_id:
                stats.created_by_me += 1

            if task.due_date is None or not task.is_open:
                continue
            if task.due_date < now:
                stats.overdue += 1
            elif task.due_date <= soon:
                stats.due_soon += 1

        return stats

    async def _notify_assignee(self, uow: IUnitOfWork, task: Task, actor_id: UUID) -> None:
        if self._notification is None:
            return
        await self._notification.notify(
            uow,
            actor_id=actor_id,
            recipient_id=task.assigned_to,
            title="New task assigned",
            body=task.title,
        )
