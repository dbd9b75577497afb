"""Task repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task import Task, TaskFilters


class ITaskRepository(Protocol):
    """Repository interface for Task entities."""

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID, regardless of visibility."""
        ...

    async def list_visible(
        self,
        user_id: UUID,
        filters: TaskFilters,
        task_ids: set[UUID] | None = None,
    ) -> list[Task]:
        """List tasks the user created or is assigned, newest first.

        ``task_ids`` further restricts the result to an inclusion set.
        """
        ...

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        ...

    async def update(self, task: Task) -> Task:
        """Update an existing task (``created_by`` is never written)."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a task and return success status."""
        ...
