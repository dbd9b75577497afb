"""Task comment repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.comment import TaskComment


class ICommentRepository(Protocol):
    """Repository interface for TaskComment entities."""

    async def get_for_task(self, task_id: UUID) -> list[TaskComment]:
        """Get the comment thread of a task, oldest first."""
        ...

    async def create(self, comment: TaskComment) -> TaskComment:
        """Create a new comment."""
        ...

    async def get_task_ids(self) -> set[UUID]:
        """IDs of all tasks that have at least one comment."""
        ...

    async def count_for_tasks(self, task_ids: list[UUID]) -> int:
        """Count comments across the given tasks."""
        ...
