"""Task attachment repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.attachment import TaskAttachment


class IAttachmentRepository(Protocol):
    """Repository interface for TaskAttachment entities."""

    async def get(self, id: UUID) -> TaskAttachment | None:
        """Get an attachment by ID."""
        ...

    async def get_many(self, ids: list[UUID]) -> dict[UUID, TaskAttachment]:
        """Get several attachments keyed by ID."""
        ...

    async def get_for_task(self, task_id: UUID) -> list[TaskAttachment]:
        """Get the attachments of a task, newest first."""
        ...

    async def create(self, attachment: TaskAttachment) -> TaskAttachment:
        """Record an uploaded object."""
        ...

    async def get_task_ids(self) -> set[UUID]:
        """IDs of all tasks that have at least one attachment."""
        ...

    async def count_for_tasks(self, task_ids: list[UUID]) -> int:
        """Count attachments across the given tasks."""
        ...
