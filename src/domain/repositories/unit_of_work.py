"""Unit of Work protocol."""

from typing import Protocol

from domain.repositories.attachment_repository import IAttachmentRepository
from domain.repositories.comment_repository import ICommentRepository
from domain.repositories.notification_repository import INotificationRepository
from domain.repositories.profile_repository import IProfileRepository
from domain.repositories.task_repository import ITaskRepository
from domain.repositories.team_repository import ITeamRepository
from domain.repositories.workspace_repository import IWorkspaceRepository


class IUnitOfWork(Protocol):
    """Unit of Work interface for managing transactions."""

    profiles: IProfileRepository
    teams: ITeamRepository
    workspaces: IWorkspaceRepository
    tasks: ITaskRepository
    comments: ICommentRepository
    attachments: IAttachmentRepository
    notifications: INotificationRepository

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        ...

    async def __aenter__(self) -> "IUnitOfWork":
        """Enter the context manager."""
        ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        """Exit the context manager."""
        ...
