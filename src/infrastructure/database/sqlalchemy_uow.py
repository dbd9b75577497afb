"""SQLAlchemy Unit of Work implementation."""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.repositories.sqlalchemy_attachment_repo import (
    SQLAlchemyAttachmentRepository,
)
from infrastructure.database.repositories.sqlalchemy_comment_repo import SQLAlchemyCommentRepository
from infrastructure.database.repositories.sqlalchemy_notification_repo import (
    SQLAlchemyNotificationRepository,
)
from infrastructure.database.repositories.sqlalchemy_profile_repo import SQLAlchemyProfileRepository
from infrastructure.database.repositories.sqlalchemy_task_repo import SQLAlchemyTaskRepository
from infrastructure.database.repositories.sqlalchemy_team_repo import SQLAlchemyTeamRepository
from infrastructure.database.repositories.sqlalchemy_workspace_repo import SQLAlchemyWorkspaceRepository


class SQLAlchemyUnitOfWork:
    """Unit of Work implementation using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    def _require_session(self) -> AsyncSession:
        if not self._session:
            raise RuntimeError("UnitOfWork not initialized. Use as context manager.")
        return self._session

    @property
    def profiles(self) -> SQLAlchemyProfileRepository:
        """Get profile repository."""
        return SQLAlchemyProfileRepository(self._require_session())

    @property
    def teams(self) -> SQLAlchemyTeamRepository:
        """Get team repository."""
        return SQLAlchemyTeamRepository(self._require_session())

    @property
    def workspaces(self) -> SQLAlchemyWorkspaceRepository:
        """Get workspace repository."""
        return SQLAlchemyWorkspaceRepository(self._require_session())

    @property
    def tasks(self) -> SQLAlchemyTaskRepository:
        """Get task repository."""
        return SQLAlchemyTaskRepository(self._require_session())

    @property
    def comments(self) -> SQLAlchemyCommentRepository:
        """Get task comment repository."""
        return SQLAlchemyCommentRepository(self._require_session())

    @property
    def attachments(self) -> SQLAlchemyAttachmentRepository:
        """Get task attachment repository."""
        return SQLAlchemyAttachmentRepository(self._require_session())

    @property
    def notifications(self) -> SQLAlchemyNotificationRepository:
        """Get notification repository."""
        return SQLAlchemyNotificationRepository(self._require_session())

    async def commit(self) -> None:
        """Commit the current transaction."""
        if self._session:
            await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        if self._session:
            await self._session.rollback()

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        """Enter the context manager and create session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[Exception],
        exc_tb: Any,
    ) -> None:
        """Exit the context manager and cleanup."""
        if self._session:
            if exc_type:
                await self.rollback()
            await self._session.close()
            self._session = None
