"""Dependency injection factories for services and adapters."""

from functools import lru_cache
from typing import Callable

from domain.services.attachment_service import AttachmentService
from domain.services.comment_service import CommentService
from domain.services.notification_service import NotificationService
from domain.services.profile_service import ProfileService
from domain.services.task_service import TaskService
from domain.services.team_service import TeamService
from domain.services.workspace_service import WorkspaceService
from infrastructure.auth.gotrue_client import GoTrueClient
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.supabase_storage import SupabaseStorage


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_storage() -> SupabaseStorage:
    """Get the attachment object store."""
    return SupabaseStorage()


@lru_cache
def get_gotrue_client() -> GoTrueClient:
    """Get the identity provider client."""
    return GoTrueClient()


@lru_cache
def get_notification_service() -> NotificationService:
    """Get Notification service instance."""
    return NotificationService(get_uow_factory())


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(get_uow_factory())


@lru_cache
def get_task_service() -> TaskService:
    """Get Task service instance."""
    return TaskService(
        get_uow_factory(),
        notification_service=get_notification_service(),
    )


@lru_cache
def get_attachment_service() -> AttachmentService:
    """Get Attachment service instance."""
    return AttachmentService(get_uow_factory(), storage=get_storage())


@lru_cache
def get_comment_service() -> CommentService:
    """Get Comment service instance."""
    return CommentService(get_uow_factory(), attachment_service=get_attachment_service())


@lru_cache
def get_team_service() -> TeamService:
    """Get Team service instance."""
    return TeamService(get_uow_factory())


@lru_cache
def get_workspace_service() -> WorkspaceService:
    """Get Workspace service instance."""
    return WorkspaceService(
        get_uow_factory(),
        notification_service=get_notification_service(),
    )
