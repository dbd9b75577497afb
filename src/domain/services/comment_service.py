"""Comment service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import AttachmentNotFoundError
from domain.entities.comment import CommentAuthor, CommentView, TaskComment
from domain.entities.profile import Profile
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.attachment_service import AttachmentService
from domain.services.task_service import require_visible_task

logger = structlog.get_logger()


def _author(profile: Profile | None) -> CommentAuthor | None:
    if profile is None:
        return None
    return CommentAuthor(full_name=profile.full_name, email=profile.email, role=profile.role)


class CommentService:
    """Service layer for task comment threads."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        attachment_service: AttachmentService,
    ) -> None:
        self._uow_factory = uow_factory
        self._attachments = attachment_service

    async def list_for_task(self, task_id: UUID, user_id: UUID) -> list[CommentView]:
        """The thread of a visible task, oldest first."""
        async with self._uow_factory() as uow:
            await require_visible_task(uow, task_id, user_id)
            comments = await uow.comments.get_for_task(task_id)
            authors = await uow.profiles.get_many([c.author_id for c in comments if c.author_id])
            attachments = await uow.attachments.get_many(
                [c.attachment_id for c in comments if c.attachment_id]
            )

        signed = {
            s.attachment.id: s for s in await self._attachments.sign_many(list(attachments.values()))
        }
        return [
            CommentView(
                comment=comment,
                author=_author(authors.get(comment.author_id)),
                attachment=signed.get(comment.attachment_id) if comment.attachment_id else None,
            )
            for comment in comments
        ]

    async def create(
        self,
        task_id: UUID,
        user_id: UUID,
        content: str,
        attachment_id: UUID | None = None,
    ) -> CommentView:
        """Post a comment, optionally referencing one of the task's attachments."""
        async with self._uow_factory() as uow:
            await require_visible_task(uow, task_id, user_id)

            attachment = None
            if attachment_id is not None:
                attachment = await uow.attachments.get(attachment_id)
                if attachment is None or attachment.task_id != task_id:
                    raise AttachmentNotFoundError(str(attachment_id))

            comment = await uow.comments.create(
                TaskComment(
                    task_id=task_id,
                    author_id=user_id,
                    content=content,
                    attachment_id=attachment_id,
                )
            )
            author = await uow.profiles.get(user_id)
            await uow.commit()

        logger.info("comment_created", comment_id=str(comment.id), task_id=str(task_id))
        return CommentView(
            comment=comment,
            author=_author(author),
            attachment=await self._attachments.sign(attachment) if attachment else None,
        )
