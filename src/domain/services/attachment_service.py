"""Attachment service: private uploads and signed download URLs."""

import asyncio
import mimetypes
from collections.abc import Callable
from uuid import UUID, uuid4

import structlog

from core.config import settings
from core.exceptions import BackendConfigurationError, InvalidUploadError
from domain.entities.attachment import SignedAttachment, TaskAttachment
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.task_service import require_visible_task
from infrastructure.storage.provider import IObjectStorage

logger = structlog.get_logger()


def safe_file_name(name: str) -> str:
    """Strip path separators so a client-supplied name cannot nest paths."""
    return name.replace("\\", "_").replace("/", "_")


def build_storage_path(task_id: UUID, file_name: str) -> str:
    """``tasks/{task_id}/{random}.{ext}``, keeping the last dot-segment as written."""
    _, dot, ext = file_name.rpartition(".")
    suffix = f".{ext}" if dot and ext else ""
    return f"tasks/{task_id}/{uuid4()}{suffix}"


class AttachmentService:
    """Service layer for task attachments."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        storage: IObjectStorage,
        signed_url_ttl: int = settings.signed_url_expires_seconds,
        max_upload_bytes: int = settings.max_upload_bytes,
    ) -> None:
        self._uow_factory = uow_factory
        self._storage = storage
        self._signed_url_ttl = signed_url_ttl
        self._max_upload_bytes = max_upload_bytes

    @property
    def max_upload_bytes(self) -> int:
        return self._max_upload_bytes

    async def list_for_task(self, task_id: UUID, user_id: UUID) -> list[SignedAttachment]:
        """Attachments of a visible task, newest first, each with a fresh URL."""
        async with self._uow_factory() as uow:
            await require_visible_task(uow, task_id, user_id)
            attachments = await uow.attachments.get_for_task(task_id)
        return await self.sign_many(attachments)

    async def sign(self, attachment: TaskAttachment) -> SignedAttachment:
        """Mint a signed URL. Failure yields ``url=None`` rather than an error."""
        try:
            url = await self._storage.create_signed_url(
                attachment.storage_path, self._signed_url_ttl
            )
        except Exception:
            logger.warning(
                "attachment_sign_failed",
                attachment_id=str(attachment.id),
                storage_path=attachment.storage_path,
                exc_info=True,
            )
            url = None
        return SignedAttachment(attachment=attachment, url=url)

    async def sign_many(self, attachments: list[TaskAttachment]) -> list[SignedAttachment]:
        """Sign every attachment concurrently, preserving order."""
        if not attachments:
            return []
        return list(await asyncio.gather(*(self.sign(a) for a in attachments)))

    async def upload(
        self,
        task_id: UUID,
        user_id: UUID,
        file_name: str | None,
        content_type: str | None,
        data: bytes | None,
    ) -> SignedAttachment:
        """Store a file against a visible task.

        Every input check runs before storage is touched. If recording the
        metadata fails, the uploaded object is removed again.
        """
        async with self._uow_factory() as uow:
            await require_visible_task(uow, task_id, user_id)

        if data is None:
            raise InvalidUploadError("Missing file")
        if len(data) == 0:
            raise InvalidUploadError("Empty file")
        if len(data) > self._max_upload_bytes:
            limit_mb = self._max_upload_bytes // (1024 * 1024)
            raise InvalidUploadError(f"File too large (max {limit_mb}MB)")

        if not self._storage.is_configured:
            raise BackendConfigurationError(
                "Storage is not configured (SUPABASE_SERVICE_ROLE_KEY missing)"
            )

        name = safe_file_name(file_name or "file")
        mime_type = content_type or mimetypes.guess_type(name)[0]
        path = build_storage_path(task_id, name)

        await self._storage.ensure_bucket()
        await self._storage.upload(path, data, mime_type)

        try:
            async with self._uow_factory() as uow:
                attachment = await uow.attachments.create(
                    TaskAttachment(
                        task_id=task_id,
                        uploader_id=user_id,
                        storage_path=path,
                        file_name=name,
                        mime_type=mime_type,
                        size_bytes=len(data),
                    )
                )
                await uow.commit()
        except Exception:
            logger.error("attachment_insert_failed", task_id=str(task_id), storage_path=path)
            await self._remove_orphan(path)
            raise

        logger.info(
            "attachment_uploaded",
            attachment_id=str(attachment.id),
            task_id=str(task_id),
            size_bytes=len(data),
        )
        return await self.sign(attachment)

    async def _remove_orphan(self, path: str) -> None:
        try:
            await self._storage.remove([path])
        except Exception:
            logger.exception("attachment_orphan_remove_failed", storage_path=path)
