"""Pydantic schemas for task attachments and comments."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from domain.entities.attachment import SignedAttachment
from domain.entities.comment import CommentView


class AttachmentResponse(BaseModel):
    """Attachment metadata plus a freshly signed download URL.

    ``url`` is null when signing failed; the rest of the listing is still
    returned.
    """

    id: UUID
    task_id: UUID
    uploader_id: UUID | None
    storage_path: str
    file_name: str | None
    mime_type: str | None
    size_bytes: int | None
    created_at: datetime
    url: str | None

    @classmethod
    def from_signed(cls, signed: SignedAttachment) -> "AttachmentResponse":
        a = signed.attachment
        return cls(
            id=a.id,
            task_id=a.task_id,
            uploader_id=a.uploader_id,
            storage_path=a.storage_path,
            file_name=a.file_name,
            mime_type=a.mime_type,
            size_bytes=a.size_bytes,
            created_at=a.created_at,
            url=signed.url,
        )


class AttachmentListResponse(BaseModel):
    attachments: list[AttachmentResponse]


class AttachmentDetailResponse(BaseModel):
    attachment: AttachmentResponse


class CommentCreate(BaseModel):
    """Schema for posting a comment."""

    content: str = Field(..., min_length=1, max_length=2000)
    attachment_id: UUID | None = None


class CommentAuthorResponse(BaseModel):
    full_name: str | None
    email: str | None
    role: str | None


class CommentResponse(BaseModel):
    """Comment with author summary and optional attachment."""

    id: UUID
    task_id: UUID
    author_id: UUID | None
    content: str
    attachment_id: UUID | None
    created_at: datetime
    author: CommentAuthorResponse | None
    attachment: AttachmentResponse | None

    @classmethod
    def from_view(cls, view: CommentView) -> "CommentResponse":
        c = view.comment
        author = None
        if view.author is not None:
            author = CommentAuthorResponse(
                full_name=view.author.full_name,
                email=view.author.email,
                role=view.author.role.value_str if view.author.role else None,
            )
        return cls(
            id=c.id,
            task_id=c.task_id,
            author_id=c.author_id,
            content=c.content,
            attachment_id=c.attachment_id,
            created_at=c.created_at,
            author=author,
            attachment=AttachmentResponse.from_signed(view.attachment) if view.attachment else None,
        )


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]


class CommentDetailResponse(BaseModel):
    comment: CommentResponse
