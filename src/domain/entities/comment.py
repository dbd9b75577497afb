"""Task comment domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.attachment import SignedAttachment
from domain.entities.role import Role


@dataclass
class TaskComment:
    """Domain entity for a comment on a task."""

    task_id: UUID
    author_id: UUID
    content: str
    id: UUID = field(default_factory=uuid4)
    attachment_id: UUID | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class CommentAuthor:
    """Read-only value object: the author fields shown next to a comment."""

    full_name: str | None
    email: str | None
    role: Role | None


@dataclass(frozen=True, slots=True)
class CommentView:
    """Read-only value object: comment with its author and attachment."""

    comment: TaskComment
    author: CommentAuthor | None
    attachment: SignedAttachment | None
