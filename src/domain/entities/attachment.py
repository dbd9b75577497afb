"""Task attachment domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class TaskAttachment:
    """Domain entity for a file stored against a task.

    The object itself lives in private storage; callers only ever get a
    short-lived signed URL for it.
    """

    task_id: UUID
    uploader_id: UUID
    storage_path: str
    id: UUID = field(default_factory=uuid4)
    file_name: str | None = None
    mime_type: str | None = None
    size_bytes: int | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class SignedAttachment:
    """Read-only value object: attachment plus a freshly minted URL."""

    attachment: TaskAttachment
    url: str | None
