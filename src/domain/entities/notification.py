"""Notification domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Notification:
    """Domain entity for a per-user notification.

    ``read_at`` is None while unread. The transition to read is one-way.
    """

    user_id: UUID
    title: str
    id: UUID = field(default_factory=uuid4)
    body: str | None = None
    read_at: datetime | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_read(self) -> bool:
        return self.read_at is not None
