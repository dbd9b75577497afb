"""Task domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskPriority(StrEnum):
    """Task priority level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


CLOSED_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})


@dataclass
class Task:
    """Domain entity for a Task.

    ``created_by`` is fixed at creation. ``assigned_to`` may be cleared, in which
    case only the creator sees the task.
    """

    title: str
    created_by: UUID
    id: UUID = field(default_factory=uuid4)
    assigned_to: UUID | None = None
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    rating: int | None = None
    review_comment: str | None = None
    department_id: UUID | None = None
    team_id: UUID | None = None
    workspace_id: UUID | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_open(self) -> bool:
        return self.status not in CLOSED_STATUSES


@dataclass
class TaskFilters:
    """Optional, conjunctive filters for a task listing.

    ``search`` is already sanitized; ``has`` holds the requested presence
    kinds (``comments``, ``attachments``).
    """

    status: TaskStatus | None = None
    team_id: UUID | None = None
    workspace_id: UUID | None = None
    assigned_to: UUID | None = None
    created_by: UUID | None = None
    search: str | None = None
    has: frozenset[str] = frozenset()


@dataclass
class TaskStats:
    """Dashboard aggregate over the tasks visible to one user."""

    total: int = 0
    assigned_to_me: int = 0
    created_by_me: int = 0
    overdue: int = 0
    due_soon: int = 0
    by_status: dict[str, int] = field(
        default_factory=lambda: {status.value: 0 for status in TaskStatus}
    )
    comments_count: int = 0
    attachments_count: int = 0
