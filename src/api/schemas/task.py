"""Pydantic schemas for Task API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from api.schemas.common import to_naive_utc
from domain.entities.task import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    """Schema for creating a Task."""

    title: str = Field(..., min_length=3, max_length=200)
    description: str | None = Field(None, max_length=5000)
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assigned_to: UUID | None = None
    team_id: UUID | None = None
    workspace_id: UUID | None = None
    department_id: UUID | None = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)


class TaskUpdate(BaseModel):
    """Schema for patching a Task. Unknown fields are rejected.

    Only fields present in the request body are applied; an explicit null
    clears a nullable field.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=3, max_length=200)
    description: str | None = Field(None, max_length=5000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assigned_to: UUID | None = None
    team_id: UUID | None = None
    department_id: UUID | None = None
    rating: int | None = Field(None, ge=1, le=5)
    review_comment: str | None = Field(None, max_length=2000)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: datetime | None) -> datetime | None:
        return to_naive_utc(value)

    @field_validator("title", "status", "priority")
    @classmethod
    def reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("must not be null")
        return value


class TaskResponse(BaseModel):
    """Schema for Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None
    rating: int | None
    review_comment: str | None
    department_id: UUID | None
    team_id: UUID | None
    workspace_id: UUID | None
    created_by: UUID
    assigned_to: UUID | None
    created_at: datetime
    updated_at: datetime


class TaskListResponse(BaseModel):
    """List of tasks."""

    tasks: list[TaskResponse]


class TaskDetailResponse(BaseModel):
    """Single task wrapper."""

    task: TaskResponse


class TaskStatsResponse(BaseModel):
    """Dashboard counters, serialized in camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    total: int
    assigned_to_me: int
    created_by_me: int
    overdue: int
    due_soon: int
    by_status: dict[str, int]
    comments_count: int
    attachments_count: int


class DashboardResponse(BaseModel):
    """Dashboard payload."""

    user_id: UUID
    stats: TaskStatsResponse
