"""Task API routes."""

from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_task_service
from api.schemas.common import OkResponse
from api.schemas.task import (
    DashboardResponse,
    TaskCreate,
    TaskDetailResponse,
    TaskListResponse,
    TaskResponse,
    TaskStatsResponse,
    TaskUpdate,
)
from core.rate_limit import limiter
from domain.entities.task import TaskFilters, TaskPriority, TaskStatus
from domain.policy import parse_has, sanitize_search_text
from domain.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])
dashboard_router = APIRouter(tags=["dashboard"])


def get_task_filters(
    status_filter: TaskStatus | None = Query(None, alias="status"),
    team_id: UUID | None = Query(None, alias="teamId"),
    workspace_id: UUID | None = Query(None, alias="workspaceId"),
    assigned_to: UUID | None = Query(None, alias="assignedTo"),
    created_by: UUID | None = Query(None, alias="createdBy"),
    has: str | None = Query(None, description="Comma-separated: comments,attachments"),
    q: str | None = Query(None, description="Free text over title and description"),
) -> TaskFilters:
    """Build listing filters from the query string."""
    return TaskFilters(
        status=status_filter,
        team_id=team_id,
        workspace_id=workspace_id,
        assigned_to=assigned_to,
        created_by=created_by,
        search=sanitize_search_text(q),
        has=parse_has(has),
    )


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List visible tasks",
    responses={200: {"description": "Tasks created by or assigned to the caller"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_tasks(
    request: Request,
    user: CurrentUser,
    filters: TaskFilters = Depends(get_task_filters),
    service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    """
    List the caller's tasks, newest first.

    All filters are combined with AND. `q` matches title or description
    case-insensitively. `has=comments,attachments` keeps only tasks with at
    least one row of each requested kind.
    """
    tasks = await service.list_tasks(user.id, filters)
    return TaskListResponse(tasks=[TaskResponse.model_validate(t) for t in tasks])


@router.post(
    "",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={400: {"description": "Invalid payload"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_task(
    request: Request,
    body: TaskCreate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Create a task. It starts `pending` and is assigned to the caller unless stated."""
    task = await service.create(
        user_id=user.id,
        title=body.title,
        description=body.description,
        priority=body.priority or TaskPriority.MEDIUM,
        due_date=body.due_date,
        assigned_to=body.assigned_to,
        team_id=body.team_id,
        workspace_id=body.workspace_id,
        department_id=body.department_id,
    )
    return TaskDetailResponse(task=TaskResponse.model_validate(task))


@router.get(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Get a task",
    responses={404: {"description": "Task not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Get a task the caller created or is assigned."""
    task = await service.get_task(task_id, user.id)
    return TaskDetailResponse(task=TaskResponse.model_validate(task))


@router.patch(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Update a task",
    responses={
        400: {"description": "Invalid payload"},
        404: {"description": "Task not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_task(
    request: Request,
    task_id: UUID,
    body: TaskUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Apply only the fields present in the body. Rating is never required."""
    task = await service.update(task_id, user.id, body.model_dump(exclude_unset=True))
    return TaskDetailResponse(task=TaskResponse.model_validate(task))


@router.delete(
    "/{task_id}",
    response_model=OkResponse,
    summary="Delete a task",
    responses={404: {"description": "Task not found"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> OkResponse:
    """Delete a task together with its comments and attachment records."""
    await service.delete(task_id, user.id)
    return OkResponse()


@dashboard_router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Dashboard counters",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_dashboard(
    request: Request,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> DashboardResponse:
    """Aggregate counts over the tasks visible to the caller."""
    stats = await service.dashboard_stats(user.id)
    return DashboardResponse(user_id=user.id, stats=TaskStatsResponse(**asdict(stats)))
