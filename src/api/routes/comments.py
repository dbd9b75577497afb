"""Task comment API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_comment_service
from api.schemas.attachment import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
)
from core.rate_limit import limiter
from domain.services.comment_service import CommentService

router = APIRouter(prefix="/tasks/{task_id}/comments", tags=["comments"])


@router.get(
    "",
    response_model=CommentListResponse,
    summary="List comments of a task",
    responses={404: {"description": "Task not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_comments(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
) -> CommentListResponse:
    """Comment thread, oldest first, with author and attachment details."""
    views = await service.list_for_task(task_id, user.id)
    return CommentListResponse(comments=[CommentResponse.from_view(v) for v in views])


@router.post(
    "",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a task",
    responses={
        400: {"description": "Invalid payload"},
        404: {"description": "Task or attachment not found"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_comment(
    request: Request,
    task_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
) -> CommentDetailResponse:
    """Post a comment. `attachment_id` must belong to the same task."""
    view = await service.create(task_id, user.id, body.content, body.attachment_id)
    return CommentDetailResponse(comment=CommentResponse.from_view(view))
