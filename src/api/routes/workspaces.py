"""Workspace API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_workspace_service
from api.schemas.workspace import (
    MemberAdd,
    MemberDetailResponse,
    MemberListResponse,
    MemberResponse,
    WorkspaceCreate,
    WorkspaceDetailResponse,
    WorkspaceListResponse,
    WorkspaceResponse,
)
from core.rate_limit import limiter
from domain.services.workspace_service import WorkspaceService

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


@router.get(
    "",
    response_model=WorkspaceListResponse,
    summary="List my workspaces",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_workspaces(
    request: Request,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceListResponse:
    """Workspaces the caller belongs to, each with the caller's role in it."""
    views = await service.list_for_user(user.id)
    return WorkspaceListResponse(workspaces=[WorkspaceResponse.from_view(v) for v in views])


@router.post(
    "",
    response_model=WorkspaceDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a workspace",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_workspace(
    request: Request,
    body: WorkspaceCreate,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceDetailResponse:
    """Create a workspace. The caller becomes a `truong_phong` member."""
    view = await service.create(user.id, body.name)
    return WorkspaceDetailResponse(workspace=WorkspaceResponse.from_view(view))


@router.get(
    "/{workspace_id}/members",
    response_model=MemberListResponse,
    summary="List workspace members",
    responses={403: {"description": "Not a workspace member"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_members(
    request: Request,
    workspace_id: UUID,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> MemberListResponse:
    """Members with their profile summary. Requires membership."""
    views = await service.get_members(workspace_id, user.id)
    return MemberListResponse(members=[MemberResponse.from_view(v) for v in views])


@router.post(
    "/{workspace_id}/members",
    response_model=MemberDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a workspace member",
    responses={
        400: {"description": "Already a member or invalid payload"},
        403: {"description": "Not a member, or role rank too low"},
        404: {"description": "No user with that email"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_member(
    request: Request,
    workspace_id: UUID,
    body: MemberAdd,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> MemberDetailResponse:
    """
    Add a user by email.

    The caller needs at least `doi_pho` in this workspace and cannot grant a
    role above their own. The target must have logged in at least once.
    """
    view = await service.add_member(workspace_id, user.id, str(body.email), body.role_enum())
    return MemberDetailResponse(member=MemberResponse.from_view(view))
