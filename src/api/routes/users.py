"""User directory API routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_profile_service
from api.schemas.profile import ProfileResponse, UserListResponse
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse, summary="Search the user directory")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_users(
    request: Request,
    user: CurrentUser,
    q: str | None = Query(None, description="Matches email or full name"),
    limit: int | None = Query(None, description="Clamped to 1..500, default 200"),
    service: ProfileService = Depends(get_profile_service),
) -> UserListResponse:
    """Profiles, newest first."""
    profiles = await service.search(q, limit)
    return UserListResponse(users=[ProfileResponse.from_entity(p) for p in profiles])
