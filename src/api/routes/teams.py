"""Team API routes."""

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_team_service
from api.schemas.team import (
    TeamCreate,
    TeamDetailResponse,
    TeamJoin,
    TeamListResponse,
    TeamResponse,
    TeamSummary,
)
from core.rate_limit import limiter
from domain.services.team_service import TeamService

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("", response_model=TeamListResponse, summary="List teams")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_teams(
    request: Request,
    user: CurrentUser,
    service: TeamService = Depends(get_team_service),
) -> TeamListResponse:
    """All teams by name. Join codes are not included."""
    teams = await service.list_all()
    return TeamListResponse(teams=[TeamSummary.model_validate(t) for t in teams])


@router.post(
    "",
    response_model=TeamDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a team",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_team(
    request: Request,
    body: TeamCreate,
    user: CurrentUser,
    service: TeamService = Depends(get_team_service),
) -> TeamDetailResponse:
    """Create a team in the caller's department and move the caller into it."""
    team = await service.create(user.id, body.name)
    return TeamDetailResponse(team=TeamResponse.model_validate(team))


@router.get("/me", response_model=TeamDetailResponse, summary="Get my team")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_my_team(
    request: Request,
    user: CurrentUser,
    service: TeamService = Depends(get_team_service),
) -> TeamDetailResponse:
    """The caller's team with its join code, or `team: null`."""
    team = await service.get_mine(user.id)
    return TeamDetailResponse(team=TeamResponse.model_validate(team) if team else None)


@router.post(
    "/join",
    response_model=TeamDetailResponse,
    summary="Join a team by code",
    responses={404: {"description": "Invalid team join code"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def join_team(
    request: Request,
    body: TeamJoin,
    user: CurrentUser,
    service: TeamService = Depends(get_team_service),
) -> TeamDetailResponse:
    """Join the team owning the code. Any previous team is left."""
    team = await service.join(user.id, body.join_code)
    return TeamDetailResponse(team=TeamResponse.model_validate(team))
