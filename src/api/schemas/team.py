"""Pydantic schemas for Team API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TeamCreate(BaseModel):
    """Schema for creating a Team."""

    name: str = Field(..., min_length=2, max_length=120)


class TeamJoin(BaseModel):
    """Schema for joining a Team by code."""

    join_code: str = Field(..., min_length=8, max_length=64)


class TeamSummary(BaseModel):
    """Team as listed to everyone. Join codes are never listed."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    department_id: UUID | None
    created_at: datetime


class TeamResponse(TeamSummary):
    """Team as shown to its members, with the join code to share."""

    join_code: str | None = None


class TeamListResponse(BaseModel):
    teams: list[TeamSummary]


class TeamDetailResponse(BaseModel):
    team: TeamResponse | None
