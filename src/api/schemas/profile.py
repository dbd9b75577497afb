"""Pydantic schemas for profiles, the user directory and authentication."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from domain.entities.profile import Profile


class ProfileResponse(BaseModel):
    """Full profile as shown to its owner and in the directory."""

    id: UUID
    email: str | None
    full_name: str | None
    role: str
    department_id: UUID | None
    team_id: UUID | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls(
            id=profile.id,
            email=profile.email,
            full_name=profile.full_name,
            role=profile.role.value_str,
            department_id=profile.department_id,
            team_id=profile.team_id,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )


class UserListResponse(BaseModel):
    users: list[ProfileResponse]


class AuthUser(BaseModel):
    """Identity as carried by the access token."""

    id: UUID
    email: str


class MeResponse(BaseModel):
    user: AuthUser
    profile: ProfileResponse


class AuthRequest(BaseModel):
    """Login, signup and logout share one endpoint keyed by ``action``."""

    action: Literal["login", "signup", "logout"]
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6)
    full_name: str | None = Field(None, min_length=1, max_length=200)


class AuthResponse(BaseModel):
    ok: bool = True
    user: dict[str, Any] | None = None
