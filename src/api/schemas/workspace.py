"""Pydantic schemas for Workspace API."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from domain.entities.role import Role
from domain.entities.workspace import MembershipView, MemberView

RoleName = Literal["can_bo", "doi_pho", "doi_truong", "pho_phong", "truong_phong"]


class WorkspaceCreate(BaseModel):
    """Schema for creating a Workspace."""

    name: str = Field(..., min_length=2, max_length=120)


class MemberAdd(BaseModel):
    """Schema for adding a member by email."""

    email: EmailStr
    role: RoleName

    def role_enum(self) -> Role:
        return Role.from_str(self.role)


class WorkspaceResponse(BaseModel):
    """Workspace seen by one of its members."""

    id: UUID
    name: str
    owner_id: UUID
    created_at: datetime
    my_role: str

    @classmethod
    def from_view(cls, view: MembershipView) -> "WorkspaceResponse":
        return cls(
            id=view.workspace.id,
            name=view.workspace.name,
            owner_id=view.workspace.owner_id,
            created_at=view.workspace.created_at,
            my_role=view.my_role.value_str,
        )


class WorkspaceListResponse(BaseModel):
    workspaces: list[WorkspaceResponse]


class WorkspaceDetailResponse(BaseModel):
    workspace: WorkspaceResponse


class MemberUser(BaseModel):
    id: UUID
    email: str | None
    full_name: str | None
    role: str | None


class MemberResponse(BaseModel):
    """Workspace membership with the member's profile summary."""

    workspace_id: UUID
    user_id: UUID
    role: str
    created_at: datetime
    user: MemberUser

    @classmethod
    def from_view(cls, view: MemberView) -> "MemberResponse":
        m = view.member
        return cls(
            workspace_id=m.workspace_id,
            user_id=m.user_id,
            role=m.role.value_str,
            created_at=m.created_at,
            user=MemberUser(
                id=m.user_id,
                email=view.email,
                full_name=view.full_name,
                role=view.profile_role.value_str if view.profile_role else None,
            ),
        )


class MemberListResponse(BaseModel):
    members: list[MemberResponse]


class MemberDetailResponse(BaseModel):
    member: MemberResponse
