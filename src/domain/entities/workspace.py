"""Workspace domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.role import Role


@dataclass
class Workspace:
    """Domain entity for a Workspace."""

    name: str
    owner_id: UUID
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class WorkspaceMember:
    """Domain entity for a workspace membership.

    The membership role is independent of the user's profile role.
    """

    workspace_id: UUID
    user_id: UUID
    role: Role = Role.CAN_BO
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class MembershipView:
    """Read-only value object: a workspace seen from one member's side."""

    workspace: Workspace
    my_role: Role


@dataclass(frozen=True, slots=True)
class MemberView:
    """Read-only value object: a member joined with their profile."""

    member: WorkspaceMember
    email: str | None
    full_name: str | None
    profile_role: Role | None
