"""Workspace repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.workspace import MembershipView, Workspace, WorkspaceMember


class IWorkspaceRepository(Protocol):
    """Repository interface for Workspace entities."""

    async def get(self, id: UUID) -> Workspace | None:
        """Get a workspace by ID."""
        ...

    async def get_all_for_user(self, user_id: UUID) -> list[MembershipView]:
        """Get all workspaces a user belongs to, with the user's role in each."""
        ...

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace."""
        ...

    async def get_member(self, workspace_id: UUID, user_id: UUID) -> WorkspaceMember | None:
        """Get a workspace member by workspace and user IDs."""
        ...

    async def get_members(self, workspace_id: UUID) -> list[WorkspaceMember]:
        """Get all members of a workspace, oldest membership first."""
        ...

    async def add_member(self, member: WorkspaceMember) -> WorkspaceMember:
        """Add a member to a workspace."""
        ...
