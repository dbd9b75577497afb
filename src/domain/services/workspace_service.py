"""Workspace service layer with business logic."""

from collections.abc import Callable
from typing import Optional
from uuid import UUID

import structlog

from core.exceptions import AlreadyAMemberError, NotAMemberError, UserNotFoundError
from domain.entities.role import Role
from domain.entities.workspace import MembershipView, MemberView, Workspace, WorkspaceMember
from domain.policy import WORKSPACE_CREATOR_ROLE, check_can_add_member
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.notification_service import NotificationService

logger = structlog.get_logger()


class WorkspaceService:
    """Service layer for Workspace business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        notification_service: Optional["NotificationService"] = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._notification = notification_service

    async def list_for_user(self, user_id: UUID) -> list[MembershipView]:
        """Get all workspaces a user is a member of, with their role in each."""
        async with self._uow_factory() as uow:
            return await uow.workspaces.get_all_for_user(user_id)

    async def create(self, user_id: UUID, name: str) -> MembershipView:
        """Create a workspace with the creator as its most senior member.

        Both rows are written in one transaction.
        """
        async with self._uow_factory() as uow:
            created = await uow.workspaces.create(Workspace(name=name, owner_id=user_id))
            await uow.workspaces.add_member(
                WorkspaceMember(
                    workspace_id=created.id,
                    user_id=user_id,
                    role=WORKSPACE_CREATOR_ROLE,
                )
            )
            await uow.commit()

        logger.info("workspace_created", workspace_id=str(created.id), user_id=str(user_id))
        return MembershipView(workspace=created, my_role=WORKSPACE_CREATOR_ROLE)

    async def get_members(self, workspace_id: UUID, user_id: UUID) -> list[MemberView]:
        """List members with their profile summary. Caller must be a member."""
        async with self._uow_factory() as uow:
            if not await uow.workspaces.get_member(workspace_id, user_id):
                raise NotAMemberError(str(workspace_id))

            members = await uow.workspaces.get_members(workspace_id)
            profiles = await uow.profiles.get_many([m.user_id for m in members])

        views = []
        for member in members:
            profile = profiles.get(member.user_id)
            views.append(
                MemberView(
                    member=member,
                    email=profile.email if profile else None,
                    full_name=profile.full_name if profile else None,
                    profile_role=profile.role if profile else None,
                )
            )
        return views

    async def add_member(
        self,
        workspace_id: UUID,
        actor_id: UUID,
        email: str,
        role: Role,
    ) -> MemberView:
        """Add an existing user, found by email, to a workspace.

        The actor needs at least ``doi_pho`` in this workspace and cannot
        grant a role above their own. The target must have signed in at
        least once so that a profile exists.
        """
        async with self._uow_factory() as uow:
            actor = await uow.workspaces.get_member(workspace_id, actor_id)
            check_can_add_member(workspace_id, actor, role)

            target = await uow.profiles.get_by_email(email)
            if target is None:
                raise UserNotFoundError(email)

            if await uow.workspaces.get_member(workspace_id, target.id):
                raise AlreadyAMemberError(str(target.id))

            member = await uow.workspaces.add_member(
                WorkspaceMember(workspace_id=workspace_id, user_id=target.id, role=role)
            )

            if self._notification:
                workspace = await uow.workspaces.get(workspace_id)
                await self._notification.notify(
                    uow,
                    actor_id=actor_id,
                    recipient_id=target.id,
                    title="Added to workspace",
                    body=f"You were added to {workspace.name if workspace else 'a workspace'} "
                    f"as {role.value_str}",
                )

            await uow.commit()

        logger.info(
            "workspace_member_added",
            workspace_id=str(workspace_id),
            user_id=str(target.id),
            role=role.value_str,
        )
        return MemberView(
            member=member,
            email=target.email,
            full_name=target.full_name,
            profile_role=target.role,
        )
