"""SQLAlchemy implementation of Workspace repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.role import Role
from domain.entities.workspace import MembershipView, Workspace, WorkspaceMember
from infrastructure.database.models import WorkspaceMemberModel, WorkspaceModel


class SQLAlchemyWorkspaceRepository:
    """SQLAlchemy implementation of IWorkspaceRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Workspace | None:
        """Get a workspace by ID."""
        stmt = select(WorkspaceModel).where(WorkspaceModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all_for_user(self, user_id: UUID) -> list[MembershipView]:
        """Get all workspaces a user is a member of, with their role in each."""
        stmt = (
            select(WorkspaceModel, WorkspaceMemberModel.role)
            .join(
                WorkspaceMemberModel,
                WorkspaceMemberModel.workspace_id == WorkspaceModel.id,
            )
            .where(WorkspaceMemberModel.user_id == user_id)
            .order_by(WorkspaceModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [
            MembershipView(workspace=self._to_entity(model), my_role=Role.from_str(role))
            for model, role in result.all()
        ]

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace."""
        model = self._to_model(workspace)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_member(self, workspace_id: UUID, user_id: UUID) -> WorkspaceMember | None:
        """Get a workspace member by workspace and user IDs."""
        stmt = select(WorkspaceMemberModel).where(
            WorkspaceMemberModel.workspace_id == workspace_id,
            WorkspaceMemberModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._member_to_entity(model) if model else None

    async def get_members(self, workspace_id: UUID) -> list[WorkspaceMember]:
        """Get all members of a workspace."""
        stmt = (
            select(WorkspaceMemberModel)
            .where(WorkspaceMemberModel.workspace_id == workspace_id)
            .order_by(WorkspaceMemberModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._member_to_entity(model) for model in result.scalars()]

    async def add_member(self, member: WorkspaceMember) -> WorkspaceMember:
        """Add a member to a workspace."""
        model = self._member_to_model(member)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._member_to_entity(model)

    def _to_entity(self, model: WorkspaceModel) -> Workspace:
        """Convert ORM model to domain entity."""
        return Workspace(
            id=model.id,
            name=model.name,
            owner_id=model.owner_id,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Workspace) -> WorkspaceModel:
        """Convert domain entity to ORM model."""
        return WorkspaceModel(
            id=entity.id,
            name=entity.name,
            owner_id=entity.owner_id,
            created_at=entity.created_at,
        )

    def _member_to_entity(self, model: WorkspaceMemberModel) -> WorkspaceMember:
        """Convert member ORM model to domain entity."""
        return WorkspaceMember(
            workspace_id=model.workspace_id,
            user_id=model.user_id,
            role=Role.from_str(model.role),
            created_at=model.created_at,
        )

    def _member_to_model(self, entity: WorkspaceMember) -> WorkspaceMemberModel:
        """Convert member domain entity to ORM model."""
        return WorkspaceMemberModel(
            workspace_id=entity.workspace_id,
            user_id=entity.user_id,
            role=entity.role.value_str,
            created_at=entity.created_at,
        )
