"""SQLAlchemy implementation of Profile repository."""

from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile
from domain.entities.role import Role
from infrastructure.database.models import ProfileModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email, ignoring case."""
        stmt = (
            select(ProfileModel)
            .where(func.lower(ProfileModel.email) == email.strip().lower())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Get several profiles keyed by ID."""
        if not ids:
            return {}
        stmt = select(ProfileModel).where(ProfileModel.id.in_(list(set(ids))))
        result = await self._session.execute(stmt)
        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def set_team(self, user_id: UUID, team_id: UUID | None) -> bool:
        """Point the profile at a team, replacing any previous one."""
        stmt = (
            update(ProfileModel)
            .where(ProfileModel.id == user_id)
            .values(team_id=team_id)
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0  # type: ignore[return-value]

    async def search(self, query: str | None, limit: int) -> list[Profile]:
        """Search by email or full name, newest profiles first."""
        stmt = select(ProfileModel)
        if query:
            pattern = f"%{query}%"
            stmt = stmt.where(
                or_(
                    ProfileModel.email.ilike(pattern),
                    ProfileModel.full_name.ilike(pattern),
                )
            )
        stmt = stmt.order_by(ProfileModel.created_at.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            role=Role.from_str(model.role),
            department_id=model.department_id,
            team_id=model.team_id,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            email=entity.email,
            full_name=entity.full_name,
            role=entity.role.value_str,
            department_id=entity.department_id,
            team_id=entity.team_id,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )
