"""SQLAlchemy implementation of Team repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.team import Team
from infrastructure.database.models import TeamModel

# Columns that exist in every schema revision. ``join_code`` was added later,
# so reads that do not need it leave it out.
_BASE_COLUMNS = (
    TeamModel.id,
    TeamModel.name,
    TeamModel.department_id,
    TeamModel.created_at,
)


class SQLAlchemyTeamRepository:
    """SQLAlchemy implementation of ITeamRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID, include_join_code: bool = True) -> Team | None:
        """Get a team by ID."""
        if include_join_code:
            stmt = select(TeamModel).where(TeamModel.id == id)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        row = (
            await self._session.execute(select(*_BASE_COLUMNS).where(TeamModel.id == id))
        ).first()
        return self._row_to_entity(row) if row else None

    async def get_by_join_code(self, code: str) -> Team | None:
        """Get the team whose join code matches exactly."""
        stmt = select(TeamModel).where(TeamModel.join_code == code)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_all(self) -> list[Team]:
        """Get all teams ordered by name, without their join codes."""
        stmt = select(*_BASE_COLUMNS).order_by(TeamModel.name)
        result = await self._session.execute(stmt)
        return [self._row_to_entity(row) for row in result]

    async def create(self, team: Team) -> Team:
        """Create a new team."""
        model = self._to_model(team)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    def _row_to_entity(self, row) -> Team:
        return Team(
            id=row.id,
            name=row.name,
            department_id=row.department_id,
            join_code=None,
            created_at=row.created_at,
        )

    def _to_entity(self, model: TeamModel) -> Team:
        """Convert ORM model to domain entity."""
        return Team(
            id=model.id,
            name=model.name,
            department_id=model.department_id,
            join_code=model.join_code,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Team) -> TeamModel:
        """Convert domain entity to ORM model."""
        return TeamModel(
            id=entity.id,
            name=entity.name,
            department_id=entity.department_id,
            join_code=entity.join_code,
            created_at=entity.created_at,
        )
