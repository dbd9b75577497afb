"""Team service layer with business logic."""

from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import DBAPIError

from core.exceptions import TeamNotFoundError, UserNotFoundError
from domain.entities.team import Team
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


def is_missing_join_code_column(exc: DBAPIError) -> bool:
    """True when a database error is the pre-migration schema lacking join_code."""
    return "join_code" in str(exc.orig if exc.orig is not None else exc)


class TeamService:
    """Service layer for Team business logic.

    Any authenticated user may create or join a team; there is no rank check.
    A user belongs to at most one team, stored on their profile.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def list_all(self) -> list[Team]:
        """List every team, without join codes."""
        async with self._uow_factory() as uow:
            return await uow.teams.get_all()

    async def create(self, user_id: UUID, name: str) -> Team:
        """Create a team in the creator's department and move the creator into it."""
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if profile is None:
                raise UserNotFoundError(str(user_id))

            team = await uow.teams.create(
                Team(name=name, department_id=profile.department_id)
            )
            await uow.profiles.set_team(user_id, team.id)
            await uow.commit()

        logger.info("team_created", team_id=str(team.id), user_id=str(user_id))
        return team

    async def get_mine(self, user_id: UUID) -> Team | None:
        """The caller's team including its join code, or None.

        If the database predates the join_code column the team is still
        returned, just without a code.
        """
        async with self._uow_factory() as uow:
            profile = await uow.profiles.get(user_id)
            if profile is None or profile.team_id is None:
                return None
            team_id = profile.team_id

            try:
                return await uow.teams.get(team_id)
            except DBAPIError as e:
                if not is_missing_join_code_column(e):
                    raise
                logger.warning("team_join_code_column_missing", team_id=str(team_id))

        async with self._uow_factory() as uow:
            return await uow.teams.get(team_id, include_join_code=False)

    async def join(self, user_id: UUID, join_code: str) -> Team:
        """Join the team owning ``join_code``, leaving any previous team."""
        code = join_code.strip()
        async with self._uow_factory() as uow:
            team = await uow.teams.get_by_join_code(code)
            if team is None:
                raise TeamNotFoundError()

            await uow.profiles.set_team(user_id, team.id)
            await uow.commit()

        logger.info("team_joined", team_id=str(team.id), user_id=str(user_id))
        return team
