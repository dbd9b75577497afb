"""Team repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.team import Team


class ITeamRepository(Protocol):
    """Repository interface for Team entities."""

    async def get(self, id: UUID, include_join_code: bool = True) -> Team | None:
        """Get a team by ID. Pass ``include_join_code=False`` to skip that column."""
        ...

    async def get_by_join_code(self, code: str) -> Team | None:
        """Get the team whose join code matches exactly."""
        ...

    async def get_all(self) -> list[Team]:
        """Get all teams ordered by name."""
        ...

    async def create(self, team: Team) -> Team:
        """Create a new team."""
        ...
