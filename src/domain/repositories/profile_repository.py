"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile


class IProfileRepository(Protocol):
    """Repository interface for Profile entities."""

    async def get(self, id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        ...

    async def get_by_email(self, email: str) -> Profile | None:
        """Get a profile by email (case-insensitive)."""
        ...

    async def get_many(self, ids: list[UUID]) -> dict[UUID, Profile]:
        """Get several profiles keyed by ID."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def set_team(self, user_id: UUID, team_id: UUID | None) -> bool:
        """Overwrite a user's single team association."""
        ...

    async def search(self, query: str | None, limit: int) -> list[Profile]:
        """Search the directory by email or full name, newest first."""
        ...
