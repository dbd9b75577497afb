"""Profile service: lazy provisioning and the user directory."""

from collections.abc import Callable
from typing import ClassVar
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from domain.entities.profile import Profile
from domain.entities.role import Role
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()

DEFAULT_DIRECTORY_LIMIT = 200
MAX_DIRECTORY_LIMIT = 500


class ProfileService:
    """Service layer for Profile business logic."""

    # User IDs known to have a profile row. Saves a lookup on every
    # authenticated request once a user has been seen.
    _provisioned_users: ClassVar[set[UUID]] = set()

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    @classmethod
    def clear_provisioned_cache(cls) -> None:
        """Clear the provisioned-users cache. Intended for testing."""
        cls._provisioned_users.clear()

    async def get(self, user_id: UUID) -> Profile | None:
        """Get a profile by user ID."""
        async with self._uow_factory() as uow:
            return await uow.profiles.get(user_id)

    async def get_or_provision(
        self,
        user_id: UUID,
        email: str | None,
        full_name: str | None = None,
    ) -> Profile:
        """Return the user's profile, creating it on first sight.

        New profiles start at the lowest rank. Concurrent first requests
        race on the primary key; the loser re-reads the winner's row.
        """
        async with self._uow_factory() as uow:
            existing = await uow.profiles.get(user_id)
            if existing:
                self._provisioned_users.add(user_id)
                return existing

            profile = Profile(
                id=user_id,
                email=email,
                full_name=full_name,
                role=Role.CAN_BO,
            )
            try:
                created = await uow.profiles.create(profile)
                await uow.commit()
            except IntegrityError:
                await uow.rollback()
                winner = await uow.profiles.get(user_id)
                if winner is None:
                    raise
                created = winner
            else:
                logger.info("profile_provisioned", user_id=str(user_id))

        self._provisioned_users.add(user_id)
        return created

    async def ensure_profile(
        self, user_id: UUID, email: str | None, full_name: str | None = None
    ) -> None:
        """Provision the profile unless it is already known to exist."""
        if user_id in self._provisioned_users:
            return
        await self.get_or_provision(user_id, email, full_name)

    async def search(self, query: str | None, limit: int | None = None) -> list[Profile]:
        """Directory lookup by email or name, newest first."""
        if limit is None:
            limit = DEFAULT_DIRECTORY_LIMIT
        limit = max(1, min(MAX_DIRECTORY_LIMIT, limit))
        text = query.strip() if query else None
        async with self._uow_factory() as uow:
            return await uow.profiles.search(text or None, limit)
