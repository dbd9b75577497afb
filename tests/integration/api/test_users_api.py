"""Integration tests for the user directory."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import ProfileModel
from tests.integration.conftest import CurrentUserSwitch


@pytest.fixture
def add_profiles(session_factory: async_sessionmaker[AsyncSession]):
    """Insert profiles with increasing creation times."""

    async def _add(*names: str) -> None:
        base = datetime.utcnow() - timedelta(days=1)
        async with session_factory() as session:
            for i, name in enumerate(names):
                session.add(
                    ProfileModel(
                        id=uuid4(),
                        email=f"{name.lower()}@corp.test",
                        full_name=name,
                        role="can_bo",
                        created_at=base + timedelta(minutes=i),
                    )
                )
            await session.commit()

    return _add


class TestUsersAPI:
    @pytest.mark.asyncio
    async def test_newest_first(
        self, client: AsyncClient, users: CurrentUserSwitch, add_profiles
    ) -> None:
        users.login_as("alice")
        await add_profiles("Nguyen", "Tran", "Le")

        listed = (await client.get("/api/users")).json()["users"]

        # The caller is provisioned on first request, so is newest
        assert [u["full_name"] for u in listed] == ["Alice", "Le", "Tran", "Nguyen"]
        assert set(listed[0]) >= {"id", "email", "full_name", "role", "team_id"}

    @pytest.mark.asyncio
    async def test_search_email_or_name(
        self, client: AsyncClient, users: CurrentUserSwitch, add_profiles
    ) -> None:
        users.login_as("alice")
        await add_profiles("Nguyen", "Tran")

        by_name = (await client.get("/api/users", params={"q": "tRaN"})).json()["users"]
        assert [u["full_name"] for u in by_name] == ["Tran"]

        by_email = (await client.get("/api/users", params={"q": "nguyen@corp"})).json()["users"]
        assert [u["email"] for u in by_email] == ["nguyen@corp.test"]

        blank = (await client.get("/api/users", params={"q": "   "})).json()["users"]
        assert len(blank) == 3

    @pytest.mark.asyncio
    async def test_limit_is_clamped(
        self, client: AsyncClient, users: CurrentUserSwitch, add_profiles
    ) -> None:
        users.login_as("alice")
        await add_profiles("A1", "B2", "C3")

        one = (await client.get("/api/users", params={"limit": 0})).json()["users"]
        assert len(one) == 1

        two = (await client.get("/api/users", params={"limit": 2})).json()["users"]
        assert len(two) == 2

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient) -> None:
        assert (await client.get("/api/users")).status_code == 401
