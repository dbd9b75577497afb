"""Integration tests for Notifications API."""

from datetime import datetime, timedelta
from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infrastructure.database.models import NotificationModel
from tests.integration.conftest import CurrentUserSwitch


@pytest.fixture
def add_notifications(session_factory: async_sessionmaker[AsyncSession]):
    """Insert notifications directly, oldest first."""

    async def _add(user_id: UUID, count: int) -> list[UUID]:
        base = datetime.utcnow() - timedelta(hours=1)
        ids = []
        async with session_factory() as session:
            for i in range(count):
                model = NotificationModel(
                    id=uuid4(),
                    user_id=user_id,
                    title=f"Notification {i}",
                    created_at=base + timedelta(minutes=i),
                )
                session.add(model)
                ids.append(model.id)
            await session.commit()
        return ids

    return _add


class TestNotificationsAPI:
    @pytest.mark.asyncio
    async def test_list_newest_first_with_unread_count(
        self, client: AsyncClient, users: CurrentUserSwitch, add_notifications
    ) -> None:
        alice = users.login_as("alice")
        ids = await add_notifications(alice.id, 3)

        body = (await client.get("/api/notifications")).json()

        assert [n["id"] for n in body["notifications"]] == [str(i) for i in reversed(ids)]
        assert body["unreadCount"] == 3

    @pytest.mark.asyncio
    async def test_limit_is_clamped(
        self, client: AsyncClient, users: CurrentUserSwitch, add_notifications
    ) -> None:
        alice = users.login_as("alice")
        await add_notifications(alice.id, 60)

        default = (await client.get("/api/notifications")).json()
        assert len(default["notifications"]) == 20
        assert default["unreadCount"] == 60

        capped = (await client.get("/api/notifications", params={"limit": 500})).json()
        assert len(capped["notifications"]) == 50

        floor = (await client.get("/api/notifications", params={"limit": 0})).json()
        assert len(floor["notifications"]) == 1

    @pytest.mark.asyncio
    async def test_mark_read_is_idempotent(
        self,
        client: AsyncClient,
        users: CurrentUserSwitch,
        add_notifications,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        alice = users.login_as("alice")
        first, second = await add_notifications(alice.id, 2)

        response = await client.patch(
            "/api/notifications", json={"action": "mark_read", "id": str(first)}
        )
        assert response.status_code == 200
        assert response.json() == {"ok": True}

        async with session_factory() as session:
            read_at = (
                await session.execute(
                    select(NotificationModel.read_at).where(NotificationModel.id == first)
                )
            ).scalar_one()
        assert read_at is not None

        again = await client.patch(
            "/api/notifications", json={"action": "mark_read", "id": str(first)}
        )
        assert again.status_code == 200

        async with session_factory() as session:
            read_at_again = (
                await session.execute(
                    select(NotificationModel.read_at).where(NotificationModel.id == first)
                )
            ).scalar_one()
        assert read_at_again == read_at

        body = (await client.get("/api/notifications")).json()
        assert body["unreadCount"] == 1

        unread = (await client.get("/api/notifications", params={"unread": "1"})).json()
        assert [n["id"] for n in unread["notifications"]] == [str(second)]

    @pytest.mark.asyncio
    async def test_cannot_mark_someone_elses(
        self, client: AsyncClient, users: CurrentUserSwitch, add_notifications
    ) -> None:
        bob = users.login_as("bob")
        (bobs,) = await add_notifications(bob.id, 1)

        users.login_as("alice")
        response = await client.patch(
            "/api/notifications", json={"action": "mark_read", "id": str(bobs)}
        )
        assert response.status_code == 404

        users.login_as("bob")
        assert (await client.get("/api/notifications")).json()["unreadCount"] == 1

    @pytest.mark.asyncio
    async def test_mark_all_read_scoped_to_caller(
        self, client: AsyncClient, users: CurrentUserSwitch, add_notifications
    ) -> None:
        bob = users.login_as("bob")
        await add_notifications(bob.id, 2)
        alice = users.login_as("alice")
        await add_notifications(alice.id, 3)

        response = await client.patch("/api/notifications", json={"action": "mark_all_read"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "count": 3}
        assert (await client.get("/api/notifications")).json()["unreadCount"] == 0

        again = await client.patch("/api/notifications", json={"action": "mark_all_read"})
        assert again.json()["count"] == 0

        users.login_as("bob")
        assert (await client.get("/api/notifications")).json()["unreadCount"] == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body,error",
        [
            ({"action": "mark_read"}, "Missing id"),
            ({"action": "mark_unread", "id": str(uuid4())}, "Invalid payload"),
            ({}, "Invalid payload"),
        ],
    )
    async def test_invalid_actions(
        self, client: AsyncClient, users: CurrentUserSwitch, body: dict, error: str
    ) -> None:
        users.login_as("alice")

        response = await client.patch("/api/notifications", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == error
