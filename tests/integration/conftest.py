"""Fixtures for API integration tests.

Each test gets its own in-memory SQLite database. Storage and the identity
provider are replaced by in-process fakes; everything else (routes, services,
repositories, unit of work) is the real stack.
"""

from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.exceptions import IdentityProviderError, StorageError
from domain.entities.role import Role
from domain.services.profile_service import ProfileService
from infrastructure.auth.gotrue_client import AuthSession
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, ProfileModel

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeStorage:
    """In-memory IObjectStorage."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.is_configured = True
        self.fail_signing = False

    async def ensure_bucket(self) -> None:
        pass

    async def upload(self, path: str, data: bytes, content_type: str | None) -> None:
        if path in self.objects:
            raise StorageError("The resource already exists")
        self.objects[path] = data

    async def create_signed_url(self, path: str, expires_in: int) -> str:
        if self.fail_signing or path not in self.objects:
            raise StorageError("Object not found")
        return f"https://storage.test/object/sign/{path}?expires={expires_in}"

    async def remove(self, paths: list[str]) -> None:
        for path in paths:
            self.objects.pop(path, None)


class FakeGoTrue:
    """Identity provider stand-in that accepts one password per email."""

    def __init__(self) -> None:
        self.passwords: dict[str, str] = {}
        self.signed_out: list[str] = []

    def _session(self, email: str) -> AuthSession:
        return AuthSession(
            user={"id": str(uuid4()), "email": email},
            access_token=f"access-{email}",
            refresh_token=f"refresh-{email}",
            expires_in=3600,
        )

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        if self.passwords.get(email) != password:
            raise IdentityProviderError("Invalid login credentials")
        return self._session(email)

    async def sign_up(
        self, email: str, password: str, full_name: str | None = None
    ) -> AuthSession:
        if email in self.passwords:
            raise IdentityProviderError("User already registered")
        self.passwords[email] = password
        return self._session(email)

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)


@dataclass
class CurrentUserSwitch:
    """Which user the overridden auth dependency reports."""

    user: TokenUser | None = None
    known: dict[str, TokenUser] = field(default_factory=dict)

    def login_as(self, name: str) -> TokenUser:
        if name not in self.known:
            self.known[name] = TokenUser(
                id=uuid4(),
                email=f"{name}@example.com",
                full_name=name.title(),
                token=f"token-{name}",
            )
        self.user = self.known[name]
        return self.user

    def logout(self) -> None:
        self.user = None


@pytest.fixture(autouse=True)
def _clear_provisioned_cache() -> Generator[None, None, None]:
    ProfileService.clear_provisioned_cache()
    yield
    ProfileService.clear_provisioned_cache()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def gotrue() -> FakeGoTrue:
    return FakeGoTrue()


@pytest.fixture
def users() -> CurrentUserSwitch:
    return CurrentUserSwitch()


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    storage: FakeStorage,
    gotrue: FakeGoTrue,
    users: CurrentUserSwitch,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Test client wired to the in-memory database.

    The auth dependencies report ``users.user``; call ``users.login_as(name)``
    to switch identity between requests.
    """
    from api.dependencies import services as deps
    from api.dependencies.auth import get_current_user, get_optional_user
    from core.exceptions import AuthenticationError
    from domain.services.attachment_service import AttachmentService
    from domain.services.comment_service import CommentService
    from domain.services.notification_service import NotificationService
    from domain.services.task_service import TaskService
    from domain.services.team_service import TeamService
    from domain.services.workspace_service import WorkspaceService
    from infrastructure.database.session import get_async_session
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    def uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    notifications = NotificationService(uow_factory)
    attachments = AttachmentService(uow_factory, storage=storage)  # type: ignore[arg-type]
    overrides: dict[Any, Any] = {
        deps.get_storage: lambda: storage,
        deps.get_gotrue_client: lambda: gotrue,
        deps.get_notification_service: lambda: notifications,
        deps.get_profile_service: lambda: ProfileService(uow_factory),
        deps.get_task_service: lambda: TaskService(
            uow_factory, notification_service=notifications
        ),
        deps.get_attachment_service: lambda: attachments,
        deps.get_comment_service: lambda: CommentService(
            uow_factory, attachment_service=attachments
        ),
        deps.get_team_service: lambda: TeamService(uow_factory),
        deps.get_workspace_service: lambda: WorkspaceService(
            uow_factory, notification_service=notifications
        ),
    }

    async def override_get_current_user() -> TokenUser:
        if users.user is None:
            raise AuthenticationError()
        return users.user

    async def override_get_optional_user() -> TokenUser | None:
        return users.user

    async def override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides.update(overrides)
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_optional_user] = override_get_optional_user
    app.dependency_overrides[get_async_session] = override_get_async_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def seed_profile(session_factory: async_sessionmaker[AsyncSession], users: CurrentUserSwitch):
    """Insert a profile row for a named user without going through the API."""

    async def _seed(name: str, role: Role = Role.CAN_BO) -> TokenUser:
        previous = users.user
        user = users.login_as(name)
        users.user = previous
        async with session_factory() as session:
            session.add(
                ProfileModel(
                    id=user.id,
                    email=user.email,
                    full_name=user.full_name,
                    role=role.value_str,
                )
            )
            await session.commit()
        return user

    return _seed
