"""Unit tests for authentication dependencies."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from api.dependencies.auth import get_current_user, get_initialized_user, get_optional_user
from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWKSCache, JWTAuthProvider
from infrastructure.auth.provider import TokenUser


@pytest.fixture
def mock_auth_provider() -> JWTAuthProvider:
    return JWTAuthProvider(
        secret_key="test-secret", algorithm="HS256", expire_minutes=30, jwks=JWKSCache(None)
    )


@pytest.fixture
def test_token_user() -> TokenUser:
    return TokenUser(id=uuid4(), email="test@example.com", full_name="Test User")


# --- get_current_user ---


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_returns_user_with_valid_token(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = await get_current_user(credentials, mock_auth_provider)

        assert result.email == test_token_user.email
        assert result.id == test_token_user.id

    @pytest.mark.asyncio
    async def test_accepts_session_cookie(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)

        result = await get_current_user(None, mock_auth_provider, access_token=token)

        assert result.id == test_token_user.id

    @pytest.mark.asyncio
    async def test_bearer_wins_over_cookie(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        other = TokenUser(id=uuid4(), email="other@example.com")
        credentials = HTTPAuthorizationCredentials(
            scheme="Bearer", credentials=mock_auth_provider.create_token(test_token_user)
        )

        result = await get_current_user(
            credentials, mock_auth_provider, access_token=mock_auth_provider.create_token(other)
        )

        assert result.id == test_token_user.id

    @pytest.mark.asyncio
    async def test_raises_when_no_credentials(self, mock_auth_provider: JWTAuthProvider):
        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(None, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.UNAUTHORIZED
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_raises_when_invalid_token(self, mock_auth_provider: JWTAuthProvider):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid.jwt.token")

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(credentials, mock_auth_provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_raises_when_expired_token(self, test_token_user: TokenUser):
        # Negative expiry produces an already-expired token
        provider = JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=-1)
        token = provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        normal_provider = JWTAuthProvider(
            secret_key="test-secret", algorithm="HS256", expire_minutes=30
        )

        with pytest.raises(AuthenticationError) as exc_info:
            await get_current_user(credentials, normal_provider)

        assert exc_info.value.error_code == ErrorCode.INVALID_TOKEN


# --- get_optional_user ---


class TestGetOptionalUser:
    @pytest.mark.asyncio
    async def test_returns_user_with_valid_token(
        self, mock_auth_provider: JWTAuthProvider, test_token_user: TokenUser
    ):
        token = mock_auth_provider.create_token(test_token_user)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        result = await get_optional_user(credentials, mock_auth_provider)

        assert result is not None
        assert result.id == test_token_user.id

    @pytest.mark.asyncio
    async def test_returns_none_without_token(self, mock_auth_provider: JWTAuthProvider):
        assert await get_optional_user(None, mock_auth_provider) is None

    @pytest.mark.asyncio
    async def test_returns_none_with_invalid_token(self, mock_auth_provider: JWTAuthProvider):
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="bad")
        assert await get_optional_user(credentials, mock_auth_provider) is None


# --- get_initialized_user ---


class TestGetInitializedUser:
    @pytest.mark.asyncio
    async def test_provisions_profile(self, test_token_user: TokenUser):
        profile_service = AsyncMock()

        result = await get_initialized_user(test_token_user, profile_service)

        assert result is test_token_user
        profile_service.ensure_profile.assert_awaited_once_with(
            test_token_user.id, test_token_user.email, test_token_user.full_name
        )
