"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies.services import get_profile_service
from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode
from domain.services.profile_service import ProfileService
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    access_token: Annotated[
        str | None,
        Cookie(alias=settings.access_token_cookie),
    ] = None,
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    The bearer header wins over the session cookie set by ``POST /api/auth``.

    Raises:
        AuthenticationError: If no token provided or token is invalid
    """
    token = credentials.credentials if credentials else access_token
    if not token:
        raise AuthenticationError(
            message="Unauthorized",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    user = await auth_provider.validate_token(token)

    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return user


async def get_optional_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
    access_token: Annotated[
        str | None,
        Cookie(alias=settings.access_token_cookie),
    ] = None,
) -> TokenUser | None:
    """
    Dependency to get the current user if authenticated.

    Returns:
        TokenUser if authenticated, None otherwise (no exception raised)
    """
    token = credentials.credentials if credentials else access_token
    if not token:
        return None

    return await auth_provider.validate_token(token)


async def get_initialized_user(
    user: Annotated[TokenUser, Depends(get_current_user)],
    profile_service: ProfileService = Depends(get_profile_service),
) -> TokenUser:
    """Authenticated user whose profile row is guaranteed to exist."""
    await profile_service.ensure_profile(user.id, user.email, user.full_name)
    return user


# Type aliases for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_initialized_user)]
OptionalUser = Annotated[TokenUser | None, Depends(get_optional_user)]
