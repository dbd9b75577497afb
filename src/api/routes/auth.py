"""Authentication API routes.

Password flows are relayed to the identity provider; the resulting session
tokens are handed back as HTTP-only cookies so browser clients never touch
them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies.auth import OptionalUser, get_current_user
from api.dependencies.services import get_gotrue_client, get_profile_service
from api.schemas.profile import AuthRequest, AuthResponse, AuthUser, MeResponse, ProfileResponse
from core.config import settings
from core.exceptions import ValidationError
from core.rate_limit import limiter
from domain.services.profile_service import ProfileService
from infrastructure.auth.gotrue_client import AuthSession, GoTrueClient
from infrastructure.auth.provider import TokenUser

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookies(response: Response, session: AuthSession) -> None:
    if not session.access_token:
        return
    cookie_options = {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }
    response.set_cookie(
        settings.access_token_cookie,
        session.access_token,
        max_age=session.expires_in,
        **cookie_options,  # type: ignore[arg-type]
    )
    if session.refresh_token:
        response.set_cookie(
            settings.refresh_token_cookie,
            session.refresh_token,
            **cookie_options,  # type: ignore[arg-type]
        )


def _clear_session_cookies(response: Response) -> None:
    response.delete_cookie(settings.access_token_cookie, path="/")
    response.delete_cookie(settings.refresh_token_cookie, path="/")


@router.get(
    "",
    response_model=MeResponse,
    summary="Get my identity and profile",
    responses={401: {"description": "No valid session"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: Annotated[TokenUser, Depends(get_current_user)],
    service: ProfileService = Depends(get_profile_service),
) -> MeResponse:
    """Resolve the caller. A profile at the lowest rank is created on first call."""
    profile = await service.get_or_provision(user.id, user.email, user.full_name)
    return MeResponse(
        user=AuthUser(id=user.id, email=user.email),
        profile=ProfileResponse.from_entity(profile),
    )


@router.post(
    "",
    response_model=AuthResponse,
    summary="Login, signup or logout",
    responses={
        400: {"description": "Invalid payload or rejected credentials"},
        500: {"description": "Identity provider not configured"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def post_auth(
    request: Request,
    response: Response,
    body: AuthRequest,
    user: OptionalUser,
    client: GoTrueClient = Depends(get_gotrue_client),
) -> AuthResponse:
    """
    `action` selects the flow:

    - `login`: email + password, sets session cookies
    - `signup`: email + password (+ `full_name`), sets cookies when the
      provider returns a session right away
    - `logout`: revokes the current session if any and clears cookies
    """
    if body.action == "logout":
        if user is not None and user.token:
            await client.sign_out(user.token)
        _clear_session_cookies(response)
        return AuthResponse()

    if not body.email or not body.password:
        raise ValidationError("Missing email/password")

    if body.action == "login":
        session = await client.sign_in_with_password(str(body.email), body.password)
    else:
        session = await client.sign_up(str(body.email), body.password, body.full_name)

    _set_session_cookies(response, session)
    return AuthResponse(user=session.user or None)
