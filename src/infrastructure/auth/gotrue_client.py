"""Thin async client for the Supabase Auth (GoTrue) REST API.

Only the password flows the API relays are implemented: sign in, sign up
and sign out. Token verification happens locally in ``JWTAuthProvider``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from core.config import settings
from core.exceptions import BackendConfigurationError, IdentityProviderError

logger = logging.getLogger(__name__)


@dataclass
class AuthSession:
    """Session returned by the identity provider.

    ``access_token`` is None after a signup that still needs email
    confirmation.
    """

    user: dict[str, Any] = field(default_factory=dict)
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"Identity provider returned {response.status_code}"
    return (
        body.get("error_description")
        or body.get("msg")
        or body.get("message")
        or body.get("error")
        or f"Identity provider returned {response.status_code}"
    )


class GoTrueClient:
    """Relays password authentication to Supabase Auth."""

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        api_key: str = settings.supabase_anon_key,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    def _ensure_configured(self) -> None:
        if not self._base_url or not self._api_key:
            raise BackendConfigurationError(
                "Identity provider is not configured (SUPABASE_URL / SUPABASE_ANON_KEY)"
            )

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> httpx.Response:
        self._ensure_configured()
        headers = {"apikey": self._api_key}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=json, params=params, headers=headers)
        except httpx.HTTPError as e:
            logger.exception("Identity provider request to %s failed", path)
            raise IdentityProviderError(f"Identity provider unreachable: {e}") from e

        if response.is_error:
            raise IdentityProviderError(_error_message(response))
        return response

    @staticmethod
    def _to_session(body: dict[str, Any]) -> AuthSession:
        # Signup without auto-confirm returns the bare user object
        user = body.get("user") or (dict(body) if "id" in body else {})
        return AuthSession(
            user=user,
            access_token=body.get("access_token"),
            refresh_token=body.get("refresh_token"),
            expires_in=body.get("expires_in"),
        )

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Exchange email and password for a session."""
        response = await self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return self._to_session(response.json())

    async def sign_up(
        self, email: str, password: str, full_name: str | None = None
    ) -> AuthSession:
        """Register a new user; ``full_name`` is stored as user metadata."""
        payload: dict[str, Any] = {"email": email, "password": password}
        if full_name:
            payload["data"] = {"full_name": full_name}
        response = await self._post("/auth/v1/signup", json=payload)
        return self._to_session(response.json())

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind ``access_token``."""
        await self._post("/auth/v1/logout", access_token=access_token)
