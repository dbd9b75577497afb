"""JWT authentication provider implementation.

Access tokens are issued by Supabase Auth. Hosted projects sign them with
ES256 and publish the public keys as a JWKS document; local stacks and the
test-suite sign them with a shared HS256 secret.

Relevant claims:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "aud": "authenticated",
        "user_metadata": { "full_name": "Nguyen Van A" },
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = logging.getLogger(__name__)


class JWKSCache:
    """kid -> JWK mapping, fetched lazily and refetched on an unknown kid."""

    def __init__(
        self, url: str | None, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._url = url
        self._transport = transport
        self._keys: dict[str, dict[str, Any]] | None = None

    async def get(self, kid: str) -> dict[str, Any] | None:
        keys = await self._load()
        if kid not in keys:
            # Signing key may have rotated since the last fetch
            self._keys = None
            keys = await self._load()
        return keys.get(kid)

    async def _load(self) -> dict[str, dict[str, Any]]:
        if self._keys is not None:
            return self._keys
        if not self._url:
            return {}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(self._url, timeout=10.0)
                response.raise_for_status()
        except httpx.HTTPError:
            logger.exception("Failed to fetch JWKS from %s", self._url)
            return {}

        self._keys = {
            key["kid"]: key for key in response.json().get("keys", []) if key.get("kid")
        }
        logger.info("Fetched %d JWKS keys", len(self._keys))
        return self._keys


_jwks = JWKSCache(settings.supabase_jwks_url)


def _full_name_from(payload: dict[str, Any]) -> Optional[str]:
    metadata = payload.get("user_metadata") or {}
    return metadata.get("full_name") or metadata.get("name") or payload.get("name")


class JWTAuthProvider:
    """JWT-based authentication provider (ES256 via JWKS, HS256 via secret)."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
        jwks: JWKSCache = _jwks,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes
        self._jwks = jwks

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate a JWT and extract the caller's identity.

        Returns:
            TokenUser if valid, None if malformed, expired or badly signed
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") == "ES256":
                payload = await self._decode_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
        except JWTError:
            return None

        if payload is None:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not email:
            return None

        try:
            parsed_id = UUID(user_id)
        except ValueError:
            return None

        return TokenUser(
            id=parsed_id,
            email=email,
            full_name=_full_name_from(payload),
            token=token,
        )

    async def _decode_es256(self, token: str, header: dict) -> Optional[dict]:
        kid = header.get("kid")
        if not kid:
            return None

        key_data = await self._jwks.get(kid)
        if not key_data:
            logger.warning("JWKS key not found for kid=%s", kid)
            return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm="ES256"),
            algorithms=["ES256"],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Sign an HS256 token for a user (local development and tests)."""
        payload: dict = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": datetime.utcnow() + timedelta(minutes=self._expire_minutes),
            "user_metadata": {"full_name": user.full_name},
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
