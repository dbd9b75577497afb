"""Supabase Storage REST adapter.

Uses the service-role key, so it must only ever run server-side. The bucket
is private; objects are reachable only through signed URLs.
"""

import logging
from typing import Any

import httpx

from core.config import settings
from core.exceptions import BackendConfigurationError, StorageError

logger = logging.getLogger(__name__)


class SupabaseStorage:
    """IObjectStorage backed by the Supabase Storage API."""

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        service_key: str = settings.supabase_service_role_key,
        bucket: str = settings.storage_bucket,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key
        self._bucket = bucket
        self._timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self._base_url and self._service_key)

    def _client(self) -> httpx.AsyncClient:
        if not self.is_configured:
            raise BackendConfigurationError(
                "Storage is not configured (SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY)"
            )
        return httpx.AsyncClient(
            base_url=f"{self._base_url}/storage/v1",
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "apikey": self._service_key,
                "Authorization": f"Bearer {self._service_key}",
            },
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.exception("Storage request %s %s failed", method, path)
            raise StorageError(f"Storage unreachable: {e}") from e

    @staticmethod
    def _raise_for_error(response: httpx.Response) -> None:
        if not response.is_error:
            return
        try:
            body = response.json()
            message = body.get("message") or body.get("error") or response.text
        except ValueError:
            message = response.text
        raise StorageError(message or f"Storage returned {response.status_code}")

    async def ensure_bucket(self) -> None:
        """Create the private bucket on first use."""
        response = await self._request("GET", f"/bucket/{self._bucket}")
        if response.is_success:
            return

        response = await self._request(
            "POST",
            "/bucket",
            json={"id": self._bucket, "name": self._bucket, "public": False},
        )
        # A concurrent request may have created it in between
        if response.is_error and "already exists" in response.text.lower():
            return
        self._raise_for_error(response)
        logger.info("Created storage bucket %s", self._bucket)

    async def upload(self, path: str, data: bytes, content_type: str | None) -> None:
        response = await self._request(
            "POST",
            f"/object/{self._bucket}/{path}",
            content=data,
            headers={
                "Content-Type": content_type or "application/octet-stream",
                "x-upsert": "false",
            },
        )
        self._raise_for_error(response)

    async def create_signed_url(self, path: str, expires_in: int) -> str:
        response = await self._request(
            "POST",
            f"/object/sign/{self._bucket}/{path}",
            json={"expiresIn": expires_in},
        )
        self._raise_for_error(response)
        body = response.json()
        signed = body.get("signedURL") or body.get("signedUrl")
        if not signed:
            raise StorageError("Storage did not return a signed URL")
        return f"{self._base_url}/storage/v1{signed}"

    async def remove(self, paths: list[str]) -> None:
        if not paths:
            return
        response = await self._request(
            "DELETE",
            f"/object/{self._bucket}",
            json={"prefixes": paths},
        )
        self._raise_for_error(response)
