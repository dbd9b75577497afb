"""Object storage protocol."""

from typing import Protocol


class IObjectStorage(Protocol):
    """Private object store for task attachments."""

    @property
    def is_configured(self) -> bool:
        """Whether server-side credentials are available."""
        ...

    async def ensure_bucket(self) -> None:
        """Create the private bucket if it does not exist yet."""
        ...

    async def upload(self, path: str, data: bytes, content_type: str | None) -> None:
        """Store ``data`` under ``path``. Never overwrites an existing object."""
        ...

    async def create_signed_url(self, path: str, expires_in: int) -> str:
        """Return a URL that grants read access to ``path`` for ``expires_in`` seconds."""
        ...

    async def remove(self, paths: list[str]) -> None:
        """Delete objects."""
        ...
