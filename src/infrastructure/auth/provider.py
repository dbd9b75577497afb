"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol
from uuid import UUID


@dataclass
class TokenUser:
    """Identity carried by a verified access token.

    ``full_name`` comes from the signup metadata and is only used to seed the
    profile the first time the user is seen.
    """

    id: UUID
    email: str
    full_name: Optional[str] = None
    token: Optional[str] = None


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Validate an access token.

        Args:
            token: The bearer or cookie token to validate

        Returns:
            TokenUser if valid, None if invalid
        """
        ...

    def create_token(self, user: TokenUser) -> str:
        """Create a token for a user (local/test signing only)."""
        ...
