"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from domain.entities.role import Role


@dataclass
class Profile:
    """Domain entity for a user profile.

    The id is the identity provider's user id. Profiles are provisioned
    lazily the first time an authenticated user asks for their own profile.
    """

    id: UUID = field(default_factory=uuid4)
    email: str | None = None
    full_name: str | None = None
    role: Role = Role.CAN_BO
    department_id: UUID | None = None
    team_id: UUID | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
