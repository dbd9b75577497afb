"""Team domain entities."""

import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

JOIN_CODE_LENGTH = 8
_JOIN_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_join_code(length: int = JOIN_CODE_LENGTH) -> str:
    """Generate an unguessable team join code."""
    return "".join(secrets.choice(_JOIN_CODE_ALPHABET) for _ in range(length))


@dataclass
class Team:
    """Domain entity for a team.

    The join code is fixed at creation time; anyone presenting it may join.
    """

    name: str
    id: UUID = field(default_factory=uuid4)
    department_id: UUID | None = None
    join_code: str | None = field(default_factory=generate_join_code)
    created_at: datetime = field(default_factory=datetime.utcnow)
