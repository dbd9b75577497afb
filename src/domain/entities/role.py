"""Role hierarchy shared by profiles and workspace memberships."""

from enum import IntEnum


class Role(IntEnum):
    """Five-level seniority order. Higher value = more senior.

    The integer value is the role's rank, so ``>=`` comparisons are
    authorization checks:
        actor.role >= Role.DOI_PHO  # True for every rank except can_bo
    """

    CAN_BO = 1
    DOI_PHO = 2
    DOI_TRUONG = 3
    PHO_PHONG = 4
    TRUONG_PHONG = 5

    @property
    def value_str(self) -> str:
        """Storage/wire form, e.g. ``"truong_phong"``."""
        return self.name.lower()

    @classmethod
    def from_str(cls, value: str) -> "Role":
        """Parse the storage/wire form. Raises ValueError for unknown roles."""
        try:
            return cls[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown role: {value}") from None


ROLE_VALUES: tuple[str, ...] = tuple(role.value_str for role in Role)


def rank(role: Role) -> int:
    """Integer position of a role in the seniority order (1..5)."""
    return int(role)


def has_rank(user_role: Role, required_role: Role) -> bool:
    """Check if a role is at least as senior as the required one."""
    return rank(user_role) >= rank(required_role)
