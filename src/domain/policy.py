"""Authorization and visibility rules.

Everything in here is a pure decision over already-loaded entities, so the
services can run these checks before issuing any mutation.
"""

from uuid import UUID

from core.exceptions import ForbiddenError, NotAMemberError
from domain.entities.role import Role, has_rank
from domain.entities.task import Task
from domain.entities.workspace import WorkspaceMember

# Lowest membership rank allowed to add people to a workspace.
MIN_ROLE_TO_ADD_MEMBERS = Role.DOI_PHO

# Workspace creators are inserted at this rank.
WORKSPACE_CREATOR_ROLE = Role.TRUONG_PHONG

SEARCH_MAX_LENGTH = 200
HAS_KINDS = frozenset({"comments", "attachments"})


def check_can_add_member(
    workspace_id: UUID,
    actor: WorkspaceMember | None,
    target_role: Role,
) -> None:
    """Raise unless ``actor`` may add a member with ``target_role``.

    The actor must already belong to the workspace, must not hold the lowest
    rank, and can never grant a rank above their own.
    """
    if actor is None:
        raise NotAMemberError(str(workspace_id))
    if not has_rank(actor.role, MIN_ROLE_TO_ADD_MEMBERS):
        raise ForbiddenError(
            f"Adding members requires at least the {MIN_ROLE_TO_ADD_MEMBERS.value_str} role"
        )
    if not has_rank(actor.role, target_role):
        raise ForbiddenError("You cannot add a member with a role higher than your own")


def can_access_task(user_id: UUID, task: Task) -> bool:
    """A task is visible and mutable only by its creator or its assignee."""
    return user_id == task.created_by or user_id == task.assigned_to


def sanitize_search_text(raw: str | None) -> str | None:
    """Normalize free-text search input.

    Commas would split the title/description OR-clause, so they become
    spaces. The result is capped at ``SEARCH_MAX_LENGTH`` characters.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    return text.replace(",", " ")[:SEARCH_MAX_LENGTH]


def parse_has(raw: str | None) -> frozenset[str]:
    """Parse a comma-separated ``has`` filter, keeping only known kinds."""
    if not raw:
        return frozenset()
    wanted = {part.strip() for part in raw.split(",")}
    return frozenset(wanted & HAS_KINDS)
