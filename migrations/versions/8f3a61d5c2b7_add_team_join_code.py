"""add_team_join_code

Revision ID: 8f3a61d5c2b7
Revises: 4b1d9c2e7a10
Create Date: 2026-09-29 16:40:02.771935

"""
import secrets
import string
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8f3a61d5c2b7'
down_revision: Union[str, Sequence[str], None] = '4b1d9c2e7a10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ALPHABET = string.ascii_uppercase + string.digits


def _code() -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(8))


def upgrade() -> None:
    """Add teams.join_code and give every existing team a code."""
    op.add_column('teams', sa.Column('join_code', sa.String(length=64), nullable=True))

    bind = op.get_bind()
    teams = sa.table('teams', sa.column('id', sa.UUID()), sa.column('join_code', sa.String()))
    team_ids = [row.id for row in bind.execute(sa.select(teams.c.id))]
    used: set[str] = set()
    for team_id in team_ids:
        code = _code()
        while code in used:
            code = _code()
        used.add(code)
        bind.execute(teams.update().where(teams.c.id == team_id).values(join_code=code))

    op.create_unique_constraint('uq_teams_join_code', 'teams', ['join_code'])


def downgrade() -> None:
    """Remove teams.join_code."""
    op.drop_constraint('uq_teams_join_code', 'teams', type_='unique')
    op.drop_column('teams', 'join_code')
