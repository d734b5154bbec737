"""create_actor_table

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates the actor relation:
- actor_id: dense integer primary key
- actor_user: user id, NULL for anonymous actors, unique when present
- actor_name: user name or canonical IP literal, unique
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "a1c3e5f7b9d2"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the actor table."""
    op.create_table(
        "actor",
        sa.Column("actor_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("actor_user", sa.Integer(), nullable=True),
        sa.Column("actor_name", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("actor_id"),
        sa.UniqueConstraint("actor_user"),
        sa.UniqueConstraint("actor_name"),
    )


def downgrade() -> None:
    """Drop the actor table."""
    op.drop_table("actor")
