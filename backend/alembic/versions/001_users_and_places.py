"""Users and places tables.

Revision ID: 001_users_and_places
Revises:
Create Date: 2026-10-19

users.places is the JSON list of owned place ids; places.creator_id points
back at users.id. users.version backs the ORM's optimistic concurrency check.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_users_and_places"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("image", sa.String(1024), nullable=True),
        sa.Column("places", sa.JSON(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "places",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("image", sa.String(1024), nullable=True),
        sa.Column(
            "creator_id", sa.Uuid(),
            sa.ForeignKey("users.id", name="places_creator_id_fkey"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_places_creator_id", "places", ["creator_id"])


def downgrade() -> None:
    op.drop_index("ix_places_creator_id", table_name="places")
    op.drop_table("places")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
