"""player_summaries and name_history

Revision ID: 0001_friend_tables
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from steamfriends.domain.errors import StorageError

revision = "0001_friend_tables"
down_revision = None
branch_labels = None
depends_on = None

EXPECTED_COLUMNS = {
    "player_summaries": {
        "account_id",
        "persona_name",
        "profile_url",
        "friend_since",
        "updated_at",
        "removed_at",
    },
    "name_history": {"account_id", "persona_name", "updated_at"},
}


def _check_adopted_table(inspector: sa.Inspector, table: str) -> None:
    present = {column["name"] for column in inspector.get_columns(table)}
    missing = EXPECTED_COLUMNS[table] - present
    if missing:
        raise StorageError(
            f"Existing table {table} has an incompatible layout "
            f"(missing columns: {', '.join(sorted(missing))}); "
            "move the database aside or point DATABASE_URI elsewhere"
        )


def upgrade() -> None:
    # databases written before migrations existed already have the tables
    inspector = sa.inspect(op.get_bind())
    existing = set(inspector.get_table_names())
    for table in EXPECTED_COLUMNS.keys() & existing:
        _check_adopted_table(inspector, table)

    if "player_summaries" not in existing:
        op.create_table(
            "player_summaries",
            sa.Column("account_id", sa.Integer(), autoincrement=False, nullable=False),
            sa.Column("persona_name", sa.Text(), nullable=False),
            sa.Column("profile_url", sa.Text(), nullable=False),
            sa.Column("friend_since", sa.TIMESTAMP(), nullable=False),
            sa.Column(
                "updated_at",
                sa.TIMESTAMP(),
                server_default=sa.func.current_timestamp(),
                nullable=False,
            ),
            sa.Column("removed_at", sa.TIMESTAMP(), nullable=True),
            sa.PrimaryKeyConstraint("account_id", name="pk_player_summaries"),
        )

    if "name_history" not in existing:
        op.create_table(
            "name_history",
            sa.Column("account_id", sa.Integer(), autoincrement=False, nullable=False),
            sa.Column("persona_name", sa.Text(), nullable=False),
            sa.Column(
                "updated_at",
                sa.TIMESTAMP(),
                server_default=sa.func.current_timestamp(),
                nullable=False,
            ),
            sa.PrimaryKeyConstraint("account_id", "persona_name", name="pk_name_history"),
        )


def downgrade() -> None:
    op.drop_table("name_history")
    op.drop_table("player_summaries")
