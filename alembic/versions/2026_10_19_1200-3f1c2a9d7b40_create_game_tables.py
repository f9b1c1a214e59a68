# pyright: reportAttributeAccessIssue=false, reportUndefinedVariable=false
"""create_game_tables

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel.sql.sqltypes

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ATTRIBUTE = sa.Enum("FIRE", "WATER", "GRASS", name="attribute")
RARITY = sa.Enum("SSR", "SR", "R", name="rarity")
CARD_CATEGORY = sa.Enum(
    "BEAST", "WARRIOR", "NATURE", "MAGE", "ELEMENTAL", "GOLEM", name="cardcategory"
)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "players",
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("experience", sa.Integer(), nullable=False),
        sa.Column("currency", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("username"),
    )
    op.create_index(op.f("ix_players_username"), "players", ["username"], unique=False)

    op.create_table(
        "owned_cards",
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("attribute", ATTRIBUTE, nullable=False),
        sa.Column("rarity", RARITY, nullable=False),
        sa.Column("category", CARD_CATEGORY, nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column("base_power", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["username"], ["players.username"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_owned_cards_id"), "owned_cards", ["id"], unique=False)
    op.create_index(op.f("ix_owned_cards_username"), "owned_cards", ["username"], unique=False)

    op.create_table(
        "match_records",
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("opponent_label", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("wins", sa.Integer(), nullable=False),
        sa.Column("losses", sa.Integer(), nullable=False),
        sa.Column("played_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["username"], ["players.username"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_match_records_id"), "match_records", ["id"], unique=False)
    op.create_index(
        op.f("ix_match_records_username"), "match_records", ["username"], unique=False
    )
    op.create_index(
        op.f("ix_match_records_played_at"), "match_records", ["played_at"], unique=False
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("match_records")
    op.drop_table("owned_cards")
    op.drop_table("players")

    bind = op.get_bind()
    CARD_CATEGORY.drop(bind, checkfirst=True)
    RARITY.drop(bind, checkfirst=True)
    ATTRIBUTE.drop(bind, checkfirst=True)
