"""Initial schema: users, galaxies and planets.

Revision ID: 20250301000000
Revises:
Create Date: 2025-03-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20250301000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="user"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "galaxies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("diameter_ly", sa.Float(), nullable=True),
        sa.Column("mass_suns", sa.Float(), nullable=True),
        sa.Column("distance_from_earth_ly", sa.Float(), nullable=True),
        sa.Column("discovered_year", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_galaxies_name"), "galaxies", ["name"], unique=False)

    op.create_table(
        "planets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("diameter_km", sa.Float(), nullable=False, server_default="0"),
        sa.Column("mass_kg", sa.Float(), nullable=False, server_default="0"),
        sa.Column("orbital_period_days", sa.Float(), nullable=False, server_default="0"),
        sa.Column("discovered_year", sa.Integer(), nullable=True),
        sa.Column("galaxy_id", sa.Integer(), nullable=True),
        sa.Column("has_life", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_habitable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["galaxy_id"], ["galaxies.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_planets_name"), "planets", ["name"], unique=False)
    op.create_index(op.f("ix_planets_galaxy_id"), "planets", ["galaxy_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_planets_galaxy_id"), table_name="planets")
    op.drop_index(op.f("ix_planets_name"), table_name="planets")
    op.drop_table("planets")
    op.drop_index(op.f("ix_galaxies_name"), table_name="galaxies")
    op.drop_table("galaxies")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
