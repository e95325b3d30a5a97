"""create venues and concerts

Revision ID: sl001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "sl001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "venues",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("longitude", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_venues_slug", "venues", ["slug"], unique=True)

    op.create_table(
        "concerts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("artist", sa.String(), nullable=False),
        sa.Column("artist_slug", sa.String(), nullable=False),
        sa.Column("venue_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(), nullable=False, server_default="concert"),
        sa.Column("event_name", sa.String(), nullable=True),
        sa.Column("setlist", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("gallery", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["venue_id"], ["venues.id"], ondelete="RESTRICT"),
    )
    op.create_index("ix_concerts_date", "concerts", ["date"])
    op.create_index("ix_concerts_artist_slug", "concerts", ["artist_slug"])
    op.create_index("ix_concerts_venue_id", "concerts", ["venue_id"])


def downgrade() -> None:
    op.drop_index("ix_concerts_venue_id", table_name="concerts")
    op.drop_index("ix_concerts_artist_slug", table_name="concerts")
    op.drop_index("ix_concerts_date", table_name="concerts")
    op.drop_table("concerts")
    op.drop_index("ix_venues_slug", table_name="venues")
    op.drop_table("venues")
