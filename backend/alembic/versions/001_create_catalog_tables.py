"""Create users, records, details and tracks tables

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Initial schema for the record shop catalog and its accounts.
How:   Explicit column definitions, kept in step with recordshop/models.

Foreign-key policy:
    details.record_id → records.id   ON UPDATE CASCADE, ON DELETE SET NULL
    tracks.detail_id  → details.id   ON UPDATE CASCADE, ON DELETE SET NULL
    Deleting a record leaves its details and tracks in place with NULL
    back-references.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )

    op.create_table(
        "records",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), server_default=sa.text("''"), nullable=False),
        sa.Column("artist", sa.String(255), server_default=sa.text("''"), nullable=False),
        sa.Column("genre", sa.String(255), server_default=sa.text("''"), nullable=False),
        sa.Column("style", sa.String(255), server_default=sa.text("''"), nullable=False),
        sa.Column("release_year", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "details",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("record_id", sa.Integer(), nullable=True),
        sa.Column(
            "album_image_url", sa.String(1024), server_default=sa.text("''"), nullable=False
        ),
        sa.Column("youtube_title", sa.String(255), server_default=sa.text("''"), nullable=False),
        sa.Column(
            "youtube_video_id", sa.String(64), server_default=sa.text("''"), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ["record_id"], ["records.id"], onupdate="CASCADE", ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_details_record_id", "details", ["record_id"])

    op.create_table(
        "tracks",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("detail_id", sa.Integer(), nullable=True),
        sa.Column("track_number", sa.Integer(), nullable=False),
        sa.Column("track_title", sa.String(255), server_default=sa.text("''"), nullable=False),
        sa.ForeignKeyConstraint(
            ["detail_id"], ["details.id"], onupdate="CASCADE", ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tracks_detail_id", "tracks", ["detail_id"])


def downgrade() -> None:
    op.drop_index("ix_tracks_detail_id", table_name="tracks")
    op.drop_table("tracks")
    op.drop_index("ix_details_record_id", table_name="details")
    op.drop_table("details")
    op.drop_table("records")
    op.drop_table("users")
