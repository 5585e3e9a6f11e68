"""
Record Shop Backend — Catalog SQLAlchemy Models
=================================================

What:  ORM models for the `records`, `details` and `tracks` tables.
How:   Inherit from the shared DeclarativeBase; Alembic reads Base.metadata.
Who:   Used by RecordRepository for CRUD and the detail join.

Table relationships:
    records 1 ── * details 1 ── * tracks

    details.record_id → records.id   ON UPDATE CASCADE  ON DELETE SET NULL
    tracks.detail_id  → details.id   ON UPDATE CASCADE  ON DELETE SET NULL

    Deleting a record never deletes its details or tracks; they stay behind
    with a NULL back-reference. No ORM relationship() is declared, so the
    session never tries to cascade anything itself; the database applies
    SET NULL.

    Detail and Track rows are loaded by data-import steps outside this
    service; the API only reads them.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from recordshop.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(Base):
    """
    A catalog entry (album).

    Lifecycle:
        1. Created by RecordService.create_record (created_at set here, never again)
        2. Fully replaced by RecordService.update_record (updated_at set each time)
        3. Removed by RecordService.delete_record

    Query Patterns:
        - Catalog listing: ORDER BY release_year, artist, title
        - Exact lookups on title and on artist, same ordering
    """

    __tablename__ = "records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=text("''")
    )
    artist: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=text("''")
    )
    genre: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=text("''")
    )
    style: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=text("''")
    )
    release_year: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return (
            f"<Record(id={self.id}, title='{self.title}', artist='{self.artist}', "
            f"release_year={self.release_year})>"
        )


class Detail(Base):
    """Media metadata for a record: cover art and an associated video."""

    __tablename__ = "details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    record_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("records.id", onupdate="CASCADE", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    album_image_url: Mapped[str] = mapped_column(
        String(1024), nullable=False, default="", server_default=text("''")
    )
    youtube_title: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=text("''")
    )
    youtube_video_id: Mapped[str] = mapped_column(
        String(64), nullable=False, default="", server_default=text("''")
    )

    def __repr__(self) -> str:
        return f"<Detail(id={self.id}, record_id={self.record_id})>"


class Track(Base):
    """One entry in a detail's track listing."""

    __tablename__ = "tracks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    detail_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("details.id", onupdate="CASCADE", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    track_number: Mapped[int] = mapped_column(Integer, nullable=False)
    track_title: Mapped[str] = mapped_column(
        String(255), nullable=False, default="", server_default=text("''")
    )

    def __repr__(self) -> str:
        return f"<Track(id={self.id}, detail_id={self.detail_id}, number={self.track_number})>"
