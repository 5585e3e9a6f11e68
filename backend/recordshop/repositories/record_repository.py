"""
Record Shop Backend — Record Repository (Persistence Gateway)
===============================================================

What:  All SQL issued against the `records`, `details` and `tracks` tables.
How:   Async SQLAlchemy Core/ORM statements on the request's AsyncSession.
       Writes are flushed, never committed here; get_db_session commits at
       the end of the request.
Who:   Called only by RecordService. Holds no business rules.

Query inventory:
    create_record   INSERT, returns row with generated id and created_at
    list_records    SELECT ... ORDER BY release_year, artist, title
    get_by_title    same ordering, WHERE title = :title
    get_by_artist   same ordering, WHERE artist = :artist
    get_detail      records JOIN details JOIN tracks WHERE records.title = :title
    update_record   UPDATE ... WHERE id = :id   (rowcount checked)
    delete_record   DELETE ... WHERE id = :id   (rowcount checked)

Error Handling:
    SQLAlchemyError → DatabaseError (opaque to callers, logged here)
    zero affected rows on update/delete → NotFoundError
"""

import logging
from typing import Any, List, Mapping

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recordshop.exceptions import DatabaseError, NotFoundError
from recordshop.models.record import Detail, Record, Track, utcnow
from recordshop.schemas.record import DetailResponse, TrackInfo

logger = logging.getLogger(__name__)

CATALOG_ORDER = (Record.release_year.asc(), Record.artist.asc(), Record.title.asc())

# Columns a full-replace update overwrites; created_at is never among them
REPLACEABLE_FIELDS = ("title", "artist", "genre", "style", "release_year")


class RecordRepository:
    """Stateless gateway; every method receives the session it should use."""

    async def create_record(self, db: AsyncSession, record: Record) -> Record:
        try:
            db.add(record)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Failed to insert record '%s': %s", record.title, str(e))
            raise DatabaseError(
                message="Could not save the record. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Record %s created: %s / %s", record.id, record.artist, record.title)
        return record

    async def list_records(self, db: AsyncSession) -> List[Record]:
        return await self._fetch(db, select(Record).order_by(*CATALOG_ORDER), "list")

    async def get_by_title(self, db: AsyncSession, title: str) -> List[Record]:
        query = select(Record).where(Record.title == title).order_by(*CATALOG_ORDER)
        return await self._fetch(db, query, "title lookup")

    async def get_by_artist(self, db: AsyncSession, artist: str) -> List[Record]:
        query = select(Record).where(Record.artist == artist).order_by(*CATALOG_ORDER)
        return await self._fetch(db, query, "artist lookup")

    async def _fetch(self, db: AsyncSession, query: Any, label: str) -> List[Record]:
        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error during record %s: %s", label, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve records. Please try again.",
                context={"error_type": type(e).__name__, "query": label},
            )

    async def get_detail(self, db: AsyncSession, title: str) -> DetailResponse:
        """
        Fetch a record's detail and ordered track list in one three-way join.

        Header fields (title, image, video) come from the first joined row.
        A title with no record, no detail, or no tracks produces zero rows
        and therefore an empty DetailResponse rather than an error.
        """
        query = (
            select(
                Record.title.label("record_title"),
                Detail.album_image_url,
                Detail.youtube_title,
                Detail.youtube_video_id,
                Track.track_number,
                Track.track_title,
            )
            .select_from(Record)
            .join(Detail, Detail.record_id == Record.id)
            .join(Track, Track.detail_id == Detail.id)
            .where(Record.title == title)
            .order_by(Track.track_number.asc(), Track.id.asc())
        )
        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error fetching detail for '%s': %s", title, str(e))
            raise DatabaseError(
                message="Could not retrieve the record detail. Please try again.",
                context={"error_type": type(e).__name__, "title": title},
            )

        if not rows:
            logger.info("No detail rows found for title '%s'", title)
            return DetailResponse()

        first = rows[0]
        return DetailResponse(
            record_title=first.record_title,
            album_image_url=first.album_image_url,
            youtube_title=first.youtube_title,
            youtube_video_id=first.youtube_video_id,
            tracks=[
                TrackInfo(track_number=row.track_number, track_title=row.track_title)
                for row in rows
            ],
        )

    async def update_record(
        self, db: AsyncSession, record_id: int, fields: Mapping[str, Any]
    ) -> Record:
        """
        Replace every mutable column of one record and stamp updated_at.

        Raises:
            NotFoundError: no row has this id (rowcount == 0)
            DatabaseError: the statement failed
        """
        values = {name: fields[name] for name in REPLACEABLE_FIELDS}
        values["updated_at"] = utcnow()
        try:
            result = await db.execute(
                update(Record)
                .where(Record.id == record_id)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount < 1:
                raise NotFoundError(resource="record", resource_id=str(record_id))

            refreshed = await db.execute(
                select(Record)
                .where(Record.id == record_id)
                .execution_options(populate_existing=True)
            )
            record = refreshed.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Failed to update record %s: %s", record_id, str(e))
            raise DatabaseError(
                message="Could not update the record. Please try again.",
                context={"error_type": type(e).__name__, "record_id": record_id},
            )
        logger.info("Record %s replaced", record_id)
        return record

    async def delete_record(self, db: AsyncSession, record_id: int) -> None:
        try:
            result = await db.execute(
                delete(Record)
                .where(Record.id == record_id)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            logger.error("Failed to delete record %s: %s", record_id, str(e))
            raise DatabaseError(
                message="Could not delete the record. Please try again.",
                context={"error_type": type(e).__name__, "record_id": record_id},
            )
        if result.rowcount < 1:
            raise NotFoundError(resource="record", resource_id=str(record_id))
        logger.info("Record %s deleted", record_id)


record_repository = RecordRepository()
