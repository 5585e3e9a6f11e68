"""
Record Shop Backend — Record Service (Catalog Business Logic)
===============================================================

What:  Orchestrates validate → map → persist → shape for every catalog operation.
How:   Composes RecordValidator and RecordRepository; converts ORM rows into
       the public response schemas.
Who:   Called by the /records route handlers.
When:  Once per catalog request.

Operation flow (writes):
    ┌──────────┐    ┌─────────────┐    ┌──────────────┐    ┌──────────┐
    │  Route   │───▶│  Validate   │───▶│  Repository  │───▶│  Shape   │
    │  (body)  │    │  (all rules)│    │  (SQL)       │    │ response │
    └──────────┘    └─────────────┘    └──────────────┘    └──────────┘

    Validation failure → RecordValidationError, storage is never touched.
    NotFoundError / DatabaseError from the repository propagate unchanged.

RecordService holds no per-request state; the session is passed into each
call, and collaborators are injected through the constructor for tests.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from recordshop.models.record import Record
from recordshop.repositories.record_repository import RecordRepository, record_repository
from recordshop.schemas.record import (
    DetailResponse,
    RecordInput,
    RecordResponse,
    RecordWriteResponse,
)
from recordshop.services.record_validator import RecordValidator, record_validator

logger = logging.getLogger(__name__)


class RecordService:
    """
    Business logic layer for the record catalog.

    Responsibilities:
        - create_record(): validate, copy allowed fields, insert
        - list_records() / get_by_title() / get_by_artist(): ordered projections
        - get_detail(): record detail with its track list
        - update_record(): validate, full replace, echo the stored row
        - delete_record(): delete by id
    """

    def __init__(
        self,
        repository: Optional[RecordRepository] = None,
        validator: Optional[RecordValidator] = None,
    ):
        self.repository = repository or record_repository
        self.validator = validator or record_validator

    async def create_record(self, db: AsyncSession, payload: RecordInput) -> RecordWriteResponse:
        """
        Validate and store a new record.

        Only artist, title, genre, style and release_year are copied from the
        payload; the id and timestamps are always assigned on insert.

        Raises:
            RecordValidationError: one or more fields are invalid (→ 400)
            DatabaseError: the insert failed (→ 500)
        """
        self.validator.validate(payload)

        new_record = Record(
            artist=payload.artist,
            title=payload.title,
            genre=payload.genre,
            style=payload.style,
            release_year=payload.release_year,
        )
        stored = await self.repository.create_record(db, new_record)
        return RecordWriteResponse.model_validate(stored)

    async def list_records(self, db: AsyncSession) -> List[RecordResponse]:
        records = await self.repository.list_records(db)
        return self._to_responses(records)

    async def get_by_title(self, db: AsyncSession, title: str) -> List[RecordResponse]:
        records = await self.repository.get_by_title(db, title)
        return self._to_responses(records)

    async def get_by_artist(self, db: AsyncSession, artist: str) -> List[RecordResponse]:
        records = await self.repository.get_by_artist(db, artist)
        return self._to_responses(records)

    async def get_detail(self, db: AsyncSession, title: str) -> DetailResponse:
        return await self.repository.get_detail(db, title)

    async def update_record(
        self, db: AsyncSession, record_id: int, payload: RecordInput
    ) -> RecordWriteResponse:
        """
        Replace all mutable fields of an existing record.

        This is not a patch: every field in the payload overwrites the stored
        value. created_at is preserved; updated_at is stamped by the repository.

        Raises:
            RecordValidationError: payload invalid; nothing is written (→ 400)
            NotFoundError: no record with this id (→ 404)
            DatabaseError: the update failed (→ 500)
        """
        self.validator.validate(payload)

        fields = {
            "title": payload.title,
            "artist": payload.artist,
            "genre": payload.genre,
            "style": payload.style,
            "release_year": payload.release_year,
        }
        updated = await self.repository.update_record(db, record_id, fields)
        return RecordWriteResponse.model_validate(updated)

    async def delete_record(self, db: AsyncSession, record_id: int) -> None:
        await self.repository.delete_record(db, record_id)

    @staticmethod
    def _to_responses(records: List[Record]) -> List[RecordResponse]:
        return [RecordResponse.model_validate(record) for record in records]


record_service = RecordService()
