"""
Record Shop Backend — Record Service Unit Tests
=================================================

What:  Tests RecordService with a mocked repository.
How:   AsyncMock stands in for RecordRepository; the validator runs for real
       with a pinned clock.

Test Strategy:
    ✅ Invalid payloads never reach the repository
    ✅ create copies only the five record fields
    ✅ ORM rows are shaped into response models
    ✅ NotFoundError from the repository propagates unchanged
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from recordshop.exceptions import NotFoundError, RecordValidationError
from recordshop.models.record import Record
from recordshop.schemas.record import DetailResponse, RecordInput, RecordWriteResponse
from recordshop.services.record_service import RecordService
from recordshop.services.record_validator import RecordValidator


def stored_record(record_id=1, **overrides):
    data = {
        "title": "OK Computer",
        "artist": "Radiohead",
        "genre": "Alt Rock",
        "style": "Art Rock",
        "release_year": 1997,
    }
    data.update(overrides)
    record = Record(**data)
    record.id = record_id
    record.created_at = datetime(2024, 5, 1, tzinfo=timezone.utc)
    record.updated_at = None
    return record


class TestCreateRecord:

    @pytest.fixture(autouse=True)
    def _service(self, fixed_clock):
        self.repository = AsyncMock()
        self.service = RecordService(
            repository=self.repository,
            validator=RecordValidator(clock=fixed_clock),
        )

    @pytest.mark.asyncio
    async def test_invalid_payload_never_touches_repository(self, mock_db_session):
        payload = RecordInput(title="OK Computer", artist="", genre="Alt Rock", style="", release_year=1997)

        with pytest.raises(RecordValidationError):
            await self.service.create_record(mock_db_session, payload)

        self.repository.create_record.assert_not_called()

    @pytest.mark.asyncio
    async def test_only_record_fields_are_copied(self, mock_db_session):
        self.repository.create_record.side_effect = lambda db, record: _assign_id(record)
        payload = RecordInput.model_validate({
            "id": 999,
            "title": "OK Computer",
            "artist": "Radiohead",
            "genre": "Alt Rock",
            "style": "Art Rock",
            "release_year": 1997,
            "created_at": "1990-01-01T00:00:00Z",
        })

        result = await self.service.create_record(mock_db_session, payload)

        sent = self.repository.create_record.call_args.args[1]
        assert sent.id is None
        assert sent.title == "OK Computer"
        assert sent.release_year == 1997
        assert isinstance(result, RecordWriteResponse)
        assert result.id == 7

    @pytest.mark.asyncio
    async def test_validation_error_lists_every_field(self, mock_db_session):
        with pytest.raises(RecordValidationError) as exc_info:
            await self.service.create_record(mock_db_session, RecordInput())

        assert set(exc_info.value.errors) == {"artist", "title", "genre", "style", "release_year"}


def _assign_id(record):
    record.id = 7
    record.created_at = datetime(2024, 6, 1, tzinfo=timezone.utc)
    return record


class TestReadRecords:

    def setup_method(self):
        self.repository = AsyncMock()
        self.service = RecordService(repository=self.repository)

    @pytest.mark.asyncio
    async def test_list_shapes_rows(self, mock_db_session):
        self.repository.list_records.return_value = [stored_record(1), stored_record(2, title="Kid A")]

        results = await self.service.list_records(mock_db_session)

        assert [r.id for r in results] == [1, 2]
        assert results[1].title == "Kid A"
        assert "created_at" not in results[0].model_dump()

    @pytest.mark.asyncio
    async def test_lookups_pass_the_exact_value(self, mock_db_session):
        self.repository.get_by_title.return_value = []
        self.repository.get_by_artist.return_value = [stored_record()]

        assert await self.service.get_by_title(mock_db_session, "Kid A") == []
        by_artist = await self.service.get_by_artist(mock_db_session, "Radiohead")

        self.repository.get_by_title.assert_awaited_once_with(mock_db_session, "Kid A")
        self.repository.get_by_artist.assert_awaited_once_with(mock_db_session, "Radiohead")
        assert by_artist[0].artist == "Radiohead"

    @pytest.mark.asyncio
    async def test_detail_is_passed_through(self, mock_db_session):
        self.repository.get_detail.return_value = DetailResponse()

        detail = await self.service.get_detail(mock_db_session, "Unknown")

        assert detail.is_empty


class TestUpdateAndDelete:

    @pytest.fixture(autouse=True)
    def _service(self, fixed_clock):
        self.repository = AsyncMock()
        self.service = RecordService(
            repository=self.repository,
            validator=RecordValidator(clock=fixed_clock),
        )

    @pytest.mark.asyncio
    async def test_update_sends_full_field_set(self, mock_db_session):
        updated = stored_record(5, release_year=1998)
        updated.updated_at = datetime(2024, 6, 1, tzinfo=timezone.utc)
        self.repository.update_record.return_value = updated
        payload = RecordInput(
            title="OK Computer", artist="Radiohead", genre="Alt Rock", style="Art Rock", release_year=1998
        )

        result = await self.service.update_record(mock_db_session, 5, payload)

        self.repository.update_record.assert_awaited_once_with(mock_db_session, 5, {
            "title": "OK Computer",
            "artist": "Radiohead",
            "genre": "Alt Rock",
            "style": "Art Rock",
            "release_year": 1998,
        })
        assert result.release_year == 1998
        assert result.updated_at is not None

    @pytest.mark.asyncio
    async def test_invalid_update_never_touches_repository(self, mock_db_session):
        payload = RecordInput(
            title="OK Computer", artist="Radiohead", genre="Alt Rock", style="Art Rock", release_year=2031
        )

        with pytest.raises(RecordValidationError):
            await self.service.update_record(mock_db_session, 5, payload)

        self.repository.update_record.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_not_found_propagates(self, mock_db_session):
        self.repository.update_record.side_effect = NotFoundError(resource="record", resource_id="5")
        payload = RecordInput(
            title="OK Computer", artist="Radiohead", genre="Alt Rock", style="Art Rock", release_year=1997
        )

        with pytest.raises(NotFoundError):
            await self.service.update_record(mock_db_session, 5, payload)

    @pytest.mark.asyncio
    async def test_delete_delegates(self, mock_db_session):
        await self.service.delete_record(mock_db_session, 3)

        self.repository.delete_record.assert_awaited_once_with(mock_db_session, 3)
