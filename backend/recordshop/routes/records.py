"""
Record Shop Backend — Record Route Handlers
=============================================

What:  The /records REST endpoints.
How:   Extract path/body data, delegate to RecordService, return JSON.
       Errors are raised as application exceptions and translated to status
       codes by the handlers registered in main.py.

Endpoints:
    GET    /records                    public    ordered catalog
    POST   /records                    cookie    create
    GET    /records/titles/{title}     public    exact title lookup
    GET    /records/artists/{artist}   public    exact artist lookup
    GET    /records/details/{title}    public    detail + track list
    PUT    /records/{record_id}        cookie    full replace
    DELETE /records/{record_id}        cookie    delete

Write endpoints depend on get_current_user_id; without a valid `token`
cookie they return 401 and RecordService is never called.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from recordshop.database import get_db_session
from recordshop.schemas.common import ErrorResponse
from recordshop.schemas.record import (
    DetailResponse,
    RecordInput,
    RecordResponse,
    RecordWriteResponse,
)
from recordshop.security import get_current_user_id
from recordshop.services.record_service import record_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/records", tags=["Records"])

WRITE_ERRORS = {
    400: {"description": "One or more fields are invalid", "model": ErrorResponse},
    401: {"description": "Missing or invalid session token", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.get(
    "",
    response_model=List[RecordResponse],
    summary="List the catalog",
    description="All records ordered by release year, then artist, then title.",
)
async def list_records(db: AsyncSession = Depends(get_db_session)) -> List[RecordResponse]:
    return await record_service.list_records(db)


@router.post(
    "",
    response_model=RecordWriteResponse,
    status_code=status.HTTP_201_CREATED,
    responses=WRITE_ERRORS,
    summary="Create a record",
)
async def create_record(
    payload: RecordInput,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> RecordWriteResponse:
    result = await record_service.create_record(db, payload)
    logger.info("User %s created record %s", user_id, result.id)
    return result


@router.get(
    "/titles/{title}",
    response_model=List[RecordResponse],
    summary="Find records by exact title",
)
async def get_records_by_title(
    title: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[RecordResponse]:
    return await record_service.get_by_title(db, title)


@router.get(
    "/artists/{artist}",
    response_model=List[RecordResponse],
    summary="Find records by exact artist",
)
async def get_records_by_artist(
    artist: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[RecordResponse]:
    return await record_service.get_by_artist(db, artist)


@router.get(
    "/details/{title}",
    response_model=DetailResponse,
    summary="Get a record's detail and track list",
    description=(
        "Returns cover art, video metadata and tracks ordered by track number. "
        "An unknown title returns an empty detail with no tracks (HTTP 200)."
    ),
)
async def get_record_detail(
    title: str,
    db: AsyncSession = Depends(get_db_session),
) -> DetailResponse:
    return await record_service.get_detail(db, title)


@router.put(
    "/{record_id}",
    response_model=RecordWriteResponse,
    responses={**WRITE_ERRORS, 404: {"description": "Record not found", "model": ErrorResponse}},
    summary="Replace a record",
    description="Full replace: every field is overwritten; created_at is preserved.",
)
async def update_record(
    record_id: int,
    payload: RecordInput,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> RecordWriteResponse:
    result = await record_service.update_record(db, record_id, payload)
    logger.info("User %s replaced record %s", user_id, record_id)
    return result


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        401: {"description": "Missing or invalid session token", "model": ErrorResponse},
        404: {"description": "Record not found", "model": ErrorResponse},
    },
    summary="Delete a record",
    description="Details and tracks that referenced the record are kept with a null back-reference.",
)
async def delete_record(
    record_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await record_service.delete_record(db, record_id)
    logger.info("User %s deleted record %s", user_id, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
