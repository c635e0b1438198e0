"""Record routes: insert, upsert, delete, list."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import asyncpg
from fastapi import APIRouter, Response, status

from formcore import MissingField
from receiver.db import PoolNotInitialized
from receiver.errors import RecordNotFound, StoreError
from receiver.models.record import (
    DeleteRecordRequest,
    DeleteResponse,
    MutationResponse,
    NewRecord,
    RecordListResponse,
    RecordPayload,
    RecordResponse,
)
from receiver.repos.record_repo import RecordRepo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["records"])
record_repo = RecordRepo()

# Errors the store can raise for a single operation.
_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, PoolNotInitialized)


@router.post("/postdata/db", status_code=201)
async def create_record(payload: RecordPayload) -> MutationResponse:
    """Insert a new record."""
    rec = NewRecord.from_payload(payload)
    try:
        record = await record_repo.insert(rec)
    except _STORE_ERRORS as e:
        logger.exception("create: store error for mobile=%s", rec.mobile)
        raise StoreError("Failed to create record", e) from e

    logger.info("create: stored record id=%s mobile=%s", record.id, record.mobile)
    return MutationResponse(
        message="Data created successfully",
        action="CREATE",
        data=RecordResponse.from_model(record),
    )


@router.put("/postdata/db", status_code=200)
async def upsert_record(payload: RecordPayload, response: Response) -> MutationResponse:
    """
    Update the record matching the mobile, or create it.

    Returns 201 with action "CREATE (from UPDATE)" when nothing matched,
    so the caller can tell that no update happened.
    """
    rec = NewRecord.from_payload(payload)
    try:
        result = await record_repo.upsert(rec)
    except _STORE_ERRORS as e:
        logger.exception("update: store error for mobile=%s", rec.mobile)
        raise StoreError("Failed to update record", e) from e

    data = RecordResponse.from_model(result.record)
    if result.created:
        logger.info("update: no record for mobile=%s, created id=%s", rec.mobile, result.record.id)
        response.status_code = status.HTTP_201_CREATED
        return MutationResponse(
            message="Data created (record not found for update)",
            action="CREATE (from UPDATE)",
            data=data,
        )

    logger.info("update: updated record id=%s mobile=%s", result.record.id, rec.mobile)
    return MutationResponse(message="Data updated successfully", action="UPDATE", data=data)


@router.delete("/postdata/db", status_code=200)
async def delete_record(req: DeleteRecordRequest | None = None) -> DeleteResponse:
    """Delete the record matching the mobile in the body."""
    mobile = (req.mobile or "").strip() if req else ""
    if not mobile:
        raise MissingField("Mobile number is required for delete operation", field="mobile")

    try:
        record = await record_repo.delete(mobile)
    except _STORE_ERRORS as e:
        logger.exception("delete: store error for mobile=%s", mobile)
        raise StoreError("Failed to delete record", e) from e

    if record is None:
        raise RecordNotFound(mobile)

    logger.info("delete: removed record id=%s mobile=%s", record.id, mobile)
    return DeleteResponse(
        message="Data deleted successfully",
        deleted_data=RecordResponse.from_model(record),
    )


@router.get("/getdata/db", status_code=200)
async def list_records() -> RecordListResponse:
    """List all records, newest first."""
    try:
        records = await record_repo.list_all()
    except _STORE_ERRORS as e:
        logger.exception("list: store error")
        raise StoreError("Failed to fetch records", e) from e

    logger.info("list: returning %d records", len(records))
    return RecordListResponse(
        count=len(records),
        data=[RecordResponse.from_model(r) for r in records],
        retrieved_at=datetime.now(UTC),
    )
