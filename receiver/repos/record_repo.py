"""Repository for form record operations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

import asyncpg

from receiver.db import record_conn
from receiver.models.record import FormRecord, NewRecord


def _row_to_record(row: asyncpg.Record) -> FormRecord:
    """Convert a database row to a FormRecord model."""
    return FormRecord(
        id=row["id"],
        name=row["name"],
        mobile=row["mobile"],
        dob=row["dob"],
        age=row["age"],
        action=row["action"],
        processed_at=row["processed_at"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _processed_at(rec: NewRecord, now: datetime) -> datetime:
    """The caller's processedAt, or now. Naive values are taken as UTC."""
    if rec.processed_at is None:
        return now
    if rec.processed_at.tzinfo is None:
        return rec.processed_at.replace(tzinfo=UTC)
    return rec.processed_at


@dataclass(frozen=True)
class UpsertResult:
    """Outcome of an upsert. created is True when no record matched the mobile."""

    record: FormRecord
    created: bool


class RecordRepo:
    """All form-record database operations. mobile is the lookup key."""

    async def _insert(self, conn: asyncpg.Connection, rec: NewRecord, now: datetime) -> FormRecord:
        row = await conn.fetchrow(
            """
            INSERT INTO form_records
                (id, name, mobile, dob, age, action, processed_at, created_at, updated_at)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $8)
            RETURNING *
            """,
            uuid4(),
            rec.name,
            rec.mobile,
            rec.dob,
            rec.age,
            rec.action,
            _processed_at(rec, now),
            now,
        )
        return _row_to_record(row)

    async def insert(self, rec: NewRecord) -> FormRecord:
        """
        Create a new record.

        Args:
            rec: NewRecord that passed presence checks

        Returns:
            Stored FormRecord with id and store timestamps
        """
        async with record_conn() as conn:
            return await self._insert(conn, rec, datetime.now(UTC))

    async def upsert(self, rec: NewRecord) -> UpsertResult:
        """
        Update the record matching rec.mobile, or create one if none matches.

        The lookup and the write run under an advisory lock on the mobile, so
        a concurrent upsert or delete on the same mobile waits for this one.
        mobile itself is never rewritten.

        Args:
            rec: NewRecord that passed presence checks

        Returns:
            UpsertResult with the stored record and whether it was created
        """
        now = datetime.now(UTC)
        async with record_conn(lock_key=rec.mobile) as conn:
            existing = await conn.fetchrow(
                "SELECT id FROM form_records WHERE mobile = $1 ORDER BY created_at ASC LIMIT 1",
                rec.mobile,
            )
            if existing is None:
                record = await self._insert(conn, rec, now)
                return UpsertResult(record=record, created=True)

            row = await conn.fetchrow(
                """
                UPDATE form_records
                SET name = $2, dob = $3, age = $4, action = $5,
                    processed_at = $6, updated_at = $7
                WHERE id = $1
                RETURNING *
                """,
                existing["id"],
                rec.name,
                rec.dob,
                rec.age,
                rec.action,
                _processed_at(rec, now),
                now,
            )
            return UpsertResult(record=_row_to_record(row), created=False)

    async def delete(self, mobile: str) -> FormRecord | None:
        """
        Delete the record matching a mobile number.

        Args:
            mobile: Mobile number, already trimmed

        Returns:
            The deleted FormRecord, or None if no record matched
        """
        async with record_conn(lock_key=mobile) as conn:
            row = await conn.fetchrow(
                """
                DELETE FROM form_records
                WHERE id = (
                    SELECT id FROM form_records
                    WHERE mobile = $1
                    ORDER BY created_at ASC
                    LIMIT 1
                )
                RETURNING *
                """,
                mobile,
            )
            return _row_to_record(row) if row else None

    async def list_all(self) -> list[FormRecord]:
        """
        List every record.

        Returns:
            List of FormRecord ordered by created_at DESC
        """
        async with record_conn() as conn:
            rows = await conn.fetch("SELECT * FROM form_records ORDER BY created_at DESC")
            return [_row_to_record(row) for row in rows]

    async def count(self) -> int:
        """Count all records."""
        async with record_conn() as conn:
            count = await conn.fetchval("SELECT count(*) FROM form_records")
            return count or 0
