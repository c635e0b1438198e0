"""Form record models for the persistence API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from formcore import RECORD_FIELDS, coerce_age, require_fields, validate_action

_WIRE = {"alias_generator": to_camel, "populate_by_name": True}


class FormRecord(BaseModel):
    """Core record model. Represents a row in the form_records table."""

    id: UUID
    name: str
    mobile: str
    dob: str
    age: int
    action: Literal["create", "update", "delete"]
    processed_at: datetime
    created_at: datetime
    updated_at: datetime


class RecordPayload(BaseModel):
    """
    What the dispatch API sends to insert or upsert a record.

    Every field is optional at the schema level so that a missing field
    surfaces as a presence error rather than a schema error.
    """

    model_config = {**_WIRE, "extra": "ignore"}

    name: str | None = None
    mobile: str | None = None
    dob: str | None = None
    age: Any = None
    action: str | None = None
    processed_at: datetime | None = None


class DeleteRecordRequest(BaseModel):
    """Body of DELETE /api/postdata/db. Only mobile is used."""

    model_config = {**_WIRE, "extra": "ignore"}

    mobile: str | None = None


class NewRecord(BaseModel):
    """A payload that passed presence and coercion checks, ready to write."""

    name: str
    mobile: str
    dob: str
    age: int = Field(ge=0, le=150)
    action: Literal["create", "update", "delete"]
    processed_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: RecordPayload) -> NewRecord:
        """
        Check presence and coerce fields, independently of the dispatch API.

        Raises:
            FormValidationError: a field is missing, age is not a whole
                number in range, or action is unknown
        """
        require_fields(payload.model_dump(), RECORD_FIELDS)
        return cls(
            name=payload.name.strip(),
            mobile=payload.mobile.strip(),
            dob=payload.dob.strip(),
            age=coerce_age(payload.age),
            action=validate_action(payload.action).value,
            processed_at=payload.processed_at,
        )


class RecordResponse(BaseModel):
    """What the API returns for a single record."""

    model_config = _WIRE

    id: UUID
    name: str
    mobile: str
    dob: str
    age: int
    action: str
    processed_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, record: FormRecord) -> RecordResponse:
        """Convert internal FormRecord model to public API response."""
        return cls(
            id=record.id,
            name=record.name,
            mobile=record.mobile,
            dob=record.dob,
            age=record.age,
            action=record.action,
            processed_at=record.processed_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class MutationResponse(BaseModel):
    """Result of an insert or upsert."""

    model_config = _WIRE

    success: bool = True
    message: str
    action: Literal["CREATE", "UPDATE", "CREATE (from UPDATE)"]
    data: RecordResponse


class DeleteResponse(BaseModel):
    """Result of a delete."""

    model_config = _WIRE

    success: bool = True
    message: str
    action: Literal["DELETE"] = "DELETE"
    deleted_data: RecordResponse


class RecordListResponse(BaseModel):
    """All records, newest first."""

    model_config = _WIRE

    success: bool = True
    count: int
    data: list[RecordResponse]
    retrieved_at: datetime
