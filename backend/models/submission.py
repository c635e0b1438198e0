"""Form submission models for the dispatch API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

_WIRE = {"alias_generator": to_camel, "populate_by_name": True}


class SubmissionRequest(BaseModel):
    """
    What the client sends to POST /api/post.

    Fields are optional at the schema level; presence is checked by the
    form kernel so every tier reports it the same way.
    """

    model_config = {"extra": "ignore", "coerce_numbers_to_str": True}

    name: str | None = None
    mobile: str | None = None
    dob: str | None = None
    action: str | None = None


class ProcessedRecord(BaseModel):
    """A validated, normalized record as forwarded to the receiver."""

    model_config = _WIRE

    name: str
    mobile: str
    dob: str
    age: int
    action: str
    processed_at: datetime


class SubmissionResponse(BaseModel):
    """What POST /api/post returns when the receiver accepted the record."""

    model_config = _WIRE

    success: bool = True
    message: str
    http_method: str
    processed_data: ProcessedRecord
    downstream_response: dict[str, Any]


class RecordsResponse(BaseModel):
    """What GET /api/getdata returns: the receiver's list, wrapped."""

    model_config = _WIRE

    success: bool = True
    message: str
    timestamp: datetime
    data: dict[str, Any]
