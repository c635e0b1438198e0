"""
Pydantic models for the persistence API.

All data shapes defined here. No imports from db, repos, or routes.
"""

from receiver.models.record import (
    DeleteRecordRequest,
    DeleteResponse,
    FormRecord,
    MutationResponse,
    NewRecord,
    RecordListResponse,
    RecordPayload,
    RecordResponse,
)

__all__ = [
    "FormRecord",
    "NewRecord",
    "RecordPayload",
    "DeleteRecordRequest",
    "RecordResponse",
    "MutationResponse",
    "DeleteResponse",
    "RecordListResponse",
]
