"""
Pydantic models for the dispatch API.

All data shapes defined here. No imports from services or routes.
"""

from backend.models.submission import (
    ProcessedRecord,
    RecordsResponse,
    SubmissionRequest,
    SubmissionResponse,
)

__all__ = [
    "SubmissionRequest",
    "ProcessedRecord",
    "SubmissionResponse",
    "RecordsResponse",
]
