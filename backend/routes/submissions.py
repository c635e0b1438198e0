"""Submission routes: validate-and-forward, and read-back through the receiver."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter

from backend.models.submission import RecordsResponse, SubmissionRequest, SubmissionResponse
from backend.services.dispatcher import dispatcher
from backend.services.receiver_client import receiver_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["submissions"])


@router.post("/post", status_code=200)
async def submit_form(req: SubmissionRequest) -> SubmissionResponse:
    """Validate a form submission and forward its action to the receiver."""
    result = await dispatcher.submit(req.model_dump())
    return SubmissionResponse(
        message=(
            f"Form data validated, processed, and {result.action.value.upper()} "
            "action completed successfully"
        ),
        http_method=result.http_method,
        processed_data=result.processed,
        downstream_response=result.downstream,
    )


@router.get("/getdata", status_code=200)
async def get_data() -> RecordsResponse:
    """Fetch all records from the receiver."""
    data = await receiver_client.list_records()
    logger.info("getdata: receiver returned %s records", data.get("count"))
    return RecordsResponse(
        message="Data retrieved successfully via receiver service",
        timestamp=datetime.now(UTC),
        data=data,
    )
