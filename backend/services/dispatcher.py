"""
Validate, normalize and dispatch form submissions.

A submission is validated by the form kernel, stamped with processedAt,
and forwarded to the receiver with the verb its action maps to.
Validation failures never reach the receiver.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

from backend.models.submission import ProcessedRecord
from backend.services.receiver_client import ReceiverClient, UpstreamUnavailable, receiver_client
from formcore import Action, validate_submission

logger = logging.getLogger(__name__)


class ForwardFailed(Exception):
    """
    Local processing succeeded but the receiver call did not.

    Carries the processed record so the caller can see what was validated.
    """

    def __init__(self, action: Action, processed: ProcessedRecord, cause: UpstreamUnavailable):
        super().__init__(cause.message)
        self.action = action
        self.processed = processed
        self.cause = cause


@dataclass(frozen=True)
class DispatchResult:
    """A submission the receiver accepted."""

    action: Action
    processed: ProcessedRecord
    downstream: dict[str, Any]

    @property
    def http_method(self) -> str:
        return self.action.http_method


class Dispatcher:
    """Runs one submission through validation and a single forward call."""

    def __init__(
        self,
        client: ReceiverClient | None = None,
        today: Callable[[], date] = date.today,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._client = client or receiver_client
        self._today = today
        self._clock = clock

    def prepare(self, raw: Mapping[str, Any]) -> tuple[Action, ProcessedRecord]:
        """
        Validate and normalize a raw submission.

        Raises:
            FormValidationError: the first failing field check
        """
        submission = validate_submission(raw, today=self._today())
        processed = ProcessedRecord(
            name=submission.name,
            mobile=submission.mobile,
            dob=submission.dob,
            age=submission.age,
            action=submission.action.value,
            processed_at=self._clock(),
        )
        return submission.action, processed

    async def submit(self, raw: Mapping[str, Any]) -> DispatchResult:
        """
        Validate a submission and forward it to the receiver.

        Raises:
            FormValidationError: invalid input; nothing was forwarded
            ForwardFailed: the receiver call timed out, was refused, or was non-2xx
        """
        action, processed = self.prepare(raw)
        logger.info(
            "dispatch: %s mobile=%s age=%d via %s",
            action.value,
            processed.mobile,
            processed.age,
            action.http_method,
        )

        payload = processed.model_dump(mode="json", by_alias=True)
        try:
            downstream = await self._client.forward(action, payload)
        except UpstreamUnavailable as e:
            raise ForwardFailed(action, processed, e) from e

        logger.info("dispatch: receiver accepted %s for mobile=%s", action.value, processed.mobile)
        return DispatchResult(action=action, processed=processed, downstream=downstream)


dispatcher = Dispatcher()
