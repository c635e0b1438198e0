"""HTTP client for the receiver (persistence) service."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from backend import config
from formcore import Action

logger = logging.getLogger(__name__)

RECORDS_PATH = "/api/postdata/db"
LIST_PATH = "/api/getdata/db"


class UpstreamUnavailable(Exception):
    """
    The receiver could not be reached within the bound, or answered non-2xx.

    status_code and body are set when the receiver did answer.
    """

    def __init__(self, message: str, status_code: int | None = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


def _error_from(exc: httpx.HTTPError) -> UpstreamUnavailable:
    """Turn an httpx error into UpstreamUnavailable, keeping the receiver's message."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = response.text or None
        message = str(exc)
        if isinstance(body, dict) and body.get("message"):
            message = body["message"]
            if body.get("error"):
                message = f"{message}: {body['error']}"
        return UpstreamUnavailable(message, status_code=response.status_code, body=body)
    return UpstreamUnavailable(str(exc) or type(exc).__name__)


class ReceiverClient:
    """HTTP client for the receiver service.

    One bounded-wait call per operation. No retries: a single failure is
    terminal for the request and surfaces as UpstreamUnavailable. The bound
    covers the whole call, not each connect or read phase.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        health_timeout: float | None = None,
    ) -> None:
        self._base_url = (base_url or config.settings.RECEIVER_SERVICE_URL).rstrip("/")
        self._timeout = timeout or config.settings.FORWARD_TIMEOUT_SECONDS
        self._health_timeout = health_timeout or config.settings.HEALTH_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        try:
            async with asyncio.timeout(self._timeout):
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.request(method, url, json=payload)
                    response.raise_for_status()
                    return response.json()
        except TimeoutError as e:
            logger.warning("receiver: %s %s exceeded %ss", method, path, self._timeout)
            raise UpstreamUnavailable(f"Receiver service did not answer within {self._timeout}s") from e
        except httpx.HTTPError as e:
            logger.warning("receiver: %s %s failed: %s", method, path, e)
            raise _error_from(e) from e
        except ValueError as e:
            logger.warning("receiver: %s %s returned a non-JSON body", method, path)
            raise UpstreamUnavailable(f"Invalid response from receiver service: {e}") from e

    async def forward(self, action: Action, record: dict[str, Any]) -> dict[str, Any]:
        """
        Forward a normalized record with the verb mapped to the action.

        Args:
            action: Parsed action; selects POST, PUT or DELETE
            record: Normalized record in wire form

        Returns:
            The receiver's JSON response

        Raises:
            UpstreamUnavailable: timeout, connection failure or non-2xx answer
        """
        return await self._request(action.http_method, RECORDS_PATH, record)

    async def list_records(self) -> dict[str, Any]:
        """
        Fetch every record from the receiver.

        Raises:
            UpstreamUnavailable: timeout, connection failure or non-2xx answer
        """
        return await self._request("GET", LIST_PATH)

    async def health_check(self) -> bool:
        """
        Check whether the receiver is healthy.

        Returns:
            True if the receiver responds to /health with 200 within the
            health timeout, False otherwise
        """
        try:
            async with asyncio.timeout(self._health_timeout):
                async with httpx.AsyncClient(timeout=self._health_timeout) as client:
                    response = await client.get(f"{self._base_url}/health")
                    return response.status_code == 200
        except (httpx.HTTPError, TimeoutError):
            logger.warning("receiver health check failed")
            return False


receiver_client = ReceiverClient()
