"""HTTP client for the dispatch API."""
from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """The dispatch API answered with a non-2xx status or a body that is not JSON."""

    def __init__(self, status_code: int, body: Any, message: str | None = None):
        self.status_code = status_code
        self.body = body
        if message is None and isinstance(body, dict):
            message = body.get("message")
        super().__init__(message or f"HTTP {status_code}")

    @property
    def field(self) -> str | None:
        """The rejected field, for validation errors."""
        return self.body.get("field") if isinstance(self.body, dict) else None


class ApiClient:
    """HTTP client for the dispatch API."""

    def __init__(self, api_url: str, client: httpx.Client | None = None):
        self.api_url = api_url.rstrip("/")
        self.client = client or httpx.Client(timeout=30.0)

    def _headers(self) -> dict:
        """Build request headers."""
        return {"Content-Type": "application/json", "Accept": "application/json"}

    def _send(self, method: str, path: str, data: dict | None = None) -> Any:
        url = f"{self.api_url}{path}"
        res = self.client.request(method, url, json=data, headers=self._headers())
        if res.is_error:
            try:
                body = res.json()
            except ValueError:
                body = res.text
            raise ApiError(res.status_code, body)
        try:
            return res.json()
        except ValueError:
            raise ApiError(res.status_code, res.text, "Invalid response from dispatch API") from None

    def get(self, path: str) -> Any:
        """Make GET request."""
        return self._send("GET", path)

    def post(self, path: str, data: dict) -> Any:
        """Make POST request."""
        return self._send("POST", path, data)

    def submit(self, form: dict) -> dict:
        """
        Submit a form with its action.

        Returns the dispatch API's success body:
        {"success": true, "httpMethod": "...", "processedData": {...}, "downstreamResponse": {...}}

        Raises:
            ApiError: validation failure (400), forward failure (502) or server error
        """
        return self.post("/api/post", form)

    def get_data(self) -> list[dict]:
        """Fetch every stored record, newest first."""
        body = self.get("/api/getdata")
        return body.get("data", {}).get("data", [])

    def health(self) -> dict:
        """Fetch the dispatch API health report."""
        return self.get("/health")

    def close(self):
        """Close client."""
        self.client.close()
