"""
Configuration for the Form CLI.

API URL resolution order:
  1. --api-url command line flag (passed to Config)
  2. FORM_API_URL environment variable
  3. Fallback: http://localhost:4000

Usage:
  # Terminal 1: local services
  form

  # Terminal 2: a staging dispatch API
  export FORM_API_URL=https://forms.staging.example
  form

  # Or use --api-url flag
  form --api-url http://localhost:4000
"""

from __future__ import annotations

import os

DEFAULT_API_URL = "http://localhost:4000"


class Config:
    """Config for the Form CLI."""

    def __init__(self, api_url_override: str | None = None):
        """
        Initialize config.

        Args:
            api_url_override: Optional --api-url flag value
        """
        self._api_url_override = api_url_override

    @property
    def api_url(self) -> str:
        """
        Get current API URL.

        Resolution order:
        1. --api-url flag (passed to constructor)
        2. FORM_API_URL environment variable
        3. Fallback: http://localhost:4000
        """
        if self._api_url_override:
            return self._api_url_override.rstrip("/")

        env_url = os.environ.get("FORM_API_URL")
        if env_url:
            return env_url.rstrip("/")

        return DEFAULT_API_URL
