"""
Dispatch API configuration: all environment variables in one place.

Read from environment at runtime.
"""

from __future__ import annotations

import os


class Settings:
    """Validation & dispatch API settings from environment variables."""

    # Receiver (persistence API)
    RECEIVER_SERVICE_URL: str = os.environ.get("RECEIVER_SERVICE_URL", "http://localhost:5000").rstrip("/")
    FORWARD_TIMEOUT_SECONDS: float = float(os.environ.get("FORWARD_TIMEOUT_SECONDS", "10"))
    HEALTH_TIMEOUT_SECONDS: float = float(os.environ.get("HEALTH_TIMEOUT_SECONDS", "2"))

    # Server
    PORT: int = int(os.environ.get("PORT", "4000"))

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")


# Singleton instance
settings = Settings()

if settings.FORWARD_TIMEOUT_SECONDS <= 0 or settings.HEALTH_TIMEOUT_SECONDS <= 0:
    raise RuntimeError("FORWARD_TIMEOUT_SECONDS and HEALTH_TIMEOUT_SECONDS must be positive")
