"""Errors raised by persistence routes and rendered by the app's handlers."""

from __future__ import annotations


class RecordNotFound(Exception):
    """No record matches the mobile. Reported as 404, not a server fault."""

    def __init__(self, mobile: str):
        super().__init__(f"Record not found for mobile {mobile}")
        self.mobile = mobile


class StoreError(Exception):
    """The record store rejected or failed an operation."""

    def __init__(self, message: str, cause: Exception):
        super().__init__(message)
        self.message = message
        self.error = str(cause)
