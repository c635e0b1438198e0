"""
Repository layer for the persistence API.

All SQL lives here and ONLY here. No database access outside this module.
"""

from receiver.repos.record_repo import RecordRepo, UpsertResult

__all__ = [
    "RecordRepo",
    "UpsertResult",
]
