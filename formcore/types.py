"""
Form Kernel: Shared Types

Patterns, limits, and the closed action enumeration used by every tier:
the client, the dispatch API, and the persistence API.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# ASCII-only classes; matched with fullmatch so a trailing newline never passes.
NAME_PATTERN = re.compile(r"[A-Za-z\s]+", re.ASCII)
MOBILE_PATTERN = re.compile(r"[6789]\d{9}", re.ASCII)


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

MIN_AGE = 0
MAX_AGE = 150

SUBMISSION_FIELDS: tuple[str, ...] = ("name", "mobile", "dob", "action")
RECORD_FIELDS: tuple[str, ...] = ("name", "mobile", "dob", "age", "action")


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


class Action(str, Enum):
    """Logical operation requested by the caller."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: str) -> Action:
        """
        Parse a raw action string, case-insensitive and trimmed.

        Raises:
            ValueError: if the value is not one of create, update, delete
        """
        return cls(value.strip().lower())

    @property
    def http_method(self) -> str:
        return ACTION_METHODS[self]


# Action -> HTTP verb understood by the persistence API.
# create inserts, update upserts, delete removes.
ACTION_METHODS: dict[Action, str] = {
    Action.CREATE: "POST",
    Action.UPDATE: "PUT",
    Action.DELETE: "DELETE",
}


# ---------------------------------------------------------------------------
# Validated submission
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidatedSubmission:
    """A form submission that passed every field check."""

    name: str
    mobile: str
    dob: str  # normalized YYYY-MM-DD
    age: int
    action: Action

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["action"] = self.action.value
        return data
