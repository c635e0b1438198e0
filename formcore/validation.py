"""
Form Kernel: Field Validation

One validation module for every tier. The client runs it before sending,
the dispatch API runs it before forwarding, and the persistence API reuses
the presence and age checks on what it receives.

Checks run in a fixed order and stop at the first failure:
presence, name, mobile, date of birth (age), action.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from formcore.types import (
    MAX_AGE,
    MIN_AGE,
    MOBILE_PATTERN,
    NAME_PATTERN,
    SUBMISSION_FIELDS,
    Action,
    ValidatedSubmission,
)

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FormValidationError(ValueError):
    """Malformed or missing input. Always a 400, never forwarded."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


class MissingField(FormValidationError):
    pass


class InvalidName(FormValidationError):
    pass


class InvalidMobile(FormValidationError):
    pass


class InvalidDob(FormValidationError):
    pass


class InvalidAction(FormValidationError):
    pass


class InvalidAge(FormValidationError):
    pass


# ---------------------------------------------------------------------------
# Field checks
# ---------------------------------------------------------------------------


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def require_fields(data: Mapping[str, Any], fields: Iterable[str]) -> None:
    """Raise MissingField if any of the named fields is absent or blank."""
    fields = tuple(fields)
    for name in fields:
        if is_blank(data.get(name)):
            listed = ", ".join(fields)
            raise MissingField(f"All fields ({listed}) are required", field=name)


def validate_name(value: str) -> str:
    """Return the trimmed name, or raise InvalidName."""
    name = value.strip()
    if not NAME_PATTERN.fullmatch(name):
        raise InvalidName("Name should contain only letters (a-zA-Z) and spaces", field="name")
    return name


def validate_mobile(value: str) -> str:
    """Return the trimmed mobile number, or raise InvalidMobile."""
    mobile = value.strip()
    if not MOBILE_PATTERN.fullmatch(mobile):
        raise InvalidMobile("Mobile number should be 10 digits starting with 6, 7, 8, or 9", field="mobile")
    return mobile


def parse_dob(value: str) -> date:
    """
    Parse a date of birth.

    Accepts an ISO date (YYYY-MM-DD) or an ISO datetime, in which case only
    the date part is kept.

    Raises:
        InvalidDob: if the value is not a recognizable date
    """
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        raise InvalidDob("Invalid date of birth format or unrealistic age", field="dob") from None


def compute_age(dob: date, today: date | None = None) -> int:
    """
    Age in whole years as of `today`.

    The age only increments on or after the exact anniversary:
    born 2000-06-15 is 23 on 2024-06-14 and 24 on 2024-06-15.
    """
    today = today or date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def derive_age(value: str, today: date | None = None) -> tuple[date, int]:
    """
    Parse a date of birth and derive the age from it.

    Raises:
        InvalidDob: unparseable, not strictly in the past, or age outside [0, 150]
    """
    today = today or date.today()
    dob = parse_dob(value)
    if dob >= today:
        raise InvalidDob("Date of birth should be in the past", field="dob")
    age = compute_age(dob, today)
    if not MIN_AGE <= age <= MAX_AGE:
        raise InvalidDob("Invalid date of birth format or unrealistic age", field="dob")
    return dob, age


def validate_action(value: str) -> Action:
    """Return the parsed Action, or raise InvalidAction."""
    try:
        return Action.parse(value)
    except ValueError:
        raise InvalidAction("Invalid action. Must be create, update, or delete.", field="action") from None


def coerce_age(value: Any) -> int:
    """
    Coerce an age supplied by an upstream caller to int.

    Raises:
        InvalidAge: not an integer, or outside [0, 150]
    """
    if isinstance(value, bool):
        raise InvalidAge("Age must be a whole number", field="age")
    try:
        age = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidAge("Age must be a whole number", field="age") from None
    if isinstance(value, float) and not value.is_integer():
        raise InvalidAge("Age must be a whole number", field="age")
    if not MIN_AGE <= age <= MAX_AGE:
        raise InvalidAge(f"Age must be between {MIN_AGE} and {MAX_AGE}", field="age")
    return age


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_submission(data: Mapping[str, Any], today: date | None = None) -> ValidatedSubmission:
    """
    Validate a raw {name, mobile, dob, action} submission.

    Returns a ValidatedSubmission with name and mobile trimmed, dob normalized
    to YYYY-MM-DD, the derived age, and the parsed action.

    Raises:
        FormValidationError: the first failing check, as one of its subclasses
    """
    require_fields(data, SUBMISSION_FIELDS)
    name = validate_name(str(data["name"]))
    mobile = validate_mobile(str(data["mobile"]))
    dob, age = derive_age(str(data["dob"]), today)
    action = validate_action(str(data["action"]))
    return ValidatedSubmission(
        name=name,
        mobile=mobile,
        dob=dob.isoformat(),
        age=age,
        action=action,
    )
