"""
Form Kernel: validation and action dispatch shared by every tier.

  types       patterns, limits, the Action enum and its verb table
  validation  field checks, age derivation, the error taxonomy
"""

from formcore.types import (
    ACTION_METHODS,
    MAX_AGE,
    MIN_AGE,
    RECORD_FIELDS,
    SUBMISSION_FIELDS,
    Action,
    ValidatedSubmission,
)
from formcore.validation import (
    FormValidationError,
    InvalidAction,
    InvalidAge,
    InvalidDob,
    InvalidMobile,
    InvalidName,
    MissingField,
    coerce_age,
    compute_age,
    derive_age,
    parse_dob,
    require_fields,
    validate_action,
    validate_mobile,
    validate_name,
    validate_submission,
)

__all__ = [
    "Action",
    "ACTION_METHODS",
    "ValidatedSubmission",
    "MIN_AGE",
    "MAX_AGE",
    "SUBMISSION_FIELDS",
    "RECORD_FIELDS",
    "FormValidationError",
    "MissingField",
    "InvalidName",
    "InvalidMobile",
    "InvalidDob",
    "InvalidAction",
    "InvalidAge",
    "require_fields",
    "validate_name",
    "validate_mobile",
    "parse_dob",
    "compute_age",
    "derive_age",
    "validate_action",
    "coerce_age",
    "validate_submission",
]
