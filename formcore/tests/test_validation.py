"""
Form Kernel: Validation Tests

Field checks run in order (presence, name, mobile, dob, action) and the
first failure wins. Age derivation only increments on the anniversary.
"""

from datetime import date

import pytest

from formcore import (
    ACTION_METHODS,
    Action,
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
    require_fields,
    validate_mobile,
    validate_name,
    validate_submission,
)

TODAY = date(2024, 6, 15)


def _submission(**overrides):
    data = {"name": "Asha Rao", "mobile": "9876543210", "dob": "1995-01-01", "action": "create"}
    data.update(overrides)
    return data


# ============================================================================
# Name
# ============================================================================


class TestName:
    @pytest.mark.parametrize("name", ["Asha", "Asha Rao", "  Mary  Jane ", "ZZ top"])
    def test_letters_and_spaces_pass(self, name):
        assert validate_name(name) == name.strip()

    @pytest.mark.parametrize("name", ["R2D2", "Asha-Rao", "O'Brien", "Asha_Rao", "José"])
    def test_digits_symbols_and_non_ascii_fail(self, name):
        with pytest.raises(InvalidName) as exc:
            validate_name(name)
        assert exc.value.field == "name"

    def test_digit_after_newline_fails(self):
        with pytest.raises(InvalidName):
            validate_name("Asha\n1")


# ============================================================================
# Mobile
# ============================================================================


class TestMobile:
    @pytest.mark.parametrize("mobile", ["9876543210", "6000000000", "7123456789", "8999999999"])
    def test_valid_mobiles(self, mobile):
        assert validate_mobile(mobile) == mobile

    def test_mobile_is_trimmed(self):
        assert validate_mobile(" 9876543210 ") == "9876543210"

    @pytest.mark.parametrize(
        "mobile",
        [
            "1234567890",  # bad first digit
            "5876543210",  # bad first digit
            "98765432",  # too short
            "98765432101",  # too long
            "98765 43210",  # inner space
            "987654321a",  # letter
            "٩٨٧٦٥٤٣٢١٠",  # non-ASCII digits
        ],
    )
    def test_invalid_mobiles(self, mobile):
        with pytest.raises(InvalidMobile) as exc:
            validate_mobile(mobile)
        assert exc.value.field == "mobile"


# ============================================================================
# Age derivation
# ============================================================================


class TestAge:
    def test_day_before_anniversary(self):
        assert compute_age(date(2000, 6, 15), today=date(2024, 6, 14)) == 23

    def test_on_anniversary(self):
        assert compute_age(date(2000, 6, 15), today=date(2024, 6, 15)) == 24

    def test_after_anniversary(self):
        assert compute_age(date(2000, 6, 15), today=date(2024, 12, 31)) == 24

    def test_earlier_month_same_year(self):
        assert compute_age(date(2000, 6, 15), today=date(2024, 1, 1)) == 23

    def test_leap_day_birthday(self):
        assert compute_age(date(2000, 2, 29), today=date(2023, 2, 28)) == 22
        assert compute_age(date(2000, 2, 29), today=date(2023, 3, 1)) == 23

    def test_derive_age_accepts_iso_datetime(self):
        dob, age = derive_age("2000-06-15T10:30:00", today=TODAY)
        assert dob == date(2000, 6, 15)
        assert age == 24

    def test_derive_age_newborn(self):
        _, age = derive_age("2024-06-14", today=TODAY)
        assert age == 0

    @pytest.mark.parametrize("dob", ["not-a-date", "15/06/2000", "2000-13-01", ""])
    def test_unparseable_dob(self, dob):
        with pytest.raises(InvalidDob):
            derive_age(dob, today=TODAY)

    def test_dob_today_is_rejected(self):
        with pytest.raises(InvalidDob) as exc:
            derive_age("2024-06-15", today=TODAY)
        assert "past" in exc.value.message

    def test_future_dob_is_rejected(self):
        with pytest.raises(InvalidDob):
            derive_age("2030-01-01", today=TODAY)

    def test_age_over_150_is_rejected(self):
        with pytest.raises(InvalidDob):
            derive_age("1850-01-01", today=TODAY)

    def test_age_exactly_150_passes(self):
        _, age = derive_age("1874-06-15", today=TODAY)
        assert age == 150


# ============================================================================
# Actions
# ============================================================================


class TestAction:
    @pytest.mark.parametrize("raw,expected", [("create", Action.CREATE), (" UPDATE ", Action.UPDATE), ("Delete", Action.DELETE)])
    def test_parse_is_case_insensitive_and_trimmed(self, raw, expected):
        assert Action.parse(raw) is expected

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            Action.parse("upsert")

    def test_every_action_has_a_verb(self):
        assert set(ACTION_METHODS) == set(Action)
        assert Action.CREATE.http_method == "POST"
        assert Action.UPDATE.http_method == "PUT"
        assert Action.DELETE.http_method == "DELETE"


# ============================================================================
# Presence and age coercion
# ============================================================================


class TestPresence:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values_are_missing(self, value):
        with pytest.raises(MissingField) as exc:
            require_fields({"mobile": value}, ["mobile"])
        assert exc.value.field == "mobile"

    def test_zero_is_present(self):
        require_fields({"age": 0}, ["age"])

    def test_absent_key_is_missing(self):
        with pytest.raises(MissingField):
            require_fields({}, ["name"])


class TestCoerceAge:
    @pytest.mark.parametrize("value,expected", [(29, 29), ("29", 29), (" 7 ", 7), (0, 0), (150, 150), (30.0, 30)])
    def test_coercible(self, value, expected):
        assert coerce_age(value) == expected

    @pytest.mark.parametrize("value", ["abc", None, True, 12.5, -1, 151, [3]])
    def test_not_coercible(self, value):
        with pytest.raises(InvalidAge):
            coerce_age(value)


# ============================================================================
# Full submission
# ============================================================================


class TestValidateSubmission:
    def test_valid_submission_is_normalized(self):
        result = validate_submission(
            _submission(name="  Asha Rao ", mobile=" 9876543210", action=" CREATE "),
            today=TODAY,
        )
        assert result.name == "Asha Rao"
        assert result.mobile == "9876543210"
        assert result.dob == "1995-01-01"
        assert result.age == 29
        assert result.action is Action.CREATE
        assert result.to_dict()["action"] == "create"

    def test_missing_field_wins_over_other_errors(self):
        with pytest.raises(MissingField):
            validate_submission(_submission(name="R2D2", action=None), today=TODAY)

    def test_name_checked_before_mobile(self):
        with pytest.raises(InvalidName):
            validate_submission(_submission(name="R2D2", mobile="123"), today=TODAY)

    def test_mobile_checked_before_dob(self):
        with pytest.raises(InvalidMobile):
            validate_submission(_submission(mobile="123", dob="garbage"), today=TODAY)

    def test_dob_checked_before_action(self):
        with pytest.raises(InvalidDob):
            validate_submission(_submission(dob="garbage", action="upsert"), today=TODAY)

    def test_invalid_action(self):
        with pytest.raises(InvalidAction) as exc:
            validate_submission(_submission(action="upsert"), today=TODAY)
        assert exc.value.field == "action"

    def test_numeric_mobile_is_accepted(self):
        result = validate_submission(_submission(mobile=9876543210), today=TODAY)
        assert result.mobile == "9876543210"

    def test_all_errors_share_a_base(self):
        for cls in (MissingField, InvalidName, InvalidMobile, InvalidDob, InvalidAction, InvalidAge):
            assert issubclass(cls, FormValidationError)
