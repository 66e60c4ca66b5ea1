"""
Tests for health input validation.
"""
import json
from datetime import date

import pytest

from health_core.fields import HEALTH_INPUT_RULES
from health_core.mappings import FIELD_METRIC_MAP
from health_core.units import canonical_range_for
from health_core.validation import (
    ErrorKind,
    HealthInputValidator,
    is_birth_year_clearly_invalid,
    validate_health_inputs,
    validate_input_value,
)

BASE = {"heightCm": 175, "sex": "male"}
UNIT_FIELDS = list(FIELD_METRIC_MAP)


def with_field(field, value):
    payload = dict(BASE)
    payload[field] = value
    return payload


class TestRequiredFields:
    """Height and sex are required."""

    def test_minimal_valid_payload(self):
        outcome = validate_health_inputs(BASE)

        assert outcome.ok
        assert outcome.data == BASE
        assert outcome.errors == {}

    def test_missing_height(self):
        outcome = validate_health_inputs({"sex": "male"})

        assert not outcome.ok
        assert outcome.errors == {"heightCm": "Height is required"}

    def test_missing_or_invalid_sex(self):
        assert validate_health_inputs({"heightCm": 175}).errors == {"sex": "Please select male or female"}
        assert validate_health_inputs(with_field("sex", "other")).errors == {"sex": "Please select male or female"}

    def test_non_mapping_payload_is_empty(self):
        for payload in (None, "nope", [1, 2], 42):
            outcome = validate_health_inputs(payload)
            assert not outcome.ok
            assert set(outcome.errors) == {"heightCm", "sex"}


class TestBounds:
    """Inclusive canonical bounds for every unit-bearing field."""

    @pytest.mark.parametrize("field", UNIT_FIELDS)
    def test_bounds_are_inclusive(self, field):
        low, high = canonical_range_for(FIELD_METRIC_MAP[field])

        assert validate_health_inputs(with_field(field, low)).ok
        assert validate_health_inputs(with_field(field, high)).ok

    @pytest.mark.parametrize("field", UNIT_FIELDS)
    def test_values_outside_bounds_fail(self, field):
        low, high = canonical_range_for(FIELD_METRIC_MAP[field])

        below = validate_health_inputs(with_field(field, low - 0.001))
        above = validate_health_inputs(with_field(field, high + 0.001))

        assert list(below.errors) == [field]
        assert below.field_errors[0].kind == ErrorKind.MIN
        assert list(above.errors) == [field]
        assert above.field_errors[0].kind == ErrorKind.MAX

    def test_canonical_messages(self):
        assert validate_input_value("weightKg", 10) == "Weight must be at least 20 kg"
        assert validate_input_value("heightCm", 30) == "Height must be at least 50 cm"
        assert validate_input_value("ldlC", 13) == "LDL must be at most 12.9 mmol/L"
        assert validate_input_value("ldlC", -1) == "LDL must be at least 0 mmol/L"
        assert validate_input_value("hba1c", 200) == "HbA1c must be at most 195 mmol/mol"
        assert validate_input_value("creatinine", 3000) == "Creatinine must be at most 2650 µmol/L"
        assert validate_input_value("systolicBp", 300) == "Systolic BP must be at most 250 mmHg"
        assert validate_input_value("lpa", 800) == "Lp(a) must be at most 750 nmol/L"

    def test_structured_error_carries_bound(self):
        error = validate_health_inputs(with_field("weightKg", 10)).field_errors[0]

        assert error.field == "weightKg"
        assert error.bound == 20
        assert error.label == "kg"
        assert error.display_name == "Weight"


class TestTypes:
    """Type failures are per-field errors."""

    @pytest.mark.parametrize("value", ["80", True, float("nan"), float("inf"), [80]])
    def test_non_numbers_rejected(self, value):
        outcome = validate_health_inputs(with_field("weightKg", value))

        assert outcome.errors == {"weightKg": "Weight must be a number"}
        assert outcome.field_errors[0].kind == ErrorKind.TYPE

    def test_birth_year_must_be_whole(self):
        assert validate_input_value("birthYear", 1985.5) == "Birth year must be a whole number"

    def test_whole_float_birth_year_is_coerced(self):
        outcome = validate_health_inputs(with_field("birthYear", 1985.0))

        assert outcome.ok
        assert outcome.data["birthYear"] == 1985
        assert isinstance(outcome.data["birthYear"], int)

    def test_oversized_json_integer_is_type_error(self):
        payload = json.loads('{"heightCm": 175, "sex": "male", "weightKg": 1' + "0" * 400 + "}")

        outcome = validate_health_inputs(payload)

        assert outcome.errors == {"weightKg": "Weight must be a number"}
        assert outcome.valid_fields["heightCm"] == 175

    def test_oversized_birth_year(self):
        assert validate_input_value("birthYear", 10 ** 400) == "Birth year must be a whole number"

    def test_none_optional_is_absent(self):
        outcome = validate_health_inputs(with_field("weightKg", None))

        assert outcome.ok
        assert "weightKg" not in outcome.data

    def test_unknown_keys_dropped(self):
        outcome = validate_health_inputs(with_field("favouriteColour", "blue"))

        assert outcome.ok
        assert "favouriteColour" not in outcome.data


class TestIndependence:
    """One bad field never hides the others."""

    def test_each_field_reported_independently(self):
        payload = {**BASE, "weightKg": 500, "ldlC": 3.0, "hdlC": 99, "birthMonth": 13}

        outcome = validate_health_inputs(payload)

        assert set(outcome.errors) == {"weightKg", "hdlC", "birthMonth"}
        assert outcome.valid_fields["ldlC"] == 3.0
        assert outcome.valid_fields["heightCm"] == 175

    def test_one_message_per_field(self):
        outcome = validate_health_inputs({"weightKg": "heavy"})

        assert len(outcome.field_errors) == len(outcome.errors) == 3

    def test_deterministic(self):
        payload = {"heightCm": 20, "sex": "x", "ldlC": 40}
        assert validate_health_inputs(payload).errors == validate_health_inputs(payload).errors


class TestBirthYear:
    """Birth year bounds and partial-input handling."""

    def test_future_year_rejected(self):
        assert validate_input_value("birthYear", 2980) == "Birth year cannot be in the future"

    def test_before_1900_rejected(self):
        assert validate_input_value("birthYear", 1899) == "Birth year must be 1900 or later"

    def test_current_year_accepted(self):
        assert validate_input_value("birthYear", date.today().year) is None
        assert validate_input_value("birthYear", 1900) is None

    def test_month_range(self):
        assert validate_input_value("birthMonth", 13) == "Month must be between 1 and 12"
        assert validate_input_value("birthMonth", 0) == "Month must be between 1 and 12"
        assert validate_input_value("birthMonth", 6) is None

    def test_clearly_invalid(self):
        assert is_birth_year_clearly_invalid(2980)
        assert is_birth_year_clearly_invalid("2980")
        assert is_birth_year_clearly_invalid(1899)

    def test_partial_or_valid_years_not_flagged(self):
        for value in (298, 29, "19", date.today().year, 1985, None, "abc", "", True):
            assert not is_birth_year_clearly_invalid(value)

    def test_oversized_year_clearly_invalid(self):
        assert is_birth_year_clearly_invalid(10 ** 400)

    def test_injected_clock(self):
        validator = HealthInputValidator(today=lambda: date(2000, 1, 1))

        assert validator.validate_field("birthYear", 2001) == "Birth year cannot be in the future"
        assert validator.validate_field("birthYear", 2000) is None
        assert validator.is_birth_year_clearly_invalid(2001)


class TestSingleField:
    """validate_input_value for one field at a time."""

    def test_valid_values(self):
        assert validate_input_value("ldlC", 3.2) is None
        assert validate_input_value("sex", "female") is None

    def test_unknown_field(self):
        assert validate_input_value("unknownField", 5) is None

    def test_required_field_missing(self):
        assert validate_input_value("heightCm", None) == "Height is required"

    def test_rules_cover_all_fields(self):
        assert set(HEALTH_INPUT_RULES) == set(FIELD_METRIC_MAP) | {"sex", "birthYear", "birthMonth"}


class TestOutcome:
    """ValidationOutcome helpers."""

    def test_inputs_from_valid_outcome(self):
        inputs = validate_health_inputs({**BASE, "ldlC": 3.2}).inputs()

        assert inputs.height_cm == 175
        assert inputs.ldl_c == 3.2

    def test_inputs_from_invalid_outcome_raises(self):
        with pytest.raises(ValueError):
            validate_health_inputs({}).inputs()

    def test_to_dict(self):
        assert validate_health_inputs(BASE).to_dict() == {"ok": True, "data": BASE}
        assert validate_health_inputs({"sex": "male"}).to_dict() == {
            "ok": False,
            "errors": {"heightCm": "Height is required"},
        }
