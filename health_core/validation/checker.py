"""
Health input validation.

Checks a raw camelCase payload against the field library: required fields,
value types, and inclusive canonical (SI) range bounds. Every field is
checked independently, so one bad value never hides problems elsewhere.
"""

import math
from collections.abc import Mapping
from datetime import date
from typing import Any, Callable, Dict, Optional

from health_core.constants import BIRTH_YEAR_DIGITS, MIN_BIRTH_YEAR
from health_core.fields import HEALTH_INPUT_RULES, FieldRule, RuleKind
from health_core.utils import get_logger
from health_core.validation.formatters import bound_message
from health_core.validation.models import ErrorKind, FieldError, ValidationOutcome

logger = get_logger("HealthInputValidator")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid measurement.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class HealthInputValidator:
    """
    Validates health inputs against field rules.

    Checks, in order, with the first failure winning:
    - Presence (required fields)
    - Type (numbers, whole numbers, choices)
    - Range (inclusive canonical bounds)
    """

    def __init__(
        self,
        rules: Optional[Dict[str, FieldRule]] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize validator with optional custom rules.

        Args:
            rules: Field rules keyed by input field name
            today: Clock for the birth-year upper bound (defaults to date.today)
        """
        self.rules = rules or HEALTH_INPUT_RULES
        self.today = today or date.today

    def _bounds(self, rule: FieldRule) -> Optional[tuple]:
        bounds = rule.bounds
        if bounds is None:
            return None
        low, high = bounds
        if rule.key == "birthYear":
            high = float(self.today().year)
        return low, high

    def _error(self, rule: FieldRule, kind: ErrorKind, message: str, bound: Optional[float] = None) -> FieldError:
        return FieldError(
            field=rule.key,
            kind=kind,
            message=message,
            display_name=rule.display_name,
            bound=bound,
            metric=rule.metric,
            label=rule.unit_label,
        )

    def _range_message(self, rule: FieldRule, kind: ErrorKind, bound: float) -> str:
        override = rule.min_message if kind is ErrorKind.MIN else rule.max_message
        if override:
            return override
        return bound_message(rule.display_name, kind, bound, rule.metric)

    def check_field(self, rule: FieldRule, value: Any) -> Optional[FieldError]:
        """
        Check one value against one rule.

        Returns:
            FieldError for the first failing check, or None if valid
        """
        if value is None:
            if rule.required:
                return self._error(rule, ErrorKind.REQUIRED, rule.missing_message())
            return None

        if rule.kind is RuleKind.CHOICE:
            if not isinstance(value, str) or value not in rule.choices:
                return self._error(rule, ErrorKind.CHOICE, rule.invalid_message or rule.type_message())
            return None

        if not _is_number(value):
            return self._error(rule, ErrorKind.TYPE, rule.type_message())
        try:
            number = float(value)
        except OverflowError:
            # JSON integers are unbounded.
            return self._error(rule, ErrorKind.TYPE, rule.type_message())
        if not math.isfinite(number):
            return self._error(rule, ErrorKind.TYPE, rule.type_message())
        if rule.kind is RuleKind.INTEGER and not number.is_integer():
            return self._error(rule, ErrorKind.TYPE, rule.type_message())

        bounds = self._bounds(rule)
        if bounds is not None:
            low, high = bounds
            if number < low:
                return self._error(rule, ErrorKind.MIN, self._range_message(rule, ErrorKind.MIN, low), low)
            if number > high:
                return self._error(rule, ErrorKind.MAX, self._range_message(rule, ErrorKind.MAX, high), high)

        return None

    def validate_field(self, field_name: str, value: Any) -> Optional[str]:
        """
        Validate a single field value.

        Returns:
            Canonical error message, or None if valid or the field is unknown
        """
        rule = self.rules.get(field_name)
        if rule is None:
            logger.debug(f"No rule for field {field_name!r}; nothing to validate")
            return None
        error = self.check_field(rule, value)
        return error.message if error else None

    def validate_all(self, raw_inputs: Any) -> ValidationOutcome:
        """
        Validate a full inputs payload.

        Args:
            raw_inputs: camelCase dict of canonical values (anything else is
                treated as an empty payload)

        Returns:
            ValidationOutcome with validated data or per-field errors
        """
        if raw_inputs is None:
            raw_inputs = {}
        elif not isinstance(raw_inputs, Mapping):
            logger.warning(f"Expected a mapping of inputs, got {type(raw_inputs).__name__}; treating as empty")
            raw_inputs = {}

        unknown = sorted(str(key) for key in raw_inputs if key not in self.rules)
        if unknown:
            logger.debug(f"Dropping unknown input fields: {unknown}")

        field_errors = []
        valid: Dict[str, Any] = {}
        for key, rule in self.rules.items():
            value = raw_inputs.get(key)
            error = self.check_field(rule, value)
            if error is not None:
                field_errors.append(error)
            elif value is not None:
                valid[key] = int(value) if rule.kind is RuleKind.INTEGER else value

        errors = {err.field: err.message for err in field_errors}
        if errors:
            logger.debug(f"Validation failed for {len(errors)} field(s): {sorted(errors)}")
            return ValidationOutcome(ok=False, errors=errors, field_errors=field_errors, valid_fields=valid)

        return ValidationOutcome(ok=True, data=valid, valid_fields=dict(valid))

    def is_birth_year_clearly_invalid(self, value: Any) -> bool:
        """
        True only for a complete (4+ digit) year outside 1900..current year.

        Partial input such as "198" while the user is still typing, and
        anything non-numeric, is not clearly invalid.
        """
        if value is None or isinstance(value, bool):
            return False
        try:
            year = float(value.strip()) if isinstance(value, str) else float(value)
        except OverflowError:
            # Far too many digits to be a year.
            return True
        except (TypeError, ValueError):
            return False
        if not math.isfinite(year):
            return False
        if abs(year) < 10 ** (BIRTH_YEAR_DIGITS - 1):
            return False
        return year < MIN_BIRTH_YEAR or year > self.today().year


# Default validator instance
_default_validator = HealthInputValidator()


def validate_health_inputs(raw_inputs: Any) -> ValidationOutcome:
    """Validate a raw inputs payload with the default field rules."""
    return _default_validator.validate_all(raw_inputs)


def validate_input_value(field_name: str, value: Any) -> Optional[str]:
    """Validate one field; returns the error message or None."""
    return _default_validator.validate_field(field_name, value)


def is_birth_year_clearly_invalid(value: Any) -> bool:
    """Whether a (possibly partial) birth year is definitely out of range."""
    return _default_validator.is_birth_year_clearly_invalid(value)
