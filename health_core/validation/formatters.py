"""
Error message formatting across unit systems.

Validation messages are phrased in SI canonical units ("LDL must be at most
12.9 mmol/L"). A conventional-units user needs "LDL must be at most 499
mg/dL". Two routes produce the same text:

- render_field_error() builds the message from a structured FieldError.
- convert_errors_to_units() rewrites already-rendered canonical messages,
  for callers that only have the field -> message map.
"""

import re
from functools import lru_cache
from typing import Dict, Mapping, Pattern, Union

from health_core.mappings import metric_for_field
from health_core.types.enums import MetricType, UnitSystem
from health_core.units import (
    coerce_unit_system,
    format_number,
    from_canonical,
    get_unit_definition,
    label_for,
    decimal_places_for,
)
from health_core.utils import get_logger
from health_core.validation.models import ErrorKind, FieldError

logger = get_logger("ErrorFormatter")


def format_canonical_bound(bound: float) -> str:
    """Bound as written in canonical messages: "20", "12.9", "0"."""
    return f"{bound:g}"


def bound_message(
    display_name: str,
    kind: ErrorKind,
    bound: float,
    metric: MetricType,
    unit_system: Union[UnitSystem, str] = UnitSystem.SI,
) -> str:
    """'<Display Name> must be at <least|most> <number> <unit>' in the given system."""
    system = coerce_unit_system(unit_system)
    unit_def = get_unit_definition(metric)
    word = "least" if kind is ErrorKind.MIN else "most"

    if system is UnitSystem.SI or unit_def.is_identity(system):
        number = format_canonical_bound(bound)
    else:
        number = format_number(unit_def.from_canonical[system](bound), unit_def.decimal_places[system])

    return f"{display_name} must be at {word} {number} {unit_def.labels[system]}"


def render_field_error(error: FieldError, unit_system: Union[UnitSystem, str]) -> str:
    """
    Render a FieldError in ``unit_system``.

    Only unit-bearing bound failures change with the unit system; every other
    message (required, type, birth year) is returned as-is.
    """
    system = coerce_unit_system(unit_system)
    is_unit_bound = (
        error.kind in (ErrorKind.MIN, ErrorKind.MAX)
        and error.metric is not None
        and error.bound is not None
        and bool(error.label)
    )
    if system is UnitSystem.SI or not is_unit_bound:
        return error.message
    return bound_message(error.display_name, error.kind, error.bound, error.metric, system)


# ---------------------------------------------------------------------------
# Regex rewriting of canonical messages
# ---------------------------------------------------------------------------

@lru_cache(maxsize=None)
def _canonical_value_pattern(label: str) -> Pattern[str]:
    # A number not preceded by a digit, dot or sign, then the canonical label
    # as a whole token.
    return re.compile(rf"(?<![\d.\-])(\d+(?:\.\d+)?)\s*{re.escape(label)}(?!\w)")


def _convert_message(field: str, message: str, system: UnitSystem) -> str:
    metric = metric_for_field(field)
    if metric is None or not isinstance(message, str):
        return message

    unit_def = get_unit_definition(metric)
    if unit_def.is_identity(system):
        return message

    display_label = label_for(metric, system)
    decimals = decimal_places_for(metric, system)

    def replace(match: "re.Match[str]") -> str:
        try:
            converted = from_canonical(metric, float(match.group(1)), system)
            return f"{format_number(converted, decimals)} {display_label}"
        except (ValueError, ArithmeticError) as e:
            logger.warning(f"Could not convert {match.group(0)!r} for {field}: {e}")
            return match.group(0)

    return _canonical_value_pattern(unit_def.canonical).sub(replace, message)


def convert_errors_to_units(
    errors: Dict[str, str],
    unit_system: Union[UnitSystem, str],
) -> Dict[str, str]:
    """
    Rewrite canonical-unit error messages into ``unit_system``.

    SI returns the very same mapping. Fields without a unit mapping, and any
    text that does not match "<number> <canonical label>", pass through
    unchanged. Never raises.
    """
    try:
        system = coerce_unit_system(unit_system)
    except ValueError:
        logger.warning(f"Unknown unit system {unit_system!r}; leaving error messages unconverted")
        return errors

    if system is UnitSystem.SI:
        return errors

    if not isinstance(errors, Mapping):
        logger.warning(f"Expected a field -> message mapping, got {type(errors).__name__}")
        return errors

    return {field: _convert_message(field, message, system) for field, message in errors.items()}
