# Core module exports
from .types import HealthInputs, HealthResults, MetricType, Sex, Suggestion, UnitSystem
from .units import (
    UNIT_DEFS,
    UnitDefinition,
    decimal_places_for,
    detect_unit_system,
    format_display_value,
    format_with_unit,
    from_canonical,
    label_for,
    range_for,
    to_canonical,
)
from .mappings import FIELD_METRIC_MAP, METRIC_FIELD_MAP, field_for_metric, metric_for_field
from .validation import (
    ValidationOutcome,
    convert_errors_to_units,
    is_birth_year_clearly_invalid,
    validate_health_inputs,
    validate_input_value,
)
from .calculations import calculate_health_results
from .suggestions import generate_suggestions

__all__ = [
    "HealthInputs",
    "HealthResults",
    "MetricType",
    "Sex",
    "Suggestion",
    "UnitSystem",
    "UNIT_DEFS",
    "UnitDefinition",
    "decimal_places_for",
    "detect_unit_system",
    "format_display_value",
    "format_with_unit",
    "from_canonical",
    "label_for",
    "range_for",
    "to_canonical",
    "FIELD_METRIC_MAP",
    "METRIC_FIELD_MAP",
    "field_for_metric",
    "metric_for_field",
    "ValidationOutcome",
    "convert_errors_to_units",
    "is_birth_year_clearly_invalid",
    "validate_health_inputs",
    "validate_input_value",
    "calculate_health_results",
    "generate_suggestions",
]
