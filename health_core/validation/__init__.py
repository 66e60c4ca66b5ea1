"""
Validation package for health inputs.

Contains:
- HealthInputValidator: field-rule checks on raw input payloads
- Error message rendering and unit conversion
- API payload schemas
"""

from health_core.validation.models import ErrorKind, FieldError, ValidationOutcome
from health_core.validation.checker import (
    HealthInputValidator,
    is_birth_year_clearly_invalid,
    validate_health_inputs,
    validate_input_value,
)
from health_core.validation.formatters import (
    bound_message,
    convert_errors_to_units,
    render_field_error,
)
from health_core.validation.schemas import (
    MeasurementPayload,
    MedicationPayload,
    ProfileUpdatePayload,
    ScreeningPayload,
    get_validation_errors,
)

__all__ = [
    "ErrorKind",
    "FieldError",
    "ValidationOutcome",
    "HealthInputValidator",
    "validate_health_inputs",
    "validate_input_value",
    "is_birth_year_clearly_invalid",
    "bound_message",
    "convert_errors_to_units",
    "render_field_error",
    "MeasurementPayload",
    "ProfileUpdatePayload",
    "MedicationPayload",
    "ScreeningPayload",
    "get_validation_errors",
]
