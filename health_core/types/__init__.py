"""Core types package for health inputs and results."""

from health_core.types.enums import (
    MetricType,
    UnitSystem,
    Sex,
    SuggestionCategory,
    SuggestionPriority,
)
from health_core.types.models import (
    HealthInputs,
    HealthResults,
    Suggestion,
    ApiMeasurement,
    ApiProfile,
    ApiMedication,
    ApiScreening,
    DrugSelection,
)

__all__ = [
    "MetricType",
    "UnitSystem",
    "Sex",
    "SuggestionCategory",
    "SuggestionPriority",
    "HealthInputs",
    "HealthResults",
    "Suggestion",
    "ApiMeasurement",
    "ApiProfile",
    "ApiMedication",
    "ApiScreening",
    "DrugSelection",
]
