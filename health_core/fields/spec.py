"""
FieldRule - Machine-readable validation rule for one health input field.

Numeric bounds are in SI canonical units. For unit-bearing fields the bounds
are read from the unit definition table so validation and display can never
disagree about a range.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from health_core.types.enums import MetricType
from health_core.units import get_unit_definition


class RuleKind(str, Enum):
    """Shape of value a field accepts."""
    NUMBER = "number"
    INTEGER = "integer"
    CHOICE = "choice"


@dataclass(frozen=True)
class FieldRule:
    """Validation rule for one input field."""
    key: str
    display_name: str
    kind: RuleKind
    metric: Optional[MetricType] = None
    required: bool = False
    choices: Tuple[str, ...] = ()
    # Overrides for fields whose messages carry no unit.
    required_message: Optional[str] = None
    invalid_message: Optional[str] = None
    min_message: Optional[str] = None
    max_message: Optional[str] = None

    @property
    def bounds(self) -> Optional[Tuple[float, float]]:
        """Inclusive canonical (min, max), or None for choice fields."""
        if self.metric is None:
            return None
        return get_unit_definition(self.metric).canonical_range()

    @property
    def unit_label(self) -> str:
        """Canonical unit label, empty for unit-less fields."""
        if self.metric is None:
            return ""
        return get_unit_definition(self.metric).canonical

    @property
    def has_unit(self) -> bool:
        return bool(self.unit_label)

    def missing_message(self) -> str:
        return self.required_message or f"{self.display_name} is required"

    def type_message(self) -> str:
        if self.invalid_message:
            return self.invalid_message
        if self.kind is RuleKind.INTEGER:
            return f"{self.display_name} must be a whole number"
        return f"{self.display_name} must be a number"
