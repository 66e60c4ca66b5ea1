"""
Validation models for health input checking.

FieldError keeps the structured facts behind a message (which rule failed,
the canonical bound, the metric) so the message can be rendered directly in
either unit system instead of being rewritten after the fact.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from health_core.types.enums import MetricType, UnitSystem
from health_core.types.models import HealthInputs


class ErrorKind(str, Enum):
    """Which rule a field failed."""
    REQUIRED = "required"
    TYPE = "type"
    CHOICE = "choice"
    MIN = "min"
    MAX = "max"


class FieldError(BaseModel):
    """One field's validation failure."""
    field: str
    kind: ErrorKind
    message: str  # canonical (SI) phrasing
    display_name: str
    bound: Optional[float] = None
    metric: Optional[MetricType] = None
    label: str = ""

    def render(self, unit_system: Union[UnitSystem, str]) -> str:
        """Message phrased in ``unit_system``."""
        from health_core.validation.formatters import render_field_error

        return render_field_error(self, unit_system)


@dataclass
class ValidationOutcome:
    """Result of validating one health inputs payload."""
    ok: bool
    data: Optional[Dict[str, Any]] = None
    errors: Dict[str, str] = field(default_factory=dict)
    field_errors: List[FieldError] = field(default_factory=list)
    # Fields that passed, even when others failed.
    valid_fields: Dict[str, Any] = field(default_factory=dict)

    def errors_for(self, unit_system: Union[UnitSystem, str]) -> Dict[str, str]:
        """Field errors rendered in the given unit system."""
        return {err.field: err.render(unit_system) for err in self.field_errors}

    def inputs(self) -> HealthInputs:
        """Validated data as HealthInputs. Only valid when ``ok``."""
        if not self.ok or self.data is None:
            raise ValueError(f"Cannot build inputs from invalid data: {sorted(self.errors)}")
        return HealthInputs.model_validate(self.data)

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "errors": self.errors}
