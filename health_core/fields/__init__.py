"""Health input field rules."""

from health_core.fields.spec import FieldRule, RuleKind
from health_core.fields.library import HealthFieldLibrary, HEALTH_INPUT_RULES

__all__ = ["FieldRule", "RuleKind", "HealthFieldLibrary", "HEALTH_INPUT_RULES"]
