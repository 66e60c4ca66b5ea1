"""
Field Library - Validation rules for every health input field.

All numeric values are in SI canonical units:
    height/waist: cm | weight: kg | BP: mmHg
    HbA1c: mmol/mol (IFCC) | lipids: mmol/L
"""

from typing import Dict, Optional, Tuple

from health_core.fields.spec import FieldRule, RuleKind
from health_core.types.enums import MetricType, Sex


class HealthFieldLibrary:
    """Library of health input field rules."""

    # =========================================================================
    # REQUIRED
    # =========================================================================

    HEIGHT = FieldRule(
        key="heightCm",
        display_name="Height",
        kind=RuleKind.NUMBER,
        metric=MetricType.HEIGHT,
        required=True,
    )

    SEX = FieldRule(
        key="sex",
        display_name="Sex",
        kind=RuleKind.CHOICE,
        required=True,
        choices=tuple(s.value for s in Sex),
        required_message="Please select male or female",
        invalid_message="Please select male or female",
    )

    # =========================================================================
    # BODY MEASUREMENTS
    # =========================================================================

    WEIGHT = FieldRule(key="weightKg", display_name="Weight", kind=RuleKind.NUMBER, metric=MetricType.WEIGHT)
    WAIST = FieldRule(key="waistCm", display_name="Waist", kind=RuleKind.NUMBER, metric=MetricType.WAIST)

    # =========================================================================
    # BIRTH INFO
    # =========================================================================

    BIRTH_YEAR = FieldRule(
        key="birthYear",
        display_name="Birth year",
        kind=RuleKind.INTEGER,
        metric=MetricType.BIRTH_YEAR,
        min_message="Birth year must be 1900 or later",
        max_message="Birth year cannot be in the future",
    )

    BIRTH_MONTH = FieldRule(
        key="birthMonth",
        display_name="Month",
        kind=RuleKind.INTEGER,
        metric=MetricType.BIRTH_MONTH,
        min_message="Month must be between 1 and 12",
        max_message="Month must be between 1 and 12",
    )

    # =========================================================================
    # BLOOD TESTS
    # =========================================================================

    HBA1C = FieldRule(key="hba1c", display_name="HbA1c", kind=RuleKind.NUMBER, metric=MetricType.HBA1C)
    LDL = FieldRule(key="ldlC", display_name="LDL", kind=RuleKind.NUMBER, metric=MetricType.LDL)
    TOTAL_CHOLESTEROL = FieldRule(
        key="totalCholesterol",
        display_name="Total cholesterol",
        kind=RuleKind.NUMBER,
        metric=MetricType.TOTAL_CHOLESTEROL,
    )
    HDL = FieldRule(key="hdlC", display_name="HDL", kind=RuleKind.NUMBER, metric=MetricType.HDL)
    TRIGLYCERIDES = FieldRule(
        key="triglycerides",
        display_name="Triglycerides",
        kind=RuleKind.NUMBER,
        metric=MetricType.TRIGLYCERIDES,
    )
    APOB = FieldRule(key="apoB", display_name="ApoB", kind=RuleKind.NUMBER, metric=MetricType.APOB)
    CREATININE = FieldRule(
        key="creatinine",
        display_name="Creatinine",
        kind=RuleKind.NUMBER,
        metric=MetricType.CREATININE,
    )
    PSA = FieldRule(key="psa", display_name="PSA", kind=RuleKind.NUMBER, metric=MetricType.PSA)
    LPA = FieldRule(key="lpa", display_name="Lp(a)", kind=RuleKind.NUMBER, metric=MetricType.LPA)

    # =========================================================================
    # BLOOD PRESSURE
    # =========================================================================

    SYSTOLIC_BP = FieldRule(
        key="systolicBp",
        display_name="Systolic BP",
        kind=RuleKind.NUMBER,
        metric=MetricType.SYSTOLIC_BP,
    )
    DIASTOLIC_BP = FieldRule(
        key="diastolicBp",
        display_name="Diastolic BP",
        kind=RuleKind.NUMBER,
        metric=MetricType.DIASTOLIC_BP,
    )

    @classmethod
    def all_rules(cls) -> Tuple[FieldRule, ...]:
        """Every rule, in form order."""
        return (
            cls.HEIGHT, cls.SEX,
            cls.WEIGHT, cls.WAIST,
            cls.BIRTH_YEAR, cls.BIRTH_MONTH,
            cls.HBA1C, cls.LDL, cls.TOTAL_CHOLESTEROL, cls.HDL, cls.TRIGLYCERIDES,
            cls.APOB, cls.CREATININE, cls.PSA, cls.LPA,
            cls.SYSTOLIC_BP, cls.DIASTOLIC_BP,
        )

    @classmethod
    def get(cls, key: str) -> Optional[FieldRule]:
        return HEALTH_INPUT_RULES.get(key)


HEALTH_INPUT_RULES: Dict[str, FieldRule] = {rule.key: rule for rule in HealthFieldLibrary.all_rules()}
