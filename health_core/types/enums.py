"""
Core type enums for health inputs.

Defines MetricType, UnitSystem, Sex and the suggestion classification enums.
"""

from enum import Enum


class MetricType(str, Enum):
    """Trackable clinical quantity. Stored values are always SI canonical."""
    HEIGHT = "height"
    WEIGHT = "weight"
    WAIST = "waist"
    HBA1C = "hba1c"
    LDL = "ldl"
    HDL = "hdl"
    TRIGLYCERIDES = "triglycerides"
    TOTAL_CHOLESTEROL = "total_cholesterol"
    SYSTOLIC_BP = "systolic_bp"
    DIASTOLIC_BP = "diastolic_bp"
    APOB = "apob"
    CREATININE = "creatinine"
    PSA = "psa"
    LPA = "lpa"
    # Profile demographics (unit-less)
    SEX = "sex"
    BIRTH_YEAR = "birth_year"
    BIRTH_MONTH = "birth_month"


class UnitSystem(str, Enum):
    """SI = metric + mmol/L (NZ, UK, AU, EU). Conventional = imperial + mg/dL (US)."""
    SI = "si"
    CONVENTIONAL = "conventional"


class Sex(str, Enum):
    """Biological sex as used by the clinical formulas."""
    MALE = "male"
    FEMALE = "female"


class SuggestionCategory(str, Enum):
    """Grouping shown in the results panel."""
    NUTRITION = "nutrition"
    EXERCISE = "exercise"
    BLOODWORK = "bloodwork"
    BLOOD_PRESSURE = "blood_pressure"
    GENERAL = "general"
    SLEEP = "sleep"
    MEDICATION = "medication"


class SuggestionPriority(str, Enum):
    """How prominently a suggestion is surfaced."""
    INFO = "info"
    ATTENTION = "attention"
    URGENT = "urgent"
