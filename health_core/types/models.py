"""
Core type models for health inputs and results.

All numeric values are in SI canonical units:
    height/waist: cm | weight: kg | BP: mmHg
    HbA1c: mmol/mol (IFCC) | lipids: mmol/L | ApoB: g/L | creatinine: µmol/L

Field names follow the camelCase vocabulary of form/API payloads via aliases;
Python code uses the snake_case attribute names.
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

from health_core.types.enums import (
    Sex,
    UnitSystem,
    SuggestionCategory,
    SuggestionPriority,
)


class HealthInputs(BaseModel):
    """Validated health inputs in canonical units."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    height_cm: float = Field(alias="heightCm")
    sex: Sex
    weight_kg: Optional[float] = Field(None, alias="weightKg")
    waist_cm: Optional[float] = Field(None, alias="waistCm")
    birth_year: Optional[int] = Field(None, alias="birthYear")
    birth_month: Optional[int] = Field(None, alias="birthMonth")
    hba1c: Optional[float] = None               # mmol/mol (IFCC)
    ldl_c: Optional[float] = Field(None, alias="ldlC")
    total_cholesterol: Optional[float] = Field(None, alias="totalCholesterol")
    hdl_c: Optional[float] = Field(None, alias="hdlC")
    triglycerides: Optional[float] = None
    apo_b: Optional[float] = Field(None, alias="apoB")
    creatinine: Optional[float] = None          # µmol/L
    psa: Optional[float] = None                 # ng/mL
    lpa: Optional[float] = None                 # nmol/L
    systolic_bp: Optional[float] = Field(None, alias="systolicBp")
    diastolic_bp: Optional[float] = Field(None, alias="diastolicBp")
    unit_system: Optional[UnitSystem] = Field(None, alias="unitSystem")


class Suggestion(BaseModel):
    """A health suggestion to discuss with a doctor."""
    id: str
    category: SuggestionCategory
    priority: SuggestionPriority
    title: str
    description: str
    discuss_with_doctor: bool = Field(False, alias="discussWithDoctor")

    model_config = ConfigDict(populate_by_name=True)


class HealthResults(BaseModel):
    """Calculated health results."""
    model_config = ConfigDict(populate_by_name=True)

    ideal_body_weight: float = Field(alias="idealBodyWeight")
    protein_target: int = Field(alias="proteinTarget")
    bmi: Optional[float] = None
    waist_to_height_ratio: Optional[float] = Field(None, alias="waistToHeightRatio")
    non_hdl_cholesterol: Optional[float] = Field(None, alias="nonHdlCholesterol")  # mmol/L
    apo_b: Optional[float] = Field(None, alias="apoB")
    ldl_c: Optional[float] = Field(None, alias="ldlC")
    egfr: Optional[float] = Field(None, alias="eGFR")   # mL/min/1.73m² (CKD-EPI 2021)
    age: Optional[int] = None
    suggestions: List[Suggestion] = Field(default_factory=list)


# =========================================================================
# API RECORD SHAPES (camelCase, as returned by API endpoints)
# =========================================================================

class ApiMeasurement(BaseModel):
    """A single immutable measurement record. Value is SI canonical."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    metric_type: str = Field(alias="metricType")
    value: float
    recorded_at: str = Field("", alias="recordedAt")
    created_at: str = Field("", alias="createdAt")


class ApiProfile(BaseModel):
    """Profile row. Sex and unit system use their numeric storage encoding."""
    model_config = ConfigDict(populate_by_name=True)

    sex: Optional[int] = None
    birth_year: Optional[int] = Field(None, alias="birthYear")
    birth_month: Optional[int] = Field(None, alias="birthMonth")
    unit_system: Optional[int] = Field(None, alias="unitSystem")
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    height: Optional[float] = None


class ApiMedication(BaseModel):
    """Medication record (FHIR-compatible drug name + dose)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    medication_key: str = Field(alias="medicationKey")
    drug_name: str = Field(alias="drugName")
    dose_value: Optional[float] = Field(None, alias="doseValue")
    dose_unit: Optional[str] = Field(None, alias="doseUnit")
    updated_at: str = Field("", alias="updatedAt")


class ApiScreening(BaseModel):
    """Screening record; values are stored as strings."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    screening_key: str = Field(alias="screeningKey")
    value: str
    updated_at: str = Field("", alias="updatedAt")


class DrugSelection(BaseModel):
    """A drug choice with optional dose (mg)."""
    drug: str
    dose: Optional[float] = None
