"""
Pydantic schemas for API payloads.

Values are in SI canonical units and use the same camelCase field names and
storage encodings (sex 1/2, unit system 1/2) as the API records.
"""

from datetime import date, datetime
from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from health_core.constants import MIN_BIRTH_YEAR

MetricTypeValue = Literal[
    "weight", "waist",
    "hba1c", "ldl", "total_cholesterol", "hdl", "triglycerides",
    "systolic_bp", "diastolic_bp", "apob", "creatinine", "psa", "lpa",
]

MeasurementSource = Literal["manual", "apple_health", "fitbit", "lab_import"]

MedicationKey = Literal[
    "statin", "ezetimibe", "statin_escalation", "pcsk9i",
    "glp1", "glp1_escalation", "sglt2i", "metformin",
]

ScreeningKey = Literal[
    "colorectal_method", "colorectal_last_date",
    "colorectal_result", "colorectal_followup_status", "colorectal_followup_date",
    "breast_frequency", "breast_last_date",
    "breast_result", "breast_followup_status", "breast_followup_date",
    "cervical_method", "cervical_last_date",
    "cervical_result", "cervical_followup_status", "cervical_followup_date",
    "lung_smoking_history", "lung_pack_years", "lung_screening", "lung_last_date",
    "lung_result", "lung_followup_status", "lung_followup_date",
    "prostate_discussion", "prostate_psa_value", "prostate_last_date",
    "endometrial_discussion", "endometrial_abnormal_bleeding",
    "dexa_screening", "dexa_last_date", "dexa_result",
    "dexa_followup_status", "dexa_followup_date",
]


class MeasurementPayload(BaseModel):
    """A single measurement to record. Value is SI canonical."""
    model_config = ConfigDict(populate_by_name=True)

    metric_type: MetricTypeValue = Field(alias="metricType")
    value: float
    recorded_at: Optional[datetime] = Field(None, alias="recordedAt")  # server defaults to now
    source: Optional[MeasurementSource] = None  # DB defaults to manual
    external_id: Optional[str] = Field(None, alias="externalId", max_length=200)


class ProfileUpdatePayload(BaseModel):
    """Profile demographics update, using the storage encodings."""
    model_config = ConfigDict(populate_by_name=True)

    sex: Optional[int] = Field(None, ge=1, le=2)
    birth_year: Optional[int] = Field(None, alias="birthYear", ge=MIN_BIRTH_YEAR)
    birth_month: Optional[int] = Field(None, alias="birthMonth", ge=1, le=12)
    unit_system: Optional[int] = Field(None, alias="unitSystem", ge=1, le=2)
    first_name: Optional[str] = Field(None, alias="firstName", max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=100)
    height: Optional[float] = Field(None, ge=50, le=250)

    @field_validator("birth_year")
    @classmethod
    def not_in_future(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value > date.today().year:
            raise ValueError("Birth year cannot be in the future")
        return value


class MedicationPayload(BaseModel):
    """Medication upsert (FHIR-compatible drug name + dose)."""
    model_config = ConfigDict(populate_by_name=True)

    medication_key: MedicationKey = Field(alias="medicationKey")
    drug_name: str = Field(alias="drugName", min_length=1, max_length=100)
    dose_value: Optional[float] = Field(None, alias="doseValue", gt=0)
    dose_unit: Optional[str] = Field(None, alias="doseUnit", max_length=20)


class ScreeningPayload(BaseModel):
    """Screening answer upsert; answers are stored as strings."""
    model_config = ConfigDict(populate_by_name=True)

    screening_key: ScreeningKey = Field(alias="screeningKey")
    value: str = Field(min_length=1, max_length=500)


def get_validation_errors(exc: ValidationError) -> Dict[str, str]:
    """
    Human-readable errors keyed by dotted field path.

    Only the first message per path is kept.
    """
    error_map: Dict[str, str] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"])
        if path not in error_map:
            error_map[path] = error["msg"]
    return error_map
