"""
Mappings between input field names and metric types.

Form and API payloads use camelCase field names (``ldlC``, ``systolicBp``);
storage and the unit table use MetricType (``ldl``, ``systolic_bp``). This
module translates between the two vocabularies and converts API records into
partial input dicts and back into API-ready change sets.

Demographics (sex, birthYear, birthMonth, unitSystem) live on the profile, not
in the measurements table. Use diff_profile_fields() for those.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel

from health_core.types.enums import MetricType, Sex, UnitSystem
from health_core.types.models import (
    ApiMeasurement,
    ApiMedication,
    ApiProfile,
    ApiScreening,
    DrugSelection,
)
from health_core.units import UNIT_DEFS
from health_core.utils import get_logger

logger = get_logger("Mappings")

# =========================================================================
# FIELD ↔ METRIC
# =========================================================================

# Unit-bearing fields. Used for unit conversion of values and error messages,
# so demographic fields are intentionally absent.
FIELD_METRIC_MAP: Dict[str, MetricType] = {
    "heightCm": MetricType.HEIGHT,
    "weightKg": MetricType.WEIGHT,
    "waistCm": MetricType.WAIST,
    "hba1c": MetricType.HBA1C,
    "ldlC": MetricType.LDL,
    "totalCholesterol": MetricType.TOTAL_CHOLESTEROL,
    "hdlC": MetricType.HDL,
    "triglycerides": MetricType.TRIGLYCERIDES,
    "systolicBp": MetricType.SYSTOLIC_BP,
    "diastolicBp": MetricType.DIASTOLIC_BP,
    "apoB": MetricType.APOB,
    "creatinine": MetricType.CREATININE,
    "psa": MetricType.PSA,
    "lpa": MetricType.LPA,
}

PROFILE_FIELD_METRICS: Dict[str, MetricType] = {
    "sex": MetricType.SEX,
    "birthYear": MetricType.BIRTH_YEAR,
    "birthMonth": MetricType.BIRTH_MONTH,
}

METRIC_FIELD_MAP: Dict[MetricType, str] = {
    metric: field
    for field, metric in {**FIELD_METRIC_MAP, **PROFILE_FIELD_METRICS}.items()
}

# Time-series measurements. Height is stored on the profile, so it needs unit
# conversion but is not a measurement row.
STORAGE_FIELD_METRICS: Dict[str, MetricType] = {
    field: metric for field, metric in FIELD_METRIC_MAP.items() if metric is not MetricType.HEIGHT
}

_CONVERTIBLE_METRIC_VALUES = frozenset(metric.value for metric in FIELD_METRIC_MAP.values())

# Always pre-filled from saved data.
PREFILL_FIELDS = ("heightCm", "sex", "birthYear", "birthMonth")

# Empty input plus a "Previous: value (date)" label.
LONGITUDINAL_FIELDS = (
    "weightKg", "waistCm", "hba1c", "creatinine", "psa", "lpa", "apoB", "ldlC",
    "totalCholesterol", "hdlC", "triglycerides", "systolicBp", "diastolicBp",
)

# Measurements that take the user-selected blood test date.
BLOOD_TEST_METRICS = frozenset({
    MetricType.HBA1C, MetricType.CREATININE, MetricType.PSA, MetricType.LPA,
    MetricType.APOB, MetricType.LDL, MetricType.TOTAL_CHOLESTEROL,
    MetricType.HDL, MetricType.TRIGLYCERIDES,
})


def _verify_unit_coverage() -> None:
    """Every mapped metric must have a unit definition; checked once at import."""
    missing = sorted(
        f"{field}->{metric.value}"
        for field, metric in {**FIELD_METRIC_MAP, **PROFILE_FIELD_METRICS}.items()
        if metric not in UNIT_DEFS
    )
    if missing:
        logger.error(f"Field mappings reference metrics without unit definitions: {missing}")
        raise RuntimeError(f"Unit definition table is missing metrics: {', '.join(missing)}")


_verify_unit_coverage()


def metric_for_field(field: str) -> Optional[MetricType]:
    """
    Metric for a unit-bearing field, or None.

    None means "do not attempt unit conversion for this field"; it is not an
    error.
    """
    if not isinstance(field, str):
        return None
    return FIELD_METRIC_MAP.get(field)


def field_for_metric(metric: Union[MetricType, str]) -> str:
    """Input field name for a metric, including demographic metrics."""
    try:
        return METRIC_FIELD_MAP[MetricType(metric)]
    except (ValueError, KeyError):
        raise ValueError(f"No input field for metric: {metric!r}") from None


# =========================================================================
# STORAGE ENCODINGS
# =========================================================================

_SEX_CODES = {Sex.MALE: 1, Sex.FEMALE: 2}
_UNIT_SYSTEM_CODES = {UnitSystem.SI: 1, UnitSystem.CONVENTIONAL: 2}


def encode_sex(sex: Union[Sex, str]) -> int:
    return _SEX_CODES[Sex(sex)]


def decode_sex(code: int) -> Sex:
    return Sex.MALE if code == 1 else Sex.FEMALE


def encode_unit_system(system: Union[UnitSystem, str]) -> int:
    return _UNIT_SYSTEM_CODES[UnitSystem(system)]


def decode_unit_system(code: int) -> UnitSystem:
    return UnitSystem.CONVENTIONAL if code == 2 else UnitSystem.SI


# =========================================================================
# API RECORDS → INPUTS
# =========================================================================

def _as_field_dict(inputs: Union[Mapping[str, Any], BaseModel, None]) -> Dict[str, Any]:
    if inputs is None:
        return {}
    if isinstance(inputs, BaseModel):
        return inputs.model_dump(by_alias=True, exclude_none=True)
    return dict(inputs)


def measurements_to_inputs(
    measurements: Iterable[Union[ApiMeasurement, Mapping[str, Any]]],
    profile: Union[ApiProfile, Mapping[str, Any], None] = None,
) -> Dict[str, Any]:
    """
    Convert measurement records plus optional profile into a partial inputs dict.

    Unknown metric types are ignored. Profile demographics override anything
    carried by legacy measurement rows.
    """
    inputs: Dict[str, Any] = {}

    for record in measurements:
        m = record if isinstance(record, ApiMeasurement) else ApiMeasurement.model_validate(record)
        if m.metric_type == MetricType.SEX.value:
            inputs["sex"] = decode_sex(int(m.value))
        elif m.metric_type == "unit_system":
            inputs["unitSystem"] = decode_unit_system(int(m.value))
        elif m.metric_type in _CONVERTIBLE_METRIC_VALUES:
            inputs[METRIC_FIELD_MAP[MetricType(m.metric_type)]] = m.value
        else:
            logger.debug(f"Ignoring measurement with unknown metric type {m.metric_type!r}")

    if profile is not None:
        p = profile if isinstance(profile, ApiProfile) else ApiProfile.model_validate(profile)
        if p.sex is not None:
            inputs["sex"] = decode_sex(p.sex)
        if p.birth_year is not None:
            inputs["birthYear"] = p.birth_year
        if p.birth_month is not None:
            inputs["birthMonth"] = p.birth_month
        if p.unit_system is not None:
            inputs["unitSystem"] = decode_unit_system(p.unit_system)
        if p.height is not None:
            inputs["heightCm"] = p.height

    return inputs


def diff_inputs_to_measurements(
    current: Union[Mapping[str, Any], BaseModel],
    previous: Union[Mapping[str, Any], BaseModel, None],
    blood_test_date: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Changed measurement fields as API-ready ``{"metricType", "value"}`` pairs.

    Only time-series metrics are included; use diff_profile_fields() for
    demographics and height. When ``blood_test_date`` is given, lab results
    carry it as ``recordedAt``; body measurements and BP never do.
    """
    current_fields = _as_field_dict(current)
    previous_fields = _as_field_dict(previous)
    changes = []

    for field, metric in STORAGE_FIELD_METRICS.items():
        value = current_fields.get(field)
        if value is not None and value != previous_fields.get(field):
            change = {"metricType": metric.value, "value": value}
            if blood_test_date and metric in BLOOD_TEST_METRICS:
                change["recordedAt"] = blood_test_date
            changes.append(change)

    return changes


def diff_profile_fields(
    current: Union[Mapping[str, Any], BaseModel],
    previous: Union[Mapping[str, Any], BaseModel, None],
) -> Optional[Dict[str, Any]]:
    """
    Changed profile fields with the storage encoding applied.

    Sex is 1=male/2=female, unit system 1=si/2=conventional, height is cm.
    Returns None if nothing changed.
    """
    current_fields = _as_field_dict(current)
    previous_fields = _as_field_dict(previous)
    changes: Dict[str, Any] = {}

    def changed(field: str) -> bool:
        value = current_fields.get(field)
        return value is not None and value != previous_fields.get(field)

    if changed("sex"):
        changes["sex"] = encode_sex(current_fields["sex"])
    if changed("birthYear"):
        changes["birthYear"] = current_fields["birthYear"]
    if changed("birthMonth"):
        changes["birthMonth"] = current_fields["birthMonth"]
    if changed("unitSystem"):
        changes["unitSystem"] = encode_unit_system(current_fields["unitSystem"])
    if changed("heightCm"):
        changes["height"] = current_fields["heightCm"]

    return changes or None


# A record naming one of these drugs with a dose means "taking it".
_TAKING_WITH_DOSE = {"ezetimibe", "pcsk9i"}


def medications_to_inputs(
    medications: Iterable[Union[ApiMedication, Mapping[str, Any]]],
) -> Dict[str, Any]:
    """
    Convert medication records into the medication-cascade inputs dict.

    FHIR-style records name the actual drug; for ezetimibe and PCSK9i a record
    naming the drug with a dose means the user is taking it ("yes").
    """
    inputs: Dict[str, Any] = {}
    for record in medications:
        m = record if isinstance(record, ApiMedication) else ApiMedication.model_validate(record)
        key = m.medication_key
        if key in ("statin", "glp1", "sglt2i"):
            inputs[key] = DrugSelection(drug=m.drug_name, dose=m.dose_value)
        elif key in _TAKING_WITH_DOSE:
            taking = m.drug_name == key and m.dose_value is not None
            inputs[key] = "yes" if taking else m.drug_name
        elif key == "statin_escalation":
            inputs["statinEscalation"] = m.drug_name
        elif key == "glp1_escalation":
            inputs["glp1Escalation"] = m.drug_name
        elif key == "metformin":
            inputs["metformin"] = m.drug_name
        else:
            logger.debug(f"Ignoring unknown medication key {key!r}")
    return inputs


_SCREENING_FLOAT_KEYS = {"lung_pack_years", "prostate_psa_value"}


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def screenings_to_inputs(
    screenings: Iterable[Union[ApiScreening, Mapping[str, Any]]],
) -> Dict[str, Any]:
    """
    Convert screening records into a screening inputs dict.

    Keys become camelCase (``colorectal_last_date`` -> ``colorectalLastDate``);
    numeric answers are parsed, and unparseable ones are dropped.
    """
    inputs: Dict[str, Any] = {}
    for record in screenings:
        s = record if isinstance(record, ApiScreening) else ApiScreening.model_validate(record)
        if s.screening_key in _SCREENING_FLOAT_KEYS:
            try:
                inputs[_camel(s.screening_key)] = float(s.value)
            except ValueError:
                logger.warning(f"Dropping non-numeric screening value for {s.screening_key}")
            continue
        inputs[_camel(s.screening_key)] = s.value
    return inputs
