"""
Unit system definitions, conversions, and locale detection.

All values in storage and in HealthInputs are SI canonical units. This module
converts between SI and conventional (US) display units.

Canonical units:
    height/waist: cm       | weight: kg          | BP: mmHg (universal)
    HbA1c: mmol/mol (IFCC) | lipids: mmol/L      | ApoB: g/L
    creatinine: µmol/L     | PSA: ng/mL          | Lp(a): nmol/L
"""

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP
from typing import Callable, Dict, NamedTuple, Optional, Tuple, Union

from health_core.constants import (
    APOB_FACTOR,
    CHOLESTEROL_FACTOR,
    CM_PER_INCH,
    CREATININE_FACTOR,
    HBA1C_NGSP_INTERCEPT,
    HBA1C_NGSP_SLOPE,
    INCHES_PER_FOOT,
    LBS_PER_KG,
    MIN_BIRTH_YEAR,
    TRIGLYCERIDES_FACTOR,
)
from health_core.types.enums import MetricType, UnitSystem
from health_core.utils import get_logger

logger = get_logger("Units")

Converter = Callable[[float], float]
MetricLike = Union[MetricType, str]
SystemLike = Union[UnitSystem, str]


class DisplayRange(NamedTuple):
    """Inclusive valid range in one unit system's display units."""
    min: float
    max: float


class FeetInches(NamedTuple):
    feet: int
    inches: int


@dataclass(frozen=True)
class UnitDefinition:
    """Everything needed to show and accept one metric in either unit system."""
    metric: MetricType
    canonical: str
    labels: Dict[UnitSystem, str]
    to_canonical: Dict[UnitSystem, Converter]
    from_canonical: Dict[UnitSystem, Converter]
    decimal_places: Dict[UnitSystem, int]
    min_value: float
    # None means "the current calendar year" (birth year only).
    max_value: Optional[float]

    def canonical_range(self) -> Tuple[float, float]:
        max_value = self.max_value if self.max_value is not None else float(date.today().year)
        return self.min_value, max_value

    def is_identity(self, system: UnitSystem) -> bool:
        """True when the system shows the canonical value under the canonical label."""
        return self.labels[system] == self.canonical and self.from_canonical[system] is _identity


# ---------------------------------------------------------------------------
# Conversion functions
# ---------------------------------------------------------------------------

def _identity(value: float) -> float:
    return value


def hba1c_ngsp_to_ifcc(ngsp: float) -> float:
    """NGSP % → IFCC mmol/mol."""
    return (ngsp - HBA1C_NGSP_INTERCEPT) / HBA1C_NGSP_SLOPE


def hba1c_ifcc_to_ngsp(ifcc: float) -> float:
    """IFCC mmol/mol → NGSP %."""
    return HBA1C_NGSP_SLOPE * ifcc + HBA1C_NGSP_INTERCEPT


def _multiply(factor: float) -> Converter:
    return lambda value: value * factor


def _divide(factor: float) -> Converter:
    return lambda value: value / factor


# ---------------------------------------------------------------------------
# Unit definition factories
# ---------------------------------------------------------------------------

def _converted_unit(
    metric: MetricType,
    canonical: str,
    conventional: str,
    to_canonical: Converter,
    from_canonical: Converter,
    canonical_range: Tuple[float, float],
    si_dp: int,
    conv_dp: int,
) -> UnitDefinition:
    return UnitDefinition(
        metric=metric,
        canonical=canonical,
        labels={UnitSystem.SI: canonical, UnitSystem.CONVENTIONAL: conventional},
        to_canonical={UnitSystem.SI: _identity, UnitSystem.CONVENTIONAL: to_canonical},
        from_canonical={UnitSystem.SI: _identity, UnitSystem.CONVENTIONAL: from_canonical},
        decimal_places={UnitSystem.SI: si_dp, UnitSystem.CONVENTIONAL: conv_dp},
        min_value=canonical_range[0],
        max_value=canonical_range[1],
    )


def _mmol_mgdl_unit(
    metric: MetricType,
    factor: float,
    canonical_range: Tuple[float, float],
    si_dp: int = 1,
    conv_dp: int = 0,
) -> UnitDefinition:
    """mmol/L ↔ mg/dL using a molecular-weight factor."""
    return _converted_unit(
        metric, "mmol/L", "mg/dL",
        to_canonical=_divide(factor),
        from_canonical=_multiply(factor),
        canonical_range=canonical_range,
        si_dp=si_dp,
        conv_dp=conv_dp,
    )


def _identity_unit(
    metric: MetricType,
    label: str,
    canonical_range: Tuple[float, Optional[float]],
    dp: int,
) -> UnitDefinition:
    """Same unit in both systems (no conversion needed)."""
    return UnitDefinition(
        metric=metric,
        canonical=label,
        labels={UnitSystem.SI: label, UnitSystem.CONVENTIONAL: label},
        to_canonical={UnitSystem.SI: _identity, UnitSystem.CONVENTIONAL: _identity},
        from_canonical={UnitSystem.SI: _identity, UnitSystem.CONVENTIONAL: _identity},
        decimal_places={UnitSystem.SI: dp, UnitSystem.CONVENTIONAL: dp},
        min_value=canonical_range[0],
        max_value=canonical_range[1],
    )


# ---------------------------------------------------------------------------
# Unit definitions
# ---------------------------------------------------------------------------

UNIT_DEFS: Dict[MetricType, UnitDefinition] = {
    MetricType.HEIGHT: _converted_unit(
        MetricType.HEIGHT, "cm", "in",
        to_canonical=_multiply(CM_PER_INCH),
        from_canonical=_divide(CM_PER_INCH),
        canonical_range=(50, 250),
        si_dp=0, conv_dp=1,
    ),
    MetricType.WEIGHT: _converted_unit(
        MetricType.WEIGHT, "kg", "lbs",
        to_canonical=_divide(LBS_PER_KG),
        from_canonical=_multiply(LBS_PER_KG),
        canonical_range=(20, 300),
        si_dp=1, conv_dp=0,
    ),
    MetricType.WAIST: _converted_unit(
        MetricType.WAIST, "cm", "in",
        to_canonical=_multiply(CM_PER_INCH),
        from_canonical=_divide(CM_PER_INCH),
        canonical_range=(40, 200),
        si_dp=0, conv_dp=1,
    ),
    MetricType.HBA1C: _converted_unit(
        MetricType.HBA1C, "mmol/mol", "%",
        to_canonical=hba1c_ngsp_to_ifcc,
        from_canonical=hba1c_ifcc_to_ngsp,
        canonical_range=(9, 195),  # ~3-20% NGSP
        si_dp=0, conv_dp=1,
    ),
    MetricType.LDL: _mmol_mgdl_unit(MetricType.LDL, CHOLESTEROL_FACTOR, (0, 12.9)),
    MetricType.HDL: _mmol_mgdl_unit(MetricType.HDL, CHOLESTEROL_FACTOR, (0, 5.2)),
    MetricType.TOTAL_CHOLESTEROL: _mmol_mgdl_unit(MetricType.TOTAL_CHOLESTEROL, CHOLESTEROL_FACTOR, (0, 15)),
    MetricType.TRIGLYCERIDES: _mmol_mgdl_unit(MetricType.TRIGLYCERIDES, TRIGLYCERIDES_FACTOR, (0, 22.6)),
    MetricType.SYSTOLIC_BP: _identity_unit(MetricType.SYSTOLIC_BP, "mmHg", (60, 250), 0),
    MetricType.DIASTOLIC_BP: _identity_unit(MetricType.DIASTOLIC_BP, "mmHg", (40, 150), 0),
    MetricType.APOB: _converted_unit(
        MetricType.APOB, "g/L", "mg/dL",
        to_canonical=_divide(APOB_FACTOR),
        from_canonical=_multiply(APOB_FACTOR),
        canonical_range=(0, 3),
        si_dp=2, conv_dp=0,
    ),
    MetricType.CREATININE: _converted_unit(
        MetricType.CREATININE, "µmol/L", "mg/dL",
        to_canonical=_multiply(CREATININE_FACTOR),
        from_canonical=_divide(CREATININE_FACTOR),
        canonical_range=(10, 2650),  # ~0.1-30 mg/dL
        si_dp=0, conv_dp=2,
    ),
    MetricType.PSA: _identity_unit(MetricType.PSA, "ng/mL", (0, 100), 1),
    MetricType.LPA: _identity_unit(MetricType.LPA, "nmol/L", (0, 750), 0),
    # Demographics carry no unit; sex is its storage code (1=male, 2=female).
    MetricType.SEX: _identity_unit(MetricType.SEX, "", (1, 2), 0),
    MetricType.BIRTH_YEAR: _identity_unit(MetricType.BIRTH_YEAR, "", (MIN_BIRTH_YEAR, None), 0),
    MetricType.BIRTH_MONTH: _identity_unit(MetricType.BIRTH_MONTH, "", (1, 12), 0),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------

def coerce_unit_system(system: SystemLike) -> UnitSystem:
    """Accept a UnitSystem or its string value; anything else is a programming error."""
    try:
        return UnitSystem(system)
    except ValueError:
        raise ValueError(
            f"Unknown unit system: {system!r}. "
            f"Must be one of: {', '.join(s.value for s in UnitSystem)}"
        ) from None


def get_unit_definition(metric: MetricLike) -> UnitDefinition:
    """Return the unit definition for a metric, failing loudly on unknown metrics."""
    try:
        return UNIT_DEFS[MetricType(metric)]
    except (ValueError, KeyError):
        logger.error(f"No unit definition for metric {metric!r}")
        raise ValueError(f"Unknown metric type: {metric!r}") from None


def label_for(metric: MetricLike, system: SystemLike) -> str:
    """Display unit label for a metric (e.g. "mg/dL" or "mmol/L")."""
    return get_unit_definition(metric).labels[coerce_unit_system(system)]


def decimal_places_for(metric: MetricLike, system: SystemLike) -> int:
    return get_unit_definition(metric).decimal_places[coerce_unit_system(system)]


def to_canonical(metric: MetricLike, display_value: float, system: SystemLike) -> float:
    """Convert a display-unit value to the canonical (SI) unit for storage."""
    unit_def = get_unit_definition(metric)
    return unit_def.to_canonical[coerce_unit_system(system)](display_value)


def from_canonical(metric: MetricLike, canonical_value: float, system: SystemLike) -> float:
    """Convert a canonical (SI) value to the display unit."""
    unit_def = get_unit_definition(metric)
    return unit_def.from_canonical[coerce_unit_system(system)](canonical_value)


def canonical_range_for(metric: MetricLike) -> DisplayRange:
    """Inclusive valid range in canonical units."""
    return DisplayRange(*get_unit_definition(metric).canonical_range())


def range_for(metric: MetricLike, system: SystemLike) -> DisplayRange:
    """
    Valid input range in the user's display units.

    Canonical bounds are converted and then rounded inward to the display
    precision (min up, max down) so that a displayed boundary value always
    re-converts to a canonical value the validator accepts.

    Error messages round bounds half-up instead, so they can name a value just
    outside this range: the weight minimum shows as 45 lbs here but as
    "at least 44 lbs" in a converted message (20 kg = 44.09 lbs).
    """
    unit_def = get_unit_definition(metric)
    system = coerce_unit_system(system)
    low, high = unit_def.canonical_range()
    convert = unit_def.from_canonical[system]
    decimals = unit_def.decimal_places[system]
    # Affine conversions keep ordering, but guard against a decreasing one.
    display_low, display_high = sorted((convert(low), convert(high)))
    return DisplayRange(
        min=float(_quantize(display_low, decimals, ROUND_CEILING)),
        max=float(_quantize(display_high, decimals, ROUND_FLOOR)),
    )


# ---------------------------------------------------------------------------
# Rounding and formatting
# ---------------------------------------------------------------------------

def _quantize(value: float, decimals: int, rounding: str) -> Decimal:
    # Strip binary noise (e.g. 19.700000000000003) before directional rounding.
    exact = Decimal(repr(float(value))).quantize(Decimal("1e-9"), rounding=ROUND_HALF_UP)
    result = exact.quantize(Decimal(1).scaleb(-decimals), rounding=rounding)
    return abs(result) if result.is_zero() else result


def format_number(value: float, decimals: int) -> str:
    """
    Round half-up to ``decimals`` places and render as text.

    0 decimals yields an integer string ("44"); more yields fixed-point
    ("2.97"), never binary noise like "2.9700000001".
    """
    return str(_quantize(value, decimals, ROUND_HALF_UP))


def round_display(value: float, decimals: int) -> float:
    """Numeric counterpart of format_number."""
    return float(_quantize(value, decimals, ROUND_HALF_UP))


def format_display_value(metric: MetricLike, canonical_value: float, system: SystemLike) -> str:
    """Format a canonical value for display (converted + rounded)."""
    display = from_canonical(metric, canonical_value, system)
    return format_number(display, decimal_places_for(metric, system))


def format_with_unit(metric: MetricLike, canonical_value: float, system: SystemLike) -> str:
    """e.g. "5.7 %" or "39 mmol/mol"."""
    value = format_display_value(metric, canonical_value, system)
    label = label_for(metric, system)
    return f"{value} {label}" if label else value


# ---------------------------------------------------------------------------
# Locale detection
# ---------------------------------------------------------------------------

# US, Liberia, Myanmar.
CONVENTIONAL_COUNTRIES = frozenset({"US", "LR", "MM"})

US_TIMEZONES = frozenset({
    "America/New_York", "America/Chicago", "America/Denver", "America/Los_Angeles",
    "America/Anchorage", "America/Phoenix", "America/Adak", "America/Detroit",
    "America/Boise", "America/Juneau", "America/Sitka", "America/Yakutat",
    "America/Nome", "America/Menominee", "America/Metlakatla",
    "Pacific/Honolulu",
})

US_TIMEZONE_PREFIXES = ("America/Indiana/", "America/Kentucky/", "America/North_Dakota/")


def is_us_timezone(tz: str) -> bool:
    return tz in US_TIMEZONES or tz.startswith(US_TIMEZONE_PREFIXES)


def detect_unit_system(locale: Optional[str] = None, timezone: Optional[str] = None) -> UnitSystem:
    """
    Detect the preferred unit system from a locale such as "en-US".

    en-US is cross-checked against the timezone because many non-US users run
    US English; a clearly non-US timezone (e.g. Pacific/Auckland) yields SI.
    Falls back to SI when the locale is missing or has no country part.
    """
    if not locale:
        return UnitSystem.SI

    parts = locale.replace("_", "-").split("-")
    country = parts[-1].upper() if len(parts) > 1 else None

    if country in CONVENTIONAL_COUNTRIES:
        if country == "US" and timezone and not is_us_timezone(timezone):
            logger.debug(f"Locale {locale} with non-US timezone {timezone}; using SI")
            return UnitSystem.SI
        return UnitSystem.CONVENTIONAL

    return UnitSystem.SI


# ---------------------------------------------------------------------------
# Clinical thresholds (SI canonical units)
# ---------------------------------------------------------------------------

# mmol/mol (IFCC)
HBA1C_THRESHOLDS = {
    "prediabetes": hba1c_ngsp_to_ifcc(5.7),  # ~38.8
    "diabetes": hba1c_ngsp_to_ifcc(6.5),     # ~47.5
}

# mmol/L
LDL_THRESHOLDS = {
    "optimal": 100 / CHOLESTEROL_FACTOR,     # ~2.59
    "borderline": 130 / CHOLESTEROL_FACTOR,  # ~3.36
    "high": 160 / CHOLESTEROL_FACTOR,        # ~4.14
    "very_high": 190 / CHOLESTEROL_FACTOR,   # ~4.91
}

TOTAL_CHOLESTEROL_THRESHOLDS = {
    "borderline": 200 / CHOLESTEROL_FACTOR,  # ~5.17
    "high": 240 / CHOLESTEROL_FACTOR,        # ~6.21
}

# LDL thresholds + 30 mg/dL for VLDL
NON_HDL_THRESHOLDS = {
    "borderline": 160 / CHOLESTEROL_FACTOR,  # ~4.14
    "high": 190 / CHOLESTEROL_FACTOR,        # ~4.91
    "very_high": 220 / CHOLESTEROL_FACTOR,   # ~5.69
}

HDL_THRESHOLDS = {
    "low_male": 40 / CHOLESTEROL_FACTOR,     # ~1.03
    "low_female": 50 / CHOLESTEROL_FACTOR,   # ~1.29
}

TRIGLYCERIDES_THRESHOLDS = {
    "borderline": 150 / TRIGLYCERIDES_FACTOR,  # ~1.69
    "high": 200 / TRIGLYCERIDES_FACTOR,        # ~2.26
    "very_high": 500 / TRIGLYCERIDES_FACTOR,   # ~5.64
}

# mmHg, same in both systems
BP_THRESHOLDS = {
    "elevated_sys": 120,
    "stage1_sys": 130,
    "stage1_dia": 80,
    "stage2_sys": 140,
    "stage2_dia": 90,
    "crisis_sys": 180,
    "crisis_dia": 120,
}

# mL/min/1.73m²
EGFR_THRESHOLDS = {
    "low_normal": 60,            # 60-69: low normal (no CKD without markers)
    "mildly_decreased": 45,      # G3a
    "moderately_decreased": 30,  # G3b
    "severely_decreased": 15,    # G4
}

# g/L
APOB_THRESHOLDS = {
    "borderline": 50 / APOB_FACTOR,  # 0.5
    "high": 70 / APOB_FACTOR,        # 0.7
    "very_high": 100 / APOB_FACTOR,  # 1.0
}

# ng/mL; the upper limit of normal varies by age
PSA_THRESHOLDS = {
    "normal": 4.0,
}

# nmol/L
LPA_THRESHOLDS = {
    "normal": 75,
    "elevated": 125,
}


# ---------------------------------------------------------------------------
# Feet/inches helpers (US height display)
# ---------------------------------------------------------------------------

def inches_to_feet_inches(total_inches: float) -> FeetInches:
    """Whole feet plus remaining inches (0-11), rounding 11.5+ up to the next foot."""
    feet = math.floor(total_inches / INCHES_PER_FOOT)
    inches = math.floor(total_inches % INCHES_PER_FOOT + 0.5)
    if inches >= INCHES_PER_FOOT:
        return FeetInches(feet + 1, 0)
    return FeetInches(feet, inches)


def feet_inches_to_inches(feet: float, inches: float) -> float:
    return feet * INCHES_PER_FOOT + inches


def cm_to_feet_inches(cm: float) -> FeetInches:
    return inches_to_feet_inches(cm / CM_PER_INCH)


def feet_inches_to_cm(feet: float, inches: float) -> float:
    return feet_inches_to_inches(feet, inches) * CM_PER_INCH


def format_height_display(cm: float, system: SystemLike) -> str:
    """'178 cm' for SI, 5'10" for conventional."""
    if coerce_unit_system(system) is UnitSystem.SI:
        return f"{format_number(cm, 0)} cm"
    feet, inches = cm_to_feet_inches(cm)
    return f"{feet}'{inches}\""
