"""
Health calculations on canonical (SI) inputs.

Contains:
- Ideal body weight (Devine) and protein target
- BMI, waist-to-height ratio, age
- Non-HDL cholesterol and eGFR (CKD-EPI 2021, race-free)
"""

from datetime import date
from typing import Optional, Union

from health_core.constants import (
    CREATININE_FACTOR,
    IBW_BASE_FEMALE_KG,
    IBW_BASE_MALE_KG,
    IBW_BASELINE_HEIGHT_CM,
    IBW_KG_PER_CM,
    IBW_MINIMUM_KG,
    PROTEIN_G_PER_KG,
)
from health_core.suggestions import generate_suggestions
from health_core.types.enums import Sex, UnitSystem
from health_core.types.models import HealthInputs, HealthResults
from health_core.units import round_display
from health_core.utils import get_logger

logger = get_logger("Calculations")


def calculate_ibw(height_cm: float, sex: Union[Sex, str]) -> float:
    """
    Ideal body weight in kg using the Devine formula.

    Males: 50 kg + 0.91 x (height - 152.4 cm)
    Females: 45.5 kg + 0.91 x (height - 152.4 cm)
    Never below 30 kg.
    """
    base = IBW_BASE_MALE_KG if Sex(sex) is Sex.MALE else IBW_BASE_FEMALE_KG
    ibw = base + IBW_KG_PER_CM * (height_cm - IBW_BASELINE_HEIGHT_CM)
    return max(ibw, IBW_MINIMUM_KG)


def calculate_protein_target(ibw_kg: float) -> int:
    """Daily protein target in grams: 1.2 g per kg of ideal body weight."""
    return int(round_display(ibw_kg * PROTEIN_G_PER_KG, 0))


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def calculate_waist_to_height(waist_cm: float, height_cm: float) -> float:
    """Values above 0.5 indicate increased metabolic risk."""
    return waist_cm / height_cm


def calculate_age(birth_year: int, birth_month: int, today: Optional[date] = None) -> int:
    """Age in whole years; never negative."""
    today = today or date.today()
    age = today.year - birth_year
    if today.month < birth_month:
        age -= 1
    return max(age, 0)


def get_bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal"
    if bmi < 30:
        return "Overweight"
    if bmi < 35:
        return "Obese (Class I)"
    if bmi < 40:
        return "Obese (Class II)"
    return "Obese (Class III)"


def calculate_non_hdl(total_cholesterol: float, hdl_c: float) -> float:
    """Non-HDL cholesterol in mmol/L."""
    return total_cholesterol - hdl_c


def calculate_egfr(creatinine_umol: float, age: int, sex: Union[Sex, str]) -> float:
    """
    eGFR in mL/min/1.73m² using CKD-EPI 2021 (race-free).

    eGFR = 142 x min(Scr/k, 1)^a x max(Scr/k, 1)^-1.200 x 0.9938^age [x 1.012 if female]
    with Scr in mg/dL, k = 0.7 (F) / 0.9 (M), a = -0.241 (F) / -0.302 (M).
    """
    female = Sex(sex) is Sex.FEMALE
    scr = creatinine_umol / CREATININE_FACTOR
    kappa = 0.7 if female else 0.9
    alpha = -0.241 if female else -0.302
    ratio = scr / kappa

    egfr = 142 * min(ratio, 1) ** alpha * max(ratio, 1) ** -1.200 * 0.9938 ** age
    if female:
        egfr *= 1.012
    return egfr


def calculate_health_results(
    inputs: HealthInputs,
    unit_system: Union[UnitSystem, str, None] = None,
    today: Optional[date] = None,
) -> HealthResults:
    """
    Calculate all results available from the given inputs.

    Height and sex are always present, so IBW and protein target always are.
    Everything else depends on which optional inputs were supplied.
    """
    ibw = calculate_ibw(inputs.height_cm, inputs.sex)
    results = HealthResults(
        ideal_body_weight=round_display(ibw, 1),
        protein_target=calculate_protein_target(ibw),
        apo_b=inputs.apo_b,
        ldl_c=inputs.ldl_c,
    )

    if inputs.weight_kg:
        results.bmi = round_display(calculate_bmi(inputs.weight_kg, inputs.height_cm), 1)

    if inputs.waist_cm:
        results.waist_to_height_ratio = round_display(
            calculate_waist_to_height(inputs.waist_cm, inputs.height_cm), 2
        )

    if inputs.birth_year and inputs.birth_month:
        results.age = calculate_age(inputs.birth_year, inputs.birth_month, today)

    if inputs.total_cholesterol is not None and inputs.hdl_c is not None:
        results.non_hdl_cholesterol = round_display(
            calculate_non_hdl(inputs.total_cholesterol, inputs.hdl_c), 2
        )

    if inputs.creatinine and results.age is not None:
        results.egfr = round_display(calculate_egfr(inputs.creatinine, results.age, inputs.sex), 0)
    elif inputs.creatinine:
        logger.debug("Creatinine given without birth year/month; skipping eGFR")

    system = unit_system or inputs.unit_system or UnitSystem.SI
    results.suggestions = generate_suggestions(inputs, results, system)
    return results
