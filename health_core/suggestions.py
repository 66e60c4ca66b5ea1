"""
Personalized suggestions from inputs and calculated results.

All input values and thresholds are in SI canonical units. ``unit_system``
only controls how values are written in suggestion text.
"""

from typing import List, Union

from health_core.types.enums import MetricType, Sex, SuggestionCategory, SuggestionPriority, UnitSystem
from health_core.types.models import HealthInputs, HealthResults, Suggestion
from health_core.units import (
    APOB_THRESHOLDS,
    BP_THRESHOLDS,
    EGFR_THRESHOLDS,
    HBA1C_THRESHOLDS,
    HDL_THRESHOLDS,
    LDL_THRESHOLDS,
    LPA_THRESHOLDS,
    NON_HDL_THRESHOLDS,
    PSA_THRESHOLDS,
    TOTAL_CHOLESTEROL_THRESHOLDS,
    TRIGLYCERIDES_THRESHOLDS,
    coerce_unit_system,
    format_with_unit,
)

NUTRITION = SuggestionCategory.NUTRITION
BLOODWORK = SuggestionCategory.BLOODWORK
INFO = SuggestionPriority.INFO
ATTENTION = SuggestionPriority.ATTENTION
URGENT = SuggestionPriority.URGENT

# Systolic pressure from which sodium advice is shown (mmHg).
LOW_SALT_SYSTOLIC = 116
# Waist-to-height ratio above which central adiposity is flagged.
WAIST_TO_HEIGHT_RISK = 0.5


def _suggestion(
    id: str,
    category: SuggestionCategory,
    priority: SuggestionPriority,
    title: str,
    description: str,
) -> Suggestion:
    return Suggestion(
        id=id,
        category=category,
        priority=priority,
        title=title,
        description=description,
        discuss_with_doctor=priority is URGENT or category is SuggestionCategory.MEDICATION,
    )


def _lifestyle(inputs: HealthInputs, results: HealthResults, us: UnitSystem) -> List[Suggestion]:
    suggestions = [
        _suggestion(
            "protein-target", NUTRITION, INFO,
            f"Daily protein target: {results.protein_target}g",
            f"Based on your ideal body weight of "
            f"{format_with_unit(MetricType.WEIGHT, results.ideal_body_weight, us)}, aim for "
            f"{results.protein_target}g of protein daily. This supports muscle maintenance and "
            f"metabolic health.",
        ),
    ]

    if inputs.systolic_bp is not None and inputs.systolic_bp >= LOW_SALT_SYSTOLIC:
        suggestions.append(_suggestion(
            "low-salt", NUTRITION, INFO,
            "Reduce sodium intake",
            "Aim for less than 2,300mg of sodium daily. Most excess sodium comes from processed "
            "foods. Reducing sodium can help lower blood pressure.",
        ))

    suggestions.append(_suggestion(
        "fiber", NUTRITION, INFO,
        "Maximize fiber intake",
        "Aim for 25-35g of fiber daily from whole grains, fruits, and vegetables. Increase "
        "gradually to avoid discomfort. If you have IBS or IBD, discuss appropriate fiber levels "
        "with your doctor.",
    ))

    # Potassium is only safe to push with adequate kidney function.
    if results.egfr is not None and results.egfr >= EGFR_THRESHOLDS["mildly_decreased"]:
        suggestions.append(_suggestion(
            "high-potassium", NUTRITION, INFO,
            "Increase potassium-rich foods",
            "Aim for 3,500-5,000mg of potassium daily from fruits, vegetables, and legumes. High "
            "potassium intake supports healthy blood pressure and cardiovascular function.",
        ))

    if inputs.triglycerides is not None and inputs.triglycerides >= TRIGLYCERIDES_THRESHOLDS["borderline"]:
        suggestions.append(_suggestion(
            "trig-nutrition", NUTRITION, ATTENTION,
            "Reduce triglycerides with diet",
            "Blood triglycerides are very diet-sensitive, and improvements can be seen within 2-3 "
            "weeks. Key measures: limit alcohol, reduce sugar intake, and reduce total fat and "
            "calorie intake.",
        ))

    suggestions.append(_suggestion(
        "exercise", SuggestionCategory.EXERCISE, INFO,
        "Regular cardio and resistance training",
        "Aim for at least 150 minutes of moderate-intensity cardio plus 2-3 resistance training "
        "sessions per week. This combination supports cardiovascular health, muscle mass, and "
        "metabolic function.",
    ))
    suggestions.append(_suggestion(
        "sleep", SuggestionCategory.SLEEP, INFO,
        "Prioritize quality sleep",
        "Aim for 7-9 hours of sleep per night. Maintain a consistent sleep schedule, limit "
        "screens before bed, and keep your bedroom cool and dark.",
    ))
    return suggestions


def _weight(inputs: HealthInputs, results: HealthResults) -> List[Suggestion]:
    bmi = results.bmi
    if bmi is None or bmi <= 25:
        return []

    if bmi > 27:
        reason = "a BMI over 27"
    else:
        # BMI 25-27: only with central adiposity, unknown waist, or raised triglycerides.
        whr = results.waist_to_height_ratio
        trigs_elevated = (
            inputs.triglycerides is not None
            and inputs.triglycerides >= TRIGLYCERIDES_THRESHOLDS["borderline"]
        )
        if whr is not None and whr >= WAIST_TO_HEIGHT_RISK:
            reason = "elevated BMI and waist measurements"
        elif trigs_elevated:
            reason = "elevated BMI and triglycerides"
        elif whr is None:
            reason = "an elevated BMI"
        else:
            return []

    return [_suggestion(
        "weight-glp1", SuggestionCategory.MEDICATION, ATTENTION,
        "Weight management medication",
        f"With {reason}, you may benefit from discussing Tirzepatide (preferred) or Semaglutide "
        f"with your doctor, in addition to diet, exercise, and sleep optimization.",
    )]


def _bloodwork(inputs: HealthInputs, results: HealthResults, us: UnitSystem) -> List[Suggestion]:
    suggestions = []

    if inputs.hba1c is not None:
        value = format_with_unit(MetricType.HBA1C, inputs.hba1c, us)
        if inputs.hba1c >= HBA1C_THRESHOLDS["diabetes"]:
            suggestions.append(_suggestion(
                "hba1c-diabetic", BLOODWORK, URGENT,
                "HbA1c in diabetic range",
                f"Your HbA1c of {value} indicates diabetes. This requires medical management and "
                f"lifestyle intervention.",
            ))
        elif inputs.hba1c >= HBA1C_THRESHOLDS["prediabetes"]:
            suggestions.append(_suggestion(
                "hba1c-prediabetic", BLOODWORK, ATTENTION,
                "HbA1c indicates prediabetes",
                f"Your HbA1c of {value} is in the prediabetic range. Lifestyle changes now can "
                f"prevent progression to diabetes.",
            ))
        else:
            suggestions.append(_suggestion(
                "hba1c-normal", BLOODWORK, INFO,
                "HbA1c in normal range",
                f"Your HbA1c of {value} is in the normal range. Continue healthy habits to "
                f"maintain this.",
            ))

    if inputs.ldl_c is not None:
        value = format_with_unit(MetricType.LDL, inputs.ldl_c, us)
        if inputs.ldl_c >= LDL_THRESHOLDS["very_high"]:
            suggestions.append(_suggestion(
                "ldl-very-high", BLOODWORK, URGENT,
                "Very high LDL cholesterol",
                f"Your LDL of {value} is significantly elevated. This may indicate familial "
                f"hypercholesterolemia. Statin therapy is typically recommended.",
            ))
        elif inputs.ldl_c >= LDL_THRESHOLDS["high"]:
            suggestions.append(_suggestion(
                "ldl-high", BLOODWORK, ATTENTION,
                "High LDL cholesterol",
                f"Your LDL of {value} is high. Consider lifestyle modifications and discuss "
                f"medication options.",
            ))
        elif inputs.ldl_c >= LDL_THRESHOLDS["borderline"]:
            optimal = format_with_unit(MetricType.LDL, LDL_THRESHOLDS["optimal"], us)
            suggestions.append(_suggestion(
                "ldl-borderline", BLOODWORK, INFO,
                "Borderline high LDL cholesterol",
                f"Your LDL of {value} is borderline high. Optimal is <{optimal} for most adults.",
            ))

    if inputs.total_cholesterol is not None:
        value = format_with_unit(MetricType.TOTAL_CHOLESTEROL, inputs.total_cholesterol, us)
        desirable = format_with_unit(
            MetricType.TOTAL_CHOLESTEROL, TOTAL_CHOLESTEROL_THRESHOLDS["borderline"], us
        )
        if inputs.total_cholesterol >= TOTAL_CHOLESTEROL_THRESHOLDS["high"]:
            suggestions.append(_suggestion(
                "total-chol-high", BLOODWORK, ATTENTION,
                "High total cholesterol",
                f"Your total cholesterol of {value} is high. Desirable is <{desirable}.",
            ))
        elif inputs.total_cholesterol >= TOTAL_CHOLESTEROL_THRESHOLDS["borderline"]:
            suggestions.append(_suggestion(
                "total-chol-borderline", BLOODWORK, INFO,
                "Borderline high total cholesterol",
                f"Your total cholesterol of {value} is borderline high. Desirable is <{desirable}.",
            ))

    non_hdl = results.non_hdl_cholesterol
    if non_hdl is not None:
        # Non-HDL is a cholesterol concentration, shown in LDL units.
        value = format_with_unit(MetricType.LDL, non_hdl, us)
        if non_hdl >= NON_HDL_THRESHOLDS["very_high"]:
            suggestions.append(_suggestion(
                "non-hdl-very-high", BLOODWORK, URGENT,
                "Very high non-HDL cholesterol",
                f"Your non-HDL cholesterol of {value} is very high. This reflects total "
                f"atherogenic particle burden and indicates significantly elevated cardiovascular "
                f"risk.",
            ))
        elif non_hdl >= NON_HDL_THRESHOLDS["high"]:
            suggestions.append(_suggestion(
                "non-hdl-high", BLOODWORK, ATTENTION,
                "High non-HDL cholesterol",
                f"Your non-HDL cholesterol of {value} is high. Consider lifestyle modifications "
                f"to reduce cardiovascular risk.",
            ))
        elif non_hdl >= NON_HDL_THRESHOLDS["borderline"]:
            optimal = format_with_unit(MetricType.LDL, NON_HDL_THRESHOLDS["borderline"], us)
            suggestions.append(_suggestion(
                "non-hdl-borderline", BLOODWORK, INFO,
                "Borderline high non-HDL cholesterol",
                f"Your non-HDL cholesterol of {value} is borderline. Optimal is <{optimal}.",
            ))

    if inputs.hdl_c is not None:
        male = inputs.sex is Sex.MALE
        low = HDL_THRESHOLDS["low_male"] if male else HDL_THRESHOLDS["low_female"]
        if inputs.hdl_c < low:
            suggestions.append(_suggestion(
                "hdl-low", BLOODWORK, ATTENTION,
                "Low HDL cholesterol",
                f"Your HDL of {format_with_unit(MetricType.HDL, inputs.hdl_c, us)} is below optimal "
                f"({format_with_unit(MetricType.HDL, low, us)} for {'men' if male else 'women'}). "
                f"Exercise and healthy fats can help raise HDL.",
            ))

    # Lower triglyceride bands are covered by trig-nutrition.
    if inputs.triglycerides is not None and inputs.triglycerides >= TRIGLYCERIDES_THRESHOLDS["very_high"]:
        suggestions.append(_suggestion(
            "trig-very-high", BLOODWORK, URGENT,
            "Very high triglycerides",
            f"Your triglycerides of {format_with_unit(MetricType.TRIGLYCERIDES, inputs.triglycerides, us)} "
            f"are very high, increasing risk of pancreatitis. Immediate intervention is recommended.",
        ))

    if inputs.apo_b is not None:
        value = format_with_unit(MetricType.APOB, inputs.apo_b, us)
        if inputs.apo_b >= APOB_THRESHOLDS["very_high"]:
            suggestions.append(_suggestion(
                "apob-very-high", BLOODWORK, URGENT,
                "Very high ApoB",
                f"Your ApoB of {value} is very high, indicating significantly elevated "
                f"cardiovascular risk. Statin therapy and lifestyle intervention are typically "
                f"recommended.",
            ))
        elif inputs.apo_b >= APOB_THRESHOLDS["high"]:
            suggestions.append(_suggestion(
                "apob-high", BLOODWORK, ATTENTION,
                "High ApoB",
                f"Your ApoB of {value} is elevated. Consider lifestyle modifications and discuss "
                f"treatment options to reduce cardiovascular risk.",
            ))
        elif inputs.apo_b >= APOB_THRESHOLDS["borderline"]:
            optimal = format_with_unit(MetricType.APOB, APOB_THRESHOLDS["borderline"], us)
            suggestions.append(_suggestion(
                "apob-borderline", BLOODWORK, INFO,
                "Borderline high ApoB",
                f"Your ApoB of {value} is borderline. Optimal is <{optimal}.",
            ))

    if results.egfr is not None:
        egfr = f"{results.egfr:g} mL/min/1.73m²"
        if results.egfr < EGFR_THRESHOLDS["moderately_decreased"]:
            suggestions.append(_suggestion(
                "egfr-severely-decreased", BLOODWORK, URGENT,
                "Severely reduced kidney function",
                f"Your eGFR of {egfr} indicates severely reduced kidney function. This needs "
                f"prompt review by your doctor.",
            ))
        elif results.egfr < EGFR_THRESHOLDS["mildly_decreased"]:
            suggestions.append(_suggestion(
                "egfr-moderately-decreased", BLOODWORK, ATTENTION,
                "Moderately reduced kidney function",
                f"Your eGFR of {egfr} indicates moderately reduced kidney function. Discuss "
                f"monitoring and medication doses with your doctor.",
            ))
        elif results.egfr < EGFR_THRESHOLDS["low_normal"]:
            suggestions.append(_suggestion(
                "egfr-mildly-decreased", BLOODWORK, ATTENTION,
                "Mildly reduced kidney function",
                f"Your eGFR of {egfr} is mildly reduced. Repeat testing can confirm whether this "
                f"is persistent.",
            ))

    if inputs.lpa is not None and inputs.lpa >= LPA_THRESHOLDS["normal"]:
        value = format_with_unit(MetricType.LPA, inputs.lpa, us)
        elevated = inputs.lpa >= LPA_THRESHOLDS["elevated"]
        suggestions.append(_suggestion(
            "lpa-elevated" if elevated else "lpa-borderline", BLOODWORK,
            ATTENTION if elevated else INFO,
            "Elevated Lp(a)" if elevated else "Borderline Lp(a)",
            f"Your Lp(a) of {value} is {'elevated' if elevated else 'borderline'}. Lp(a) is largely "
            f"genetic and adds to cardiovascular risk, which makes controlling other lipids more "
            f"important.",
        ))

    if inputs.psa is not None and inputs.psa > PSA_THRESHOLDS["normal"]:
        limit = format_with_unit(MetricType.PSA, PSA_THRESHOLDS["normal"], us)
        suggestions.append(_suggestion(
            "psa-elevated", BLOODWORK, ATTENTION,
            "Elevated PSA",
            f"Your PSA of {format_with_unit(MetricType.PSA, inputs.psa, us)} is above the typical "
            f"reference range (<={limit}). Discuss with your doctor, as elevated PSA can have "
            f"multiple causes.",
        ))

    return suggestions


def _blood_pressure(inputs: HealthInputs, results: HealthResults) -> List[Suggestion]:
    if inputs.systolic_bp is None or inputs.diastolic_bp is None:
        return []

    sys_bp = inputs.systolic_bp
    dia_bp = inputs.diastolic_bp
    reading = f"{sys_bp:g}/{dia_bp:g} mmHg"
    category = SuggestionCategory.BLOOD_PRESSURE

    if sys_bp >= BP_THRESHOLDS["crisis_sys"] or dia_bp >= BP_THRESHOLDS["crisis_dia"]:
        return [_suggestion(
            "bp-crisis", category, URGENT,
            "Hypertensive crisis",
            f"Your BP of {reading} is dangerously high. Seek immediate medical attention if "
            f"accompanied by symptoms.",
        )]
    if sys_bp >= BP_THRESHOLDS["stage2_sys"] or dia_bp >= BP_THRESHOLDS["stage2_dia"]:
        return [_suggestion(
            "bp-stage2", category, URGENT,
            "Stage 2 hypertension",
            f"Your BP of {reading} indicates stage 2 hypertension. Medication is typically "
            f"recommended in addition to lifestyle changes.",
        )]
    if sys_bp >= BP_THRESHOLDS["stage1_sys"] or dia_bp > BP_THRESHOLDS["stage1_dia"]:
        target = "<130/80" if results.age is not None and results.age >= 65 else "<120/80"
        return [_suggestion(
            "bp-stage1", category, ATTENTION,
            "Stage 1 hypertension",
            f"Your BP of {reading} indicates stage 1 hypertension. Lifestyle modifications are "
            f"recommended. Target is {target}.",
        )]
    return []


def generate_suggestions(
    inputs: HealthInputs,
    results: HealthResults,
    unit_system: Union[UnitSystem, str] = UnitSystem.SI,
) -> List[Suggestion]:
    """
    Generate personalized suggestions.

    Lifestyle suggestions come first, then weight, bloodwork and blood
    pressure, each in a fixed order so output is deterministic.
    """
    us = coerce_unit_system(unit_system)
    return [
        *_lifestyle(inputs, results, us),
        *_weight(inputs, results),
        *_bloodwork(inputs, results, us),
        *_blood_pressure(inputs, results),
    ]
