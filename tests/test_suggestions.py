"""
Tests for personalized suggestions.
"""
from datetime import date

import pytest

from health_core.calculations import calculate_health_results
from health_core.suggestions import generate_suggestions
from health_core.types import HealthInputs, SuggestionPriority


def suggestions_for(system="si", **fields):
    inputs = HealthInputs(heightCm=175, sex=fields.pop("sex", "male"), **fields)
    return calculate_health_results(inputs, system, today=date(2024, 7, 1)).suggestions


def ids_for(**fields):
    return [s.id for s in suggestions_for(**fields)]


class TestLifestyleSuggestions:
    """Always-on and conditional lifestyle suggestions."""

    def test_always_shown(self):
        ids = ids_for()

        assert ids[:2] == ["protein-target", "fiber"]
        assert "exercise" in ids
        assert "sleep" in ids
        assert "low-salt" not in ids

    def test_protein_title(self):
        assert suggestions_for()[0].title == "Daily protein target: 85g"

    def test_protein_weight_in_user_units(self):
        assert "70.6 kg" in suggestions_for("si")[0].description
        assert "156 lbs" in suggestions_for("conventional")[0].description

    def test_low_salt(self):
        assert "low-salt" in ids_for(systolicBp=116)
        assert "low-salt" not in ids_for(systolicBp=115)

    def test_potassium_needs_kidney_function(self):
        assert "high-potassium" in ids_for(creatinine=80, birthYear=1980, birthMonth=1)
        assert "high-potassium" not in ids_for(creatinine=300, birthYear=1964, birthMonth=1)

    def test_trig_nutrition(self):
        assert "trig-nutrition" in ids_for(triglycerides=2.0)
        assert "trig-nutrition" not in ids_for(triglycerides=1.0)


class TestWeightSuggestions:
    """GLP-1 weight management rules."""

    def test_bmi_over_27(self):
        suggestion = next(s for s in suggestions_for(weightKg=90) if s.id == "weight-glp1")
        assert "a BMI over 27" in suggestion.description
        assert suggestion.discuss_with_doctor

    def test_bmi_25_to_27_without_waist(self):
        suggestion = next(s for s in suggestions_for(weightKg=80) if s.id == "weight-glp1")
        assert "an elevated BMI" in suggestion.description

    def test_bmi_25_to_27_with_waist(self):
        assert "weight-glp1" not in ids_for(weightKg=80, waistCm=80)
        assert "weight-glp1" in ids_for(weightKg=80, waistCm=90)

    def test_bmi_25_to_27_with_triglycerides(self):
        suggestion = next(
            s for s in suggestions_for(weightKg=80, waistCm=80, triglycerides=2.0) if s.id == "weight-glp1"
        )
        assert "triglycerides" in suggestion.description

    def test_normal_bmi(self):
        assert "weight-glp1" not in ids_for(weightKg=70)


class TestBloodworkSuggestions:
    """Lab value bands."""

    @pytest.mark.parametrize("hba1c,expected", [
        (50, "hba1c-diabetic"),
        (40, "hba1c-prediabetic"),
        (30, "hba1c-normal"),
    ])
    def test_hba1c_bands(self, hba1c, expected):
        assert expected in ids_for(hba1c=hba1c)

    def test_hba1c_text_in_user_units(self):
        si = next(s for s in suggestions_for("si", hba1c=48) if s.id == "hba1c-diabetic")
        conv = next(s for s in suggestions_for("conventional", hba1c=48) if s.id == "hba1c-diabetic")

        assert "48 mmol/mol" in si.description
        assert "6.5 %" in conv.description
        assert si.priority == SuggestionPriority.URGENT

    @pytest.mark.parametrize("ldl,expected", [
        (5.0, "ldl-very-high"),
        (4.5, "ldl-high"),
        (3.5, "ldl-borderline"),
    ])
    def test_ldl_bands(self, ldl, expected):
        assert expected in ids_for(ldlC=ldl)

    def test_optimal_ldl_has_no_suggestion(self):
        assert not any(i.startswith("ldl-") for i in ids_for(ldlC=2.0))

    def test_non_hdl_from_total_and_hdl(self):
        assert "non-hdl-very-high" in ids_for(totalCholesterol=7.0, hdlC=1.0)
        assert "total-chol-high" in ids_for(totalCholesterol=7.0, hdlC=1.0)

    def test_low_hdl_by_sex(self):
        male = next(s for s in suggestions_for(hdlC=0.9) if s.id == "hdl-low")
        assert "for men" in male.description
        assert "hdl-low" in ids_for(sex="female", hdlC=1.2)
        assert "hdl-low" not in ids_for(sex="male", hdlC=1.2)

    def test_very_high_triglycerides(self):
        ids = ids_for(triglycerides=6.0)
        assert "trig-very-high" in ids
        assert "trig-nutrition" in ids

    def test_apob_bands(self):
        assert "apob-very-high" in ids_for(apoB=1.2)
        assert "apob-high" in ids_for(apoB=0.8)
        assert "apob-borderline" in ids_for(apoB=0.6)

    def test_reduced_kidney_function(self):
        assert "egfr-severely-decreased" in ids_for(creatinine=300, birthYear=1964, birthMonth=1)

    def test_lpa_and_psa(self):
        assert "lpa-elevated" in ids_for(lpa=150)
        assert "lpa-borderline" in ids_for(lpa=100)
        assert "psa-elevated" in ids_for(psa=5.0)
        assert "psa-elevated" not in ids_for(psa=3.0)


class TestBloodPressureSuggestions:
    """Blood pressure categories."""

    @pytest.mark.parametrize("sys_bp,dia_bp,expected", [
        (185, 90, "bp-crisis"),
        (145, 85, "bp-stage2"),
        (132, 78, "bp-stage1"),
        (125, 82, "bp-stage1"),
    ])
    def test_categories(self, sys_bp, dia_bp, expected):
        assert expected in ids_for(systolicBp=sys_bp, diastolicBp=dia_bp)

    def test_normal_bp(self):
        assert not any(i.startswith("bp-") for i in ids_for(systolicBp=118, diastolicBp=76))

    def test_needs_both_readings(self):
        assert not any(i.startswith("bp-") for i in ids_for(systolicBp=185))

    def test_reading_in_text(self):
        suggestion = next(s for s in suggestions_for(systolicBp=145, diastolicBp=85) if s.id == "bp-stage2")
        assert "145/85 mmHg" in suggestion.description


class TestGenerateSuggestions:
    """Direct calls."""

    def test_deterministic(self):
        inputs = HealthInputs(heightCm=175, sex="male", ldlC=4.5, hba1c=40)
        results = calculate_health_results(inputs)

        first = generate_suggestions(inputs, results, "conventional")
        second = generate_suggestions(inputs, results, "conventional")

        assert first == second

    def test_unknown_unit_system_raises(self):
        inputs = HealthInputs(heightCm=175, sex="male")
        with pytest.raises(ValueError):
            generate_suggestions(inputs, calculate_health_results(inputs), "metric")
