"""
Tests for the unit definition table and conversions.
"""
import pytest

from health_core.mappings import FIELD_METRIC_MAP
from health_core.types.enums import MetricType, UnitSystem
from health_core.units import (
    UNIT_DEFS,
    canonical_range_for,
    cm_to_feet_inches,
    decimal_places_for,
    detect_unit_system,
    feet_inches_to_cm,
    format_display_value,
    format_height_display,
    format_number,
    format_with_unit,
    from_canonical,
    get_unit_definition,
    hba1c_ifcc_to_ngsp,
    hba1c_ngsp_to_ifcc,
    inches_to_feet_inches,
    label_for,
    range_for,
    round_display,
    to_canonical,
)

CONVERTIBLE_METRICS = sorted(set(FIELD_METRIC_MAP.values()), key=lambda m: m.value)


class TestLabels:
    """Unit labels and display precision."""

    def test_labels_per_system(self):
        assert label_for(MetricType.LDL, UnitSystem.SI) == "mmol/L"
        assert label_for(MetricType.LDL, UnitSystem.CONVENTIONAL) == "mg/dL"
        assert label_for("hba1c", "conventional") == "%"
        assert label_for("creatinine", "si") == "µmol/L"
        assert label_for("weight", "conventional") == "lbs"

    def test_identity_metrics_share_labels(self):
        for metric in (MetricType.SYSTOLIC_BP, MetricType.DIASTOLIC_BP, MetricType.PSA, MetricType.LPA):
            assert label_for(metric, "si") == label_for(metric, "conventional")

    def test_decimal_places(self):
        assert decimal_places_for("weight", "si") == 1
        assert decimal_places_for("weight", "conventional") == 0
        assert decimal_places_for("creatinine", "conventional") == 2
        assert decimal_places_for("apob", "si") == 2

    def test_every_metric_has_definition(self):
        for metric in MetricType:
            assert metric in UNIT_DEFS

    def test_unknown_metric_raises(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            get_unit_definition("bogus")
        with pytest.raises(ValueError):
            to_canonical("bogus", 1.0, "si")

    def test_unknown_unit_system_raises(self):
        with pytest.raises(ValueError, match="Unknown unit system"):
            label_for("ldl", "metric")


class TestConversions:
    """Conversions between canonical and display units."""

    @pytest.mark.parametrize("metric", CONVERTIBLE_METRICS, ids=lambda m: m.value)
    def test_round_trip(self, metric):
        """Converting to display units and back returns the original value."""
        low, high = canonical_range_for(metric)
        for value in (low, (low + high) / 2, high):
            for system in UnitSystem:
                display = from_canonical(metric, value, system)
                assert to_canonical(metric, display, system) == pytest.approx(value, abs=1e-9)

    @pytest.mark.parametrize("metric", list(MetricType), ids=lambda m: m.value)
    def test_si_is_identity(self, metric):
        assert from_canonical(metric, 42.5, UnitSystem.SI) == 42.5
        assert to_canonical(metric, 42.5, UnitSystem.SI) == 42.5

    def test_known_conversions(self):
        assert format_display_value("weight", 20, "conventional") == "44"
        assert format_display_value("weight", 300, "conventional") == "661"
        assert format_display_value("height", 50, "conventional") == "19.7"
        assert format_display_value("ldl", 12.9, "conventional") == "499"
        assert format_display_value("apob", 3, "conventional") == "300"
        assert format_display_value("creatinine", 10, "conventional") == "0.11"
        assert format_display_value("hba1c", 9, "conventional") == "3.0"

    def test_hba1c_formula(self):
        assert hba1c_ifcc_to_ngsp(48) == pytest.approx(0.09148 * 48 + 2.152)
        assert hba1c_ngsp_to_ifcc(hba1c_ifcc_to_ngsp(48)) == pytest.approx(48)

    def test_blood_pressure_is_identity(self):
        assert from_canonical("systolic_bp", 135, "conventional") == 135
        assert get_unit_definition("systolic_bp").is_identity(UnitSystem.CONVENTIONAL)
        assert not get_unit_definition("weight").is_identity(UnitSystem.CONVENTIONAL)


class TestRanges:
    """Display ranges derived from canonical ranges."""

    def test_si_range_matches_canonical(self):
        assert range_for("weight", "si") == (20, 300)
        assert range_for("ldl", "si") == (0, 12.9)

    def test_conventional_ranges_round_inward(self):
        assert range_for("weight", "conventional") == (45, 661)
        assert range_for("height", "conventional") == (19.7, 98.4)
        assert range_for("waist", "conventional") == (15.8, 78.7)
        assert range_for("hba1c", "conventional") == (3.0, 19.9)
        assert range_for("ldl", "conventional") == (0, 498)
        assert range_for("creatinine", "conventional") == (0.12, 29.97)

    @pytest.mark.parametrize("metric", CONVERTIBLE_METRICS, ids=lambda m: m.value)
    def test_display_range_reconverts_inside_canonical_range(self, metric):
        low, high = canonical_range_for(metric)
        display = range_for(metric, UnitSystem.CONVENTIONAL)
        assert to_canonical(metric, display.min, UnitSystem.CONVENTIONAL) >= low - 1e-9
        assert to_canonical(metric, display.max, UnitSystem.CONVENTIONAL) <= high + 1e-9

    def test_birth_year_range_ends_this_year(self):
        from datetime import date

        assert canonical_range_for("birth_year") == (1900, date.today().year)


class TestFormatting:
    """Half-up rounding and text rendering."""

    def test_half_up(self):
        assert format_number(2.5, 0) == "3"
        assert format_number(0.125, 2) == "0.13"
        assert round_display(70.55, 1) == 70.6

    def test_no_binary_noise(self):
        assert format_number(0.1 + 0.2, 2) == "0.30"
        assert format_number(2.9700000001, 2) == "2.97"

    def test_negative_zero_normalized(self):
        assert format_number(-0.0001, 1) == "0.0"

    def test_format_with_unit(self):
        assert format_with_unit("hba1c", 39, "si") == "39 mmol/mol"
        assert format_with_unit("ldl", 2.59, "conventional") == "100 mg/dL"
        assert format_with_unit("birth_month", 6, "si") == "6"


class TestDetectUnitSystem:
    """Locale-based unit system detection."""

    def test_us_locale(self):
        assert detect_unit_system("en-US") == UnitSystem.CONVENTIONAL
        assert detect_unit_system("my_MM") == UnitSystem.CONVENTIONAL

    def test_us_locale_with_foreign_timezone(self):
        assert detect_unit_system("en-US", "Pacific/Auckland") == UnitSystem.SI
        assert detect_unit_system("en-US", "America/Indiana/Indianapolis") == UnitSystem.CONVENTIONAL
        assert detect_unit_system("en-US", "America/Chicago") == UnitSystem.CONVENTIONAL

    def test_other_locales_default_to_si(self):
        assert detect_unit_system("en-NZ") == UnitSystem.SI
        assert detect_unit_system("en") == UnitSystem.SI
        assert detect_unit_system(None) == UnitSystem.SI
        assert detect_unit_system("") == UnitSystem.SI


class TestFeetInches:
    """US height display helpers."""

    def test_inches_to_feet_inches(self):
        assert inches_to_feet_inches(70) == (5, 10)
        assert inches_to_feet_inches(71.6) == (6, 0)

    def test_cm_round_trip(self):
        assert cm_to_feet_inches(178) == (5, 10)
        assert feet_inches_to_cm(5, 10) == pytest.approx(177.8)

    def test_format_height_display(self):
        assert format_height_display(178, "si") == "178 cm"
        assert format_height_display(178, "conventional") == "5'10\""
