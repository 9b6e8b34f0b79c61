"""
Unit Tests for Extraction Module

Tests for indicator normalization and lab report parsing.
"""
import pytest

from healthassist.core.errors import AssessmentValidationError
from healthassist.core.extraction import (
    IndicatorSet, normalize_indicators, parse_number, compute_bmi,
    LabReportParser, LabStatus,
)
from healthassist.core.extraction.base import DEFAULT_AGE, DEFAULT_BMI
from healthassist.core.extraction.lab_report import LAB_TESTS, NO_RESULTS_SUMMARY


@pytest.fixture
def parser() -> LabReportParser:
    return LabReportParser()


class TestParseNumber:
    """Tests for numeric form-field parsing."""

    def test_plain_numbers(self):
        assert parse_number(42) == 42.0
        assert parse_number(3.5) == 3.5
        assert parse_number(0) == 0.0

    def test_leading_numeric_token(self):
        """Units after the number are ignored."""
        assert parse_number("145 mmHg") == 145.0
        assert parse_number(" 98.6F") == 98.6

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "mmHg 145", True, float("nan"), float("inf")])
    def test_unparseable(self, value):
        assert parse_number(value) is None


class TestComputeBMI:

    def test_bmi(self):
        assert compute_bmi(70, 170) == pytest.approx(24.22, abs=0.01)

    def test_missing_or_zero_height(self):
        assert compute_bmi(70, None) is None
        assert compute_bmi(None, 170) is None
        assert compute_bmi(70, 0) is None


class TestNormalizeIndicators:
    """Tests for normalize_indicators."""

    def test_empty_input_uses_defaults(self):
        indicators = normalize_indicators({})
        assert indicators.is_empty
        assert indicators.age == DEFAULT_AGE
        assert indicators.systolic_bp == 120
        assert indicators.glucose == 100
        assert indicators.cholesterol == 200
        assert indicators.bmi == DEFAULT_BMI
        assert set(indicators.defaulted) == {"age", "systolic_bp", "glucose", "cholesterol", "bmi"}

    def test_none_input(self):
        indicators = normalize_indicators(None)
        assert isinstance(indicators, IndicatorSet)
        assert indicators.is_empty
        assert indicators.systolic_bp == IndicatorSet().systolic_bp

    def test_unparseable_numbers_default_silently(self):
        indicators = normalize_indicators({"age": "unknown", "glucose": "n/a"})
        assert indicators.age == DEFAULT_AGE
        assert indicators.glucose == 100
        assert not indicators.is_empty

    def test_bmi_from_weight_and_height(self):
        indicators = normalize_indicators({"weight": "70", "height": 170})
        assert indicators.bmi == pytest.approx(24.22, abs=0.01)
        assert indicators.to_dict()["bmi"] == 24.2

    def test_explicit_bmi_when_height_missing(self):
        indicators = normalize_indicators({"weight": 80, "height": 0, "bmi": "27.5"})
        assert indicators.bmi == 27.5

    def test_form_aliases(self):
        indicators = normalize_indicators({
            "bloodPressure": "150 mmHg",
            "bloodSugar": 130,
            "familyHistory": "  Father had DIABETES ",
            "sex": "Female",
        })
        assert indicators.systolic_bp == 150
        assert indicators.glucose == 130
        assert indicators.family_history == "father had diabetes"
        assert indicators.gender == "female"

    def test_categorical_fields_lowercased(self):
        indicators = normalize_indicators({"smoking": " YES ", "exercise": "None", "alcohol": "Daily"})
        assert indicators.smoking == "yes"
        assert indicators.exercise == "none"
        assert indicators.alcohol == "daily"

    def test_blank_strings_are_not_supplied(self):
        assert normalize_indicators({"age": "", "smoking": "  "}).is_empty

    def test_indicator_set_is_frozen(self):
        indicators = normalize_indicators({"age": 40})
        with pytest.raises(AttributeError):
            indicators.age = 50


class TestLabReportParser:
    """Tests for LabReportParser."""

    def test_patterns_compiled_once(self):
        spec = LAB_TESTS[0]

        assert spec.detect_pattern is spec.detect_pattern
        assert spec.value_pattern is spec.value_pattern
        assert spec.value_pattern.search("HB = 11.2").group(1) == "11.2"

    def test_critical_hemoglobin(self, parser):
        report = parser.parse("Hemoglobin: 9.0 g/dL")

        assert len(report.results) == 1
        entry = report.results[0]
        assert entry.test_name == "Hemoglobin"
        assert entry.parsed_value == 9.0
        assert entry.status == LabStatus.CRITICAL
        assert "Low Hemoglobin - Possible Anemia" in report.critical_findings
        assert "Schedule an appointment with your doctor immediately" in report.recommendations
        assert report.summary == "Parsed 1 test results. Critical findings detected."

    def test_no_recognized_tests(self, parser):
        report = parser.parse("Patient feels fine. No issues reported.")

        assert report.results == ()
        assert report.critical_findings == ()
        assert report.summary == NO_RESULTS_SUMMARY

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_text_rejected(self, parser, text):
        with pytest.raises(AssessmentValidationError) as exc:
            parser.parse(text)
        assert exc.value.field == "text"

    def test_full_panel(self, parser):
        text = "Hb 11.5\nBlood Sugar = 250\nCholesterol: 260 mg/dL\nCreatinine: 1.0"
        report = parser.parse(text)

        statuses = {r.test_name: r.status for r in report.results}
        assert statuses == {
            "Hemoglobin": LabStatus.LOW,
            "Blood Glucose": LabStatus.CRITICAL,
            "Total Cholesterol": LabStatus.HIGH,
            "Creatinine": LabStatus.NORMAL,
        }
        assert report.critical_findings == ("High Blood Glucose - Possible Diabetes",)
        assert "Reduce saturated fats and increase fiber intake" in report.recommendations
        assert report.next_steps == ("Consult with a healthcare provider within 24-48 hours",)

    def test_abbreviation_needs_whole_word(self, parser):
        """'hb' inside 'HbA1c' is not a hemoglobin reading."""
        report = parser.parse("HbA1c 6.5")
        assert report.results == ()

    def test_name_without_value_uses_default(self, parser):
        report = parser.parse("Cholesterol test pending")

        entry = report.results[0]
        assert entry.parsed_value == 200.0
        assert entry.status == LabStatus.NORMAL
        assert entry.value_found is False

    def test_low_value_without_critical(self, parser):
        report = parser.parse("Hemoglobin 11 g/dL")

        assert report.results[0].status == LabStatus.LOW
        assert report.critical_findings == ()
        assert report.recommendations == ("Monitor these values and consider lifestyle changes",)
        assert report.next_steps == ("Follow up with your doctor for further evaluation",)
        assert report.summary.endswith("Most values are within normal range.")

    def test_all_normal(self, parser):
        report = parser.parse("Glucose: 90, Creatinine: 0.9")

        assert all(r.status == LabStatus.NORMAL for r in report.results)
        assert report.recommendations == ("Continue maintaining a healthy lifestyle",)
        assert report.next_steps == ("Schedule annual health checkup",)

    def test_to_dict(self, parser):
        data = parser.parse("Creatinine: 2.0").to_dict()

        assert data["results"][0]["status"] == "high"
        assert data["results"][0]["unit"] == "mg/dL"
        assert isinstance(data["critical_findings"], list)
