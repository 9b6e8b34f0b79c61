"""
Unit Tests for Medicine Safety
"""
import pytest

from healthassist.core.errors import AssessmentValidationError
from healthassist.core.safety import (
    InteractionMatrix, InteractionSeverity, MedicineSafetyChecker, OverdoseRisk,
)


@pytest.fixture
def checker() -> MedicineSafetyChecker:
    return MedicineSafetyChecker()


class TestInteractionMatrix:
    """Tests for the symmetric interaction table."""

    def test_lookup_is_symmetric(self):
        matrix = InteractionMatrix()
        assert matrix.lookup("Aspirin", "Warfarin") == InteractionSeverity.SEVERE
        assert matrix.lookup("warfarin", "ASPIRIN") == InteractionSeverity.SEVERE

    def test_unknown_pair(self):
        assert InteractionMatrix().lookup("aspirin", "vitamin c") is None

    def test_contains(self):
        matrix = InteractionMatrix()
        assert ("ibuprofen", "lithium") in matrix
        assert ("lithium", "paracetamol") not in matrix

    def test_rejects_self_pair(self):
        with pytest.raises(ValueError):
            InteractionMatrix({("aspirin", "Aspirin"): InteractionSeverity.MILD})

    def test_pairs_listing(self):
        pairs = InteractionMatrix().pairs()
        assert len(pairs) == 8
        assert {"drugs": ["aspirin", "warfarin"], "severity": "severe"} in pairs


class TestMedicineSafetyChecker:
    """Tests for MedicineSafetyChecker.check."""

    def test_aspirin_and_warfarin(self, checker):
        result = checker.check(["Aspirin", "Warfarin"])

        assert len(result.interactions) == 1
        interaction = result.interactions[0]
        assert interaction.severity == InteractionSeverity.SEVERE
        assert interaction.drug_a == "Aspirin"
        assert interaction.drug_b == "Warfarin"
        assert interaction.description == "Aspirin and Warfarin may interact and cause adverse effects"
        assert interaction.recommendation == "Consult your doctor before taking these together"
        assert result.safe is False

    def test_single_medication_is_safe(self, checker):
        result = checker.check(["Paracetamol"])

        assert result.interactions == ()
        assert result.overdose_risk == OverdoseRisk.NONE
        assert result.dosage_check.valid
        assert result.frequency_check.valid
        assert result.warnings == ()
        assert result.safe is True

    def test_order_does_not_change_severity(self, checker):
        forward = checker.check(["Ibuprofen", "Warfarin"]).interactions[0]
        backward = checker.check(["Warfarin", "Ibuprofen"]).interactions[0]
        assert forward.severity == backward.severity

    def test_pairs_reported_in_input_order(self, checker):
        result = checker.check(["Warfarin", "Paracetamol", "Aspirin"])

        assert [(i.drug_a, i.drug_b, i.severity) for i in result.interactions] == [
            ("Warfarin", "Paracetamol", InteractionSeverity.MODERATE),
            ("Warfarin", "Aspirin", InteractionSeverity.SEVERE),
            ("Paracetamol", "Aspirin", InteractionSeverity.MILD),
        ]

    @pytest.mark.parametrize("names", [[], ["", "   "], None])
    def test_empty_list_rejected(self, checker, names):
        with pytest.raises(AssessmentValidationError) as exc:
            checker.check(names)
        assert exc.value.field == "medications"

    def test_duplicates_collapse(self, checker):
        result = checker.check(["Aspirin", "aspirin", " ASPIRIN "])

        assert result.medications == ("Aspirin",)
        assert result.interactions == ()
        assert result.safe is True

    def test_medium_overdose_risk(self, checker):
        result = checker.check(["Vitamin D", "Zinc", "Iron", "Calcium"])

        assert result.overdose_risk == OverdoseRisk.MEDIUM
        assert result.warnings == ("Multiple medications may increase side effects",)
        assert result.safe is False

    def test_high_overdose_risk(self, checker):
        result = checker.check(["A", "B", "C", "D", "E", "F"])

        assert result.overdose_risk == OverdoseRisk.HIGH
        assert result.warnings == ("Taking too many medications simultaneously increases overdose risk",)

    def test_three_medications_no_overdose_risk(self, checker):
        assert checker.check(["Zinc", "Iron", "Calcium"]).overdose_risk == OverdoseRisk.NONE

    @pytest.mark.parametrize("dosage,valid", [
        ("500mg", True),
        ("1000 mg", True),
        ("1500 mg", False),
        ("two tablets", True),
        (None, True),
    ])
    def test_dosage_check(self, checker, dosage, valid):
        result = checker.check(["Paracetamol"], dosage=dosage)
        assert result.dosage_check.valid is valid
        assert result.safe is valid

    @pytest.mark.parametrize("frequency,valid", [
        ("every hour", False),
        ("Hourly", False),
        ("every 30 minutes", False),
        ("every 45 minutes", False),
        ("every 90 minutes", True),
        ("every 240 minutes", True),
        ("every half hour", False),
        ("every 6 hours", True),
        ("every 4-6 hours", True),
        ("twice daily", True),
        (None, True),
    ])
    def test_frequency_check(self, checker, frequency, valid):
        result = checker.check(["Paracetamol"], frequency=frequency)
        assert result.frequency_check.valid is valid

    def test_warning_order(self, checker):
        result = checker.check(["Zinc", "Iron", "Calcium", "Magnesium"], dosage="2000 mg", frequency="hourly")

        assert result.warnings == (
            "Multiple medications may increase side effects",
            "High dosage detected - verify with healthcare provider",
            "Frequent dosing may cause overdose",
        )
        assert result.dosage_check.message == "Dosage seems high. Please verify with doctor"
        assert result.frequency_check.message == "Very frequent dosing - verify with doctor"

    def test_configurable_ceiling(self):
        checker = MedicineSafetyChecker(max_single_dose_mg=400)
        assert checker.check(["Ibuprofen"], dosage="600 mg").dosage_check.valid is False

    def test_zero_overrides_are_kept(self):
        checker = MedicineSafetyChecker(max_single_dose_mg=0, overdose_medium_count=0)

        assert checker.overdose_medium_count == 0
        result = checker.check(["Zinc"], dosage="5 mg")
        assert result.overdose_risk == OverdoseRisk.MEDIUM
        assert result.dosage_check.valid is False

    def test_to_dict(self, checker):
        data = checker.check(["Aspirin", "Ibuprofen"]).to_dict()

        assert data["interactions"][0]["severity"] == "moderate"
        assert data["overdose_risk"] == "none"
        assert data["dosage_check"] == {"valid": True, "message": "Dosage appears safe"}
