"""
Unit Tests for Guidance Module

Tests for treatment plans, chat responses and profile summaries.
"""
import pytest

from healthassist.core.errors import AssessmentValidationError
from healthassist.core.guidance import (
    TreatmentPlanner, HealthChatResponder, summarize_profile, bmi_category,
    VitalStatus, systolic_status, heart_rate_status,
)


@pytest.fixture
def planner() -> TreatmentPlanner:
    return TreatmentPlanner()


@pytest.fixture
def responder() -> HealthChatResponder:
    return HealthChatResponder()


class TestTreatmentPlanner:
    """Tests for TreatmentPlanner.plan_for."""

    def test_known_condition(self, planner):
        plan = planner.plan_for("Common Cold")

        assert plan.condition == "Common Cold"
        assert plan.duration == "7-10 days"
        assert plan.medications[0].name == "Paracetamol"
        assert plan.is_fallback is False

    def test_lookup_is_case_insensitive(self, planner):
        assert planner.plan_for("  stomach INFECTION ").condition == "Stomach Infection"

    def test_every_listed_condition_has_a_plan(self, planner):
        assert len(planner.conditions) == 10
        for condition in planner.conditions:
            plan = planner.plan_for(condition)
            assert not plan.is_fallback
            assert plan.diet and plan.medications and plan.follow_up

    def test_unknown_condition_gets_generic_plan(self, planner):
        plan = planner.plan_for("Migraine")

        assert plan.is_fallback is True
        assert plan.condition == "Migraine"
        assert plan.duration == "5-7 days"
        assert plan.medications[0].name == "Consult doctor for prescription"

    @pytest.mark.parametrize("condition", ["", "   ", None])
    def test_empty_condition_rejected(self, planner, condition):
        with pytest.raises(AssessmentValidationError) as exc:
            planner.plan_for(condition)
        assert exc.value.field == "condition"

    def test_to_dict(self, planner):
        data = planner.plan_for("Fever").to_dict()

        assert data["medications"][0] == {
            "name": "Paracetamol",
            "dosage": "500-1000mg",
            "frequency": "Every 6-8 hours",
            "duration": "Until fever subsides",
        }
        assert data["follow_up"].startswith("If fever persists beyond 3 days")


class TestHealthChatResponder:

    @pytest.mark.parametrize("message,topic", [
        ("I have a terrible headache", "headache"),
        ("What temperature counts as a fever?", "fever"),
        ("My knee hurts", "pain"),
        ("Can I book an appointment?", "appointment"),
        ("This is urgent", "emergency"),
        ("Coughing all night", "cough"),
    ])
    def test_topics(self, responder, message, topic):
        assert responder.reply(message).topic == topic

    def test_first_topic_wins(self, responder):
        assert responder.reply("headache and fever").topic == "headache"

    def test_fallback(self, responder):
        reply = responder.reply("hello there")

        assert reply.topic is None
        assert reply.response.startswith("Thank you for sharing that information.")

    def test_empty_message_rejected(self, responder):
        with pytest.raises(AssessmentValidationError):
            responder.reply("  ")


class TestProfileSummary:

    @pytest.mark.parametrize("bmi,category", [
        (None, "N/A"),
        (18.4, "Underweight"),
        (18.5, "Normal"),
        (24.9, "Normal"),
        (25.0, "Overweight"),
        (30.0, "Obese"),
    ])
    def test_bmi_category(self, bmi, category):
        assert bmi_category(bmi) == category

    def test_healthy_profile(self):
        summary = summarize_profile({"weight": 70, "height": 170, "exercise": "weekly"}, ["None"])

        assert summary.bmi == 24.2
        assert summary.bmi_category == "Normal"
        assert summary.alerts == ()

    def test_alerts(self):
        summary = summarize_profile(
            {"weight": 90, "height": 170, "smoking": "yes", "exercise": "none"},
            ["Peanuts"],
        )

        assert summary.bmi_category == "Obese"
        assert summary.alerts == (
            "Smoking increases risk of heart disease and lung cancer",
            "Being overweight increases risk of diabetes and heart disease",
            "Regular exercise can improve your overall health",
            "Make sure healthcare providers are aware of your allergies",
        )

    def test_missing_height(self):
        summary = summarize_profile({"weight": 70})

        assert summary.bmi is None
        assert summary.bmi_category == "N/A"

    @pytest.mark.parametrize("systolic,status", [
        (118, VitalStatus.NORMAL),
        (120, VitalStatus.NORMAL),
        (121, VitalStatus.ELEVATED),
        (140, VitalStatus.ELEVATED),
        (141, VitalStatus.ALERT),
        (None, None),
    ])
    def test_systolic_status(self, systolic, status):
        assert systolic_status(systolic) == status

    @pytest.mark.parametrize("rate,status", [
        (59, VitalStatus.ALERT),
        (60, VitalStatus.NORMAL),
        (100, VitalStatus.NORMAL),
        (101, VitalStatus.ALERT),
        (None, None),
    ])
    def test_heart_rate_status(self, rate, status):
        assert heart_rate_status(rate) == status

    def test_vitals_in_summary(self):
        summary = summarize_profile({"bloodPressure": "145 mmHg", "heartRate": "72"})

        assert summary.blood_pressure_status == VitalStatus.ALERT
        assert summary.heart_rate_status == VitalStatus.NORMAL
        assert summary.to_dict()["blood_pressure_status"] == "alert"

    def test_vitals_not_recorded(self):
        summary = summarize_profile({"weight": 70, "height": 170})

        assert summary.blood_pressure_status is None
        assert summary.to_dict()["heart_rate_status"] is None
