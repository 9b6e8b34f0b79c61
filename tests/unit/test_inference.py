"""
Unit Tests for Inference Module

Tests for the rule table, risk engine, thresholds and recommendation lookup.
"""
import pytest
from typing import Any, Dict

from healthassist.core.extraction import normalize_indicators
from healthassist.core.inference import (
    RiskEngine, RiskCategory, RiskBand, BandThresholds, RecommendationResolver,
    DISEASE_RULES, RULESET_VERSION, describe_ruleset,
)
from healthassist.core.inference.explanation import CONSULT_PROVIDER, GENERIC_RECOMMENDATIONS
from healthassist.core.inference.risk_engine import FactorMatch
from healthassist.core.inference.rules import AboveThreshold, TextContains, ValueEquals


# Fixtures
@pytest.fixture
def engine() -> RiskEngine:
    return RiskEngine()


@pytest.fixture
def cardiac_profile() -> Dict[str, Any]:
    """Older smoker with high blood pressure and cholesterol."""
    return {
        "age": 50,
        "systolic_bp": 145,
        "cholesterol": 250,
        "smoking": "yes",
        "exercise": "none",
    }


def _by_category(assessment):
    return {r.category: r for r in assessment.results}


class TestConditions:
    """Tests for declarative rule conditions."""

    def test_above_threshold_is_strict(self):
        condition = AboveThreshold("age", 45)
        assert condition(normalize_indicators({"age": 46}))
        assert not condition(normalize_indicators({"age": 45}))

    def test_text_contains_is_case_insensitive(self):
        condition = TextContains("family_history", "Heart")
        assert condition(normalize_indicators({"family_history": "Mother: HEART disease"}))
        assert not condition(normalize_indicators({"family_history": "asthma"}))

    def test_value_equals(self):
        condition = ValueEquals("smoking", "yes")
        assert condition(normalize_indicators({"smoking": "Yes"}))
        assert not condition(normalize_indicators({"smoking": "occasional"}))

    def test_describe(self):
        assert AboveThreshold("glucose", 100).describe() == "glucose > 100"


class TestRiskEngine:
    """Tests for RiskEngine scoring."""

    def test_cardiac_profile_is_high_heart_risk(self, engine, cardiac_profile):
        """Age 50 does not pass the strict age > 50 rule; the rest still saturate the band."""
        results = _by_category(engine.assess(normalize_indicators(cardiac_profile)))
        heart = results[RiskCategory.HEART_DISEASE]

        assert heart.band == RiskBand.HIGH
        assert heart.score >= 60
        assert heart.raw_score == 90
        assert heart.matched_factors == (
            "High blood pressure", "High cholesterol", "Smoking", "Sedentary lifestyle",
        )

    def test_cardiac_profile_other_categories(self, engine, cardiac_profile):
        results = _by_category(engine.assess(normalize_indicators(cardiac_profile)))

        diabetes = results[RiskCategory.TYPE_2_DIABETES]
        assert diabetes.score == 30
        assert diabetes.band == RiskBand.LOW

        hypertension = results[RiskCategory.HYPERTENSION]
        assert hypertension.score == 65
        assert hypertension.band == RiskBand.HIGH

    def test_all_defaults_are_low(self, engine):
        assessment = engine.assess(normalize_indicators({}))

        assert len(assessment.results) == 3
        for result in assessment.results:
            assert result.band == RiskBand.LOW
            assert result.score == 0
            assert result.matched_factors == ()
        assert assessment.overall_band == RiskBand.LOW

    def test_score_clamped_to_100(self, engine):
        indicators = normalize_indicators({
            "age": 60, "systolic_bp": 150, "cholesterol": 260,
            "smoking": "yes", "family_history": "heart disease", "exercise": "none",
        })
        heart = engine.score_category(RiskCategory.HEART_DISEASE, indicators)

        assert heart.raw_score == 125
        assert heart.score == 100

    def test_aggregate_clamps(self):
        assert RiskEngine.aggregate([FactorMatch(80, "a"), FactorMatch(40, "b")]) == 100
        assert RiskEngine.aggregate([]) == 0

    def test_hypertension_thresholds(self, engine):
        """Hypertension uses high > 50 and medium > 30."""
        assert engine.classify(RiskCategory.HYPERTENSION, 50) == RiskBand.MEDIUM
        assert engine.classify(RiskCategory.HYPERTENSION, 51) == RiskBand.HIGH
        assert engine.classify(RiskCategory.HYPERTENSION, 30) == RiskBand.LOW
        assert engine.classify(RiskCategory.HYPERTENSION, 31) == RiskBand.MEDIUM

    def test_diabetes_thresholds(self, engine):
        assert engine.classify(RiskCategory.TYPE_2_DIABETES, 60) == RiskBand.MEDIUM
        assert engine.classify(RiskCategory.TYPE_2_DIABETES, 61) == RiskBand.HIGH
        assert engine.classify(RiskCategory.TYPE_2_DIABETES, 40) == RiskBand.LOW

    def test_family_history_keyword(self, engine):
        indicators = normalize_indicators({"family_history": "Diabetes (mother)"})
        diabetes = engine.score_category(RiskCategory.TYPE_2_DIABETES, indicators)

        assert diabetes.matched_factors == ("Family history of diabetes",)
        assert diabetes.score == 15

    def test_overweight_from_weight_and_height(self, engine):
        indicators = normalize_indicators({"weight": 90, "height": 170})
        hypertension = engine.score_category(RiskCategory.HYPERTENSION, indicators)

        assert "Overweight" in hypertension.matched_factors

    @pytest.mark.parametrize("raw", [
        {},
        {"age": 46},
        {"glucose": "130 mg/dL", "exercise": "none"},
        {"alcohol": "daily", "smoking": "yes"},
        {"age": 70, "systolic_bp": 180, "glucose": 200, "bmi": 35, "family_history": "diabetes, heart"},
    ])
    def test_factors_present_iff_positive_score(self, engine, raw):
        for result in engine.assess(normalize_indicators(raw)).results:
            assert (len(result.matched_factors) > 0) == (result.raw_score > 0)
            assert 0 <= result.score <= 100

    def test_deterministic(self, engine, cardiac_profile):
        first = engine.assess(normalize_indicators(cardiac_profile)).to_dict()
        second = engine.assess(normalize_indicators(dict(cardiac_profile))).to_dict()
        assert first == second

    def test_category_subset(self, engine):
        assessment = engine.assess(normalize_indicators({"age": 40}), [RiskCategory.HYPERTENSION])
        assert [r.category for r in assessment.results] == [RiskCategory.HYPERTENSION]

    def test_overall_band_is_highest(self, engine, cardiac_profile):
        assessment = engine.assess(normalize_indicators(cardiac_profile))
        assert assessment.overall_band == RiskBand.HIGH

    def test_overall_band_empty(self):
        assert RiskEngine.overall_band([]) == RiskBand.LOW


class TestRecommendations:
    """Tests for recommendation lookup and explanations."""

    def test_high_band_adds_consult_advisory(self, engine, cardiac_profile):
        heart = engine.score_category(RiskCategory.HEART_DISEASE, normalize_indicators(cardiac_profile))

        assert heart.recommendations[0] == "Control blood pressure"
        assert heart.recommendations[-1] == CONSULT_PROVIDER

    def test_low_band_has_no_advisory(self, engine):
        diabetes = engine.score_category(RiskCategory.TYPE_2_DIABETES, normalize_indicators({}))

        assert CONSULT_PROVIDER not in diabetes.recommendations
        assert len(diabetes.recommendations) == 5

    def test_unknown_category_uses_fallback(self):
        resolver = RecommendationResolver({"known": ("a",)})
        assert resolver.recommendations_for("unknown") == list(GENERIC_RECOMMENDATIONS)

    def test_missing_band_uses_fallback(self):
        resolver = RecommendationResolver({"banded": {"low": ("rest",)}}, fallback=("see a doctor",))
        assert resolver.recommendations_for("banded", "low") == ["rest"]
        assert resolver.recommendations_for("banded", "high") == ["see a doctor"]

    def test_empty_fallback_rejected(self):
        with pytest.raises(ValueError):
            RecommendationResolver({}, fallback=())

    def test_explanation(self, engine, cardiac_profile):
        heart = engine.score_category(RiskCategory.HEART_DISEASE, normalize_indicators(cardiac_profile))

        assert heart.explanation.startswith("Heart Disease: HIGH risk (score 90/100)")
        assert "Smoking" in heart.explanation

    def test_explanation_without_factors(self, engine):
        result = engine.score_category(RiskCategory.HYPERTENSION, normalize_indicators({}))
        assert result.explanation.endswith("no risk factors identified.")


class TestBandThresholds:

    def test_inclusive_cut_points(self):
        thresholds = BandThresholds(
            cut_points=((RiskBand.HIGH, 50),), default=RiskBand.LOW, inclusive=True
        )
        assert thresholds.classify(50) == RiskBand.HIGH
        assert thresholds.classify(49.9) == RiskBand.LOW

    def test_strict_cut_points(self):
        thresholds = BandThresholds(cut_points=((RiskBand.HIGH, 50),), default=RiskBand.LOW)
        assert thresholds.classify(50) == RiskBand.LOW


class TestRuleset:

    def test_rule_table_shape(self):
        assert len(DISEASE_RULES) == 16
        assert all(rule.weight > 0 for rule in DISEASE_RULES)

    def test_describe_ruleset(self):
        ruleset = describe_ruleset()

        assert ruleset["version"] == RULESET_VERSION
        assert [c["category"] for c in ruleset["categories"]] == [
            "Type 2 Diabetes", "Heart Disease", "Hypertension",
        ]
        hypertension = ruleset["categories"][2]
        assert hypertension["rules"][0] == {
            "category": "Hypertension",
            "condition": "systolic_bp > 130",
            "weight": 40,
            "factor_label": "Elevated blood pressure",
        }
        assert hypertension["thresholds"]["cut_points"][0] == {"band": "high", "above": 50}
