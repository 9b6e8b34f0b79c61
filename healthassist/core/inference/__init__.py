"""Disease risk inference: rule table, scoring engine and advice lookup."""
from healthassist.core.inference.rules import (
    RULESET_VERSION,
    RiskCategory,
    RiskBand,
    PredicateRule,
    BandThresholds,
    DISEASE_RULES,
    DISEASE_THRESHOLDS,
    describe_ruleset,
)
from healthassist.core.inference.explanation import RecommendationResolver, DISEASE_RESOLVER
from healthassist.core.inference.risk_engine import RiskEngine, ScoreResult, RiskAssessment, FactorMatch

__all__ = [
    "RULESET_VERSION",
    "RiskCategory",
    "RiskBand",
    "PredicateRule",
    "BandThresholds",
    "DISEASE_RULES",
    "DISEASE_THRESHOLDS",
    "describe_ruleset",
    "RecommendationResolver",
    "DISEASE_RESOLVER",
    "RiskEngine",
    "ScoreResult",
    "RiskAssessment",
    "FactorMatch",
]
