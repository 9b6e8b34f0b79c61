"""
Risk Engine Module

Computes per-category disease risk scores from a normalized IndicatorSet:
rule evaluation, weight aggregation, band classification and advice lookup.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import numpy as np

from healthassist.core.extraction.base import IndicatorSet
from healthassist.core.inference.rules import (
    DISEASE_RULES, DISEASE_THRESHOLDS, BandThresholds, PredicateRule,
    RiskBand, RiskCategory,
)
from healthassist.core.inference.explanation import DISEASE_RESOLVER, RecommendationResolver
from healthassist.utils import get_logger

logger = get_logger(__name__)

SCORE_MIN = 0
SCORE_MAX = 100


@dataclass(frozen=True)
class FactorMatch:
    """A rule that fired: its weight and label."""
    weight: int
    factor_label: str


@dataclass(frozen=True)
class ScoreResult:
    """Risk result for one category."""
    category: RiskCategory
    raw_score: int  # unclamped sum of matched weights
    score: int  # 0-100
    band: RiskBand
    matched_factors: Tuple[str, ...] = field(default_factory=tuple)
    recommendations: Tuple[str, ...] = field(default_factory=tuple)
    explanation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "category": self.category.value,
            "score": self.score,
            "raw_score": self.raw_score,
            "band": self.band.value,
            "factors": list(self.matched_factors),
            "recommendations": list(self.recommendations),
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Results for every assessed category plus the worst band among them."""
    results: Tuple[ScoreResult, ...]
    overall_band: RiskBand
    indicators: IndicatorSet

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "results": [r.to_dict() for r in self.results],
            "overall_band": self.overall_band.value,
            "indicators": self.indicators.to_dict(),
        }


class RiskEngine:
    """
    Core risk computation engine.

    Every rule of a category is tested independently, in declaration order,
    and all matches contribute. Categories never share weight.
    """

    def __init__(
        self,
        rules: Sequence[PredicateRule] = DISEASE_RULES,
        thresholds: Mapping[RiskCategory, BandThresholds] = DISEASE_THRESHOLDS,
        resolver: RecommendationResolver = DISEASE_RESOLVER,
    ):
        self.rules = tuple(rules)
        self.thresholds = dict(thresholds)
        self.resolver = resolver
        logger.info(f"RiskEngine initialized with {len(self.rules)} rules")

    def evaluate(self, category: RiskCategory, indicators: IndicatorSet) -> List[FactorMatch]:
        """Collect every matching rule of `category`."""
        return [
            FactorMatch(rule.weight, rule.factor_label)
            for rule in self.rules
            if rule.category == category and rule.matches(indicators)
        ]

    @staticmethod
    def aggregate(matches: Iterable[FactorMatch]) -> int:
        """Sum matched weights, clamped to 0-100."""
        raw = sum(m.weight for m in matches)
        return int(np.clip(raw, SCORE_MIN, SCORE_MAX))

    def classify(self, category: RiskCategory, score: float) -> RiskBand:
        """Map a score to the category's band."""
        thresholds = self.thresholds.get(category)
        if thresholds is None:
            raise KeyError(f"No thresholds configured for {category.value}")
        return thresholds.classify(score)

    def score_category(self, category: RiskCategory, indicators: IndicatorSet) -> ScoreResult:
        """
        Score a single category.

        Args:
            category: Disease category
            indicators: Normalized indicators

        Returns:
            ScoreResult with factors in rule declaration order
        """
        matches = self.evaluate(category, indicators)
        raw_score = sum(m.weight for m in matches)
        score = self.aggregate(matches)
        band = self.classify(category, score)

        partial = ScoreResult(
            category=category,
            raw_score=raw_score,
            score=score,
            band=band,
            matched_factors=tuple(m.factor_label for m in matches),
            recommendations=tuple(self.resolver.recommendations_for(category, band)),
        )
        result = replace(partial, explanation=self.resolver.explain(partial))

        logger.debug(f"{category.value}: raw={raw_score} score={score} band={band.value}")
        return result

    def assess(
        self,
        indicators: IndicatorSet,
        categories: Optional[Sequence[RiskCategory]] = None,
    ) -> RiskAssessment:
        """Score every requested category (all by default)."""
        categories = list(categories) if categories else list(RiskCategory)
        results = tuple(self.score_category(c, indicators) for c in categories)
        return RiskAssessment(
            results=results,
            overall_band=self.overall_band(results),
            indicators=indicators,
        )

    @staticmethod
    def overall_band(results: Iterable[ScoreResult]) -> RiskBand:
        """Highest band among results; low when there are none."""
        bands = [r.band for r in results]
        if not bands:
            return RiskBand.LOW
        return max(bands, key=lambda b: b.rank)
