"""
Predicate Rule Table

Versioned, declarative rule data for disease-risk scoring. Each rule is an
immutable (category, condition, weight, factor label) tuple; conditions are
small data objects rather than lambdas so the table can be listed and
audited.

The weights and cut points are placeholder demo constants with no clinical
validation behind them.
"""
from dataclasses import dataclass
from typing import Any, Dict, Generic, Tuple, TypeVar
from enum import Enum

from healthassist.core.extraction.base import IndicatorSet

RULESET_VERSION = "2024.1"

BandT = TypeVar("BandT", bound=Enum)


class RiskCategory(str, Enum):
    """Disease categories scored independently of each other."""
    TYPE_2_DIABETES = "Type 2 Diabetes"
    HEART_DISEASE = "Heart Disease"
    HYPERTENSION = "Hypertension"


class RiskBand(str, Enum):
    """Ordinal risk bands."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return list(RiskBand).index(self)


# ---- Conditions ----

@dataclass(frozen=True)
class AboveThreshold:
    """Numeric indicator strictly greater than a constant."""
    field: str
    threshold: float

    def __call__(self, indicators: IndicatorSet) -> bool:
        return getattr(indicators, self.field) > self.threshold

    def describe(self) -> str:
        return f"{self.field} > {self.threshold:g}"


@dataclass(frozen=True)
class TextContains:
    """Case-insensitive substring check on a free-text indicator."""
    field: str
    keyword: str

    def __call__(self, indicators: IndicatorSet) -> bool:
        return self.keyword.lower() in getattr(indicators, self.field)

    def describe(self) -> str:
        return f"'{self.keyword}' in {self.field}"


@dataclass(frozen=True)
class ValueEquals:
    """Categorical indicator equal to an option value."""
    field: str
    value: str

    def __call__(self, indicators: IndicatorSet) -> bool:
        return getattr(indicators, self.field) == self.value

    def describe(self) -> str:
        return f"{self.field} == '{self.value}'"


@dataclass(frozen=True)
class PredicateRule:
    """A condition that contributes `weight` to its category when it holds."""
    category: RiskCategory
    condition: Any
    weight: int
    factor_label: str

    def matches(self, indicators: IndicatorSet) -> bool:
        return bool(self.condition(indicators))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "category": self.category.value,
            "condition": self.condition.describe(),
            "weight": self.weight,
            "factor_label": self.factor_label,
        }


@dataclass(frozen=True)
class BandThresholds(Generic[BandT]):
    """
    Per-category cut points, highest band first.

    A score lands in the first band whose cut point it exceeds (or reaches,
    when `inclusive`); otherwise in `default`.
    """
    cut_points: Tuple[Tuple[BandT, float], ...]
    default: BandT
    inclusive: bool = False

    def classify(self, score: float) -> BandT:
        for band, cut in self.cut_points:
            if score > cut or (self.inclusive and score == cut):
                return band
        return self.default

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "cut_points": [{"band": band.value, "above": cut} for band, cut in self.cut_points],
            "default": self.default.value,
            "inclusive": self.inclusive,
        }


# ---- Disease rule table (declaration order is evaluation order) ----

_D = RiskCategory.TYPE_2_DIABETES
_H = RiskCategory.HEART_DISEASE
_HT = RiskCategory.HYPERTENSION

DISEASE_RULES: Tuple[PredicateRule, ...] = (
    PredicateRule(_D, AboveThreshold("age", 45), 20, "Age > 45"),
    PredicateRule(_D, AboveThreshold("bmi", 25), 25, "Overweight (BMI > 25)"),
    PredicateRule(_D, AboveThreshold("glucose", 100), 30, "Elevated blood sugar"),
    PredicateRule(_D, TextContains("family_history", "diabetes"), 15, "Family history of diabetes"),
    PredicateRule(_D, ValueEquals("exercise", "none"), 10, "No regular exercise"),

    PredicateRule(_H, AboveThreshold("age", 50), 20, "Age > 50"),
    PredicateRule(_H, AboveThreshold("systolic_bp", 140), 30, "High blood pressure"),
    PredicateRule(_H, AboveThreshold("cholesterol", 240), 25, "High cholesterol"),
    PredicateRule(_H, ValueEquals("smoking", "yes"), 25, "Smoking"),
    PredicateRule(_H, TextContains("family_history", "heart"), 15, "Family history of heart disease"),
    PredicateRule(_H, ValueEquals("exercise", "none"), 10, "Sedentary lifestyle"),

    PredicateRule(_HT, AboveThreshold("systolic_bp", 130), 40, "Elevated blood pressure"),
    PredicateRule(_HT, AboveThreshold("bmi", 25), 20, "Overweight"),
    PredicateRule(_HT, ValueEquals("smoking", "yes"), 15, "Smoking"),
    PredicateRule(_HT, ValueEquals("alcohol", "daily"), 15, "Regular alcohol consumption"),
    PredicateRule(_HT, ValueEquals("exercise", "none"), 10, "No exercise"),
)

DISEASE_THRESHOLDS: Dict[RiskCategory, BandThresholds] = {
    RiskCategory.TYPE_2_DIABETES: BandThresholds(
        cut_points=((RiskBand.HIGH, 60), (RiskBand.MEDIUM, 40)), default=RiskBand.LOW
    ),
    RiskCategory.HEART_DISEASE: BandThresholds(
        cut_points=((RiskBand.HIGH, 60), (RiskBand.MEDIUM, 40)), default=RiskBand.LOW
    ),
    RiskCategory.HYPERTENSION: BandThresholds(
        cut_points=((RiskBand.HIGH, 50), (RiskBand.MEDIUM, 30)), default=RiskBand.LOW
    ),
}


def rules_for(category: RiskCategory, rules: Tuple[PredicateRule, ...] = DISEASE_RULES) -> Tuple[PredicateRule, ...]:
    """Rules of one category, in declaration order."""
    return tuple(rule for rule in rules if rule.category == category)


def describe_ruleset() -> Dict[str, Any]:
    """Versioned dump of the disease rule table and its thresholds."""
    return {
        "version": RULESET_VERSION,
        "categories": [
            {
                "category": category.value,
                "rules": [rule.to_dict() for rule in rules_for(category)],
                "thresholds": DISEASE_THRESHOLDS[category].to_dict(),
            }
            for category in RiskCategory
        ],
    }
