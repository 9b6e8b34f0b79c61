"""
Recommendation Resolver

Static advice tables keyed by category and, for domains whose advice varies
with severity, by band. Every lookup resolves to a non-empty list: unknown
categories or bands fall back to generic guidance.
"""
from __future__ import annotations
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence, Tuple, Union, TYPE_CHECKING
from enum import Enum

from healthassist.core.inference.rules import RiskBand, RiskCategory
from healthassist.utils import get_logger

if TYPE_CHECKING:
    from healthassist.core.inference.risk_engine import ScoreResult

logger = get_logger(__name__)


AdviceEntry = Union[Sequence[str], Mapping[Hashable, Sequence[str]]]

GENERIC_RECOMMENDATIONS: Tuple[str, ...] = (
    "Maintain a balanced diet",
    "Stay physically active",
    "Schedule regular health checkups",
    "Consult a healthcare provider if you have concerns",
)

CONSULT_PROVIDER = "Please consult with a healthcare provider for proper evaluation and management."


def _label(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


class RecommendationResolver:
    """
    Looks up advisory strings for a (category, band) pair.

    A template entry is either a flat list (advice independent of band) or a
    mapping of band to list. Advisories keyed by band are appended after the
    looked-up list, e.g. a "see a doctor" line for high bands.
    """

    def __init__(
        self,
        templates: Mapping[Hashable, AdviceEntry],
        fallback: Sequence[str] = GENERIC_RECOMMENDATIONS,
        advisories: Optional[Mapping[Hashable, str]] = None,
    ):
        if not fallback:
            raise ValueError("fallback recommendations must not be empty")
        self._templates = dict(templates)
        self._fallback = tuple(fallback)
        self._advisories = dict(advisories or {})

    @property
    def categories(self) -> List[Hashable]:
        return list(self._templates)

    def recommendations_for(self, category: Hashable, band: Optional[Hashable] = None) -> List[str]:
        """
        Resolve advice for a category and band.

        Args:
            category: Template key (a RiskCategory, a domain name, ...)
            band: Ordinal band; ignored for band-independent categories

        Returns:
            Ordered, non-empty list of advisory strings
        """
        entry = self._templates.get(category)
        if entry is None:
            logger.debug(f"No advice template for {_label(category)}, using fallback")
            advice = list(self._fallback)
        elif isinstance(entry, Mapping):
            advice = list(entry.get(band) or self._fallback)
        else:
            advice = list(entry)

        advisory = self._advisories.get(band)
        if advisory and advisory not in advice:
            advice.append(advisory)
        return advice

    @staticmethod
    def explain(result: "ScoreResult") -> str:
        """One-line summary naming the band, the score and the contributing factors."""
        head = (
            f"{_label(result.category)}: {_label(result.band).upper()} risk "
            f"(score {result.score}/100)"
        )
        if result.matched_factors:
            return f"{head} driven by {', '.join(result.matched_factors)}."
        return f"{head}, no risk factors identified."


DISEASE_TEMPLATES: Dict[RiskCategory, Tuple[str, ...]] = {
    RiskCategory.TYPE_2_DIABETES: (
        "Maintain healthy weight",
        "Regular exercise (30 min daily)",
        "Monitor blood sugar levels",
        "Eat balanced diet",
        "Annual health checkup",
    ),
    RiskCategory.HEART_DISEASE: (
        "Control blood pressure",
        "Lower cholesterol levels",
        "Quit smoking",
        "Regular cardiovascular exercise",
        "Heart-healthy diet",
        "Annual cardiac screening",
    ),
    RiskCategory.HYPERTENSION: (
        "Reduce sodium intake",
        "Maintain healthy weight",
        "Regular exercise",
        "Limit alcohol",
        "Stress management",
        "Regular BP monitoring",
    ),
}

DISEASE_RESOLVER = RecommendationResolver(
    DISEASE_TEMPLATES,
    advisories={RiskBand.HIGH: CONSULT_PROVIDER, RiskBand.CRITICAL: CONSULT_PROVIDER},
)
