"""
Medicine Safety Module

Pairwise drug-interaction lookup plus count, dosage and frequency
side-checks for a list of medications.
"""
import re
from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from enum import Enum

from healthassist.config import settings
from healthassist.core.extraction.base import parse_number
from healthassist.core.validation import require_items
from healthassist.utils import get_logger

logger = get_logger(__name__)


class InteractionSeverity(str, Enum):
    """Severity of a known drug interaction."""
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class OverdoseRisk(str, Enum):
    """Overdose risk from the number of distinct medications."""
    NONE = "none"
    MEDIUM = "medium"
    HIGH = "high"


INTERACTION_RECOMMENDATION = "Consult your doctor before taking these together"

KNOWN_INTERACTIONS: Dict[Tuple[str, str], InteractionSeverity] = {
    ("aspirin", "warfarin"): InteractionSeverity.SEVERE,
    ("ibuprofen", "warfarin"): InteractionSeverity.SEVERE,
    ("aspirin", "methotrexate"): InteractionSeverity.SEVERE,
    ("ibuprofen", "lithium"): InteractionSeverity.SEVERE,
    ("paracetamol", "warfarin"): InteractionSeverity.MODERATE,
    ("aspirin", "ibuprofen"): InteractionSeverity.MODERATE,
    ("paracetamol", "ibuprofen"): InteractionSeverity.MILD,
    ("paracetamol", "aspirin"): InteractionSeverity.MILD,
}

# Hourly or half-hourly dosing
_FREQUENT_DOSING = re.compile(
    r"\bhourly\b"
    r"|\bevery\s+(?:1\s+|one\s+)?hour\b"
    r"|\bevery\s+half(?:\s+an)?\s+hour\b",
    re.IGNORECASE,
)
_MINUTE_INTERVAL = re.compile(r"\bevery\s+(\d+)\s*(?:min|mins|minute|minutes)\b", re.IGNORECASE)
MINUTES_PER_HOUR = 60


@dataclass(frozen=True)
class Interaction:
    """A known interaction between two of the supplied medications."""
    drug_a: str
    drug_b: str
    severity: InteractionSeverity
    description: str
    recommendation: str = INTERACTION_RECOMMENDATION

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "drug_a": self.drug_a,
            "drug_b": self.drug_b,
            "severity": self.severity.value,
            "description": self.description,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class SideCheck:
    """Outcome of a dosage or frequency check."""
    valid: bool
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "message": self.message}


@dataclass(frozen=True)
class MedicineSafetyResult:
    """Complete safety check for one medication list."""
    medications: Tuple[str, ...]
    safe: bool
    interactions: Tuple[Interaction, ...]
    overdose_risk: OverdoseRisk
    dosage_check: SideCheck
    frequency_check: SideCheck
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "medications": list(self.medications),
            "safe": self.safe,
            "interactions": [i.to_dict() for i in self.interactions],
            "overdose_risk": self.overdose_risk.value,
            "dosage_check": self.dosage_check.to_dict(),
            "frequency_check": self.frequency_check.to_dict(),
            "warnings": list(self.warnings),
        }


class InteractionMatrix:
    """
    Undirected interaction table.

    Keys are frozensets of lower-cased names, so lookup(a, b) and
    lookup(b, a) hit the same entry. A missing pair means no known
    interaction.
    """

    def __init__(self, entries: Mapping[Tuple[str, str], InteractionSeverity] = KNOWN_INTERACTIONS):
        self._table: Dict[frozenset, InteractionSeverity] = {}
        for (a, b), severity in entries.items():
            key = frozenset((a.strip().lower(), b.strip().lower()))
            if len(key) != 2:
                raise ValueError(f"Interaction entry needs two distinct drugs: {a!r}, {b!r}")
            self._table[key] = InteractionSeverity(severity)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, pair: Iterable[str]) -> bool:
        return frozenset(n.strip().lower() for n in pair) in self._table

    def lookup(self, drug_a: str, drug_b: str) -> Optional[InteractionSeverity]:
        """Severity for the pair, or None."""
        return self._table.get(frozenset((drug_a.strip().lower(), drug_b.strip().lower())))

    def interactions_among(self, names: Sequence[str]) -> List[Interaction]:
        """Every known interaction among `names`, pairs in input order."""
        found = []
        for drug_a, drug_b in combinations(names, 2):
            severity = self.lookup(drug_a, drug_b)
            if severity is None:
                continue
            found.append(Interaction(
                drug_a=drug_a,
                drug_b=drug_b,
                severity=severity,
                description=f"{drug_a} and {drug_b} may interact and cause adverse effects",
            ))
        return found

    def pairs(self) -> List[Dict[str, str]]:
        """The table as sorted pair records."""
        return sorted(
            ({"drugs": sorted(key), "severity": severity.value} for key, severity in self._table.items()),
            key=lambda p: p["drugs"],
        )


class MedicineSafetyChecker:
    """
    Checks a medication list for interactions and risky dosing.

    The list is safe only when no interaction is found, the overdose risk
    is none, and both the dosage and frequency checks pass.
    """

    def __init__(
        self,
        matrix: Optional[InteractionMatrix] = None,
        max_single_dose_mg: Optional[float] = None,
        overdose_medium_count: Optional[int] = None,
        overdose_high_count: Optional[int] = None,
    ):
        self.matrix = InteractionMatrix() if matrix is None else matrix
        self.max_single_dose_mg = (
            settings.max_single_dose_mg if max_single_dose_mg is None else max_single_dose_mg
        )
        self.overdose_medium_count = (
            settings.overdose_medium_count if overdose_medium_count is None else overdose_medium_count
        )
        self.overdose_high_count = (
            settings.overdose_high_count if overdose_high_count is None else overdose_high_count
        )
        logger.info(f"MedicineSafetyChecker initialized with {len(self.matrix)} known interactions")

    @staticmethod
    def distinct_medications(names: Optional[Iterable[str]]) -> List[str]:
        """Drop blanks and collapse case-insensitive duplicates to the first spelling."""
        items = require_items(names, "medications", "Please enter at least one medication")
        seen = set()
        distinct = []
        for name in items:
            key = name.lower()
            if key not in seen:
                seen.add(key)
                distinct.append(name)
        return distinct

    def overdose_risk(self, count: int) -> OverdoseRisk:
        if count > self.overdose_high_count:
            return OverdoseRisk.HIGH
        if count > self.overdose_medium_count:
            return OverdoseRisk.MEDIUM
        return OverdoseRisk.NONE

    def check_dosage(self, dosage: Optional[str]) -> SideCheck:
        amount = parse_number(dosage)
        if amount is not None and amount > self.max_single_dose_mg:
            return SideCheck(False, "Dosage seems high. Please verify with doctor")
        return SideCheck(True, "Dosage appears safe")

    @staticmethod
    def is_frequent(frequency: Optional[str]) -> bool:
        """Hourly or more often; minute intervals count only under an hour."""
        if not frequency:
            return False
        if _FREQUENT_DOSING.search(frequency):
            return True
        return any(int(m.group(1)) < MINUTES_PER_HOUR for m in _MINUTE_INTERVAL.finditer(frequency))

    def check_frequency(self, frequency: Optional[str]) -> SideCheck:
        if self.is_frequent(frequency):
            return SideCheck(False, "Very frequent dosing - verify with doctor")
        return SideCheck(True, "Frequency appears safe")

    def check(
        self,
        names: Optional[Iterable[str]],
        dosage: Optional[str] = None,
        frequency: Optional[str] = None,
    ) -> MedicineSafetyResult:
        """
        Run the full safety check.

        Args:
            names: Medication names as entered
            dosage: Optional single-dose text, e.g. "500 mg"
            frequency: Optional dosing frequency text

        Returns:
            MedicineSafetyResult

        Raises:
            AssessmentValidationError: if no non-blank medication is given
        """
        medications = self.distinct_medications(names)
        interactions = self.matrix.interactions_among(medications)
        overdose = self.overdose_risk(len(medications))
        dosage_check = self.check_dosage(dosage)
        frequency_check = self.check_frequency(frequency)

        warnings = []
        if overdose == OverdoseRisk.HIGH:
            warnings.append("Taking too many medications simultaneously increases overdose risk")
        elif overdose == OverdoseRisk.MEDIUM:
            warnings.append("Multiple medications may increase side effects")
        if not dosage_check.valid:
            warnings.append("High dosage detected - verify with healthcare provider")
        if not frequency_check.valid:
            warnings.append("Frequent dosing may cause overdose")

        safe = (
            not interactions
            and overdose == OverdoseRisk.NONE
            and dosage_check.valid
            and frequency_check.valid
        )
        logger.debug(
            f"Safety check: {len(medications)} medications, {len(interactions)} interactions, safe={safe}"
        )
        return MedicineSafetyResult(
            medications=tuple(medications),
            safe=safe,
            interactions=tuple(interactions),
            overdose_risk=overdose,
            dosage_check=dosage_check,
            frequency_check=frequency_check,
            warnings=tuple(warnings),
        )
