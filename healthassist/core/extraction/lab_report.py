"""
Lab Report Parser

Extracts labelled lab values from unstructured report text and classifies
each one against fixed per-test bands.
"""
import re
from functools import lru_cache
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum

from healthassist.core.validation import require_text
from healthassist.utils import get_logger

logger = get_logger(__name__)

_NUMBER = r"(\d+(?:\.\d+)?)"
NO_RESULTS_SUMMARY = (
    "No recognized lab values were found in this report. "
    "Please review it with your healthcare provider."
)


class LabStatus(str, Enum):
    """Status of a single lab value."""
    NORMAL = "normal"
    LOW = "low"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class LabBand:
    """One status band: value `op` threshold -> status."""
    status: LabStatus
    op: str  # "<" or ">"
    threshold: float
    explanation: str

    def matches(self, value: float) -> bool:
        if self.op == "<":
            return value < self.threshold
        return value > self.threshold


@lru_cache(maxsize=None)
def _alias_patterns(aliases: Tuple[str, ...]) -> Tuple["re.Pattern", "re.Pattern"]:
    """Compiled (detect, value) patterns for one alias set."""
    alternatives = "|".join(re.escape(a) for a in aliases)
    return (
        re.compile(rf"\b(?:{alternatives})\b", re.IGNORECASE),
        re.compile(rf"\b(?:{alternatives})\b[\s:=()]*{_NUMBER}", re.IGNORECASE),
    )


@dataclass(frozen=True)
class LabTestSpec:
    """Extraction and classification rules for one lab test."""
    name: str
    aliases: Tuple[str, ...]
    unit: str
    normal_range: str
    default_value: float
    bands: Tuple[LabBand, ...]
    normal_explanation: str
    critical_finding: Optional[str] = None
    high_recommendation: Optional[str] = None

    @property
    def detect_pattern(self) -> "re.Pattern":
        return _alias_patterns(self.aliases)[0]

    @property
    def value_pattern(self) -> "re.Pattern":
        return _alias_patterns(self.aliases)[1]

    def classify(self, value: float) -> Tuple[LabStatus, str]:
        """First matching band wins; otherwise normal."""
        for band in self.bands:
            if band.matches(value):
                return band.status, band.explanation
        return LabStatus.NORMAL, self.normal_explanation


LAB_TESTS: Tuple[LabTestSpec, ...] = (
    LabTestSpec(
        name="Hemoglobin",
        aliases=("hemoglobin", "haemoglobin", "hb"),
        unit="g/dL",
        normal_range="12-16 g/dL",
        default_value=12.0,
        bands=(
            LabBand(LabStatus.CRITICAL, "<", 10.0,
                    "Your blood count is critically low. This may indicate anemia "
                    "and requires immediate medical attention."),
            LabBand(LabStatus.LOW, "<", 12.0,
                    "Your blood count is slightly low. Consider iron-rich foods "
                    "and consult your doctor."),
        ),
        normal_explanation="Your hemoglobin level is within normal range.",
        critical_finding="Low Hemoglobin - Possible Anemia",
    ),
    LabTestSpec(
        name="Blood Glucose",
        aliases=("glucose", "blood sugar", "bs"),
        unit="mg/dL",
        normal_range="70-100 mg/dL (fasting)",
        default_value=100.0,
        bands=(
            LabBand(LabStatus.CRITICAL, ">", 200.0,
                    "Your blood sugar is very high. This may indicate diabetes. "
                    "Please consult a doctor immediately."),
            LabBand(LabStatus.HIGH, ">", 140.0,
                    "Your blood sugar is elevated. Monitor your diet and consider "
                    "consulting a doctor."),
        ),
        normal_explanation="Your blood glucose level is normal.",
        critical_finding="High Blood Glucose - Possible Diabetes",
    ),
    LabTestSpec(
        name="Total Cholesterol",
        aliases=("cholesterol",),
        unit="mg/dL",
        normal_range="< 200 mg/dL",
        default_value=200.0,
        bands=(
            LabBand(LabStatus.HIGH, ">", 240.0,
                    "Your cholesterol is high. Reduce intake of oily and fried "
                    "foods. Exercise regularly."),
        ),
        normal_explanation="Your cholesterol level is within acceptable range.",
        high_recommendation="Reduce saturated fats and increase fiber intake",
    ),
    LabTestSpec(
        name="Creatinine",
        aliases=("creatinine",),
        unit="mg/dL",
        normal_range="0.6-1.2 mg/dL",
        default_value=1.0,
        bands=(
            LabBand(LabStatus.HIGH, ">", 1.5,
                    "Elevated creatinine may indicate kidney function issues. "
                    "Consult a nephrologist."),
        ),
        normal_explanation="Your kidney function appears normal.",
    ),
)


@dataclass(frozen=True)
class LabResultEntry:
    """One parsed lab value."""
    test_name: str
    parsed_value: float
    unit: str
    normal_range: str
    status: LabStatus
    explanation: str
    value_found: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "test_name": self.test_name,
            "parsed_value": self.parsed_value,
            "unit": self.unit,
            "normal_range": self.normal_range,
            "status": self.status.value,
            "explanation": self.explanation,
            "value_found": self.value_found,
        }


@dataclass(frozen=True)
class LabReport:
    """Parsed lab report with findings and advice."""
    summary: str
    critical_findings: Tuple[str, ...] = field(default_factory=tuple)
    results: Tuple[LabResultEntry, ...] = field(default_factory=tuple)
    recommendations: Tuple[str, ...] = field(default_factory=tuple)
    next_steps: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "summary": self.summary,
            "critical_findings": list(self.critical_findings),
            "results": [r.to_dict() for r in self.results],
            "recommendations": list(self.recommendations),
            "next_steps": list(self.next_steps),
        }


class LabReportParser:
    """
    Parses free-text lab reports.

    For each known test whose name appears in the text, the first number
    directly after the name is taken as its value (the test's default when
    no number follows) and classified against that test's bands.
    """

    def __init__(self, tests: Tuple[LabTestSpec, ...] = LAB_TESTS):
        self._tests = tests
        logger.info(f"LabReportParser initialized with {len(tests)} tests")

    @property
    def tests(self) -> Tuple[LabTestSpec, ...]:
        return self._tests

    def extract(self, text: str) -> List[LabResultEntry]:
        """Extract and classify every recognized test in `text`."""
        results = []
        for spec in self._tests:
            if not spec.detect_pattern.search(text):
                continue
            match = spec.value_pattern.search(text)
            value = float(match.group(1)) if match else spec.default_value
            status, explanation = spec.classify(value)
            results.append(LabResultEntry(
                test_name=spec.name,
                parsed_value=value,
                unit=spec.unit,
                normal_range=spec.normal_range,
                status=status,
                explanation=explanation,
                value_found=match is not None,
            ))
        return results

    def parse(self, text: str) -> LabReport:
        """
        Parse a lab report.

        Args:
            text: Unstructured report text

        Returns:
            LabReport; empty results with a generic summary if no test is recognized

        Raises:
            AssessmentValidationError: if the text is empty
        """
        text = require_text(text, "text", "Please enter report text")
        results = self.extract(text)

        specs = {spec.name: spec for spec in self._tests}
        critical_findings = []
        recommendations = []
        next_steps = []

        for entry in results:
            spec = specs[entry.test_name]
            if entry.status == LabStatus.CRITICAL and spec.critical_finding:
                critical_findings.append(spec.critical_finding)
            if entry.status == LabStatus.HIGH and spec.high_recommendation:
                recommendations.append(spec.high_recommendation)

        statuses = {entry.status for entry in results}
        if LabStatus.CRITICAL in statuses:
            recommendations.append("Schedule an appointment with your doctor immediately")
            next_steps.append("Consult with a healthcare provider within 24-48 hours")
        elif statuses & {LabStatus.HIGH, LabStatus.LOW}:
            recommendations.append("Monitor these values and consider lifestyle changes")
            next_steps.append("Follow up with your doctor for further evaluation")
        else:
            recommendations.append("Continue maintaining a healthy lifestyle")
            next_steps.append("Schedule annual health checkup")

        if results:
            summary = f"Parsed {len(results)} test results. " + (
                "Critical findings detected." if critical_findings
                else "Most values are within normal range."
            )
        else:
            summary = NO_RESULTS_SUMMARY

        logger.debug(f"Lab report parsed: {len(results)} results, {len(critical_findings)} critical")
        return LabReport(
            summary=summary,
            critical_findings=tuple(critical_findings),
            results=tuple(results),
            recommendations=tuple(recommendations),
            next_steps=tuple(next_steps),
        )
