"""
Symptom Triage Module

Keyword-based triage of a free-text symptom description: severity band,
flag colour, urgency, candidate conditions, advice and follow-up questions.
Follow-up answers can escalate the severity but never lower it.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
from enum import Enum
import numpy as np

from healthassist.config import settings
from healthassist.core.extraction.base import parse_number
from healthassist.core.inference.explanation import RecommendationResolver
from healthassist.core.validation import require_text
from healthassist.utils import get_logger

logger = get_logger(__name__)

SYMPTOMS = "symptoms"
MAX_CONDITIONS = 3


class Severity(str, Enum):
    """Triage severity bands."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


class Flag(str, Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"


class Urgency(str, Enum):
    IMMEDIATE = "immediate"
    WITHIN_48_HOURS = "24-48hrs"
    ROUTINE = "routine"


SEVERITY_TRIAGE: Dict[Severity, Tuple[Flag, Urgency]] = {
    Severity.CRITICAL: (Flag.RED, Urgency.IMMEDIATE),
    Severity.HIGH: (Flag.YELLOW, Urgency.WITHIN_48_HOURS),
    Severity.MEDIUM: (Flag.YELLOW, Urgency.ROUTINE),
    Severity.LOW: (Flag.GREEN, Urgency.ROUTINE),
}

CRITICAL_KEYWORDS: Tuple[str, ...] = ("chest pain", "shortness of breath", "severe", "unconscious")

# Checked top to bottom; each rule is a tuple of keyword groups, where a
# group matches when all of its keywords are present.
SEVERITY_RULES: Tuple[Tuple[Severity, Tuple[Tuple[str, ...], ...]], ...] = (
    (Severity.CRITICAL, tuple((k,) for k in CRITICAL_KEYWORDS)),
    (Severity.HIGH, (("fever", "high"), ("persistent",), ("severe pain",))),
    (Severity.MEDIUM, (("moderate",), ("few days",))),
)

HIGH_FEVER_ANSWER = "Above 102°F"


@dataclass(frozen=True)
class Condition:
    """A candidate condition shown to the user."""
    name: str
    probability: int
    description: str
    time_to_recover: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "probability": self.probability,
            "description": self.description,
            "time_to_recover": self.time_to_recover,
        }


# Condition -> keywords that suggest it
CONDITION_TABLE: Tuple[Tuple[Condition, Tuple[str, ...]], ...] = (
    (Condition("Common Cold", 75, "Viral upper respiratory infection", "7-10 days"),
     ("cough", "sore throat", "runny nose", "congestion", "cold")),
    (Condition("Influenza", 70, "Viral infection causing fever, chills and body aches", "1-2 weeks"),
     ("fever", "chills", "body ache", "flu")),
    (Condition("Tension Headache", 65, "Headache related to muscle tension or stress", "A few hours to a few days"),
     ("headache", "head pain")),
    (Condition("Seasonal Allergies", 60, "Allergic reaction to environmental factors", "Varies with exposure"),
     ("sneez", "itch", "watery eyes", "allerg")),
    (Condition("Gastroenteritis", 60, "Inflammation of the stomach and intestines", "3-7 days"),
     ("stomach", "nausea", "vomit", "diarrhea")),
    (Condition("Muscle Strain", 55, "Overstretched or torn muscle fibres", "1-2 weeks"),
     ("back pain", "muscle", "sprain")),
    (Condition("Cardiac or Respiratory Emergency", 50, "Chest or breathing symptoms that need urgent evaluation",
               "Requires medical assessment"),
     ("chest pain", "shortness of breath")),
    (Condition("Dehydration", 45, "Low body fluid causing dizziness and fatigue", "1-2 days with fluids"),
     ("dizz", "thirst")),
    (Condition("Stress/Anxiety", 40, "Physical symptoms related to stress", "With stress management"),
     ("stress", "anxi", "fatigue", "tired")),
)

DEFAULT_CONDITIONS: Tuple[Condition, ...] = (
    Condition("Common Cold", 75, "Viral upper respiratory infection", "7-10 days"),
    Condition("Seasonal Allergies", 60, "Allergic reaction to environmental factors", "Varies with exposure"),
    Condition("Stress/Anxiety", 40, "Physical symptoms related to stress", "With stress management"),
)

SYMPTOM_RESOLVER = RecommendationResolver({
    SYMPTOMS: {
        Severity.CRITICAL: (
            "Seek emergency medical care immediately",
            "Call emergency services if symptoms are severe or worsening",
            "Do not drive yourself to the hospital",
            "Note when your symptoms started to share with the care team",
        ),
        Severity.HIGH: (
            "Consult a healthcare provider within 24-48 hours",
            "Rest and stay hydrated",
            "Monitor your temperature and symptoms closely",
            "Seek emergency care if symptoms worsen suddenly",
        ),
        Severity.MEDIUM: (
            "Rest and stay hydrated",
            "Monitor symptoms for changes over the next few days",
            "Consider over-the-counter medications for symptom relief",
            "Schedule a routine appointment if symptoms persist",
        ),
        Severity.LOW: (
            "Rest and stay hydrated",
            "Monitor symptoms for 24-48 hours",
            "Consider over-the-counter medications",
            "Consult a healthcare provider if symptoms worsen",
        ),
    },
})


@dataclass(frozen=True)
class FollowUpQuestion:
    """A question asked after the first analysis."""
    id: str
    question: str
    type: str  # text | select | slider | yesno
    options: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data = {"id": self.id, "question": self.question, "type": self.type}
        if self.options:
            data["options"] = list(self.options)
        return data


PAIN_QUESTIONS: Tuple[FollowUpQuestion, ...] = (
    FollowUpQuestion("pain-level", "What is your pain level? (1-10)", "slider"),
    FollowUpQuestion(
        "pain-duration", "How long have you been experiencing this pain?", "select",
        ("Less than 24 hours", "1-3 days", "3-7 days", "More than a week"),
    ),
)

FEVER_QUESTIONS: Tuple[FollowUpQuestion, ...] = (
    FollowUpQuestion(
        "fever-temp", "What is your temperature?", "select",
        ("Below 100°F", "100-101°F", "101-102°F", HIGH_FEVER_ANSWER, "Not measured"),
    ),
    FollowUpQuestion(
        "fever-duration", "How many days have you had fever?", "select",
        ("Less than 1 day", "1-2 days", "3-5 days", "More than 5 days"),
    ),
)

GENERAL_QUESTIONS: Tuple[FollowUpQuestion, ...] = (
    FollowUpQuestion("allergies", "Do you have any known allergies?", "text"),
    FollowUpQuestion("medications", "Are you currently taking any medications?", "text"),
    FollowUpQuestion("travel", "Have you traveled recently? (Last 2 weeks)", "yesno"),
    FollowUpQuestion(
        "chronic-conditions", "Do you have any chronic conditions? (Diabetes, Heart disease, etc.)", "text"
    ),
)


@dataclass(frozen=True)
class SymptomAnalysis:
    """Triage result for one symptom description."""
    symptoms: str
    severity: Severity
    flag: Flag
    urgency: Urgency
    red_flags: Tuple[str, ...]
    conditions: Tuple[Condition, ...]
    recommendations: Tuple[str, ...]
    follow_up_questions: Tuple[FollowUpQuestion, ...]
    pain_level: Optional[int] = None
    escalated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "symptoms": self.symptoms,
            "severity": self.severity.value,
            "flag": self.flag.value,
            "urgency": self.urgency.value,
            "red_flags": list(self.red_flags),
            "conditions": [c.to_dict() for c in self.conditions],
            "recommendations": list(self.recommendations),
            "follow_up_questions": [q.to_dict() for q in self.follow_up_questions],
            "pain_level": self.pain_level,
            "escalated": self.escalated,
        }


def follow_up_questions(text: str) -> List[FollowUpQuestion]:
    """Questions to ask given the initial description."""
    lowered = (text or "").lower()
    questions = []
    if "pain" in lowered:
        questions.extend(PAIN_QUESTIONS)
    if "fever" in lowered:
        questions.extend(FEVER_QUESTIONS)
    questions.extend(GENERAL_QUESTIONS)
    return questions


class SymptomAnalyzer:
    """
    Rule-based symptom triage.

    Severity comes from the first matching keyword rule, highest band first.
    A reported pain level at or above the escalation level, or a fever above
    102°F, raises the severity to at least high.
    """

    def __init__(
        self,
        resolver: RecommendationResolver = SYMPTOM_RESOLVER,
        pain_escalation_level: Optional[int] = None,
    ):
        self.resolver = resolver
        self.pain_escalation_level = (
            settings.pain_escalation_level if pain_escalation_level is None else pain_escalation_level
        )
        logger.info("SymptomAnalyzer initialized")

    @staticmethod
    def classify(text: str) -> Severity:
        lowered = text.lower()
        for severity, groups in SEVERITY_RULES:
            if any(all(k in lowered for k in group) for group in groups):
                return severity
        return Severity.LOW

    @staticmethod
    def red_flags(text: str) -> List[str]:
        lowered = text.lower()
        return [k for k in CRITICAL_KEYWORDS if k in lowered]

    @staticmethod
    def candidate_conditions(text: str) -> List[Condition]:
        """Matched conditions by descending probability, or the default trio."""
        lowered = text.lower()
        matched = [
            condition for condition, keywords in CONDITION_TABLE
            if any(k in lowered for k in keywords)
        ]
        if not matched:
            return list(DEFAULT_CONDITIONS)
        matched.sort(key=lambda c: c.probability, reverse=True)
        return matched[:MAX_CONDITIONS]

    @staticmethod
    def pain_level(answers: Mapping[str, Any]) -> Optional[int]:
        level = parse_number(answers.get("pain-level"))
        if level is None:
            return None
        return int(np.clip(round(level), 1, 10))

    def escalate(self, severity: Severity, answers: Mapping[str, Any]) -> Severity:
        """Raise severity to at least high on a severe pain or fever answer."""
        pain = self.pain_level(answers)
        high_pain = pain is not None and pain >= self.pain_escalation_level
        high_fever = str(answers.get("fever-temp") or "").strip() == HIGH_FEVER_ANSWER
        if (high_pain or high_fever) and severity.rank < Severity.HIGH.rank:
            return Severity.HIGH
        return severity

    def analyze(self, text: str, follow_up_answers: Optional[Mapping[str, Any]] = None) -> SymptomAnalysis:
        """
        Analyze a symptom description.

        Args:
            text: Free-text symptom description
            follow_up_answers: Answers keyed by follow-up question id

        Returns:
            SymptomAnalysis

        Raises:
            AssessmentValidationError: if the description is empty
        """
        text = require_text(text, "symptoms", "Please describe your symptoms")
        answers = follow_up_answers or {}

        initial = self.classify(text)
        severity = self.escalate(initial, answers)
        flag, urgency = SEVERITY_TRIAGE[severity]

        logger.debug(
            f"Symptom triage: {len(text)} chars, severity={severity.value}, escalated={severity != initial}"
        )
        return SymptomAnalysis(
            symptoms=text,
            severity=severity,
            flag=flag,
            urgency=urgency,
            red_flags=tuple(self.red_flags(text)),
            conditions=tuple(self.candidate_conditions(text)),
            recommendations=tuple(self.resolver.recommendations_for(SYMPTOMS, severity)),
            follow_up_questions=tuple(follow_up_questions(text)),
            pain_level=self.pain_level(answers),
            escalated=severity != initial,
        )
