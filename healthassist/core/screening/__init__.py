"""
Screening Module

Symptom triage and the wellbeing questionnaire.
"""
from .symptoms import (
    SymptomAnalyzer,
    SymptomAnalysis,
    Severity,
    Flag,
    Urgency,
    Condition,
    FollowUpQuestion,
    follow_up_questions,
)
from .mental_health import (
    MentalHealthScanner,
    MentalHealthResult,
    WellbeingLevel,
    QUESTIONS,
    WELLBEING_THRESHOLDS,
)

__all__ = [
    "SymptomAnalyzer",
    "SymptomAnalysis",
    "Severity",
    "Flag",
    "Urgency",
    "Condition",
    "FollowUpQuestion",
    "follow_up_questions",
    "MentalHealthScanner",
    "MentalHealthResult",
    "WellbeingLevel",
    "QUESTIONS",
    "WELLBEING_THRESHOLDS",
]
