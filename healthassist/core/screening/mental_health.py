"""
Mental Health Screening Module

Eight-question wellbeing questionnaire scored 0-4 per answer. The total is
expressed as a percentage of the maximum and banded into four levels.
This is a screening aid, not a diagnosis.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple
from enum import Enum

from healthassist.core.inference.explanation import RecommendationResolver
from healthassist.core.inference.rules import BandThresholds
from healthassist.core.validation import require_answers
from healthassist.utils import get_logger

logger = get_logger(__name__)

MENTAL_HEALTH = "mental_health"


class WellbeingLevel(str, Enum):
    """Level of concern from the questionnaire."""
    LOW = "low"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


WELLBEING_THRESHOLDS = BandThresholds(
    cut_points=(
        (WellbeingLevel.SEVERE, 75),
        (WellbeingLevel.MODERATE, 50),
        (WellbeingLevel.MILD, 25),
    ),
    default=WellbeingLevel.LOW,
    inclusive=True,
)


@dataclass(frozen=True)
class AnswerOption:
    value: str
    label: str
    score: int


@dataclass(frozen=True)
class Question:
    """One questionnaire item."""
    id: str
    question: str
    options: Tuple[AnswerOption, ...]

    def score_for(self, value: Any) -> Optional[int]:
        for option in self.options:
            if option.value == value:
                return option.score
        return None

    @property
    def max_score(self) -> int:
        return max(o.score for o in self.options)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "question": self.question,
            "options": [
                {"value": o.value, "label": o.label, "score": o.score} for o in self.options
            ],
        }


def _options(*pairs: Tuple[str, str]) -> Tuple[AnswerOption, ...]:
    return tuple(AnswerOption(value, label, score) for score, (value, label) in enumerate(pairs))


QUESTIONS: Tuple[Question, ...] = (
    Question("mood", "How would you rate your overall mood over the past week?", _options(
        ("excellent", "Excellent"), ("good", "Good"), ("okay", "Okay"),
        ("poor", "Poor"), ("very-poor", "Very Poor"),
    )),
    Question("sleep", "How has your sleep been?", _options(
        ("great", "Great (7-9 hours)"), ("good", "Good (6-7 hours)"), ("irregular", "Irregular"),
        ("poor", "Poor (trouble sleeping)"), ("insomnia", "Insomnia"),
    )),
    Question("energy", "How is your energy level?", _options(
        ("high", "High"), ("normal", "Normal"), ("low", "Low"),
        ("very-low", "Very Low"), ("exhausted", "Exhausted"),
    )),
    Question("anxiety", "How often do you feel anxious or worried?", _options(
        ("never", "Never"), ("rarely", "Rarely"), ("sometimes", "Sometimes"),
        ("often", "Often"), ("always", "Always"),
    )),
    Question("concentration", "How is your ability to concentrate?", _options(
        ("excellent", "Excellent"), ("good", "Good"), ("moderate", "Moderate"),
        ("poor", "Poor"), ("very-poor", "Very Poor"),
    )),
    Question("interest", "How interested are you in activities you usually enjoy?", _options(
        ("very-interested", "Very Interested"), ("interested", "Interested"), ("somewhat", "Somewhat"),
        ("little", "Little Interest"), ("none", "No Interest"),
    )),
    Question("stress", "How would you rate your stress level?", _options(
        ("none", "No Stress"), ("low", "Low"), ("moderate", "Moderate"),
        ("high", "High"), ("extreme", "Extreme"),
    )),
    Question("support", "Do you feel you have adequate social support?", _options(
        ("excellent", "Excellent Support"), ("good", "Good Support"), ("some", "Some Support"),
        ("little", "Little Support"), ("none", "No Support"),
    )),
)

LEVEL_DESCRIPTIONS: Dict[WellbeingLevel, str] = {
    WellbeingLevel.LOW: "Your mental health appears to be in good shape. Keep maintaining healthy habits!",
    WellbeingLevel.MILD: "You may be experiencing mild stress or mood changes. Some self-care practices can help.",
    WellbeingLevel.MODERATE: (
        "You may be experiencing moderate mental health concerns. Professional support may be beneficial."
    ),
    WellbeingLevel.SEVERE: (
        "You may be experiencing significant mental health concerns. Professional help is strongly recommended."
    ),
}

WELLBEING_RESOLVER = RecommendationResolver({
    MENTAL_HEALTH: {
        WellbeingLevel.LOW: (
            "Continue practicing self-care",
            "Maintain regular sleep schedule",
            "Stay connected with loved ones",
            "Engage in activities you enjoy",
        ),
        WellbeingLevel.MILD: (
            "Practice stress management techniques",
            "Ensure adequate sleep (7-9 hours)",
            "Regular physical exercise",
            "Consider talking to someone you trust",
        ),
        WellbeingLevel.MODERATE: (
            "Consider speaking with a mental health professional",
            "Practice regular self-care routines",
            "Maintain social connections",
            "Consider therapy or counseling",
            "Monitor your symptoms",
        ),
        WellbeingLevel.SEVERE: (
            "Seek professional mental health support immediately",
            "Contact a therapist or counselor",
            "Reach out to mental health helplines",
            "Consider speaking with your doctor",
            "Don't hesitate to ask for help",
        ),
    },
})


@dataclass(frozen=True)
class Exercise:
    name: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description}


EXERCISES: Dict[WellbeingLevel, Tuple[Exercise, ...]] = {
    WellbeingLevel.LOW: (
        Exercise("Gratitude Journaling", "Write down 3 things you're grateful for each day"),
        Exercise("Mindful Breathing", "Practice 5 minutes of deep breathing daily"),
    ),
    WellbeingLevel.MILD: (
        Exercise("Deep Breathing", "4-7-8 breathing technique: Inhale 4s, Hold 7s, Exhale 8s"),
        Exercise("Progressive Muscle Relaxation", "Tense and relax each muscle group for 10 seconds"),
        Exercise("Mindfulness Meditation", "10 minutes of guided meditation daily"),
    ),
    WellbeingLevel.MODERATE: (
        Exercise("Daily Journaling", "Write about your thoughts and feelings for 15 minutes"),
        Exercise("Breathing Exercises", "Practice breathing exercises 2-3 times daily"),
        Exercise("Physical Activity", "30 minutes of moderate exercise daily"),
    ),
    WellbeingLevel.SEVERE: (
        Exercise("Crisis Support", "Contact mental health helpline: 1800-599-0019 (India)"),
        Exercise(
            "Grounding Techniques",
            "5-4-3-2-1 technique: Name 5 things you see, 4 you hear, 3 you feel, 2 you smell, 1 you taste",
        ),
    ),
}


@dataclass(frozen=True)
class MentalHealthResult:
    """Questionnaire outcome."""
    score: int  # percentage, rounded half-up
    level: WellbeingLevel
    description: str
    recommendations: Tuple[str, ...] = field(default_factory=tuple)
    exercises: Tuple[Exercise, ...] = field(default_factory=tuple)
    total: int = 0
    max_total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "score": self.score,
            "level": self.level.value,
            "description": self.description,
            "recommendations": list(self.recommendations),
            "exercises": [e.to_dict() for e in self.exercises],
            "total": self.total,
            "max_total": self.max_total,
        }


class MentalHealthScanner:
    """Scores a completed wellbeing questionnaire."""

    def __init__(
        self,
        questions: Tuple[Question, ...] = QUESTIONS,
        thresholds: BandThresholds = WELLBEING_THRESHOLDS,
        resolver: RecommendationResolver = WELLBEING_RESOLVER,
    ):
        self.questions = questions
        self.thresholds = thresholds
        self.resolver = resolver
        logger.info(f"MentalHealthScanner initialized with {len(questions)} questions")

    @property
    def max_total(self) -> int:
        return sum(q.max_score for q in self.questions)

    def questionnaire(self) -> List[Dict[str, Any]]:
        return [q.to_dict() for q in self.questions]

    def total_score(self, answers: Mapping[str, Any]) -> int:
        total = 0
        for question in self.questions:
            score = question.score_for(answers.get(question.id))
            if score is None:
                logger.warning(f"Unrecognized answer for question '{question.id}', scoring 0")
                continue
            total += score
        return total

    def scan(self, answers: Optional[Mapping[str, Any]]) -> MentalHealthResult:
        """
        Score the questionnaire.

        Args:
            answers: Option value keyed by question id

        Returns:
            MentalHealthResult; the level is taken from the unrounded percentage

        Raises:
            AssessmentValidationError: if any question is unanswered
        """
        answers = require_answers(answers, [q.id for q in self.questions])
        total = self.total_score(answers)
        max_total = self.max_total
        percentage = total / max_total * 100 if max_total else 0.0
        level = self.thresholds.classify(percentage)

        logger.debug(f"Wellbeing scan: total={total}/{max_total} level={level.value}")
        return MentalHealthResult(
            score=int(math.floor(percentage + 0.5)),
            level=level,
            description=LEVEL_DESCRIPTIONS[level],
            recommendations=tuple(self.resolver.recommendations_for(MENTAL_HEALTH, level)),
            exercises=EXERCISES[level],
            total=total,
            max_total=max_total,
        )
