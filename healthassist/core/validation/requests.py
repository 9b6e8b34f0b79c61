"""
Request Validation

Guards for taxonomy (a) errors: empty required input. Degraded or partial
input is never rejected here; the engines default it.
"""
from typing import Any, Iterable, List, Mapping, Optional

from healthassist.core.errors import AssessmentValidationError


def require_text(value: Optional[str], field: str, message: str) -> str:
    """
    Return the stripped text or reject it if empty.

    Args:
        value: Raw text from the caller
        field: Field name reported back on rejection
        message: Human-readable rejection message

    Returns:
        The text with surrounding whitespace removed
    """
    text = (value or "").strip()
    if not text:
        raise AssessmentValidationError(message, field=field)
    return text


def require_items(values: Optional[Iterable[Any]], field: str, message: str) -> List[str]:
    """Return the non-blank string items of `values`, rejecting an empty result."""
    items = [str(v).strip() for v in (values or []) if v is not None and str(v).strip()]
    if not items:
        raise AssessmentValidationError(message, field=field)
    return items


def require_answers(
    answers: Optional[Mapping[str, Any]],
    required_ids: Iterable[str],
    field: str = "answers",
) -> Mapping[str, Any]:
    """Reject a questionnaire that leaves any required question unanswered."""
    answers = answers or {}
    missing = [qid for qid in required_ids if not str(answers.get(qid) or "").strip()]
    if missing:
        raise AssessmentValidationError(
            f"Please answer all questions (missing: {', '.join(missing)})",
            field=field,
        )
    return answers
