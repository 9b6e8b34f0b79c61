"""
Engine Errors

The engine is total over its input once the request carries something to
score; the only error it raises is for empty required input.
"""
from typing import Optional


class AssessmentValidationError(ValueError):
    """Required input is missing or empty; the request is rejected before scoring."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        return {"detail": self.message, "field": self.field}
