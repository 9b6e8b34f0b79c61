"""
Validation Module

Rejects requests that carry nothing to score before any engine runs.
"""
from .requests import require_text, require_items, require_answers

__all__ = [
    "require_text",
    "require_items",
    "require_answers",
]
