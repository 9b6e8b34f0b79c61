"""
Extraction Module

Turns raw form input and report text into typed indicators and lab values.
"""
from .base import IndicatorSet, normalize_indicators, parse_number, compute_bmi
from .lab_report import LabReportParser, LabReport, LabResultEntry, LabStatus

__all__ = [
    "IndicatorSet",
    "normalize_indicators",
    "parse_number",
    "compute_bmi",
    "LabReportParser",
    "LabReport",
    "LabResultEntry",
    "LabStatus",
]
