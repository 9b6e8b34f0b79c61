"""
Health Profile Summary

BMI, BMI category, vitals status and lifestyle alerts for a stored health
profile.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from enum import Enum

from healthassist.core.extraction.base import compute_bmi, normalize_indicators, parse_number
from healthassist.core.inference.rules import BandThresholds

NOT_AVAILABLE = "N/A"

# Upper bounds (exclusive) for each category; anything above is obese
BMI_CATEGORIES: Tuple[Tuple[float, str], ...] = (
    (18.5, "Underweight"),
    (25.0, "Normal"),
    (30.0, "Overweight"),
)


def bmi_category(bmi: Optional[float]) -> str:
    if bmi is None:
        return NOT_AVAILABLE
    for upper, name in BMI_CATEGORIES:
        if bmi < upper:
            return name
    return "Obese"


class VitalStatus(str, Enum):
    """Status of a recorded vital sign."""
    NORMAL = "normal"
    ELEVATED = "elevated"
    ALERT = "alert"


SYSTOLIC_THRESHOLDS: BandThresholds[VitalStatus] = BandThresholds(
    cut_points=((VitalStatus.ALERT, 140.0), (VitalStatus.ELEVATED, 120.0)),
    default=VitalStatus.NORMAL,
)

# Resting heart rate range (bpm), inclusive
HEART_RATE_RANGE = (60.0, 100.0)


def systolic_status(systolic_bp: Optional[float]) -> Optional[VitalStatus]:
    if systolic_bp is None:
        return None
    return SYSTOLIC_THRESHOLDS.classify(systolic_bp)


def heart_rate_status(heart_rate: Optional[float]) -> Optional[VitalStatus]:
    if heart_rate is None:
        return None
    low, high = HEART_RATE_RANGE
    if heart_rate < low or heart_rate > high:
        return VitalStatus.ALERT
    return VitalStatus.NORMAL


@dataclass(frozen=True)
class ProfileSummary:
    bmi: Optional[float]
    bmi_category: str
    alerts: Tuple[str, ...] = field(default_factory=tuple)
    blood_pressure_status: Optional[VitalStatus] = None
    heart_rate_status: Optional[VitalStatus] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bmi": self.bmi,
            "bmi_category": self.bmi_category,
            "alerts": list(self.alerts),
            "blood_pressure_status": self.blood_pressure_status.value if self.blood_pressure_status else None,
            "heart_rate_status": self.heart_rate_status.value if self.heart_rate_status else None,
        }


def _declared_allergies(allergies: Optional[Iterable[str]]) -> list:
    items = [str(a).strip() for a in (allergies or []) if a is not None and str(a).strip()]
    if items and items[0].lower() == "none":
        return []
    return items


def summarize_profile(raw: Mapping[str, Any], allergies: Optional[Iterable[str]] = None) -> ProfileSummary:
    """
    Summarize a health profile.

    Args:
        raw: Profile fields (weight, height, systolic_bp, heart_rate, smoking, ...)
        allergies: Declared allergies; a leading "None" means no allergies

    Returns:
        ProfileSummary with BMI rounded to one decimal, or None without height/weight;
        vitals statuses are None for vitals not recorded
    """
    indicators = normalize_indicators(raw)
    bmi = compute_bmi(indicators.weight_kg, indicators.height_cm)
    bmi = round(bmi, 1) if bmi is not None else None

    alerts = []
    if indicators.smoking == "yes":
        alerts.append("Smoking increases risk of heart disease and lung cancer")
    if bmi is not None and bmi > 25:
        alerts.append("Being overweight increases risk of diabetes and heart disease")
    if indicators.exercise == "none":
        alerts.append("Regular exercise can improve your overall health")
    if _declared_allergies(allergies):
        alerts.append("Make sure healthcare providers are aware of your allergies")

    systolic_bp = None if "systolic_bp" in indicators.defaulted else indicators.systolic_bp
    heart_rate = parse_number(raw.get("heart_rate", raw.get("heartRate")))

    return ProfileSummary(
        bmi=bmi,
        bmi_category=bmi_category(bmi),
        alerts=tuple(alerts),
        blood_pressure_status=systolic_status(systolic_bp),
        heart_rate_status=heart_rate_status(heart_rate),
    )
