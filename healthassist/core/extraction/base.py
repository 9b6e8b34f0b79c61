"""
Indicator Extraction

Coerces raw user-supplied health indicators (form fields, numeric strings,
free text) into a typed, immutable IndicatorSet. Missing or unparseable
numeric indicators fall back to documented defaults so an assessment can
always run on partial data.
"""
import math
import re
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Mapping, Optional, Tuple
from enum import Enum

from healthassist.utils import get_logger

logger = get_logger(__name__)


# Defaults applied when a numeric indicator is absent or unparseable
DEFAULT_AGE = 30.0
DEFAULT_SYSTOLIC_BP = 120.0
DEFAULT_GLUCOSE = 100.0
DEFAULT_CHOLESTEROL = 200.0
DEFAULT_BMI = 22.0

# Leading numeric token, so "145 mmHg" parses as 145
_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")


class ExerciseFrequency(str, Enum):
    """Exercise frequency options offered to the user."""
    DAILY = "daily"
    WEEKLY = "weekly"
    OCCASIONAL = "occasional"
    NONE = "none"


class Smoking(str, Enum):
    """Smoking status options."""
    NO = "no"
    OCCASIONAL = "occasional"
    YES = "yes"


class AlcoholUse(str, Enum):
    """Alcohol consumption options."""
    NO = "no"
    OCCASIONAL = "occasional"
    WEEKLY = "weekly"
    DAILY = "daily"


# Raw field name -> accepted aliases (form camelCase included)
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "age": ("age",),
    "gender": ("gender", "sex"),
    "weight_kg": ("weight_kg", "weight"),
    "height_cm": ("height_cm", "height"),
    "bmi": ("bmi",),
    "systolic_bp": ("systolic_bp", "systolic", "blood_pressure", "bloodPressure"),
    "glucose": ("glucose", "blood_sugar", "bloodSugar"),
    "cholesterol": ("cholesterol",),
    "family_history": ("family_history", "familyHistory"),
    "lifestyle": ("lifestyle",),
    "exercise": ("exercise",),
    "smoking": ("smoking",),
    "alcohol": ("alcohol",),
}


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a number the way a form field would be read.

    Accepts ints, floats and strings with a leading numeric token. Booleans,
    blanks, non-numeric text, NaN and infinities return None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return None
        number = float(match.group(1))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def compute_bmi(weight_kg: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    """BMI = weight_kg / height_m^2, or None when height is missing or not positive."""
    if weight_kg is None or height_cm is None or height_cm <= 0:
        return None
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def _normalize_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def _is_supplied(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


@dataclass(frozen=True)
class IndicatorSet:
    """
    Typed health indicators for one assessment.

    Numeric fields always hold a value (parsed or defaulted). Text and
    categorical fields are lower-cased and trimmed, and are only ever
    searched by substring, never parsed.
    """
    age: float = DEFAULT_AGE
    systolic_bp: float = DEFAULT_SYSTOLIC_BP
    glucose: float = DEFAULT_GLUCOSE
    cholesterol: float = DEFAULT_CHOLESTEROL
    bmi: float = DEFAULT_BMI
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    gender: str = ""
    family_history: str = ""
    lifestyle: str = ""
    exercise: str = ""
    smoking: str = ""
    alcohol: str = ""
    supplied: Tuple[str, ...] = field(default_factory=tuple)
    defaulted: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """True when the caller supplied no indicator at all."""
        return not self.supplied

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        data = asdict(self)
        data["bmi"] = round(self.bmi, 1)
        data["supplied"] = list(self.supplied)
        data["defaulted"] = list(self.defaulted)
        return data


def _pick(raw: Mapping[str, Any], name: str) -> Any:
    for alias in FIELD_ALIASES[name]:
        value = raw.get(alias)
        if _is_supplied(value):
            return value
    return None


def normalize_indicators(raw: Optional[Mapping[str, Any]]) -> IndicatorSet:
    """
    Normalize raw input into an IndicatorSet.

    Args:
        raw: Mapping of field name (snake_case or form camelCase) to value

    Returns:
        IndicatorSet with defaults applied; never raises for bad values
    """
    raw = raw or {}
    values = {name: _pick(raw, name) for name in FIELD_ALIASES}
    supplied = tuple(name for name, value in values.items() if value is not None)
    defaulted = []

    def numeric(name: str, default: float) -> float:
        number = parse_number(values[name])
        if number is None:
            defaulted.append(name)
            return default
        return number

    age = numeric("age", DEFAULT_AGE)
    systolic_bp = numeric("systolic_bp", DEFAULT_SYSTOLIC_BP)
    glucose = numeric("glucose", DEFAULT_GLUCOSE)
    cholesterol = numeric("cholesterol", DEFAULT_CHOLESTEROL)

    weight_kg = parse_number(values["weight_kg"])
    height_cm = parse_number(values["height_cm"])
    bmi = compute_bmi(weight_kg, height_cm)
    if bmi is None:
        bmi = parse_number(values["bmi"])
    if bmi is None:
        defaulted.append("bmi")
        bmi = DEFAULT_BMI

    indicators = IndicatorSet(
        age=age,
        systolic_bp=systolic_bp,
        glucose=glucose,
        cholesterol=cholesterol,
        bmi=bmi,
        weight_kg=weight_kg,
        height_cm=height_cm,
        gender=_normalize_text(values["gender"]),
        family_history=_normalize_text(values["family_history"]),
        lifestyle=_normalize_text(values["lifestyle"]),
        exercise=_normalize_text(values["exercise"]),
        smoking=_normalize_text(values["smoking"]),
        alcohol=_normalize_text(values["alcohol"]),
        supplied=supplied,
        defaulted=tuple(defaulted),
    )
    if defaulted:
        logger.debug(f"Defaulted indicators: {', '.join(defaulted)}")
    return indicators
