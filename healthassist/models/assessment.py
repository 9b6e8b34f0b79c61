"""
Assessment API Models
"""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

from healthassist.core.inference.rules import RiskCategory

# Form fields may arrive as numbers or as text such as "145 mmHg"
Indicator = Optional[Union[float, str]]


# ---- Requests ----

class RiskAssessmentRequest(BaseModel):
    """Health indicators for disease-risk scoring. Every field is optional."""
    model_config = ConfigDict(populate_by_name=True)

    age: Indicator = None
    gender: Optional[str] = Field(default=None, validation_alias=AliasChoices("gender", "sex"))
    weight_kg: Indicator = Field(default=None, validation_alias=AliasChoices("weight_kg", "weight"))
    height_cm: Indicator = Field(default=None, validation_alias=AliasChoices("height_cm", "height"))
    bmi: Indicator = None
    systolic_bp: Indicator = Field(
        default=None,
        validation_alias=AliasChoices("systolic_bp", "systolic", "blood_pressure", "bloodPressure"),
    )
    glucose: Indicator = Field(
        default=None, validation_alias=AliasChoices("glucose", "blood_sugar", "bloodSugar")
    )
    cholesterol: Indicator = None
    family_history: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("family_history", "familyHistory")
    )
    lifestyle: Optional[str] = None
    exercise: Optional[str] = None
    smoking: Optional[str] = None
    alcohol: Optional[str] = None
    categories: Optional[List[RiskCategory]] = Field(
        default=None, description="Categories to score; all when omitted"
    )

    def indicators(self) -> Dict[str, Any]:
        """Raw indicator mapping for the normalizer."""
        return self.model_dump(exclude={"categories"}, exclude_none=True)


class SymptomAnalysisRequest(BaseModel):
    """Free-text symptoms plus optional follow-up answers."""
    model_config = ConfigDict(populate_by_name=True)

    symptoms: str = ""
    follow_up_answers: Dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("follow_up_answers", "followUpAnswers"),
        description="Answers keyed by follow-up question id, e.g. 'pain-level'",
    )


class MedicineSafetyRequest(BaseModel):
    medications: List[str] = Field(default_factory=list)
    dosage: Optional[str] = Field(default=None, description="Single dose, e.g. '500 mg'")
    frequency: Optional[str] = Field(default=None, description="Dosing frequency, e.g. 'every 6 hours'")


class LabReportRequest(BaseModel):
    text: str = ""


class MentalHealthRequest(BaseModel):
    answers: Dict[str, str] = Field(default_factory=dict, description="Option value keyed by question id")


class TreatmentPlanRequest(BaseModel):
    condition: str = ""


class ChatRequest(BaseModel):
    message: str = ""


class ProfileSummaryRequest(BaseModel):
    """Stored profile fields used for the summary."""
    model_config = ConfigDict(populate_by_name=True)

    weight_kg: Indicator = Field(default=None, validation_alias=AliasChoices("weight_kg", "weight"))
    height_cm: Indicator = Field(default=None, validation_alias=AliasChoices("height_cm", "height"))
    systolic_bp: Indicator = Field(
        default=None,
        validation_alias=AliasChoices("systolic_bp", "systolic", "blood_pressure", "bloodPressure"),
    )
    heart_rate: Indicator = Field(default=None, validation_alias=AliasChoices("heart_rate", "heartRate"))
    smoking: Optional[str] = None
    exercise: Optional[str] = None
    alcohol: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)


# ---- Responses ----

class ScoreResultResponse(BaseModel):
    """Risk result for one disease category."""
    category: str
    score: int
    raw_score: int
    band: str
    factors: List[str]
    recommendations: List[str]
    explanation: str


class RiskAssessmentResponse(BaseModel):
    results: List[ScoreResultResponse]
    overall_band: str
    indicators: Dict[str, Any]


class ConditionResponse(BaseModel):
    name: str
    probability: int
    description: str
    time_to_recover: str


class FollowUpQuestionResponse(BaseModel):
    id: str
    question: str
    type: str
    options: Optional[List[str]] = None


class SymptomAnalysisResponse(BaseModel):
    """Symptom triage result."""
    symptoms: str
    severity: str
    flag: str
    urgency: str
    red_flags: List[str]
    conditions: List[ConditionResponse]
    recommendations: List[str]
    follow_up_questions: List[FollowUpQuestionResponse]
    pain_level: Optional[int] = None
    escalated: bool = False


class InteractionResponse(BaseModel):
    drug_a: str
    drug_b: str
    severity: str
    description: str
    recommendation: str


class SideCheckResponse(BaseModel):
    valid: bool
    message: str


class MedicineSafetyResponse(BaseModel):
    """Medication safety check result."""
    medications: List[str]
    safe: bool
    interactions: List[InteractionResponse]
    overdose_risk: str
    dosage_check: SideCheckResponse
    frequency_check: SideCheckResponse
    warnings: List[str]


class LabResultResponse(BaseModel):
    test_name: str
    parsed_value: float
    unit: str
    normal_range: str
    status: str
    explanation: str
    value_found: bool = True


class LabReportResponse(BaseModel):
    """Parsed lab report."""
    summary: str
    critical_findings: List[str]
    results: List[LabResultResponse]
    recommendations: List[str]
    next_steps: List[str]


class ExerciseResponse(BaseModel):
    name: str
    description: str


class MentalHealthResponse(BaseModel):
    """Wellbeing questionnaire result."""
    score: int = Field(..., description="Percentage of the maximum total, 0-100")
    level: str
    description: str
    recommendations: List[str]
    exercises: List[ExerciseResponse]
    total: int
    max_total: int


class MedicationDoseResponse(BaseModel):
    name: str
    dosage: str
    frequency: str
    duration: str


class TreatmentPlanResponse(BaseModel):
    """Home-care plan for one condition."""
    condition: str
    duration: str
    diet: List[str]
    medications: List[MedicationDoseResponse]
    hydration: str
    rest: str
    activities: List[str]
    prevention: List[str]
    follow_up: str
    is_fallback: bool = False


class ChatResponse(BaseModel):
    topic: Optional[str] = None
    response: str


class ProfileSummaryResponse(BaseModel):
    bmi: Optional[float] = None
    bmi_category: str
    alerts: List[str]
    blood_pressure_status: Optional[str] = None
    heart_rate_status: Optional[str] = None


class ErrorResponse(BaseModel):
    """Rejected request."""
    detail: str
    field: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
    components: Dict[str, str]
