"""
Health Assistant Scoring API - FastAPI Application

Main application entry point with API endpoints for:
- Disease risk assessment
- Symptom triage and follow-up questions
- Medicine safety checks
- Lab report parsing
- Mental health screening
- Treatment plans, chat guidance and profile summaries
"""
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from healthassist.config import settings
from healthassist.core.errors import AssessmentValidationError
from healthassist.models.assessment import (
    ChatRequest, ChatResponse, ErrorResponse, HealthResponse,
    LabReportRequest, LabReportResponse,
    MedicineSafetyRequest, MedicineSafetyResponse,
    MentalHealthRequest, MentalHealthResponse,
    ProfileSummaryRequest, ProfileSummaryResponse,
    RiskAssessmentRequest, RiskAssessmentResponse,
    SymptomAnalysisRequest, SymptomAnalysisResponse,
    TreatmentPlanRequest, TreatmentPlanResponse,
)
from healthassist.services.assessment import AssessmentService
from healthassist.utils import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

API = settings.api_prefix
REJECTED = {400: {"model": ErrorResponse, "description": "Required input missing"}}


# ---- FastAPI Application ----

app = FastAPI(
    title=settings.app_name,
    description="Rule-based health risk, triage and medicine-safety scoring",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_service = AssessmentService()


@app.exception_handler(AssessmentValidationError)
async def validation_error_handler(request: Request, exc: AssessmentValidationError):
    """Empty required input is a client error."""
    return JSONResponse(status_code=400, content=exc.to_dict())


def _health(components):
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now().isoformat(),
        components=components,
    )


# ---- API Endpoints ----

@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root():
    """API root - health check."""
    return _health({
        "risk_engine": "ready",
        "symptom_analyzer": "ready",
        "medicine_safety": "ready",
        "lab_parser": "ready",
    })


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return _health({"api": "healthy", "inference": "ready"})


@app.post(f"{API}/risk/assess", response_model=RiskAssessmentResponse, responses=REJECTED, tags=["Risk"])
async def assess_disease_risk(request: RiskAssessmentRequest):
    """
    Score diabetes, heart disease and hypertension risk.

    Missing numeric indicators are defaulted; at least one indicator is required.
    """
    try:
        return _service.assess_disease_risk(request.indicators(), request.categories)
    except AssessmentValidationError:
        raise
    except Exception as e:
        logger.error(f"Disease risk assessment failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Disease risk assessment failed: {str(e)}")


@app.post(f"{API}/symptoms/analyze", response_model=SymptomAnalysisResponse, responses=REJECTED, tags=["Symptoms"])
async def analyze_symptoms(request: SymptomAnalysisRequest):
    """Triage a free-text symptom description."""
    try:
        return _service.analyze_symptoms(request.symptoms, request.follow_up_answers)
    except AssessmentValidationError:
        raise
    except Exception as e:
        logger.error(f"Symptom analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Symptom analysis failed: {str(e)}")


@app.get(f"{API}/symptoms/follow-up", tags=["Symptoms"])
async def get_follow_up_questions(symptoms: str = Query(default="", description="Symptom description")):
    """Follow-up questions for a symptom description."""
    return {"questions": _service.follow_up_questions(symptoms)}


@app.post(f"{API}/medicines/safety", response_model=MedicineSafetyResponse, responses=REJECTED, tags=["Medicines"])
async def check_medicine_safety(request: MedicineSafetyRequest):
    """Check a medication list for interactions and risky dosing."""
    try:
        return _service.check_medicine_safety(request.medications, request.dosage, request.frequency)
    except AssessmentValidationError:
        raise
    except Exception as e:
        logger.error(f"Medicine safety check failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Medicine safety check failed: {str(e)}")


@app.get(f"{API}/medicines/interactions", tags=["Reference"])
async def list_interactions():
    """Known interaction pairs."""
    return {"interactions": _service.interaction_table()}


@app.post(f"{API}/labs/parse", response_model=LabReportResponse, responses=REJECTED, tags=["Labs"])
async def parse_lab_report(request: LabReportRequest):
    """Extract and classify lab values from report text."""
    try:
        return _service.parse_lab_report(request.text)
    except AssessmentValidationError:
        raise
    except Exception as e:
        logger.error(f"Lab report parsing failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Lab report parsing failed: {str(e)}")


@app.get(f"{API}/mental-health/questionnaire", tags=["Mental Health"])
async def get_questionnaire():
    """Wellbeing questionnaire with option values and scores."""
    return {"questions": _service.questionnaire()}


@app.post(f"{API}/mental-health/scan", response_model=MentalHealthResponse, responses=REJECTED, tags=["Mental Health"])
async def scan_mental_health(request: MentalHealthRequest):
    """Score a completed wellbeing questionnaire."""
    try:
        return _service.scan_mental_health(request.answers)
    except AssessmentValidationError:
        raise
    except Exception as e:
        logger.error(f"Mental health scan failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Mental health scan failed: {str(e)}")


@app.get(f"{API}/treatment-plans/conditions", tags=["Treatment"])
async def list_treatment_conditions():
    """Conditions with a dedicated treatment plan."""
    return {"conditions": _service.treatment_conditions()}


@app.post(f"{API}/treatment-plans", response_model=TreatmentPlanResponse, responses=REJECTED, tags=["Treatment"])
async def generate_treatment_plan(request: TreatmentPlanRequest):
    """Home-care plan for a condition; unknown conditions get a general plan."""
    try:
        return _service.generate_treatment_plan(request.condition)
    except AssessmentValidationError:
        raise
    except Exception as e:
        logger.error(f"Treatment plan generation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Treatment plan generation failed: {str(e)}")


@app.post(f"{API}/chat", response_model=ChatResponse, responses=REJECTED, tags=["Chat"])
async def chat(request: ChatRequest):
    """General health guidance for a chat message."""
    try:
        return _service.chat(request.message)
    except AssessmentValidationError:
        raise
    except Exception as e:
        logger.error(f"Chat failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Chat failed: {str(e)}")


@app.post(f"{API}/profile/summary", response_model=ProfileSummaryResponse, tags=["Profile"])
async def summarize_profile(request: ProfileSummaryRequest):
    """BMI, BMI category, vitals status and lifestyle alerts."""
    try:
        return _service.summarize_profile(
            request.model_dump(exclude={"allergies"}, exclude_none=True),
            request.allergies,
        )
    except Exception as e:
        logger.error(f"Profile summary failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Profile summary failed: {str(e)}")


@app.get(f"{API}/rules", tags=["Reference"])
async def get_rules():
    """Versioned disease rule table with per-category thresholds."""
    return _service.ruleset()


# ---- Application Lifecycle ----

@app.on_event("startup")
async def startup_event():
    """Initialize on startup."""
    logger.info(f"{settings.app_name} v{settings.app_version} starting up...")
    logger.info("API ready to accept requests")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info(f"{settings.app_name} shutting down...")


# ---- Run with uvicorn ----
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
