"""
Assessment Service - Orchestration Between API and Scoring Engine
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from healthassist.core.errors import AssessmentValidationError
from healthassist.core.extraction import LabReportParser, normalize_indicators
from healthassist.core.guidance import HealthChatResponder, TreatmentPlanner, summarize_profile
from healthassist.core.inference import RiskCategory, RiskEngine, describe_ruleset
from healthassist.core.safety import MedicineSafetyChecker
from healthassist.core.screening import MentalHealthScanner, SymptomAnalyzer, follow_up_questions

logger = logging.getLogger(__name__)


class AssessmentService:
    """
    Service class for every assessment the API exposes.
    Validates input, runs the matching engine, logs, and returns plain dicts.
    """

    def __init__(
        self,
        risk_engine: Optional[RiskEngine] = None,
        symptom_analyzer: Optional[SymptomAnalyzer] = None,
        safety_checker: Optional[MedicineSafetyChecker] = None,
        lab_parser: Optional[LabReportParser] = None,
        wellbeing_scanner: Optional[MentalHealthScanner] = None,
        treatment_planner: Optional[TreatmentPlanner] = None,
        chat_responder: Optional[HealthChatResponder] = None,
    ):
        self.risk_engine = risk_engine or RiskEngine()
        self.symptom_analyzer = symptom_analyzer or SymptomAnalyzer()
        self.safety_checker = safety_checker or MedicineSafetyChecker()
        self.lab_parser = lab_parser or LabReportParser()
        self.wellbeing_scanner = wellbeing_scanner or MentalHealthScanner()
        self.treatment_planner = treatment_planner or TreatmentPlanner()
        self.chat_responder = chat_responder or HealthChatResponder()

    @staticmethod
    def _rejected(operation: str, error: AssessmentValidationError) -> None:
        logger.warning(f"{operation} rejected: {error.message} (field={error.field})")

    def assess_disease_risk(
        self,
        raw_indicators: Mapping[str, Any],
        categories: Optional[Iterable[RiskCategory]] = None,
    ) -> Dict[str, Any]:
        """
        Score disease risk from raw indicators.

        Args:
            raw_indicators: Form fields; missing numeric values are defaulted
            categories: Categories to score, all when None

        Returns:
            Serialized RiskAssessment

        Raises:
            AssessmentValidationError: if no indicator was supplied at all
        """
        indicators = normalize_indicators(raw_indicators)
        if indicators.is_empty:
            error = AssessmentValidationError(
                "Please provide at least one health indicator", field="indicators"
            )
            self._rejected("Disease risk", error)
            raise error

        logger.info(
            f"Disease risk: {len(indicators.supplied)} indicators supplied, "
            f"{len(indicators.defaulted)} defaulted"
        )
        assessment = self.risk_engine.assess(indicators, list(categories) if categories else None)
        logger.info(f"Disease risk complete: overall={assessment.overall_band.value}")
        return assessment.to_dict()

    def analyze_symptoms(self, text: str, follow_up_answers: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        try:
            analysis = self.symptom_analyzer.analyze(text, follow_up_answers)
        except AssessmentValidationError as e:
            self._rejected("Symptom analysis", e)
            raise
        logger.info(f"Symptom analysis: severity={analysis.severity.value}, urgency={analysis.urgency.value}")
        return analysis.to_dict()

    def check_medicine_safety(
        self,
        medications: Optional[List[str]],
        dosage: Optional[str] = None,
        frequency: Optional[str] = None,
    ) -> Dict[str, Any]:
        try:
            result = self.safety_checker.check(medications, dosage, frequency)
        except AssessmentValidationError as e:
            self._rejected("Medicine safety", e)
            raise
        logger.info(
            f"Medicine safety: {len(result.medications)} medications, "
            f"{len(result.interactions)} interactions, safe={result.safe}"
        )
        return result.to_dict()

    def parse_lab_report(self, text: str) -> Dict[str, Any]:
        try:
            report = self.lab_parser.parse(text)
        except AssessmentValidationError as e:
            self._rejected("Lab report", e)
            raise
        logger.info(
            f"Lab report: {len(report.results)} results, {len(report.critical_findings)} critical findings"
        )
        return report.to_dict()

    def scan_mental_health(self, answers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        try:
            result = self.wellbeing_scanner.scan(answers)
        except AssessmentValidationError as e:
            self._rejected("Mental health scan", e)
            raise
        logger.info(f"Mental health scan: level={result.level.value}")
        return result.to_dict()

    def generate_treatment_plan(self, condition: str) -> Dict[str, Any]:
        try:
            plan = self.treatment_planner.plan_for(condition)
        except AssessmentValidationError as e:
            self._rejected("Treatment plan", e)
            raise
        logger.info(f"Treatment plan: fallback={plan.is_fallback}")
        return plan.to_dict()

    def chat(self, message: str) -> Dict[str, Any]:
        try:
            reply = self.chat_responder.reply(message)
        except AssessmentValidationError as e:
            self._rejected("Chat", e)
            raise
        logger.info(f"Chat reply: topic={reply.topic or 'general'}")
        return reply.to_dict()

    def summarize_profile(self, raw_profile: Mapping[str, Any], allergies: Optional[List[str]] = None) -> Dict[str, Any]:
        summary = summarize_profile(raw_profile, allergies)
        logger.info(f"Profile summary: bmi_category={summary.bmi_category}, {len(summary.alerts)} alerts")
        return summary.to_dict()

    # ---- Reference data ----

    @staticmethod
    def ruleset() -> Dict[str, Any]:
        return describe_ruleset()

    def questionnaire(self) -> List[Dict[str, Any]]:
        return self.wellbeing_scanner.questionnaire()

    def treatment_conditions(self) -> List[str]:
        return self.treatment_planner.conditions

    def interaction_table(self) -> List[Dict[str, Any]]:
        return self.safety_checker.matrix.pairs()

    @staticmethod
    def follow_up_questions(text: str) -> List[Dict[str, Any]]:
        return [q.to_dict() for q in follow_up_questions(text)]
