"""
Guidance Module

Treatment plans, chat responses and profile summaries.
"""
from .treatment import TreatmentPlanner, TreatmentPlan, MedicationDose, TREATMENT_PLANS
from .chat import HealthChatResponder, ChatReply
from .profile import (
    summarize_profile, bmi_category, ProfileSummary, VitalStatus, systolic_status, heart_rate_status,
)

__all__ = [
    "TreatmentPlanner",
    "TreatmentPlan",
    "MedicationDose",
    "TREATMENT_PLANS",
    "HealthChatResponder",
    "ChatReply",
    "summarize_profile",
    "bmi_category",
    "ProfileSummary",
    "VitalStatus",
    "systolic_status",
    "heart_rate_status",
]
