"""
Health Assistant Scoring Service

Rule-based disease risk, symptom triage, medicine safety, lab report,
mental-health and treatment-plan engines behind a FastAPI surface.
"""
__version__ = "0.1.0"
