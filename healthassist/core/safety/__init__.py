"""
Safety Module

Medication interaction and dosing checks.
"""
from .medicine import (
    InteractionMatrix,
    MedicineSafetyChecker,
    MedicineSafetyResult,
    Interaction,
    InteractionSeverity,
    OverdoseRisk,
    SideCheck,
)

__all__ = [
    "InteractionMatrix",
    "MedicineSafetyChecker",
    "MedicineSafetyResult",
    "Interaction",
    "InteractionSeverity",
    "OverdoseRisk",
    "SideCheck",
]
