"""Ports (interfaces) for the gain plan domain."""

from .calculators import IBMRCalculator, IMacroCalculator, ITDEECalculator
from .repositories import (
    IAdaptationRepository,
    IBodyStatsRepository,
    IProfileRepository,
    ISnapshotRepository,
    IWorkoutLogRepository,
)

__all__ = [
    "IBMRCalculator",
    "IMacroCalculator",
    "ITDEECalculator",
    "IAdaptationRepository",
    "IBodyStatsRepository",
    "IProfileRepository",
    "ISnapshotRepository",
    "IWorkoutLogRepository",
]
