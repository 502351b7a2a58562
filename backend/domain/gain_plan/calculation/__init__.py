"""Calculation services: BMR -> TDEE/surplus -> macros."""

from .bmr_service import BMRService
from .energy_service import EnergyPlanner
from .macro_service import MacroAllocator
from .staleness import is_stale

__all__ = ["BMRService", "EnergyPlanner", "MacroAllocator", "is_stale"]
