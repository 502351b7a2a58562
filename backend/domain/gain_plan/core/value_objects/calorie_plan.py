"""Energy plan value objects - BMR breakdown, safety report, complete plan."""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BMRBreakdown:
    """Additive terms of the Mifflin-St Jeor equation.

    ``rounding_adjustment`` absorbs the difference between the raw sum and
    the rounded BMR, so the five components always sum to ``bmr``.
    """

    bmr: int
    weight_contribution: float
    height_contribution: float
    age_contribution: float
    sex_contribution: int
    rounding_adjustment: float
    formula: str

    def component_sum(self) -> float:
        total = math.fsum(
            [
                self.weight_contribution,
                self.height_contribution,
                self.age_contribution,
                self.sex_contribution,
                self.rounding_adjustment,
            ]
        )
        # Float noise from the subtraction in rounding_adjustment.
        return round(total, 6)


@dataclass(frozen=True)
class SafetyWarning:
    """Non-fatal finding attached to a plan. Never raised."""

    code: str
    message: str

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict) -> "SafetyWarning":
        return cls(code=data["code"], message=data["message"])


@dataclass(frozen=True)
class SafetyReport:
    safe: bool
    warnings: Tuple[SafetyWarning, ...]
    surplus: int
    recommendation: str


@dataclass(frozen=True)
class EnergyBreakdown:
    maintenance: int
    surplus: int
    total: int


@dataclass(frozen=True)
class CaloriePlan:
    """BMR -> TDEE -> surplus -> total, with the safety check attached."""

    bmr: int
    tdee: int
    activity_multiplier: float
    surplus: int
    implied_weekly_gain_kg: float
    total_calories: int
    breakdown: EnergyBreakdown
    safety: SafetyReport
