"""CalculationPipeline - BMR -> TDEE/surplus -> macros, as one pure step."""

from datetime import datetime
from typing import Optional

import structlog

from domain.gain_plan.calculation.bmr_service import BMRService
from domain.gain_plan.calculation.energy_service import EnergyPlanner
from domain.gain_plan.calculation.macro_service import MacroAllocator
from domain.gain_plan.core.value_objects.biometric_profile import BiometricProfile
from domain.gain_plan.core.value_objects.calculation_snapshot import CalculationSnapshot
from domain.gain_plan.core.value_objects.calorie_plan import CaloriePlan
from domain.gain_plan.core.value_objects.goal import Goal
from domain.gain_plan.core.value_objects.profile_enums import ProteinPreference

logger = structlog.get_logger(__name__)


class CalculationPipeline:
    """
    Runs the full calculation chain for one user.

    Flow:
    1. Validate the goal against the profile
    2. Calculate BMR from biometric data
    3. Calculate TDEE and size the surplus from the goal
    4. Re-apply the accepted adaptation offset to the surplus
    5. Allocate macros for the resulting target

    Pure: no I/O. The snapshot is a function of its inputs and ``now``.
    """

    def __init__(
        self,
        bmr_service: Optional[BMRService] = None,
        energy_planner: Optional[EnergyPlanner] = None,
        macro_allocator: Optional[MacroAllocator] = None,
    ):
        self._bmr_service = bmr_service or BMRService()
        self._energy_planner = energy_planner or EnergyPlanner(self._bmr_service)
        self._macro_allocator = macro_allocator or MacroAllocator()

    def plan(self, profile: BiometricProfile, goal: Goal) -> CaloriePlan:
        """Energy plan without macros or adaptation offset."""
        goal.validate_against(profile)
        return self._energy_planner.complete_plan(
            profile.body_metrics(),
            profile.activity_level,
            weekly_gain_kg=goal.weekly_gain_kg,
            goal_intensity=goal.surplus_intensity,
        )

    def compute_calorie_plan(
        self,
        user_id: str,
        profile: BiometricProfile,
        goal: Goal,
        now: datetime,
        adaptation_offset: int = 0,
        protein_preference: ProteinPreference = ProteinPreference.MODERATE,
    ) -> CalculationSnapshot:
        """
        Compute a fresh calculation snapshot.

        Args:
            user_id: Snapshot owner
            profile: Biometric profile
            goal: Weight-gain goal
            now: Calculation timestamp
            adaptation_offset: Accumulated accepted calorie adjustments
            protein_preference: Macro allocation preference

        Returns:
            CalculationSnapshot with version 0 (the store assigns versions)

        Raises:
            ValidationError: If inputs are invalid or inconsistent
        """
        try:
            plan = self.plan(profile, goal)
            surplus = plan.surplus + adaptation_offset
            target = plan.tdee + surplus
            safety = self._energy_planner.validate_calorie_plan(target, plan.bmr, surplus)
            allocation = self._macro_allocator.allocate(
                target,
                profile.current_weight_kg,
                profile.activity_level,
                protein_preference,
            )
        except Exception as exc:
            logger.error("calorie_plan_failed", user_id=user_id, error=str(exc))
            raise

        snapshot = CalculationSnapshot(
            user_id=user_id,
            bmr=plan.bmr,
            tdee=plan.tdee,
            surplus=surplus,
            target_calories=target,
            macro_targets=allocation.targets(),
            last_calculated=now,
            adaptation_offset=adaptation_offset,
            safety_warnings=safety.warnings,
        )
        logger.debug(
            "calorie_plan_computed",
            user_id=user_id,
            bmr=snapshot.bmr,
            tdee=snapshot.tdee,
            surplus=snapshot.surplus,
            target_calories=snapshot.target_calories,
            adaptation_offset=adaptation_offset,
        )
        return snapshot
