"""BMRService - Basal Metabolic Rate calculation."""

import math

import structlog

from ..core.ports.calculators import IBMRCalculator
from ..core.rounding import round_half_up
from ..core.value_objects.biometric_profile import BodyMetrics
from ..core.value_objects.calorie_plan import BMRBreakdown

logger = structlog.get_logger(__name__)


class BMRService(IBMRCalculator):
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Formula:
        Men:   BMR = 10 × weight(kg) + 6.25 × height(cm) - 5 × age + 5
        Women: BMR = 10 × weight(kg) + 6.25 × height(cm) - 5 × age - 161

    Results are rounded half up to whole kcal.

    References:
        Mifflin MD, St Jeor ST, Hill LA, et al. A new predictive equation
        for resting energy expenditure in healthy individuals.
        Am J Clin Nutr. 1990;51(2):241-247.
    """

    def calculate(self, metrics: BodyMetrics) -> int:
        """Calculate BMR from body metrics.

        Args:
            metrics: Validated age, sex, height and weight

        Returns:
            int: BMR in kcal/day

        Example:
            >>> service = BMRService()
            >>> service.calculate(BodyMetrics(30, "male", 180, 75))
            1730
        """
        return self.calculate_with_breakdown(metrics).bmr

    def calculate_with_breakdown(self, metrics: BodyMetrics) -> BMRBreakdown:
        """Calculate BMR exposing every additive term.

        ``rounding_adjustment`` is the difference between the rounded BMR
        and the raw equation value, so the components sum to ``bmr``.
        """
        weight_contribution = 10 * metrics.weight_kg
        height_contribution = 6.25 * metrics.height_cm
        age_contribution = -5 * metrics.age
        sex_contribution = metrics.biological_sex.bmr_constant()

        raw = math.fsum(
            [weight_contribution, height_contribution, age_contribution, sex_contribution]
        )
        bmr = round_half_up(raw)
        sign = "+" if sex_contribution >= 0 else "-"
        formula = (
            f"(10 × {metrics.weight_kg:g}) + (6.25 × {metrics.height_cm:g}) "
            f"- (5 × {metrics.age}) {sign} {abs(sex_contribution)} = {bmr}"
        )

        breakdown = BMRBreakdown(
            bmr=bmr,
            weight_contribution=weight_contribution,
            height_contribution=height_contribution,
            age_contribution=age_contribution,
            sex_contribution=sex_contribution,
            rounding_adjustment=bmr - raw,
            formula=formula,
        )
        logger.debug(
            "bmr_calculated",
            bmr=bmr,
            age=metrics.age,
            biological_sex=metrics.biological_sex.value,
            weight_kg=metrics.weight_kg,
            height_cm=metrics.height_cm,
        )
        return breakdown
