"""GoalIntensity value object - how fast the user wants to gain."""

from enum import Enum


class GoalIntensity(str, Enum):
    """Weight-gain pace.

    Each intensity maps to a daily calorie surplus band (kcal/day):
    - CONSERVATIVE: 300-400 (~0.2-0.25 kg/week)
    - MODERATE: 400-500 (~0.25-0.3 kg/week)
    - AGGRESSIVE: 500-650 (~0.3-0.4 kg/week)
    """

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"

    def surplus_band(self) -> tuple[int, int]:
        """Get (min, max) daily surplus in kcal."""
        return {
            GoalIntensity.CONSERVATIVE: (300, 400),
            GoalIntensity.MODERATE: (400, 500),
            GoalIntensity.AGGRESSIVE: (500, 650),
        }[self]

    def surplus_midpoint(self) -> float:
        """Midpoint of the surplus band.

        Example:
            >>> GoalIntensity.AGGRESSIVE.surplus_midpoint()
            575.0
        """
        low, high = self.surplus_band()
        return (low + high) / 2
