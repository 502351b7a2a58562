"""ActivityLevel value object - physical activity level for TDEE."""

from enum import Enum


class ActivityLevel(str, Enum):
    """Physical Activity Level (PAL), ordered from least to most active.

    - SEDENTARY: Minimal activity, mostly sedentary
    - LIGHT: Light exercise 1-3 days/week
    - MODERATE: Moderate exercise 3-5 days/week
    - VERY: Hard exercise 6-7 days/week
    - EXTREME: Intense daily exercise or physical job
    """

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    VERY = "very"
    EXTREME = "extreme"

    def pal_multiplier(self) -> float:
        """Get PAL multiplier applied to BMR.

        Example:
            >>> ActivityLevel.MODERATE.pal_multiplier()
            1.55
        """
        return _PAL_MULTIPLIERS[self]

    def protein_per_kg(self) -> float:
        """Protein requirement (g/kg body weight) while gaining weight.

        Example:
            >>> ActivityLevel.EXTREME.protein_per_kg()
            2.4
        """
        return _PROTEIN_PER_KG[self]

    def description(self) -> str:
        """Get human-readable description."""
        return _DESCRIPTIONS[self]


_PAL_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY: 1.725,
    ActivityLevel.EXTREME: 1.9,
}

_PROTEIN_PER_KG = {
    ActivityLevel.SEDENTARY: 1.6,
    ActivityLevel.LIGHT: 1.8,
    ActivityLevel.MODERATE: 2.0,
    ActivityLevel.VERY: 2.2,
    ActivityLevel.EXTREME: 2.4,
}

_DESCRIPTIONS = {
    ActivityLevel.SEDENTARY: "Little or no exercise",
    ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
    ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
    ActivityLevel.VERY: "Hard exercise 6-7 days/week",
    ActivityLevel.EXTREME: "Intense daily exercise + physical job",
}
