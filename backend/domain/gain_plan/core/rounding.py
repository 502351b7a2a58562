"""Rounding helpers shared by the calculation services.

Python's built-in ``round`` uses banker's rounding (``round(2.5) == 2``).
Published reference values for the formulas (e.g. BMR tables) are produced
with half-up rounding, so every user-facing number goes through these.
"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from negative infinity.

    Example:
        >>> round_half_up(1370.5)
        1371
        >>> round_half_up(-12.5)
        -12
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, decimals: int = 1) -> float:
    """Round half-up to a fixed number of decimals.

    Example:
        >>> round_to(12.25, 1)
        12.3
    """
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor
