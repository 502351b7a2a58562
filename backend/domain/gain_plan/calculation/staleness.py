"""Snapshot staleness policy."""

from datetime import datetime, timedelta
from typing import Optional

from ..core.clock import ensure_utc

DEFAULT_STALE_HOURS = 24


def is_stale(
    last_calculated: Optional[datetime],
    now: datetime,
    threshold_hours: float = DEFAULT_STALE_HOURS,
) -> bool:
    """Whether a snapshot computed at ``last_calculated`` must be recomputed.

    Never computed counts as stale. A snapshot exactly ``threshold_hours``
    old is still fresh.

    Example:
        >>> is_stale(None, utc_now())
        True
    """
    if last_calculated is None:
        return True
    age = ensure_utc(now) - ensure_utc(last_calculated)
    return age > timedelta(hours=threshold_hours)
