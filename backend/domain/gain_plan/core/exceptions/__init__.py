"""Domain exceptions for the gain plan domain."""

from .domain_errors import (
    AdaptationAlreadyAppliedError,
    AdaptationNotFoundError,
    DuplicateRecordError,
    FoodNotFoundError,
    GainPlanDomainError,
    InvalidEnumError,
    NotFoundError,
    OutOfRangeError,
    ProfileNotFoundError,
    SnapshotConflictError,
    ValidationError,
)

__all__ = [
    "GainPlanDomainError",
    "ValidationError",
    "OutOfRangeError",
    "InvalidEnumError",
    "NotFoundError",
    "FoodNotFoundError",
    "ProfileNotFoundError",
    "AdaptationNotFoundError",
    "AdaptationAlreadyAppliedError",
    "SnapshotConflictError",
    "DuplicateRecordError",
]
