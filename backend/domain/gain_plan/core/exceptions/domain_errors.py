"""Domain exceptions for the gain plan domain."""

from typing import Any, Iterable, Optional


class GainPlanDomainError(Exception):
    """Base exception for gain plan domain errors."""

    pass


class ValidationError(GainPlanDomainError):
    """Raised when an input is missing, out of range or inconsistent.

    Always names the offending field so callers can surface
    field-level feedback.

    Attributes:
        field: Name of the offending input field
        reason: Human-readable reason
    """

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class OutOfRangeError(ValidationError):
    """Raised when a numeric input falls outside its allowed bounds."""

    def __init__(
        self,
        field: str,
        value: Any,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
    ):
        if minimum is not None and maximum is not None:
            reason = f"must be between {minimum} and {maximum}, got {value}"
        elif minimum is not None:
            reason = f"must be at least {minimum}, got {value}"
        else:
            reason = f"must not exceed {maximum}, got {value}"
        super().__init__(field, reason)
        self.value = value
        self.minimum = minimum
        self.maximum = maximum


class InvalidEnumError(ValidationError):
    """Raised when a value is not one of the accepted choices."""

    def __init__(self, field: str, value: Any, allowed: Iterable[str]):
        self.allowed = tuple(allowed)
        super().__init__(
            field,
            f"must be one of: {', '.join(self.allowed)}, got {value!r}",
        )
        self.value = value


class AdaptationAlreadyAppliedError(ValidationError):
    """Raised when an adaptation's deltas were already folded into a snapshot."""

    def __init__(self, adaptation_id: str):
        super().__init__("applied", f"adaptation {adaptation_id} already applied")
        self.adaptation_id = adaptation_id


class NotFoundError(GainPlanDomainError):
    """Raised when a referenced resource does not exist."""

    def __init__(self, resource: str, key: str):
        super().__init__(f"{resource} not found: {key}")
        self.resource = resource
        self.key = key


class FoodNotFoundError(NotFoundError):
    """Raised when a food key is not in the reference table."""

    def __init__(self, key: str):
        super().__init__("Food", key)


class ProfileNotFoundError(NotFoundError):
    """Raised when a user has no biometric profile or goal on record."""

    def __init__(self, user_id: str):
        super().__init__("Profile", user_id)
        self.user_id = user_id


class AdaptationNotFoundError(NotFoundError):
    """Raised when an adaptation record cannot be found."""

    def __init__(self, adaptation_id: str):
        super().__init__("Adaptation", adaptation_id)


class SnapshotConflictError(GainPlanDomainError):
    """Raised when a snapshot write loses a compare-and-swap race."""

    def __init__(self, user_id: str, expected_version: Optional[int]):
        super().__init__(
            f"Snapshot for user {user_id} changed concurrently "
            f"(expected version {expected_version})"
        )
        self.user_id = user_id
        self.expected_version = expected_version


class DuplicateRecordError(GainPlanDomainError):
    """Raised when an append-only record is inserted twice."""

    def __init__(self, record_id: str):
        super().__init__(f"Record already exists: {record_id}")
        self.record_id = record_id
