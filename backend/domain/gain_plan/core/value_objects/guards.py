"""Constructor guards shared by value objects."""

import math
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..exceptions.domain_errors import InvalidEnumError, OutOfRangeError, ValidationError

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Any, field: str) -> E:
    """Coerce a raw value (enum member or its string value) into ``enum_cls``.

    Raises:
        InvalidEnumError: If the value is not a member of the enum
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    raise InvalidEnumError(field, value, [member.value for member in enum_cls])


def require_number(field: str, value: Any) -> float:
    """Ensure value is a real number (bools are rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(field, f"must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValidationError(field, f"must be a finite number, got {value!r}")
    return value


def require_range(
    field: str,
    value: Any,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> None:
    """Ensure ``minimum <= value <= maximum`` (either bound optional)."""
    if isinstance(value, float) and not math.isfinite(value):
        raise OutOfRangeError(field, value, minimum, maximum)
    require_number(field, value)
    if minimum is not None and value < minimum:
        raise OutOfRangeError(field, value, minimum, maximum)
    if maximum is not None and value > maximum:
        raise OutOfRangeError(field, value, minimum, maximum)


def require_positive(field: str, value: Any, maximum: Optional[float] = None) -> None:
    """Ensure ``0 < value <= maximum``."""
    require_number(field, value)
    if value <= 0:
        raise ValidationError(field, f"must be positive, got {value}")
    if maximum is not None and value > maximum:
        raise OutOfRangeError(field, value, None, maximum)
