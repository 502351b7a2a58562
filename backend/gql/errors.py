"""Translation of domain errors into GraphQL errors.

Every error carries ``extensions.code``; validation errors also carry
``extensions.field`` naming the offending input.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from graphql import GraphQLError

from domain.gain_plan.core.exceptions.domain_errors import (
    DuplicateRecordError,
    GainPlanDomainError,
    NotFoundError,
    SnapshotConflictError,
    ValidationError,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
CONFLICT = "CONFLICT"
DUPLICATE_RECORD = "DUPLICATE_RECORD"
DOMAIN_ERROR = "DOMAIN_ERROR"


def to_graphql_error(error: GainPlanDomainError) -> GraphQLError:
    field: Optional[str] = None
    if isinstance(error, ValidationError):
        code = VALIDATION_ERROR
        field = error.field
    elif isinstance(error, NotFoundError):
        code = NOT_FOUND
    elif isinstance(error, SnapshotConflictError):
        code = CONFLICT
    elif isinstance(error, DuplicateRecordError):
        code = DUPLICATE_RECORD
    else:
        code = DOMAIN_ERROR
    return GraphQLError(str(error), extensions={"code": code, "field": field})


def invalid_input(field: Optional[str], message: str) -> GraphQLError:
    return GraphQLError(message, extensions={"code": VALIDATION_ERROR, "field": field})


@contextmanager
def domain_errors_as_graphql() -> Iterator[None]:
    """Re-raise domain errors raised inside the block as GraphQL errors."""
    try:
        yield
    except GainPlanDomainError as e:
        logger.info(f"Domain error in resolver: {type(e).__name__}: {e}")
        raise to_graphql_error(e) from e
