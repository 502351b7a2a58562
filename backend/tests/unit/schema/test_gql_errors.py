"""Unit tests for domain -> GraphQL error translation."""

import pytest
from graphql import GraphQLError

from domain.gain_plan.core.exceptions.domain_errors import (
    FoodNotFoundError,
    OutOfRangeError,
    ProfileNotFoundError,
    SnapshotConflictError,
)
from gql.errors import domain_errors_as_graphql, to_graphql_error


class TestToGraphQLError:
    def test_validation_error_names_field(self):
        error = to_graphql_error(OutOfRangeError("age", 5, 10, 120))

        assert error.extensions == {"code": "VALIDATION_ERROR", "field": "age"}
        assert "between 10 and 120" in error.message

    @pytest.mark.parametrize(
        "domain_error,code",
        [
            (ProfileNotFoundError("user123"), "NOT_FOUND"),
            (FoodNotFoundError("unicorn"), "NOT_FOUND"),
            (SnapshotConflictError("user123", 2), "CONFLICT"),
        ],
    )
    def test_codes(self, domain_error, code):
        assert to_graphql_error(domain_error).extensions["code"] == code


def test_context_manager_translates_domain_errors():
    with pytest.raises(GraphQLError) as exc_info:
        with domain_errors_as_graphql():
            raise ProfileNotFoundError("ghost")

    assert exc_info.value.extensions["code"] == "NOT_FOUND"
    assert isinstance(exc_info.value.__cause__, ProfileNotFoundError)


def test_context_manager_leaves_other_errors():
    with pytest.raises(KeyError):
        with domain_errors_as_graphql():
            raise KeyError("boom")
