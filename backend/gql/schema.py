"""Main GraphQL schema factory for the gain plan backend.

The Query and Mutation classes are defined in app.py to avoid circular
imports and maintain a single source of truth.

Usage:
    from gql.schema import create_schema
    schema = create_schema()
"""

import strawberry


def create_schema() -> strawberry.Schema:
    """Create Strawberry schema with all integrated resolvers.

    Returns:
        Configured Strawberry Schema instance
    """
    # Import here to avoid circular dependency
    from app import Mutation, Query

    return strawberry.Schema(query=Query, mutation=Mutation)
