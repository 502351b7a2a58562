"""Gain plan GraphQL resolvers.

This module exports mutations and queries for the gain plan domain.
"""

from gql.resolvers.gain_plan.mutations import GainPlanMutations
from gql.resolvers.gain_plan.queries import GainPlanQueries

__all__ = [
    "GainPlanMutations",
    "GainPlanQueries",
]
