"""Domain layer for the weight-gain plan.

Business rules for calorie planning, macro allocation, food aggregation and
adaptive adjustments, decoupled from GraphQL and from persistence.
"""
