"""Gain plan domain - weight-gain calculation and adaptation engine."""
