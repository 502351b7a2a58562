"""Adaptive layer: trend analysis and bounded adjustments."""

from .adjustment_engine import AdjustmentEngine
from .trend_analyzer import TrendAnalyzer

__all__ = ["AdjustmentEngine", "TrendAnalyzer"]
