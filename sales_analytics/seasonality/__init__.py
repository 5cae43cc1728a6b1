"""
Seasonality Module
==================

Recurring demand patterns and staffing suggestions.
"""

from .pattern_analyzer import (
    INSUFFICIENT_DATA,
    SeasonalPatternAnalyzer,
    SeasonalPatterns,
    SeasonalRecommendations,
)

__all__ = [
    "INSUFFICIENT_DATA",
    "SeasonalPatternAnalyzer",
    "SeasonalPatterns",
    "SeasonalRecommendations",
]
