"""
Product Performance Module
==========================

Volume, revenue and profit rankings per product.
"""

from .analyzer import (
    PerformanceReport,
    PerformanceSummary,
    ProductPerformance,
    ProductPerformanceAnalyzer,
)

__all__ = [
    "PerformanceReport",
    "PerformanceSummary",
    "ProductPerformance",
    "ProductPerformanceAnalyzer",
]
