"""
Sales Analytics Suite
=====================

Analytics over a point-of-sale ledger and product catalog:
- Sales Prediction (moving average + linear trend)
- Restock Recommendations (depletion rate, urgency tiers)
- Product Performance (volume, revenue and profit rankings)
- Seasonality (day-of-week, hour and month patterns)
- Sales and inventory summaries

Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Sales Analytics Team"

from .common import DataLoader, LedgerPreprocessor, Reporter, TimeBucketer, load_config
from .sales_prediction import SalesForecaster, ForecastEvaluator
from .inventory import RestockRecommender, InventorySummarizer
from .product_performance import ProductPerformanceAnalyzer
from .seasonality import SeasonalPatternAnalyzer
from .reports import SalesSummarizer

__all__ = [
    "DataLoader",
    "LedgerPreprocessor",
    "Reporter",
    "TimeBucketer",
    "load_config",
    "SalesForecaster",
    "ForecastEvaluator",
    "RestockRecommender",
    "InventorySummarizer",
    "ProductPerformanceAnalyzer",
    "SeasonalPatternAnalyzer",
    "SalesSummarizer",
]
