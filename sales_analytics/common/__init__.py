"""
Common utilities for the sales analytics suite.
"""

from .config import AnalyticsConfig, load_config
from .data_loader import DataLoader
from .exceptions import AnalyticsError, DataLoadError, InvalidArgument
from .models import Product, Sale, SaleItem, coerce_products, coerce_sales
from .money import from_cents, to_cents
from .preprocessing import LedgerPreprocessor
from .reporting import Reporter
from .time_bucketing import BucketKey, BucketTotals, TimeBucketer

__all__ = [
    "AnalyticsConfig",
    "load_config",
    "DataLoader",
    "AnalyticsError",
    "DataLoadError",
    "InvalidArgument",
    "Product",
    "Sale",
    "SaleItem",
    "coerce_products",
    "coerce_sales",
    "from_cents",
    "to_cents",
    "LedgerPreprocessor",
    "Reporter",
    "BucketKey",
    "BucketTotals",
    "TimeBucketer",
]
