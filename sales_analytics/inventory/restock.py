"""
Restock Recommendation Module
=============================

Flags products that will run out of stock within a threshold, based on the
depletion rate observed over a trailing sales window.

Usage:
    from sales_analytics.inventory import RestockRecommender

    recommender = RestockRecommender()
    items = recommender.recommend(
        products, sales, threshold_days=14,
        window_days=90, as_of=datetime(2024, 6, 30, 23, 59),
    )
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from fractions import Fraction
from typing import Any, Iterable, List, Optional, Union

import pandas as pd
from loguru import logger

from ..common.config import AnalyticsConfig
from ..common.exceptions import require_positive_int
from ..common.models import coerce_products, coerce_sales
from ..common.preprocessing import LedgerPreprocessor


class Urgency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


URGENCY_RANK = {Urgency.HIGH: 0, Urgency.MEDIUM: 1, Urgency.LOW: 2}


@dataclass(frozen=True)
class RestockItem:
    product_id: str
    name: str
    sku: Optional[str]
    quantity: int
    daily_sales_rate: float
    days_until_out_of_stock: float
    recommended_quantity: int
    urgency: Urgency


def classify_urgency(days_until_out_of_stock: Union[Fraction, float, int], threshold_days: int) -> Urgency:
    """
    Tier a stock-out estimate against the threshold.

    Bounds are inclusive, so a value sitting exactly on a boundary gets the
    more urgent tier.
    """
    days = Fraction(days_until_out_of_stock)
    if days <= Fraction(threshold_days, 3):
        return Urgency.HIGH
    if days <= Fraction(threshold_days * 2, 3):
        return Urgency.MEDIUM
    return Urgency.LOW


class RestockRecommender:
    """
    Depletion-rate based reorder recommendations.

    Rates, stock-out estimates and tier boundaries are compared as exact
    fractions; floats appear only in the returned items.

    Example:
        >>> recommender = RestockRecommender()
        >>> items = recommender.recommend(products, sales, 14, window_days=30, as_of=today)
        >>> [i.name for i in items if i.urgency is Urgency.HIGH]
    """

    def __init__(self, preprocessor: Optional[LedgerPreprocessor] = None):
        """
        Initialize RestockRecommender.

        Args:
            preprocessor: Preprocessor carrying the timezone setting
        """
        self.preprocessor = preprocessor or LedgerPreprocessor()
        logger.info("RestockRecommender initialized")

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> 'RestockRecommender':
        return cls(preprocessor=LedgerPreprocessor(config.timezone))

    def units_sold(
        self,
        sales: Iterable[Any],
        window_days: int,
        as_of: Union[datetime, date]
    ) -> pd.Series:
        """
        Units sold per product inside the trailing window.

        Args:
            sales: Sale records or mappings
            window_days: Window length in days
            as_of: Reference time closing the window

        Returns:
            Series indexed by product_id, in first-sale order
        """
        lines = self.preprocessor.line_items_frame(coerce_sales(sales))
        recent = self.preprocessor.filter_window(lines, as_of, window_days)
        return recent.groupby('product_id', sort=False)['quantity'].sum()

    def recommend(
        self,
        products: Iterable[Any],
        sales: Iterable[Any],
        threshold_days: int,
        *,
        window_days: int,
        as_of: Union[datetime, date]
    ) -> List[RestockItem]:
        """
        Build the restock list.

        Args:
            products: Current catalog (Product records or mappings)
            sales: Sale records or mappings
            threshold_days: Flag products running out within this many days
            window_days: Trailing window the depletion rate is measured over
            as_of: Reference time closing the window

        Returns:
            RestockItems, most urgent first, then soonest stock-out first

        Raises:
            InvalidArgument: If threshold_days or window_days is not a
                positive integer
        """
        require_positive_int('threshold_days', threshold_days)
        require_positive_int('window_days', window_days)

        catalog = {}
        for product in coerce_products(products):
            catalog.setdefault(product.id, product)

        sold = self.units_sold(sales, window_days, as_of)

        ranked = []
        missing = 0

        for product_id, units in sold.items():
            product = catalog.get(product_id)
            if product is None:
                missing += 1
                logger.warning(f"Sales reference product {product_id} which is not in the catalog; skipped")
                continue

            rate = Fraction(int(units), window_days)
            if rate == 0:
                continue

            if product.quantity <= 0:
                days_left = Fraction(0)
            else:
                days_left = product.quantity / rate

            if days_left > threshold_days:
                continue

            reorder = max(1, math.ceil(rate * threshold_days * 2) - product.quantity)

            urgency = classify_urgency(days_left, threshold_days)
            item = RestockItem(
                product_id=product.id,
                name=product.name,
                sku=product.sku,
                quantity=product.quantity,
                daily_sales_rate=round(float(rate), 2),
                days_until_out_of_stock=round(float(days_left), 2),
                recommended_quantity=reorder,
                urgency=urgency,
            )
            ranked.append(((URGENCY_RANK[urgency], days_left, product.id), item))

        ranked.sort(key=lambda entry: entry[0])
        items = [item for _, item in ranked]

        logger.info(
            f"Restock analysis: {len(items)} product(s) flagged out of {len(sold)} sold "
            f"in the last {window_days} days"
            + (f", {missing} unknown product(s) skipped" if missing else "")
        )
        return items
