"""
Inventory Summary Module
========================

Stock health figures for the catalog: unit totals, low-stock and
out-of-stock counts and the value of stock on hand at current prices.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List

from loguru import logger

from ..common.config import AnalyticsConfig
from ..common.exceptions import InvalidArgument
from ..common.models import Product, coerce_products
from ..common.money import from_cents, to_cents


@dataclass(frozen=True)
class InventorySummary:
    total_products: int
    total_items: int
    low_stock_products: int
    out_of_stock_products: int
    inventory_value: Decimal


class InventorySummarizer:
    """
    Catalog stock summary.

    Negative on-hand quantities count as out of stock and contribute
    nothing to unit totals or inventory value.

    Example:
        >>> summary = InventorySummarizer(low_stock_threshold=5).summarize(products)
        >>> summary.low_stock_products
    """

    def __init__(self, low_stock_threshold: int = 5):
        if isinstance(low_stock_threshold, bool) or not isinstance(low_stock_threshold, int) \
                or low_stock_threshold < 0:
            raise InvalidArgument(f"low_stock_threshold must be a non-negative integer, got {low_stock_threshold!r}")
        self.low_stock_threshold = low_stock_threshold
        logger.info("InventorySummarizer initialized")

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> 'InventorySummarizer':
        return cls(low_stock_threshold=config.inventory.low_stock_threshold)

    def summarize(self, products: Iterable[Any]) -> InventorySummary:
        catalog = coerce_products(products)

        value_cents = sum(to_cents(p.price * max(p.quantity, 0)) for p in catalog)
        summary = InventorySummary(
            total_products=len(catalog),
            total_items=sum(max(p.quantity, 0) for p in catalog),
            low_stock_products=sum(1 for p in catalog if p.quantity <= self.low_stock_threshold),
            out_of_stock_products=sum(1 for p in catalog if p.quantity <= 0),
            inventory_value=from_cents(value_cents),
        )

        logger.info(
            f"Inventory: {summary.total_products} products, {summary.low_stock_products} low, "
            f"{summary.out_of_stock_products} out of stock"
        )
        return summary

    def low_stock(self, products: Iterable[Any]) -> List[Product]:
        """Products at or under the low-stock threshold, lowest quantity first."""
        catalog = coerce_products(products)
        flagged = [p for p in catalog if p.quantity <= self.low_stock_threshold]
        return sorted(flagged, key=lambda p: (p.quantity, p.id))
