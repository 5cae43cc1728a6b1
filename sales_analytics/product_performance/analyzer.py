"""
Product Performance Module
==========================

Per-product sales volume, revenue and profit over a trailing period, with
ranked best/worst sellers and most/least profitable products.

Usage:
    from sales_analytics.product_performance import ProductPerformanceAnalyzer

    analyzer = ProductPerformanceAnalyzer(top_n=5)
    report = analyzer.analyze(products, sales, period_days=90, as_of=today)
    report.summary.total_revenue
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Union

import pandas as pd
from loguru import logger

from ..common.config import AnalyticsConfig
from ..common.exceptions import InvalidArgument, require_positive_int
from ..common.models import coerce_products, coerce_sales
from ..common.money import from_cents, to_cents
from ..common.preprocessing import LedgerPreprocessor


@dataclass(frozen=True)
class ProductPerformance:
    product_id: str
    name: str
    sku: Optional[str]
    category: str
    quantity_sold: int
    revenue: Decimal
    profit: Decimal
    profit_margin: float
    contribution_to_sales: float
    current_stock: int


@dataclass(frozen=True)
class PerformanceSummary:
    total_quantity_sold: int
    total_revenue: Decimal
    total_profit: Decimal


@dataclass(frozen=True)
class PerformanceReport:
    top_selling: List[ProductPerformance]
    worst_selling: List[ProductPerformance]
    profitable: List[ProductPerformance]
    unprofitable: List[ProductPerformance]
    summary: PerformanceSummary
    products: List[ProductPerformance] = field(default_factory=list)


def _percentage(part_cents: int, whole_cents: int) -> float:
    if whole_cents == 0:
        return 0.0
    return float(round(Decimal(part_cents) / Decimal(whole_cents) * 100, 2))


class ProductPerformanceAnalyzer:
    """
    Ranks products by volume and profitability.

    Revenue comes from the prices recorded on the sale lines; profit
    subtracts the current catalog unit cost for every unit sold. Products
    without a sale in the period appear in no ranking.

    Example:
        >>> analyzer = ProductPerformanceAnalyzer(top_n=3)
        >>> report = analyzer.analyze(products, sales, 30, as_of=today, category_id="Drinks")
        >>> [p.name for p in report.top_selling]
    """

    def __init__(
        self,
        top_n: int = 5,
        preprocessor: Optional[LedgerPreprocessor] = None
    ):
        """
        Initialize ProductPerformanceAnalyzer.

        Args:
            top_n: Maximum number of products in each ranked slice
            preprocessor: Preprocessor carrying the timezone setting
        """
        self.top_n = require_positive_int('top_n', top_n)
        self.preprocessor = preprocessor or LedgerPreprocessor()
        logger.info("ProductPerformanceAnalyzer initialized")

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> 'ProductPerformanceAnalyzer':
        return cls(
            top_n=config.performance.top_n,
            preprocessor=LedgerPreprocessor(config.timezone),
        )

    def analyze(
        self,
        products: Iterable[Any],
        sales: Iterable[Any],
        period_days: int,
        *,
        as_of: Union[datetime, date],
        category_id: Optional[str] = None
    ) -> PerformanceReport:
        """
        Analyze product performance over the trailing period.

        Args:
            products: Current catalog (Product records or mappings)
            sales: Sale records or mappings
            period_days: Length of the trailing period in days
            as_of: Reference time closing the period
            category_id: Restrict to products of this category

        Returns:
            PerformanceReport with four ranked slices (ties broken by
            product id) and the period summary

        Raises:
            InvalidArgument: If period_days is not a positive integer or
                category_id is not a non-empty string
        """
        require_positive_int('period_days', period_days)
        if category_id is not None and (not isinstance(category_id, str) or not category_id.strip()):
            raise InvalidArgument(f"category_id must be a non-empty string, got {category_id!r}")

        catalog = self.preprocessor.products_frame(coerce_products(products))
        lines = self.preprocessor.line_items_frame(coerce_sales(sales))
        lines = self.preprocessor.filter_window(lines, as_of, period_days)

        known = lines['product_id'].isin(catalog.index)
        unknown_ids = lines.loc[~known, 'product_id'].unique()
        for product_id in unknown_ids:
            logger.warning(f"Sales reference product {product_id} which is not in the catalog; skipped")
        lines = lines.loc[known]

        if category_id is not None:
            in_category = catalog.index[catalog['category'] == category_id]
            lines = lines.loc[lines['product_id'].isin(in_category)]

        totals = lines.groupby('product_id', sort=True).agg(
            quantity_sold=('quantity', 'sum'),
            revenue_cents=('line_cents', 'sum'),
        )

        rows = []
        for product_id, row in totals.iterrows():
            info = catalog.loc[product_id]
            quantity_sold = int(row['quantity_sold'])
            revenue_cents = int(row['revenue_cents'])
            profit_cents = revenue_cents - to_cents(info['cost'] * quantity_sold)
            rows.append((product_id, info, quantity_sold, revenue_cents, profit_cents))

        total_quantity = sum(r[2] for r in rows)
        total_revenue_cents = sum(r[3] for r in rows)
        total_profit_cents = sum(r[4] for r in rows)

        performances = [
            ProductPerformance(
                product_id=product_id,
                name=info['name'],
                sku=info['sku'],
                category=info['category'],
                quantity_sold=quantity_sold,
                revenue=from_cents(revenue_cents),
                profit=from_cents(profit_cents),
                profit_margin=_percentage(profit_cents, revenue_cents),
                contribution_to_sales=_percentage(revenue_cents, total_revenue_cents),
                current_stock=int(info['quantity']),
            )
            for product_id, info, quantity_sold, revenue_cents, profit_cents in rows
        ]

        n = self.top_n
        report = PerformanceReport(
            top_selling=sorted(performances, key=lambda p: (-p.quantity_sold, p.product_id))[:n],
            worst_selling=sorted(performances, key=lambda p: (p.quantity_sold, p.product_id))[:n],
            profitable=sorted(performances, key=lambda p: (-p.profit, p.product_id))[:n],
            unprofitable=sorted(performances, key=lambda p: (p.profit, p.product_id))[:n],
            summary=PerformanceSummary(
                total_quantity_sold=total_quantity,
                total_revenue=from_cents(total_revenue_cents),
                total_profit=from_cents(total_profit_cents),
            ),
            products=performances,
        )

        logger.info(
            f"Performance over {period_days} days"
            + (f" (category '{category_id}')" if category_id else "")
            + f": {len(performances)} products, revenue {report.summary.total_revenue}"
        )
        return report
