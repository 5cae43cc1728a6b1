"""
Sales Summary Module
====================

Headline sales figures for a reporting period: number of sales, revenue,
units sold and a breakdown by payment method.

Usage:
    from sales_analytics.reports import SalesSummarizer, ReportPeriod

    summary = SalesSummarizer().summarize(sales, period=ReportPeriod.WEEK, as_of=now)
    summary.by_payment_method["Card"].total
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import pandas as pd
from loguru import logger

from ..common.config import AnalyticsConfig
from ..common.exceptions import InvalidArgument
from ..common.models import coerce_sales
from ..common.money import from_cents
from ..common.preprocessing import LedgerPreprocessor


class ReportPeriod(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class PaymentMethodTotals:
    count: int
    total: Decimal


@dataclass(frozen=True)
class SalesSummary:
    total_sales: int
    total_revenue: Decimal
    total_items_sold: int
    by_payment_method: Dict[str, PaymentMethodTotals]


class SalesSummarizer:
    """
    Period sales summary.

    Without a period every sale counts, dated or not. With a period only
    sales stamped between the period start and ``as_of`` count.

    Example:
        >>> summarizer = SalesSummarizer()
        >>> summarizer.summarize(sales, period="month", as_of=datetime(2024, 6, 30, 18))
    """

    def __init__(self, preprocessor: Optional[LedgerPreprocessor] = None):
        self.preprocessor = preprocessor or LedgerPreprocessor()
        logger.info("SalesSummarizer initialized")

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> 'SalesSummarizer':
        return cls(preprocessor=LedgerPreprocessor(config.timezone))

    def period_bounds(
        self,
        period: Union[ReportPeriod, str],
        as_of: Union[datetime, date]
    ) -> Tuple[datetime, datetime]:
        """
        Start and end of a reporting period ending at as_of.

        ``day`` starts at local midnight; ``week`` is the last 7 days;
        ``month`` and ``year`` go back one calendar month or year.
        """
        try:
            period = ReportPeriod(period)
        except ValueError as exc:
            raise InvalidArgument(f"Unknown report period: {period!r}") from exc

        end = self.preprocessor.reference_time(as_of)
        if period is ReportPeriod.DAY:
            start = datetime.combine(end.date(), time.min)
        elif period is ReportPeriod.WEEK:
            start = (pd.Timestamp(end) - pd.Timedelta(days=7)).to_pydatetime()
        elif period is ReportPeriod.MONTH:
            start = (pd.Timestamp(end) - pd.DateOffset(months=1)).to_pydatetime()
        else:
            start = (pd.Timestamp(end) - pd.DateOffset(years=1)).to_pydatetime()
        return start, end

    def summarize(
        self,
        sales: Iterable[Any],
        *,
        period: Optional[Union[ReportPeriod, str]] = None,
        as_of: Optional[Union[datetime, date]] = None
    ) -> SalesSummary:
        """
        Summarize sales, optionally restricted to a reporting period.

        Args:
            sales: Sale records or mappings
            period: Reporting period (day, week, month, year)
            as_of: Reference time closing the period; required with period

        Returns:
            SalesSummary with payment methods in first-occurrence order

        Raises:
            InvalidArgument: If period is unknown or given without as_of
        """
        df = self.preprocessor.sales_frame(coerce_sales(sales))

        if period is not None:
            if as_of is None:
                raise InvalidArgument("as_of is required when a report period is given")
            start, end = self.period_bounds(period, as_of)
            mask = df['timestamp'].notna() & (df['timestamp'] >= start) & (df['timestamp'] <= end)
            df = df.loc[mask]

        by_method: Dict[str, PaymentMethodTotals] = {}
        if not df.empty:
            grouped = df.groupby('payment_method', sort=False).agg(
                count=('sale_id', 'size'),
                total_cents=('total_cents', 'sum'),
            )
            for method, row in grouped.iterrows():
                by_method[method] = PaymentMethodTotals(
                    count=int(row['count']),
                    total=from_cents(int(row['total_cents'])),
                )

        summary = SalesSummary(
            total_sales=len(df),
            total_revenue=from_cents(int(df['total_cents'].sum())),
            total_items_sold=int(df['units'].sum()),
            by_payment_method=by_method,
        )

        logger.info(
            f"Sales summary{f' ({ReportPeriod(period).value})' if period else ''}: "
            f"{summary.total_sales} sales, revenue {summary.total_revenue}"
        )
        return summary
