"""
Time Bucketing Module
=====================

Groups sales into calendar buckets (day, day of week, hour of day, month
of year) and totals revenue and transactions per bucket.

Usage:
    from sales_analytics.common import TimeBucketer, BucketKey

    bucketer = TimeBucketer()
    by_hour = bucketer.bucket(sales, BucketKey.HOUR, sort=True)
"""

import calendar
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Union

import pandas as pd
from loguru import logger

from .models import Sale
from .money import from_cents
from .preprocessing import LedgerPreprocessor


class BucketKey(str, Enum):
    DAY = "day"
    DAY_OF_WEEK = "day_of_week"
    HOUR = "hour"
    MONTH = "month"


@dataclass(frozen=True)
class BucketTotals:
    total_revenue: Decimal
    transaction_count: int


def day_name(weekday: int) -> str:
    """Monday = 0."""
    return calendar.day_name[weekday]


def month_name(month: int) -> str:
    return calendar.month_name[month]


def hour_label(hour: int) -> str:
    return f"{hour:02d}:00"


class TimeBucketer:
    """
    Calendar bucketing of sales.

    Sales without a usable timestamp are skipped; a missing timestamp is
    an expected gap in point-of-sale data, not an error.

    Example:
        >>> bucketer = TimeBucketer()
        >>> daily = bucketer.bucket(sales, BucketKey.DAY)
        >>> for day, totals in daily.items():
        ...     print(day, totals.total_revenue, totals.transaction_count)
    """

    def __init__(self, preprocessor: Optional[LedgerPreprocessor] = None):
        """
        Initialize TimeBucketer.

        Args:
            preprocessor: Preprocessor used to build the sales frame
                (carries the timezone setting)
        """
        self.preprocessor = preprocessor or LedgerPreprocessor()
        logger.debug("TimeBucketer initialized")

    def bucket(
        self,
        sales: Union[Iterable[Sale], pd.DataFrame],
        key: Union[BucketKey, str],
        sort: bool = False
    ) -> Dict[Any, BucketTotals]:
        """
        Aggregate revenue and transaction count per calendar bucket.

        Args:
            sales: Sale records, or a frame from LedgerPreprocessor.sales_frame
            key: Bucket key (day, day_of_week, hour, month)
            sort: Sort by bucket key instead of first-occurrence order

        Returns:
            Mapping of bucket key to BucketTotals. Day keys are dates,
            the other keys are ints (weekday Monday=0, hour 0-23, month 1-12).
        """
        key = BucketKey(key)
        df = sales if isinstance(sales, pd.DataFrame) else self.preprocessor.sales_frame(sales)

        dated = df.loc[df['timestamp'].notna()]
        if dated.empty:
            return {}

        timestamps = dated['timestamp'].dt
        if key is BucketKey.DAY:
            keys = timestamps.date
        elif key is BucketKey.DAY_OF_WEEK:
            keys = timestamps.dayofweek
        elif key is BucketKey.HOUR:
            keys = timestamps.hour
        else:
            keys = timestamps.month

        grouped = (
            dated.assign(bucket=keys.values)
            .groupby('bucket', sort=sort)
            .agg(total_cents=('total_cents', 'sum'), transactions=('sale_id', 'size'))
        )

        result: Dict[Any, BucketTotals] = {}
        for bucket, row in grouped.iterrows():
            bucket_key = bucket if key is BucketKey.DAY else int(bucket)
            result[bucket_key] = BucketTotals(
                total_revenue=from_cents(int(row['total_cents'])),
                transaction_count=int(row['transactions']),
            )

        logger.debug(f"Bucketed {len(dated)} sales into {len(result)} {key.value} buckets")
        return result
