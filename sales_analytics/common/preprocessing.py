"""
Ledger Preprocessing Module
===========================

Turns validated sales and catalog records into tidy DataFrames for the
analyzers: one row per sale, one row per sale line, one row per product,
trailing-window filters and the dense daily revenue series used for trend
extrapolation.

Money columns hold integer cents (``int64``); timestamps are local naive
wall-clock times (``NaT`` when a sale has none).

Usage:
    from sales_analytics.common import LedgerPreprocessor

    preprocessor = LedgerPreprocessor(timezone="Europe/Madrid")
    sales_df = preprocessor.sales_frame(sales)
    daily = preprocessor.prepare_daily_series(sales_df, end_date=today)
"""

from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Union
from zoneinfo import ZoneInfo

import pandas as pd
from loguru import logger
import warnings

from .exceptions import InvalidArgument, require_positive_int
from .models import Product, Sale

warnings.filterwarnings('ignore')

SALE_COLUMNS = ['sale_id', 'timestamp', 'total_cents', 'units', 'payment_method']
LINE_COLUMNS = ['sale_id', 'timestamp', 'product_id', 'quantity', 'line_cents']
PRODUCT_COLUMNS = ['product_id', 'name', 'sku', 'category', 'cost', 'quantity']

ReferenceTime = Union[datetime, date]


class LedgerPreprocessor:
    """
    Shapes ledger and catalog records into DataFrames.

    Attributes:
        timezone: IANA zone used to localize timezone-aware timestamps.
            Naive timestamps are taken as already local.

    Example:
        >>> preprocessor = LedgerPreprocessor()
        >>> lines = preprocessor.line_items_frame(sales)
        >>> recent = preprocessor.filter_window(lines, as_of, days=30)
    """

    def __init__(self, timezone: Optional[str] = None):
        """
        Initialize LedgerPreprocessor.

        Args:
            timezone: Optional IANA timezone name (e.g. "America/Mexico_City")
        """
        if timezone is not None:
            try:
                self._zone = ZoneInfo(timezone)
            except (KeyError, ValueError) as exc:
                raise InvalidArgument(f"Unknown timezone: {timezone}") from exc
        else:
            self._zone = None
        self.timezone = timezone
        logger.debug("LedgerPreprocessor initialized")

    def localize(self, timestamp: Optional[datetime]) -> Optional[datetime]:
        """Return the local naive wall-clock time for a timestamp."""
        if timestamp is None:
            return None
        if timestamp.tzinfo is not None:
            if self._zone is not None:
                timestamp = timestamp.astimezone(self._zone)
            timestamp = timestamp.replace(tzinfo=None)
        return timestamp

    def reference_time(self, as_of: ReferenceTime) -> datetime:
        """
        Normalize a caller-supplied reference time.

        A bare date stands for the end of that day, so the whole day is
        inside any window ending there.
        """
        if isinstance(as_of, datetime):
            return self.localize(as_of)
        if isinstance(as_of, date):
            return datetime.combine(as_of, time.max)
        raise InvalidArgument(f"Reference time must be a date or datetime, got {as_of!r}")

    def sales_frame(self, sales: Iterable[Sale]) -> pd.DataFrame:
        """
        Build one row per sale.

        Args:
            sales: Validated Sale records

        Returns:
            DataFrame with columns sale_id, timestamp, total_cents, units,
            payment_method in input order
        """
        rows = [
            (
                sale.id,
                self.localize(sale.created_at),
                sale.total_cents,
                sale.units,
                sale.payment_method,
            )
            for sale in sales
        ]
        df = pd.DataFrame(rows, columns=SALE_COLUMNS)
        df['timestamp'] = pd.to_datetime(df['timestamp'])
        df['total_cents'] = df['total_cents'].astype('int64')
        df['units'] = df['units'].astype('int64')
        return df

    def line_items_frame(self, sales: Iterable[Sale]) -> pd.DataFrame:
        """
        Build one row per sale line.

        The line amount is the price recorded on the sale, never the
        product's current catalog price.

        Args:
            sales: Validated Sale records

        Returns:
            DataFrame with columns sale_id, timestamp, product_id, quantity,
            line_cents
        """
        rows: List[tuple] = []
        for sale in sales:
            timestamp = self.localize(sale.created_at)
            for item in sale.items:
                rows.append((sale.id, timestamp, item.product_id, item.quantity, item.subtotal_cents))

        df = pd.DataFrame(rows, columns=LINE_COLUMNS)
        df['timestamp'] = pd.to_datetime(df['timestamp'])
        df['quantity'] = df['quantity'].astype('int64')
        df['line_cents'] = df['line_cents'].astype('int64')
        return df

    def products_frame(self, products: Iterable[Product]) -> pd.DataFrame:
        """
        Build one row per catalog product, indexed by product_id.

        Duplicate ids keep the first occurrence.
        """
        rows = [
            (p.id, p.name, p.sku, p.category, p.cost, p.quantity)
            for p in products
        ]
        df = pd.DataFrame(rows, columns=PRODUCT_COLUMNS)
        n_duplicates = df['product_id'].duplicated().sum()
        if n_duplicates > 0:
            logger.warning(f"Catalog contains {n_duplicates} duplicate product id(s); keeping first")
            df = df.drop_duplicates(subset='product_id', keep='first')
        df['quantity'] = df['quantity'].astype('int64')
        return df.set_index('product_id')

    def filter_window(
        self,
        df: pd.DataFrame,
        as_of: ReferenceTime,
        days: int,
        column: str = 'timestamp'
    ) -> pd.DataFrame:
        """
        Keep rows whose timestamp falls in the trailing window ending at as_of.

        Args:
            df: Frame with a datetime column
            as_of: Reference time closing the window
            days: Window length in days
            column: Name of the timestamp column

        Returns:
            Filtered copy. Rows without a timestamp are dropped.

        Example:
            >>> recent = preprocessor.filter_window(lines, as_of, days=90)
        """
        require_positive_int('days', days)
        end = self.reference_time(as_of)
        start = end - timedelta(days=days)

        mask = df[column].notna() & (df[column] >= start) & (df[column] <= end)
        filtered = df.loc[mask].copy()

        logger.debug(f"Window {start:%Y-%m-%d %H:%M} - {end:%Y-%m-%d %H:%M}: {len(filtered)}/{len(df)} rows")
        return filtered

    def prepare_daily_series(
        self,
        df: pd.DataFrame,
        value_column: str = 'total_cents',
        end_date: Optional[date] = None
    ) -> pd.DataFrame:
        """
        Prepare a dense daily series for trend analysis.

        Days without sales are filled with zero so the series has a regular
        one-day step from the first dated sale through ``end_date`` (or the
        last dated sale, whichever is later).

        Args:
            df: Sales frame with a timestamp column
            value_column: Integer column to sum per day
            end_date: Last day the series must reach

        Returns:
            DataFrame with columns date, <value_column>; empty when no sale
            carries a timestamp

        Example:
            >>> daily = preprocessor.prepare_daily_series(sales_df, end_date=today)
        """
        dated = df.loc[df['timestamp'].notna(), ['timestamp', value_column]]

        if dated.empty:
            logger.debug("No dated sales; daily series is empty")
            return pd.DataFrame({
                'date': pd.Series([], dtype='object'),
                value_column: pd.Series([], dtype='int64'),
            })

        daily = (
            dated.set_index('timestamp')[value_column]
            .resample('D')
            .sum()
        )

        first_day = daily.index.min()
        last_day = daily.index.max()
        if end_date is not None:
            last_day = max(last_day, pd.Timestamp(end_date))

        full_range = pd.date_range(first_day, last_day, freq='D')
        daily = daily.reindex(full_range, fill_value=0).astype('int64')

        result = pd.DataFrame({
            'date': [ts.date() for ts in daily.index],
            value_column: daily.values,
        })

        logger.debug(f"Prepared daily series with {len(result)} observations")
        return result
