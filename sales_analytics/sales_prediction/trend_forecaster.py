"""
Trend Forecasting Module
========================

Short-horizon daily revenue forecast: a dense daily series is smoothed with
a trailing moving average, a linear trend is fitted over the most recent
smoothed points, and the trend is extrapolated from the last smoothed value.

Usage:
    from sales_analytics.sales_prediction import SalesForecaster

    forecaster = SalesForecaster(smoothing_window=7, trend_lookback=7)
    points = forecaster.forecast(sales, horizon_days=30, today=date.today())
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from scipy import stats
from loguru import logger
import warnings

from ..common.config import AnalyticsConfig
from ..common.exceptions import InvalidArgument, require_positive_int
from ..common.models import coerce_sales
from ..common.money import from_cents
from ..common.preprocessing import LedgerPreprocessor

warnings.filterwarnings('ignore')


@dataclass(frozen=True)
class ForecastPoint:
    date: date
    total: Decimal
    predicted: bool


class SalesForecaster:
    """
    Moving-average + linear-trend forecaster for daily revenue.

    All accumulation happens in integer cents; smoothed and projected
    values are rounded half-up back to cents at the boundary.

    Example:
        >>> forecaster = SalesForecaster()
        >>> points = forecaster.forecast(sales, horizon_days=7, today=date(2024, 3, 1))
        >>> upcoming = [p for p in points if p.predicted]
    """

    def __init__(
        self,
        smoothing_window: int = 7,
        trend_lookback: int = 7,
        preprocessor: Optional[LedgerPreprocessor] = None
    ):
        """
        Initialize SalesForecaster.

        Args:
            smoothing_window: Length of the trailing moving average in days
            trend_lookback: Number of most recent smoothed points the trend
                is fitted on (at least 2)
            preprocessor: Preprocessor carrying the timezone setting
        """
        self.smoothing_window = require_positive_int('smoothing_window', smoothing_window)
        self.trend_lookback = require_positive_int('trend_lookback', trend_lookback)
        if self.trend_lookback < 2:
            raise InvalidArgument(f"trend_lookback must be at least 2, got {trend_lookback}")
        self.preprocessor = preprocessor or LedgerPreprocessor()

        logger.info("SalesForecaster initialized")

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> 'SalesForecaster':
        return cls(
            smoothing_window=config.forecast.smoothing_window,
            trend_lookback=config.forecast.trend_lookback,
            preprocessor=LedgerPreprocessor(config.timezone),
        )

    def history(self, sales: Iterable[Any], today: date) -> pd.DataFrame:
        """
        Dense daily revenue (cents) from the first dated sale through today.

        Args:
            sales: Sale records or mappings
            today: Last day of the historical range

        Returns:
            DataFrame with columns date, total_cents
        """
        if isinstance(today, datetime):
            today = self.preprocessor.localize(today).date()
        sales_df = self.preprocessor.sales_frame(coerce_sales(sales))
        return self.preprocessor.prepare_daily_series(sales_df, end_date=today)

    def fit_trend(self, values: np.ndarray) -> Dict[str, float]:
        """
        Smooth a daily series and fit the linear trend.

        Args:
            values: Daily revenue in cents, oldest first (at least 2 values)

        Returns:
            Dictionary with last_smoothed, slope and r_squared
        """
        smoothed = (
            pd.Series(values, dtype='float64')
            .rolling(window=self.smoothing_window, min_periods=1)
            .mean()
            .to_numpy()
        )

        recent = smoothed[-self.trend_lookback:]
        index = np.arange(len(recent), dtype='float64')

        if np.allclose(recent, recent[0]):
            slope, r_squared = 0.0, 1.0
        else:
            regression = stats.linregress(index, recent)
            slope, r_squared = float(regression.slope), float(regression.rvalue ** 2)

        return {
            'last_smoothed': float(smoothed[-1]),
            'slope': slope,
            'r_squared': r_squared,
        }

    def forecast(
        self,
        sales: Iterable[Any],
        horizon_days: int,
        today: date
    ) -> List[ForecastPoint]:
        """
        Forecast daily revenue for the next horizon_days days.

        Args:
            sales: Sale records or mappings
            horizon_days: Number of days to project (must be positive)
            today: Reference day closing the historical series

        Returns:
            Historical points (predicted=False) followed by horizon_days
            projected points (predicted=True), in chronological order. When
            the history spans fewer than two days no projection is made.

        Raises:
            InvalidArgument: If horizon_days is not a positive integer

        Example:
            >>> points = forecaster.forecast(sales, 30, today=date(2024, 6, 30))
        """
        require_positive_int('horizon_days', horizon_days)

        daily = self.history(sales, today)
        points = [
            ForecastPoint(date=day, total=from_cents(int(cents)), predicted=False)
            for day, cents in zip(daily['date'], daily['total_cents'])
        ]

        if len(daily) < 2:
            logger.info(f"Insufficient history for a trend ({len(daily)} day(s)); returning history only")
            return points

        trend = self.fit_trend(daily['total_cents'].to_numpy())

        last_day = points[-1].date
        for days_ahead in range(1, horizon_days + 1):
            projected = max(0.0, trend['last_smoothed'] + trend['slope'] * days_ahead)
            points.append(ForecastPoint(
                date=last_day + timedelta(days=days_ahead),
                total=from_cents(projected),
                predicted=True,
            ))

        logger.info(
            f"Generated {horizon_days}-day forecast from {len(daily)} days of history "
            f"(slope={trend['slope'] / 100:.2f}/day, R²={trend['r_squared']:.2f})"
        )
        return points

    @staticmethod
    def predicted_total(points: Iterable[ForecastPoint]) -> Decimal:
        """Sum of the projected revenue in a forecast."""
        return sum((p.total for p in points if p.predicted), Decimal('0.00'))

    def get_model_info(self) -> Dict[str, Any]:
        """Get model information for reporting."""
        return {
            'type': 'MovingAverageTrend',
            'smoothing_window': self.smoothing_window,
            'trend_lookback': self.trend_lookback,
        }
