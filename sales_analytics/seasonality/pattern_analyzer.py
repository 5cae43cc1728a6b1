"""
Seasonal Pattern Module
=======================

Recurring demand patterns by day of week, hour of day and month of year,
with peak detection and a staffing suggestion derived from the peaks.

Usage:
    from sales_analytics.seasonality import SeasonalPatternAnalyzer

    analyzer = SeasonalPatternAnalyzer()
    patterns = analyzer.analyze(sales)
    patterns.recommendations.peak_days
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional

import numpy as np
from loguru import logger

from ..common.config import AnalyticsConfig
from ..common.exceptions import InvalidArgument, require_positive_int
from ..common.models import coerce_sales
from ..common.preprocessing import LedgerPreprocessor
from ..common.time_bucketing import (
    BucketKey,
    BucketTotals,
    TimeBucketer,
    day_name,
    hour_label,
    month_name,
)

INSUFFICIENT_DATA = "Insufficient data"


@dataclass(frozen=True)
class SeasonalRecommendations:
    peak_days: List[str]
    peak_hours: List[str]
    high_season_months: List[str]
    staffing_recommendation: str

    def labels(self) -> Dict[str, str]:
        """Display text for every field, with the sentinel for empty ones."""
        return {
            'peak_days': ", ".join(self.peak_days) or INSUFFICIENT_DATA,
            'peak_hours': ", ".join(self.peak_hours) or INSUFFICIENT_DATA,
            'high_season_months': ", ".join(self.high_season_months) or INSUFFICIENT_DATA,
            'staffing_recommendation': self.staffing_recommendation,
        }


@dataclass(frozen=True)
class SeasonalPatterns:
    by_day_of_week: Dict[str, BucketTotals]
    by_hour: Dict[str, BucketTotals]
    by_month: Dict[str, BucketTotals]
    recommendations: SeasonalRecommendations


class SeasonalPatternAnalyzer:
    """
    Weekday, hour and month demand patterns over the full sales history.

    Peaks are the buckets at or above the ``peak_quantile`` revenue
    quantile when at least ``min_buckets_for_quartile`` buckets have sales,
    otherwise the ``fallback_top`` highest buckets. High-season months are
    months whose revenue exceeds ``high_season_factor`` times the mean of
    the represented months.

    Example:
        >>> patterns = SeasonalPatternAnalyzer().analyze(sales)
        >>> patterns.recommendations.labels()['peak_hours']
        '18:00, 19:00'
    """

    def __init__(
        self,
        peak_quantile: float = 0.75,
        min_buckets_for_quartile: int = 8,
        fallback_top: int = 2,
        high_season_factor: float = 1.2,
        preprocessor: Optional[LedgerPreprocessor] = None
    ):
        """
        Initialize SeasonalPatternAnalyzer.

        Args:
            peak_quantile: Revenue quantile a bucket must reach to be a peak
            min_buckets_for_quartile: Minimum populated buckets for the
                quantile rule; below it the top ``fallback_top`` are used
            fallback_top: Number of peaks reported for sparse bucket sets
            high_season_factor: Multiple of mean monthly revenue a month
                must exceed to count as high season
            preprocessor: Preprocessor carrying the timezone setting
        """
        if not 0 < peak_quantile < 1:
            raise InvalidArgument(f"peak_quantile must be between 0 and 1, got {peak_quantile}")
        if high_season_factor <= 0:
            raise InvalidArgument(f"high_season_factor must be positive, got {high_season_factor}")

        self.peak_quantile = peak_quantile
        self.min_buckets_for_quartile = require_positive_int('min_buckets_for_quartile', min_buckets_for_quartile)
        self.fallback_top = require_positive_int('fallback_top', fallback_top)
        self.high_season_factor = high_season_factor
        self.bucketer = TimeBucketer(preprocessor or LedgerPreprocessor())

        logger.info("SeasonalPatternAnalyzer initialized")

    @classmethod
    def from_config(cls, config: AnalyticsConfig) -> 'SeasonalPatternAnalyzer':
        settings = config.seasonality
        return cls(
            peak_quantile=settings.peak_quantile,
            min_buckets_for_quartile=settings.min_buckets_for_quartile,
            fallback_top=settings.fallback_top,
            high_season_factor=settings.high_season_factor,
            preprocessor=LedgerPreprocessor(config.timezone),
        )

    def analyze(self, sales: Iterable[Any]) -> SeasonalPatterns:
        """
        Detect seasonal patterns.

        Args:
            sales: Sale records or mappings (full history; no window is
                applied)

        Returns:
            SeasonalPatterns. With no dated sales every map and peak list is
            empty and the staffing recommendation is the sentinel.
        """
        sales_df = self.bucketer.preprocessor.sales_frame(coerce_sales(sales))

        by_day_of_week = self._labelled(sales_df, BucketKey.DAY_OF_WEEK, day_name)
        by_hour = self._labelled(sales_df, BucketKey.HOUR, hour_label)
        by_month = self._labelled(sales_df, BucketKey.MONTH, month_name)

        peak_days = self._peak_labels(by_day_of_week)
        peak_hours = self._peak_labels(by_hour)
        high_season_months = self._high_season(by_month)

        if peak_days and peak_hours:
            staffing = (
                f"Schedule additional staff on {', '.join(peak_days)}, "
                f"especially around {', '.join(peak_hours)}."
            )
        else:
            staffing = INSUFFICIENT_DATA

        patterns = SeasonalPatterns(
            by_day_of_week=by_day_of_week,
            by_hour=by_hour,
            by_month=by_month,
            recommendations=SeasonalRecommendations(
                peak_days=peak_days,
                peak_hours=peak_hours,
                high_season_months=high_season_months,
                staffing_recommendation=staffing,
            ),
        )

        logger.info(
            f"Seasonal analysis: peak days {peak_days or '-'}, peak hours {peak_hours or '-'}, "
            f"high season {high_season_months or '-'}"
        )
        return patterns

    def _labelled(
        self,
        sales_df,
        key: BucketKey,
        label: Callable[[int], str]
    ) -> Dict[str, BucketTotals]:
        buckets = self.bucketer.bucket(sales_df, key, sort=True)
        return {label(bucket): totals for bucket, totals in buckets.items()}

    def _peak_labels(self, buckets: Dict[str, BucketTotals]) -> List[str]:
        active = {label: t for label, t in buckets.items() if t.total_revenue > 0}
        if not active:
            return []

        # sorted() is stable, so equal revenue keeps calendar order
        ranked = sorted(active.items(), key=lambda item: -item[1].total_revenue)

        if len(active) >= self.min_buckets_for_quartile:
            revenue = np.array([float(t.total_revenue) for t in active.values()])
            cutoff = float(np.quantile(revenue, self.peak_quantile))
            return [label for label, t in ranked if float(t.total_revenue) >= cutoff]

        return [label for label, _ in ranked[:self.fallback_top]]

    def _high_season(self, by_month: Dict[str, BucketTotals]) -> List[str]:
        if not by_month:
            return []

        total = sum((t.total_revenue for t in by_month.values()), Decimal('0'))
        mean = total / len(by_month)
        bar = mean * Decimal(str(self.high_season_factor))

        return [month for month, t in by_month.items() if t.total_revenue > bar]
