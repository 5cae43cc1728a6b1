"""Seasonal pattern tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from sales_analytics.common.exceptions import InvalidArgument
from sales_analytics.seasonality import INSUFFICIENT_DATA, SeasonalPatternAnalyzer
from tests.factories import make_sale


def _week_sales():
    return [
        make_sale(datetime(2024, 6, 3, 10, 15), [("1", 1, "100.00")], sale_id="mon-1"),
        make_sale(datetime(2024, 6, 10, 10, 40), [("1", 1, "100.00")], sale_id="mon-2"),
        make_sale(datetime(2024, 6, 8, 18, 5), [("1", 1, "150.00")], sale_id="sat"),
        make_sale(datetime(2024, 6, 5, 14, 0), [("1", 1, "50.00")], sale_id="wed"),
        make_sale(None, [("1", 1, "999.00")], sale_id="undated"),
    ]


class TestEmptyInput:

    def test_empty_sales(self):
        patterns = SeasonalPatternAnalyzer().analyze([])

        assert patterns.by_day_of_week == {}
        assert patterns.by_hour == {}
        assert patterns.by_month == {}
        assert patterns.recommendations.peak_days == []
        assert patterns.recommendations.staffing_recommendation == INSUFFICIENT_DATA
        assert set(patterns.recommendations.labels().values()) == {INSUFFICIENT_DATA}

    def test_only_undated_sales(self):
        patterns = SeasonalPatternAnalyzer().analyze([make_sale(None, [("1", 1, "5.00")])])
        assert patterns.by_hour == {}
        assert patterns.recommendations.staffing_recommendation == INSUFFICIENT_DATA


class TestBuckets:

    def test_labelled_in_calendar_order(self):
        patterns = SeasonalPatternAnalyzer().analyze(_week_sales())

        assert list(patterns.by_day_of_week) == ["Monday", "Wednesday", "Saturday"]
        assert list(patterns.by_hour) == ["10:00", "14:00", "18:00"]
        assert list(patterns.by_month) == ["June"]

    def test_bucket_totals(self):
        patterns = SeasonalPatternAnalyzer().analyze(_week_sales())

        monday = patterns.by_day_of_week["Monday"]
        assert monday.total_revenue == Decimal("200.00")
        assert monday.transaction_count == 2
        assert patterns.by_month["June"].total_revenue == Decimal("400.00")


class TestRecommendations:

    def test_sparse_buckets_use_top_two(self):
        recommendations = SeasonalPatternAnalyzer().analyze(_week_sales()).recommendations

        assert recommendations.peak_days == ["Monday", "Saturday"]
        assert recommendations.peak_hours == ["10:00", "18:00"]
        assert recommendations.staffing_recommendation == (
            "Schedule additional staff on Monday, Saturday, especially around 10:00, 18:00."
        )

    def test_upper_quartile_with_enough_buckets(self):
        # Hours 09:00-16:00 earning 10, 20, ... 80
        sales = [
            make_sale(datetime(2024, 6, 3, hour), [("1", 1, (hour - 8) * 10)], sale_id=f"h{hour}")
            for hour in range(9, 17)
        ]
        recommendations = SeasonalPatternAnalyzer().analyze(sales).recommendations

        assert recommendations.peak_hours == ["16:00", "15:00"]

    def test_zero_revenue_buckets_never_peak(self):
        sales = _week_sales() + [make_sale(datetime(2024, 6, 4, 7), [("1", 1, "0.00")], sale_id="free")]
        patterns = SeasonalPatternAnalyzer(fallback_top=5).analyze(sales)

        assert "Tuesday" in patterns.by_day_of_week
        assert "Tuesday" not in patterns.recommendations.peak_days
        assert "07:00" not in patterns.recommendations.peak_hours

    def test_high_season_months(self):
        sales = [
            make_sale(datetime(2024, 1, 15, 12), [("1", 1, "100.00")], sale_id="jan"),
            make_sale(datetime(2024, 2, 15, 12), [("1", 1, "100.00")], sale_id="feb"),
            make_sale(datetime(2024, 3, 15, 12), [("1", 1, "400.00")], sale_id="mar"),
        ]
        recommendations = SeasonalPatternAnalyzer().analyze(sales).recommendations

        assert recommendations.high_season_months == ["March"]
        assert recommendations.labels()['high_season_months'] == "March"

    def test_single_month_is_not_high_season(self):
        recommendations = SeasonalPatternAnalyzer().analyze(_week_sales()).recommendations

        assert recommendations.high_season_months == []
        assert recommendations.labels()['high_season_months'] == INSUFFICIENT_DATA


class TestArguments:

    def test_invalid_quantile(self):
        with pytest.raises(InvalidArgument):
            SeasonalPatternAnalyzer(peak_quantile=1.5)

    def test_invalid_factor(self):
        with pytest.raises(InvalidArgument):
            SeasonalPatternAnalyzer(high_season_factor=0)
