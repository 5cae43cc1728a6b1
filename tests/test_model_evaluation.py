"""Forecast evaluation tests."""

from datetime import timedelta

import pytest

from sales_analytics.common.exceptions import InvalidArgument
from sales_analytics.sales_prediction import ForecastEvaluator, SalesForecaster
from tests.factories import TODAY, daily_sales


class TestCalculateMetrics:

    def test_basic_metrics(self):
        metrics = ForecastEvaluator().calculate_metrics([100, 200], [110, 190])

        assert metrics['mae'] == pytest.approx(10.0)
        assert metrics['rmse'] == pytest.approx(10.0)
        assert metrics['bias'] == pytest.approx(0.0)
        assert metrics['mape'] == pytest.approx(7.5)
        assert metrics['smape'] is not None

    def test_percentage_metrics_undefined_for_zero_actuals(self):
        metrics = ForecastEvaluator().calculate_metrics([0, 0], [0, 0])
        assert metrics['mape'] is None
        assert metrics['smape'] is None
        assert metrics['mae'] == 0.0

    def test_bias_sign(self):
        metrics = ForecastEvaluator().calculate_metrics([100, 100], [120, 120])
        assert metrics['bias'] == pytest.approx(20.0)

    def test_unequal_lengths(self):
        with pytest.raises(InvalidArgument):
            ForecastEvaluator().calculate_metrics([1, 2, 3], [1, 2])

    def test_empty_input(self):
        with pytest.raises(InvalidArgument):
            ForecastEvaluator().calculate_metrics([], [])


class TestBacktest:

    def test_flat_history_scores_perfectly(self):
        sales = daily_sales([100] * 20)
        result = ForecastEvaluator().backtest(SalesForecaster(), sales, holdout_days=7, today=TODAY)

        assert result['cutoff'] == TODAY - timedelta(days=7)
        assert result['holdout_days'] == 7
        assert result['actual'] == [100.0] * 7
        assert result['predicted'] == [100.0] * 7
        assert result['metrics']['mae'] == pytest.approx(0.0)

    def test_short_history_skipped(self):
        sales = daily_sales([100] * 5)
        assert ForecastEvaluator().backtest(SalesForecaster(), sales, holdout_days=7, today=TODAY) is None

    def test_invalid_holdout(self):
        with pytest.raises(InvalidArgument):
            ForecastEvaluator().backtest(SalesForecaster(), daily_sales([100] * 5), holdout_days=0, today=TODAY)
