"""
Forecast Model Evaluation Module
================================

Error metrics and hold-out backtesting for the daily revenue forecaster.

Usage:
    from sales_analytics.sales_prediction import ForecastEvaluator

    evaluator = ForecastEvaluator()
    metrics = evaluator.calculate_metrics(actual, predicted)
    result = evaluator.backtest(forecaster, sales, holdout_days=7, today=today)
"""

import numpy as np
from datetime import date
from typing import Any, Dict, Iterable, Optional
from sklearn.metrics import mean_squared_error, mean_absolute_error
from loguru import logger

from ..common.exceptions import InvalidArgument, require_positive_int
from ..common.models import coerce_sales
from .trend_forecaster import SalesForecaster


class ForecastEvaluator:
    """
    Evaluation toolkit for the revenue forecaster.

    Example:
        >>> evaluator = ForecastEvaluator()
        >>> metrics = evaluator.calculate_metrics([100, 120], [110, 115])
        >>> print(f"MAE: {metrics['mae']:.2f}")
    """

    def __init__(self):
        """Initialize ForecastEvaluator."""
        logger.info("ForecastEvaluator initialized")

    def calculate_metrics(
        self,
        actual: Iterable[float],
        predicted: Iterable[float]
    ) -> Dict[str, Optional[float]]:
        """
        Calculate forecast error metrics.

        Args:
            actual: Actual values
            predicted: Predicted values

        Returns:
            Dictionary with mae, rmse, mape, smape and bias. Percentage
            metrics are None when undefined (all actual values zero).

        Raises:
            InvalidArgument: If the inputs are empty or of unequal length
        """
        actual = np.array([float(v) for v in actual])
        predicted = np.array([float(v) for v in predicted])

        if len(actual) == 0 or len(actual) != len(predicted):
            raise InvalidArgument(
                f"actual and predicted must be non-empty and equal length "
                f"({len(actual)} vs {len(predicted)})"
            )

        metrics: Dict[str, Optional[float]] = {
            'mae': float(mean_absolute_error(actual, predicted)),
            'rmse': float(np.sqrt(mean_squared_error(actual, predicted))),
            'bias': float(np.mean(predicted - actual)),
        }

        # MAPE (avoiding division by zero)
        mask = actual != 0
        if mask.any():
            metrics['mape'] = float(np.mean(np.abs((actual[mask] - predicted[mask]) / actual[mask])) * 100)
        else:
            metrics['mape'] = None

        # sMAPE (symmetric)
        denominator = np.abs(actual) + np.abs(predicted)
        mask = denominator != 0
        if mask.any():
            metrics['smape'] = float(np.mean(2 * np.abs(actual[mask] - predicted[mask]) / denominator[mask]) * 100)
        else:
            metrics['smape'] = None

        return metrics

    def backtest(
        self,
        forecaster: SalesForecaster,
        sales: Iterable[Any],
        holdout_days: int,
        today: date
    ) -> Optional[Dict[str, Any]]:
        """
        Hold out the most recent days, forecast them, and score the result.

        Args:
            forecaster: Forecaster to evaluate
            sales: Sale records or mappings
            holdout_days: Number of trailing days to hide from the model
            today: Last day of the historical series

        Returns:
            Dictionary with cutoff, holdout_days, actual, predicted and
            metrics; None when the history is too short to hold out
            holdout_days and still fit a trend

        Example:
            >>> result = evaluator.backtest(forecaster, sales, 7, today=date(2024, 6, 30))
            >>> result['metrics']['mae']
        """
        require_positive_int('holdout_days', holdout_days)

        sales = coerce_sales(sales)
        daily = forecaster.history(sales, today)

        if len(daily) < holdout_days + 2:
            logger.info(
                f"Backtest skipped: {len(daily)} day(s) of history, "
                f"{holdout_days + 2} needed"
            )
            return None

        cutoff = daily['date'].iloc[-holdout_days - 1]
        localize = forecaster.preprocessor.localize
        training = [
            sale for sale in sales
            if sale.created_at is not None and localize(sale.created_at).date() <= cutoff
        ]

        points = forecaster.forecast(training, holdout_days, today=cutoff)
        predicted = [float(p.total) for p in points if p.predicted]
        actual = [cents / 100 for cents in daily['total_cents'].iloc[-holdout_days:]]

        metrics = self.calculate_metrics(actual, predicted)
        logger.info(f"Backtest over {holdout_days} day(s): MAE={metrics['mae']:.2f}, RMSE={metrics['rmse']:.2f}")

        return {
            'cutoff': cutoff,
            'holdout_days': holdout_days,
            'actual': actual,
            'predicted': predicted,
            'metrics': metrics,
        }
