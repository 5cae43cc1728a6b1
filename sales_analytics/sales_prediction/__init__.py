"""
Sales Prediction Module
=======================

Short-horizon daily revenue forecasting with moving-average smoothing and
linear trend extrapolation.
"""

from .trend_forecaster import ForecastPoint, SalesForecaster
from .model_evaluation import ForecastEvaluator

__all__ = ["ForecastPoint", "SalesForecaster", "ForecastEvaluator"]
