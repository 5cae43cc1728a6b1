"""
Configuration Module
====================

Loads analyzer settings from YAML into a validated configuration object.
Every smoothing window, threshold and cap used by the analyzers is a
documented setting here rather than a constant buried in an algorithm.

Usage:
    from sales_analytics.common.config import load_config

    config = load_config("config/settings.yaml")
    forecaster = SalesForecaster.from_config(config)
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from .exceptions import InvalidArgument


class ForecastSettings(BaseModel):
    smoothing_window: int = Field(default=7, gt=0)
    trend_lookback: int = Field(default=7, ge=2)
    horizon_days: int = Field(default=30, gt=0)


class RestockSettings(BaseModel):
    threshold_days: int = Field(default=14, gt=0)
    window_days: int = Field(default=90, gt=0)


class PerformanceSettings(BaseModel):
    period_days: int = Field(default=90, gt=0)
    top_n: int = Field(default=5, gt=0)


class SeasonalitySettings(BaseModel):
    peak_quantile: float = Field(default=0.75, gt=0, lt=1)
    min_buckets_for_quartile: int = Field(default=8, gt=0)
    fallback_top: int = Field(default=2, gt=0)
    high_season_factor: float = Field(default=1.2, gt=0)


class InventorySettings(BaseModel):
    low_stock_threshold: int = Field(default=5, ge=0)


class LoggingSettings(BaseModel):
    level: str = "INFO"


class AnalyticsConfig(BaseModel):
    """Top-level configuration for the analytics suite."""

    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
    restock: RestockSettings = Field(default_factory=RestockSettings)
    performance: PerformanceSettings = Field(default_factory=PerformanceSettings)
    seasonality: SeasonalitySettings = Field(default_factory=SeasonalitySettings)
    inventory: InventorySettings = Field(default_factory=InventorySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    timezone: Optional[str] = None


def load_config(config_path: Optional[Union[str, Path]] = None) -> AnalyticsConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file. A missing path or file
            yields the default configuration.

    Returns:
        Validated AnalyticsConfig

    Raises:
        InvalidArgument: If the file holds invalid settings
    """
    if not config_path or not Path(config_path).exists():
        if config_path:
            logger.warning(f"Config file not found: {config_path}, using defaults")
        return AnalyticsConfig()

    with open(config_path, 'r') as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise InvalidArgument(f"Config file {config_path} must contain a mapping")

    try:
        config = AnalyticsConfig.model_validate(raw)
    except ValidationError as exc:
        raise InvalidArgument(f"Invalid configuration in {config_path}: {exc}") from exc

    logger.info(f"Loaded configuration from {config_path}")
    return config
