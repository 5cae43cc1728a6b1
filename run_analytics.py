#!/usr/bin/env python3
"""
Sales Analytics Suite - Main Runner
===================================

Command-line interface for running sales analytics pipelines.

Usage:
    python run_analytics.py --task forecast --sales data/sample_sales.json
    python run_analytics.py --task restock --sales data/sample_sales.json --products data/sample_products.json
    python run_analytics.py --task performance --category Beverages
    python run_analytics.py --task all --config config/settings.yaml

Examples:
    # Forecast the next 14 days of revenue as of a fixed date
    python run_analytics.py --task forecast --horizon 14 --as-of 2024-06-30

    # Restock list for products running out within 10 days
    python run_analytics.py --task restock --threshold 10

    # Seasonal patterns
    python run_analytics.py --task seasonal
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Union

import pandas as pd
from loguru import logger

from sales_analytics.common import AnalyticsError, DataLoader, Reporter, load_config
from sales_analytics.inventory import InventorySummarizer, RestockRecommender
from sales_analytics.product_performance import ProductPerformanceAnalyzer
from sales_analytics.reports import SalesSummarizer
from sales_analytics.sales_prediction import ForecastEvaluator, SalesForecaster
from sales_analytics.seasonality import SeasonalPatternAnalyzer

DEFAULT_SALES = 'data/sample_sales.json'
DEFAULT_PRODUCTS = 'data/sample_products.json'


def setup_logging(log_level: str = "INFO"):
    """Configure logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>"
    )


def parse_as_of(value: str) -> Union[datetime, date]:
    """Parse --as-of; a bare date means the end of that day."""
    try:
        parsed = pd.Timestamp(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date: {value}") from exc
    if len(value) <= 10:
        return parsed.date()
    return parsed.to_pydatetime()


def run_forecast(args, config, sales):
    """Run sales forecasting pipeline."""
    logger.info("Starting Sales Forecasting Pipeline")

    forecaster = SalesForecaster.from_config(config)
    horizon = args.horizon or config.forecast.horizon_days
    today = args.as_of.date() if isinstance(args.as_of, datetime) else args.as_of

    points = forecaster.forecast(sales, horizon, today=today)

    # Evaluate on the most recent week
    evaluator = ForecastEvaluator()
    backtest = evaluator.backtest(forecaster, sales, holdout_days=7, today=today)

    logger.info(f"Predicted revenue over {horizon} days: {SalesForecaster.predicted_total(points)}")

    reporter = Reporter(output_dir=args.output)
    reporter.generate_forecast_report(
        points, 'sales_forecast',
        model_info=forecaster.get_model_info(),
        backtest=backtest
    )

    logger.info(f"Forecast complete. Results saved to {args.output}")
    return points


def run_restock(args, config, sales, products):
    """Run restock recommendation pipeline."""
    logger.info("Starting Restock Pipeline")

    recommender = RestockRecommender.from_config(config)
    items = recommender.recommend(
        products, sales,
        args.threshold or config.restock.threshold_days,
        window_days=config.restock.window_days,
        as_of=args.as_of
    )

    for item in items:
        logger.info(
            f"[{item.urgency.value.upper()}] {item.name}: {item.quantity} left, "
            f"{item.days_until_out_of_stock:.1f} days, reorder {item.recommended_quantity}"
        )

    reporter = Reporter(output_dir=args.output)
    reporter.generate_restock_report(items, 'restock_recommendations')

    logger.info(f"Restock complete. {len(items)} products flagged")
    return items


def run_performance(args, config, sales, products):
    """Run product performance pipeline."""
    logger.info("Starting Product Performance Pipeline")

    analyzer = ProductPerformanceAnalyzer.from_config(config)
    report = analyzer.analyze(
        products, sales,
        args.period or config.performance.period_days,
        as_of=args.as_of,
        category_id=args.category
    )

    summary = report.summary
    logger.info(
        f"Period totals: {summary.total_quantity_sold} units, "
        f"revenue {summary.total_revenue}, profit {summary.total_profit}"
    )

    reporter = Reporter(output_dir=args.output)
    reporter.generate_performance_report(report, 'product_performance')

    logger.info(f"Performance analysis complete. Results saved to {args.output}")
    return report


def run_seasonal(args, config, sales):
    """Run seasonal pattern pipeline."""
    logger.info("Starting Seasonality Pipeline")

    analyzer = SeasonalPatternAnalyzer.from_config(config)
    patterns = analyzer.analyze(sales)

    for field, label in patterns.recommendations.labels().items():
        logger.info(f"{field}: {label}")

    reporter = Reporter(output_dir=args.output)
    reporter.generate_seasonality_report(patterns, 'seasonal_patterns')

    logger.info(f"Seasonality analysis complete. Results saved to {args.output}")
    return patterns


def run_summary(args, config, sales, products):
    """Run sales and inventory summary."""
    logger.info("Starting Summary Pipeline")

    sales_summary = SalesSummarizer.from_config(config).summarize(
        sales, period=args.report_period, as_of=args.as_of
    )
    inventory_summary = InventorySummarizer.from_config(config).summarize(products)

    logger.info(
        f"{inventory_summary.total_products} products, "
        f"{inventory_summary.low_stock_products} low on stock, "
        f"inventory value {inventory_summary.inventory_value}"
    )

    reporter = Reporter(output_dir=args.output)
    reporter.generate_summary_report(sales_summary, inventory_summary, 'sales_summary')
    return {'sales': sales_summary, 'inventory': inventory_summary}


def run_all(args, config, sales, products):
    """Run all analytics pipelines."""
    logger.info("Running Complete Analytics Suite")

    all_results = {
        'forecast': run_forecast(args, config, sales),
        'restock': run_restock(args, config, sales, products),
        'performance': run_performance(args, config, sales, products),
        'seasonal': run_seasonal(args, config, sales),
        'summary': run_summary(args, config, sales, products),
    }

    # Generate executive summary
    reporter = Reporter(output_dir=args.output)
    reporter.generate_executive_summary(all_results)

    logger.info("Complete analytics suite finished")
    return all_results


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Sales Analytics Suite',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--task',
        choices=['forecast', 'restock', 'performance', 'seasonal', 'summary', 'all'],
        required=True,
        help='Analytics task to run'
    )

    parser.add_argument(
        '--sales',
        type=str,
        default=DEFAULT_SALES,
        help='Path to sales ledger (JSON or CSV)'
    )

    parser.add_argument(
        '--products',
        type=str,
        default=DEFAULT_PRODUCTS,
        help='Path to product catalog (JSON or CSV)'
    )

    parser.add_argument(
        '--as-of',
        type=parse_as_of,
        default=None,
        help='Reference time (YYYY-MM-DD or ISO timestamp); defaults to now'
    )

    parser.add_argument(
        '--config',
        type=str,
        default='config/settings.yaml',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--output',
        type=str,
        default='outputs',
        help='Output directory for results'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (overrides the config file)'
    )

    # Forecast options
    parser.add_argument(
        '--horizon',
        type=int,
        default=None,
        help='Forecast horizon in days'
    )

    # Restock options
    parser.add_argument(
        '--threshold',
        type=int,
        default=None,
        help='Restock threshold in days'
    )

    # Performance options
    parser.add_argument(
        '--period',
        type=int,
        default=None,
        help='Performance period in days'
    )

    parser.add_argument(
        '--category',
        type=str,
        default=None,
        help='Restrict performance analysis to one category'
    )

    # Summary options
    parser.add_argument(
        '--report-period',
        choices=['day', 'week', 'month', 'year'],
        default=None,
        help='Restrict the sales summary to a reporting period'
    )

    args = parser.parse_args()

    # Setup
    setup_logging(args.log_level or "INFO")
    try:
        config = load_config(args.config)
    except AnalyticsError as exc:
        parser.error(str(exc))
    if args.log_level is None:
        setup_logging(config.logging.level)

    if args.as_of is None:
        args.as_of = datetime.now()

    # Create output directory
    Path(args.output).mkdir(parents=True, exist_ok=True)

    loader = DataLoader()
    needs_products = args.task in ('restock', 'performance', 'summary', 'all')

    try:
        sales = loader.load_sales(args.sales)
        products = loader.load_products(args.products) if needs_products else []

        # Run task
        if args.task == 'forecast':
            run_forecast(args, config, sales)

        elif args.task == 'restock':
            run_restock(args, config, sales, products)

        elif args.task == 'performance':
            run_performance(args, config, sales, products)

        elif args.task == 'seasonal':
            run_seasonal(args, config, sales)

        elif args.task == 'summary':
            run_summary(args, config, sales, products)

        elif args.task == 'all':
            run_all(args, config, sales, products)

    except AnalyticsError as exc:
        logger.error(str(exc))
        sys.exit(1)


if __name__ == '__main__':
    main()
