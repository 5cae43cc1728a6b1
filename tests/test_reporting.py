"""Report writer tests."""

import json
from datetime import date
from decimal import Decimal

import numpy as np
import pandas as pd

from sales_analytics.common import Reporter
from sales_analytics.inventory import InventorySummarizer, RestockRecommender
from sales_analytics.product_performance import ProductPerformanceAnalyzer
from sales_analytics.reports import SalesSummarizer
from sales_analytics.sales_prediction import SalesForecaster
from sales_analytics.seasonality import SeasonalPatternAnalyzer
from tests.factories import AS_OF, TODAY, daily_sales, make_product


def _read(path):
    with open(path) as f:
        return json.load(f)['report']


class TestReports:

    def test_forecast_report(self, tmp_path):
        forecaster = SalesForecaster()
        points = forecaster.forecast(daily_sales([100] * 5), 3, today=TODAY)

        paths = Reporter(tmp_path, timestamped=False).generate_forecast_report(
            points, "forecast", model_info=forecaster.get_model_info()
        )

        report = _read(paths['json'])
        assert report['forecast_summary']['forecast_days'] == 3
        assert report['forecast_summary']['predicted_total'] == "300.00"
        assert report['points'][0] == {'date': "2024-06-26", 'total': "100.00", 'predicted': False}

        csv = pd.read_csv(paths['csv'])
        assert len(csv) == 8
        assert list(csv.columns) == ['date', 'total', 'predicted']

    def test_restock_report(self, tmp_path):
        items = RestockRecommender().recommend(
            [make_product("1", quantity=2)], daily_sales([1] * 14), 14, window_days=14, as_of=TODAY
        )

        paths = Reporter(tmp_path, timestamped=False).generate_restock_report(items, "restock")

        report = _read(paths['json'])
        assert report['flagged_products'] == 1
        assert report['by_urgency'] == {'high': 1}
        assert report['items'][0]['urgency'] == "high"

    def test_empty_restock_report_has_no_csv(self, tmp_path):
        paths = Reporter(tmp_path, timestamped=False).generate_restock_report([], "restock")
        assert 'csv' not in paths
        assert _read(paths['json'])['flagged_products'] == 0

    def test_performance_and_summary_reports(self, tmp_path, catalog):
        sales = daily_sales(["3.00"] * 3)
        report = ProductPerformanceAnalyzer().analyze(catalog, sales, 30, as_of=AS_OF)
        reporter = Reporter(tmp_path, timestamped=False)

        performance = _read(reporter.generate_performance_report(report, "performance")['json'])
        assert performance['summary']['total_revenue'] == "9.00"

        summary = _read(reporter.generate_summary_report(
            SalesSummarizer().summarize(sales), InventorySummarizer().summarize(catalog), "summary"
        )['json'])
        assert summary['sales']['by_payment_method']['Cash']['count'] == 3
        assert summary['inventory']['total_products'] == 3

    def test_seasonality_report(self, tmp_path):
        patterns = SeasonalPatternAnalyzer().analyze([])
        paths = Reporter(tmp_path, timestamped=False).generate_seasonality_report(patterns, "seasonal")

        report = _read(paths['json'])
        assert report['by_hour'] == {}
        assert report['insights']['peak_days'] == "Insufficient data"

    def test_executive_summary(self, tmp_path):
        points = SalesForecaster().forecast(daily_sales([100] * 5), 2, today=TODAY)
        path = Reporter(tmp_path, timestamped=False).generate_executive_summary({'forecast': points})

        assert _read(path)['highlights'] == {'predicted_revenue': "200.00"}


class TestSerialization:

    def test_scalar_conversions(self, tmp_path):
        reporter = Reporter(tmp_path)

        assert reporter._convert_to_serializable(Decimal("1.50")) == "1.50"
        assert reporter._convert_to_serializable(date(2024, 6, 1)) == "2024-06-01"
        assert reporter._convert_to_serializable(np.int64(3)) == 3
        assert reporter._convert_to_serializable(np.float64(0.5)) == 0.5
        assert reporter._convert_to_serializable({1: (Decimal("2"),)}) == {"1": ["2"]}
