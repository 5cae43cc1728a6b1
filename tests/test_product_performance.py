"""Product performance tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from sales_analytics.common.exceptions import InvalidArgument
from sales_analytics.product_performance import PerformanceSummary, ProductPerformanceAnalyzer
from tests.factories import AS_OF, make_product, make_sale


def _sales():
    return [
        make_sale(datetime(2024, 6, 20, 10), [("1", 3, "3.00"), ("2", 2, "2.00")], sale_id="s1"),
        # Product 1 was sold at an older price
        make_sale(datetime(2024, 6, 25, 15), [("1", 1, "2.50")], sale_id="s2"),
        # Outside a 30-day period
        make_sale(datetime(2024, 3, 1, 12), [("1", 50, "3.00")], sale_id="old"),
        make_sale(None, [("2", 7, "2.00")], sale_id="undated"),
    ]


def _analyze(catalog, sales, period_days=30, **kwargs):
    top_n = kwargs.pop('top_n', 5)
    return ProductPerformanceAnalyzer(top_n=top_n).analyze(
        catalog, sales, period_days, as_of=AS_OF, **kwargs
    )


class TestAggregation:

    def test_per_product_figures(self, catalog):
        report = _analyze(catalog, _sales())
        by_id = {p.product_id: p for p in report.products}

        first = by_id["1"]
        assert first.quantity_sold == 4
        assert first.revenue == Decimal("11.50")
        assert first.profit == Decimal("7.50")
        assert first.profit_margin == 65.22
        assert first.contribution_to_sales == 74.19
        assert first.current_stock == 20

        second = by_id["2"]
        assert second.revenue == Decimal("4.00")
        assert second.profit == Decimal("-1.00")
        assert second.profit_margin == -25.0
        assert second.contribution_to_sales == 25.81

    def test_summary_equals_sum_of_products(self, catalog):
        report = _analyze(catalog, _sales())

        assert report.summary == PerformanceSummary(
            total_quantity_sold=6,
            total_revenue=Decimal("15.50"),
            total_profit=Decimal("6.50"),
        )
        assert report.summary.total_revenue == sum(p.revenue for p in report.products)

    def test_revenue_uses_sale_price_not_catalog_price(self, catalog):
        sales = [make_sale(datetime(2024, 6, 28, 9), [("3", 2, "1.00")])]
        report = _analyze(catalog, sales)
        assert report.products[0].revenue == Decimal("2.00")

    def test_zero_revenue_margin(self, catalog):
        sales = [make_sale(datetime(2024, 6, 28, 9), [("3", 2, "0.00")])]
        report = _analyze(catalog, sales)

        assert report.products[0].profit_margin == 0.0
        assert report.products[0].contribution_to_sales == 0.0

    def test_no_sales_in_period(self, catalog):
        report = _analyze(catalog, [])

        assert report.top_selling == []
        assert report.summary.total_revenue == Decimal("0.00")


class TestRankings:

    def test_slices(self, catalog):
        report = _analyze(catalog, _sales())

        assert [p.product_id for p in report.top_selling] == ["1", "2"]
        assert [p.product_id for p in report.worst_selling] == ["2", "1"]
        assert [p.product_id for p in report.profitable] == ["1", "2"]
        assert [p.product_id for p in report.unprofitable] == ["2", "1"]

    def test_worst_selling_excludes_unsold_products(self, catalog):
        report = _analyze(catalog, _sales())
        assert "3" not in [p.product_id for p in report.worst_selling]
        assert all(p.quantity_sold > 0 for p in report.worst_selling)

    def test_ties_broken_by_id(self):
        catalog = [make_product(pid, cost="1.00") for pid in ("b", "c", "a")]
        sales = [
            make_sale(datetime(2024, 6, 28, 9), [("c", 1, "2.00"), ("a", 1, "2.00"), ("b", 1, "2.00")]),
        ]
        report = _analyze(catalog, sales)

        assert [p.product_id for p in report.top_selling] == ["a", "b", "c"]
        assert [p.product_id for p in report.worst_selling] == ["a", "b", "c"]
        assert [p.product_id for p in report.profitable] == ["a", "b", "c"]

    def test_slices_capped_at_top_n(self):
        catalog = [make_product(str(i)) for i in range(1, 8)]
        sales = [
            make_sale(datetime(2024, 6, 28, 9), [(str(i), i, "10.00") for i in range(1, 8)]),
        ]
        report = _analyze(catalog, sales, top_n=3)

        assert [p.product_id for p in report.top_selling] == ["7", "6", "5"]
        assert [p.product_id for p in report.worst_selling] == ["1", "2", "3"]
        assert len(report.products) == 7


class TestFilters:

    def test_category_filter(self, catalog):
        report = _analyze(catalog, _sales(), category_id="Beverages")

        assert [p.product_id for p in report.products] == ["1"]
        assert report.summary.total_revenue == Decimal("11.50")
        assert report.products[0].contribution_to_sales == 100.0

    def test_unknown_category_gives_empty_report(self, catalog):
        report = _analyze(catalog, _sales(), category_id="Toys")
        assert report.products == []

    def test_longer_period_includes_older_sales(self, catalog):
        report = _analyze(catalog, _sales(), period_days=365)
        assert report.summary.total_quantity_sold == 56

    def test_unknown_product_skipped(self, catalog):
        sales = _sales() + [make_sale(datetime(2024, 6, 29, 9), [("deleted", 4, "9.99")], sale_id="s3")]
        report = _analyze(catalog, sales)
        assert report.summary.total_revenue == Decimal("15.50")


class TestArguments:

    @pytest.mark.parametrize("period", [0, -30, "30"])
    def test_invalid_period(self, catalog, period):
        with pytest.raises(InvalidArgument):
            _analyze(catalog, _sales(), period_days=period)

    @pytest.mark.parametrize("category", ["", "   ", 7])
    def test_invalid_category(self, catalog, category):
        with pytest.raises(InvalidArgument):
            _analyze(catalog, _sales(), category_id=category)
