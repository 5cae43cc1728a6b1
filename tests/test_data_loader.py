"""Catalog and ledger loading tests."""

import json
from datetime import datetime
from decimal import Decimal

import pytest

from sales_analytics.common import DataLoader
from sales_analytics.common.exceptions import DataLoadError


class TestJson:

    def test_products_list(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([
            {"id": 1, "name": "Tea", "sku": "T-1", "category": "Beverages", "price": 2.5, "cost": 1.2, "quantity": 8},
            {"id": 2, "name": "Soap", "price": -1},
        ]))

        products = DataLoader().load_products(path)

        assert len(products) == 1
        assert products[0].id == "1"
        assert products[0].price == Decimal("2.5")

    def test_sales_wrapped_in_object(self, tmp_path):
        path = tmp_path / "sales.json"
        path.write_text(json.dumps({"sales": [
            {
                "id": "S1",
                "createdAt": "2024-06-01T10:00:00",
                "items": [{"productId": "1", "quantity": 2, "price": 2.5}],
                "paymentMethod": "Card",
            },
        ]}))

        sales = DataLoader().load_sales(path)

        assert sales[0].created_at == datetime(2024, 6, 1, 10)
        assert sales[0].total == Decimal("5.0")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "sales.json"
        path.write_text("{not json")
        with pytest.raises(DataLoadError):
            DataLoader().load_sales(path)

    def test_json_without_list(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"items": []}))
        with pytest.raises(DataLoadError):
            DataLoader().load_products(path)


class TestCsv:

    def test_sale_lines_regrouped(self, tmp_path):
        path = tmp_path / "sales.csv"
        path.write_text(
            "sale_id,created_at,payment_method,product_id,product_name,quantity,price\n"
            "S1,2024-06-01 10:00:00,Card,1,Tea,2,2.50\n"
            "S2,,,2,Soap,1,1.00\n"
            "S1,2024-06-01 10:00:00,Card,2,Soap,3,1.00\n"
        )

        sales = DataLoader().load_sales(path)

        assert [s.id for s in sales] == ["S1", "S2"]
        assert [i.product_id for i in sales[0].items] == ["1", "2"]
        assert sales[0].total == Decimal("8.00")
        assert sales[1].created_at is None
        assert sales[1].payment_method == "Cash"

    def test_products_csv(self, tmp_path):
        path = tmp_path / "products.csv"
        path.write_text(
            "id,name,sku,category,price,cost,quantity\n"
            "1,Tea,T-1,,2.50,1.20,8\n"
        )

        product = DataLoader().load_products(path)[0]

        assert product.category == "Uncategorized"
        assert product.cost == Decimal("1.20")
        assert product.quantity == 8

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "sales.csv"
        path.write_text("sale_id,product_id\nS1,1\n")
        with pytest.raises(DataLoadError):
            DataLoader().load_sales(path)


class TestPaths:

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            DataLoader().load_sales(tmp_path / "absent.json")

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "sales.xml"
        path.write_text("<sales/>")
        with pytest.raises(DataLoadError):
            DataLoader().load_sales(path)
