"""
Data Loading Module
===================

Loads a product catalog and a sales ledger from JSON or CSV exports into
validated records for the analyzers.

JSON files hold a list of documents (or an object with a ``products`` /
``sales`` list) in the point-of-sale document shape. CSV ledgers hold one
row per sale line and are regrouped into sales by ``sale_id``.

Usage:
    from sales_analytics.common import DataLoader

    loader = DataLoader()
    products = loader.load_products("data/sample_products.json")
    sales = loader.load_sales("data/sample_sales.csv")
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd
from loguru import logger

from .exceptions import DataLoadError
from .models import Product, Sale, coerce_products, coerce_sales

SALE_LINE_COLUMNS = ['sale_id', 'product_id', 'quantity', 'price']


class DataLoader:
    """
    Catalog and ledger loader.

    Attributes:
        supported_formats (list): File suffixes the loader understands

    Example:
        >>> loader = DataLoader()
        >>> sales = loader.load_sales("sales.json")
        >>> print(f"Loaded {len(sales)} sales")
    """

    def __init__(self):
        """Initialize DataLoader."""
        self.supported_formats = ['.json', '.csv']
        logger.info("DataLoader initialized")

    def load_products(self, filepath: Union[str, Path]) -> List[Product]:
        """
        Load the product catalog.

        Args:
            filepath: Path to a JSON or CSV file

        Returns:
            Validated Product records (invalid rows are skipped)

        Raises:
            DataLoadError: If the file is missing, unsupported or unreadable
        """
        filepath = self._check_path(filepath)

        if filepath.suffix.lower() == '.json':
            records = self._read_json(filepath, 'products')
        else:
            df = self._read_csv(filepath)
            records = self._records(df)

        products = coerce_products(records)
        logger.info(f"Loaded {len(products)} products from {filepath}")
        return products

    def load_sales(self, filepath: Union[str, Path]) -> List[Sale]:
        """
        Load the sales ledger.

        Args:
            filepath: Path to a JSON file of sale documents or a CSV file of
                sale lines (columns sale_id, product_id, quantity, price and
                optionally created_at, product_name, payment_method)

        Returns:
            Validated Sale records (invalid records are skipped)

        Raises:
            DataLoadError: If the file is missing, unsupported or unreadable
        """
        filepath = self._check_path(filepath)

        if filepath.suffix.lower() == '.json':
            records = self._read_json(filepath, 'sales')
        else:
            records = self._sales_from_lines(self._read_csv(filepath))

        sales = coerce_sales(records)
        undated = sum(1 for s in sales if s.created_at is None)
        if undated:
            logger.warning(f"{undated} sale(s) without a usable timestamp")

        logger.info(f"Loaded {len(sales)} sales from {filepath}")
        return sales

    def _check_path(self, filepath: Union[str, Path]) -> Path:
        filepath = Path(filepath)

        if not filepath.exists():
            raise DataLoadError(f"File not found: {filepath}")

        if filepath.suffix.lower() not in self.supported_formats:
            raise DataLoadError(f"Unsupported format: {filepath.suffix}")

        return filepath

    def _read_json(self, filepath: Path, key: str) -> List[Dict[str, Any]]:
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise DataLoadError(f"Could not read {filepath}: {exc}") from exc

        if isinstance(payload, dict):
            payload = payload.get(key)
        if not isinstance(payload, list):
            raise DataLoadError(f"{filepath} must contain a list of {key}")
        return payload

    def _read_csv(self, filepath: Path) -> pd.DataFrame:
        try:
            df = pd.read_csv(filepath, dtype=str, keep_default_na=False)
        except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise DataLoadError(f"Could not read {filepath}: {exc}") from exc

        return df

    @staticmethod
    def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
        # Empty cells become None so model defaults apply
        return [
            {column: (None if value == '' else value) for column, value in row.items()}
            for row in df.to_dict('records')
        ]

    def _sales_from_lines(self, df: pd.DataFrame) -> List[Dict[str, Any]]:
        """Regroup sale-line rows into sale documents, keeping file order."""
        missing = set(SALE_LINE_COLUMNS) - set(df.columns)
        if missing:
            raise DataLoadError(f"Sales CSV missing required columns: {sorted(missing)}")

        sales: Dict[str, Dict[str, Any]] = {}
        for row in self._records(df):
            sale = sales.setdefault(row['sale_id'], {
                'id': row['sale_id'],
                'createdAt': row.get('created_at'),
                'paymentMethod': row.get('payment_method'),
                'items': [],
            })
            sale['items'].append({
                'productId': row['product_id'],
                'productName': row.get('product_name'),
                'quantity': row['quantity'],
                'price': row['price'],
            })

        logger.debug(f"Regrouped {len(df)} sale lines into {len(sales)} sales")
        return list(sales.values())
