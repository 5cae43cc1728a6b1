#!/usr/bin/env python3
"""
Sample Data Generator
=====================

Generates a synthetic product catalog and sales ledger for trying out the
sales analytics suite.

Usage:
    python data/generate_sample_data.py

This will create:
    - sample_products.json: Product catalog with prices, costs and stock
    - sample_sales.json: Point-of-sale documents with line items
    - sample_sales.csv: The same ledger as one row per sale line
"""

import json
import os
from datetime import datetime, timedelta

import numpy as np
import pandas as pd

# Set random seed for reproducibility
np.random.seed(42)

CATEGORIES = {
    'Beverages': ['Coffee Beans', 'Green Tea', 'Orange Juice', 'Sparkling Water'],
    'Bakery': ['Sourdough Loaf', 'Croissant', 'Bagel'],
    'Snacks': ['Trail Mix', 'Potato Chips', 'Dark Chocolate'],
    'Household': ['Dish Soap', 'Paper Towels'],
}

PAYMENT_METHODS = ['Cash', 'Card', 'Mobile']


def generate_products() -> list:
    """
    Generate the product catalog.

    Prices fall between 1.50 and 25.00 with a 20-60% margin; a couple of
    products are priced below cost so the unprofitable list is not empty.

    Returns:
        List of product documents
    """
    products = []
    product_id = 1

    for category, names in CATEGORIES.items():
        for name in names:
            price = round(float(np.random.uniform(1.5, 25.0)), 2)
            margin = np.random.uniform(0.2, 0.6)
            if np.random.random() < 0.1:
                margin = -0.1
            cost = round(price * (1 - margin), 2)

            products.append({
                'id': str(product_id),
                'name': name,
                'sku': f"SKU-{product_id:04d}",
                'category': category,
                'price': price,
                'cost': cost,
                'quantity': int(np.random.randint(0, 120)),
            })
            product_id += 1

    return products


def generate_sales(
    products: list,
    start_date: str = '2024-01-01',
    end_date: str = '2024-06-30'
) -> list:
    """
    Generate the sales ledger.

    Creates daily sales with:
    - Trend (slight growth)
    - Weekly seasonality (busier weekends)
    - Intraday peaks around lunch and early evening
    - Noise

    Args:
        products: Product catalog to sell from
        start_date: First day of the ledger
        end_date: Last day of the ledger

    Returns:
        List of sale documents
    """
    dates = pd.date_range(start=start_date, end=end_date, freq='D')
    hours = np.arange(8, 21)
    hour_weights = _get_hour_distribution(hours)
    popularity = np.random.dirichlet(np.ones(len(products)))

    sales = []
    sale_id = 1

    for day_index, day in enumerate(dates):
        # Trend + weekend effect
        base = 12 + day_index * 0.03
        if day.dayofweek >= 5:
            base *= 1.4
        n_sales = max(0, int(np.random.poisson(base)))

        for _ in range(n_sales):
            hour = int(np.random.choice(hours, p=hour_weights))
            created_at = datetime(day.year, day.month, day.day, hour, int(np.random.randint(0, 60)))

            n_items = int(np.random.randint(1, 4))
            chosen = np.random.choice(len(products), size=n_items, replace=False, p=popularity)

            items = []
            for index in chosen:
                product = products[index]
                quantity = int(np.random.randint(1, 4))
                items.append({
                    'productId': product['id'],
                    'productName': product['name'],
                    'quantity': quantity,
                    'price': product['price'],
                    'subtotal': round(product['price'] * quantity, 2),
                })

            sales.append({
                'id': f"S{sale_id:06d}",
                'createdAt': created_at.isoformat(),
                'items': items,
                'total': round(sum(item['subtotal'] for item in items), 2),
                'paymentMethod': str(np.random.choice(PAYMENT_METHODS, p=[0.3, 0.5, 0.2])),
            })
            sale_id += 1

    return sales


def sales_to_lines(sales: list) -> pd.DataFrame:
    """Flatten sale documents into one row per sale line."""
    rows = []
    for sale in sales:
        for item in sale['items']:
            rows.append({
                'sale_id': sale['id'],
                'created_at': sale['createdAt'],
                'payment_method': sale['paymentMethod'],
                'product_id': item['productId'],
                'product_name': item['productName'],
                'quantity': item['quantity'],
                'price': item['price'],
            })
    return pd.DataFrame(rows)


def _get_hour_distribution(hours: np.ndarray) -> np.ndarray:
    """Get realistic store-hour distribution with lunch and evening peaks."""
    weights = np.ones(len(hours))
    weights[(hours >= 12) & (hours <= 13)] = 3.0
    weights[(hours >= 17) & (hours <= 18)] = 2.5
    return weights / weights.sum()


def main():
    """Generate all sample datasets."""
    script_dir = os.path.dirname(os.path.abspath(__file__))

    print("Generating sample datasets...")

    # Product catalog
    print("  - Generating products...")
    products = generate_products()
    products_path = os.path.join(script_dir, 'sample_products.json')
    with open(products_path, 'w') as f:
        json.dump(products, f, indent=2)
    print(f"    Saved {len(products)} products to {products_path}")

    # Sales ledger
    print("  - Generating sales...")
    sales = generate_sales(products)
    sales_path = os.path.join(script_dir, 'sample_sales.json')
    with open(sales_path, 'w') as f:
        json.dump(sales, f, indent=2)
    print(f"    Saved {len(sales)} sales to {sales_path}")

    lines_df = sales_to_lines(sales)
    lines_path = os.path.join(script_dir, 'sample_sales.csv')
    lines_df.to_csv(lines_path, index=False)
    print(f"    Saved {len(lines_df)} sale lines to {lines_path}")

    print("\nSample data generation complete!")
    print("\nDataset Summary:")
    print(f"  Products: {len(products)} across {len(CATEGORIES)} categories")
    print(f"  Sales: {len(sales)} sales, {len(lines_df)} lines")
    print(f"  Period: {sales[0]['createdAt'][:10]} to {sales[-1]['createdAt'][:10]}")


if __name__ == '__main__':
    main()
