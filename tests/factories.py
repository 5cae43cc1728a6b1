"""
Record factories for the analytics tests.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

from sales_analytics.common.models import Product, Sale

# Sunday 30 June 2024, early evening
AS_OF = datetime(2024, 6, 30, 18, 0)
TODAY = date(2024, 6, 30)


def make_product(
    product_id: str = "1",
    quantity: int = 10,
    price: str = "10.00",
    cost: str = "6.00",
    category: str = "Beverages",
    name: str = None,
    sku: str = None
) -> Product:
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        sku=sku or f"SKU-{product_id}",
        category=category,
        price=Decimal(price),
        cost=Decimal(cost),
        quantity=quantity,
    )


def make_sale(
    created_at,
    items,
    sale_id: str = "S1",
    payment_method: str = "Cash"
) -> Sale:
    """
    Build a Sale.

    Args:
        created_at: Timestamp (or None for an undated sale)
        items: (product_id, quantity, unit price) tuples
    """
    return Sale(
        id=sale_id,
        created_at=created_at,
        items=[
            {"productId": product_id, "quantity": quantity, "price": Decimal(str(price))}
            for product_id, quantity, price in items
        ],
        payment_method=payment_method,
    )


def daily_sales(revenues, last_day: date = TODAY, product_id: str = "1"):
    """One single-line sale at noon per day, ending on last_day."""
    first_day = last_day - timedelta(days=len(revenues) - 1)
    return [
        make_sale(
            datetime.combine(first_day + timedelta(days=offset), datetime.min.time()) + timedelta(hours=12),
            [(product_id, 1, revenue)],
            sale_id=f"D{offset}",
        )
        for offset, revenue in enumerate(revenues)
    ]


