"""
Ledger and Catalog Models
=========================

Pydantic models for the two inputs of the analytics suite: the product
catalog and the sales ledger. Records may be given as model instances or as
plain mappings using either snake_case or the camelCase field names of the
point-of-sale documents (``createdAt``, ``productId``, ``paymentMethod``).

Usage:
    from sales_analytics.common.models import coerce_sales, coerce_products

    sales = coerce_sales(raw_sales)
    products = coerce_products(raw_products)
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Type, TypeVar

import pandas as pd
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .money import to_cents, to_decimal

DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_PAYMENT_METHOD = "Cash"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _as_decimal(value: Any) -> Any:
    if value is None:
        return Decimal("0")
    if isinstance(value, (float, int, str)) and not isinstance(value, bool):
        try:
            return to_decimal(value)
        except ArithmeticError:
            return value
    return value


class Product(BaseModel):
    """A catalog entry. Read-only to every analyzer."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    sku: Optional[str] = None
    category: str = DEFAULT_CATEGORY
    price: Decimal = Field(default=Decimal("0"), ge=0)
    cost: Decimal = Field(default=Decimal("0"), ge=0)
    quantity: int = 0

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, str)) else value

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: Any) -> Any:
        return value or DEFAULT_CATEGORY

    @field_validator("price", "cost", mode="before")
    @classmethod
    def _coerce_money(cls, value: Any) -> Any:
        return _as_decimal(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _default_quantity(cls, value: Any) -> Any:
        return 0 if value is None else value


class SaleItem(BaseModel):
    """One line of a sale. The subtotal is always ``price * quantity``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_id: str = Field(alias="productId")
    product_name: Optional[str] = Field(default=None, alias="productName")
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)
    subtotal: Optional[Decimal] = None

    @field_validator("product_id", mode="before")
    @classmethod
    def _coerce_product_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, str)) else value

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Any:
        return _as_decimal(value)

    @field_validator("subtotal", mode="before")
    @classmethod
    def _coerce_subtotal(cls, value: Any) -> Any:
        return None if value is None else _as_decimal(value)

    @model_validator(mode="after")
    def _recompute_subtotal(self) -> "SaleItem":
        expected = self.price * self.quantity
        if self.subtotal != expected:
            if self.subtotal is not None:
                logger.debug(
                    f"Stored subtotal {self.subtotal} for product {self.product_id} "
                    f"disagrees with price * quantity ({expected}); recomputed"
                )
            self.subtotal = expected
        return self

    @property
    def subtotal_cents(self) -> int:
        return to_cents(self.price * self.quantity)


class Sale(BaseModel):
    """
    A completed sale. Immutable historical fact.

    ``created_at`` is None when the source timestamp is missing or cannot be
    parsed; such sales are left out of every time-based computation.
    ``total`` is recomputed from the item subtotals.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    items: List[SaleItem] = Field(default_factory=list)
    total: Optional[Decimal] = None
    payment_method: str = Field(default=DEFAULT_PAYMENT_METHOD, alias="paymentMethod")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value) if isinstance(value, (int, str)) else value

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Optional[datetime]:
        if value is None or value is pd.NaT:
            return None
        if isinstance(value, pd.Timestamp):
            return value.to_pydatetime()
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            parsed = pd.to_datetime(value, unit="s", errors="coerce")
        elif isinstance(value, str) and value.strip():
            parsed = pd.to_datetime(value, errors="coerce")
        else:
            return None
        if pd.isna(parsed):
            return None
        return parsed.to_pydatetime()

    @field_validator("items", mode="before")
    @classmethod
    def _default_items(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("total", mode="before")
    @classmethod
    def _coerce_total(cls, value: Any) -> Any:
        return None if value is None else _as_decimal(value)

    @field_validator("payment_method", mode="before")
    @classmethod
    def _default_payment_method(cls, value: Any) -> Any:
        return value or DEFAULT_PAYMENT_METHOD

    @model_validator(mode="after")
    def _recompute_total(self) -> "Sale":
        expected = sum((item.subtotal for item in self.items), Decimal("0"))
        if self.total != expected:
            if self.total is not None:
                logger.debug(
                    f"Stored total {self.total} for sale {self.id or '<unknown>'} "
                    f"disagrees with item subtotals ({expected}); recomputed"
                )
            self.total = expected
        return self

    @property
    def total_cents(self) -> int:
        return sum(item.subtotal_cents for item in self.items)

    @property
    def units(self) -> int:
        return sum(item.quantity for item in self.items)


def coerce_records(
    records: Optional[Iterable[Any]],
    model: Type[ModelT],
    kind: str
) -> List[ModelT]:
    """
    Validate a sequence of records into ``model`` instances.

    Records that are already instances pass through untouched. Records that
    fail validation are skipped with a warning, so a single corrupt entry
    cannot block an analysis of the rest.
    """
    parsed: List[ModelT] = []
    skipped = 0

    for position, record in enumerate(records or []):
        if isinstance(record, model):
            parsed.append(record)
            continue
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as exc:
            skipped += 1
            logger.warning(
                f"Skipping invalid {kind} record at position {position}: "
                f"{exc.error_count()} validation error(s)"
            )

    if skipped:
        logger.warning(f"Skipped {skipped} invalid {kind} record(s)")
    return parsed


def coerce_sales(records: Optional[Iterable[Any]]) -> List[Sale]:
    return coerce_records(records, Sale, "sale")


def coerce_products(records: Optional[Iterable[Any]]) -> List[Product]:
    return coerce_records(records, Product, "product")
