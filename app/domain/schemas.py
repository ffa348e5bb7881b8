# app/domain/schemas.py
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Pola snake_case w Pythonie, camelCase w JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LineItem(CamelModel):
    """Pozycja w koszyku (znormalizowana przez validators)."""

    product_id: str
    name: str
    price: float
    quantity: int
    image: str | None = None


class Product(CamelModel):
    """Wpis w katalogu produktow."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    product_id: str
    name: str
    price: float
    image: str | None = None


# Wejscie - typy luzne, bo cala walidacja jest w app.domain.validators


class AddItemIn(CamelModel):
    product_id: Any = None
    name: Any = None
    price: Any = None
    quantity: Any = None
    image: Any = None


class UpdateItemIn(CamelModel):
    product_id: Any = None
    quantity: Any = None


class SyncIn(CamelModel):
    items: Any = None


class CleanupIn(CamelModel):
    days: Any = None


# Wyjscie


class CartOut(CamelModel):
    items: List[LineItem]
    last_updated: int | None = None
    item_count: int = 0


class CartItemsOut(CamelModel):
    success: bool = True
    items: List[LineItem]


class ProductsOut(CamelModel):
    products: List[Product]


class CleanupOut(CamelModel):
    success: bool = True
    deleted_carts: int


class StatsOut(CamelModel):
    total_carts: int
    total_items: int
    oldest_cart_timestamp: int | None = None


class CartSummaryOut(CamelModel):
    cart_id: str
    item_count: int
    last_updated: int
    created_at: int


class CartListOut(CamelModel):
    carts: List[CartSummaryOut]


class SuccessOut(CamelModel):
    success: bool = True


class HealthOut(BaseModel):
    status: str = Field("ok")
