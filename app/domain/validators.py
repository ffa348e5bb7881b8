# app/domain/validators.py
"""
Walidacja danych koszyka.

Kazda funkcja zwraca znormalizowana wartosc albo rzuca CartValidationError
z komunikatem dla klienta. Wszystkie endpointy (add, update, sync) przechodza
przez te same funkcje.
"""
import math
import re
from collections.abc import Iterable, Mapping
from decimal import Decimal, ROUND_HALF_UP
from typing import Any

from app.domain.errors import CartValidationError
from app.domain.schemas import LineItem
from app.utils.settings import CART_RETENTION_DAYS, MAX_CART_ITEMS, MAX_ITEM_QUANTITY

MAX_PRODUCT_ID_LENGTH = 100
MAX_NAME_LENGTH = 200
MAX_IMAGE_LENGTH = 500
MAX_PRICE = 1_000_000
MAX_RETENTION_DAYS = 36_500

_DANGEROUS_PATTERNS = re.compile(r"""[;'"\\]|--|/\*|\*/|xp_|sp_""", re.IGNORECASE)
_UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


def coerce_number(value: Any) -> float | None:
    """Number or numeric string to float; None when it is not a number at all."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def validate_product_id(product_id: Any, valid_ids: Iterable[str] | None = None) -> str:
    if not isinstance(product_id, str) or not product_id:
        raise CartValidationError("Product ID must be a non-empty string")

    sanitized = product_id.strip()
    if not sanitized:
        raise CartValidationError("Product ID cannot be empty")

    if len(sanitized) > MAX_PRODUCT_ID_LENGTH:
        raise CartValidationError("Product ID exceeds maximum length")

    #proste zabezpieczenie przed injection
    if _DANGEROUS_PATTERNS.search(sanitized):
        raise CartValidationError("Invalid characters in product ID")

    if valid_ids is not None and sanitized not in valid_ids:
        raise CartValidationError("Invalid product ID")

    return sanitized


def validate_quantity(quantity: Any, max_quantity: int = MAX_ITEM_QUANTITY) -> int:
    if quantity is None:
        raise CartValidationError("Quantity is required")

    number = coerce_number(quantity)
    if number is None or not math.isfinite(number):
        raise CartValidationError("Quantity must be a valid number")

    if number < 0:
        raise CartValidationError("Quantity cannot be negative")

    if number == 0:
        raise CartValidationError(
            "Quantity cannot be zero. Use remove endpoint to delete items"
        )

    if number > max_quantity:
        raise CartValidationError(f"Quantity cannot exceed {max_quantity}")

    if not number.is_integer():
        raise CartValidationError("Quantity must be an integer")

    return int(number)


def validate_price(price: Any) -> float:
    if price is None:
        raise CartValidationError("Price is required")

    number = coerce_number(price)
    if number is None or not math.isfinite(number):
        raise CartValidationError("Price must be a valid number")

    if number < 0:
        raise CartValidationError("Price cannot be negative")

    if number > MAX_PRICE:
        raise CartValidationError("Price exceeds maximum allowed value")

    rounded = Decimal(str(number)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(rounded)


def validate_product_name(name: Any) -> str:
    if not isinstance(name, str) or not name:
        raise CartValidationError("Product name must be a non-empty string")

    sanitized = name.strip()
    if not sanitized:
        raise CartValidationError("Product name cannot be empty")

    if len(sanitized) > MAX_NAME_LENGTH:
        raise CartValidationError("Product name exceeds maximum length")

    return sanitized


def validate_image(image: Any) -> str | None:
    if image is None:
        return None

    if not isinstance(image, str) or len(image) > MAX_IMAGE_LENGTH:
        raise CartValidationError("Invalid image format")

    return image.strip() or None


def validate_cart_item(item: Any, valid_ids: Iterable[str] | None = None) -> LineItem:
    if not isinstance(item, Mapping):
        raise CartValidationError("Cart item must be an object")

    product_id = validate_product_id(item.get("productId"), valid_ids)
    name = validate_product_name(item.get("name"))
    price = validate_price(item.get("price"))
    # brak ilosci = 1
    quantity = validate_quantity(item.get("quantity", 1))
    image = validate_image(item.get("image"))

    return LineItem(
        product_id=product_id,
        name=name,
        price=price,
        quantity=quantity,
        image=image,
    )


def validate_cart_items(items: Any, valid_ids: Iterable[str] | None = None) -> list[LineItem]:
    if not isinstance(items, list):
        raise CartValidationError("Items must be an array")

    if len(items) > MAX_CART_ITEMS:
        raise CartValidationError(f"Cart cannot contain more than {MAX_CART_ITEMS} items")

    sanitized: list[LineItem] = []
    seen: set[str] = set()

    for index, raw in enumerate(items):
        try:
            item = validate_cart_item(raw, valid_ids)
        except CartValidationError as e:
            raise CartValidationError(f"Item at index {index}: {e}") from e

        if item.product_id in seen:
            raise CartValidationError(f"Duplicate product ID: {item.product_id}")

        seen.add(item.product_id)
        sanitized.append(item)

    return sanitized


def validate_retention_days(days: Any) -> float:
    """Admin override for the cleanup window; falls back to the configured default."""
    if days is None:
        return CART_RETENTION_DAYS

    number = coerce_number(days)
    if number is None or not math.isfinite(number) or number <= 0:
        raise CartValidationError("Days must be a positive number")

    #cutoff liczony w ms, wieksze wartosci nie mieszcza sie w int64
    if number > MAX_RETENTION_DAYS:
        raise CartValidationError(f"Days cannot exceed {MAX_RETENTION_DAYS}")

    return number


def is_valid_uuid(value: Any) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.match(value))
