# app/services/cart_service.py
from typing import Any, Callable, Dict, List, Mapping, Sequence

from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.domain.errors import CartNotFoundError, ItemNotFoundError, CartValidationError
from app.domain.schemas import LineItem
from app.domain import validators
from app.repos.cart_repo import CartRepo
from app.services.product_catalog import ProductCatalog
from app.utils.retry import conflict_retry
from app.utils.settings import MAX_ITEM_QUANTITY
from app.utils.logging import get_logger

logger = get_logger(__name__)

Transform = Callable[[List[LineItem]], List[LineItem]]


def merge_items(server_items: Sequence[LineItem], client_items: Sequence[LineItem]) -> List[LineItem]:
    """
    Laczenie koszyka klienta z koszykiem serwera.

    Ten sam productId -> wieksza ilosc wygrywa (nawet z nieaktualnego klienta),
    nowy productId -> dopisany na koncu w kolejnosci klienta.
    Przez sync nie da sie zmniejszyc ilosci - do tego jest update.
    """
    merged: Dict[str, LineItem] = {item.product_id: item for item in server_items}

    for client_item in client_items:
        existing = merged.get(client_item.product_id)
        if existing is None:
            merged[client_item.product_id] = client_item
        elif client_item.quantity > existing.quantity:
            merged[client_item.product_id] = existing.model_copy(
                update={"quantity": client_item.quantity}
            )

    return list(merged.values())


def _items_of(cart: CartModel | None) -> List[LineItem]:
    if cart is None:
        return []
    return [LineItem.model_validate(raw) for raw in cart.items]


def _require(payload: Mapping[str, Any], *fields: str) -> None:
    if any(payload.get(field) is None for field in fields):
        raise CartValidationError(f"Missing required fields: {', '.join(fields)}")


class CartService:
    """
    Use case'y dla koszyka sesyjnego.
    query (get) tylko odczyt, commands (add, update, remove, clear, sync)
    to read-modify-write z optimistic lockingiem po wersji wiersza.
    """

    def __init__(self, db: Session, catalog: ProductCatalog):
        self.repo = CartRepo(db)
        self.catalog = catalog

    #query - odczyt
    def get_cart(self, cart_id: str) -> Dict[str, Any]:
        cart = self.repo.get_cart(cart_id)

        if cart is None:
            return {"items": [], "last_updated": None, "item_count": 0}

        return {
            "items": _items_of(cart),
            "last_updated": cart.last_updated,
            "item_count": cart.item_count,
        }

    #commands
    def _mutate(self, cart_id: str, transform: Transform, create: bool) -> List[LineItem]:
        """Odczyt, transformacja, zapis z wersja z odczytu. Konflikt -> cala proba od nowa."""

        @conflict_retry()
        def attempt() -> List[LineItem]:
            cart = self.repo.get_cart(cart_id)

            if cart is None and not create:
                raise CartNotFoundError("Cart not found")

            new_items = transform(_items_of(cart))
            self.repo.save_cart(
                cart_id,
                new_items,
                expected_version=cart.version if cart is not None else 0,
            )
            return new_items

        return attempt()

    def add_item(self, cart_id: str, payload: Mapping[str, Any]) -> List[LineItem]:
        _require(payload, "productId", "name", "price")
        item = validators.validate_cart_item(payload, self.catalog.valid_product_ids)

        def add(items: List[LineItem]) -> List[LineItem]:
            for index, existing in enumerate(items):
                if existing.product_id == item.product_id:
                    total = validators.validate_quantity(
                        existing.quantity + item.quantity, MAX_ITEM_QUANTITY
                    )
                    logger.info(
                        f"Product {item.product_id} already in cart {cart_id}, "
                        f"quantity {existing.quantity} -> {total}"
                    )
                    items[index] = existing.model_copy(update={"quantity": total})
                    return items

            logger.info(f"Adding product {item.product_id} to cart {cart_id}")
            items.append(item)
            return items

        return self._mutate(cart_id, add, create=True)

    def update_item(self, cart_id: str, payload: Mapping[str, Any]) -> List[LineItem]:
        _require(payload, "productId", "quantity")
        product_id = validators.validate_product_id(payload["productId"])

        raw_quantity = payload["quantity"]
        #0 oznacza usuniecie pozycji
        if validators.coerce_number(raw_quantity) == 0:
            quantity = 0
        else:
            quantity = validators.validate_quantity(raw_quantity, MAX_ITEM_QUANTITY)

        def update(items: List[LineItem]) -> List[LineItem]:
            for index, existing in enumerate(items):
                if existing.product_id == product_id:
                    if quantity == 0:
                        logger.info(f"Quantity 0 for {product_id}, removing from cart {cart_id}")
                        del items[index]
                    else:
                        items[index] = existing.model_copy(update={"quantity": quantity})
                    return items

            raise ItemNotFoundError("Item not found in cart")

        return self._mutate(cart_id, update, create=False)

    def remove_item(self, cart_id: str, product_id: Any) -> List[LineItem]:
        product_id = validators.validate_product_id(product_id)

        def remove(items: List[LineItem]) -> List[LineItem]:
            return [item for item in items if item.product_id != product_id]

        logger.info(f"Removing product {product_id} from cart {cart_id}")
        return self._mutate(cart_id, remove, create=False)

    def clear_cart(self, cart_id: str) -> List[LineItem]:
        logger.info(f"Clearing cart {cart_id}")
        return self._mutate(cart_id, lambda items: [], create=True)

    def sync_cart(self, cart_id: str, raw_items: Any) -> List[LineItem]:
        #caly sync odrzucony jesli chociaz jedna pozycja jest zla
        client_items = validators.validate_cart_items(raw_items, self.catalog.valid_product_ids)

        logger.info(f"Syncing {len(client_items)} client item(s) into cart {cart_id}")
        return self._mutate(
            cart_id,
            lambda items: merge_items(items, client_items),
            create=True,
        )
