# app/repos/cart_repo.py
from typing import Any, Dict, List, NoReturn, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.domain.errors import CartConflictError, StorageUnavailableError
from app.domain.schemas import LineItem
from app.utils.clock import now_ms
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    """
    Jedyny wlasciciel wierszy w tabeli carts.
    Kazdy blad bazy -> StorageUnavailableError, brak koszyka -> None.
    """

    def __init__(self, db: Session):
        self.db = db

    def _storage_failure(self, action: str, cart_id: str | None, error: Exception) -> NoReturn:
        self.db.rollback()
        logger.error(f"Database error while trying to {action} (cart={cart_id}): {error!r}")
        raise StorageUnavailableError(f"Failed to {action}") from error

    def get_cart(self, cart_id: str) -> CartModel | None:
        try:
            #populate_existing - zawsze swiezy odczyt, bez cache z identity map
            return self.db.execute(
                select(CartModel)
                .where(CartModel.cart_id == cart_id)
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            self._storage_failure("retrieve cart", cart_id, e)

    def save_cart(
        self,
        cart_id: str,
        items: Sequence[LineItem],
        expected_version: int | None = None,
    ) -> None:
        """
        Upsert koszyka, jedyny commit w operacji.

        expected_version:
            None - bezwarunkowy upsert
            0    - wiersz nie moze jeszcze istniec
            n>0  - wiersz musi miec wersje n (optimistic locking)
        """
        now = now_ms()
        payload = [item.model_dump(by_alias=True) for item in items]

        try:
            if expected_version == 0:
                self._insert(cart_id, payload, now)
            else:
                stmt = update(CartModel).where(CartModel.cart_id == cart_id)
                if expected_version is not None:
                    # np. update ... set version 3 where cart_id = x and version = 2
                    stmt = stmt.where(CartModel.version == expected_version)

                rowcount = self.db.execute(
                    stmt.values(
                        items=payload,
                        last_updated=now,
                        item_count=len(payload),
                        version=CartModel.version + 1,
                    ).execution_options(synchronize_session=False)
                ).rowcount

                if rowcount == 0:
                    if expected_version is not None:
                        self.db.rollback()
                        logger.warning(
                            f"Cart {cart_id} changed since version {expected_version} was read"
                        )
                        raise CartConflictError(
                            "Cart was modified by another operation"
                        )
                    self._insert(cart_id, payload, now)

            self.db.commit()

        except IntegrityError as e:
            #ktos inny utworzyl ten koszyk w miedzyczasie
            self.db.rollback()
            logger.warning(f"Cart {cart_id} was created concurrently: {e!r}")
            raise CartConflictError("Cart was created by another operation") from e
        except SQLAlchemyError as e:
            self._storage_failure("save cart", cart_id, e)

        logger.info(f"Saved cart {cart_id} with {len(payload)} item(s)")

    def _insert(self, cart_id: str, payload: List[Dict[str, Any]], now: int) -> None:
        self.db.execute(
            insert(CartModel).values(
                cart_id=cart_id,
                items=payload,
                last_updated=now,
                created_at=now,
                item_count=len(payload),
                version=1,
            )
        )

    def delete_cart(self, cart_id: str) -> bool:
        try:
            rowcount = self.db.execute(
                delete(CartModel).where(CartModel.cart_id == cart_id)
            ).rowcount
            self.db.commit()
        except SQLAlchemyError as e:
            self._storage_failure("delete cart", cart_id, e)
        return rowcount > 0

    def delete_older_than(self, cutoff_ms: int) -> int:
        try:
            #zakres po indeksie last_updated, bez blokowania calej tabeli
            rowcount = self.db.execute(
                delete(CartModel).where(CartModel.last_updated < cutoff_ms)
            ).rowcount
            self.db.commit()
        except SQLAlchemyError as e:
            self._storage_failure("cleanup expired carts", None, e)
        return rowcount

    def get_stats(self) -> Dict[str, int | None]:
        try:
            total_carts, total_items, oldest = self.db.execute(
                select(
                    func.count(CartModel.cart_id),
                    func.coalesce(func.sum(CartModel.item_count), 0),
                    func.min(CartModel.last_updated),
                )
            ).one()
        except SQLAlchemyError as e:
            self._storage_failure("get statistics", None, e)

        return {
            "total_carts": int(total_carts),
            "total_items": int(total_items),
            "oldest_cart_timestamp": oldest,
        }

    def list_recent(self, limit: int = 100) -> List[CartModel]:
        try:
            return list(
                self.db.execute(
                    select(CartModel)
                    .order_by(CartModel.last_updated.desc())
                    .limit(limit)
                ).scalars().all()
            )
        except SQLAlchemyError as e:
            self._storage_failure("list carts", None, e)
