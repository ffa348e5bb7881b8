# app/services/cleanup_service.py
from typing import Any, Callable

from sqlalchemy.orm import Session

from app.domain import validators
from app.repos.cart_repo import CartRepo
from app.utils.clock import DAY_MS, now_ms as current_ms
from app.utils.logging import get_logger

logger = get_logger(__name__)


def cleanup_expired_carts(db: Session, days: Any = None, now_ms: int | None = None) -> int:
    """
    Usuwa koszyki nieaktywne dluzej niz `days` dni (domyslnie CART_RETENTION_DAYS).
    Bledy bazy sa propagowane - endpoint admina zwraca wtedy 500.
    """
    retention_days = validators.validate_retention_days(days)
    now = current_ms() if now_ms is None else now_ms
    cutoff = now - int(retention_days * DAY_MS)

    deleted = CartRepo(db).delete_older_than(cutoff)

    if deleted > 0:
        logger.info(f"Cleaned up {deleted} expired cart(s) older than {retention_days} day(s)")
    return deleted


def run_cleanup(session_factory: Callable[[], Session], days: Any = None) -> int:
    """Wersja dla harmonogramu: wlasna sesja, bledy tylko logowane, nastepny tick i tak sie odpali."""
    db = session_factory()
    try:
        return cleanup_expired_carts(db, days)
    except Exception:
        logger.exception("Scheduled cart cleanup failed")
        return 0
    finally:
        db.close()
