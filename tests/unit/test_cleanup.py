import pytest
from sqlalchemy import update

from app.data.models.cart import CartModel
from app.domain.errors import CartValidationError, StorageUnavailableError
from app.domain.schemas import LineItem
from app.repos.cart_repo import CartRepo
from app.services import cleanup_service
from app.services.cleanup_service import cleanup_expired_carts, run_cleanup
from app.tasks import cleanup as cleanup_task
from app.utils.clock import DAY_MS

NOW = 1_700_000_000_000


def seed_cart(db, cart_id, age_days):
    repo = CartRepo(db)
    repo.save_cart(cart_id, [LineItem(product_id="1", name="Laptop", price=999.99, quantity=1)])
    db.execute(
        update(CartModel)
        .where(CartModel.cart_id == cart_id)
        .values(last_updated=NOW - int(age_days * DAY_MS))
    )
    db.commit()


class TestCleanupExpiredCarts:

    def test_default_retention_is_seven_days(self, db_session):
        seed_cart(db_session, "eight-days", 8)
        seed_cart(db_session, "six-days", 6)

        deleted = cleanup_expired_carts(db_session, now_ms=NOW)

        repo = CartRepo(db_session)
        assert deleted == 1
        assert repo.get_cart("eight-days") is None
        assert repo.get_cart("six-days") is not None

    def test_explicit_days(self, db_session):
        seed_cart(db_session, "three-days", 3)
        seed_cart(db_session, "one-day", 1)

        assert cleanup_expired_carts(db_session, days=2, now_ms=NOW) == 1
        assert CartRepo(db_session).get_cart("one-day") is not None

    def test_invalid_days(self, db_session):
        with pytest.raises(CartValidationError):
            cleanup_expired_carts(db_session, days=-1)
        with pytest.raises(CartValidationError):
            cleanup_expired_carts(db_session, days=1e308)
        with pytest.raises(CartValidationError):
            cleanup_expired_carts(db_session, days=10**400)


class TestScheduledCleanup:

    def test_run_cleanup_uses_own_session(self, session_factory, db_session):
        seed_cart(db_session, "ancient", 400)

        assert run_cleanup(session_factory) == 1

    def test_run_cleanup_logs_and_swallows_failures(self, session_factory, monkeypatch, caplog):
        def broken(db, days=None):
            raise StorageUnavailableError("Failed to cleanup expired carts")

        monkeypatch.setattr(cleanup_service, "cleanup_expired_carts", broken)

        assert run_cleanup(session_factory) == 0
        assert "Scheduled cart cleanup failed" in caplog.text

    def test_celery_task_runs_cleanup(self, session_factory, db_session, monkeypatch):
        seed_cart(db_session, "ancient", 30)
        monkeypatch.setattr(cleanup_task, "SessionLocal", session_factory)

        result = cleanup_task.cleanup_carts_task(days=7)

        assert result == {"deleted_carts": 1}

    def test_task_is_scheduled_hourly(self):
        from app.celery_worker import celery_app

        entry = celery_app.conf.beat_schedule["cleanup-expired-carts-hourly"]
        assert entry["task"] == "app.tasks.cleanup.cleanup_carts_task"
        assert entry["schedule"] == 3600
