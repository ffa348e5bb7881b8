# app/celery_worker.py
from celery import Celery

from app.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND, CLEANUP_INTERVAL_SECONDS

celery_app = Celery(
    "cart",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# taski trzeba zaimportowac explicite, zeby Celery je zarejestrowal
celery_app.conf.imports = (
    "app.tasks.cleanup",
)

# co godzine, retencja z CART_RETENTION_DAYS
celery_app.conf.beat_schedule = {
    "cleanup-expired-carts-hourly": {
        "task": "app.tasks.cleanup.cleanup_carts_task",
        "schedule": CLEANUP_INTERVAL_SECONDS,
    },
}

celery_app.conf.timezone = "UTC"
