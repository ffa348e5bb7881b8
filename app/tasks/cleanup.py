# app/tasks/cleanup.py
from app.celery_worker import celery_app
from app.data.database import SessionLocal
from app.services.cleanup_service import run_cleanup
from app.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="app.tasks.cleanup.cleanup_carts_task")
def cleanup_carts_task(days=None):
    logger.info("Cleanup carts task started")
    deleted = run_cleanup(SessionLocal, days)
    logger.info(f"Cleanup carts task finished, deleted {deleted} cart(s)")
    return {"deleted_carts": deleted}
