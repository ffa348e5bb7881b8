# app/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./carts.db")
DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", 5))

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

CART_RETENTION_DAYS = int(os.getenv("CART_RETENTION_DAYS", 7))
CLEANUP_INTERVAL_SECONDS = float(os.getenv("CLEANUP_INTERVAL_SECONDS", 60 * 60))

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "sessionId")
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", 7 * 24 * 60 * 60))

MAX_ITEM_QUANTITY = int(os.getenv("MAX_ITEM_QUANTITY", 999))
MAX_CART_ITEMS = int(os.getenv("MAX_CART_ITEMS", 100))
CART_SAVE_ATTEMPTS = int(os.getenv("CART_SAVE_ATTEMPTS", 10))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
