# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

from app.api.routers import admin, carts, health, products
from app.data.database import Base, SessionLocal, engine
from app.services.cleanup_service import run_cleanup
from app.services.product_catalog import ProductCatalog
from app.utils.logging import get_logger

# import modeli przed create_all, zeby byly w Base.metadata
from app.data.models import CartModel  # noqa: F401

logger = get_logger(__name__)


def init_database():
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to create database tables")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    #jednorazowy cleanup przy starcie, potem co godzine z celery beat
    run_cleanup(SessionLocal)
    yield


def create_app(catalog: ProductCatalog | None = None) -> FastAPI:
    app = FastAPI(
        title="Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    #katalog tworzony raz i wstrzykiwany przez Depends(get_catalog)
    app.state.catalog = catalog or ProductCatalog()

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Malformed request body for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Malformed request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error for {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Include routers
    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(products.router)
    app.include_router(admin.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
