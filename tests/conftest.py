import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.data.database import Base, get_db
from app.data.models import CartModel  # noqa: F401
from app.main import create_app
from app.services.cart_service import CartService
from app.services.product_catalog import ProductCatalog

CART_ID = "3f1c2b9a-6d3e-4c2a-9b8e-1a2b3c4d5e6f"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def catalog() -> ProductCatalog:
    return ProductCatalog()


@pytest.fixture
def cart_service(db_session, catalog) -> CartService:
    return CartService(db=db_session, catalog=catalog)


@pytest.fixture
def cart_id() -> str:
    return CART_ID


@pytest.fixture
def test_app(session_factory, catalog):
    app = create_app(catalog=catalog)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def test_client(test_app) -> TestClient:
    # bez `with` - lifespan (create_all + cleanup na prawdziwej bazie) sie nie odpala
    return TestClient(test_app)

