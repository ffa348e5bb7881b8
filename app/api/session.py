# app/api/session.py
import uuid

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.validators import is_valid_uuid
from app.services.cart_service import CartService
from app.services.product_catalog import ProductCatalog
from app.utils.settings import SESSION_COOKIE_NAME, SESSION_MAX_AGE_SECONDS


def get_cart_id(request: Request, response: Response) -> str:
    """ID koszyka z ciasteczka; brak albo zly format -> nowy uuid4. Ciasteczko odnawiane przy kazdym requescie."""
    cart_id = request.cookies.get(SESSION_COOKIE_NAME)

    if not is_valid_uuid(cart_id):
        cart_id = str(uuid.uuid4())

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=cart_id,
        max_age=SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
    )
    return cart_id


def get_catalog(request: Request) -> ProductCatalog:
    return request.app.state.catalog


def get_cart_service(
    db: Session = Depends(get_db),
    catalog: ProductCatalog = Depends(get_catalog),
) -> CartService:
    return CartService(db=db, catalog=catalog)
