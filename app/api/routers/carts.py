#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.session import get_cart_id, get_cart_service
from app.domain.errors import (
    CartNotFoundError,
    CartValidationError,
    StorageUnavailableError,
)
from app.domain.schemas import (
    AddItemIn,
    CartItemsOut,
    CartOut,
    SyncIn,
    UpdateItemIn,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(
    cart_id: str = Depends(get_cart_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        return CartOut(**svc.get_cart(cart_id))
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to get cart")


@router.post("/add", response_model=CartItemsOut)
def add_item(
    payload: AddItemIn,
    cart_id: str = Depends(get_cart_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        items = svc.add_item(cart_id, payload.model_dump(by_alias=True, exclude_none=True))
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to add item to cart")
    return CartItemsOut(items=items)


@router.put("/update", response_model=CartItemsOut)
def update_item(
    payload: UpdateItemIn,
    cart_id: str = Depends(get_cart_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        items = svc.update_item(cart_id, payload.model_dump(by_alias=True, exclude_none=True))
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CartNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to update cart")
    return CartItemsOut(items=items)


@router.delete("/remove/{product_id}", response_model=CartItemsOut)
def remove_item(
    product_id: str,
    cart_id: str = Depends(get_cart_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        items = svc.remove_item(cart_id, product_id)
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CartNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to remove item from cart")
    return CartItemsOut(items=items)


@router.delete("/clear", response_model=CartItemsOut)
def clear_cart(
    cart_id: str = Depends(get_cart_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        items = svc.clear_cart(cart_id)
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to clear cart")
    return CartItemsOut(items=items)


@router.post("/sync", response_model=CartItemsOut)
def sync_cart(
    payload: SyncIn,
    cart_id: str = Depends(get_cart_id),
    svc: CartService = Depends(get_cart_service),
):
    try:
        items = svc.sync_cart(cart_id, payload.items)
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to sync cart")
    return CartItemsOut(items=items)
