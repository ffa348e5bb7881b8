# app/api/routers/admin.py
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import CartValidationError, StorageUnavailableError
from app.domain.schemas import (
    CartListOut,
    CartSummaryOut,
    CleanupIn,
    CleanupOut,
    StatsOut,
    SuccessOut,
)
from app.repos.cart_repo import CartRepo
from app.services.cleanup_service import cleanup_expired_carts

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/cleanup", response_model=CleanupOut)
def cleanup(payload: CleanupIn | None = Body(None), db: Session = Depends(get_db)):
    days = payload.days if payload else None
    try:
        deleted = cleanup_expired_carts(db, days)
    except CartValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to cleanup carts")
    return CleanupOut(deleted_carts=deleted)


@router.get("/stats", response_model=StatsOut)
def stats(db: Session = Depends(get_db)):
    try:
        return StatsOut(**CartRepo(db).get_stats())
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to get statistics")


@router.get("/carts", response_model=CartListOut)
def list_carts(limit: int = Query(100, ge=1, le=1000), db: Session = Depends(get_db)):
    try:
        carts = CartRepo(db).list_recent(limit)
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to list carts")

    return CartListOut(
        carts=[
            CartSummaryOut(
                cart_id=c.cart_id,
                item_count=c.item_count,
                last_updated=c.last_updated,
                created_at=c.created_at,
            )
            for c in carts
        ]
    )


@router.delete("/carts/{cart_id}", response_model=SuccessOut)
def delete_cart(cart_id: str, db: Session = Depends(get_db)):
    try:
        deleted = CartRepo(db).delete_cart(cart_id)
    except StorageUnavailableError:
        raise HTTPException(status_code=500, detail="Failed to delete cart")
    if not deleted:
        raise HTTPException(status_code=404, detail="Cart not found")
    return SuccessOut()
