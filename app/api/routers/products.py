# app/api/routers/products.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.session import get_catalog
from app.domain.schemas import Product, ProductsOut
from app.services.product_catalog import ProductCatalog

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductsOut)
def list_products(catalog: ProductCatalog = Depends(get_catalog)):
    return ProductsOut(products=catalog.get_all_products())


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, catalog: ProductCatalog = Depends(get_catalog)):
    product = catalog.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product
