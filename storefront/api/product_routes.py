from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.database import get_db
from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.repositories.product_repositories import ProductRepository
from storefront.schemas.product_schemas import (
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)
from storefront.services.product_services import ProductPage, ProductService


router = APIRouter(prefix=f"{settings.API_PREFIX}/products", tags=["products"])
logger = logging.getLogger(__name__)


# ---------- Dependency injection ----------
def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(ProductRepository(db))


def _page(result: ProductPage) -> ProductListResponse:
    products, count = result
    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in products], count=count
    )


# ---------- Query endpoints ----------

@router.get("", response_model=ProductListResponse)
def list_products(
    category: Optional[str] = None,
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    search: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    svc: ProductService = Depends(get_product_service),
):
    """List the catalog; any filter parameter switches to the filter query."""
    if all(v is None for v in (category, min_price, max_price, search, sort_by)):
        return _page(svc.get_all_products())
    try:
        return _page(svc.filter_products(category, min_price, max_price, search, sort_by))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/filter", response_model=ProductListResponse)
def filter_products(
    category: Optional[str] = None,
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    search: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    svc: ProductService = Depends(get_product_service),
):
    try:
        return _page(svc.filter_products(category, min_price, max_price, search, sort_by))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/search", response_model=ProductListResponse)
def search_products(
    q: str = "",
    svc: ProductService = Depends(get_product_service),
):
    return _page(svc.search_products(q))


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.get_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ---------- Catalog management ----------

@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(product_in: ProductCreate, svc: ProductService = Depends(get_product_service)):
    logger.info("Creating product %s", product_in.name)
    return svc.create_product(product_in)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_in: ProductUpdate,
    svc: ProductService = Depends(get_product_service),
):
    try:
        return svc.update_product(product_id, product_in)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    try:
        svc.delete_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
