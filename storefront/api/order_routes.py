from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.core.database import get_db
from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.repositories.order_repositories import OrderRepository
from storefront.repositories.product_repositories import ProductRepository
from storefront.schemas.order_schemas import OrderCreate, OrderResponse, OrderUpdate
from storefront.services.order_services import OrderService


router = APIRouter(prefix=f"{settings.API_PREFIX}/orders", tags=["orders"])
logger = logging.getLogger(__name__)


# ---------- Dependency injection ----------
def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Build an OrderService over the order and product stores of one session."""
    return OrderService(OrderRepository(db), ProductRepository(db))


# ---------- Endpoints CRUD ----------

@router.get("", response_model=List[OrderResponse])
def list_orders(svc: OrderService = Depends(get_order_service)):
    """All orders, newest first."""
    return svc.get_all_orders()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(order_in: OrderCreate, svc: OrderService = Depends(get_order_service)):
    """Create an order and its line items in one transaction."""
    logger.info("Creating order for customer %s", order_in.customer_info.phone)
    try:
        return svc.create_order(order_in)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/phone/{phone}", response_model=List[OrderResponse])
def list_orders_by_phone(phone: str, svc: OrderService = Depends(get_order_service)):
    return svc.get_orders_by_phone(phone)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    try:
        return svc.get_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: str,
    status_update: OrderUpdate,
    svc: OrderService = Depends(get_order_service),
):
    """Set the status token ('pending', 'confirmed', 'delivered')."""
    try:
        return svc.update_order_status(order_id, status_update.status)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: str, svc: OrderService = Depends(get_order_service)):
    try:
        logger.info("Deleting order %s", order_id)
        svc.delete_order(order_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
