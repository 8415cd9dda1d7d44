from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from storefront.models.order_models import OrderStatus
from storefront.schemas.common import CamelModel, NonEmptyStr
from storefront.schemas.product_schemas import ProductResponse


class CustomerInfoSchema(CamelModel):
    first_name: Optional[str] = None
    last_name: NonEmptyStr
    phone: NonEmptyStr
    address: NonEmptyStr
    city: NonEmptyStr
    quarter: NonEmptyStr


class ProductRef(CamelModel):
    id: int


class OrderItemCreate(CamelModel):
    """
    One requested line. The product is given either as `productId`
    or, as the storefront client sends it, as `product: {"id": ...}`.
    """

    product_id: Optional[int] = Field(None, description="ID of the product")
    product: Optional[ProductRef] = None
    quantity: int = Field(..., gt=0, description="Quantity of the product")

    @model_validator(mode="after")
    def _resolve_product_id(self) -> "OrderItemCreate":
        if self.product_id is None:
            if self.product is None:
                raise ValueError("productId is required")
            self.product_id = self.product.id
        return self


class OrderCreate(CamelModel):
    customer_info: CustomerInfoSchema
    items: List[OrderItemCreate]
    total: int = Field(..., gt=0, description="Order total asserted by the caller")


class OrderUpdate(CamelModel):
    status: Optional[str] = None


class OrderItemResponse(CamelModel):
    id: int
    product: ProductResponse
    quantity: int


class OrderResponse(CamelModel):
    id: str
    customer_info: CustomerInfoSchema
    items: List[OrderItemResponse] = []
    total: int
    items_total: int = Field(
        ..., description="Derived from current product prices, informational only"
    )
    status: OrderStatus
    created_at: datetime
