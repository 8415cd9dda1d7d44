from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel, NonEmptyStr


class ProductBase(CamelModel):
    name: NonEmptyStr = Field(..., description="Display name")
    description: str = Field("", description="Free text description")
    price: int = Field(..., ge=0, description="Price in the smallest currency unit")
    images: List[str] = Field(default_factory=list, description="Image paths or URLs")
    category: Optional[str] = Field(None, description="Free-text category label")
    warranty: Optional[str] = Field(None, description="Warranty duration label, e.g. '12 mois'")


class ProductCreate(ProductBase):
    pass


class ProductUpdate(CamelModel):
    """Merge-patch body: missing or null fields are left unchanged."""

    name: Optional[NonEmptyStr] = None
    description: Optional[str] = None
    price: Optional[int] = Field(None, ge=0)
    images: Optional[List[str]] = None
    category: Optional[str] = None
    warranty: Optional[str] = None


class ProductResponse(ProductBase):
    id: int
    created_at: datetime
    updated_at: datetime


class ProductListResponse(CamelModel):
    products: List[ProductResponse] = []
    count: int = 0
