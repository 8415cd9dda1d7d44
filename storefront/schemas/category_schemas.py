from __future__ import annotations

from typing import Optional

from storefront.schemas.common import CamelModel, NonEmptyStr


class CategoryCreate(CamelModel):
    id: NonEmptyStr
    name: NonEmptyStr


class CategoryUpdate(CamelModel):
    name: Optional[NonEmptyStr] = None


class CategoryResponse(CamelModel):
    id: str
    name: str
