from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Sequence

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.models.catalog_models import Product
from storefront.models.order_models import OrderItem
from storefront.schemas.product_schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductRepository:
    """Data Access Layer for the Product model (the catalog store)."""

    def __init__(self, db: Session):
        self.db = db

    # ---------- READ ----------
    def get(self, product_id: int) -> Optional[Product]:
        """Get a product by its ID."""
        return self.db.query(Product).filter(Product.id == product_id).first()

    def list(self) -> List[Product]:
        """All products in store order (id ascending)."""
        return self.db.query(Product).order_by(Product.id.asc()).all()

    def count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar() or 0

    def search(self, text: str) -> List[Product]:
        """Case-insensitive substring match on name OR description."""
        return (
            self.db.query(Product)
            .filter(self._text_clause(text))
            .order_by(Product.id.asc())
            .all()
        )

    def filter(
        self,
        category: Optional[str] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        search: Optional[str] = None,
        order_by: Sequence[Any] = (),
    ) -> List[Product]:
        """
        AND of every given predicate; a None argument imposes no constraint.
        Ex: filter(category="moteur", max_price=30000, order_by=[Product.price.desc()])
        """
        query = self.db.query(Product)
        if category is not None:
            query = query.filter(func.lower(Product.category) == category.lower())
        if min_price is not None:
            query = query.filter(Product.price >= min_price)
        if max_price is not None:
            query = query.filter(Product.price <= max_price)
        if search is not None:
            query = query.filter(self._text_clause(search))
        return query.order_by(*order_by).all()

    def is_referenced(self, product_id: int) -> bool:
        """True when at least one order line item points at the product."""
        return (
            self.db.query(OrderItem.id).filter(OrderItem.product_id == product_id).first()
            is not None
        )

    # ---------- WRITE ----------
    def create(self, product_in: ProductCreate) -> Product:
        db_product = Product(**product_in.model_dump())
        self.db.add(db_product)
        self._commit()
        self.db.refresh(db_product)
        return db_product

    def add_all(self, products: Iterable[Product]) -> None:
        self.db.add_all(list(products))
        self._commit()

    def update(self, product: Product, product_in: ProductUpdate) -> Product:
        """Merge-patch: only fields that were sent with a non-null value are written."""
        update_data = product_in.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(product, field, value)

        self.db.add(product)
        self._commit()
        self.db.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self.db.delete(product)
        self._commit()

    # ---------- helpers ----------
    @staticmethod
    def _text_clause(text: str):
        return or_(
            Product.name.icontains(text, autoescape=True),
            Product.description.icontains(text, autoescape=True),
        )

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("[catalog] commit failed, rolled back")
            raise
