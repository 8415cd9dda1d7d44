from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.models.catalog_models import Category
from storefront.schemas.category_schemas import CategoryCreate, CategoryUpdate


class CategoryRepository:
    """Data Access Layer for the Category model."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, category_id: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    def list(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.id.asc()).all()

    def create(self, category_in: CategoryCreate) -> Category:
        db_category = Category(id=category_in.id, name=category_in.name)
        self.db.add(db_category)
        self.db.commit()
        self.db.refresh(db_category)
        return db_category

    def update(self, category: Category, category_in: CategoryUpdate) -> Category:
        update_data = category_in.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(category, field, value)

        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def delete(self, category: Category) -> None:
        self.db.delete(category)
        self.db.commit()
