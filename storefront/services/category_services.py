from __future__ import annotations

import logging
from typing import List

from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.models.catalog_models import Category
from storefront.repositories.category_repositories import CategoryRepository
from storefront.schemas.category_schemas import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


class CategoryService:
    """Category listing used by the storefront navigation."""

    def __init__(self, repository: CategoryRepository):
        self.repository = repository

    def get_all_categories(self) -> List[Category]:
        return self.repository.list()

    def get_category(self, category_id: str) -> Category:
        category = self.repository.get(category_id)
        if not category:
            raise NotFoundError(f"Category not found with id: {category_id}")
        return category

    def create_category(self, category_in: CategoryCreate) -> Category:
        if self.repository.get(category_in.id):
            raise ValidationError(f"Category {category_in.id!r} already exists")
        category = self.repository.create(category_in)
        logger.info("category created", extra={"category_id": category.id})
        return category

    def update_category(self, category_id: str, category_in: CategoryUpdate) -> Category:
        category = self.get_category(category_id)
        return self.repository.update(category, category_in)

    def delete_category(self, category_id: str) -> None:
        category = self.get_category(category_id)
        self.repository.delete(category)
        logger.info("category deleted", extra={"category_id": category_id})
