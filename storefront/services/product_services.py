# storefront/services/product_services.py
from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from storefront.core.exceptions import NotFoundError, ValidationError
from storefront.models.catalog_models import Product
from storefront.repositories.product_repositories import ProductRepository
from storefront.schemas.product_schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

ProductPage = Tuple[List[Product], int]

# Some clients serialize a missing query parameter as the text "null"
NULL_TOKEN = "null"

DEFAULT_SORT = "price_asc"
SORT_KEYS = {
    "price_asc": (Product.price.asc(), Product.id.asc()),
    "price_desc": (Product.price.desc(), Product.id.asc()),
    "name_asc": (Product.name.asc(), Product.id.asc()),
    "name_desc": (Product.name.desc(), Product.id.asc()),
}


def _normalize_text(value: Optional[str]) -> Optional[str]:
    if value is None or value == NULL_TOKEN:
        return None
    value = value.strip()
    return value or None


def _normalize_price(value: Union[int, str, None], name: str) -> Optional[int]:
    if isinstance(value, str):
        value = _normalize_text(value)
        if value is None:
            return None
        try:
            value = int(value)
        except ValueError:
            raise ValidationError(f"{name} must be an integer, got {value!r}")
    if value is not None and value < 0:
        raise ValidationError(f"{name} must not be negative")
    return value


class ProductService:
    """
    Catalog business layer.
    - Query engine: filter / search / sort over the catalog store.
    - Catalog management: create, merge-patch update, delete.
    """

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    # ==========================================================
    # === Query engine =========================================
    # ==========================================================

    def get_all_products(self) -> ProductPage:
        products = self.repository.list()
        logger.info("listed products", extra={"count": len(products)})
        return products, len(products)

    def search_products(self, query: Optional[str]) -> ProductPage:
        if query is None or not query.strip():
            logger.debug("empty search query, nothing to match")
            return [], 0

        products = self.repository.search(query.strip())
        logger.info("search returned products", extra={"query": query, "count": len(products)})
        return products, len(products)

    def filter_products(
        self,
        category: Optional[str] = None,
        min_price: Union[int, str, None] = None,
        max_price: Union[int, str, None] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
    ) -> ProductPage:
        category = _normalize_text(category)
        search = _normalize_text(search)
        sort_by = _normalize_text(sort_by)
        min_price = _normalize_price(min_price, "minPrice")
        max_price = _normalize_price(max_price, "maxPrice")

        if min_price is not None and max_price is not None and min_price > max_price:
            logger.warning(
                "invalid price range", extra={"min_price": min_price, "max_price": max_price}
            )
            raise ValidationError("Minimum price cannot be greater than maximum price")

        order_by = SORT_KEYS.get((sort_by or DEFAULT_SORT).lower(), SORT_KEYS[DEFAULT_SORT])

        products = self.repository.filter(
            category=category,
            min_price=min_price,
            max_price=max_price,
            search=search,
            order_by=order_by,
        )
        logger.info(
            "filter returned products",
            extra={
                "category": category,
                "min_price": min_price,
                "max_price": max_price,
                "search": search,
                "sort_by": sort_by,
                "count": len(products),
            },
        )
        return products, len(products)

    # ==========================================================
    # === Catalog management ===================================
    # ==========================================================

    def get_product(self, product_id: int) -> Product:
        product = self.repository.get(product_id)
        if not product:
            logger.debug("product not found", extra={"product_id": product_id})
            raise NotFoundError(f"Product not found with id: {product_id}")
        return product

    def create_product(self, product_in: ProductCreate) -> Product:
        product = self.repository.create(product_in)
        logger.info("product created", extra={"product_id": product.id, "product_name": product.name})
        return product

    def update_product(self, product_id: int, product_in: ProductUpdate) -> Product:
        product = self.get_product(product_id)
        updated = self.repository.update(product, product_in)
        logger.info(
            "product updated",
            extra={
                "product_id": product_id,
                "fields": sorted(product_in.model_dump(exclude_unset=True, exclude_none=True)),
            },
        )
        return updated

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        if self.repository.is_referenced(product_id):
            raise ValidationError(
                f"Product {product_id} is referenced by existing orders and cannot be deleted"
            )
        self.repository.delete(product)
        logger.info("product deleted", extra={"product_id": product_id})
