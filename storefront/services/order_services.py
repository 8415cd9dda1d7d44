# storefront/services/order_services.py
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import List, Optional, Union

from prometheus_client import Counter

from storefront.core.exceptions import NotFoundError
from storefront.models.order_models import CustomerInfo, Order, OrderItem, OrderStatus
from storefront.repositories.order_repositories import OrderRepository
from storefront.repositories.product_repositories import ProductRepository
from storefront.schemas.order_schemas import OrderCreate
from storefront.services.order_status import check_transition, parse_status

logger = logging.getLogger(__name__)

ORDERS_CREATED = Counter("orders_created_total", "Orders successfully created")

ORDER_ID_PREFIX = "order_"


class OrderService:
    """
    Order business layer.
    - Assembles an order from its request: every product must exist,
      then the order and all of its items are committed together.
    - Status updates go through the lifecycle table.
    """

    def __init__(self, repository: OrderRepository, products: ProductRepository):
        self.repository = repository
        self.products = products

    # ==========================================================
    # === Read =================================================
    # ==========================================================

    def get_order(self, order_id: str) -> Order:
        order = self.repository.get(order_id)
        if not order:
            logger.debug("order not found", extra={"order_id": order_id})
            raise NotFoundError(f"Order not found with id: {order_id}")
        return order

    def get_all_orders(self) -> List[Order]:
        return self.repository.list()

    def get_orders_by_phone(self, phone: str) -> List[Order]:
        orders = self.repository.list_by_phone(phone)
        logger.info("orders by phone", extra={"phone": phone, "count": len(orders)})
        return orders

    # ==========================================================
    # === Create ===============================================
    # ==========================================================

    def create_order(self, order_in: OrderCreate) -> Order:
        logger.info(
            "creating order",
            extra={"items": len(order_in.items), "phone": order_in.customer_info.phone},
        )

        # Resolve every product before touching the order store
        items: List[OrderItem] = []
        for item_in in order_in.items:
            product = self.products.get(item_in.product_id)
            if product is None:
                logger.warning(
                    "order rejected, unknown product", extra={"product_id": item_in.product_id}
                )
                raise NotFoundError(f"Product not found with id: {item_in.product_id}")
            items.append(OrderItem(product=product, quantity=item_in.quantity))

        info = order_in.customer_info
        order = Order(
            id=self._next_order_id(),
            customer_info=CustomerInfo(
                first_name=info.first_name,
                last_name=info.last_name,
                phone=info.phone,
                address=info.address,
                city=info.city,
                quarter=info.quarter,
            ),
            total=order_in.total,
            status=OrderStatus.PENDING,
            created_at=datetime.now(timezone.utc),
        )
        for item in items:
            item.order = order

        order = self.repository.create(order)
        ORDERS_CREATED.inc()
        logger.info("order created", extra={"order_id": order.id, "total": order.total})
        return order

    def _next_order_id(self, now_ms: Optional[int] = None) -> str:
        """`order_<epoch millis>`, bumped forward while the token is taken."""
        stamp = now_ms if now_ms is not None else int(time.time() * 1000)
        order_id = f"{ORDER_ID_PREFIX}{stamp}"
        while self.repository.exists(order_id):
            stamp += 1
            order_id = f"{ORDER_ID_PREFIX}{stamp}"
        return order_id

    # ==========================================================
    # === Status ===============================================
    # ==========================================================

    def update_order_status(self, order_id: str, new_status: Union[str, OrderStatus]) -> Order:
        order = self.get_order(order_id)
        status = parse_status(new_status)

        if order.status == status:
            logger.info("order status unchanged", extra={"order_id": order.id, "status": status.value})
            return order

        check_transition(order.status, status)

        old_status = order.status
        order = self.repository.update_status(order, status)
        logger.info(
            "order status updated",
            extra={"order_id": order.id, "from": old_status.value, "to": status.value},
        )
        return order

    # ==========================================================
    # === Delete ===============================================
    # ==========================================================

    def delete_order(self, order_id: str) -> None:
        order = self.get_order(order_id)
        self.repository.delete(order)
        logger.info("order deleted", extra={"order_id": order_id})
