from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.models.order_models import Order, OrderStatus


logger = logging.getLogger(__name__)


class OrderRepository:
    """Data Access Layer for Order and OrderItem models."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, order_id: str) -> Optional[Order]:
        """Get an order by its ID."""
        return self.db.query(Order).filter(Order.id == order_id).first()

    def exists(self, order_id: str) -> bool:
        return self.db.query(Order.id).filter(Order.id == order_id).first() is not None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """
        List orders newest-created first, with optional equality filters.
        Ex: filters={"customer_phone": "+237690000000", "status": OrderStatus.PENDING}
        """
        query = self.db.query(Order)
        if filters:
            for key, value in filters.items():
                if hasattr(Order, key) and value is not None:
                    query = query.filter(getattr(Order, key) == value)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def list_by_phone(self, phone: str) -> List[Order]:
        return self.list(filters={"customer_phone": phone})

    # ---------- CREATE ----------
    def create(self, order: Order) -> Order:
        """Persist an order together with its items in a single commit."""
        self.db.add(order)
        self._commit()
        self.db.refresh(order)
        return order

    def update_status(self, order: Order, status: OrderStatus) -> Order:
        order.status = status
        self.db.add(order)
        self._commit()
        self.db.refresh(order)
        return order

    def delete(self, order: Order) -> None:
        """Delete an order; its items go with it."""
        self.db.delete(order)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("[orders] commit failed, rolled back")
            raise
