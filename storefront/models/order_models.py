from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Enum as SqlEnum
from sqlalchemy.orm import Mapped, composite, mapped_column, relationship

from storefront.core.database import Base
from storefront.models.catalog_models import Product


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"


@dataclasses.dataclass
class CustomerInfo:
    """Customer details embedded in an order. Never changed once the order exists."""

    first_name: Optional[str]
    last_name: str
    phone: str
    address: str
    city: str
    quarter: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    customer_first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    customer_last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    customer_phone: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    customer_address: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_city: Mapped[str] = mapped_column(String(100), nullable=False)
    customer_quarter: Mapped[str] = mapped_column(String(100), nullable=False)

    customer_info: Mapped[CustomerInfo] = composite(
        "customer_first_name",
        "customer_last_name",
        "customer_phone",
        "customer_address",
        "customer_city",
        "customer_quarter",
    )

    # caller-asserted, stored verbatim
    total: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        SqlEnum(OrderStatus, name="order_status", native_enum=False, length=20),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False, index=True
    )

    # Relation to order items
    items: Mapped[List["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="selectin",
    )

    @property
    def items_total(self) -> int:
        """Sum of current product price times quantity. Informational only."""
        return sum(item.product.price * item.quantity for item in self.items)

    def __repr__(self) -> str:
        return f"Order(id={self.id!r}, status={self.status}, total={self.total})"


class OrderItem(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id"), nullable=False, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    # Relation back to the order
    order: Mapped[Order] = relationship(back_populates="items")
    # live reference, later product edits show up on re-read
    product: Mapped[Product] = relationship(lazy="joined")
