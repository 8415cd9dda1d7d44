"""
Order status lifecycle: PENDING -> CONFIRMED -> DELIVERED.

By default any status can be set from any other. With ORDER_STATUS_STRICT
turned on, only the forward steps of the table below (and re-setting the
current status) are accepted.
"""
from __future__ import annotations

from typing import Dict, FrozenSet, Optional, Union

from storefront.core.config import settings
from storefront.core.exceptions import ValidationError
from storefront.models.order_models import OrderStatus

STRICT_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.CONFIRMED, OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.DELIVERED}),
}

ALLOWED_TOKENS = tuple(s.value for s in OrderStatus)


def parse_status(token: Union[str, OrderStatus, None]) -> OrderStatus:
    """Map a wire token ('confirmed', 'CONFIRMED'...) to an OrderStatus."""
    if isinstance(token, OrderStatus):
        return token
    if token is None:
        raise ValidationError("Status field is required.")
    try:
        return OrderStatus(token.strip().lower())
    except ValueError:
        raise ValidationError(
            f"Invalid status value {token!r}, expected one of: {', '.join(ALLOWED_TOKENS)}"
        )


def is_transition_allowed(
    current: OrderStatus, requested: OrderStatus, strict: Optional[bool] = None
) -> bool:
    if strict is None:
        strict = settings.ORDER_STATUS_STRICT
    if not strict:
        return True
    return requested in STRICT_TRANSITIONS[current]


def check_transition(
    current: OrderStatus, requested: OrderStatus, strict: Optional[bool] = None
) -> None:
    if not is_transition_allowed(current, requested, strict):
        raise ValidationError(
            f"Cannot move order from {current.value!r} to {requested.value!r}"
        )
