from __future__ import annotations

from enum import StrEnum

from .errors import InvalidStatusTransitionError


class OrderStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELED = "canceled"


class OrderStatusMachine:
    """
    Order lifecycle.

    Notes:
    - Fulfilment moves forward only: pending -> processing -> shipped -> delivered.
    - Cancel is allowed only before shipping.
    - delivered and canceled are terminal.
    """

    TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
        OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELED}),
        OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELED}),
        OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
        OrderStatus.DELIVERED: frozenset(),
        OrderStatus.CANCELED: frozenset(),
    }

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus((raw or "").strip().lower())
        except ValueError as exc:
            raise InvalidStatusTransitionError(f"Unknown order status: {raw}") from exc

    @classmethod
    def can_cancel(cls, current: str) -> bool:
        return OrderStatus.CANCELED in cls.TRANSITIONS[cls.parse(current)]

    @classmethod
    def ensure_transition(cls, current: str, target: str) -> OrderStatus:
        source = cls.parse(current)
        destination = cls.parse(target)
        if destination not in cls.TRANSITIONS[source]:
            if destination == OrderStatus.CANCELED:
                raise InvalidStatusTransitionError(f"Order cannot be canceled once it is {source.value}.")
            raise InvalidStatusTransitionError(
                f"Order status cannot change from {source.value} to {destination.value}."
            )
        return destination
