"""Pre-submission order checks."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

from xquant.errors import InvalidParameterError, RiskLimitExceededError
from xquant.models import Order


def _fmt(value: float) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


class OrderValidator(ABC):
    """Rejects an order by raising a TradingError."""

    @abstractmethod
    def validate(self, order: Order) -> None:
        """Raise if the order must not be submitted."""


class BasicOrderValidator(OrderValidator):
    """Checks quantity bounds and that the price is not negative."""

    def __init__(self, min_order_size: float, max_order_size: float) -> None:
        self.min_order_size = min_order_size
        self.max_order_size = max_order_size

    def validate(self, order: Order) -> None:
        if order.quantity <= 0.0:
            raise InvalidParameterError("Order quantity must be positive")
        if order.quantity < self.min_order_size:
            raise InvalidParameterError(
                f"Order quantity too small, minimum: {_fmt(self.min_order_size)}"
            )
        if order.quantity > self.max_order_size:
            raise InvalidParameterError(
                f"Order quantity too large, maximum: {_fmt(self.max_order_size)}"
            )
        if order.price < 0.0:
            raise InvalidParameterError("Price cannot be negative")


class RiskOrderValidator(OrderValidator):
    """Checks position size and notional value limits."""

    def __init__(self, max_position_size: float, max_notional_value: float) -> None:
        self.max_position_size = max_position_size
        self.max_notional_value = max_notional_value

    def validate(self, order: Order) -> None:
        if order.quantity > self.max_position_size:
            raise RiskLimitExceededError(
                f"Order exceeds maximum position size: {_fmt(self.max_position_size)}"
            )
        if order.quantity * order.price > self.max_notional_value:
            raise RiskLimitExceededError(
                f"Order exceeds maximum notional value: {_fmt(self.max_notional_value)}"
            )