"""VWAP strategy: slice an order and price each slice at the recent VWAP."""

from __future__ import annotations

from collections import deque
from itertools import islice

from xquant.models import MarketData, Order, OrderSide, OrderType
from xquant.strategy import Strategy

_SLICES = 10


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


class VwapStrategy(Strategy):
    """Places ten limit orders at the VWAP of the last ``vwap_window`` bars."""

    def __init__(
        self,
        symbol: str,
        side: OrderSide,
        target_quantity: float,
        execution_interval: int,
        vwap_window: int,
    ) -> None:
        self._name = f"VWAP-{symbol}"
        self._description = "Volume Weighted Average Price based execution strategy"
        self.symbol = symbol
        self.side = side
        self.target_quantity = target_quantity
        self.execution_interval = execution_interval
        self.vwap_window = vwap_window
        # Twice the window is kept; older bars are dropped as new ones arrive.
        self.price_data: deque[MarketData] = deque(maxlen=vwap_window * 2)
        self.executed_quantity = 0.0
        self.is_active = True
        self.last_order_time = 0
        self.order_interval = _trunc_div(execution_interval, _SLICES)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def _calculate_vwap(self) -> float | None:
        if not self.price_data:
            return None
        start = max(len(self.price_data) - self.vwap_window, 0)
        window = list(islice(self.price_data, start, None))
        volume_sum = sum(bar.volume for bar in window)
        if volume_sum > 0.0:
            return sum(bar.volume * bar.close for bar in window) / volume_sum
        return None

    def update(self, market_data: MarketData) -> None:
        if market_data.symbol != self.symbol:
            return
        self.price_data.append(market_data)

    def get_orders(self) -> list[Order]:
        if not self.is_active or self.executed_quantity >= self.target_quantity:
            return []
        if not self.price_data:
            return []

        current_time = self.price_data[-1].timestamp
        if current_time - self.last_order_time < self.order_interval:
            return []

        vwap = self._calculate_vwap()
        if vwap is None:
            return []

        remaining = self.target_quantity - self.executed_quantity
        slice_size = min(self.target_quantity / _SLICES, remaining)
        if slice_size <= 0.0:
            return []

        order = Order(self.symbol, self.side, OrderType.LIMIT, slice_size, vwap)
        self.executed_quantity += slice_size
        self.last_order_time = current_time
        if self.executed_quantity >= self.target_quantity:
            self.is_active = False
        return [order]