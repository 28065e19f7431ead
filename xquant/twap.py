"""TWAP strategy: split an order into equal slices spread evenly over time."""

from __future__ import annotations

from xquant.models import MarketData, Order, OrderSide, OrderType
from xquant.strategy import Strategy


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


class TwapStrategy(Strategy):
    """Places ``num_slices`` market orders, one per ``execution_interval / num_slices`` ms."""

    def __init__(
        self,
        symbol: str,
        side: OrderSide,
        total_quantity: float,
        execution_interval: int,
        num_slices: int,
    ) -> None:
        if num_slices <= 0:
            raise ValueError("num_slices must be positive")
        self._name = f"TWAP-{symbol}"
        self._description = "Time Weighted Average Price based execution strategy"
        self.symbol = symbol
        self.side = side
        self.total_quantity = total_quantity
        self.execution_interval = execution_interval
        self.num_slices = num_slices
        self.executed_quantity = 0.0
        self.current_market_data: MarketData | None = None
        self.is_active = True
        self.last_order_time = 0
        self.slice_interval = _trunc_div(execution_interval, num_slices)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def update(self, market_data: MarketData) -> None:
        if market_data.symbol != self.symbol:
            return
        self.current_market_data = market_data

    def get_orders(self) -> list[Order]:
        if not self.is_active or self.executed_quantity >= self.total_quantity:
            return []
        data = self.current_market_data
        if data is None:
            return []

        current_time = data.timestamp
        if self.last_order_time > 0 and current_time - self.last_order_time < self.slice_interval:
            return []

        remaining = self.total_quantity - self.executed_quantity
        if remaining <= 0.0:
            self.is_active = False
            return []

        slice_quantity = min(self.total_quantity / self.num_slices, remaining)
        order = Order(
            self.symbol, self.side, OrderType.MARKET, slice_quantity, data.close
        ).with_twap_params(self.slice_interval)

        self.executed_quantity += slice_quantity
        self.last_order_time = current_time
        if self.executed_quantity >= self.total_quantity:
            self.is_active = False
        return [order]