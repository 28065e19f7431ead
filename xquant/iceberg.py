"""Iceberg strategy: build a large position while showing only small slices."""

from __future__ import annotations

from xquant.models import MarketData, Order, OrderSide, OrderType
from xquant.strategy import Strategy


class IcebergStrategy(Strategy):
    """Places limit orders of ``display_quantity`` while the price is favourable."""

    def __init__(
        self,
        symbol: str,
        side: OrderSide,
        total_quantity: float,
        limit_price: float,
        display_quantity: float,
    ) -> None:
        self._name = f"Iceberg-{symbol}"
        self._description = "Hidden large order execution strategy"
        self.symbol = symbol
        self.side = side
        self.total_quantity = total_quantity
        self.limit_price = limit_price
        self.display_quantity = min(display_quantity, total_quantity)
        self.executed_quantity = 0.0
        self.is_active = True
        self.current_market_data: MarketData | None = None
        self.price_condition_met = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def _check_price_condition(self) -> bool:
        data = self.current_market_data
        if data is None:
            return False
        if self.side is OrderSide.BUY:
            return data.close <= self.limit_price
        return data.close >= self.limit_price

    def update(self, market_data: MarketData) -> None:
        if market_data.symbol != self.symbol:
            return
        self.current_market_data = market_data
        self.price_condition_met = self._check_price_condition()

    def get_orders(self) -> list[Order]:
        if not self.is_active or self.executed_quantity >= self.total_quantity:
            return []
        if not self.price_condition_met:
            return []

        remaining = self.total_quantity - self.executed_quantity
        if remaining <= 0.0:
            self.is_active = False
            return []

        next_quantity = min(self.display_quantity, remaining)
        order = Order(
            self.symbol, self.side, OrderType.LIMIT, next_quantity, self.limit_price
        ).with_iceberg_qty(next_quantity)

        self.executed_quantity += next_quantity
        if self.executed_quantity >= self.total_quantity:
            self.is_active = False
        return [order]