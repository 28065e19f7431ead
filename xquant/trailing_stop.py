"""Trailing stop strategy: follow the price and exit on a reversal."""

from __future__ import annotations

import sys

from xquant.models import MarketData, Order, OrderSide, OrderType
from xquant.strategy import Strategy


class TrailingStopStrategy(Strategy):
    """Issues one market order when price reverses by ``trailing_delta`` percent."""

    def __init__(
        self,
        symbol: str,
        side: OrderSide,
        quantity: float,
        trailing_delta: float,
        activation_price: float | None,
    ) -> None:
        self._name = f"TrailingStop-{symbol}"
        self._description = "Price trailing based stop order strategy"
        self.symbol = symbol
        self.side = side
        self.quantity = quantity
        self.entry_price: float | None = None
        self.trailing_delta = trailing_delta
        self.activation_price = activation_price
        self.highest_price = 0.0
        self.lowest_price = sys.float_info.max
        self.current_market_data: MarketData | None = None
        self.activated = activation_price is None
        self.is_active = True
        self.executed = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def set_entry_price(self, price: float) -> None:
        self.entry_price = price
        self.highest_price = price
        self.lowest_price = price

    def _stop_price(self) -> float | None:
        if self.current_market_data is None:
            return None
        if self.side is OrderSide.BUY:
            return self.highest_price - self.highest_price * (self.trailing_delta / 100.0)
        return self.lowest_price + self.lowest_price * (self.trailing_delta / 100.0)

    def _is_stop_triggered(self) -> bool:
        data = self.current_market_data
        stop_price = self._stop_price()
        if data is None or stop_price is None:
            return False
        if self.side is OrderSide.BUY:
            return data.close <= stop_price
        return data.close >= stop_price

    def _check_activation(self) -> None:
        if self.activated or self.activation_price is None:
            return
        data = self.current_market_data
        if data is None:
            return
        if self.side is OrderSide.BUY:
            reached = data.close <= self.activation_price
        else:
            reached = data.close >= self.activation_price
        if reached:
            self.activated = True
            self.highest_price = data.close
            self.lowest_price = data.close

    def update(self, market_data: MarketData) -> None:
        if market_data.symbol != self.symbol:
            return
        self.current_market_data = market_data
        self._check_activation()
        if self.activated:
            price = market_data.close
            self.highest_price = max(self.highest_price, price)
            self.lowest_price = min(self.lowest_price, price)

    def get_orders(self) -> list[Order]:
        if not self.is_active or self.executed or not self.activated:
            return []
        data = self.current_market_data
        if data is None or not self._is_stop_triggered():
            return []
        order = Order(self.symbol, self.side, OrderType.MARKET, self.quantity, data.close)
        self.executed = True
        self.is_active = False
        return [order]