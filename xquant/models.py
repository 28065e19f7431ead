"""Core trading data models: market data, orders, positions and trades."""

from __future__ import annotations

import dataclasses
import enum
import math
from dataclasses import dataclass, field

from xquant.timeutils import current_timestamp_ms


@dataclass
class MarketData:
    """One OHLCV bar for a symbol; timestamp is in milliseconds."""

    symbol: str
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float

    def vwap(self) -> float:
        """Typical price of the bar, (high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3.0


class OrderSide(enum.Enum):
    BUY = "Buy"
    SELL = "Sell"


class OrderType(enum.Enum):
    MARKET = "Market"
    LIMIT = "Limit"
    STOP_LOSS = "StopLoss"
    STOP_LIMIT = "StopLimit"
    TRAILING_STOP = "TrailingStop"
    ICEBERG = "Iceberg"
    VWAP = "VWAP"
    TWAP = "TWAP"


class OrderStatus(enum.Enum):
    NEW = "New"
    PARTIALLY_FILLED = "PartiallyFilled"
    FILLED = "Filled"
    CANCELLED = "Cancelled"
    REJECTED = "Rejected"
    EXPIRED = "Expired"


@dataclass
class Order:
    """An order; ``id`` stays empty until the exchange assigns one."""

    symbol: str
    side: OrderSide
    order_type: OrderType
    quantity: float
    price: float
    id: str = ""
    stop_price: float | None = None
    time_in_force: str = "GTC"
    created_at: int = field(default_factory=current_timestamp_ms)
    client_order_id: str | None = None
    iceberg_qty: float | None = None
    trailing_delta: float | None = None
    execution_interval: int | None = None
    target_percentage: float | None = None

    def with_stop_price(self, stop_price: float) -> Order:
        return dataclasses.replace(self, stop_price=stop_price)

    def with_time_in_force(self, time_in_force: str) -> Order:
        return dataclasses.replace(self, time_in_force=time_in_force)

    def with_client_order_id(self, client_order_id: str) -> Order:
        return dataclasses.replace(self, client_order_id=client_order_id)

    def with_iceberg_qty(self, iceberg_qty: float) -> Order:
        return dataclasses.replace(self, iceberg_qty=iceberg_qty, order_type=OrderType.ICEBERG)

    def with_trailing_delta(self, trailing_delta: float) -> Order:
        return dataclasses.replace(
            self, trailing_delta=trailing_delta, order_type=OrderType.TRAILING_STOP
        )

    def with_vwap_params(self, execution_interval: int, target_percentage: float | None) -> Order:
        return dataclasses.replace(
            self,
            execution_interval=execution_interval,
            target_percentage=target_percentage,
            order_type=OrderType.VWAP,
        )

    def with_twap_params(self, execution_interval: int) -> Order:
        return dataclasses.replace(
            self, execution_interval=execution_interval, order_type=OrderType.TWAP
        )


@dataclass
class Position:
    """An open position; positive quantity is long, negative is short."""

    symbol: str
    quantity: float
    entry_price: float
    current_price: float | None = None
    unrealized_pnl: float = 0.0

    def __post_init__(self) -> None:
        if self.current_price is None:
            self.current_price = self.entry_price

    def is_long(self) -> bool:
        return self.quantity > 0.0

    def is_short(self) -> bool:
        return self.quantity < 0.0

    def update_price(self, new_price: float) -> None:
        self.current_price = new_price
        self.calculate_pnl()

    def calculate_pnl(self) -> None:
        """Recompute unrealized PnL from the current price."""
        if self.quantity != 0.0:
            direction = math.copysign(1.0, self.quantity)
            self.unrealized_pnl = (
                direction * abs(self.current_price - self.entry_price) * abs(self.quantity)
            )
        else:
            self.unrealized_pnl = 0.0


@dataclass
class Trade:
    """An execution of (part of) an order."""

    id: str
    symbol: str
    price: float
    quantity: float
    timestamp: int
    order_id: str
    side: OrderSide

    def value(self) -> float:
        """Notional value of the trade."""
        return self.price * self.quantity