"""Trading bot interface and signal-to-order conversion."""

from __future__ import annotations

from abc import ABC, abstractmethod

from xquant.bot_config import TradingBotConfig
from xquant.models import MarketData, Order, OrderSide, OrderType
from xquant.signals import SignalType, SignalWithMetadata


class TradingBot(ABC):
    """A bot that turns market data into signals and orders."""

    @abstractmethod
    def update(self, market_data: MarketData) -> None:
        """Feed a new bar of market data into the bot."""

    @abstractmethod
    def evaluate_signals(self) -> list[SignalWithMetadata]:
        """Current trading signals."""

    @abstractmethod
    def generate_orders(self) -> list[Order]:
        """Orders derived from the current signals."""

    @property
    @abstractmethod
    def config(self) -> TradingBotConfig:
        """The bot's configuration."""

    @abstractmethod
    def update_config(self, config: TradingBotConfig) -> None:
        """Replace the configuration and rebuild derived state."""

    @abstractmethod
    def reset(self) -> None:
        """Clear all accumulated state."""

    @property
    def name(self) -> str:
        return self.config.name


def _market(symbol: str, side: OrderSide, quantity: float) -> Order:
    return Order(symbol, side, OrderType.MARKET, quantity, 0.0)


def create_order_from_signal(
    symbol: str,
    signal: SignalWithMetadata,
    position_size: float,
    current_position: float,
) -> Order | None:
    """Market order implied by ``signal`` given the current position, if any."""
    kind = signal.signal_type

    if kind in (SignalType.BUY, SignalType.STRONG_BUY):
        return _market(symbol, OrderSide.BUY, position_size) if current_position <= 0.0 else None

    if kind in (SignalType.SELL, SignalType.STRONG_SELL):
        return _market(symbol, OrderSide.SELL, position_size) if current_position >= 0.0 else None

    if kind is SignalType.REDUCE_LONG:
        if current_position > 0.0:
            reduce_size = min(current_position * 0.5, position_size)
            if reduce_size > 0.0:
                return _market(symbol, OrderSide.SELL, reduce_size)
        return None

    if kind is SignalType.REDUCE_SHORT:
        if current_position < 0.0:
            reduce_size = min(abs(current_position) * 0.5, position_size)
            if reduce_size > 0.0:
                return _market(symbol, OrderSide.BUY, reduce_size)
        return None

    if kind is SignalType.CLOSE_LONG:
        return _market(symbol, OrderSide.SELL, current_position) if current_position > 0.0 else None

    if kind is SignalType.CLOSE_SHORT:
        if current_position < 0.0:
            return _market(symbol, OrderSide.BUY, abs(current_position))
        return None

    return None