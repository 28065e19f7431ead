"""Exception hierarchy for trading operations."""

from __future__ import annotations


class TradingError(Exception):
    """Base class for every error raised by the trading system."""


class NotConnectedError(TradingError):
    """The provider or exchange is not connected."""

    def __init__(self) -> None:
        super().__init__("not connected")


class _SymbolError(TradingError):
    """An error tied to a single trading symbol."""

    _template = "{symbol}"

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(self._template.format(symbol=symbol))


class NotSubscribedError(_SymbolError):
    """No subscription exists for the symbol."""

    _template = "not subscribed to {symbol}"


class DataNotFoundError(_SymbolError):
    """No market data is available for the symbol."""

    _template = "no market data for {symbol}"


class ChannelNotFoundError(_SymbolError):
    """No broadcast channel exists for the symbol."""

    _template = "no channel for {symbol}"


class AlreadyRunningError(TradingError):
    """A task that should run once is already running."""


class TaskNotFoundError(TradingError):
    """A background task could not be found."""


class OrderNotFoundError(TradingError):
    """The order is unknown."""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"order not found: {order_id}")


class InvalidParameterError(TradingError):
    """A parameter failed validation."""


class RiskLimitExceededError(TradingError):
    """An order breaches a configured risk limit."""


class ConfigError(TradingError):
    """A configuration value is missing or has the wrong type."""


class NoAvailableProviderError(TradingError):
    """No connected market data provider is available."""

    def __init__(self) -> None:
        super().__init__("no available market data provider")