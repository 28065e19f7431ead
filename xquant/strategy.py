"""Trading strategy and strategy factory interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod

from xquant.models import MarketData, Order


class Strategy(ABC):
    """A trading strategy fed with market data that emits orders."""

    @abstractmethod
    def update(self, market_data: MarketData) -> None:
        """Feed a new bar of market data into the strategy."""

    @abstractmethod
    def get_orders(self) -> list[Order]:
        """Orders the strategy wants placed now; may advance its state."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short strategy name."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the strategy."""


class StrategyFactory(ABC):
    """Creates fresh strategy instances."""

    @abstractmethod
    def create(self) -> Strategy:
        """Build a new strategy."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the factory."""