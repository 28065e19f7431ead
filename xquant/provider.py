"""Market data provider interface and a manager over several providers."""

from __future__ import annotations

import asyncio
import contextlib
from abc import ABC, abstractmethod

from xquant.errors import NoAvailableProviderError, TradingError
from xquant.models import MarketData


class MarketDataProvider(ABC):
    """A source of live market data."""

    @abstractmethod
    async def subscribe(self, symbol: str) -> None:
        """Start receiving data for ``symbol``."""

    @abstractmethod
    async def unsubscribe(self, symbol: str) -> None:
        """Stop receiving data for ``symbol``."""

    @abstractmethod
    def get_receiver(self, symbol: str) -> asyncio.Queue[MarketData]:
        """A queue fed with the symbol's market data."""

    @abstractmethod
    async def get_current_data(self, symbol: str) -> MarketData:
        """The most recent market data for ``symbol``."""

    @abstractmethod
    async def is_connected(self) -> bool:
        """Whether the provider is connected."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection."""


class MarketDataManager:
    """Fans subscriptions out to providers and reads from the first connected one."""

    def __init__(self) -> None:
        self.providers: list[MarketDataProvider] = []
        self._active_symbols: list[str] = []

    @property
    def active_symbols(self) -> list[str]:
        return list(self._active_symbols)

    def add_provider(self, provider: MarketDataProvider) -> None:
        self.providers.append(provider)

    async def subscribe_all(self, symbol: str) -> None:
        """Subscribe every provider; individual failures are ignored."""
        if symbol not in self._active_symbols:
            self._active_symbols.append(symbol)
        for provider in self.providers:
            with contextlib.suppress(TradingError):
                await provider.subscribe(symbol)

    async def unsubscribe_all(self, symbol: str) -> None:
        self._active_symbols = [s for s in self._active_symbols if s != symbol]
        for provider in self.providers:
            with contextlib.suppress(TradingError):
                await provider.unsubscribe(symbol)

    async def connect_all(self) -> None:
        """Connect every provider, then resubscribe the active symbols."""
        for provider in self.providers:
            with contextlib.suppress(TradingError):
                await provider.connect()
        for symbol in list(self._active_symbols):
            await self.subscribe_all(symbol)

    async def disconnect_all(self) -> None:
        for provider in self.providers:
            with contextlib.suppress(TradingError):
                await provider.disconnect()

    async def _first_connected(self) -> MarketDataProvider:
        for provider in self.providers:
            if await provider.is_connected():
                return provider
        raise NoAvailableProviderError()

    async def get_receiver(self, symbol: str) -> asyncio.Queue[MarketData]:
        provider = await self._first_connected()
        return provider.get_receiver(symbol)

    async def get_current_data(self, symbol: str) -> MarketData:
        provider = await self._first_connected()
        return await provider.get_current_data(symbol)