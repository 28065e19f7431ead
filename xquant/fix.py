"""Market data provider over a simulated FIX 4.4 session."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import random

from xquant.errors import (
    ChannelNotFoundError,
    DataNotFoundError,
    NotConnectedError,
    NotSubscribedError,
)
from xquant.models import MarketData
from xquant.provider import MarketDataProvider
from xquant.stream import MarketDataStream
from xquant.timeutils import current_timestamp_ms

logger = logging.getLogger(__name__)


class FixProvider(MarketDataProvider):
    """Publishes simulated FIX market data into a shared stream."""

    def __init__(
        self,
        host: str,
        port: int,
        sender_comp_id: str,
        target_comp_id: str,
        stream: MarketDataStream,
        *,
        logon_delay: float = 1.0,
        tick_interval: float = 0.1,
    ) -> None:
        self.host = host
        self.port = port
        self.sender_comp_id = sender_comp_id
        self.target_comp_id = target_comp_id
        self.stream = stream
        self.session_id = f"FIX.4.4:{sender_comp_id}:{target_comp_id}"
        self.logon_delay = logon_delay
        self.tick_interval = tick_interval
        self._subscriptions: dict[str, str] = {}
        self._connected = False
        self._task: asyncio.Task[None] | None = None

    @property
    def subscriptions(self) -> dict[str, str]:
        """Symbol to subscription id."""
        return dict(self._subscriptions)

    async def _run_session(self, symbols: list[str]) -> None:
        logger.info("Starting FIX session: %s", self.session_id)
        await asyncio.sleep(self.logon_delay)
        for symbol in symbols:
            logger.info("Subscribing to %s via FIX", symbol)
        while True:
            for symbol in symbols:
                price = 50000.0 + (random.random() * 1000.0 - 500.0)
                data = MarketData(
                    symbol=symbol,
                    timestamp=current_timestamp_ms(),
                    open=price - 10.0,
                    high=price + 20.0,
                    low=price - 20.0,
                    close=price,
                    volume=random.random() * 10.0,
                )
                with contextlib.suppress(ChannelNotFoundError):
                    self.stream.publish(data)
            await asyncio.sleep(self.tick_interval)

    async def subscribe(self, symbol: str) -> None:
        if not self._connected:
            raise NotConnectedError()
        if symbol not in self._subscriptions:
            self._subscriptions[symbol] = f"fix_sub_{random.getrandbits(64)}"

    async def unsubscribe(self, symbol: str) -> None:
        if not self._connected:
            raise NotConnectedError()
        self._subscriptions.pop(symbol, None)

    def get_receiver(self, symbol: str) -> asyncio.Queue[MarketData]:
        if symbol not in self._subscriptions:
            raise NotSubscribedError(symbol)
        return self.stream.get_receiver(symbol)

    async def get_current_data(self, symbol: str) -> MarketData:
        data = self.stream.get_latest_data(symbol)
        if data is None:
            raise DataNotFoundError(symbol)
        return data

    async def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        if self._connected:
            return
        # The session works from the subscriptions held at connect time.
        self._task = asyncio.create_task(self._run_session(list(self._subscriptions)))
        self._connected = True

    async def disconnect(self) -> None:
        if not self._connected:
            return
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._connected = False
        self._subscriptions.clear()