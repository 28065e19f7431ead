"""Market data provider fed by a WebSocket ticker feed."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import random
from typing import Any

import websockets
from websockets.exceptions import WebSocketException

from xquant.errors import (
    ChannelNotFoundError,
    DataNotFoundError,
    NotConnectedError,
    NotSubscribedError,
)
from xquant.models import MarketData
from xquant.provider import MarketDataProvider
from xquant.stream import MarketDataStream

logger = logging.getLogger(__name__)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _parse_float(value: Any) -> float | None:
    if not isinstance(value, str) or value != value.strip() or "_" in value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_i64(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if _I64_MIN <= value <= _I64_MAX else None


def parse_market_data(message: Any) -> MarketData | None:
    """Parse a ticker message with string prices (s, o, h, l, c, v, E keys)."""
    if not isinstance(message, dict):
        return None
    symbol = message.get("s")
    if not isinstance(symbol, str):
        return None
    close = _parse_float(message.get("c"))
    high = _parse_float(message.get("h"))
    low = _parse_float(message.get("l"))
    open_ = _parse_float(message.get("o"))
    volume = _parse_float(message.get("v"))
    timestamp = _parse_i64(message.get("E"))
    if None in (close, high, low, open_, volume, timestamp):
        return None
    return MarketData(
        symbol=symbol,
        timestamp=timestamp,
        open=open_,
        high=high,
        low=low,
        close=close,
        volume=volume,
    )


def _subscription_request(symbol: str) -> str:
    return json.dumps(
        {
            "method": "SUBSCRIBE",
            "params": [f"{symbol.lower()}@ticker"],
            "id": random.getrandbits(64),
        }
    )


class WebSocketProvider(MarketDataProvider):
    """Reads ticker messages from a WebSocket and publishes them to a stream."""

    def __init__(
        self,
        url: str,
        stream: MarketDataStream,
        *,
        reconnect_interval: float = 5.0,
    ) -> None:
        self.url = url
        self.stream = stream
        self.reconnect_interval = reconnect_interval
        self._subscriptions: dict[str, str] = {}
        self._connected = False
        self._task: asyncio.Task[None] | None = None

    @property
    def subscriptions(self) -> dict[str, str]:
        """Symbol to subscription id."""
        return dict(self._subscriptions)

    def _handle_text(self, text: str) -> None:
        try:
            message = json.loads(text)
        except ValueError:
            return
        data = parse_market_data(message)
        if data is not None:
            with contextlib.suppress(ChannelNotFoundError):
                self.stream.publish(data)

    async def _run(self, symbols: list[str]) -> None:
        while True:
            try:
                async with websockets.connect(self.url) as ws:
                    for symbol in symbols:
                        await ws.send(_subscription_request(symbol))
                    async for message in ws:
                        if isinstance(message, str):
                            self._handle_text(message)
            except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
                logger.error("WebSocket error: %s", exc)
            await asyncio.sleep(self.reconnect_interval)
            logger.info("Attempting to reconnect WebSocket...")

    async def subscribe(self, symbol: str) -> None:
        if not self._connected:
            raise NotConnectedError()
        if symbol not in self._subscriptions:
            self._subscriptions[symbol] = f"sub_{random.getrandbits(64)}"

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
        # Subscription requests are sent for the symbols held at connect time.
        self._task = asyncio.create_task(self._run(list(self._subscriptions)))
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