"""Per-symbol broadcast channels for market data, with bar aggregation."""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
from typing import Generic, TypeVar

from xquant.errors import (
    AlreadyRunningError,
    ChannelNotFoundError,
    InvalidParameterError,
    TaskNotFoundError,
)
from xquant.models import MarketData

T = TypeVar("T")


class BroadcastChannel(Generic[T]):
    """Delivers every sent item to each subscriber's bounded queue.

    A subscriber only sees items sent after it subscribed. When a
    subscriber's queue is full, its oldest item is dropped.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("broadcast channel capacity must be at least 1")
        self.capacity = capacity
        self._queues: list[asyncio.Queue[T]] = []

    @property
    def receiver_count(self) -> int:
        return len(self._queues)

    def subscribe(self) -> asyncio.Queue[T]:
        """A new queue that receives every item sent from now on."""
        queue: asyncio.Queue[T] = asyncio.Queue(maxsize=self.capacity)
        self._queues.append(queue)
        return queue

    def send(self, item: T) -> int:
        """Deliver ``item`` to every subscriber; return how many there are."""
        for queue in self._queues:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(item)
        return len(self._queues)


class MarketDataStream:
    """Keeps a broadcast channel and the latest bar for each symbol."""

    def __init__(self, buffer_size: int) -> None:
        self.buffer_size = buffer_size
        self._channels: dict[str, BroadcastChannel[MarketData]] = {}
        self._latest_data: dict[str, MarketData] = {}
        self._aggregation_tasks: dict[str, asyncio.Task[None]] = {}
        self._bars: dict[str, list[MarketData]] = {}

    def get_or_create_channel(self, symbol: str) -> BroadcastChannel[MarketData]:
        channel = self._channels.get(symbol)
        if channel is None:
            channel = BroadcastChannel(self.buffer_size)
            self._channels[symbol] = channel
        return channel

    def publish(self, data: MarketData) -> None:
        """Record ``data`` as the latest bar and broadcast it.

        The latest bar is recorded even when the symbol has no channel, in
        which case ChannelNotFoundError is raised afterwards.
        """
        self._latest_data[data.symbol] = dataclasses.replace(data)
        channel = self._channels.get(data.symbol)
        if channel is None:
            raise ChannelNotFoundError(data.symbol)
        channel.send(dataclasses.replace(data))

    def get_latest_data(self, symbol: str) -> MarketData | None:
        data = self._latest_data.get(symbol)
        return dataclasses.replace(data) if data is not None else None

    def get_receiver(self, symbol: str) -> asyncio.Queue[MarketData]:
        channel = self._channels.get(symbol)
        if channel is None:
            raise ChannelNotFoundError(symbol)
        return channel.subscribe()

    def start_aggregation(self, symbol: str, interval: int) -> None:
        """Start aggregating the symbol's data into bars of ``interval`` ms.

        Must be called from a running event loop.
        """
        if symbol in self._aggregation_tasks:
            raise AlreadyRunningError(f"Aggregation for {symbol} already running")
        if interval <= 0:
            raise InvalidParameterError("Aggregation interval must be positive")
        receiver = self.get_receiver(symbol)
        task = asyncio.get_running_loop().create_task(
            self._aggregate(symbol, receiver, interval)
        )
        self._aggregation_tasks[symbol] = task

    def stop_aggregation(self, symbol: str) -> None:
        task = self._aggregation_tasks.pop(symbol, None)
        if task is None:
            raise TaskNotFoundError(f"Aggregation task for {symbol} not found")
        task.cancel()

    def aggregated_bars(self, symbol: str) -> list[MarketData]:
        """Completed aggregated bars for ``symbol``, oldest first."""
        return [dataclasses.replace(bar) for bar in self._bars.get(symbol, [])]

    async def _aggregate(
        self, symbol: str, receiver: asyncio.Queue[MarketData], interval: int
    ) -> None:
        bars = self._bars.setdefault(symbol, [])
        current: MarketData | None = None
        while True:
            data = await receiver.get()
            start = data.timestamp - data.timestamp % interval
            if current is not None and current.timestamp == start:
                current.high = max(current.high, data.high)
                current.low = min(current.low, data.low)
                current.close = data.close
                current.volume += data.volume
                continue
            if current is not None:
                bars.append(current)
            current = MarketData(
                symbol, start, data.open, data.high, data.low, data.close, data.volume
            )

    async def aclose(self) -> None:
        """Cancel every running aggregation task and wait for them to end."""
        tasks = list(self._aggregation_tasks.values())
        self._aggregation_tasks.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task