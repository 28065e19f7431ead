"""Order lifecycle management against an exchange and an order store."""

from __future__ import annotations

import asyncio
import dataclasses
import uuid
from typing import Protocol

from xquant.errors import OrderNotFoundError, TradingError
from xquant.models import Order, OrderStatus
from xquant.repository import OrderRepository
from xquant.validator import OrderValidator

_STATUS_CAPACITY = 100
_MONITOR_PERIOD = 1.0


class _Exchange(Protocol):
    async def submit_order(self, order: Order) -> str: ...

    async def cancel_order(self, order_id: str) -> None: ...

    async def modify_order(self, order_id: str, order: Order) -> str: ...

    async def get_order_status(self, order_id: str) -> OrderStatus: ...

    async def get_open_orders(self) -> list[Order]: ...


class _StatusBroadcast:
    """Fan-out of status updates; a full subscriber queue drops its oldest item."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._queues: list[asyncio.Queue[OrderStatus]] = []

    def subscribe(self) -> asyncio.Queue[OrderStatus]:
        queue: asyncio.Queue[OrderStatus] = asyncio.Queue(maxsize=self._capacity)
        self._queues.append(queue)
        return queue

    def send(self, status: OrderStatus) -> None:
        for queue in self._queues:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(status)


class OrderManager:
    """Validates, submits, tracks and cancels orders."""

    def __init__(self, exchange: _Exchange, repository: OrderRepository) -> None:
        self.exchange = exchange
        self.repository = repository
        self.validators: list[OrderValidator] = []
        self._status_channels: dict[str, _StatusBroadcast] = {}

    def add_validator(self, validator: OrderValidator) -> None:
        self.validators.append(validator)

    def _notify(
        self, channels: dict[str, _StatusBroadcast], order: Order, status: OrderStatus
    ) -> None:
        if order.client_order_id is None:
            return
        channel = channels.get(order.client_order_id)
        if channel is not None:
            channel.send(status)

    async def create_order(self, order: Order) -> str:
        """Validate and submit an order; return the exchange-assigned id."""
        for validator in self.validators:
            validator.validate(order)

        if order.client_order_id is None:
            order = dataclasses.replace(order, client_order_id=str(uuid.uuid4()))

        await self.repository.save(order)
        order_id = await self.exchange.submit_order(dataclasses.replace(order))

        # Re-key the provisional record under the id the exchange assigned.
        await self.repository.delete(order.id)
        await self.repository.save(dataclasses.replace(order, id=order_id))
        return order_id

    async def cancel_order(self, order_id: str) -> None:
        if await self.repository.find_by_id(order_id) is None:
            raise OrderNotFoundError(order_id)

        await self.exchange.cancel_order(order_id)

        order = await self.repository.find_by_id(order_id)
        if order is not None:
            self._notify(self._status_channels, order, OrderStatus.CANCELLED)
            order.id = order_id
            await self.repository.update(order)

    async def modify_order(self, order_id: str, new_params: Order) -> str:
        """Replace an order on the exchange; return the new order's id."""
        original = await self.repository.find_by_id(order_id)
        if original is None:
            raise OrderNotFoundError(order_id)

        new_order_id = await self.exchange.modify_order(order_id, dataclasses.replace(new_params))

        self._notify(self._status_channels, original, OrderStatus.CANCELLED)
        await self.repository.save(dataclasses.replace(new_params, id=new_order_id))
        return new_order_id

    async def get_order_status(self, order_id: str) -> OrderStatus:
        status = await self.exchange.get_order_status(order_id)
        order = await self.repository.find_by_id(order_id)
        if order is not None:
            self._notify(self._status_channels, order, status)
        return status

    async def get_open_orders(self) -> list[Order]:
        return await self.exchange.get_open_orders()

    def subscribe_to_status_updates(self, client_order_id: str) -> asyncio.Queue[OrderStatus]:
        """A queue receiving status updates for orders with this client id."""
        channel = self._status_channels.get(client_order_id)
        if channel is None:
            channel = _StatusBroadcast(_STATUS_CAPACITY)
            self._status_channels[client_order_id] = channel
        return channel.subscribe()

    async def start_order_monitoring(self) -> asyncio.Task[None]:
        """Poll open orders every second in the background; return the task."""
        channels = dict(self._status_channels)

        async def monitor() -> None:
            while True:
                try:
                    open_orders = await self.repository.find_by_status(
                        [OrderStatus.NEW, OrderStatus.PARTIALLY_FILLED]
                    )
                except TradingError:
                    open_orders = []
                for order in open_orders:
                    try:
                        status = await self.exchange.get_order_status(order.id)
                    except TradingError:
                        continue
                    self._notify(channels, order, status)
                await asyncio.sleep(_MONITOR_PERIOD)

        return asyncio.create_task(monitor())