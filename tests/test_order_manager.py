import asyncio
import contextlib

import pytest

from xquant.errors import InvalidParameterError, OrderNotFoundError
from xquant.models import Order, OrderSide, OrderStatus, OrderType
from xquant.order_manager import OrderManager
from xquant.repository import InMemoryOrderRepository
from xquant.validator import BasicOrderValidator


class FakeExchange:
    def __init__(self):
        self.orders = {}
        self.statuses = {}
        self._counter = 0

    async def submit_order(self, order):
        self._counter += 1
        order_id = f"ex-{self._counter}"
        self.orders[order_id] = order
        self.statuses[order_id] = OrderStatus.NEW
        return order_id

    async def cancel_order(self, order_id):
        if order_id not in self.orders:
            raise OrderNotFoundError(order_id)
        self.statuses[order_id] = OrderStatus.CANCELLED

    async def modify_order(self, order_id, order):
        await self.cancel_order(order_id)
        return await self.submit_order(order)

    async def get_order_status(self, order_id):
        if order_id not in self.statuses:
            raise OrderNotFoundError(order_id)
        return self.statuses[order_id]

    async def get_open_orders(self):
        return [o for oid, o in self.orders.items() if self.statuses[oid] is OrderStatus.NEW]


def _order(quantity=0.1):
    return Order("BTCUSDT", OrderSide.BUY, OrderType.LIMIT, quantity, 50000.0)


def _manager():
    exchange = FakeExchange()
    repository = InMemoryOrderRepository()
    return OrderManager(exchange, repository), exchange, repository


@pytest.mark.asyncio
async def test_order_lifecycle():
    manager, _, _ = _manager()
    order_id = await manager.create_order(_order())

    status = await manager.get_order_status(order_id)
    assert status in (OrderStatus.PARTIALLY_FILLED, OrderStatus.NEW)

    await manager.cancel_order(order_id)

    status = await manager.get_order_status(order_id)
    assert status is OrderStatus.CANCELLED


@pytest.mark.asyncio
async def test_create_order_stores_under_exchange_id_with_client_id():
    manager, _, repository = _manager()
    order_id = await manager.create_order(_order())
    stored = await repository.find_by_id(order_id)
    assert stored.id == order_id
    assert stored.client_order_id
    assert (await repository.find_by_client_id(stored.client_order_id)).id == order_id
    assert len(await repository.find_all()) == 1


@pytest.mark.asyncio
async def test_create_order_keeps_given_client_id():
    manager, _, repository = _manager()
    order_id = await manager.create_order(_order().with_client_order_id("client-1"))
    assert (await repository.find_by_id(order_id)).client_order_id == "client-1"


@pytest.mark.asyncio
async def test_validator_rejects_before_submission():
    manager, exchange, repository = _manager()
    manager.add_validator(BasicOrderValidator(1.0, 10.0))
    with pytest.raises(InvalidParameterError):
        await manager.create_order(_order(quantity=0.1))
    assert exchange.orders == {}
    assert await repository.find_all() == []


@pytest.mark.asyncio
async def test_cancel_unknown_order_raises():
    manager, _, _ = _manager()
    with pytest.raises(OrderNotFoundError):
        await manager.cancel_order("nope")


@pytest.mark.asyncio
async def test_status_updates_reach_subscribers():
    manager, _, _ = _manager()
    queue = manager.subscribe_to_status_updates("client-1")
    second = manager.subscribe_to_status_updates("client-1")
    order_id = await manager.create_order(_order().with_client_order_id("client-1"))

    await manager.get_order_status(order_id)
    await manager.cancel_order(order_id)

    assert queue.get_nowait() is OrderStatus.NEW
    assert queue.get_nowait() is OrderStatus.CANCELLED
    assert second.qsize() == 2


@pytest.mark.asyncio
async def test_modify_order_saves_new_order_and_notifies():
    manager, _, repository = _manager()
    queue = manager.subscribe_to_status_updates("client-1")
    order_id = await manager.create_order(_order().with_client_order_id("client-1"))

    new_id = await manager.modify_order(order_id, _order(quantity=0.2))

    assert new_id != order_id
    stored = await repository.find_by_id(new_id)
    assert stored.quantity == 0.2
    assert queue.get_nowait() is OrderStatus.CANCELLED


@pytest.mark.asyncio
async def test_modify_unknown_order_raises():
    manager, _, _ = _manager()
    with pytest.raises(OrderNotFoundError):
        await manager.modify_order("nope", _order())


@pytest.mark.asyncio
async def test_get_open_orders_from_exchange():
    manager, _, _ = _manager()
    first = await manager.create_order(_order())
    await manager.create_order(_order(quantity=0.3))
    await manager.cancel_order(first)
    open_orders = await manager.get_open_orders()
    assert [o.quantity for o in open_orders] == [0.3]


@pytest.mark.asyncio
async def test_monitoring_publishes_status():
    manager, _, _ = _manager()
    await manager.create_order(_order().with_client_order_id("client-1"))
    queue = manager.subscribe_to_status_updates("client-1")

    task = await manager.start_order_monitoring()
    try:
        status = await asyncio.wait_for(queue.get(), timeout=1.0)
    finally:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
    assert status is OrderStatus.NEW