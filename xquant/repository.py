"""Order storage interface and an in-memory implementation."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Iterable

from xquant.errors import OrderNotFoundError
from xquant.models import Order, OrderStatus


class OrderRepository(ABC):
    """Asynchronous store of orders keyed by their exchange id."""

    @abstractmethod
    async def save(self, order: Order) -> None:
        """Store an order, replacing any with the same id."""

    @abstractmethod
    async def update(self, order: Order) -> None:
        """Replace an existing order; raise OrderNotFoundError if absent."""

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Order | None:
        """The order with this id, if any."""

    @abstractmethod
    async def find_by_client_id(self, client_id: str) -> Order | None:
        """The order with this client order id, if any."""

    @abstractmethod
    async def find_by_status(self, statuses: Iterable[OrderStatus]) -> list[Order]:
        """Orders in any of the given statuses."""

    @abstractmethod
    async def find_by_symbol(self, symbol: str) -> list[Order]:
        """Orders for a symbol."""

    @abstractmethod
    async def find_all(self) -> list[Order]:
        """Every stored order."""

    @abstractmethod
    async def delete(self, order_id: str) -> None:
        """Remove an order if it exists."""


class InMemoryOrderRepository(OrderRepository):
    """Keeps copies of orders in dictionaries."""

    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}
        self._client_id_index: dict[str, str] = {}

    async def save(self, order: Order) -> None:
        if order.client_order_id is not None:
            self._client_id_index[order.client_order_id] = order.id
        self._orders[order.id] = copy.copy(order)

    async def update(self, order: Order) -> None:
        if order.id not in self._orders:
            raise OrderNotFoundError(order.id)
        self._orders[order.id] = copy.copy(order)
        if order.client_order_id is not None:
            self._client_id_index[order.client_order_id] = order.id

    async def find_by_id(self, order_id: str) -> Order | None:
        order = self._orders.get(order_id)
        return copy.copy(order) if order is not None else None

    async def find_by_client_id(self, client_id: str) -> Order | None:
        order_id = self._client_id_index.get(client_id)
        if order_id is None:
            return None
        return await self.find_by_id(order_id)

    async def find_by_status(self, statuses: Iterable[OrderStatus]) -> list[Order]:
        # Orders carry no status of their own, so every stored order counts as new.
        if OrderStatus.NEW not in set(statuses):
            return []
        return await self.find_all()

    async def find_by_symbol(self, symbol: str) -> list[Order]:
        return [copy.copy(o) for o in self._orders.values() if o.symbol == symbol]

    async def find_all(self) -> list[Order]:
        return [copy.copy(o) for o in self._orders.values()]

    async def delete(self, order_id: str) -> None:
        order = self._orders.pop(order_id, None)
        if order is not None and order.client_order_id is not None:
            self._client_id_index.pop(order.client_order_id, None)