import pytest

from xquant.iceberg import IcebergStrategy
from xquant.models import MarketData, OrderSide
from xquant.strategy import Strategy, StrategyFactory
from xquant.twap import TwapStrategy


class _Echo(Strategy):
    def __init__(self):
        self.seen = []

    def update(self, market_data):
        self.seen.append(market_data)

    def get_orders(self):
        return []

    @property
    def name(self):
        return "echo"

    @property
    def description(self):
        return "records market data"


class _OnlyUpdate(Strategy):
    def update(self, market_data):
        pass

    @property
    def name(self):
        return "only-update"

    @property
    def description(self):
        return "lacks get_orders"


class _OnlyGetOrders(Strategy):
    def get_orders(self):
        return []

    @property
    def name(self):
        return "only-get-orders"

    @property
    def description(self):
        return "lacks update"


class _TwapFactory(StrategyFactory):
    def create(self):
        return TwapStrategy("BTCUSDT", OrderSide.BUY, 1.0, 3600000, 5)

    @property
    def name(self):
        return "twap-factory"


def _bar(ts=1000, close=50000.0):
    return MarketData("BTCUSDT", ts, close, close, close, close, 10.0)


def test_strategy_is_abstract():
    with pytest.raises(TypeError):
        Strategy()


@pytest.mark.parametrize("incomplete", [_OnlyUpdate, _OnlyGetOrders])
def test_strategy_requires_update_and_get_orders(incomplete):
    with pytest.raises(TypeError):
        incomplete()
    strategy = IcebergStrategy("BTCUSDT", OrderSide.BUY, 10.0, 50000.0, 1.0)
    strategy.update(_bar(close=49900.0))
    orders = strategy.get_orders()
    assert len(orders) == 1
    assert orders[0].quantity == 1.0


def test_concrete_strategy_receives_updates():
    strategy = _Echo()
    bar = _bar()
    strategy.update(bar)
    assert strategy.seen == [bar]
    assert strategy.get_orders() == []
    assert strategy.name == "echo"


def test_factory_is_abstract():
    with pytest.raises(TypeError):
        StrategyFactory()


def test_factory_creates_independent_strategies():
    factory = _TwapFactory()
    first = factory.create()
    second = factory.create()
    first.update(_bar())
    assert len(first.get_orders()) == 1
    assert first.executed_quantity > 0.0
    assert second.executed_quantity == 0.0
    assert factory.name == "twap-factory"


def test_builtin_strategy_satisfies_interface():
    strategy: Strategy = IcebergStrategy("BTCUSDT", OrderSide.BUY, 10.0, 50000.0, 1.0)
    assert isinstance(strategy, Strategy)
    assert strategy.name == "Iceberg-BTCUSDT"