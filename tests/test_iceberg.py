from xquant.iceberg import IcebergStrategy
from xquant.models import MarketData, OrderSide, OrderType


def _bar(close, ts=1000, symbol="BTCUSDT", low=None):
    return MarketData(symbol, ts, 50100.0, 50200.0, close if low is None else low, close, 10.0)


def _strategy(side=OrderSide.BUY, total=10.0, display=1.0):
    return IcebergStrategy("BTCUSDT", side, total, 50000.0, display)


def test_name_and_description():
    strategy = _strategy()
    assert strategy.name == "Iceberg-BTCUSDT"
    assert strategy.description == "Hidden large order execution strategy"


def test_iceberg_strategy_orders_when_price_met():
    strategy = _strategy()
    strategy.update(_bar(49900.0))
    orders = strategy.get_orders()
    assert len(orders) == 1
    order = orders[0]
    assert order.symbol == "BTCUSDT"
    assert order.side == OrderSide.BUY
    assert order.order_type == OrderType.ICEBERG
    assert order.quantity == 1.0
    assert order.price == 50000.0
    assert order.iceberg_qty == 1.0


def test_no_order_when_price_condition_fails():
    strategy = _strategy()
    strategy.update(_bar(49900.0))
    strategy.get_orders()
    strategy.update(_bar(50100.0, ts=2000))
    assert strategy.get_orders() == []


def test_no_order_without_market_data():
    assert _strategy().get_orders() == []


def test_other_symbol_is_ignored():
    strategy = _strategy()
    strategy.update(_bar(49900.0, symbol="ETHUSDT"))
    assert strategy.current_market_data is None
    assert strategy.get_orders() == []


def test_sell_side_needs_price_at_or_above_limit():
    strategy = _strategy(side=OrderSide.SELL)
    strategy.update(_bar(49900.0))
    assert strategy.get_orders() == []
    strategy.update(_bar(50000.0, ts=2000))
    orders = strategy.get_orders()
    assert [o.side for o in orders] == [OrderSide.SELL]


def test_total_quantity_is_never_exceeded():
    strategy = _strategy()
    strategy.update(_bar(49900.0))
    emitted = []
    for _ in range(20):
        emitted.extend(strategy.get_orders())
    assert len(emitted) == 10
    assert sum(o.quantity for o in emitted) == 10.0
    assert strategy.is_active is False


def test_display_quantity_capped_by_total():
    strategy = _strategy(total=2.0, display=5.0)
    assert strategy.display_quantity == 2.0
    strategy.update(_bar(49900.0))
    orders = strategy.get_orders()
    assert orders[0].quantity == 2.0
    assert strategy.get_orders() == []