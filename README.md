# xquant

Building blocks for an automated trading system:

- order, position, trade and market data models (`xquant.models`)
- execution strategies: Iceberg, Trailing Stop, TWAP and VWAP
- trading signals, signal analysis and position sizing
- an order manager with validators and an in-memory order repository
- per-symbol market data streams, with a simulated FIX provider and a
  WebSocket ticker provider
- math, time and logging helpers

## Installation

```
pip install .
```

With the test tools:

```
pip install ".[test]"
```

## Execution strategies

Every strategy implements `xquant.strategy.Strategy`: feed it bars with
`update(market_data)` and ask for orders with `get_orders()`. Calling
`get_orders()` advances the strategy's state, so each order is returned once.
Bars for other symbols are ignored.

```python
from xquant.models import MarketData, OrderSide
from xquant.iceberg import IcebergStrategy

strategy = IcebergStrategy("BTCUSDT", OrderSide.BUY, 10.0, 50000.0, 1.0)
strategy.update(MarketData("BTCUSDT", 1000, 50100.0, 50200.0, 49900.0, 49900.0, 10.0))

for order in strategy.get_orders():
    print(order.symbol, order.side, order.quantity, order.price, order.iceberg_qty)
```

- `xquant.iceberg.IcebergStrategy(symbol, side, total_quantity, limit_price, display_quantity)`
  places limit orders of `display_quantity` at `limit_price` while the last
  close is at or better than the limit price, until `total_quantity` is reached.
- `xquant.trailing_stop.TrailingStopStrategy(symbol, side, quantity, trailing_delta, activation_price)`
  tracks the highest and lowest closes and issues one market order when the
  price reverses by `trailing_delta` percent. With `activation_price=None` it is
  active at once; `set_entry_price(price)` seeds the tracked prices.
- `xquant.twap.TwapStrategy(symbol, side, total_quantity, execution_interval, num_slices)`
  places `num_slices` equal market orders, at most one per
  `execution_interval / num_slices` milliseconds of bar time.
- `xquant.vwap.VwapStrategy(symbol, side, target_quantity, execution_interval, vwap_window)`
  places ten limit orders, each priced at the volume-weighted close of the last
  `vwap_window` bars, at most one per `execution_interval / 10` milliseconds.

## Signals and sizing

- `xquant.signals.SignalType.from_strength(strength)` maps a strength in
  -1.0..1.0 to a signal: above 0.7 `STRONG_BUY`, above 0.3 `BUY`, above 0
  `REDUCE_SHORT`, and the mirror image for sells; exactly 0 is `NEUTRAL`.
- `xquant.signals.SignalWithMetadata` carries a signal's type, source,
  strength, confidence and extra info; `with_confidence` and `add_info` return
  new copies.
- `xquant.signal_analyzer.SignalAnalyzer.analyze_indicator_results(results)`
  takes objects with a `signals` iterable (each signal having `name` and
  `strength`), weights them by name (`set_weight` changes a weight, unknown
  names get 0.5), drops those below a confidence of 0.5 and, when buy and sell
  signals conflict by more than 0.3, keeps only the stronger side.
- `xquant.position_sizing.FixedSizePositionSizer` scales a base size by signal
  strength; `KellyPositionSizer` uses the Kelly criterion with the win rate
  scaled by the signal's confidence, capped at a maximum risk fraction.
- `xquant.base_bot.create_order_from_signal(symbol, signal, position_size, current_position)`
  returns the market order a signal implies for the current position, or `None`.
  `xquant.base_bot.TradingBot` is the abstract interface for bots.
- `xquant.bot_config.TradingBotConfig` is a named parameter set with typed
  accessors (`get_float`, `get_int`, `get_bool`, `get_string`) that raise
  `ConfigError` for missing or mistyped values, plus presets
  `ma_crossover_config`, `rsi_config` and `macd_config`.

## Order management

`xquant.order_manager.OrderManager(exchange, repository)` runs every validator
added with `add_validator` before submitting an order, gives the order a
client order id if it has none, and records it in the repository under the id
the exchange returns. It also cancels and modifies orders, queries status and
open orders, and pushes status changes to queues returned by
`subscribe_to_status_updates(client_order_id)`. `start_order_monitoring()`
starts a background task that polls order status every second and returns the
task.

The exchange is any object with the coroutines `submit_order(order)`,
`cancel_order(order_id)`, `modify_order(order_id, order)`,
`get_order_status(order_id)` and `get_open_orders()`.

- `xquant.repository.InMemoryOrderRepository` stores copies of orders by id and
  by client order id.
- `xquant.validator.BasicOrderValidator(min_order_size, max_order_size)` checks
  the quantity bounds and that the price is not negative;
  `RiskOrderValidator(max_position_size, max_notional_value)` checks size and
  notional value limits.

## Market data

```python
import asyncio

from xquant.models import MarketData
from xquant.stream import MarketDataStream

async def main():
    stream = MarketDataStream(buffer_size=100)
    stream.get_or_create_channel("BTCUSDT")
    receiver = stream.get_receiver("BTCUSDT")
    stream.publish(MarketData("BTCUSDT", 1000, 1.0, 2.0, 0.5, 1.5, 10.0))
    print(await receiver.get())

asyncio.run(main())
```

- `xquant.stream.MarketDataStream` keeps a `BroadcastChannel` and the latest
  bar per symbol. Receivers are `asyncio.Queue` objects that see only data
  published after they subscribed; a full queue drops its oldest item.
  Publishing to a symbol without a channel records the latest bar and then
  raises `ChannelNotFoundError`. `start_aggregation(symbol, interval)` collects
  the symbol's data into bars of `interval` milliseconds, readable with
  `aggregated_bars(symbol)`; `stop_aggregation` and `aclose` stop it.
- `xquant.fix.FixProvider` publishes simulated prices around 50000 into a
  stream every `tick_interval` seconds after a `logon_delay`.
- `xquant.websocket_provider.WebSocketProvider` connects to a WebSocket URL,
  sends a `SUBSCRIBE` request per symbol, parses ticker messages with
  `parse_market_data` (string prices under `o`, `h`, `l`, `c`, `v`, symbol under
  `s`, time under `E`) and reconnects after `reconnect_interval` seconds on
  errors.
- `xquant.provider.MarketDataManager` subscribes, connects and disconnects all
  of its providers, ignoring individual failures, and reads receivers and
  current data from the first connected provider.

Provider methods are coroutines, except `get_receiver`. `subscribe` requires a
connected provider, and a provider's background task works from the symbols
subscribed when it connected; `disconnect` clears the subscriptions.

## Helpers

- `xquant.mathutils`: `clamp`, `round_quantity`, `round_price`, `average`,
  `standard_deviation`, `calculate_vwap`, `calculate_twap`, `calculate_return`,
  `calculate_sharpe_ratio`. Functions with no meaningful result return `None`.
- `xquant.timeutils`: millisecond timestamp conversion, formatting and
  `calculate_time_slices`.
- `xquant.logutils.init_logging()` configures the `xquant` logger from the
  `XQUANT_LOG` environment variable (`trace`, `debug`, `info`, `warn`,
  `error`; default `info`); the `log_*` functions log trading events.

## Errors

Failures are raised as subclasses of `xquant.errors.TradingError`, such as
`NotConnectedError`, `NotSubscribedError`, `OrderNotFoundError`,
`InvalidParameterError`, `RiskLimitExceededError` and `ConfigError`.

## What this package does not do

- It has no exchange client. `OrderManager` needs an exchange object supplied
  by you.
- It has no technical indicators and no ready-made bots; `TradingBot` is only
  an interface, and `SignalAnalyzer` expects indicator results from elsewhere.
- `FixProvider` speaks no real FIX protocol; it generates random prices.
- There is no backtesting engine, no persistent order storage and no command
  line tool.

## Running the tests

```
pytest
```