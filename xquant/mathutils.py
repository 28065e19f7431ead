"""Statistics and price arithmetic helpers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def clamp(value: T, min_value: T, max_value: T) -> T:
    """Limit ``value`` to the range [min_value, max_value]."""
    return max(min_value, min(max_value, value))


def round_quantity(quantity: float, step_size: float) -> float:
    """Round a quantity down to a multiple of the exchange step size."""
    return math.floor(quantity / step_size) * step_size


def round_price(price: float, tick_size: float) -> float:
    """Round a price down to a multiple of the exchange tick size."""
    return math.floor(price / tick_size) * tick_size


def average(values: Sequence[float]) -> float | None:
    """Arithmetic mean, or None for an empty sequence."""
    if not values:
        return None
    return sum(values) / len(values)


def standard_deviation(values: Sequence[float]) -> float | None:
    """Population standard deviation, or None for an empty sequence."""
    avg = average(values)
    if avg is None:
        return None
    variance = sum((avg - value) ** 2 for value in values) / len(values)
    return math.sqrt(variance)


def calculate_vwap(prices: Sequence[float], volumes: Sequence[float]) -> float | None:
    """Volume-weighted average price; None on mismatched, empty or zero-volume input."""
    if len(prices) != len(volumes) or not prices:
        return None
    total_volume = sum(volumes)
    if total_volume == 0.0:
        return None
    return sum(p * v for p, v in zip(prices, volumes)) / total_volume


def calculate_twap(prices: Sequence[float]) -> float | None:
    """Time-weighted average price of evenly spaced samples."""
    return average(prices)


def calculate_return(entry_price: float, exit_price: float) -> float:
    """Return from entry to exit, in percent."""
    return (exit_price - entry_price) / entry_price * 100.0


def calculate_sharpe_ratio(returns: Sequence[float], risk_free_rate: float) -> float | None:
    """Simple Sharpe ratio; None with fewer than two returns or zero deviation."""
    if len(returns) < 2:
        return None
    avg_return = average(returns)
    std_dev = standard_deviation(returns)
    if avg_return is None or std_dev is None or std_dev == 0.0:
        return None
    return (avg_return - risk_free_rate) / std_dev