"""Combines indicator signals into a weighted, conflict-resolved set."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from xquant.signals import SignalType, SignalWithMetadata


class _IndicatorSignal(Protocol):
    name: str
    strength: float


class _IndicatorResult(Protocol):
    signals: Iterable[_IndicatorSignal]


_DEFAULT_WEIGHTS = {
    "Golden Cross": 0.7,
    "Death Cross": 0.7,
    "RSI Overbought": 0.6,
    "RSI Oversold": 0.6,
    "MACD Bullish Crossover": 0.8,
    "MACD Bearish Crossover": 0.8,
    "MACD Above Zero": 0.3,
    "MACD Below Zero": 0.3,
    "Price Above VWAP": 0.4,
    "Price Below VWAP": 0.4,
}

_DEFAULT_WEIGHT = 0.5

_BUY_SIDE = frozenset({SignalType.BUY, SignalType.STRONG_BUY, SignalType.REDUCE_SHORT})
_SELL_SIDE = frozenset({SignalType.SELL, SignalType.STRONG_SELL, SignalType.REDUCE_LONG})


class SignalAnalyzer:
    """Weights indicator signals by name and resolves buy/sell conflicts."""

    def __init__(self) -> None:
        self.indicator_weights: dict[str, float] = dict(_DEFAULT_WEIGHTS)
        self.conflicting_threshold = 0.3
        self.min_confidence = 0.5

    def set_weight(self, indicator_name: str, weight: float) -> None:
        self.indicator_weights[indicator_name] = weight

    def analyze_indicator_results(
        self, results: Iterable[_IndicatorResult]
    ) -> list[SignalWithMetadata]:
        """Turn indicator results into confident, non-conflicting signals."""
        signals = [
            SignalWithMetadata.from_indicator_signal(signal).with_confidence(
                self.indicator_weights.get(signal.name, _DEFAULT_WEIGHT)
            )
            for result in results
            for signal in result.signals
        ]
        confident = [s for s in signals if s.confidence >= self.min_confidence]
        return self._resolve_conflicting_signals(confident)

    def _resolve_conflicting_signals(
        self, signals: list[SignalWithMetadata]
    ) -> list[SignalWithMetadata]:
        buy_strength = sum(
            s.strength * s.confidence for s in signals if s.signal_type in _BUY_SIDE
        )
        sell_strength = sum(
            abs(s.strength) * s.confidence for s in signals if s.signal_type in _SELL_SIDE
        )

        if buy_strength > 0.0 and sell_strength > 0.0:
            net_strength = buy_strength - sell_strength
            if abs(net_strength) <= self.conflicting_threshold:
                return signals
            winning_side = _BUY_SIDE if net_strength > 0.0 else _SELL_SIDE
            return [s for s in signals if s.signal_type in winning_side]

        return signals