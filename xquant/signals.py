"""Trading signal types and signals annotated with metadata."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol


class _IndicatorSignal(Protocol):
    name: str
    strength: float


class SignalType(enum.Enum):
    BUY = "Buy"
    STRONG_BUY = "StrongBuy"
    SELL = "Sell"
    STRONG_SELL = "StrongSell"
    REDUCE_LONG = "ReduceLong"
    REDUCE_SHORT = "ReduceShort"
    CLOSE_LONG = "CloseLong"
    CLOSE_SHORT = "CloseShort"
    NEUTRAL = "Neutral"

    @classmethod
    def from_strength(cls, strength: float) -> SignalType:
        """Classify a strength in [-1, 1]; weak signals only reduce positions."""
        if strength > 0.7:
            return cls.STRONG_BUY
        if strength > 0.3:
            return cls.BUY
        if strength > 0.0:
            return cls.REDUCE_SHORT
        if strength < -0.7:
            return cls.STRONG_SELL
        if strength < -0.3:
            return cls.SELL
        if strength < 0.0:
            return cls.REDUCE_LONG
        return cls.NEUTRAL

    def is_buy(self) -> bool:
        return self in (SignalType.BUY, SignalType.STRONG_BUY)

    def is_sell(self) -> bool:
        return self in (SignalType.SELL, SignalType.STRONG_SELL)

    def is_reduce(self) -> bool:
        return self in (
            SignalType.REDUCE_LONG,
            SignalType.REDUCE_SHORT,
            SignalType.CLOSE_LONG,
            SignalType.CLOSE_SHORT,
        )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SignalWithMetadata:
    """A signal with its source, strength (-1..1) and confidence (0..1)."""

    signal_type: SignalType
    source: str
    strength: float
    timestamp: datetime = field(default_factory=_utc_now)
    confidence: float = 1.0
    additional_info: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_indicator_signal(cls, indicator_signal: _IndicatorSignal) -> SignalWithMetadata:
        """Build a signal from an indicator output with ``name`` and ``strength``."""
        return cls(
            signal_type=SignalType.from_strength(indicator_signal.strength),
            source=indicator_signal.name,
            strength=indicator_signal.strength,
        )

    def with_confidence(self, confidence: float) -> SignalWithMetadata:
        return dataclasses.replace(
            self, confidence=confidence, additional_info=dict(self.additional_info)
        )

    def add_info(self, key: str, value: str) -> SignalWithMetadata:
        return dataclasses.replace(self, additional_info={**self.additional_info, key: value})