from dataclasses import dataclass
from datetime import datetime, timezone

import pytest

from xquant.signals import SignalType, SignalWithMetadata


@dataclass
class _IndicatorSignal:
    name: str
    strength: float


@pytest.mark.parametrize(
    "strength, expected",
    [
        (1.0, SignalType.STRONG_BUY),
        (0.7, SignalType.BUY),
        (0.3, SignalType.REDUCE_SHORT),
        (0.0, SignalType.NEUTRAL),
        (-0.3, SignalType.REDUCE_LONG),
        (-0.7, SignalType.SELL),
        (-1.0, SignalType.STRONG_SELL),
        (float("nan"), SignalType.NEUTRAL),
    ],
)
def test_from_strength(strength, expected):
    assert SignalType.from_strength(strength) is expected


@pytest.mark.parametrize(
    "signal_type, buy, sell, reduce",
    [
        (SignalType.BUY, True, False, False),
        (SignalType.STRONG_BUY, True, False, False),
        (SignalType.SELL, False, True, False),
        (SignalType.STRONG_SELL, False, True, False),
        (SignalType.REDUCE_LONG, False, False, True),
        (SignalType.REDUCE_SHORT, False, False, True),
        (SignalType.CLOSE_LONG, False, False, True),
        (SignalType.CLOSE_SHORT, False, False, True),
        (SignalType.NEUTRAL, False, False, False),
    ],
)
def test_direction_predicates(signal_type, buy, sell, reduce):
    assert signal_type.is_buy() is buy
    assert signal_type.is_sell() is sell
    assert signal_type.is_reduce() is reduce


def test_new_signal_defaults():
    before = datetime.now(timezone.utc)
    signal = SignalWithMetadata(SignalType.BUY, "manual", 0.5)
    after = datetime.now(timezone.utc)
    assert signal.confidence == 1.0
    assert signal.additional_info == {}
    assert before <= signal.timestamp <= after


def test_from_indicator_signal():
    signal = SignalWithMetadata.from_indicator_signal(_IndicatorSignal("Golden Cross", 0.9))
    assert signal.source == "Golden Cross"
    assert signal.strength == 0.9
    assert signal.signal_type is SignalType.STRONG_BUY
    assert signal.confidence == 1.0


def test_with_confidence_returns_updated_copy():
    original = SignalWithMetadata(SignalType.SELL, "x", -0.5)
    updated = original.with_confidence(0.6)
    assert updated.confidence == 0.6
    assert original.confidence == 1.0
    assert updated.source == original.source


def test_add_info_chains_without_mutating():
    original = SignalWithMetadata(SignalType.NEUTRAL, "x", 0.0)
    updated = original.add_info("a", "1").add_info("b", "2")
    assert updated.additional_info == {"a": "1", "b": "2"}
    assert original.additional_info == {}