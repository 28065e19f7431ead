import pytest

from xquant.position_sizing import FixedSizePositionSizer, KellyPositionSizer, PositionSizer
from xquant.signals import SignalType, SignalWithMetadata


def _signal(strength=0.5, confidence=1.0):
    return SignalWithMetadata(SignalType.from_strength(strength), "test", strength).with_confidence(
        confidence
    )


def test_position_sizer_is_abstract():
    with pytest.raises(TypeError):
        PositionSizer()


def test_fixed_zero_strength_gives_base_size():
    sizer = FixedSizePositionSizer(2.0, 0.5)
    assert sizer.calculate_position_size(_signal(0.0), 10000.0, None, 0.0) == 2.0


def test_fixed_scales_with_strength():
    sizer = FixedSizePositionSizer(2.0, 0.5)
    assert sizer.calculate_position_size(_signal(-1.0), 10000.0, None, 0.0) == pytest.approx(3.0)


def test_fixed_symmetric_and_monotonic():
    sizer = FixedSizePositionSizer(1.0, 0.5)
    buy = sizer.calculate_position_size(_signal(0.8), 0.0, None, 0.0)
    sell = sizer.calculate_position_size(_signal(-0.8), 0.0, None, 0.0)
    weaker = sizer.calculate_position_size(_signal(0.2), 0.0, None, 0.0)
    assert buy == sell
    assert weaker < buy


def test_kelly_negative_uses_minimum_fraction():
    sizer = KellyPositionSizer(0.25, 0.0, 2.0)
    capital = 1000.0
    assert sizer.calculate_position_size(_signal(), capital, None, 0.0) == pytest.approx(
        capital * 0.01
    )


def test_kelly_capped_by_max_risk():
    max_risk = 0.25
    capital = 1000.0
    sizer = KellyPositionSizer(max_risk, 1.0, 2.0)
    assert sizer.calculate_position_size(_signal(), capital, None, 0.0) == pytest.approx(
        capital * max_risk
    )


def test_kelly_uncapped_fraction():
    sizer = KellyPositionSizer(1.0, 0.6, 2.0)
    assert sizer.calculate_position_size(_signal(), 1000.0, None, 0.0) == pytest.approx(400.0)


def test_kelly_lower_confidence_never_larger():
    sizer = KellyPositionSizer(1.0, 0.8, 2.0)
    high = sizer.calculate_position_size(_signal(confidence=1.0), 1000.0, None, 0.0)
    low = sizer.calculate_position_size(_signal(confidence=0.5), 1000.0, None, 0.0)
    assert low < high


def test_kelly_zero_reward_risk_falls_back_to_minimum():
    sizer = KellyPositionSizer(0.5, 1.0, 0.0)
    capital = 1000.0
    assert sizer.calculate_position_size(_signal(), capital, None, 0.0) == pytest.approx(
        capital * 0.01
    )