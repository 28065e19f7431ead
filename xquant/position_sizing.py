"""Position sizing rules driven by signal strength and confidence."""

from __future__ import annotations

from abc import ABC, abstractmethod

from xquant.models import Position
from xquant.signals import SignalWithMetadata


class PositionSizer(ABC):
    """Decides how large a position a signal should open."""

    @abstractmethod
    def calculate_position_size(
        self,
        signal: SignalWithMetadata,
        available_capital: float,
        current_position: Position | None,
        price: float,
    ) -> float:
        """Return the position size for ``signal``."""


class FixedSizePositionSizer(PositionSizer):
    """A base size scaled up by the absolute signal strength."""

    def __init__(self, base_size: float, strength_multiplier: float) -> None:
        self.base_position_size = base_size
        self.strength_multiplier = strength_multiplier

    def calculate_position_size(self, signal, available_capital, current_position, price):
        strength_factor = 1.0 + abs(signal.strength) * self.strength_multiplier
        return self.base_position_size * strength_factor


class KellyPositionSizer(PositionSizer):
    """Kelly criterion sizing, with the win rate scaled by signal confidence."""

    def __init__(self, max_risk: float, win_rate: float, reward_risk: float) -> None:
        self.max_risk_percentage = max_risk
        self.win_rate = win_rate
        self.reward_risk_ratio = reward_risk

    def calculate_position_size(self, signal, available_capital, current_position, price):
        p = self.win_rate * signal.confidence
        q = 1.0 - p
        b = self.reward_risk_ratio
        try:
            kelly_fraction = (b * p - q) / b
        except ZeroDivisionError:
            kelly_fraction = float("nan")
        # A negative, zero or undefined fraction falls back to the minimum.
        fraction = kelly_fraction if kelly_fraction > 0.01 else 0.01
        capped = self.max_risk_percentage if self.max_risk_percentage < fraction else fraction
        return available_capital * capped