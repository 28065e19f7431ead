"""Parameter sets for trading bots, with typed accessors."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any

from xquant.errors import ConfigError


def _fmt_number(value: float) -> str:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class TradingBotConfig:
    """Named bag of JSON-style parameters for a trading bot."""

    name: str = "DefaultBot"
    description: str = "Default Trading Bot Configuration"
    params: dict[str, Any] = field(default_factory=dict)

    def with_name(self, name: str) -> TradingBotConfig:
        return dataclasses.replace(self, name=name, params=dict(self.params))

    def with_description(self, description: str) -> TradingBotConfig:
        return dataclasses.replace(self, description=description, params=dict(self.params))

    def set_param(self, key: str, value: Any) -> None:
        # Non-finite floats have no JSON number form and are stored as null.
        if isinstance(value, float) and not math.isfinite(value):
            value = None
        self.params[key] = value

    def get_param(self, key: str) -> Any:
        return self.params.get(key)

    def _require(self, key: str) -> Any:
        if key not in self.params:
            raise ConfigError(f"Missing parameter: '{key}'")
        return self.params[key]

    def get_float(self, key: str) -> float:
        value = self._require(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Parameter '{key}' is not a valid float")
        return float(value)

    def get_int(self, key: str) -> int:
        """A non-negative integer parameter."""
        value = self._require(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"Parameter '{key}' is not a valid non-negative integer")
        return value

    def get_bool(self, key: str) -> bool:
        value = self._require(key)
        if not isinstance(value, bool):
            raise ConfigError(f"Parameter '{key}' is not a valid boolean")
        return value

    def get_string(self, key: str) -> str:
        value = self._require(key)
        if not isinstance(value, str):
            raise ConfigError(f"Parameter '{key}' is not a valid string")
        return value

    @classmethod
    def ma_crossover_config(cls, fast_period: int, slow_period: int) -> TradingBotConfig:
        config = cls(
            name=f"MA Crossover {fast_period}/{slow_period}",
            description=(
                f"Moving Average Crossover Strategy with {fast_period} "
                f"and {slow_period} periods"
            ),
        )
        config.set_param("fast_period", fast_period)
        config.set_param("slow_period", slow_period)
        config.set_param("ma_type", "EMA")
        config.set_param("base_position_size", 1.0)
        config.set_param("strength_multiplier", 0.5)
        return config

    @classmethod
    def rsi_config(cls, period: int, overbought: float, oversold: float) -> TradingBotConfig:
        config = cls(
            name=f"RSI {period}",
            description=(
                f"RSI Strategy with {period} period, overbought at "
                f"{_fmt_number(overbought)}, oversold at {_fmt_number(oversold)}"
            ),
        )
        config.set_param("period", period)
        config.set_param("overbought", overbought)
        config.set_param("oversold", oversold)
        config.set_param("base_position_size", 1.0)
        config.set_param("strength_multiplier", 0.5)
        return config

    @classmethod
    def macd_config(
        cls, fast_period: int, slow_period: int, signal_period: int
    ) -> TradingBotConfig:
        config = cls(
            name=f"MACD {fast_period}/{slow_period}/{signal_period}",
            description=(
                f"MACD Strategy with fast period {fast_period}, slow period "
                f"{slow_period}, signal period {signal_period}"
            ),
        )
        config.set_param("fast_period", fast_period)
        config.set_param("slow_period", slow_period)
        config.set_param("signal_period", signal_period)
        config.set_param("base_position_size", 1.0)
        config.set_param("strength_multiplier", 0.5)
        return config