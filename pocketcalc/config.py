"""Calculator configuration.

Defaults match a classic pocket calculator; each value can be overridden
through a POCKETCALC_* environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_ENV_PREFIX = "POCKETCALC_"


@dataclass(frozen=True)
class CalculatorConfig:
    """Display and formatting limits for a CalculatorEngine."""

    max_display_length: int = 16
    decimal_places: int = 8
    division_by_zero_message: str = "Can't divide by 0"

    def __post_init__(self) -> None:
        if self.max_display_length < 1:
            raise ValueError(f"max_display_length must be at least 1, got {self.max_display_length}")
        if self.decimal_places < 0:
            raise ValueError(f"decimal_places must not be negative, got {self.decimal_places}")


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(_ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{_ENV_PREFIX}{name} must be positive, got {value}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> CalculatorConfig:
    """Build a CalculatorConfig from environment overrides.

    Args:
        env: Variables to read. Defaults to os.environ.

    Returns:
        CalculatorConfig with unset variables left at their defaults.

    Raises:
        ValueError: A numeric override is not a positive integer.
    """
    env = os.environ if env is None else env
    defaults = CalculatorConfig()
    return CalculatorConfig(
        max_display_length=_positive_int(env, "MAX_DISPLAY_LENGTH", defaults.max_display_length),
        decimal_places=_positive_int(env, "DECIMAL_PLACES", defaults.decimal_places),
        # An empty message would leave the display blank.
        division_by_zero_message=(
            env.get(_ENV_PREFIX + "DIVISION_BY_ZERO_MESSAGE") or defaults.division_by_zero_message
        ),
    )
