"""Calculator engine: the keystroke state machine.

Each public method is one button press. The engine owns a single Session and
mutates it in place; the display text and calculation label are read back
after every press. Evaluation is immediate-execution: one pending binary
operation, applied left to right when equals is pressed.
"""

from __future__ import annotations

import logging
import operator as _op
from typing import Callable, Optional

from pocketcalc.config import CalculatorConfig
from pocketcalc.models import (
    ADD,
    DIVIDE,
    MULTIPLY,
    SUBTRACT,
    CalculatorState,
    Session,
    is_displaying_first_operand,
    is_displaying_second_operand,
    is_waiting_for_operand,
    next_state_after_clearing_display,
    normalize_operator,
)

logger = logging.getLogger(__name__)

DIGITS = "0123456789"
DECIMAL_POINT = "."

_OPERATIONS: dict[str, Callable[[float, float], float]] = {
    ADD: _op.add,
    SUBTRACT: _op.sub,
    MULTIPLY: _op.mul,
    DIVIDE: _op.truediv,
}


def formatted(value: float, decimal_places: int = 8) -> str:
    """Render a number for the display.

    Fixed-point with ``decimal_places`` digits, then trailing zeros and a
    dangling decimal point are stripped: 2.0 -> "2", 2.5 -> "2.5". Integer
    digits are never stripped.
    """
    text = f"{value:.{decimal_places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_operand(text: str) -> Optional[float]:
    """Parse display text as a number, or None if it is not one."""
    try:
        return float(text)
    except ValueError:
        return None


class CalculatorEngine:
    """Pocket-calculator state machine driven by discrete key presses.

    Args:
        config: Display limits and messages. Defaults to CalculatorConfig().
        session: Existing session to drive. Defaults to a fresh one.
    """

    def __init__(
        self,
        config: Optional[CalculatorConfig] = None,
        session: Optional[Session] = None,
    ) -> None:
        self.config = config or CalculatorConfig()
        self.session = session if session is not None else Session.initial()

    # --- Outputs ---

    @property
    def display_text(self) -> str:
        return self.session.display_text

    @property
    def calculation_label_text(self) -> str:
        return self.session.calculation_label_text

    @property
    def state(self) -> CalculatorState:
        return self.session.state

    # --- Inputs ---

    def digit(self, c: str) -> None:
        """Press a digit key ("0" to "9")."""
        if len(c) != 1 or c not in DIGITS:
            raise ValueError(f"Not a digit key: {c!r}")
        self._append_to_display(c)

    def decimal_point(self) -> None:
        """Press the decimal point key. At most one point per number."""
        self._append_to_display(DECIMAL_POINT)

    def operator(self, op: str) -> None:
        """Press a binary operator key (+, −, ×, ÷ or an ASCII alias)."""
        s = self.session
        self._store_display_value()
        s.operator = normalize_operator(op)
        self._set_state(CalculatorState.WAITING_FOR_SECOND_OPERAND)
        s.calculation_label_text = f"{self._formatted(s.first_operand)} {s.operator}"
        s.display_text = "0"

    def equals(self) -> None:
        """Press equals: evaluate the pending operation, if there is one."""
        s = self.session
        self._store_display_value()

        if not is_displaying_second_operand(s.state):
            return

        if s.operator == DIVIDE and s.second_operand == 0:
            logger.debug("division by zero: %s %s 0", s.first_operand, s.operator)
            s.display_text = self.config.division_by_zero_message
            s.first_operand = 0.0
            self._set_state(CalculatorState.EXCEPTION_FOUND)
        else:
            result = self._calculate()
            s.display_text = self._formatted(result)
            s.first_operand = result
            self._set_state(CalculatorState.CALCULATION_COMPLETE)

        s.calculation_label_text = ""
        s.second_operand = 0.0

    def clear(self) -> None:
        """Press AC: return to the start-up configuration."""
        s = self.session
        s.operator = ""
        self._set_state(CalculatorState.CALCULATION_COMPLETE)
        s.first_operand = 0.0
        s.second_operand = 0.0
        s.display_text = "0"
        s.calculation_label_text = ""

    def sign_toggle(self) -> None:
        """Press +/-: negate the displayed number."""
        value = parse_operand(self.session.display_text)
        if value is not None:
            self._show_operand(-value)

    def percentage(self) -> None:
        """Press %: divide the displayed number by 100."""
        value = parse_operand(self.session.display_text)
        if value is not None:
            self._show_operand(value / 100)

    # --- Internals ---

    def _formatted(self, value: float) -> str:
        return formatted(value, self.config.decimal_places)

    def _set_state(self, state: CalculatorState) -> None:
        if state is not self.session.state:
            logger.debug("state %s -> %s", self.session.state.value, state.value)
        self.session.state = state

    def _can_append_to_display(self) -> bool:
        # A display that is about to be replaced never blocks input, which
        # lets a new number overwrite the error message.
        return (
            len(self.session.display_text) < self.config.max_display_length
            or is_waiting_for_operand(self.session.state)
        )

    def _append_to_display(self, value: str) -> None:
        s = self.session
        if not self._can_append_to_display():
            logger.debug("display full, ignoring %r", value)
            return

        text = s.display_text
        if is_waiting_for_operand(s.state):
            text = ""
            self._set_state(next_state_after_clearing_display(s.state))
        elif text == "0" and value != DECIMAL_POINT:
            text = ""

        if value == DECIMAL_POINT and DECIMAL_POINT in text:
            return
        s.display_text = text + value

    def _store_operand(self, value: float) -> None:
        if is_displaying_first_operand(self.session.state):
            self.session.first_operand = value
        else:
            self.session.second_operand = value

    def _store_display_value(self) -> None:
        value = parse_operand(self.session.display_text)
        if value is not None:
            self._store_operand(value)

    def _show_operand(self, value: float) -> None:
        self._store_operand(value)
        self.session.display_text = self._formatted(value)

    def _calculate(self) -> float:
        s = self.session
        fn = _OPERATIONS.get(s.operator)
        if fn is None:
            logger.debug("unknown operator %r, result is 0", s.operator)
            return 0.0
        result = fn(s.first_operand, s.second_operand)
        logger.debug("%s %s %s = %s", s.first_operand, s.operator, s.second_operand, result)
        return result
