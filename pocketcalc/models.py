"""Data models for the pocketcalc engine.

CalculatorState enum, operator symbols, the Session record and the state
predicates that decide what the next keystroke means.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CalculatorState(str, Enum):
    """Where the calculator is in the entry/evaluate cycle."""

    ENTERING_FIRST_OPERAND = "entering-first-operand"
    ENTERING_SECOND_OPERAND = "entering-second-operand"
    CALCULATION_COMPLETE = "calculation-complete"
    EXCEPTION_FOUND = "exception-found"
    WAITING_FOR_SECOND_OPERAND = "waiting-for-second-operand"


# Canonical operator symbols, as shown in the calculation label.
ADD = "+"
SUBTRACT = "−"
MULTIPLY = "×"
DIVIDE = "÷"

OPERATORS = (ADD, SUBTRACT, MULTIPLY, DIVIDE)

# Button labels and keyboard keys that mean one of the canonical operators.
OPERATOR_ALIASES: dict[str, str] = {
    "-": SUBTRACT,
    "x": MULTIPLY,
    "X": MULTIPLY,
    "*": MULTIPLY,
    "/": DIVIDE,
}


def normalize_operator(op: str) -> str:
    """Map an operator alias to its canonical symbol.

    Unknown operators are returned unchanged; evaluating one yields 0.
    """
    return OPERATOR_ALIASES.get(op, op)


_WAITING_STATES = frozenset({
    CalculatorState.WAITING_FOR_SECOND_OPERAND,
    CalculatorState.EXCEPTION_FOUND,
    CalculatorState.CALCULATION_COMPLETE,
})

# Clearing the display in a waiting state hands control to an entering state.
_STATE_AFTER_CLEARING_DISPLAY: dict[CalculatorState, CalculatorState] = {
    CalculatorState.WAITING_FOR_SECOND_OPERAND: CalculatorState.ENTERING_SECOND_OPERAND,
    CalculatorState.EXCEPTION_FOUND: CalculatorState.ENTERING_FIRST_OPERAND,
    CalculatorState.CALCULATION_COMPLETE: CalculatorState.ENTERING_FIRST_OPERAND,
}


def is_waiting_for_operand(state: CalculatorState) -> bool:
    """True when the next digit starts a fresh number instead of appending."""
    return state in _WAITING_STATES


def is_displaying_first_operand(state: CalculatorState) -> bool:
    return state in (
        CalculatorState.ENTERING_FIRST_OPERAND,
        CalculatorState.CALCULATION_COMPLETE,
    )


def is_displaying_second_operand(state: CalculatorState) -> bool:
    return state in (
        CalculatorState.ENTERING_SECOND_OPERAND,
        CalculatorState.WAITING_FOR_SECOND_OPERAND,
    )


def next_state_after_clearing_display(state: CalculatorState) -> CalculatorState:
    """State to move to once a waiting display has been cleared for entry.

    Entering states are returned unchanged.
    """
    return _STATE_AFTER_CLEARING_DISPLAY.get(state, state)


@dataclass
class Session:
    """Mutable state of one calculator, owned by a CalculatorEngine."""

    state: CalculatorState = CalculatorState.CALCULATION_COMPLETE
    operator: str = ""
    first_operand: float = 0.0
    second_operand: float = 0.0
    display_text: str = "0"
    calculation_label_text: str = ""

    @classmethod
    def initial(cls) -> Session:
        """A freshly started (or fully cleared) calculator."""
        return cls()

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "state": self.state.value,
            "operator": self.operator,
            "first_operand": self.first_operand,
            "second_operand": self.second_operand,
            "display_text": self.display_text,
            "calculation_label_text": self.calculation_label_text,
        }
