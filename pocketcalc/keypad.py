"""Keypad adapter: translate key tokens into engine presses.

A key token is what a user types or what a button shows: "7", ".", "+",
"x", "=", "AC", "+/-", "%", plus a few keyboard names ("enter", "esc").
Tokens are parsed into KeyEvents and dispatched onto a CalculatorEngine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from pocketcalc.engine import DIGITS, CalculatorEngine
from pocketcalc.models import OPERATOR_ALIASES, OPERATORS, CalculatorState


class KeyKind(str, Enum):
    """The seven inputs a calculator understands."""

    DIGIT = "digit"
    DECIMAL_POINT = "decimal-point"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    SIGN_TOGGLE = "sign-toggle"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class KeyEvent:
    """One parsed key press. ``value`` carries the digit or operator symbol."""

    kind: KeyKind
    value: str = ""


@dataclass
class Step:
    """Engine outputs observed right after one key press."""

    key: str
    state: CalculatorState
    display_text: str
    calculation_label_text: str


# Lower-cased word tokens and the events they stand for.
_NAMED_KEYS: dict[str, KeyEvent] = {
    "=": KeyEvent(KeyKind.EQUALS),
    "enter": KeyEvent(KeyKind.EQUALS),
    "return": KeyEvent(KeyKind.EQUALS),
    "ac": KeyEvent(KeyKind.CLEAR),
    "c": KeyEvent(KeyKind.CLEAR),
    "esc": KeyEvent(KeyKind.CLEAR),
    "escape": KeyEvent(KeyKind.CLEAR),
    "+/-": KeyEvent(KeyKind.SIGN_TOGGLE),
    "±": KeyEvent(KeyKind.SIGN_TOGGLE),
    "neg": KeyEvent(KeyKind.SIGN_TOGGLE),
    "%": KeyEvent(KeyKind.PERCENTAGE),
    ".": KeyEvent(KeyKind.DECIMAL_POINT),
    ",": KeyEvent(KeyKind.DECIMAL_POINT),
}

_SIGN_TOGGLE = "+/-"

# Single characters that are keys on their own inside a compact run like "12+3=".
_SINGLE_CHAR_KEYS = set(DIGITS) | set(OPERATORS) | set(OPERATOR_ALIASES) | set("=%.,±")

KEY_HELP: list[tuple[str, str]] = [
    ("0-9", "Digit"),
    (". ,", "Decimal point"),
    ("+", "Add"),
    ("- −", "Subtract"),
    ("x * ×", "Multiply"),
    ("/ ÷", "Divide"),
    ("= enter return", "Evaluate"),
    ("AC C esc", "Clear everything"),
    ("+/- ± neg", "Toggle sign"),
    ("%", "Percentage"),
]


def parse_key(token: str) -> KeyEvent:
    """Parse a single key token.

    Raises:
        ValueError: The token is not a calculator key.
    """
    key = token.strip()
    if len(key) == 1 and key in DIGITS:
        return KeyEvent(KeyKind.DIGIT, key)
    if key in OPERATORS or key in OPERATOR_ALIASES:
        return KeyEvent(KeyKind.OPERATOR, key)
    event = _NAMED_KEYS.get(key.lower())
    if event is None:
        raise ValueError(f"Unknown key: {token!r}")
    return event


def _split_run(run: str) -> list[str]:
    keys = []
    i = 0
    while i < len(run):
        if run.startswith(_SIGN_TOGGLE, i):
            keys.append(_SIGN_TOGGLE)
            i += len(_SIGN_TOGGLE)
        else:
            keys.append(run[i])
            i += 1
    return keys


def tokenize(text: str) -> list[str]:
    """Split typed input into key tokens.

    Whitespace separates tokens. A token made only of single-character keys
    is split into one token per character, so "12+3=" is five presses. The
    sign toggle "+/-" is matched as one key inside such a run, so "9+/-" is
    two presses. Word keys such as "AC" must stand alone.
    """
    tokens: list[str] = []
    for word in text.split():
        if word.lower() in _NAMED_KEYS:
            tokens.append(word)
        elif all(ch in _SINGLE_CHAR_KEYS for ch in word):
            tokens.extend(_split_run(word))
        else:
            tokens.append(word)
    return tokens


def dispatch(engine: CalculatorEngine, event: KeyEvent) -> None:
    """Apply one key event to the engine."""
    if event.kind is KeyKind.DIGIT:
        engine.digit(event.value)
    elif event.kind is KeyKind.DECIMAL_POINT:
        engine.decimal_point()
    elif event.kind is KeyKind.OPERATOR:
        engine.operator(event.value)
    elif event.kind is KeyKind.EQUALS:
        engine.equals()
    elif event.kind is KeyKind.CLEAR:
        engine.clear()
    elif event.kind is KeyKind.SIGN_TOGGLE:
        engine.sign_toggle()
    elif event.kind is KeyKind.PERCENTAGE:
        engine.percentage()


def press_keys(engine: CalculatorEngine, tokens: Iterable[str]) -> list[Step]:
    """Parse and press each token in order, recording the outputs after each.

    All tokens are parsed before any is pressed, so an unknown key leaves the
    engine untouched.

    Raises:
        ValueError: One of the tokens is not a calculator key.
    """
    keyed = [(token, parse_key(token)) for token in tokens]
    steps = []
    for token, event in keyed:
        dispatch(engine, event)
        steps.append(Step(
            key=token,
            state=engine.state,
            display_text=engine.display_text,
            calculation_label_text=engine.calculation_label_text,
        ))
    return steps
