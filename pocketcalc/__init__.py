"""pocketcalc: a pocket calculator as a keystroke state machine.

The engine tracks a first operand, a pending operator and a second operand,
and evaluates one operation at a time when equals is pressed, the way a
basic pocket calculator does. The CLI is a thin keypad on top of it.

Usage:
    python -m pocketcalc press 5 + 3 =     # Display shows 8
    python -m pocketcalc repl              # Interactive keypad
"""

from pocketcalc.config import CalculatorConfig, load_config
from pocketcalc.engine import CalculatorEngine, formatted, parse_operand
from pocketcalc.models import CalculatorState, Session

__all__ = [
    "CalculatorConfig",
    "CalculatorEngine",
    "CalculatorState",
    "Session",
    "formatted",
    "load_config",
    "parse_operand",
]

__version__ = "0.1.0"
