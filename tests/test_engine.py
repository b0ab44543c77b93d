"""Engine tests: key-press scenarios against CalculatorEngine.

Covers digit entry, operators, equals, clear, sign toggle, percentage,
division by zero and its recovery, and the display length limit.
"""

import pytest

from pocketcalc.config import CalculatorConfig
from pocketcalc.engine import CalculatorEngine
from pocketcalc.models import CalculatorState, Session


def _type(engine: CalculatorEngine, text: str) -> None:
    """Type digits and decimal points."""
    for ch in text:
        if ch == ".":
            engine.decimal_point()
        else:
            engine.digit(ch)


def _calc(engine: CalculatorEngine, a: str, op: str, b: str) -> None:
    _type(engine, a)
    engine.operator(op)
    _type(engine, b)
    engine.equals()


@pytest.fixture
def engine():
    e = CalculatorEngine()
    e.clear()
    return e


# --- Start-up and clear ---

def test_initial_outputs():
    e = CalculatorEngine()
    assert e.display_text == "0"
    assert e.calculation_label_text == ""
    assert e.state is CalculatorState.CALCULATION_COMPLETE


def test_clear_resets_everything(engine):
    _type(engine, "12")
    engine.operator("+")
    _type(engine, "3")
    engine.clear()
    assert engine.session == Session.initial()


# --- Digit entry ---

@pytest.mark.parametrize("digits", ["7", "42", "1234.56", ".5", "9.", "1234567890123456"])
def test_digits_after_clear_concatenate(engine, digits):
    _type(engine, digits)
    assert engine.display_text == digits


def test_leading_zero_is_replaced(engine):
    _type(engine, "07")
    assert engine.display_text == "7"


def test_repeated_zero_stays_single(engine):
    _type(engine, "000")
    assert engine.display_text == "0"


def test_decimal_point_keeps_entered_zero(engine):
    _type(engine, "0.5")
    assert engine.display_text == "0.5"


def test_second_decimal_point_ignored(engine):
    _type(engine, "1.2.3")
    assert engine.display_text == "1.23"


def test_first_digit_enters_first_operand(engine):
    engine.digit("4")
    assert engine.state is CalculatorState.ENTERING_FIRST_OPERAND


def test_digit_rejects_non_digit(engine):
    with pytest.raises(ValueError):
        engine.digit("a")
    with pytest.raises(ValueError):
        engine.digit("12")
    assert engine.display_text == "0"


# --- Display length limit ---

def test_sixteenth_digit_accepted_seventeenth_rejected(engine):
    _type(engine, "1" * 16)
    assert len(engine.display_text) == 16
    engine.digit("2")
    assert engine.display_text == "1" * 16
    engine.decimal_point()
    assert engine.display_text == "1" * 16


def test_error_message_is_always_replaceable(engine):
    _calc(engine, "1", "÷", "0")
    assert len(engine.display_text) > 16
    engine.digit("7")
    assert engine.display_text == "7"


def test_custom_display_length():
    e = CalculatorEngine(CalculatorConfig(max_display_length=4))
    _type(e, "123456")
    assert e.display_text == "1234"


# --- Operators ---

def test_operator_freezes_first_operand(engine):
    _type(engine, "5")
    engine.operator("+")
    assert engine.calculation_label_text == "5 +"
    assert engine.display_text == "0"
    assert engine.state is CalculatorState.WAITING_FOR_SECOND_OPERAND
    assert engine.session.first_operand == 5.0


@pytest.mark.parametrize("alias,symbol", [("-", "−"), ("x", "×"), ("*", "×"), ("/", "÷"), ("×", "×")])
def test_operator_aliases_are_normalized(engine, alias, symbol):
    _type(engine, "6")
    engine.operator(alias)
    assert engine.session.operator == symbol
    assert engine.calculation_label_text == f"6 {symbol}"


def test_digit_after_operator_starts_second_operand(engine):
    _type(engine, "5")
    engine.operator("+")
    engine.digit("3")
    assert engine.display_text == "3"
    assert engine.state is CalculatorState.ENTERING_SECOND_OPERAND
    assert engine.calculation_label_text == "5 +"


def test_decimal_point_after_operator_starts_fresh(engine):
    _type(engine, "5")
    engine.operator("+")
    _type(engine, ".5")
    assert engine.display_text == ".5"


# --- Equals ---

def test_addition(engine):
    _calc(engine, "5", "+", "3")
    assert engine.display_text == "8"
    assert engine.calculation_label_text == ""
    assert engine.state is CalculatorState.CALCULATION_COMPLETE


@pytest.mark.parametrize("a,op,b,expected", [
    ("2", "−", "5", "-3"),
    ("6", "×", "7", "42"),
    ("7", "÷", "2", "3.5"),
    ("1", "÷", "3", "0.33333333"),
    ("0.1", "+", "0.2", "0.3"),
])
def test_arithmetic(engine, a, op, b, expected):
    _calc(engine, a, op, b)
    assert engine.display_text == expected


def test_result_becomes_first_operand(engine):
    _calc(engine, "5", "+", "3")
    assert engine.session.first_operand == 8.0
    assert engine.session.second_operand == 0.0
    engine.operator("×")
    _type(engine, "2")
    engine.equals()
    assert engine.display_text == "16"


def test_digit_after_result_starts_new_number(engine):
    _calc(engine, "5", "+", "3")
    engine.digit("2")
    assert engine.display_text == "2"
    assert engine.state is CalculatorState.ENTERING_FIRST_OPERAND


def test_second_equals_is_noop(engine):
    _calc(engine, "5", "+", "3")
    before = engine.session.to_dict()
    engine.equals()
    assert engine.display_text == "8"
    assert engine.session.to_dict() == before


def test_equals_without_operator_is_noop(engine):
    _type(engine, "5")
    engine.equals()
    assert engine.display_text == "5"
    assert engine.state is CalculatorState.ENTERING_FIRST_OPERAND


def test_equals_right_after_operator_uses_zero(engine):
    _type(engine, "5")
    engine.operator("+")
    engine.equals()
    assert engine.display_text == "5"


def test_one_pending_operation_at_a_time(engine):
    # The second operator replaces the pending one; nothing is evaluated early.
    _type(engine, "5")
    engine.operator("+")
    _type(engine, "3")
    engine.operator("+")
    assert engine.calculation_label_text == "5 +"
    _type(engine, "2")
    engine.equals()
    assert engine.display_text == "7"


def test_unknown_operator_evaluates_to_zero(engine):
    _type(engine, "3")
    engine.operator("^")
    assert engine.calculation_label_text == "3 ^"
    _type(engine, "2")
    engine.equals()
    assert engine.display_text == "0"
    assert engine.state is CalculatorState.CALCULATION_COMPLETE


def test_decimal_places_from_config():
    e = CalculatorEngine(CalculatorConfig(decimal_places=2))
    _calc(e, "1", "÷", "3")
    assert e.display_text == "0.33"


# --- Division by zero ---

def test_division_by_zero(engine):
    _calc(engine, "1", "÷", "0")
    assert engine.display_text == "Can't divide by 0"
    assert engine.state is CalculatorState.EXCEPTION_FOUND
    assert engine.session.first_operand == 0.0
    assert engine.session.second_operand == 0.0
    assert engine.calculation_label_text == ""


def test_division_by_zero_recovery(engine):
    _calc(engine, "1", "÷", "0")
    engine.digit("7")
    assert engine.display_text == "7"
    assert engine.state is CalculatorState.ENTERING_FIRST_OPERAND


def test_operator_after_error_starts_from_zero(engine):
    _calc(engine, "1", "÷", "0")
    engine.operator("+")
    assert engine.calculation_label_text == "0 +"
    _type(engine, "5")
    engine.equals()
    assert engine.display_text == "5"


def test_custom_division_by_zero_message():
    e = CalculatorEngine(CalculatorConfig(division_by_zero_message="Error"))
    _calc(e, "4", "÷", "0")
    assert e.display_text == "Error"


def test_transforms_ignore_error_message(engine):
    _calc(engine, "1", "÷", "0")
    engine.sign_toggle()
    engine.percentage()
    assert engine.display_text == "Can't divide by 0"


# --- Sign toggle and percentage ---

def test_sign_toggle_round_trip(engine):
    _type(engine, "9")
    engine.sign_toggle()
    assert engine.display_text == "-9"
    assert engine.session.first_operand == -9.0
    engine.sign_toggle()
    assert engine.display_text == "9"


def test_sign_toggle_keeps_state(engine):
    _type(engine, "9")
    engine.sign_toggle()
    assert engine.state is CalculatorState.ENTERING_FIRST_OPERAND


def test_sign_toggle_on_second_operand(engine):
    _type(engine, "5")
    engine.operator("+")
    _type(engine, "3")
    engine.sign_toggle()
    assert engine.session.second_operand == -3.0
    engine.equals()
    assert engine.display_text == "2"


def test_percentage(engine):
    _type(engine, "4")
    engine.percentage()
    assert engine.display_text == "0.04"


def test_percentage_on_second_operand(engine):
    _type(engine, "50")
    engine.operator("+")
    _type(engine, "10")
    engine.percentage()
    assert engine.display_text == "0.1"
    engine.equals()
    assert engine.display_text == "50.1"


# --- Session ownership ---

def test_engine_drives_given_session():
    session = Session(
        state=CalculatorState.WAITING_FOR_SECOND_OPERAND,
        operator="×",
        first_operand=6.0,
        calculation_label_text="6 ×",
    )
    e = CalculatorEngine(session=session)
    _type(e, "7")
    e.equals()
    assert session.display_text == "42"
    assert session.state is CalculatorState.CALCULATION_COMPLETE


def test_zero_decimal_places_keeps_integer_digits():
    e = CalculatorEngine(CalculatorConfig(decimal_places=0))
    _calc(e, "5", "×", "20")
    assert e.display_text == "100"
