"""Tests for the recursive-descent calculator over pre-tokenized input.

Covers arithmetic, precedence, associativity, parentheses, unary signs,
every error message, and per-call state isolation.
"""

import math
import threading

import pytest

from reckon.calculator import Calculator, parse_number
from reckon.models import CalcError, ErrorKind


@pytest.fixture
def calc():
    return Calculator()


def value_of(calc, tokens):
    result = calc.calculate(tokens)
    assert result.error is None, result.error
    return result.result


def error_of(calc, tokens):
    result = calc.calculate(tokens)
    assert result.result is None
    return result.error


# --- Basic arithmetic ---

@pytest.mark.parametrize("tokens, expected", [
    (["2", "+", "3"], 5),
    (["5", "-", "3"], 2),
    (["4", "*", "3"], 12),
    (["8", "/", "2"], 4),
    (["2.5", "+", "1.5"], 4),
    (["999999", "+", "1"], 1000000),
])
def test_binary_operators(calc, tokens, expected):
    assert value_of(calc, tokens) == expected


def test_floating_point_is_not_corrected(calc):
    value = value_of(calc, ["0.1", "+", "0.2"])
    assert value == pytest.approx(0.3)
    assert value == 0.1 + 0.2


def test_division_precision(calc):
    assert value_of(calc, ["1", "/", "3", "*", "3"]) == pytest.approx(1.0)


# --- Precedence and associativity ---

def test_multiplication_before_addition(calc):
    assert value_of(calc, ["2", "+", "3", "*", "4"]) == 14


def test_division_before_subtraction(calc):
    assert value_of(calc, ["10", "-", "8", "/", "2"]) == 6


def test_mixed_precedence(calc):
    assert value_of(calc, ["2", "+", "3", "*", "4", "-", "5", "/", "2"]) == 11.5


def test_subtraction_is_left_associative(calc):
    assert value_of(calc, ["10", "-", "5", "-", "2"]) == 3


def test_division_is_left_associative(calc):
    assert value_of(calc, ["2", "*", "6", "/", "3"]) == 4
    assert value_of(calc, ["100", "/", "10", "/", "5"]) == 2


# --- Parentheses ---

def test_parentheses_override_precedence(calc):
    assert value_of(calc, ["(", "2", "+", "3", ")", "*", "4"]) == 20


def test_nested_parentheses(calc):
    tokens = ["(", "(", "(", "2", "+", "3", ")", "*", "4", ")", "-", "5", ")"]
    assert value_of(calc, tokens) == 15


def test_complex_nested_expression(calc):
    tokens = [
        "(", "(", "2", "+", "3", ")", "*", "(", "4", "-", "1", ")", ")",
        "/", "(", "5", "+", "10", ")",
    ]
    assert value_of(calc, tokens) == 1


# --- Unary signs ---

@pytest.mark.parametrize("tokens, expected", [
    (["-", "5"], -5),
    (["+", "5"], 5),
    (["-", "-", "5"], 5),
    (["-", "+", "-", "5"], 5),
    (["3", "+", "-", "2"], 1),
    (["-", "2", "*", "3"], -6),
    (["-", "2", "*", "-", "3", "+", "1"], 7),
    (["-", "(", "2", "+", "3", ")", "*", "2"], -10),
    (["+", "2", "+", "3"], 5),
])
def test_unary_signs(calc, tokens, expected):
    assert value_of(calc, tokens) == expected


def test_negative_zero(calc):
    value = value_of(calc, ["-", "0"])
    assert value == 0
    assert math.copysign(1.0, value) == -1.0


# --- Boundaries ---

def test_single_number_unchanged(calc):
    assert value_of(calc, ["42"]) == 42
    assert value_of(calc, ["0"]) == 0


def test_trailing_point_literal(calc):
    assert value_of(calc, ["5."]) == 5
    assert value_of(calc, [".5"]) == 0.5


def test_overflow_follows_ieee(calc):
    big = "9" * 300
    assert value_of(calc, [big, "*", big]) == math.inf


# --- Errors ---

def test_empty_expression(calc):
    assert error_of(calc, []) == "Empty expression"


def test_division_by_zero(calc):
    assert error_of(calc, ["5", "/", "0"]) == "Division by zero"


def test_division_by_zero_nested(calc):
    assert error_of(calc, ["2", "+", "5", "/", "0"]) == "Division by zero"
    tokens = ["1", "/", "(", "2", "-", "(", "1", "+", "1", ")", ")"]
    assert error_of(calc, tokens) == "Division by zero"


def test_division_by_negative_zero(calc):
    assert error_of(calc, ["1", "/", "-", "0"]) == "Division by zero"


def test_missing_closing_paren(calc):
    assert error_of(calc, ["(", "2", "+", "3"]) == "Missing closing parenthesis"
    assert error_of(calc, ["(", "2", "3"]) == "Missing closing parenthesis"


def test_unexpected_end(calc):
    assert error_of(calc, ["2", "+"]) == "Unexpected end of expression"
    assert error_of(calc, ["-"]) == "Unexpected end of expression"
    assert error_of(calc, ["("]) == "Unexpected end of expression"


def test_unexpected_token(calc):
    assert error_of(calc, ["2", "+", "3", ")"]) == "Unexpected token: )"
    assert error_of(calc, ["2", "3"]) == "Unexpected token: 3"


def test_empty_parentheses(calc):
    assert error_of(calc, ["(", ")"]) == "Invalid token: )"


@pytest.mark.parametrize("token", ["2.5.5", "abc", ".", "inf", "nan", "1e5", "0x10", "1_000", "٣"])
def test_invalid_number_tokens(calc, token):
    assert error_of(calc, [token]) == f"Invalid token: {token}"


def test_invalid_token_after_operator(calc):
    assert error_of(calc, ["2", "+", "abc"]) == "Invalid token: abc"


def test_first_error_wins(calc):
    assert error_of(calc, ["1", "/", "0", "+", "abc"]) == "Division by zero"


def test_deep_nesting_reports_error(calc):
    tokens = ["("] * 100_000 + ["1"] + [")"] * 100_000
    assert error_of(calc, tokens) == "Expression too deeply nested"


def test_evaluate_raises_calc_error(calc):
    with pytest.raises(CalcError) as exc:
        calc.evaluate(["2", "+"])
    assert exc.value.kind is ErrorKind.UNEXPECTED_END
    assert str(exc.value) == "Unexpected end of expression"


# --- State isolation ---

def test_reuse_after_error(calc):
    assert error_of(calc, ["(", "1"]) == "Missing closing parenthesis"
    assert value_of(calc, ["2", "+", "3"]) == 5


def test_repeated_calls_are_identical(calc):
    tokens = ["2", "*", "(", "3", "+", "4", ")", "-", "5", "/", "2.5"]
    first = calc.calculate(tokens)
    assert first.result == 12
    for _ in range(5):
        assert calc.calculate(tokens) == first


def test_tuple_input_not_mutated(calc):
    tokens = ("1", "+", "2")
    assert value_of(calc, tokens) == 3
    assert tokens == ("1", "+", "2")


def test_shared_instance_across_threads(calc):
    errors = []

    def worker(n):
        for _ in range(200):
            r = calc.calculate([str(n), "*", "(", str(n), "+", "1", ")"])
            if r.result != n * (n + 1):
                errors.append((n, r))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 9)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


# --- parse_number ---

def test_parse_number():
    assert parse_number("3.14") == pytest.approx(3.14)
    assert parse_number("007") == 7
    assert parse_number("-1") is None
    assert parse_number("") is None
    assert parse_number("1" * 400) is None
