"""Recursive-descent evaluator for + - * / with parentheses and unary signs.

Grammar (left-associative, standard precedence):

    expression := term ( ('+' | '-') term )*
    term       := factor ( ('*' | '/') factor )*
    factor     := '-' factor | '+' factor | '(' expression ')' | number

Values are computed while parsing; no tree is built. Errors are raised as
CalcError at the point of violation and turned into a CalcResult by
Calculator.calculate().
"""

from __future__ import annotations

import math
import re
from typing import Optional, Sequence

from reckon.models import CalcError, CalcResult, ErrorKind

# Plain decimal literal: digits with at most one point, at least one digit.
_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+", re.ASCII)


def parse_number(token: str) -> Optional[float]:
    """Return the finite float a token denotes, or None if it isn't one.

    Only plain decimals count: "inf", "nan", "1e5" and "2.5.5" are rejected.
    """
    if not _NUMBER_RE.fullmatch(token):
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


class _Cursor:
    """Per-call parse state: the token list and the read position."""

    __slots__ = ("tokens", "pos")

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> None:
        self.pos += 1

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)


class Calculator:
    """Evaluates token sequences.

    Holds no per-call state, so one instance can be reused or shared across
    threads; every calculate() call gets its own cursor.
    """

    def calculate(self, tokens: Sequence[str]) -> CalcResult:
        """Evaluate a token sequence.

        Returns:
            CalcResult with the value, or with the error message if the
            sequence is empty, malformed, or divides by zero.
        """
        try:
            return CalcResult.success(self.evaluate(tokens))
        except CalcError as e:
            return CalcResult.failure(str(e))

    def evaluate(self, tokens: Sequence[str]) -> float:
        """Like calculate(), but raises CalcError instead of returning it."""
        if not tokens:
            raise CalcError(ErrorKind.EMPTY_EXPRESSION)

        cur = _Cursor(list(tokens))
        try:
            value = self._expression(cur)
        except RecursionError:
            raise CalcError(ErrorKind.TOO_DEEP) from None
        if not cur.at_end:
            raise CalcError(ErrorKind.UNEXPECTED_TOKEN, cur.peek())
        return value

    def _expression(self, cur: _Cursor) -> float:
        result = self._term(cur)
        while True:
            op = cur.peek()
            if op == "+":
                cur.advance()
                result += self._term(cur)
            elif op == "-":
                cur.advance()
                result -= self._term(cur)
            else:
                return result

    def _term(self, cur: _Cursor) -> float:
        result = self._factor(cur)
        while True:
            op = cur.peek()
            if op == "*":
                cur.advance()
                result *= self._factor(cur)
            elif op == "/":
                cur.advance()
                divisor = self._factor(cur)
                if divisor == 0:
                    raise CalcError(ErrorKind.DIVISION_BY_ZERO)
                result /= divisor
            else:
                return result

    def _factor(self, cur: _Cursor) -> float:
        token = cur.peek()
        if token is None:
            raise CalcError(ErrorKind.UNEXPECTED_END)

        if token == "-":
            cur.advance()
            return -self._factor(cur)
        if token == "+":
            cur.advance()
            return self._factor(cur)

        if token == "(":
            cur.advance()
            result = self._expression(cur)
            if cur.peek() != ")":
                raise CalcError(ErrorKind.MISSING_CLOSING_PAREN)
            cur.advance()
            return result

        value = parse_number(token)
        if value is None:
            raise CalcError(ErrorKind.INVALID_TOKEN, token)
        cur.advance()
        return value
