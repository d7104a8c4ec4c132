"""String-in, result-out facade over the tokenizer and the calculator."""

from __future__ import annotations

from reckon.calculator import Calculator
from reckon.models import CalcError, CalcResult, ErrorKind
from reckon.tokenizer import tokenize


class CalculatorService:
    """Evaluate expression text in one call.

    Stateless apart from the tokenizer mode, so a single instance may serve
    any number of calls, sequential or concurrent.
    """

    def __init__(self, calculator: Calculator | None = None, strict: bool = False) -> None:
        self.calculator = calculator or Calculator()
        self.strict = strict

    @classmethod
    def create(cls, strict: bool = False) -> CalculatorService:
        """Build an independent service with its own calculator."""
        return cls(Calculator(), strict=strict)

    def tokenize(self, text: str) -> list[str]:
        return tokenize(text, strict=self.strict)

    def calculate_expression(self, text: str) -> CalcResult:
        """Trim, tokenize and evaluate an expression string."""
        text = text.strip()
        if not text:
            return CalcResult.failure(ErrorKind.EMPTY_EXPRESSION.message())

        try:
            tokens = self.tokenize(text)
        except CalcError as e:
            return CalcResult.failure(str(e))
        return self.calculator.calculate(tokens)
