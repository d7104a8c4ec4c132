"""reckon — arithmetic expression evaluator.

Recursive-descent evaluation of + - * / with parentheses and unary signs.
Every call returns a CalcResult holding either a float or an error message;
evaluation errors are never raised to the caller.

Usage:
    from reckon import CalculatorService
    CalculatorService.create().calculate_expression("(20 / 100) * 150")

    python -m reckon eval "2 + 3 * 4"
"""

from reckon.calculator import Calculator
from reckon.models import CalcError, CalcResult, ErrorKind
from reckon.service import CalculatorService
from reckon.tokenizer import tokenize

__all__ = [
    "CalcError",
    "CalcResult",
    "Calculator",
    "CalculatorService",
    "ErrorKind",
    "tokenize",
]
