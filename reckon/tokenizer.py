"""Split free-form expression text into the token list the calculator consumes.

Numbers are grouped but not validated here: "2.5.5" comes out as one token
and is rejected later by the calculator. Characters that are neither digits,
operators, parentheses nor whitespace are grouped into runs ("abc") in
lenient mode, or rejected immediately in strict mode.
"""

from __future__ import annotations

from reckon.models import CalcError, ErrorKind

NUMBER_CHARS = frozenset("0123456789.")
OPERATORS = frozenset("+-*/")
PARENS = frozenset("()")
SYMBOLS = OPERATORS | PARENS


def tokenize(text: str, strict: bool = False) -> list[str]:
    """Convert an expression string into a list of token strings.

    Args:
        text: Raw expression, e.g. "2 * (3 + 4)".
        strict: Raise on unrecognized characters instead of passing them on.

    Returns:
        Ordered tokens; empty for empty or whitespace-only input.

    Raises:
        CalcError: INVALID_CHARACTER, only when strict is set.
    """
    tokens: list[str] = []
    buf: list[str] = []
    buf_is_number = False

    def flush() -> None:
        if buf:
            tokens.append("".join(buf))
            buf.clear()

    for ch in text:
        if ch.isspace():
            flush()
        elif ch in NUMBER_CHARS:
            if buf and not buf_is_number:
                flush()
            buf.append(ch)
            buf_is_number = True
        elif ch in SYMBOLS:
            flush()
            tokens.append(ch)
        else:
            if strict:
                raise CalcError(ErrorKind.INVALID_CHARACTER, ch)
            if buf and buf_is_number:
                flush()
            buf.append(ch)
            buf_is_number = False

    flush()
    return tokens


def classify(token: str) -> str:
    """Coarse token class for display: number, operator, paren or unknown."""
    if token in OPERATORS:
        return "operator"
    if token in PARENS:
        return "paren"
    if token and all(ch in NUMBER_CHARS for ch in token):
        return "number"
    return "unknown"
