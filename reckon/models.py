"""Data models for reckon.

ErrorKind, CalcError, CalcResult, BatchEntry, BatchReport — the typed
structures that flow through tokenizer → calculator → service → CLI.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(str, Enum):
    """Expression-level failure categories."""

    EMPTY_EXPRESSION = "empty-expression"
    INVALID_TOKEN = "invalid-token"
    UNEXPECTED_TOKEN = "unexpected-token"
    UNEXPECTED_END = "unexpected-end"
    MISSING_CLOSING_PAREN = "missing-closing-paren"
    DIVISION_BY_ZERO = "division-by-zero"
    INVALID_CHARACTER = "invalid-character"
    TOO_DEEP = "too-deep"

    def message(self, token: Optional[str] = None) -> str:
        """Render the user-facing message for this kind."""
        template = _MESSAGES[self]
        return template.format(token=token) if "{token}" in template else template


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.EMPTY_EXPRESSION: "Empty expression",
    ErrorKind.INVALID_TOKEN: "Invalid token: {token}",
    ErrorKind.UNEXPECTED_TOKEN: "Unexpected token: {token}",
    ErrorKind.UNEXPECTED_END: "Unexpected end of expression",
    ErrorKind.MISSING_CLOSING_PAREN: "Missing closing parenthesis",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.INVALID_CHARACTER: "Invalid character: {token}",
    ErrorKind.TOO_DEEP: "Expression too deeply nested",
}


class CalcError(ValueError):
    """Raised inside the evaluator; converted to a CalcResult at the boundary."""

    def __init__(self, kind: ErrorKind, token: Optional[str] = None) -> None:
        self.kind = kind
        self.token = token
        super().__init__(kind.message(token))


@dataclass(frozen=True)
class CalcResult:
    """Outcome of one evaluation: a value or an error message, never both."""

    result: Optional[float] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.result is None) == (self.error is None):
            raise ValueError("CalcResult needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: float) -> CalcResult:
        return cls(result=float(value))

    @classmethod
    def failure(cls, message: str) -> CalcResult:
        return cls(error=message)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict (only the populated field).

        Non-finite values are stored as the strings "inf", "-inf" or "nan"
        so the output stays standard JSON.
        """
        if self.ok:
            if math.isfinite(self.result):
                return {"result": self.result}
            return {"result": repr(self.result)}
        return {"error": self.error}

    @classmethod
    def from_dict(cls, d: dict) -> CalcResult:
        """Inverse of to_dict().

        Raises:
            ValueError: Neither result nor error is present.
        """
        if d.get("error") is not None:
            return cls.failure(str(d["error"]))
        if d.get("result") is None:
            raise ValueError("result entry has neither result nor error")
        return cls.success(float(d["result"]))


@dataclass
class BatchEntry:
    """One evaluated line of a batch file."""

    line_no: int
    expression: str
    result: CalcResult

    def to_dict(self) -> dict:
        return {
            "line": self.line_no,
            "expression": self.expression,
            **self.result.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> BatchEntry:
        return cls(
            line_no=d.get("line", 0),
            expression=d.get("expression", ""),
            result=CalcResult.from_dict(d),
        )


@dataclass
class BatchReport:
    """All results of evaluating one batch file."""

    source: str
    timestamp: str
    entries: list[BatchEntry] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def passed(self) -> int:
        return sum(1 for e in self.entries if e.result.ok)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "source": self.source,
            "timestamp": self.timestamp,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "entries": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, d: dict) -> BatchReport:
        """Deserialize from a JSON dict. Counters are recomputed, not trusted."""
        return cls(
            source=d.get("source", ""),
            timestamp=d.get("timestamp", ""),
            entries=[BatchEntry.from_dict(e) for e in d.get("entries", [])],
        )

    def save(self, path: Path) -> None:
        """Write the report as JSON, creating parent directories.

        Output is strict JSON: non-finite results are written as strings.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2, allow_nan=False), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> Optional[BatchReport]:
        """Load a report saved by save(); None if missing or unreadable."""
        if not path.exists():
            return None
        try:
            return cls.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, OSError, ValueError, TypeError, AttributeError, KeyError):
            return None
