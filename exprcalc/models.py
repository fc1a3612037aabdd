"""Data models for the exprcalc evaluator.

ErrorKind, CalcError, Evaluation — the typed structures that flow through
parser → engine → session → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Closed set of evaluation failure categories."""

    INVALID_TYPE = "invalid-type"
    TOO_LONG = "too-long"
    EXPECTED_NUMBER = "expected-number"
    INVALID_NUMBER = "invalid-number"
    DIVIDE_BY_ZERO = "divide-by-zero"
    MISSING_CLOSE_PAREN = "missing-close-paren"
    UNEXPECTED_TOKEN = "unexpected-token"
    NOT_FINITE = "not-finite"

    @property
    def message(self) -> str:
        """Fixed user-facing message for this kind."""
        return _MESSAGES[self]


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_TYPE: "Invalid expression",
    ErrorKind.TOO_LONG: "Expression too long",
    ErrorKind.EXPECTED_NUMBER: "Invalid expression",
    ErrorKind.INVALID_NUMBER: "Number overflow",
    ErrorKind.DIVIDE_BY_ZERO: "Division by zero",
    ErrorKind.MISSING_CLOSE_PAREN: "Invalid expression",
    ErrorKind.UNEXPECTED_TOKEN: "Invalid expression",
    ErrorKind.NOT_FINITE: "Number overflow",
}


class CalcError(ValueError):
    """Evaluation failure tagged with the rule that raised it.

    Attributes:
        kind: ErrorKind set where the failure happened.
        position: Offset into the expression, or None for checks that run
            before parsing (type, length).
        detail: Developer-facing description; never used for classification.
    """

    def __init__(self, kind: ErrorKind, position: Optional[int] = None, detail: str = "") -> None:
        self.kind = kind
        self.position = position
        self.detail = detail or kind.value
        super().__init__(self.detail if position is None else f"{self.detail} at offset {position}")

    @property
    def message(self) -> str:
        return self.kind.message


@dataclass(frozen=True)
class Evaluation:
    """A successfully evaluated expression and its canonical rendering."""

    expression: str
    value: float
    result: str

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "expression": self.expression,
            "value": self.value,
            "result": self.result,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Evaluation:
        """Deserialize from a dict produced by to_dict()."""
        return cls(
            expression=d.get("expression", ""),
            value=float(d.get("value", 0.0)),
            result=d.get("result", ""),
        )
