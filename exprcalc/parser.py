"""Recursive-descent parser for arithmetic expressions.

Grammar:
    expression := term (('+' | '-') term)*
    term       := unary (('*' | '/') unary)*
    unary      := ('+' | '-')* primary
    primary    := '(' expression ')' | number
    number     := digit+ ('.' digit+)?

Each production takes a Cursor, advances it past what it consumed and
returns the folded float value. No tree is built. Every failure raises
CalcError tagged with the ErrorKind of the rule that failed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from exprcalc.config import DEFAULT_MAX_DEPTH
from exprcalc.models import CalcError, ErrorKind

_DIGITS = frozenset("0123456789")


@dataclass
class Cursor:
    """Position over an immutable input string.

    pos only moves forward. depth counts the currently open parentheses.
    """

    text: str
    pos: int = 0
    depth: int = 0
    max_depth: int = DEFAULT_MAX_DEPTH

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Current character, or '' at end of input."""
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def advance(self) -> None:
        self.pos += 1

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def take_digits(self) -> int:
        """Consume a run of ASCII digits and return how many were taken."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in _DIGITS:
            self.pos += 1
        return self.pos - start


def _check_finite(value: float, position: int) -> None:
    if not math.isfinite(value):
        raise CalcError(ErrorKind.NOT_FINITE, position, "intermediate result is not finite")


def parse(cursor: Cursor) -> float:
    """Parse the whole input; anything left after the expression is an error."""
    try:
        value = parse_expression(cursor)
    except RecursionError:
        raise CalcError(ErrorKind.TOO_LONG, cursor.pos, "expression nests too deeply") from None
    cursor.skip_whitespace()
    if not cursor.at_end():
        raise CalcError(ErrorKind.UNEXPECTED_TOKEN, cursor.pos, f"unexpected {cursor.peek()!r}")
    return value


def parse_expression(cursor: Cursor) -> float:
    """expression := term (('+' | '-') term)*"""
    value = parse_term(cursor)

    while True:
        cursor.skip_whitespace()
        operator = cursor.peek()
        if operator not in ("+", "-"):
            return value

        op_pos = cursor.pos
        cursor.advance()
        right = parse_term(cursor)
        value = value + right if operator == "+" else value - right
        _check_finite(value, op_pos)


def parse_term(cursor: Cursor) -> float:
    """term := unary (('*' | '/') unary)*"""
    value = parse_unary(cursor)

    while True:
        cursor.skip_whitespace()
        operator = cursor.peek()
        if operator not in ("*", "/"):
            return value

        op_pos = cursor.pos
        cursor.advance()
        right = parse_unary(cursor)

        if operator == "/":
            if right == 0:
                raise CalcError(ErrorKind.DIVIDE_BY_ZERO, op_pos, "division by zero")
            value /= right
        else:
            value *= right
        _check_finite(value, op_pos)


def parse_unary(cursor: Cursor) -> float:
    """unary := ('+' | '-')* primary

    Stacked signs are folded in a loop so a long run of them does not
    consume stack.
    """
    negate = False
    cursor.skip_whitespace()
    while cursor.peek() in ("+", "-"):
        if cursor.peek() == "-":
            negate = not negate
        cursor.advance()
        cursor.skip_whitespace()

    value = parse_primary(cursor)
    return -value if negate else value


def parse_primary(cursor: Cursor) -> float:
    """primary := '(' expression ')' | number"""
    cursor.skip_whitespace()
    if cursor.peek() != "(":
        return parse_number(cursor)

    open_pos = cursor.pos
    cursor.depth += 1
    if cursor.depth > cursor.max_depth:
        raise CalcError(ErrorKind.TOO_LONG, open_pos, f"nesting deeper than {cursor.max_depth}")
    cursor.advance()

    value = parse_expression(cursor)
    cursor.skip_whitespace()
    if cursor.peek() != ")":
        raise CalcError(ErrorKind.MISSING_CLOSE_PAREN, cursor.pos, f"'(' at offset {open_pos} is not closed")

    cursor.advance()
    cursor.depth -= 1
    return value


def parse_number(cursor: Cursor) -> float:
    """number := digit+ ('.' digit+)?"""
    cursor.skip_whitespace()
    start = cursor.pos

    if not cursor.take_digits():
        current = cursor.peek()
        # Only end of input or a bare "." can still become a number.
        if current in ("", "."):
            raise CalcError(ErrorKind.EXPECTED_NUMBER, start, "expected a number")
        raise CalcError(ErrorKind.UNEXPECTED_TOKEN, start, f"unexpected {current!r}")

    if cursor.peek() == ".":
        cursor.advance()
        if not cursor.take_digits():
            raise CalcError(ErrorKind.EXPECTED_NUMBER, cursor.pos, "expected digits after '.'")

    value = float(cursor.text[start:cursor.pos])
    if not math.isfinite(value):
        raise CalcError(ErrorKind.INVALID_NUMBER, start, "number literal overflows")
    return value
