"""Expression evaluation, result formatting and error classification.

This is the one shared entry point every presentation surface calls:
evaluate() turns a string into a finite float, format_result() renders it,
classify() maps any failure onto the closed ErrorKind taxonomy.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from exprcalc.config import DEFAULT_CONFIG, EvaluatorConfig
from exprcalc.models import CalcError, ErrorKind, Evaluation
from exprcalc.parser import Cursor, parse

# Magnitudes outside [1e-10, 1e12) switch to scientific notation.
_SCIENTIFIC_MIN = 1e-10
_SCIENTIFIC_MAX = 1e12
_SCIENTIFIC_DIGITS = 10
_FIXED_DIGITS = 12

_ZERO_FRACTION_EXP = re.compile(r"\.0+e")
_TRAILING_ZEROS_EXP = re.compile(r"(\.[0-9]*[1-9])0+e")
_ZERO_FRACTION_END = re.compile(r"\.0+$")
_TRAILING_ZEROS_END = re.compile(r"(\.[0-9]*[1-9])0+$")


def evaluate(expression: str, config: Optional[EvaluatorConfig] = None) -> float:
    """Evaluate an arithmetic expression to a finite float.

    Args:
        expression: Text such as "2 + 3 * (4 - 1)".
        config: Limits to enforce. Defaults to DEFAULT_CONFIG.

    Returns:
        The finite value of the expression.

    Raises:
        CalcError: Tagged with the ErrorKind of the failing check or rule.
    """
    config = config or DEFAULT_CONFIG
    if not isinstance(expression, str):
        raise CalcError(ErrorKind.INVALID_TYPE, detail=f"expected str, got {type(expression).__name__}")
    if len(expression) > config.max_length:
        raise CalcError(
            ErrorKind.TOO_LONG,
            detail=f"expression length {len(expression)} > {config.max_length}",
        )

    value = parse(Cursor(expression, max_depth=config.max_depth))
    if not math.isfinite(value):
        raise CalcError(ErrorKind.NOT_FINITE, detail="result is not finite")
    return value


def format_result(value: float) -> str:
    """Render a finite float in canonical decimal form.

    Fixed notation with up to 12 fractional digits, or scientific notation
    with up to 10 fractional digits for magnitudes >= 1e12 or < 1e-10.
    Trailing zeros and a bare fraction are stripped in both cases.

    '12.34' for 12.34, '0' for -0.0, '1.5e+12' for 1.5e12.
    """
    if not math.isfinite(value):
        raise CalcError(ErrorKind.NOT_FINITE, detail=f"cannot format {value!r}")
    if value == 0 and math.copysign(1.0, value) < 0:
        return "0"

    magnitude = abs(value)
    if magnitude != 0 and (magnitude >= _SCIENTIFIC_MAX or magnitude < _SCIENTIFIC_MIN):
        text = f"{value:.{_SCIENTIFIC_DIGITS}e}"
        text = _ZERO_FRACTION_EXP.sub("e", text)
        return _TRAILING_ZEROS_EXP.sub(r"\1e", text)

    text = f"{value:.{_FIXED_DIGITS}f}"
    text = _ZERO_FRACTION_END.sub("", text)
    return _TRAILING_ZEROS_END.sub(r"\1", text)


def classify(error: BaseException) -> ErrorKind:
    """Map a failure onto the closed ErrorKind taxonomy.

    CalcError carries its kind from the rule that raised it. Plain Python
    exceptions are mapped by type; message text is never inspected.

    Args:
        error: Exception raised while evaluating.

    Returns:
        ErrorKind enum value.
    """
    if isinstance(error, CalcError):
        return error.kind
    if isinstance(error, TypeError):
        return ErrorKind.INVALID_TYPE
    if isinstance(error, ZeroDivisionError):
        return ErrorKind.DIVIDE_BY_ZERO
    if isinstance(error, OverflowError):
        return ErrorKind.NOT_FINITE
    return ErrorKind.UNEXPECTED_TOKEN


def describe(error: BaseException) -> str:
    """User-facing message for a failure ("Division by zero", ...)."""
    return classify(error).message


def calculate(expression: str, config: Optional[EvaluatorConfig] = None) -> Evaluation:
    """Evaluate a stripped expression and pair it with its formatted result."""
    if not isinstance(expression, str):
        raise CalcError(ErrorKind.INVALID_TYPE, detail=f"expected str, got {type(expression).__name__}")
    expression = expression.strip()
    value = evaluate(expression, config)
    return Evaluation(expression=expression, value=value, result=format_result(value))


def preview(expression: str, config: Optional[EvaluatorConfig] = None) -> str:
    """Live-preview text for a partially typed expression.

    Returns "" for blank input or anything that does not evaluate yet, so
    callers can refresh it on every keystroke without handling errors.
    """
    if not isinstance(expression, str) or not expression.strip():
        return ""
    try:
        return format_result(evaluate(expression.strip(), config))
    except CalcError:
        return ""
