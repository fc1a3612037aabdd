"""exprcalc — arithmetic expression evaluator.

Parses numbers, + - * /, unary sign and parentheses by recursive descent and
evaluates them to a finite float, with a canonical text rendering and a
closed error taxonomy shared by every front end.

Usage:
    from exprcalc import evaluate, format_result
    format_result(evaluate("2 + 3 * 4"))   # '14'

    python -m exprcalc eval "(2 + 3) * 4"  # 20
    python -m exprcalc repl                # Interactive session
"""

from exprcalc.config import DEFAULT_MAX_LENGTH, EvaluatorConfig
from exprcalc.engine import calculate, classify, describe, evaluate, format_result, preview
from exprcalc.models import CalcError, ErrorKind, Evaluation

__all__ = [
    "DEFAULT_MAX_LENGTH",
    "CalcError",
    "ErrorKind",
    "EvaluatorConfig",
    "Evaluation",
    "calculate",
    "classify",
    "describe",
    "evaluate",
    "format_result",
    "preview",
]
