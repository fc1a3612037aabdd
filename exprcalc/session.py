"""In-memory calculator session.

Holds what a calculator front end displays: the expression being typed, a
live preview, the last submitted result or error, and a newest-first
history. Listeners get a snapshot after every change. Nothing is written
to disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from exprcalc.config import EvaluatorConfig
from exprcalc.engine import calculate, describe, preview
from exprcalc.models import CalcError, Evaluation

HISTORY_LIMIT = 30


@dataclass
class SessionState:
    """Snapshot of everything a front end renders."""

    expression: str = ""
    preview: str = ""
    result: str = ""
    error: str = ""
    history: list[Evaluation] = field(default_factory=list)

    def copy(self) -> SessionState:
        return replace(self, history=list(self.history))


Listener = Callable[[SessionState], None]


class CalcSession:
    """Expression editing, submission and history on top of the engine."""

    def __init__(
        self,
        config: Optional[EvaluatorConfig] = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        if history_limit <= 0:
            raise ValueError(f"history_limit must be positive, got {history_limit}")
        self.config = config
        self.history_limit = history_limit
        self._state = SessionState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> SessionState:
        return self._state.copy()

    @property
    def history(self) -> list[Evaluation]:
        return list(self._state.history)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; it is called once immediately.

        Returns a callable that removes the listener again.
        """
        self._listeners.append(listener)
        listener(self.state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_expression(self, text: str) -> None:
        """Replace the expression and refresh the preview."""
        self._state.expression = text
        self._state.result = ""
        self._state.error = ""
        self._state.preview = preview(text, self.config)
        self._notify()

    def append(self, token: str) -> None:
        self.set_expression(self._state.expression + token)

    def backspace(self) -> None:
        if not self._state.expression:
            return
        self.set_expression(self._state.expression[:-1])

    def clear(self) -> None:
        """Clear the expression, preview, result and error (history stays)."""
        self._state.expression = ""
        self._state.preview = ""
        self._state.result = ""
        self._state.error = ""
        self._notify()

    # ------------------------------------------------------------------
    # Submission and history
    # ------------------------------------------------------------------

    def submit(self) -> Optional[Evaluation]:
        """Evaluate the current expression.

        Blank input is ignored. A success is prepended to the history; a
        failure leaves the history alone and sets the error message.

        Returns:
            The Evaluation on success, None on blank input or failure.
        """
        if not self._state.expression.strip():
            return None

        try:
            evaluation = calculate(self._state.expression, self.config)
        except CalcError as e:
            self._state.result = ""
            self._state.error = describe(e)
            self._notify()
            return None

        self._state.result = evaluation.result
        self._state.preview = evaluation.result
        self._state.error = ""
        self._state.history = [evaluation, *self._state.history][: self.history_limit]
        self._notify()
        return evaluation

    def recall(self, index: int) -> Evaluation:
        """Load history entry `index` (0 = newest) back into the expression.

        Raises:
            IndexError: If there is no such entry.
        """
        if not 0 <= index < len(self._state.history):
            raise IndexError(f"no history entry {index}")
        entry = self._state.history[index]
        self.set_expression(entry.expression)
        return entry

    def clear_history(self) -> None:
        self._state.history = []
        self._notify()
