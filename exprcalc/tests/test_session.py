"""Tests for CalcSession: preview, submit, history and listeners."""

import pytest

from exprcalc.config import EvaluatorConfig
from exprcalc.session import HISTORY_LIMIT, CalcSession, SessionState


@pytest.fixture
def session():
    return CalcSession()


# --- Preview ---

def test_preview_follows_expression(session):
    session.set_expression("2 + 3")
    assert session.state.preview == "5"


def test_preview_blank_while_incomplete(session):
    session.set_expression("2 +")
    assert session.state.preview == ""
    assert session.state.error == ""


def test_append_and_backspace(session):
    for token in ("1", "+", "2"):
        session.append(token)
    assert session.state.expression == "1+2"
    assert session.state.preview == "3"

    session.backspace()
    assert session.state.expression == "1+"
    assert session.state.preview == ""


def test_backspace_on_empty_is_noop(session):
    session.backspace()
    assert session.state == SessionState()


# --- Submit ---

def test_submit_blank_is_ignored(session):
    session.set_expression("   ")
    assert session.submit() is None
    assert session.history == []


def test_submit_success(session):
    session.set_expression(" (2 + 3) * 4 ")
    evaluation = session.submit()

    assert evaluation is not None
    assert evaluation.expression == "(2 + 3) * 4"
    assert evaluation.result == "20"
    state = session.state
    assert state.result == "20"
    assert state.preview == "20"
    assert state.error == ""
    assert state.history == [evaluation]


def test_submit_failure_sets_message(session):
    session.set_expression("1 + 1")
    session.submit()
    session.set_expression("1/0")

    assert session.submit() is None
    state = session.state
    assert state.error == "Division by zero"
    assert state.result == ""
    assert len(state.history) == 1


def test_submit_uses_config():
    session = CalcSession(config=EvaluatorConfig(max_length=3))
    session.set_expression("1+1+1")
    assert session.submit() is None
    assert session.state.error == "Expression too long"


def test_editing_clears_previous_result(session):
    session.set_expression("2*2")
    session.submit()
    session.append("+1")
    assert session.state.result == ""
    assert session.state.preview == "5"


# --- History ---

def test_history_newest_first_and_capped():
    session = CalcSession(history_limit=3)
    for n in range(5):
        session.set_expression(str(n))
        session.submit()

    assert [e.expression for e in session.history] == ["4", "3", "2"]


def test_default_history_limit(session):
    for n in range(HISTORY_LIMIT + 5):
        session.set_expression(f"{n} + 0")
        session.submit()
    assert len(session.history) == HISTORY_LIMIT


def test_recall_loads_expression(session):
    session.set_expression("6 / 4")
    session.submit()
    session.clear()

    entry = session.recall(0)
    assert entry.result == "1.5"
    assert session.state.expression == "6 / 4"
    assert session.state.preview == "1.5"


def test_recall_out_of_range(session):
    with pytest.raises(IndexError):
        session.recall(0)


def test_clear_keeps_history(session):
    session.set_expression("1+1")
    session.submit()
    session.clear()
    assert session.state.expression == ""
    assert session.state.result == ""
    assert len(session.history) == 1


def test_clear_history(session):
    session.set_expression("1+1")
    session.submit()
    session.clear_history()
    assert session.history == []


def test_state_snapshot_is_detached(session):
    session.set_expression("1+1")
    session.submit()
    snapshot = session.state
    snapshot.history.clear()
    assert len(session.history) == 1


def test_invalid_history_limit():
    with pytest.raises(ValueError):
        CalcSession(history_limit=0)


# --- Listeners ---

def test_subscribe_receives_initial_and_updates(session):
    seen = []
    session.subscribe(seen.append)
    session.set_expression("2*3")

    assert len(seen) == 2
    assert seen[0].expression == ""
    assert seen[1].preview == "6"


def test_unsubscribe_stops_updates(session):
    seen = []
    unsubscribe = session.subscribe(seen.append)
    unsubscribe()
    session.set_expression("1")
    assert len(seen) == 1
    unsubscribe()
