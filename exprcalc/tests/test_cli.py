"""Tests for the exprcalc command line."""

import json

import pytest
from typer.testing import CliRunner

from exprcalc.__main__ import app


@pytest.fixture
def runner():
    return CliRunner()


# --- eval ---

def test_eval_prints_result(runner):
    result = runner.invoke(app, ["eval", "2 + 3 * 4"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "14"


def test_eval_negative_expression_after_separator(runner):
    result = runner.invoke(app, ["eval", "--", "-5 + 2"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "-3"


def test_eval_error_exits_1(runner):
    result = runner.invoke(app, ["eval", "1/0"])
    assert result.exit_code == 1
    assert "Division by zero" in result.output


def test_eval_json_success(runner):
    result = runner.invoke(app, ["eval", " 2+2 ", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"expression": "2+2", "value": 4.0, "result": "4"}


def test_eval_json_error(runner):
    result = runner.invoke(app, ["eval", "(2+3", "--json"])
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["error"] == "missing-close-paren"
    assert payload["message"] == "Invalid expression"
    assert payload["position"] == 4


def test_eval_max_length_option(runner):
    result = runner.invoke(app, ["eval", "1+1+1", "--max-length", "3"])
    assert result.exit_code == 1
    assert "Expression too long" in result.output


def test_eval_max_length_from_env(runner):
    result = runner.invoke(app, ["eval", "1+1+1"], env={"EXPRCALC_MAX_LENGTH": "3"})
    assert result.exit_code == 1
    assert "Expression too long" in result.output


def test_eval_option_overrides_env(runner):
    result = runner.invoke(app, ["eval", "1+1+1", "--max-length", "10"], env={"EXPRCALC_MAX_LENGTH": "3"})
    assert result.exit_code == 0
    assert result.stdout.strip() == "3"


def test_eval_bad_env_config(runner):
    result = runner.invoke(app, ["eval", "1"], env={"EXPRCALC_MAX_LENGTH": "lots"})
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


# --- check ---

def test_check_all_ok(runner):
    result = runner.invoke(app, ["check", "1+1", "2*3"])
    assert result.exit_code == 0


def test_check_reports_failures(runner):
    result = runner.invoke(app, ["check", "1+1", "(2+3", "4/0"])
    assert result.exit_code == 1
    assert "2 of 3 expression(s) failed" in result.output


# --- format / kinds ---

def test_format(runner):
    result = runner.invoke(app, ["format", "12.3400"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "12.34"


def test_format_negative_zero(runner):
    result = runner.invoke(app, ["format", "--", "-0.0"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "0"


def test_format_infinity(runner):
    result = runner.invoke(app, ["format", "inf"])
    assert result.exit_code == 1
    assert "Number overflow" in result.output


def test_kinds(runner):
    result = runner.invoke(app, ["kinds"])
    assert result.exit_code == 0
    assert "divide-by-zero" in result.output
    assert "not-finite" in result.output


# --- repl ---

def test_repl_session(runner):
    result = runner.invoke(app, ["repl"], input="2+3\n1/0\n:history\n:recall 0\n:quit\n")
    assert result.exit_code == 0
    assert "Division by zero" in result.output
    assert result.stdout.count("5\n") >= 2


def test_repl_ends_on_eof(runner):
    result = runner.invoke(app, ["repl"], input="7*6\n")
    assert result.exit_code == 0
    assert "42" in result.stdout


def test_repl_unknown_command(runner):
    result = runner.invoke(app, ["repl"], input=":frobnicate\n")
    assert result.exit_code == 0
    assert "Unknown command" in result.output


def test_eval_rejects_depth_over_bound(runner):
    result = runner.invoke(app, ["eval", "1", "--max-depth", "1000"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_eval_rejects_env_depth_over_bound(runner):
    result = runner.invoke(app, ["eval", "(" * 1000 + "1" + ")" * 1000], env={"EXPRCALC_MAX_DEPTH": "2000"})
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
