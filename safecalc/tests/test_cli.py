"""Tests for the safecalc CLI, driven through typer's CliRunner.

History lands in a temporary SAFECALC_HOME for every test.
"""

import pytest
from typer.testing import CliRunner

from safecalc.__main__ import app
from safecalc.history import HistoryStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def calc_home(tmp_path, monkeypatch):
    monkeypatch.setenv("SAFECALC_HOME", str(tmp_path))
    monkeypatch.setenv("SAFECALC_USER", "tester")
    return tmp_path


def stored(home, user="tester"):
    return HistoryStore(home, user).entries()


# --- eval / preview ---

def test_eval_prints_result():
    result = runner.invoke(app, ["eval", "2 + 3 * 4"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "14"


def test_eval_leading_minus_after_separator():
    result = runner.invoke(app, ["eval", "--", "-2*3"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "-6"


def test_eval_error_exits_nonzero():
    result = runner.invoke(app, ["eval", "2+a"])
    assert result.exit_code == 1
    assert "Invalid character at column 3" in result.output
    assert "2+a\n  ^" in result.output


def test_eval_record_saves_history(calc_home):
    result = runner.invoke(app, ["eval", "6*7", "--record"])
    assert result.exit_code == 0
    [entry] = stored(calc_home)
    assert (entry.equation, entry.result, entry.category) == ("6*7", "42", "standard")


def test_eval_does_not_record_by_default(calc_home):
    runner.invoke(app, ["eval", "6*7"])
    assert stored(calc_home) == []


def test_preview_ok_and_incomplete():
    assert runner.invoke(app, ["preview", "2+3"]).stdout.strip() == "5"
    incomplete = runner.invoke(app, ["preview", "2+"])
    assert incomplete.exit_code == 0
    assert incomplete.stdout.strip() == ""


# --- sci / convert / units ---

def test_sci_sqrt(calc_home):
    result = runner.invoke(app, ["sci", "sqrt", "2", "--record"])
    assert result.exit_code == 0
    assert float(result.stdout) == pytest.approx(2 ** 0.5)
    assert stored(calc_home)[0].equation == "sqrt(2)"


def test_sci_domain_error():
    result = runner.invoke(app, ["sci", "log", "0"])
    assert result.exit_code == 1
    assert "out of range" in result.output


def test_sci_unknown_function():
    result = runner.invoke(app, ["sci", "exp", "1"])
    assert result.exit_code != 0


def test_convert(calc_home):
    result = runner.invoke(app, ["convert", "5", "km", "m", "--category", "length", "--record"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "5000"
    assert stored(calc_home)[0].category == "conversion"


def test_convert_bad_unit():
    result = runner.invoke(app, ["convert", "5", "km", "kg", "-c", "length"])
    assert result.exit_code == 1
    assert "Unknown length unit" in result.output


def test_units():
    result = runner.invoke(app, ["units", "weight"])
    assert result.stdout.split() == ["kg", "g", "lb", "oz"]


# --- history ---

def test_history_lists_entries(calc_home):
    HistoryStore(calc_home, "tester").record("2+3*4", "14")
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0
    assert "2+3*4" in result.output


def test_history_other_user(calc_home):
    HistoryStore(calc_home, "tester").record("2+3*4", "14")
    result = runner.invoke(app, ["history", "--user", "someone"])
    assert "No calculations recorded." in result.output


def test_history_invalid_category():
    result = runner.invoke(app, ["history", "--category", "fancy"])
    assert result.exit_code == 1


def test_clear_history(calc_home):
    HistoryStore(calc_home, "tester").record("1+1", "2")
    result = runner.invoke(app, ["clear-history"])
    assert result.exit_code == 0
    assert stored(calc_home) == []


# --- repl ---

def test_repl_session(calc_home):
    script = "\n".join(["2+3", "M+", "MR", "*4", "sqrt", "1/0", "quit"]) + "\n"
    result = runner.invoke(app, ["repl"], input=script)
    assert result.exit_code == 0
    lines = result.stdout.split()
    assert "5" in lines
    assert "20" in lines
    assert "Cannot divide by zero" in result.output
    equations = [e.equation for e in stored(calc_home)]
    assert equations[:2] == ["sqrt(20)", "5*4"]


def test_repl_ends_on_eof():
    result = runner.invoke(app, ["repl", "--no-record"], input="1+1\n")
    assert result.exit_code == 0
    assert "2" in result.stdout.split()
