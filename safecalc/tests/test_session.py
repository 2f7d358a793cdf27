"""Tests for the calculator session, memory register and history store."""

import json

import pytest
from rich.console import Console

from safecalc.history import HistoryEntry, HistoryStore, render_history
from safecalc.models import ErrorKind
from safecalc.session import Calculator, MemoryRegister


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path, "ada")


@pytest.fixture
def calc(store):
    return Calculator(history=store)


# --- Memory register ---

def test_memory_register_arithmetic():
    mem = MemoryRegister()
    mem.add(5)
    mem.add(2.5)
    mem.subtract(1)
    assert mem.recall() == pytest.approx(6.5)
    mem.clear()
    assert mem.recall() == 0.0


# --- Calculator session ---

def test_press_builds_equation_and_preview(calc):
    calc.press("2")
    calc.press("+")
    assert calc.preview == ""  # "2+" does not evaluate yet
    calc.press("3")
    assert calc.equation == "2+3"
    assert calc.display == "2+3"
    assert calc.preview == "5"


def test_submit_shows_result_and_records(calc, store):
    calc.press("2+3*4")
    result = calc.submit()
    assert result.ok
    assert calc.display == "14"
    assert calc.preview == ""
    assert calc.is_new_calculation

    [entry] = store.entries()
    assert entry.equation == "2+3*4"
    assert entry.result == "14"
    assert entry.category == "standard"


def test_submit_error_shows_error_and_records_nothing(calc, store):
    calc.press("5/0")
    result = calc.submit()
    assert result.error.kind == ErrorKind.DIVISION_BY_ZERO
    assert calc.display == "Error"
    assert store.entries() == []


def test_input_after_submit_starts_new_calculation(calc):
    calc.press("1+1")
    calc.submit()
    calc.press("7")
    assert calc.equation == "7"
    assert calc.display == "7"


def test_clear(calc):
    calc.press("9*9")
    calc.clear()
    assert calc.display == "0"
    assert calc.equation == ""
    assert calc.preview == ""


def test_memory_uses_display_value(calc):
    calc.press("6*7")
    calc.submit()
    calc.memory_add()
    calc.memory_add()
    calc.memory_subtract()
    assert calc.memory.recall() == pytest.approx(42.0)


def test_memory_recall_continues_equation(calc):
    calc.memory.add(5)
    calc.memory_recall()
    assert calc.display == "5"
    calc.press("*2")
    assert calc.equation == "5*2"
    assert calc.submit().value == pytest.approx(10.0)


def test_memory_on_error_display_counts_as_zero(calc):
    calc.press("(")
    calc.submit()
    assert calc.display == "Error"
    calc.memory_add()
    assert calc.memory.recall() == 0.0


def test_memory_clear(calc):
    calc.memory.add(3)
    calc.memory_clear()
    assert calc.memory.recall() == 0.0


def test_scientific_on_display(calc, store):
    calc.press("16")
    calc.submit()
    result = calc.scientific("sqrt")
    assert result.value == pytest.approx(4.0)
    assert calc.display == "4"
    assert store.entries()[0].equation == "sqrt(16)"
    assert store.entries()[0].category == "scientific"


def test_scientific_domain_error(calc):
    calc.press("-1")
    calc.submit()
    assert not calc.scientific("sqrt").ok
    assert calc.display == "Error"


def test_convert_records_conversion(calc, store):
    assert calc.convert(2, "length", "km", "m") == pytest.approx(2000.0)
    assert calc.display == "2000"
    entry = store.entries()[0]
    assert entry.equation == "2 km to m"
    assert entry.category == "conversion"


def test_session_without_history():
    calc = Calculator()
    calc.press("1+2")
    assert calc.submit().value == pytest.approx(3.0)


# --- History store ---

def test_entries_newest_first(store):
    store.record("1+1", "2")
    store.record("2+2", "4")
    assert [e.equation for e in store.entries()] == ["2+2", "1+1"]


def test_history_file_format(store):
    store.record("1+1", "2", "standard")
    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert store.path.name == "ada_history.json"
    assert data[0]["equation"] == "1+1"
    assert data[0]["result"] == "2"
    assert data[0]["category"] == "standard"
    assert data[0]["timestamp"]


def test_search_by_text_and_category(store):
    store.record("12*12", "144", "standard")
    store.record("sqrt(144)", "12", "scientific")
    store.record("1 km to m", "1000", "conversion")

    assert len(store.search("144")) == 2
    assert [e.category for e in store.search("144", "scientific")] == ["scientific"]
    assert len(store.search("", "all")) == 3
    assert store.search("KM")[0].result == "1000"


def test_users_are_isolated(tmp_path):
    HistoryStore(tmp_path, "ada").record("1+1", "2")
    assert HistoryStore(tmp_path, "bob").entries() == []


def test_user_name_cannot_escape_root(tmp_path):
    store = HistoryStore(tmp_path, "../evil")
    assert store.path.parent == tmp_path


def test_clear_history(store):
    store.record("1+1", "2")
    store.clear()
    assert store.entries() == []


def test_corrupt_file_reads_empty(store):
    store.root.mkdir(parents=True, exist_ok=True)
    store.path.write_text("{not json", encoding="utf-8")
    assert store.entries() == []


def test_entry_round_trip():
    entry = HistoryEntry("2*3", "6", "standard", "2026-10-19T12:00:00+00:00")
    assert HistoryEntry.from_dict(entry.to_dict()) == entry


def test_render_history():
    console = Console(record=True, width=120)
    render_history([HistoryEntry("2+3*4", "14", "standard", "2026-10-19T12:00:00+00:00")], console)
    text = console.export_text()
    assert "2+3*4" in text
    assert "14" in text
    assert "2026-10-19 12:00" in text


def test_render_empty_history():
    console = Console(record=True, width=120)
    render_history([], console)
    assert "No calculations recorded." in console.export_text()
