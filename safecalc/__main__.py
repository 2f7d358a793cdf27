"""CLI for the safecalc calculator.

Usage:
    python -m safecalc eval "2 + 3 * 4"                 # Evaluate, print result
    python -m safecalc eval -- "-2 * 3" --record        # Leading '-' needs '--'
    python -m safecalc preview "2 + 3 *"                # Live preview (empty on error)
    python -m safecalc sci sqrt 2                       # Scientific function
    python -m safecalc convert 5 km m --category length # Unit conversion
    python -m safecalc units temperature                # List units
    python -m safecalc history --search 14              # Show history
    python -m safecalc clear-history                    # Drop history
    python -m safecalc repl                             # Interactive session
"""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from safecalc.conversion import ConversionCategory, convert, units
from safecalc.display import caret_line, error_message, format_number
from safecalc.environment import default_user, history_root
from safecalc.evaluator import evaluate
from safecalc.history import CATEGORIES, HistoryStore, render_history
from safecalc.models import CalcError
from safecalc.scientific import ScientificFunction, apply_function
from safecalc.session import Calculator

app = typer.Typer(
    name="safecalc",
    help="Calculator with a safe arithmetic evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_USER_HELP = "History owner (default: $SAFECALC_USER or $USER)"


def _store(user: Optional[str]) -> HistoryStore:
    return HistoryStore(history_root(), user or default_user())


def _report_error(source: str, error: CalcError) -> None:
    console.print(f"[red]Error:[/red] {error_message(error)}", highlight=False)
    if error.position is not None:
        console.print(caret_line(source, error), markup=False, highlight=False)


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Arithmetic expression, e.g. '(2 + 3) * 4'"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help=_USER_HELP),
    record: bool = typer.Option(False, "--record/--no-record", help="Save the result to history"),
) -> None:
    """Evaluate an arithmetic expression."""
    result = evaluate(expression)
    if not result.ok:
        _report_error(expression, result.error)
        raise typer.Exit(1)

    formatted = format_number(result.value)
    if record:
        _store(user).record(expression, formatted, "standard")
    typer.echo(formatted)


@app.command("preview")
def cmd_preview(
    expression: str = typer.Argument(help="Partial expression as typed so far"),
) -> None:
    """Print the live-preview value, or nothing when it does not evaluate."""
    result = evaluate(expression)
    if result.ok:
        typer.echo(format_number(result.value))


@app.command("sci")
def cmd_sci(
    func: ScientificFunction = typer.Argument(help="Function to apply"),
    value: float = typer.Argument(help="Argument (radians for sin/cos/tan)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help=_USER_HELP),
    record: bool = typer.Option(False, "--record/--no-record", help="Save the result to history"),
) -> None:
    """Apply a scientific function to a value."""
    result = apply_function(func, value)
    label = f"{func.value}({format_number(value)})"
    if not result.ok:
        _report_error(label, result.error)
        raise typer.Exit(1)

    formatted = format_number(result.value)
    if record:
        _store(user).record(label, formatted, "scientific")
    typer.echo(formatted)


@app.command("convert")
def cmd_convert(
    value: float = typer.Argument(help="Quantity to convert"),
    from_unit: str = typer.Argument(help="Source unit, e.g. 'km'"),
    to_unit: str = typer.Argument(help="Target unit, e.g. 'm'"),
    category: ConversionCategory = typer.Option(..., "--category", "-c", help="Converter"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help=_USER_HELP),
    record: bool = typer.Option(False, "--record/--no-record", help="Save the result to history"),
) -> None:
    """Convert a quantity between units."""
    try:
        converted = convert(value, category, from_unit, to_unit)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", highlight=False)
        raise typer.Exit(1)

    formatted = format_number(converted)
    if record:
        label = f"{format_number(value)} {from_unit} to {to_unit}"
        _store(user).record(label, formatted, "conversion")
    typer.echo(formatted)


@app.command("units")
def cmd_units(
    category: ConversionCategory = typer.Argument(help="Converter"),
) -> None:
    """List the units of a converter."""
    typer.echo(" ".join(units(category)))


@app.command("history")
def cmd_history(
    user: Optional[str] = typer.Option(None, "--user", "-u", help=_USER_HELP),
    search: str = typer.Option("", "--search", "-s", help="Filter by equation or result text"),
    category: str = typer.Option("all", "--category", "-c", help="all, standard, scientific or conversion"),
) -> None:
    """Show recorded calculations, newest first."""
    if category != "all" and category not in CATEGORIES:
        console.print(f"[red]Invalid category: {category}[/red]. Choose: all, {', '.join(CATEGORIES)}")
        raise typer.Exit(1)

    store = _store(user)
    render_history(store.search(search, category), console, title=f"History: {store.user}")


@app.command("clear-history")
def cmd_clear_history(
    user: Optional[str] = typer.Option(None, "--user", "-u", help=_USER_HELP),
) -> None:
    """Delete every recorded calculation for a user."""
    store = _store(user)
    store.clear()
    console.print(f"History cleared for {store.user}")


# ---------------------------------------------------------------------------
# Interactive session
# ---------------------------------------------------------------------------

_MEMORY_COMMANDS = {
    "M+": Calculator.memory_add,
    "M-": Calculator.memory_subtract,
    "MR": Calculator.memory_recall,
    "MC": Calculator.memory_clear,
}

_REPL_HELP = (
    "Type an expression to evaluate it. Commands: "
    "M+ M- MR MC, sin cos tan sqrt log, C (clear), quit"
)


def _repl_step(calc: Calculator, line: str) -> None:
    """Apply one line of REPL input to the session."""
    upper = line.upper()
    if upper in _MEMORY_COMMANDS:
        _MEMORY_COMMANDS[upper](calc)
        if upper in ("M+", "M-", "MC"):
            console.print(f"  [dim]memory = {format_number(calc.memory.recall())}[/dim]")
            return
    elif upper == "C":
        calc.clear()
    elif line.lower() in {f.value for f in ScientificFunction}:
        result = calc.scientific(line.lower())
        if not result.ok:
            console.print(f"[red]Error:[/red] {error_message(result.error)}", highlight=False)
            return
    else:
        if line != "=":
            calc.press(line)
        equation = calc.equation
        result = calc.submit()
        if not result.ok:
            _report_error(equation, result.error)
            return
    typer.echo(calc.display)


@app.command("repl")
def cmd_repl(
    user: Optional[str] = typer.Option(None, "--user", "-u", help=_USER_HELP),
    record: bool = typer.Option(True, "--record/--no-record", help="Save results to history"),
) -> None:
    """Interactive calculator session with memory and scientific functions."""
    calc = Calculator(history=_store(user) if record else None)
    console.print(f"[dim]{_REPL_HELP}[/dim]")
    while True:
        try:
            line = console.input("[bold]calc>[/bold] ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        if line.lower() in ("quit", "exit"):
            break
        _repl_step(calc, line)


if __name__ == "__main__":
    app()
