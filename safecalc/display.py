"""Display helpers: number formatting and user-facing error messages."""

from __future__ import annotations

from safecalc.models import CalcError, ErrorKind

# Above this magnitude integral floats keep the exponent form of repr()
_INTEGRAL_LIMIT = 1e16

_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_CHARACTER: "Invalid character",
    ErrorKind.UNEXPECTED_TOKEN: "Expected a number or '('",
    ErrorKind.UNMATCHED_PARENTHESIS: "Unmatched parenthesis",
    ErrorKind.TRAILING_INPUT: "Unexpected input after the expression",
    ErrorKind.EMPTY_EXPRESSION: "Nothing to calculate",
    ErrorKind.DIVISION_BY_ZERO: "Cannot divide by zero",
    ErrorKind.NON_FINITE_RESULT: "Result is out of range",
}


def format_number(value: float) -> str:
    """Format a result for display.

    14.0 → '14', 3.64 → '3.64', -0.0 → '0', 1e21 → '1e+21'.
    """
    value = float(value)
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < _INTEGRAL_LIMIT:
        return str(int(value))
    return repr(value)


def error_message(error: CalcError) -> str:
    """Map an error to the message shown to the user.

    Includes the 1-based column when the error has a position.
    """
    text = _MESSAGES[error.kind]
    if error.position is not None:
        text += f" at column {error.position + 1}"
    return text


def caret_line(source: str, error: CalcError) -> str:
    """Return ``source`` with a '^' marker under the error position."""
    if error.position is None:
        return source
    return f"{source}\n{' ' * error.position}^"
