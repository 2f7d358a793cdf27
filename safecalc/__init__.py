"""safecalc — a calculator built on a closed arithmetic grammar.

Evaluates user-typed arithmetic (numbers, + - * / %, parentheses, unary
minus) without dynamic code execution, plus the pieces a calculator screen
needs around it: memory register, scientific functions, unit conversion and
a per-user history.

Usage:
    python -m safecalc eval "(2 + 3) * 4"          # Evaluate an expression
    python -m safecalc sci sqrt 2                  # Scientific function
    python -m safecalc convert 5 km m -c length    # Unit conversion
    python -m safecalc history                     # Show recorded calculations
    python -m safecalc repl                        # Interactive session
"""

from safecalc.evaluator import evaluate
from safecalc.models import (
    CalcError,
    ErrorKind,
    EvalError,
    EvalResult,
    LexError,
    ParseError,
)

__all__ = [
    "CalcError",
    "ErrorKind",
    "EvalError",
    "EvalResult",
    "LexError",
    "ParseError",
    "evaluate",
]
