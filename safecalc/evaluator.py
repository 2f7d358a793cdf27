"""AST evaluator and the public ``evaluate`` entry point.

Data flow per call:
1. Lex the source into a fresh token stream
2. Parse the tokens into an AST
3. Walk the AST bottom-up with an explicit stack
4. Reject a non-finite final value

Every failure is returned inside an EvalResult; nothing is raised to the
caller and no state survives between calls.
"""

from __future__ import annotations

import math
import operator

from safecalc.models import (
    BinaryOp,
    CalcError,
    ErrorKind,
    EvalError,
    EvalResult,
    Literal,
    Node,
    TokenKind,
    UnaryMinus,
)
from safecalc.parser import parse


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise EvalError(ErrorKind.DIVISION_BY_ZERO)
    return a / b


def _remainder(a: float, b: float) -> float:
    """Truncating remainder: the sign follows the dividend."""
    if b == 0:
        raise EvalError(ErrorKind.DIVISION_BY_ZERO)
    if not (math.isfinite(a) and math.isfinite(b)):
        # An infinite dividend makes math.fmod raise; an infinite divisor would
        # return the dividend, where a - b * trunc(a/b) is NaN. Both end up as
        # NON_FINITE_RESULT in the final check.
        return math.nan
    return math.fmod(a, b)


_BIN_OPS = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.STAR: operator.mul,
    TokenKind.SLASH: _divide,
    TokenKind.PERCENT: _remainder,
}


def evaluate_node(node: Node) -> float:
    """Compute the value of an AST.

    Iterative post-order walk, so a long left-associative chain like
    ``1+1+...+1`` never touches the recursion limit.

    Raises:
        EvalError: DIVISION_BY_ZERO on a zero divisor for '/' or '%'.
    """
    values: list[float] = []
    stack: list[tuple[Node, bool]] = [(node, False)]

    while stack:
        current, expanded = stack.pop()

        if isinstance(current, Literal):
            values.append(current.value)
        elif isinstance(current, UnaryMinus):
            if expanded:
                values.append(-values.pop())
            else:
                stack.append((current, True))
                stack.append((current.operand, False))
        elif isinstance(current, BinaryOp):
            if expanded:
                right = values.pop()
                left = values.pop()
                values.append(_BIN_OPS[current.op](left, right))
            else:
                # Left is pushed last so it is computed first
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
        else:
            raise TypeError(f"Unsupported node: {type(current).__name__}")

    return values.pop()


def evaluate(source: str) -> EvalResult:
    """Evaluate an arithmetic expression.

    Args:
        source: Expression text, e.g. ``"(2 + 3) * 4"``.

    Returns:
        EvalResult holding either a finite float or the CalcError that
        describes why there is none.
    """
    try:
        value = evaluate_node(parse(source))
        if not math.isfinite(value):
            raise EvalError(ErrorKind.NON_FINITE_RESULT)
    except CalcError as e:
        return EvalResult.failure(e)
    return EvalResult.success(value)
