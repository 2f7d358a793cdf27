"""Single-argument scientific functions applied to the displayed value.

Results use the same EvalResult contract as ``evaluate``: a domain error
or a non-finite outcome is reported as NON_FINITE_RESULT rather than
raised.
"""

from __future__ import annotations

import math
from enum import Enum

from safecalc.models import ErrorKind, EvalError, EvalResult


class ScientificFunction(str, Enum):
    """Functions offered next to the keypad. Angles are in radians."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SQRT = "sqrt"
    LOG = "log"


_FUNCS = {
    ScientificFunction.SIN: math.sin,
    ScientificFunction.COS: math.cos,
    ScientificFunction.TAN: math.tan,
    ScientificFunction.SQRT: math.sqrt,
    ScientificFunction.LOG: math.log10,  # the keypad "log" is base 10
}


def apply_function(func: ScientificFunction | str, value: float) -> EvalResult:
    """Apply a scientific function to ``value``.

    Args:
        func: Function or its name (e.g. "sqrt").
        value: Argument; radians for the trigonometric functions.

    Returns:
        EvalResult with the finite result, or NON_FINITE_RESULT for inputs
        outside the function's domain (sqrt(-1), log(0)) or infinite input.

    Raises:
        ValueError: if ``func`` is not a known function name.
    """
    fn = _FUNCS[ScientificFunction(func)]
    try:
        result = fn(value)
    except (ValueError, OverflowError):
        return EvalResult.failure(EvalError(ErrorKind.NON_FINITE_RESULT))
    if not math.isfinite(result):
        return EvalResult.failure(EvalError(ErrorKind.NON_FINITE_RESULT))
    return EvalResult.success(result)
