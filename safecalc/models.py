"""Data models for the safecalc expression evaluator.

TokenKind, Token, the AST nodes, ErrorKind with the CalcError hierarchy, and
EvalResult: the typed structures that flow through lexer → parser →
evaluator → callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TokenKind(str, Enum):
    """Lexical token kinds."""

    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    LPAREN = "("
    RPAREN = ")"
    END = "end"


@dataclass(frozen=True)
class Token:
    """A single token with its 0-based offset in the source string."""

    kind: TokenKind
    position: int
    value: Optional[float] = None


# ---------------------------------------------------------------------------
# AST
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class UnaryMinus:
    operand: Node


@dataclass(frozen=True)
class BinaryOp:
    """Binary operation; ``op`` is one of the five operator token kinds."""

    op: TokenKind
    left: Node
    right: Node
    position: int = 0


Node = Union[Literal, UnaryMinus, BinaryOp]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ErrorKind(str, Enum):
    """Closed set of failure kinds an evaluation can report."""

    INVALID_CHARACTER = "invalid_character"
    UNEXPECTED_TOKEN = "unexpected_token"
    UNMATCHED_PARENTHESIS = "unmatched_parenthesis"
    TRAILING_INPUT = "trailing_input"
    EMPTY_EXPRESSION = "empty_expression"
    DIVISION_BY_ZERO = "division_by_zero"
    NON_FINITE_RESULT = "non_finite_result"


class CalcError(Exception):
    """Base for every evaluation failure.

    Carries the failure ``kind`` and, where one applies, the 0-based
    ``position`` in the source string.
    """

    def __init__(self, kind: ErrorKind, position: Optional[int] = None) -> None:
        self.kind = kind
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"{kind.value}{where}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalcError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.kind == other.kind
            and self.position == other.position
        )

    def __hash__(self) -> int:
        return hash((type(self), self.kind, self.position))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.value!r}, position={self.position})"


class LexError(CalcError):
    """Raised by the lexer on a character outside the token alphabet."""


class ParseError(CalcError):
    """Raised by the parser on a malformed token sequence."""


class EvalError(CalcError):
    """Raised while computing the value of a well-formed expression."""


@dataclass(frozen=True)
class EvalResult:
    """Outcome of one evaluation: a finite ``value`` or an ``error``."""

    value: Optional[float] = None
    error: Optional[CalcError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: float) -> EvalResult:
        return cls(value=value)

    @classmethod
    def failure(cls, error: CalcError) -> EvalResult:
        return cls(error=error)
