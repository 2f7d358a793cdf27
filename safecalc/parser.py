"""Parser for the safecalc arithmetic grammar.

Grammar (lowest to highest precedence):

    expr    := term (('+' | '-') term)*
    term    := unary (('*' | '/' | '%') unary)*
    unary   := '-' unary | primary
    primary := NUMBER | '(' expr ')'

There is no production for identifiers or calls, so a parsed tree can only
ever contain literals and the five arithmetic operators.

Open parentheses live on an explicit stack of groups and prefix minus signs
are counted per group, so nesting depth is bounded by memory only, never by
the interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from safecalc.lexer import tokenize
from safecalc.models import (
    BinaryOp,
    ErrorKind,
    Literal,
    Node,
    ParseError,
    Token,
    TokenKind,
    UnaryMinus,
)

_ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
_MULTIPLICATIVE = (TokenKind.STAR, TokenKind.SLASH, TokenKind.PERCENT)


@dataclass
class _Group:
    """Partially built expression for one '(' ... ')' or the whole input.

    ``total`` is the additive chain built so far, ``product`` the
    multiplicative chain to its right, and ``negations`` the prefix '-'
    signs waiting for the next operand.
    """

    open_position: Optional[int] = None
    total: Optional[Node] = None
    total_op: Optional[Token] = None
    product: Optional[Node] = None
    product_op: Optional[Token] = None
    negations: int = 0

    def push_operand(self, node: Node) -> None:
        for _ in range(self.negations):
            node = UnaryMinus(node)
        self.negations = 0
        if self.product_op is not None:
            node = BinaryOp(self.product_op.kind, self.product, node, self.product_op.position)
            self.product_op = None
        self.product = node

    def push_additive(self, op: Token) -> None:
        self.total = self.finish()
        self.total_op = op
        self.product = None

    def finish(self) -> Node:
        if self.total_op is None:
            return self.product
        return BinaryOp(self.total_op.kind, self.total, self.product, self.total_op.position)


class _Parser:
    """Single-use parser over one token stream."""

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._current: Token = next(tokens)
        self._groups: list[_Group] = [_Group()]

    def _advance(self) -> Token:
        tok = self._current
        if tok.kind is not TokenKind.END:
            self._current = next(self._tokens)
        return tok

    def parse(self) -> Node:
        if self._current.kind is TokenKind.END:
            raise ParseError(ErrorKind.EMPTY_EXPRESSION)
        while True:
            self._operand()
            tree = self._operator()
            if tree is not None:
                return tree

    def _operand(self) -> None:
        """Read prefix '-' and '(' tokens up to and including a number."""
        while True:
            tok = self._current
            group = self._groups[-1]
            if tok.kind is TokenKind.MINUS:
                group.negations += 1
            elif tok.kind is TokenKind.LPAREN:
                self._groups.append(_Group(open_position=tok.position))
            elif tok.kind is TokenKind.NUMBER:
                self._advance()
                group.push_operand(Literal(tok.value))
                return
            elif tok.kind is TokenKind.RPAREN and group.open_position is None:
                raise ParseError(ErrorKind.UNMATCHED_PARENTHESIS, tok.position)
            else:
                raise ParseError(ErrorKind.UNEXPECTED_TOKEN, tok.position)
            self._advance()

    def _operator(self) -> Optional[Node]:
        """Read closing parentheses and the next binary operator.

        Returns the finished tree at end of input, None when another
        operand is expected.
        """
        while True:
            tok = self._current
            group = self._groups[-1]
            if tok.kind is TokenKind.RPAREN:
                if group.open_position is None:
                    raise ParseError(ErrorKind.UNMATCHED_PARENTHESIS, tok.position)
                self._advance()
                self._groups.pop()
                self._groups[-1].push_operand(group.finish())
                continue
            if tok.kind is TokenKind.END:
                if group.open_position is not None:
                    raise ParseError(ErrorKind.UNMATCHED_PARENTHESIS, group.open_position)
                return group.finish()
            if tok.kind in _MULTIPLICATIVE:
                group.product_op = tok
            elif tok.kind in _ADDITIVE:
                group.push_additive(tok)
            elif group.open_position is not None:
                raise ParseError(ErrorKind.UNEXPECTED_TOKEN, tok.position)
            else:
                raise ParseError(ErrorKind.TRAILING_INPUT, tok.position)
            self._advance()
            return None


def parse(source: str) -> Node:
    """Parse ``source`` into an AST.

    Raises:
        LexError: on a character outside the token alphabet.
        ParseError: on a malformed token sequence.
    """
    return _Parser(tokenize(source)).parse()
