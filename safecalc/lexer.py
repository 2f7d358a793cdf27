"""Lexer for the safecalc arithmetic grammar.

Turns a source string into a lazy stream of Tokens terminated by an END
token. Only ASCII digits, '.', the five operators, parentheses and ASCII
whitespace are accepted; anything else is a LexError.
"""

from __future__ import annotations

from typing import Iterator

from safecalc.models import ErrorKind, LexError, Token, TokenKind

_DIGITS = frozenset("0123456789")
_WHITESPACE = frozenset(" \t\n\r\f\v")

_SINGLE_CHAR: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def _scan_digits(source: str, start: int) -> int:
    """Return the index just past the run of digits beginning at ``start``."""
    i = start
    while i < len(source) and source[i] in _DIGITS:
        i += 1
    return i


def _scan_number(source: str, start: int) -> int:
    """Return the end index of the numeric literal starting at ``start``.

    Accepts ``123``, ``3.14`` and ``.5``. A '.' that is not followed by a
    digit is reported as an invalid character at the '.'.
    """
    end = _scan_digits(source, start)
    if end < len(source) and source[end] == ".":
        frac_end = _scan_digits(source, end + 1)
        if frac_end == end + 1:
            raise LexError(ErrorKind.INVALID_CHARACTER, end)
        end = frac_end
    return end


def tokenize(source: str) -> Iterator[Token]:
    """Yield the tokens of ``source`` left to right, ending with END.

    The generator is lazy: a LexError surfaces only when the consumer
    reaches the offending character.
    """
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if ch in _WHITESPACE:
            i += 1
            continue
        if ch in _DIGITS or ch == ".":
            end = _scan_number(source, i)
            yield Token(TokenKind.NUMBER, i, float(source[i:end]))
            i = end
            continue
        kind = _SINGLE_CHAR.get(ch)
        if kind is None:
            raise LexError(ErrorKind.INVALID_CHARACTER, i)
        yield Token(kind, i)
        i += 1
    yield Token(TokenKind.END, n)
