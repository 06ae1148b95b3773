"""
  Psil Reader, Lexer and Parser

- Streaming, lazy parsing: `read_all` yields one toplevel form at a time.
- Emits the head-first pair chains of psil.types.sexp:

    - ()            -> Nil
    - (a b c)       -> Pair(Pair(Pair(Nil, a), b), c)
    - (a . b)       -> Pair(a, b)
    - (a . b c)     -> Pair(Pair(a, b), c)
    - symbols       -> Symbol
    - integers      -> int
    - 'e `e ,e      -> (shorthand-quote e), (shorthand-backquote e), (shorthand-comma e)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from psil import SExpression
from psil.errors import PsilSyntaxError
from psil.types.nil import Nil
from psil.types.sexp import Pair
from psil.types.symbol import Symbol


TOKEN_RE = re.compile(
    r"(?P<space>\s+)"  # any whitespace, including newlines
    r"|(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>['`,])"  # quote shorthands
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<dot>\.)"  # dotted pair separator
    r"|(?P<symbol>[\w!@$%^&*+\-=:|/?<>]+)"  # symbols and integers
)

INTEGER_RE = re.compile(r"-?[0-9]+")

QUOTE_FORMS: dict[str, Symbol] = {
    "'": Symbol("shorthand-quote"),
    "`": Symbol("shorthand-backquote"),
    ",": Symbol("shorthand-comma"),
}

# (token_type, token_value, offset)
Token = tuple[str, str, int]


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value, offset) tuples.

    Whitespace and comments are dropped. A character that starts no token is
    yielded as an "error" token; the parser decides whether it is fatal.
    """
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            yield "error", source[pos], pos
            pos += 1
            continue
        kind = m.lastgroup
        if kind not in ("space", "comment"):
            yield kind, m.group(kind), pos
        pos = m.end()


def atom(text: str) -> SExpression:
    """Classify a symbol-character run as an integer or a Symbol."""
    if INTEGER_RE.fullmatch(text):
        return int(text)
    return Symbol(text)


def position(source: str, offset: int) -> tuple[int, int]:
    """1-based (line, column) of `offset` in `source`."""
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


class TokenStream:
    def __init__(self, source: str):
        self.source = source
        self.tokens = lex(source)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def error(self, message: str, offset: int | None = None) -> PsilSyntaxError:
        if offset is None:
            offset = len(self.source)
        line, column = position(self.source, offset)
        return PsilSyntaxError(message, line, column)

    def parse_expr(self) -> SExpression:
        """Parse one expression; running out of input here is an error."""
        tok = self.advance()
        if tok is None:
            raise self.error("Unexpected end of stream")
        tok_type, tok_val, offset = tok

        if tok_type == "symbol":
            return atom(tok_val)

        if tok_type == "quote":
            expr = self.parse_expr()
            return Pair(Pair(Nil, QUOTE_FORMS[tok_val]), expr)

        if tok_type == "lparen":
            return self.parse_list()

        # rparen, dot or an unknown character where an expression was required
        raise self.error(f"Unexpected char {tok_val!r}", offset)

    def parse_list(self) -> SExpression:
        """Parse the rest of a list after its opening parenthesis."""
        tok = self.peek()
        if tok is not None and tok[0] == "rparen":
            self.advance()
            return Nil

        first = self.parse_expr()
        tok = self.peek()
        if tok is not None and tok[0] == "dot":
            self.advance()
            head = first
        else:
            head = Pair(Nil, first)

        while True:
            tok = self.peek()
            if tok is not None and tok[0] == "rparen":
                self.advance()
                return head
            head = Pair(head, self.parse_expr())

    def parse_all(self) -> Iterator[SExpression]:
        while self.peek() is not None:
            yield self.parse_expr()


def read_all(source: str) -> Iterator[SExpression]:
    """Lazily read every toplevel form of `source`."""
    return TokenStream(source).parse_all()


def read(source: str) -> SExpression:
    """Read exactly one expression from `source`."""
    stream = TokenStream(source)
    expr = stream.parse_expr()
    tok = stream.peek()
    if tok is not None:
        raise stream.error(f"Unexpected char {tok[1][0]!r}", tok[2])
    return expr
