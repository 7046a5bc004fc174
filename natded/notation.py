"""Infix notation for formulas: a reader and a printer.

Grammar, lowest precedence first::

    formula     := disjunction [ IMPL formula ]      (right associative)
    disjunction := conjunction { OR conjunction }    (left associative)
    conjunction := atom { AND atom }                 (left associative)
    atom        := IDENT | "(" formula ")"

Connectives may be written as ``∧ & /\\``, ``∨ | \\/`` and ``→ -> =>``.
Identifiers are ``[A-Za-z_][A-Za-z0-9_']*``.

The printer emits only the parentheses this grammar needs, so
``parse_formula(render_formula(f)) == f`` for every formula ``f``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .formulas import Conj, Disj, Formula, Impl, Var
from .kernel import Proof


class ParseError(ValueError):
    """Malformed formula text; ``column`` is 1-based."""

    def __init__(self, message: str, column: int) -> None:
        self.column = column
        super().__init__(f"column {column}: {message}")


class TokenKind(Enum):
    IDENT = "identifier"
    AND = "'∧'"
    OR = "'∨'"
    IMPL = "'→'"
    LPAREN = "'('"
    RPAREN = "')'"
    END = "end of input"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    column: int


IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_']*")

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<ident>[A-Za-z_][A-Za-z0-9_']*)
  | (?P<and>∧|&|/\\)
  | (?P<or>∨|\||\\/)
  | (?P<impl>→|->|=>)
  | (?P<lparen>\()
  | (?P<rparen>\))
    """,
    re.VERBOSE,
)

_GROUP_KINDS = {
    "ident": TokenKind.IDENT,
    "and": TokenKind.AND,
    "or": TokenKind.OR,
    "impl": TokenKind.IMPL,
    "lparen": TokenKind.LPAREN,
    "rparen": TokenKind.RPAREN,
}


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ParseError(f"Unexpected character {text[pos]!r}", pos + 1)
        kind = _GROUP_KINDS.get(m.lastgroup or "ws")
        if kind is not None:
            tokens.append(Token(kind, m.group(), pos + 1))
        pos = m.end()
    tokens.append(Token(TokenKind.END, "", len(text) + 1))
    return tokens


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    def peek(self) -> Token:
        return self._tokens[self._pos]

    def advance(self) -> Token:
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    def expect(self, kind: TokenKind) -> Token:
        tok = self.peek()
        if tok.kind is not kind:
            raise ParseError(
                f"Expected {kind.value}, got {tok.kind.value}", tok.column
            )
        return self.advance()

    def formula(self) -> Formula:
        lhs = self.disjunction()
        if self.peek().kind is TokenKind.IMPL:
            self.advance()
            return Impl(lhs, self.formula())
        return lhs

    def disjunction(self) -> Formula:
        result = self.conjunction()
        while self.peek().kind is TokenKind.OR:
            self.advance()
            result = Disj(result, self.conjunction())
        return result

    def conjunction(self) -> Formula:
        result = self.atom()
        while self.peek().kind is TokenKind.AND:
            self.advance()
            result = Conj(result, self.atom())
        return result

    def atom(self) -> Formula:
        tok = self.peek()
        match tok.kind:
            case TokenKind.IDENT:
                self.advance()
                return Var(tok.text)
            case TokenKind.LPAREN:
                self.advance()
                inner = self.formula()
                self.expect(TokenKind.RPAREN)
                return inner
            case _:
                raise ParseError(
                    f"Expected a variable or '(', got {tok.kind.value}", tok.column
                )


def parse_formula(text: str) -> Formula:
    """Read a formula from infix notation, e.g. ``"(p → q) ∧ p → q"``."""
    parser = _Parser(tokenize(text))
    try:
        result = parser.formula()
    except RecursionError:
        raise ParseError("Formula is nested too deeply", parser.peek().column) from None
    parser.expect(TokenKind.END)
    return result


# ---------------------------------------------------------------------------
# Printer
# ---------------------------------------------------------------------------

UNICODE_SYMBOLS = {Conj: "∧", Disj: "∨", Impl: "→"}
ASCII_SYMBOLS = {Conj: "&", Disj: "|", Impl: "->"}

# Binding strength; higher binds tighter.
_PRECEDENCE = {Impl: 1, Disj: 2, Conj: 3, Var: 4}


def render_formula(f: Formula, *, ascii: bool = False) -> str:
    symbols = ASCII_SYMBOLS if ascii else UNICODE_SYMBOLS

    def go(f: Formula, min_prec: int) -> str:
        prec = _PRECEDENCE.get(type(f), 0)
        match f:
            case Var(name):
                return name
            case Impl(lhs, rhs):
                text = f"{go(lhs, prec + 1)} {symbols[Impl]} {go(rhs, prec)}"
            case Conj(lhs, rhs) | Disj(lhs, rhs):
                text = f"{go(lhs, prec)} {symbols[type(f)]} {go(rhs, prec + 1)}"
            case _:
                raise TypeError(f"Unknown formula type: {type(f)}")
        return f"({text})" if prec < min_prec else text

    return go(f, 0)


def render_proof(proof: Proof, *, ascii: bool = False) -> str:
    """One-line sequent: open assumptions (sorted by label), turnstile, conclusion."""
    turnstile = "|-" if ascii else "⊢"
    hyps = ", ".join(
        f"{label}: {render_formula(f, ascii=ascii)}"
        for label, f in sorted(proof.assumptions.items(), key=lambda kv: str(kv[0]))
    )
    conclusion = render_formula(proof.conclusion, ascii=ascii)
    return f"{hyps} {turnstile} {conclusion}" if hyps else f"{turnstile} {conclusion}"
