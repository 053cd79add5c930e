"""Restricted single-variable expression evaluator.

Grammar (recursive descent, one token of lookahead)::

    expr    := term (("+" | "-") term)*
    term    := unary (("*" | "/") unary | implicit)*
    unary   := ("+" | "-") unary | power
    power   := primary (("^" | "**") unary)?
    primary := NUMBER | "x" | "pi" | FUNC "(" expr ")" | "(" expr ")"

FUNC is one of sin, cos, tan, abs, sqrt, ln (natural), log (base 10), exp.
Implicit multiplication covers ``2x``, ``3sin(x)``, ``2(x+1)`` and ``(x+1)(x-1)``.

The parser builds a tree of closures over numpy ufuncs; nothing else is
reachable from the expression text. ``evaluate`` never raises: parse errors,
over-deep nesting and domain faults (log of a negative, division by zero) all
come back as NaN, which curve samplers treat as "lift the pen".
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<num>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
    r"|(?P<name>[A-Za-z_]\w*)"
    r"|(?P<op>\*\*|[-+*/^()])"
    r")"
)

_FUNCTIONS: dict[str, Callable] = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "abs": np.abs,
    "sqrt": np.sqrt,
    "ln": np.log,
    "log": np.log10,
    "exp": np.exp,
}

_CONSTANTS = {"pi": math.pi}

# Expressions longer or more deeply nested than this are rejected outright.
_MAX_LENGTH = 500
_MAX_DEPTH = 64


class ExpressionError(ValueError):
    """Expression text outside the supported grammar."""


@dataclass(frozen=True)
class _Token:
    kind: str  # num | name | op | end
    value: str


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    stripped = text.rstrip()
    while pos < len(stripped):
        m = _TOKEN_RE.match(stripped, pos)
        if not m or m.end() == pos:
            raise ExpressionError(f"Unexpected character at {pos}: {stripped[pos:pos + 10]!r}")
        kind = m.lastgroup
        tokens.append(_Token(kind, m.group(kind)))
        pos = m.end()
    tokens.append(_Token("end", ""))
    return tokens


Node = Callable[[np.ndarray], np.ndarray]


class _Parser:
    def __init__(self, tokens: list[_Token]) -> None:
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    @property
    def current(self) -> _Token:
        return self.tokens[self.pos]

    def advance(self) -> _Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def expect(self, value: str) -> None:
        tok = self.advance()
        if tok.value != value:
            raise ExpressionError(f"Expected {value!r}, got {tok.value or 'end of input'!r}")

    def parse(self) -> Node:
        node = self.expr()
        if self.current.kind != "end":
            raise ExpressionError(f"Unexpected token {self.current.value!r}")
        return node

    def expr(self) -> Node:
        node = self.term()
        while self.current.value in ("+", "-"):
            op = self.advance().value
            rhs = self.term()
            node = _binary(np.add if op == "+" else np.subtract, node, rhs)
        return node

    def term(self) -> Node:
        node = self.unary()
        while True:
            tok = self.current
            if tok.value in ("*", "/"):
                self.advance()
                rhs = self.unary()
                node = _binary(np.multiply if tok.value == "*" else np.true_divide, node, rhs)
            elif tok.kind in ("num", "name") or tok.value == "(":
                # implicit multiplication: 2x, 3sin(x), (x+1)(x-1)
                rhs = self.power()
                node = _binary(np.multiply, node, rhs)
            else:
                return node

    def unary(self) -> Node:
        # each paren, call argument, sign and exponent nests through here
        self.depth += 1
        if self.depth > _MAX_DEPTH:
            raise ExpressionError("Expression nested too deeply")
        node = self.signed()
        self.depth -= 1
        return node

    def signed(self) -> Node:
        if self.current.value == "-":
            self.advance()
            operand = self.unary()
            return lambda x: np.negative(operand(x))
        if self.current.value == "+":
            self.advance()
            return self.unary()
        return self.power()

    def power(self) -> Node:
        base = self.primary()
        if self.current.value in ("^", "**"):
            self.advance()
            exponent = self.unary()
            return _binary(np.power, base, exponent)
        return base

    def primary(self) -> Node:
        tok = self.advance()
        if tok.kind == "num":
            value = float(tok.value)
            return lambda x: np.full_like(x, value)
        if tok.kind == "name":
            name = tok.value.lower()
            if name == "x":
                return lambda x: x
            if name in _CONSTANTS:
                value = _CONSTANTS[name]
                return lambda x: np.full_like(x, value)
            if name in _FUNCTIONS:
                fn = _FUNCTIONS[name]
                self.expect("(")
                arg = self.expr()
                self.expect(")")
                return lambda x: fn(arg(x))
            raise ExpressionError(f"Unknown name {tok.value!r}")
        if tok.value == "(":
            inner = self.expr()
            self.expect(")")
            return inner
        raise ExpressionError(f"Unexpected token {tok.value or 'end of input'!r}")


def _binary(fn: Callable, lhs: Node, rhs: Node) -> Node:
    return lambda x: fn(lhs(x), rhs(x))


@dataclass(frozen=True)
class Expression:
    """A compiled expression in x."""

    source: str
    _root: Node

    def __call__(self, x):
        """Evaluate at a scalar or an array of x values; faults and infinities become NaN."""
        arr = np.asarray(x, dtype=np.float64)
        with np.errstate(all="ignore"):
            try:
                result = np.asarray(self._root(arr), dtype=np.float64)
            except (ArithmeticError, ValueError, TypeError, RecursionError):
                result = np.full_like(arr, np.nan)
        if result.shape != arr.shape:
            result = np.broadcast_to(result, arr.shape).copy()
        result = np.where(np.isfinite(result), result, np.nan)
        if np.ndim(x) == 0:
            return float(result)
        return result


@lru_cache(maxsize=256)
def compile_expression(text: str) -> Expression:
    """Parse expression text; raises ExpressionError outside the grammar."""
    if not isinstance(text, str) or not text.strip():
        raise ExpressionError("Empty expression")
    if len(text) > _MAX_LENGTH:
        raise ExpressionError("Expression too long")
    # "y = ..." and "f(x) = ..." prefixes are common in generated specs
    source = re.sub(r"^\s*(?:y|f\s*\(\s*x\s*\))\s*=", "", text)
    return Expression(text, _Parser(_tokenize(source)).parse())


def evaluate(text: str, x):
    """Evaluate ``text`` at x (scalar or array). Any fault yields NaN."""
    try:
        expr = compile_expression(text)
    except ExpressionError:
        if np.ndim(x) == 0:
            return math.nan
        return np.full(np.shape(x), np.nan)
    return expr(x)
