"""
Recursive-descent parser for two-variable surface formulas.

Grammar::

    expression := term (('+' | '-') term)*
    term       := unary (('*' | '/') unary | power)*      # bare power = implicit '*'
    unary      := ('-' | '+') unary | power
    power      := primary ('^' unary)?
    primary    := NUMBER | VARIABLE | CONSTANT | FUNCTION '(' expression ')'
                | '(' expression ')'
"""

import re
from typing import List, Optional, Sequence, Tuple

from .core import (
    Expr, VARIABLES, FUNCTIONS, CONSTANTS, MAX_DEPTH,
    Const, Add, Sub, Mul, Div, Pow, Neg, Func,
)
from .errors import CompileError

_NUMBER = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?")
_WORD = re.compile(r'[A-Za-z]+')

# (kind, value, position)
Token = Tuple[str, object, int]

_PRIMARY_START = {'num', 'var', 'const', 'func', '('}

# Grouping depth beyond which the descent would exhaust the interpreter stack.
MAX_NESTING = 64


class ExpressionParser:
    """Parse expression text into an Expr tree."""

    def __init__(self, variables: Sequence[str] = ('x', 'y')):
        unknown = [v for v in variables if v not in VARIABLES]
        if unknown:
            raise ValueError(f"Unsupported variable names: {unknown}")
        self.variables = tuple(variables)
        self.tokens: List[Token] = []
        self.pos = 0
        self.depth = 0
        self.text = ""

    def parse(self, text: str) -> Expr:
        """
        Parse text into a tree. Whitespace is removed before tokenizing, so
        "2 3" reads as 23 and positions in errors index the stripped text.
        """
        self.text = "".join(text.split())
        self.tokens = self._tokenize(self.text)
        self.pos = 0
        self.depth = 0
        if not self.tokens:
            raise CompileError("Empty expression", text, 0)
        expr = self._parse_additive()
        token = self._current()
        if token is not None:
            self._fail(f"Unexpected {token[1]!r}", token)
        if expr.depth() > MAX_DEPTH:
            raise CompileError("Expression nested too deeply", self.text, 0)
        return expr

    # ------------------------------------------------------------------
    # Tokenizer
    # ------------------------------------------------------------------

    def _tokenize(self, text: str) -> List[Token]:
        tokens = []
        i = 0
        while i < len(text):
            ch = text[i]
            if text[i:i+2] == '**':
                tokens.append(('op', '^', i))
                i += 2
                continue
            if ch in '+-*/^':
                tokens.append(('op', ch, i))
                i += 1
                continue
            if ch in '()':
                tokens.append((ch, ch, i))
                i += 1
                continue
            match = _NUMBER.match(text, i)
            if match:
                if tokens and tokens[-1][0] in ('num', 'var', 'const'):
                    # x2, 1.2.3
                    raise CompileError(f"Unexpected number at position {i}", text, i)
                tokens.append(('num', float(match.group()), i))
                i = match.end()
                continue
            match = _WORD.match(text, i)
            if match:
                tokens.extend(self._resolve_word(match.group(), i, match.end()))
                i = match.end()
                continue
            raise CompileError(f"Unexpected character {ch!r} at position {i}", text, i)
        return tokens

    def _resolve_word(self, word: str, start: int, end: int) -> List[Token]:
        """Turn a run of letters into function, constant or variable tokens."""
        if word in FUNCTIONS and self._next_char(end) == '(':
            return [('func', FUNCTIONS[word], start)]
        if word in CONSTANTS:
            return [('const', CONSTANTS[word], start)]
        if all(ch in self.variables for ch in word):
            # xy -> x * y
            return [('var', ch, start + k) for k, ch in enumerate(word)]
        raise CompileError(f"Unknown identifier {word!r} at position {start}", self.text, start)

    def _next_char(self, i: int) -> Optional[str]:
        return self.text[i] if i < len(self.text) else None

    # ------------------------------------------------------------------
    # Recursive descent
    # ------------------------------------------------------------------

    def _current(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _consume(self) -> Token:
        token = self._current()
        self.pos += 1
        return token

    def _is_op(self, *symbols) -> bool:
        token = self._current()
        return token is not None and token[0] == 'op' and token[1] in symbols

    def _expect(self, kind: str):
        token = self._current()
        if token is None or token[0] != kind:
            self._fail(f"Expected {kind!r}", token)
        return self._consume()

    def _fail(self, message: str, token: Optional[Token]):
        if token is None:
            raise CompileError(f"{message} at end of expression", self.text, len(self.text))
        raise CompileError(f"{message} at position {token[2]}", self.text, token[2])

    def _parse_additive(self) -> Expr:
        left = self._parse_multiplicative()
        while self._is_op('+', '-'):
            op = self._consume()[1]
            right = self._parse_multiplicative()
            left = Add(left, right) if op == '+' else Sub(left, right)
        return left

    def _parse_multiplicative(self) -> Expr:
        left = self._parse_unary()
        while True:
            if self._is_op('*', '/'):
                op = self._consume()[1]
                right = self._parse_unary()
                left = Mul(left, right) if op == '*' else Div(left, right)
            elif self._current() is not None and self._current()[0] in _PRIMARY_START:
                left = Mul(left, self._parse_power())
            else:
                return left

    def _parse_unary(self) -> Expr:
        # every nested group, exponent and sign passes through here
        self.depth += 1
        if self.depth > MAX_NESTING:
            self._fail("Expression nested too deeply", self._current())
        try:
            if self._is_op('-'):
                self._consume()
                return Neg(self._parse_unary())
            if self._is_op('+'):
                self._consume()
                return self._parse_unary()
            return self._parse_power()
        finally:
            self.depth -= 1

    def _parse_power(self) -> Expr:
        base = self._parse_primary()
        if self._is_op('^'):
            self._consume()
            return Pow(base, self._parse_unary())
        return base

    def _parse_primary(self) -> Expr:
        token = self._current()
        if token is None:
            self._fail("Unexpected end of expression", None)
        kind, value, _ = token

        if kind in ('num', 'const'):
            self._consume()
            return Const(value)
        if kind == 'var':
            self._consume()
            return Expr(VARIABLES[value])
        if kind == 'func':
            self._consume()
            self._expect('(')
            arg = self._parse_additive()
            self._expect(')')
            return Func(value, arg)
        if kind == '(':
            self._consume()
            expr = self._parse_additive()
            self._expect(')')
            return expr

        self._fail(f"Unexpected {value!r}", token)


def parse(text: str, variables: Sequence[str] = ('x', 'y')) -> Expr:
    """Parse string to expression tree."""
    return ExpressionParser(variables).parse(text)
