"""
Arithmetic expression evaluator.

Recursive-descent parser for ``+ - * / ^``, unary signs, parentheses and
numeric literals. Nothing is ever handed to a generic code-execution
facility.

Grammar:
    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/") unary)*
    unary      := ("+" | "-") unary | power
    power      := primary ("^" unary)?
    primary    := NUMBER | "(" expression ")"

``^`` is right-associative and binds tighter than unary minus, so
``-2^2 == -4`` and ``2^3^2 == 512``.

Dependencies: re (stdlib), ragchat.core.exceptions
System role: Safe evaluation for the calculator tool
"""

import math
import re
from dataclasses import dataclass

from ragchat.core.exceptions import CalculationError

_TOKEN_RE = re.compile(
    r"\s*(?:(?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)|(?P<op>[-+*/^()]))"
)


@dataclass(frozen=True)
class Token:
    kind: str  # "number", "op" or "end"
    value: str
    position: int


def tokenize(expression: str) -> list[Token]:
    """Split ``expression`` into tokens, ending with an ``end`` token."""
    tokens: list[Token] = []
    pos = 0
    length = len(expression)
    while pos < length:
        if expression[pos].isspace():
            pos += 1
            continue
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise CalculationError(f"Unexpected character {expression[pos]!r}", position=pos)
        kind = "number" if match.group("number") is not None else "op"
        tokens.append(Token(kind, match.group(kind), match.start(kind)))
        pos = match.end()
    tokens.append(Token("end", "", length))
    return tokens


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._index = 0

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _accept(self, *ops: str) -> str | None:
        token = self._current
        if token.kind == "op" and token.value in ops:
            self._index += 1
            return token.value
        return None

    def parse(self) -> float:
        value = self._expression()
        if self._current.kind != "end":
            raise CalculationError(
                f"Unexpected token {self._current.value!r}",
                position=self._current.position,
            )
        return value

    def _expression(self) -> float:
        value = self._term()
        while (op := self._accept("+", "-")) is not None:
            right = self._term()
            value = value + right if op == "+" else value - right
        return value

    def _term(self) -> float:
        value = self._unary()
        while (op := self._accept("*", "/")) is not None:
            position = self._current.position
            right = self._unary()
            if op == "*":
                value = value * right
            else:
                if right == 0:
                    raise CalculationError("Division by zero", position=position)
                value = value / right
        return value

    def _unary(self) -> float:
        op = self._accept("+", "-")
        if op is not None:
            operand = self._unary()
            return -operand if op == "-" else operand
        return self._power()

    def _power(self) -> float:
        base = self._primary()
        if self._accept("^") is None:
            return base
        position = self._current.position
        exponent = self._unary()
        try:
            result = base ** exponent
        except ZeroDivisionError as e:
            raise CalculationError("Division by zero", position=position) from e
        except OverflowError as e:
            raise CalculationError("Result is too large", position=position) from e
        if isinstance(result, complex):
            raise CalculationError("Result is not a real number", position=position)
        return result

    def _primary(self) -> float:
        token = self._current
        if token.kind == "number":
            self._index += 1
            return float(token.value)
        if self._accept("(") is not None:
            value = self._expression()
            if self._accept(")") is None:
                raise CalculationError("Missing closing parenthesis", position=self._current.position)
            return value
        if token.kind == "end":
            raise CalculationError("Unexpected end of expression", position=token.position)
        raise CalculationError(f"Unexpected token {token.value!r}", position=token.position)


def evaluate(expression: str) -> float | int:
    """
    Evaluate an arithmetic expression.

    Returns:
        int when the result is integral, float otherwise

    Raises:
        CalculationError: Empty input, syntax errors, division by zero,
            overflow or non-real results
    """
    if not expression or not expression.strip():
        raise CalculationError("Expression is empty")

    value = _Parser(tokenize(expression)).parse()
    if math.isinf(value) or math.isnan(value):
        raise CalculationError("Result is too large")
    if value.is_integer() and abs(value) < 2**53:
        return int(value)
    return value
