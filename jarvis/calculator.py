"""
Arithmetic expression evaluator

Recursive-descent parser over numeric literals, + - * / %, unary signs and
parentheses. Nothing is ever handed to eval().

Grammar:
    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/" | "%") unary)*
    unary      := ("+" | "-") unary | primary
    primary    := NUMBER | "(" expression ")"
"""

import math
import re
from typing import List, Tuple

from jarvis.errors import ExpressionError

_TOKEN_RE = re.compile(r"\s*(?:(\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)|(.))")

MAX_EXPRESSION_LENGTH = 1000
MAX_NESTING = 100


def _finite(value: float) -> float:
    if math.isinf(value) or math.isnan(value):
        raise ExpressionError("Number is too large")
    return value


def tokenize(expression: str) -> List[Tuple[str, str]]:
    """Split an expression into ("num", text) and ("op", char) tokens"""
    tokens = []
    for number, other in _TOKEN_RE.findall(expression):
        if number:
            tokens.append(("num", number))
        elif other.strip():
            if other not in "+-*/%()":
                raise ExpressionError(f"Unsupported character '{other}'")
            tokens.append(("op", other))
    return tokens


class _Parser:
    def __init__(self, tokens: List[Tuple[str, str]]):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def peek(self):
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take_op(self, ops: str):
        token = self.peek()
        if token and token[0] == "op" and token[1] in ops:
            self.pos += 1
            return token[1]
        return None

    def parse(self) -> float:
        if not self.tokens:
            raise ExpressionError("Empty expression")
        value = self.expression()
        if self.peek() is not None:
            raise ExpressionError(f"Unexpected '{self.peek()[1]}'")
        return value

    def expression(self) -> float:
        value = self.term()
        while True:
            op = self.take_op("+-")
            if op is None:
                return value
            rhs = self.term()
            value = _finite(value + rhs if op == "+" else value - rhs)

    def term(self) -> float:
        value = self.unary()
        while True:
            op = self.take_op("*/%")
            if op is None:
                return value
            rhs = self.unary()
            if op == "*":
                value = _finite(value * rhs)
            elif rhs == 0:
                raise ExpressionError("Division by zero")
            elif op == "/":
                value = _finite(value / rhs)
            else:
                # Remainder takes the sign of the dividend
                value = math.fmod(value, rhs)

    def unary(self) -> float:
        op = self.take_op("+-")
        if op is None:
            return self.primary()
        self._enter()
        try:
            value = self.unary()
        finally:
            self.depth -= 1
        return -value if op == "-" else value

    def primary(self) -> float:
        token = self.peek()
        if token is None:
            raise ExpressionError("Unexpected end of expression")
        kind, text = token
        if kind == "num":
            self.pos += 1
            return _finite(float(text))
        if text == "(":
            self.pos += 1
            self._enter()
            try:
                value = self.expression()
            finally:
                self.depth -= 1
            if self.take_op(")") is None:
                raise ExpressionError("Missing closing parenthesis")
            return value
        raise ExpressionError(f"Unexpected '{text}'")

    def _enter(self):
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise ExpressionError("Expression is nested too deeply")


def evaluate(expression: str) -> float:
    """
    Evaluate an arithmetic expression

    Examples:
        evaluate("2 + 2") -> 4.0
        evaluate("(2 + 3) * 4") -> 20.0
        evaluate("10 % 3") -> 1.0

    Raises:
        ExpressionError: malformed input, unsupported characters, division by zero
            or a number outside the float range
    """
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError("Expression is too long")
    result = _Parser(tokenize(expression)).parse()
    if math.isinf(result) or math.isnan(result):
        raise ExpressionError("Result is not a finite number")
    return result
