"""
Function Parser
===============
Turns the text of a two-variable expression (``z = f(x, y)``) into a callable.

The text is never handed to ``eval``: it is tokenized, parsed by a small
recursive-descent parser into an expression tree, and the tree is evaluated
with numpy. Evaluation works on plain floats and, vectorised, on whole sample
grids.

Grammar (lowest to highest precedence)::

    expression := term (("+" | "-") term)*
    term       := unary (("*" | "/" | "%") unary)*
    unary      := ("+" | "-") unary | power
    power      := primary (("**" | "^") unary)?
    primary    := NUMBER | NAME | NAME "(" arguments ")" | "(" expression ")"

Power is right-associative and binds tighter than a leading minus, so
``-x ** 2`` is ``-(x ** 2)``. Names may carry a ``Math.`` prefix
(``Math.sqrt``, ``Math.PI``) so JavaScript-style expressions keep working.

Chains of ``+``/``*`` may be arbitrarily long. Nesting (parentheses, signs,
exponents, call arguments) is limited to ``MAX_EXPRESSION_NESTING`` levels.
"""
from __future__ import annotations

import contextlib
import functools
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator, Union

import numpy as np
import numpy.typing as npt

from surfacegrapher.config import MAX_EXPRESSION_NESTING
from surfacegrapher.errors import ExpressionSyntaxError

logger = logging.getLogger(__name__)

Value = Union[float, np.floating, npt.NDArray[np.float64]]

VARIABLES: tuple[str, str] = ("x", "y")

CONSTANTS: dict[str, float] = {
    "pi": float(np.pi),
    "PI": float(np.pi),
    "e": float(np.e),
    "E": float(np.e),
}


def _round_half_up(a: Value) -> Value:
    return np.floor(a + 0.5)


def _minimum(*args: Value) -> Value:
    return functools.reduce(np.minimum, args)


def _maximum(*args: Value) -> Value:
    return functools.reduce(np.maximum, args)


@dataclass(frozen=True)
class MathFunction:
    """A named function callable from an expression."""
    func: Callable[..., Value]
    min_args: int
    max_args: int | None  # None = variadic


FUNCTIONS: dict[str, MathFunction] = {
    "sqrt": MathFunction(np.sqrt, 1, 1),
    "cbrt": MathFunction(np.cbrt, 1, 1),
    "abs": MathFunction(np.abs, 1, 1),
    "sign": MathFunction(np.sign, 1, 1),
    "exp": MathFunction(np.exp, 1, 1),
    "log": MathFunction(np.log, 1, 1),
    "log2": MathFunction(np.log2, 1, 1),
    "log10": MathFunction(np.log10, 1, 1),
    "sin": MathFunction(np.sin, 1, 1),
    "cos": MathFunction(np.cos, 1, 1),
    "tan": MathFunction(np.tan, 1, 1),
    "asin": MathFunction(np.arcsin, 1, 1),
    "acos": MathFunction(np.arccos, 1, 1),
    "atan": MathFunction(np.arctan, 1, 1),
    "atan2": MathFunction(np.arctan2, 2, 2),
    "sinh": MathFunction(np.sinh, 1, 1),
    "cosh": MathFunction(np.cosh, 1, 1),
    "tanh": MathFunction(np.tanh, 1, 1),
    "floor": MathFunction(np.floor, 1, 1),
    "ceil": MathFunction(np.ceil, 1, 1),
    "round": MathFunction(_round_half_up, 1, 1),
    "pow": MathFunction(np.power, 2, 2),
    "hypot": MathFunction(np.hypot, 2, 2),
    "min": MathFunction(_minimum, 1, None),
    "max": MathFunction(_maximum, 1, None),
}

_BINARY_OPERATORS: dict[str, Callable[[Value, Value], Value]] = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": np.divide,
    "%": np.fmod,  # sign follows the dividend
    "**": np.power,
}

# -------------------------------------------------------------------------------
# Tokenizer
# -------------------------------------------------------------------------------

_TOKEN_RE = re.compile(
    r"""
    (?P<number>(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?)
    |(?P<name>[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)?)
    |(?P<op>\*\*|[-+*/%^(),])
    |(?P<space>\s+)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    kind: str  # "number", "name", "op" or "end"
    text: str
    position: int


def tokenize(text: str) -> list[Token]:
    """
    Split expression text into tokens.

    Args:
        text: The expression text.

    Returns:
        The tokens in order, terminated by an ``end`` token.

    Raises:
        ExpressionSyntaxError: On a character that starts no valid token.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ExpressionSyntaxError(f"Unexpected character '{text[pos]}'", text, pos)
        kind = match.lastgroup
        if kind != "space":
            value = match.group()
            # '^' is an alias for '**'
            tokens.append(Token(kind, "**" if value == "^" else value, pos))
        pos = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens

# -------------------------------------------------------------------------------
# Expression tree
# -------------------------------------------------------------------------------

class Node:
    """Base class of the expression tree."""

    def evaluate(self, x: Value, y: Value) -> Value:
        raise NotImplementedError


@dataclass(frozen=True)
class Number(Node):
    value: float

    def evaluate(self, x: Value, y: Value) -> Value:
        return np.float64(self.value)


@dataclass(frozen=True)
class Variable(Node):
    name: str

    def evaluate(self, x: Value, y: Value) -> Value:
        return x if self.name == "x" else y


@dataclass(frozen=True)
class UnaryOp(Node):
    op: str
    operand: Node

    def evaluate(self, x: Value, y: Value) -> Value:
        value = self.operand.evaluate(x, y)
        return np.negative(value) if self.op == "-" else value


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node

    def evaluate(self, x: Value, y: Value) -> Value:
        # Chains like x + x + ... are left-deep; walk the left spine iteratively.
        spine: list[BinaryOp] = []
        node: Node = self
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left
        value = node.evaluate(x, y)
        for op_node in reversed(spine):
            value = _BINARY_OPERATORS[op_node.op](value, op_node.right.evaluate(x, y))
        return value


@dataclass(frozen=True)
class Call(Node):
    name: str
    args: tuple[Node, ...]

    def evaluate(self, x: Value, y: Value) -> Value:
        return FUNCTIONS[self.name].func(*(arg.evaluate(x, y) for arg in self.args))

# -------------------------------------------------------------------------------
# Parser
# -------------------------------------------------------------------------------

class _Parser:
    """Recursive-descent parser over a token list."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.index = 0
        self.depth = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def _advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != "end":
            self.index += 1
        return token

    def _accept(self, *ops: str) -> Token | None:
        token = self.current
        if token.kind == "op" and token.text in ops:
            return self._advance()
        return None

    def _expect(self, op: str) -> Token:
        token = self._accept(op)
        if token is None:
            raise self._error(f"Expected '{op}'")
        return token

    def _error(self, message: str, token: Token | None = None) -> ExpressionSyntaxError:
        token = token or self.current
        found = "end of expression" if token.kind == "end" else f"'{token.text}'"
        return ExpressionSyntaxError(f"{message}, found {found}", self.text, token.position)

    @contextlib.contextmanager
    def _nested(self) -> Iterator[None]:
        """Count one nesting level; too deep an expression is a syntax error."""
        if self.depth >= MAX_EXPRESSION_NESTING:
            raise ExpressionSyntaxError(
                f"Expression is nested more than {MAX_EXPRESSION_NESTING} levels deep",
                self.text,
                self.current.position,
            )
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def parse(self) -> Node:
        if self.current.kind == "end":
            raise ExpressionSyntaxError("Expression is empty", self.text, 0)
        node = self._expression()
        if self.current.kind != "end":
            raise self._error("Unexpected token")
        return node

    def _expression(self) -> Node:
        node = self._term()
        while (token := self._accept("+", "-")) is not None:
            node = BinaryOp(token.text, node, self._term())
        return node

    def _term(self) -> Node:
        node = self._unary()
        while (token := self._accept("*", "/", "%")) is not None:
            node = BinaryOp(token.text, node, self._unary())
        return node

    def _unary(self) -> Node:
        token = self._accept("+", "-")
        if token is not None:
            with self._nested():
                return UnaryOp(token.text, self._unary())
        return self._power()

    def _power(self) -> Node:
        base = self._primary()
        if self._accept("**") is not None:
            with self._nested():
                return BinaryOp("**", base, self._unary())
        return base

    def _primary(self) -> Node:
        token = self.current

        if token.kind == "number":
            self._advance()
            return Number(float(token.text))

        if token.kind == "name":
            self._advance()
            name = token.text.removeprefix("Math.")
            if self._accept("(") is not None:
                return self._call(name, token)
            if name in VARIABLES:
                return Variable(name)
            if name in CONSTANTS:
                return Number(CONSTANTS[name])
            if name in FUNCTIONS:
                raise ExpressionSyntaxError(f"Function '{name}' must be called", self.text, token.position)
            raise ExpressionSyntaxError(f"Unknown name '{token.text}'", self.text, token.position)

        if self._accept("(") is not None:
            with self._nested():
                node = self._expression()
            self._expect(")")
            return node

        raise self._error("Expected a number, variable or '('")

    def _call(self, name: str, token: Token) -> Node:
        spec = FUNCTIONS.get(name)
        if spec is None:
            raise ExpressionSyntaxError(f"Unknown function '{token.text}'", self.text, token.position)

        args: list[Node] = []
        if self._accept(")") is None:
            with self._nested():
                args.append(self._expression())
                while self._accept(",") is not None:
                    args.append(self._expression())
            self._expect(")")

        too_many = spec.max_args is not None and len(args) > spec.max_args
        if len(args) < spec.min_args or too_many:
            if spec.max_args is None:
                expected = f"at least {spec.min_args}"
            elif spec.min_args == spec.max_args:
                expected = str(spec.min_args)
            else:
                expected = f"{spec.min_args} to {spec.max_args}"
            raise ExpressionSyntaxError(
                f"Function '{name}' takes {expected} argument(s), got {len(args)}",
                self.text,
                token.position,
            )
        return Call(name, tuple(args))

# -------------------------------------------------------------------------------
# Public API
# -------------------------------------------------------------------------------

class SurfaceFunction:
    """
    A parsed expression ``z = f(x, y)``.

    Calling it with two floats returns a float. Non-real results (``sqrt(-1)``,
    ``1 / 0``) come back as ``nan`` / ``inf`` rather than raising.
    """

    def __init__(self, expression: str, tree: Node) -> None:
        self._expression = expression
        self._tree = tree

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def tree(self) -> Node:
        return self._tree

    def __call__(self, x: float, y: float) -> float:
        with np.errstate(all="ignore"):
            return float(self._tree.evaluate(np.float64(x), np.float64(y)))

    def evaluate_grid(
        self,
        x: npt.ArrayLike,
        y: npt.ArrayLike,
    ) -> npt.NDArray[np.float64]:
        """
        Evaluate the function element-wise over broadcastable arrays.

        Args:
            x: Array of x coordinates.
            y: Array of y coordinates, broadcastable against ``x``.

        Returns:
            Float array of ``f(x, y)`` with the broadcast shape of the inputs.
            Expressions that do not depend on ``x``/``y`` are broadcast too.
        """
        xs, ys = np.broadcast_arrays(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64))
        with np.errstate(all="ignore"):
            z = self._tree.evaluate(xs, ys)
        return np.broadcast_to(np.asarray(z, dtype=np.float64), xs.shape).copy()

    def __repr__(self) -> str:
        return f"SurfaceFunction({self._expression!r})"


def parse_function(text: str) -> SurfaceFunction:
    """
    Parse expression text in ``x`` and ``y`` into a callable.

    Nothing is evaluated here; evaluation happens per sample.

    Args:
        text: Expression such as ``"x ** 2 - y ** 2"``.

    Returns:
        The parsed function.

    Raises:
        ExpressionSyntaxError: If the text is empty or malformed, uses an unknown
            name, or calls a function with the wrong number of arguments.
    """
    if text is None:
        raise ExpressionSyntaxError("Expression is empty", "", 0)
    tree = _Parser(text).parse()
    logger.debug(f"Parsed expression '{text.strip()}'.")
    return SurfaceFunction(text.strip(), tree)
