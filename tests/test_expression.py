"""Tests for the expression parser and evaluator."""
import math

import numpy as np
import pytest

from surfacegrapher.config import MAX_EXPRESSION_NESTING
from surfacegrapher.errors import ExpressionSyntaxError, PlotError
from surfacegrapher.model.expression import (
    BinaryOp, Number, UnaryOp, Variable, parse_function, tokenize
)


# ─── tokenize ────────────────────────────────────────────────────────────────

class TestTokenize:
    def test_kinds(self):
        tokens = tokenize("3 * x ** 2")
        assert [t.kind for t in tokens] == ["number", "op", "name", "op", "number", "end"]

    def test_caret_is_power(self):
        assert tokenize("x^2")[1].text == "**"

    def test_scientific_number(self):
        assert tokenize("1.5e-3")[0].text == "1.5e-3"

    def test_dotted_name(self):
        assert tokenize("Math.sqrt(x)")[0].text == "Math.sqrt"

    def test_positions(self):
        tokens = tokenize("x +  y")
        assert [t.position for t in tokens] == [0, 2, 5, 6]

    def test_bad_character(self):
        with pytest.raises(ExpressionSyntaxError) as exc:
            tokenize("x $ y")
        assert exc.value.position == 2


# ─── parsing ─────────────────────────────────────────────────────────────────

class TestParse:
    def test_precedence(self):
        tree = parse_function("1 + 2 * x").tree
        assert tree == BinaryOp("+", Number(1.0), BinaryOp("*", Number(2.0), Variable("x")))

    def test_unary_minus_below_power(self):
        tree = parse_function("-x ** 2").tree
        assert tree == UnaryOp("-", BinaryOp("**", Variable("x"), Number(2.0)))

    def test_power_right_associative(self):
        assert parse_function("2 ** 3 ** 2")(0, 0) == 512.0

    def test_negative_exponent(self):
        assert parse_function("2 ** -1")(0, 0) == 0.5

    def test_parentheses(self):
        assert parse_function("(1 + 2) * 3")(0, 0) == 9.0

    def test_left_associative_subtraction(self):
        assert parse_function("10 - 4 - 3")(0, 0) == 3.0

    def test_expression_is_stripped(self):
        assert parse_function("  x + y ").expression == "x + y"

    @pytest.mark.parametrize("text", ["", "   ", "x +", "(x + y", "x y", "2x", "x + * y", ")", "sqrt", "f(x)"])
    def test_syntax_errors(self, text):
        with pytest.raises(ExpressionSyntaxError):
            parse_function(text)

    def test_unknown_name(self):
        with pytest.raises(ExpressionSyntaxError, match="Unknown name 'z'"):
            parse_function("x + z")

    def test_wrong_argument_count(self):
        with pytest.raises(ExpressionSyntaxError, match="takes 2 argument"):
            parse_function("atan2(x)")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_function("x +")

    def test_error_reports_column(self):
        with pytest.raises(ExpressionSyntaxError) as exc:
            parse_function("x + )")
        assert exc.value.position == 4
        assert "column 5" in str(exc.value)

    def test_no_code_execution(self):
        with pytest.raises(ExpressionSyntaxError):
            parse_function("__import__('os').getcwd()")


# ─── evaluation ──────────────────────────────────────────────────────────────

class TestEvaluate:
    def test_saddle(self):
        f = parse_function("x ** 2 - y ** 2")
        assert f(3.0, 2.0) == 5.0

    def test_returns_float(self):
        assert isinstance(parse_function("x * y")(2, 3), float)

    def test_javascript_math_prefix(self):
        f = parse_function("Math.sqrt(x ** 2 + y ** 2)")
        assert f(3.0, 4.0) == pytest.approx(5.0)

    def test_constants(self):
        assert parse_function("pi")(0, 0) == pytest.approx(math.pi)
        assert parse_function("Math.E")(0, 0) == pytest.approx(math.e)

    def test_functions(self):
        assert parse_function("sin(x) + cos(y)")(0.0, 0.0) == pytest.approx(1.0)
        assert parse_function("max(x, y, 7)")(1.0, 2.0) == 7.0
        assert parse_function("min(x, y)")(1.0, 2.0) == 1.0
        assert parse_function("hypot(x, y)")(3.0, 4.0) == pytest.approx(5.0)
        assert parse_function("abs(x)")(-2.5, 0.0) == 2.5

    def test_modulo_sign_follows_dividend(self):
        assert parse_function("x % 3")(-7.0, 0.0) == -1.0

    def test_sqrt_of_negative_is_nan(self):
        assert math.isnan(parse_function("sqrt(x)")(-1.0, 0.0))

    def test_division_by_zero_is_inf(self):
        assert parse_function("1 / x")(0.0, 0.0) == math.inf

    def test_grid_matches_scalar(self):
        f = parse_function("sin(x) * cos(y) + x ** 2")
        xs, ys = np.meshgrid(np.linspace(-1, 1, 5), np.linspace(-2, 2, 5))
        grid = f.evaluate_grid(xs, ys)
        assert grid.shape == (5, 5)
        for (i, j), z in np.ndenumerate(grid):
            assert z == pytest.approx(f(xs[i, j], ys[i, j]))

    def test_constant_expression_broadcasts(self):
        grid = parse_function("2").evaluate_grid(np.zeros((3, 4)), np.zeros((3, 4)))
        assert grid.shape == (3, 4)
        assert np.all(grid == 2.0)

    def test_grid_propagates_nan(self):
        grid = parse_function("sqrt(x)").evaluate_grid(np.array([-1.0, 4.0]), np.zeros(2))
        assert math.isnan(grid[0])
        assert grid[1] == 2.0


# ─── size limits ─────────────────────────────────────────────────────────────

class TestLongExpressions:
    def test_long_sum(self):
        f = parse_function(" + ".join(["x"] * 2000))
        assert f(1.5, 0.0) == pytest.approx(3000.0)

    def test_long_sum_on_grid(self):
        f = parse_function(" * ".join(["y"] * 1500) + " + x")
        grid = f.evaluate_grid(np.array([0.5, 2.0]), np.ones(2))
        assert grid.tolist() == [1.5, 3.0]

    def test_nesting_within_limit(self):
        depth = MAX_EXPRESSION_NESTING - 1
        assert parse_function("(" * depth + "x" + ")" * depth)(2.0, 0.0) == 2.0

    @pytest.mark.parametrize("text", [
        "(" * 2000 + "x" + ")" * 2000,
        "-" * 2000 + "x",
        " ** ".join(["x"] * 2000),
        "sqrt(" * 2000 + "x" + ")" * 2000,
    ], ids=["parentheses", "signs", "powers", "calls"])
    def test_too_deep_is_syntax_error(self, text):
        with pytest.raises(PlotError, match="nested more than"):
            parse_function(text)
