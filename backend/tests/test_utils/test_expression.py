"""Tests for the restricted expression evaluator."""

from __future__ import annotations

import math

import numpy as np
import pytest

from figura.utils.expression import ExpressionError, compile_expression, evaluate


@pytest.mark.parametrize("text,x,expected", [
    ("x^2", 3, 9),
    ("x**2", 3, 9),
    ("2x + 1", 3, 7),
    ("3sin(0)", 1, 0),
    ("(x+1)(x-1)", 2, 3),
    ("2^3^2", 0, 512),
    ("-x^2", 3, -9),
    ("sqrt(16)", 0, 4),
    ("abs(-3)", 0, 3),
    ("exp(0)", 0, 1),
    ("log(100)", 0, 2),
    ("ln(exp(2))", 0, 2),
    ("sin(pi/2)", 0, 1),
    ("2PI", 0, 2 * math.pi),
    ("X / 2", 5, 2.5),
    ("y = 2x + 1", 1, 3),
    ("f(x) = x", 5, 5),
])
def test_evaluate_values(text, x, expected):
    assert evaluate(text, x) == pytest.approx(expected)


def test_domain_faults_become_nan():
    assert math.isnan(evaluate("log(-1)", 0))
    assert math.isnan(evaluate("sqrt(x)", -4))
    assert math.isnan(evaluate("1/x", 0))
    assert math.isnan(evaluate("-1/x", 0))


def test_infinities_in_arrays_become_nan():
    out = evaluate("1/x", np.array([-1.0, 0.0, 2.0]))
    assert out[0] == pytest.approx(-1)
    assert np.isnan(out[1])
    assert out[2] == pytest.approx(0.5)


@pytest.mark.parametrize("text", [
    "(" * 240 + "x" + ")" * 240,
    "sin(" * 90 + "x" + ")" * 90,
    "-" * 300 + "x",
    "x^" * 200 + "x",
    "2(" * 150 + "x" + ")" * 150,
])
def test_deep_nesting_is_rejected_not_raised(text):
    with pytest.raises(ExpressionError):
        compile_expression(text)
    assert math.isnan(evaluate(text, 1.0))
    assert np.isnan(evaluate(text, np.ones(3))).all()


def test_moderate_nesting_still_parses():
    text = "(" * 20 + "x + 1" + ")" * 20
    assert evaluate(text, 2.0) == pytest.approx(3)


@pytest.mark.parametrize("text", [
    "",
    "   ",
    "import os",
    "__import__('os')",
    "x; 1",
    "foo(x)",
    "open(x)",
    "x.real",
    "2 +",
    "(x",
    "x" * 600,
])
def test_rejects_text_outside_grammar(text):
    with pytest.raises(ExpressionError):
        compile_expression(text)
    assert math.isnan(evaluate(text, 1.0))


def test_evaluate_arrays():
    xs = np.array([1.0, 2.0, 3.0])
    assert np.allclose(evaluate("x^2", xs), [1, 4, 9])
    assert np.allclose(evaluate("5", xs), [5, 5, 5])


def test_invalid_text_over_array_is_all_nan():
    out = evaluate("bogus(", np.zeros(4))
    assert out.shape == (4,)
    assert np.isnan(out).all()


def test_compiled_expression_is_reused():
    assert compile_expression("x + 1") is compile_expression("x + 1")
