from __future__ import annotations

from textwrap import dedent

import pytest

from pyimp.desugar import desugar
from pyimp.env import ValueEnv
from pyimp.pretty import format_env, format_expr, format_node, format_statement
from pyimp.programs import factorial, fibonacci, square_root
from pyimp.types import BinOp, lit, op, var


@pytest.mark.parametrize(
    "expr, expected",
    [
        (op(var("A"), BinOp.GE, op(var("B"), BinOp.TIMES, var("B"))), "A >= B * B"),
        (op(op(var("a"), BinOp.PLUS, var("b")), BinOp.TIMES, var("c")), "(a + b) * c"),
        (op(var("a"), BinOp.MINUS, op(var("b"), BinOp.MINUS, var("c"))), "a - (b - c)"),
        (op(op(var("a"), BinOp.MINUS, var("b")), BinOp.MINUS, var("c")), "a - b - c"),
        (op(op(var("a"), BinOp.LT, var("b")), BinOp.EQL, lit(1)), "(a < b) == 1"),
        (op(lit(-3), BinOp.DIVIDE, lit(2)), "-3 / 2"),
    ],
)
def test_format_expr(expr, expected: str) -> None:
    assert format_expr(expr) == expected


def test_factorial_source() -> None:
    assert format_statement(factorial) == dedent("""\
        for (Out := 1; In > 0; In := In - 1) {
          Out := In * Out
        }""")


def test_square_root_source() -> None:
    assert format_statement(square_root) == dedent("""\
        B := 0;
        while (A >= B * B) {
          B++
        };
        B := B - 1""")


def test_fibonacci_source() -> None:
    text = format_statement(fibonacci)
    assert text.startswith("F0 := 1;\nF1 := 1;\nif (In == 0) {\n  Out := F0\n} else {")
    assert "    for (C := 2; C <= In; C++) {" in text
    assert "      T := F0 + F1;" in text


def test_core_form_of_factorial() -> None:
    assert format_statement(desugar(factorial)) == dedent("""\
        Out := 1;
        while (In > 0) {
          Out := In * Out;
          In := In - 1
        }""")


def test_format_env_sorts_names() -> None:
    assert format_env(ValueEnv({"B": 3, "A": 10})) == "{A: 10, B: 3}"
    assert format_env({}) == "{}"


def test_format_node_dispatches() -> None:
    assert format_node(var("x")) == "x"
    assert format_node(square_root).startswith("B := 0;")
