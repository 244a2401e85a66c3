from __future__ import annotations

import logging

import pytest

from pyimp.env import ValueEnv, empty_value_env
from pyimp.errors import ErrorCodes, IMPError
from pyimp.evaluator import EvalOptions, Evaluator, evaluate_expr, execute, run
from pyimp.programs import slist
from pyimp.types import (
    BinOp,
    assign,
    core_assign,
    core_if,
    core_seq,
    core_skip,
    core_while,
    for_stmt,
    if_stmt,
    incr,
    lit,
    op,
    seq,
    skip,
    var,
    while_stmt,
)


#------------------------------------------------------------------------------
# Expressions
#------------------------------------------------------------------------------

@pytest.mark.parametrize(
    "bop, left, right, expected",
    [
        (BinOp.PLUS, 2, 3, 5),
        (BinOp.MINUS, 2, 3, -1),
        (BinOp.TIMES, -4, 3, -12),
        (BinOp.DIVIDE, 7, 2, 3),
        (BinOp.DIVIDE, -7, 2, -4),
        (BinOp.DIVIDE, 7, -2, -4),
        (BinOp.GT, 3, 2, 1),
        (BinOp.GT, 2, 2, 0),
        (BinOp.GE, 2, 2, 1),
        (BinOp.LT, 1, 2, 1),
        (BinOp.LT, 2, 1, 0),
        (BinOp.LE, 3, 2, 0),
        (BinOp.EQL, 5, 5, 1),
        (BinOp.EQL, 5, 6, 0),
    ],
)
def test_binary_operators(bop: BinOp, left: int, right: int, expected: int) -> None:
    assert evaluate_expr(empty_value_env(), op(lit(left), bop, lit(right))) == expected


def test_variable_lookup_defaults_to_zero(evaluator: Evaluator) -> None:
    env = ValueEnv({"x": 7})
    assert evaluator.evaluate(env, var("x")) == 7
    assert evaluator.evaluate(env, var("y")) == 0


def test_nested_expression(evaluator: Evaluator) -> None:
    expr = op(op(var("a"), BinOp.PLUS, lit(1)), BinOp.TIMES, op(var("b"), BinOp.MINUS, lit(2)))
    assert evaluator.evaluate({"a": 2, "b": 5}, expr) == 9


def test_large_integers_do_not_overflow(evaluator: Evaluator) -> None:
    big = 2 ** 70
    assert evaluator.evaluate({}, op(lit(big), BinOp.TIMES, lit(4))) == 2 ** 72


def test_divide_by_zero_raises(evaluator: Evaluator) -> None:
    with pytest.raises(IMPError) as excinfo:
        evaluator.evaluate({}, op(lit(1), BinOp.DIVIDE, lit(0)))
    assert excinfo.value.meta == {"dividend": 1}
    assert excinfo.value.code is ErrorCodes.DIVIDE_BY_ZERO
    assert excinfo.value.to_dict()["code"] == "DivideByZero"


def test_divide_by_zero_aborts_execution() -> None:
    program = seq(assign("x", lit(1)), assign("y", op(var("x"), BinOp.DIVIDE, var("z"))))
    with pytest.raises(IMPError) as excinfo:
        execute({}, program)
    assert excinfo.value.code is ErrorCodes.DIVIDE_BY_ZERO


def test_evaluation_does_not_mutate_env(evaluator: Evaluator) -> None:
    env = ValueEnv({"x": 3})
    evaluator.evaluate(env, op(var("x"), BinOp.PLUS, var("y")))
    assert env.bindings == {"x": 3}


#------------------------------------------------------------------------------
# Core statements
#------------------------------------------------------------------------------

def test_assign_rebinds_only_target() -> None:
    env = ValueEnv({"x": 1, "y": 2})
    result = run(env, core_assign("x", op(var("y"), BinOp.PLUS, lit(10))))
    assert result.bindings == {"x": 12, "y": 2}
    assert env.bindings == {"x": 1, "y": 2}


def test_skip_returns_env_unchanged() -> None:
    env = ValueEnv({"x": 1})
    assert run(env, core_skip()) is env


@pytest.mark.parametrize("cond_value, expected", [(1, "then"), (-3, "then"), (0, "else")])
def test_if_treats_nonzero_as_true(cond_value: int, expected: str) -> None:
    stmt = core_if(lit(cond_value), core_assign("then", lit(1)), core_assign("else", lit(1)))
    result = run({}, stmt)
    assert result.lookup(expected) == 1
    assert len(result) == 1


def test_if_branches_do_not_observe_each_other() -> None:
    stmt = core_if(var("flag"), core_assign("x", lit(1)), core_assign("y", lit(2)))
    env = ValueEnv({"flag": 0})
    result = run(env, stmt)
    assert "x" not in result
    assert result.lookup("y") == 2
    assert env.bindings == {"flag": 0}


def test_while_with_false_condition_runs_zero_times() -> None:
    env = ValueEnv({"n": 0})
    result = run(env, core_while(var("n"), core_assign("hit", lit(1))))
    assert result == env


def test_while_retests_after_each_iteration() -> None:
    stmt = core_while(
        op(var("n"), BinOp.GT, lit(0)),
        core_seq(
            core_assign("n", op(var("n"), BinOp.MINUS, lit(1))),
            core_assign("count", op(var("count"), BinOp.PLUS, lit(1))),
        ),
    )
    result = run({"n": 4}, stmt)
    assert result.lookup("n") == 0
    assert result.lookup("count") == 4


def test_long_loop_does_not_grow_the_stack() -> None:
    stmt = core_while(
        op(var("i"), BinOp.LT, lit(50_000)),
        core_assign("i", op(var("i"), BinOp.PLUS, lit(1))),
    )
    assert run({}, stmt).lookup("i") == 50_000


def test_long_sequence_does_not_grow_the_stack() -> None:
    assert execute({}, slist([incr("x")] * 5_000)).lookup("x") == 5_000

    chain = core_skip()
    for _ in range(5_000):
        chain = core_seq(core_assign("y", op(var("y"), BinOp.PLUS, lit(2))), chain)
    assert run({}, chain).lookup("y") == 10_000


def test_long_sequence_counts_every_node_as_a_step() -> None:
    chain = core_skip()
    for _ in range(3):
        chain = core_seq(core_skip(), chain)
    # three seq nodes, three heads, one tail
    assert run({}, chain, EvalOptions(max_steps=7)) == empty_value_env()
    with pytest.raises(IMPError) as excinfo:
        run({}, chain, EvalOptions(max_steps=6))
    assert excinfo.value.code is ErrorCodes.NON_TERMINATION


def test_sequence_sees_previous_effects() -> None:
    stmt = seq(assign("x", lit(1)), assign("y", var("x")))
    assert execute({"x": 42}, stmt).lookup("y") == 1
    assert execute({}, stmt).lookup("y") == 1


#------------------------------------------------------------------------------
# Full statements
#------------------------------------------------------------------------------

def test_increment() -> None:
    assert execute({"x": 41}, incr("x")).lookup("x") == 42
    assert execute({}, incr("x")).lookup("x") == 1


def test_for_loop_sums_range() -> None:
    stmt = for_stmt(
        assign("i", lit(0)),
        op(var("i"), BinOp.LT, lit(5)),
        incr("i"),
        assign("sum", op(var("sum"), BinOp.PLUS, var("i"))),
    )
    result = execute(empty_value_env(), stmt)
    assert result.lookup("i") == 5
    assert result.lookup("sum") == 10


def test_for_init_runs_once_even_when_loop_is_skipped() -> None:
    stmt = for_stmt(
        incr("inits"),
        lit(0),
        incr("updates"),
        incr("bodies"),
    )
    result = execute({}, stmt)
    assert result.bindings == {"inits": 1}


def test_nested_while_and_if() -> None:
    # count even numbers below 10
    stmt = seq(
        assign("i", lit(0)),
        while_stmt(
            op(var("i"), BinOp.LT, lit(10)),
            seq(
                if_stmt(
                    op(op(op(var("i"), BinOp.DIVIDE, lit(2)), BinOp.TIMES, lit(2)), BinOp.EQL, var("i")),
                    incr("evens"),
                    skip(),
                ),
                incr("i"),
            ),
        ),
    )
    assert execute({}, stmt).lookup("evens") == 5


def test_execute_accepts_core_statement() -> None:
    assert execute({}, core_assign("x", lit(3))).lookup("x") == 3


#------------------------------------------------------------------------------
# Options
#------------------------------------------------------------------------------

def test_max_steps_reports_non_termination() -> None:
    with pytest.raises(IMPError) as excinfo:
        execute({}, while_stmt(lit(1), skip()), EvalOptions(max_steps=100))
    assert excinfo.value.code is ErrorCodes.NON_TERMINATION
    assert excinfo.value.meta == {"max_steps": 100}


def test_max_steps_allows_terminating_programs() -> None:
    stmt = for_stmt(assign("i", lit(0)), op(var("i"), BinOp.LT, lit(3)), incr("i"), skip())
    result = execute({}, stmt, EvalOptions(max_steps=1_000))
    assert result.lookup("i") == 3


def test_trace_logs_steps(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="pyimp.evaluator"):
        execute({}, seq(assign("x", lit(1)), incr("x")), EvalOptions(trace=True))
    messages = [record.getMessage() for record in caplog.records]
    assert any("x := 1" in message for message in messages)
    assert any("x := 2" in message for message in messages)


def test_no_trace_logs_nothing(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="pyimp.evaluator"):
        execute({}, assign("x", lit(1)))
    assert caplog.records == []
