"""
IMP Reference Programs
Fixed ASTs exercising for loops, while loops and nested conditionals
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Dict, Sequence

from pyimp.types import (
    BinOp,
    Statement,
    assign,
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


def slist(statements: Sequence[Statement]) -> Statement:
    """Fold statements into right-nested sequences; an empty list is skip"""
    if not statements:
        return skip()
    return reduce(lambda rest, stmt: seq(stmt, rest), reversed(statements[:-1]), statements[-1])


#==============================================================================
# Programs
#==============================================================================

# for (Out := 1; In > 0; In := In - 1) {
#   Out := In * Out
# }
factorial: Statement = for_stmt(
    assign("Out", lit(1)),
    op(var("In"), BinOp.GT, lit(0)),
    assign("In", op(var("In"), BinOp.MINUS, lit(1))),
    assign("Out", op(var("In"), BinOp.TIMES, var("Out"))),
)

# B := 0;
# while (A >= B * B) {
#   B++
# };
# B := B - 1
square_root: Statement = slist([
    assign("B", lit(0)),
    while_stmt(
        op(var("A"), BinOp.GE, op(var("B"), BinOp.TIMES, var("B"))),
        incr("B"),
    ),
    assign("B", op(var("B"), BinOp.MINUS, lit(1))),
])

# F0 := 1; F1 := 1;
# if (In == 0) { Out := F0 } else {
#   if (In == 1) { Out := F1 } else {
#     for (C := 2; C <= In; C++) { T := F0 + F1; F0 := F1; F1 := T; Out := T }
#   }
# }
fibonacci: Statement = slist([
    assign("F0", lit(1)),
    assign("F1", lit(1)),
    if_stmt(
        op(var("In"), BinOp.EQL, lit(0)),
        assign("Out", var("F0")),
        if_stmt(
            op(var("In"), BinOp.EQL, lit(1)),
            assign("Out", var("F1")),
            for_stmt(
                assign("C", lit(2)),
                op(var("C"), BinOp.LE, var("In")),
                incr("C"),
                slist([
                    assign("T", op(var("F0"), BinOp.PLUS, var("F1"))),
                    assign("F0", var("F1")),
                    assign("F1", var("T")),
                    assign("Out", var("T")),
                ]),
            ),
        ),
    ),
])


#==============================================================================
# Program Catalogue
#==============================================================================

@dataclass(frozen=True)
class Program:
    """A named program with its conventional input and output variables"""
    name: str
    statement: Statement
    input_var: str
    output_var: str
    description: str


PROGRAMS: Dict[str, Program] = {
    "factorial": Program("factorial", factorial, "In", "Out", "Out := In!"),
    "square_root": Program("square_root", square_root, "A", "B", "B := floor(sqrt(A))"),
    "fibonacci": Program("fibonacci", fibonacci, "In", "Out", "Out := F(In) with F(0) = F(1) = 1"),
}


def get_program(name: str) -> Program:
    """
    Look up a bundled program by name.

    Raises:
        KeyError: If no program has that name
    """
    return PROGRAMS[name]
