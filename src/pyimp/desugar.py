"""
IMP Desugarer
Rewrites the full statement language into the core statement language

    desugar(x := e)                 = x := e
    desugar(x++)                    = x := x + 1
    desugar(if c then s1 else s2)   = if c then desugar(s1) else desugar(s2)
    desugar(while c do s)           = while c do desugar(s)
    desugar(for (i; c; u) s)        = desugar(i); while c do (desugar(s); desugar(u))
    desugar(s1; s2)                 = desugar(s1); desugar(s2)
    desugar(skip)                   = skip

Core statements map to equal core statements, which makes desugar
idempotent.
"""

from __future__ import annotations

from typing import List, Union

from pyimp.errors import exhaustive
from pyimp.types import (
    BinOp,
    CoreSeq,
    CoreStatement,
    SeqStmt,
    Statement,
    core_assign,
    core_if,
    core_seq,
    core_skip,
    core_while,
    lit,
    op,
    var,
)


def desugar(stmt: Union[Statement, CoreStatement]) -> CoreStatement:
    """
    Reduce a statement to the core language.

    Full and core nodes share their kind tags, so a tree mixing the two
    desugars the same way as its all-full counterpart.

    Args:
        stmt: Statement of the full language (or an already-core statement)

    Returns:
        Equivalent core statement
    """
    kind = getattr(stmt, "kind", None)

    if kind == "assign":
        return core_assign(stmt.name, stmt.expr)
    elif kind == "incr":
        return core_assign(stmt.name, op(var(stmt.name), BinOp.PLUS, lit(1)))
    elif kind == "if":
        return core_if(stmt.cond, desugar(stmt.then_branch), desugar(stmt.else_branch))
    elif kind == "while":
        return core_while(stmt.cond, desugar(stmt.body))
    elif kind == "for":
        # init once, then: test, body, update
        loop_body = core_seq(desugar(stmt.body), desugar(stmt.update))
        return core_seq(desugar(stmt.init), core_while(stmt.cond, loop_body))
    elif kind == "seq":
        return _desugar_seq(stmt)
    elif kind == "skip":
        return core_skip()
    else:
        exhaustive(stmt)


def _desugar_seq(stmt: Union[SeqStmt, CoreSeq]) -> CoreStatement:
    # Walk the right spine iteratively; slist chains nest to the right.
    heads: List[CoreStatement] = []
    node = stmt
    while getattr(node, "kind", None) == "seq":
        heads.append(desugar(node.first))
        node = node.then
    result = desugar(node)
    for head in reversed(heads):
        result = core_seq(head, result)
    return result
