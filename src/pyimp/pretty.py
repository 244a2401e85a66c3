"""
IMP Pretty Printer
Renders ASTs in the C-like surface syntax used to document programs:

    for (Out := 1; In > 0; In := In - 1) {
      Out := In * Out
    }

Full and core statements share their kind tags, so both render through the
same functions.
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from pyimp.env import EnvLike, as_value_env
from pyimp.errors import exhaustive
from pyimp.types import BinOp, CoreStatement, Expr, Statement


INDENT = "  "

OPERATOR_SYMBOLS: Dict[BinOp, str] = {
    BinOp.PLUS: "+",
    BinOp.MINUS: "-",
    BinOp.TIMES: "*",
    BinOp.DIVIDE: "/",
    BinOp.GT: ">",
    BinOp.GE: ">=",
    BinOp.LT: "<",
    BinOp.LE: "<=",
    BinOp.EQL: "==",
}

# Higher binds tighter
PRECEDENCE: Dict[BinOp, int] = {
    BinOp.TIMES: 3,
    BinOp.DIVIDE: 3,
    BinOp.PLUS: 2,
    BinOp.MINUS: 2,
    BinOp.GT: 1,
    BinOp.GE: 1,
    BinOp.LT: 1,
    BinOp.LE: 1,
    BinOp.EQL: 1,
}

AnyStatement = Union[Statement, CoreStatement]


#==============================================================================
# Expressions
#==============================================================================

def format_expr(expr: Expr) -> str:
    """Render an expression with the minimal parentheses"""
    kind = expr.kind

    if kind == "var":
        return expr.name
    elif kind == "lit":
        return str(expr.value)
    elif kind == "op":
        prec = PRECEDENCE[expr.op]
        left = _operand(expr.left, prec, right_side=False)
        right = _operand(expr.right, prec, right_side=True)
        return f"{left} {OPERATOR_SYMBOLS[expr.op]} {right}"
    else:
        exhaustive(expr)


def _operand(expr: Expr, parent_prec: int, right_side: bool) -> str:
    text = format_expr(expr)
    if expr.kind != "op":
        return text
    prec = PRECEDENCE[expr.op]
    # left-associative arithmetic, non-associative comparisons
    if prec < parent_prec or (prec == parent_prec and (right_side or prec == 1)):
        return f"({text})"
    return text


#==============================================================================
# Statements
#==============================================================================

def format_statement(stmt: AnyStatement) -> str:
    """Render a full or core statement as multi-line source"""
    return "\n".join(_lines(stmt))


def _flatten_seq(stmt: AnyStatement) -> List[AnyStatement]:
    items: List[AnyStatement] = []
    stack: List[AnyStatement] = [stmt]
    while stack:
        node = stack.pop()
        if node.kind == "seq":
            stack.append(node.then)
            stack.append(node.first)
        else:
            items.append(node)
    return items


def _block(stmt: AnyStatement) -> List[str]:
    return [INDENT + line for line in _lines(stmt)]


def _lines(stmt: AnyStatement) -> List[str]:
    kind = stmt.kind

    if kind == "assign":
        return [f"{stmt.name} := {format_expr(stmt.expr)}"]
    elif kind == "incr":
        return [f"{stmt.name}++"]
    elif kind == "skip":
        return ["skip"]
    elif kind == "seq":
        lines: List[str] = []
        items = _flatten_seq(stmt)
        for index, item in enumerate(items):
            item_lines = _lines(item)
            if index < len(items) - 1:
                item_lines[-1] += ";"
            lines.extend(item_lines)
        return lines
    elif kind == "if":
        return [
            f"if ({format_expr(stmt.cond)}) {{",
            *_block(stmt.then_branch),
            "} else {",
            *_block(stmt.else_branch),
            "}",
        ]
    elif kind == "while":
        return [
            f"while ({format_expr(stmt.cond)}) {{",
            *_block(stmt.body),
            "}",
        ]
    elif kind == "for":
        header = f"for ({_inline(stmt.init)}; {format_expr(stmt.cond)}; {_inline(stmt.update)}) {{"
        return [header, *_block(stmt.body), "}"]
    else:
        exhaustive(stmt)


def _inline(stmt: AnyStatement) -> str:
    """Render loop-control statements on a single line"""
    return ", ".join(" ".join(line.strip() for line in _lines(item))
                     for item in _flatten_seq(stmt))


#==============================================================================
# Environments
#==============================================================================

def format_env(env: EnvLike) -> str:
    """Render explicit bindings as {A: 10, B: 3} with names sorted"""
    bindings = as_value_env(env).bindings
    body = ", ".join(f"{name}: {bindings[name]}" for name in sorted(bindings))
    return f"{{{body}}}"


def format_node(node: Any) -> str:
    """Render any AST node"""
    if getattr(node, "kind", None) in ("var", "lit", "op"):
        return format_expr(node)
    return format_statement(node)
