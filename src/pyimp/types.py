"""
IMP Type Definitions for Python
Implements the Expression, Statement and Core Statement AST domains

This module provides frozen dataclasses for immutable AST representations,
using Union types with Literal 'kind' fields for pattern matching.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import (
    Any,
    List,
    Literal,
    TypeAlias,
    Union,
)
from enum import Enum


#==============================================================================
# Binary Operators
#==============================================================================

class BinOp(str, Enum):
    """Binary (2-input) operators"""
    PLUS = "plus"
    MINUS = "minus"
    TIMES = "times"
    DIVIDE = "divide"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"
    EQL = "eql"


#==============================================================================
# Expression AST (e - integer expressions)
#==============================================================================

@dataclass(frozen=True)
class VarExpr:
    """Variable reference expression"""
    kind: Literal["var"]
    name: str


@dataclass(frozen=True)
class LitExpr:
    """Integer literal expression"""
    kind: Literal["lit"]
    value: int


@dataclass(frozen=True)
class OpExpr:
    """Binary operation expression"""
    kind: Literal["op"]
    left: Expr
    op: BinOp
    right: Expr


Expr: TypeAlias = Union[VarExpr, LitExpr, OpExpr]


#==============================================================================
# Statement AST (s - full surface language)
#==============================================================================

@dataclass(frozen=True)
class AssignStmt:
    """Assignment statement: x := e"""
    kind: Literal["assign"]
    name: str
    expr: Expr


@dataclass(frozen=True)
class IncrStmt:
    """Increment statement: x++"""
    kind: Literal["incr"]
    name: str


@dataclass(frozen=True)
class IfStmt:
    """Conditional statement"""
    kind: Literal["if"]
    cond: Expr
    then_branch: Statement
    else_branch: Statement


@dataclass(frozen=True)
class WhileStmt:
    """While loop statement"""
    kind: Literal["while"]
    cond: Expr
    body: Statement


@dataclass(frozen=True)
class ForStmt:
    """C-style for loop with init, cond, update, and body"""
    kind: Literal["for"]
    init: Statement
    cond: Expr
    update: Statement
    body: Statement


@dataclass(frozen=True)
class SeqStmt:
    """Sequencing statement: first; then"""
    kind: Literal["seq"]
    first: Statement
    then: Statement


@dataclass(frozen=True)
class SkipStmt:
    """No-op statement"""
    kind: Literal["skip"]


Statement: TypeAlias = Union[
    AssignStmt,
    IncrStmt,
    IfStmt,
    WhileStmt,
    ForStmt,
    SeqStmt,
    SkipStmt,
]


#==============================================================================
# Core Statement AST (reduced language produced by desugaring)
#==============================================================================

@dataclass(frozen=True)
class CoreAssign:
    """Core assignment"""
    kind: Literal["assign"]
    name: str
    expr: Expr


@dataclass(frozen=True)
class CoreIf:
    """Core conditional"""
    kind: Literal["if"]
    cond: Expr
    then_branch: CoreStatement
    else_branch: CoreStatement


@dataclass(frozen=True)
class CoreWhile:
    """Core while loop"""
    kind: Literal["while"]
    cond: Expr
    body: CoreStatement


@dataclass(frozen=True)
class CoreSeq:
    """Core sequencing"""
    kind: Literal["seq"]
    first: CoreStatement
    then: CoreStatement


@dataclass(frozen=True)
class CoreSkip:
    """Core no-op"""
    kind: Literal["skip"]


CoreStatement: TypeAlias = Union[
    CoreAssign,
    CoreIf,
    CoreWhile,
    CoreSeq,
    CoreSkip,
]

EXPR_CLASSES = (VarExpr, LitExpr, OpExpr)
STATEMENT_CLASSES = (AssignStmt, IncrStmt, IfStmt, WhileStmt, ForStmt, SeqStmt, SkipStmt)
CORE_STATEMENT_CLASSES = (CoreAssign, CoreIf, CoreWhile, CoreSeq, CoreSkip)


#==============================================================================
# Type Guards and Utility Functions
#==============================================================================

def is_expr(node: Any) -> bool:
    """Check if node is an expression"""
    return isinstance(node, EXPR_CLASSES)


def is_statement(node: Any) -> bool:
    """Check if node belongs to the full statement language"""
    return isinstance(node, STATEMENT_CLASSES)


def is_core_statement(node: Any) -> bool:
    """Check if node belongs to the core statement language"""
    return isinstance(node, CORE_STATEMENT_CLASSES)


def iter_core_nodes(stmt: CoreStatement) -> List[CoreStatement]:
    """Collect every core statement node in pre-order"""
    nodes: List[CoreStatement] = []
    stack: List[CoreStatement] = [stmt]
    while stack:
        node = stack.pop()
        nodes.append(node)
        if isinstance(node, CoreSeq):
            stack.append(node.then)
            stack.append(node.first)
        elif isinstance(node, CoreIf):
            stack.append(node.else_branch)
            stack.append(node.then_branch)
        elif isinstance(node, CoreWhile):
            stack.append(node.body)
    return nodes


#==============================================================================
# Expression Constructors
#==============================================================================

def var(name: str) -> VarExpr:
    return VarExpr(kind="var", name=name)


def lit(value: int) -> LitExpr:
    return LitExpr(kind="lit", value=value)


def op(left: Expr, bop: BinOp, right: Expr) -> OpExpr:
    return OpExpr(kind="op", left=left, op=bop, right=right)


#==============================================================================
# Statement Constructors
#==============================================================================

def assign(name: str, expr: Expr) -> AssignStmt:
    return AssignStmt(kind="assign", name=name, expr=expr)


def incr(name: str) -> IncrStmt:
    return IncrStmt(kind="incr", name=name)


def if_stmt(cond: Expr, then_branch: Statement, else_branch: Statement) -> IfStmt:
    return IfStmt(kind="if", cond=cond, then_branch=then_branch, else_branch=else_branch)


def while_stmt(cond: Expr, body: Statement) -> WhileStmt:
    return WhileStmt(kind="while", cond=cond, body=body)


def for_stmt(init: Statement, cond: Expr, update: Statement, body: Statement) -> ForStmt:
    return ForStmt(kind="for", init=init, cond=cond, update=update, body=body)


def seq(first: Statement, then: Statement) -> SeqStmt:
    return SeqStmt(kind="seq", first=first, then=then)


def skip() -> SkipStmt:
    return SkipStmt(kind="skip")


#==============================================================================
# Core Statement Constructors
#==============================================================================

def core_assign(name: str, expr: Expr) -> CoreAssign:
    return CoreAssign(kind="assign", name=name, expr=expr)


def core_if(cond: Expr, then_branch: CoreStatement, else_branch: CoreStatement) -> CoreIf:
    return CoreIf(kind="if", cond=cond, then_branch=then_branch, else_branch=else_branch)


def core_while(cond: Expr, body: CoreStatement) -> CoreWhile:
    return CoreWhile(kind="while", cond=cond, body=body)


def core_seq(first: CoreStatement, then: CoreStatement) -> CoreSeq:
    return CoreSeq(kind="seq", first=first, then=then)


def core_skip() -> CoreSkip:
    return CoreSkip(kind="skip")
