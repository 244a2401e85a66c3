"""
IMP Python Implementation

An interpreter for a small imperative language: integer expressions,
assignment, increment, conditionals, while/for loops and sequencing.
Programs are desugared into a minimal core language and executed against
an immutable environment.
"""

from __future__ import annotations

#==============================================================================
# Types
#==============================================================================

from pyimp.types import (
    BinOp,
    Expr,
    Statement,
    CoreStatement,
    # Expression types
    VarExpr,
    LitExpr,
    OpExpr,
    # Statement types
    AssignStmt,
    IncrStmt,
    IfStmt,
    WhileStmt,
    ForStmt,
    SeqStmt,
    SkipStmt,
    # Core statement types
    CoreAssign,
    CoreIf,
    CoreWhile,
    CoreSeq,
    CoreSkip,
)

#==============================================================================
# Constructors and Type Guards
#==============================================================================

from pyimp.types import (
    var,
    lit,
    op,
    assign,
    incr,
    if_stmt,
    while_stmt,
    for_stmt,
    seq,
    skip,
    core_assign,
    core_if,
    core_while,
    core_seq,
    core_skip,
    is_expr,
    is_statement,
    is_core_statement,
)

#==============================================================================
# Environment
#==============================================================================

from pyimp.env import (
    ValueEnv,
    empty_value_env,
)

#==============================================================================
# Errors
#==============================================================================

from pyimp.errors import (
    ErrorCodes,
    IMPError,
    ValidationError,
    ValidationResult,
)

#==============================================================================
# Desugaring and Evaluation
#==============================================================================

from pyimp.desugar import desugar

from pyimp.evaluator import (
    Evaluator,
    EvalOptions,
    create_evaluator,
    evaluate_expr,
    execute,
    run,
)

#==============================================================================
# Domains
#==============================================================================

from pyimp.domains.registry import (
    Operator,
    OperatorRegistry,
    define_operator,
    empty_registry,
)

from pyimp.domains.core import create_core_registry

#==============================================================================
# Validation, Rendering and Programs
#==============================================================================

from pyimp.validator import (
    validate_expression,
    validate_statement,
    validate_core_statement,
)

from pyimp.pretty import (
    format_env,
    format_expr,
    format_statement,
)

from pyimp.programs import (
    PROGRAMS,
    Program,
    factorial,
    fibonacci,
    slist,
    square_root,
)

__version__ = "0.1.0"

__all__ = [
    # Types
    "BinOp", "Expr", "Statement", "CoreStatement",
    "VarExpr", "LitExpr", "OpExpr",
    "AssignStmt", "IncrStmt", "IfStmt", "WhileStmt", "ForStmt", "SeqStmt", "SkipStmt",
    "CoreAssign", "CoreIf", "CoreWhile", "CoreSeq", "CoreSkip",
    # Constructors and guards
    "var", "lit", "op",
    "assign", "incr", "if_stmt", "while_stmt", "for_stmt", "seq", "skip",
    "core_assign", "core_if", "core_while", "core_seq", "core_skip",
    "is_expr", "is_statement", "is_core_statement",
    # Environment
    "ValueEnv", "empty_value_env",
    # Errors
    "ErrorCodes", "IMPError", "ValidationError", "ValidationResult",
    # Evaluation
    "desugar", "Evaluator", "EvalOptions", "create_evaluator",
    "evaluate_expr", "execute", "run",
    # Domains
    "Operator", "OperatorRegistry", "define_operator", "empty_registry",
    "create_core_registry",
    # Validation, rendering, programs
    "validate_expression", "validate_statement", "validate_core_statement",
    "format_env", "format_expr", "format_statement",
    "PROGRAMS", "Program", "factorial", "fibonacci", "slist", "square_root",
]
