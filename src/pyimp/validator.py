# IMP AST Validator
# Manual structural validation for programmatically constructed programs

from __future__ import annotations

import re
from typing import Any

from pyimp.errors import (
    ValidationError,
    invalid_result,
    valid_result,
    ValidationResult,
)
from pyimp.types import (
    BinOp,
    VarExpr,
    LitExpr,
    OpExpr,
    AssignStmt,
    IncrStmt,
    IfStmt,
    WhileStmt,
    ForStmt,
    SeqStmt,
    SkipStmt,
    CoreAssign,
    CoreIf,
    CoreWhile,
    CoreSeq,
    CoreSkip,
)


#==============================================================================
# Validation Patterns
#==============================================================================

NAME_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


#==============================================================================
# Validation State
#==============================================================================

class ValidationState:
    """State tracking during validation"""

    def __init__(self) -> None:
        self.errors: list[ValidationError] = []
        self.path: list[str] = []

    def push_path(self, segment: str) -> None:
        """Push a path segment onto the validation path"""
        self.path.append(segment)

    def pop_path(self) -> None:
        """Pop the last path segment from the validation path"""
        self.path.pop()

    def current_path(self) -> str:
        """Get the current validation path as a dotted string rooted at $"""
        return ".".join(["$", *self.path])

    def add_error(self, message: str, value: Any | None = None) -> None:
        """Add a validation error to the state"""
        self.errors.append(ValidationError(
            path=self.current_path(),
            message=message,
            value=value,
        ))

    def child(self, segment: str, validate, value: Any) -> bool:
        """Validate a child node under the given path segment"""
        self.push_path(segment)
        try:
            return validate(self, value)
        finally:
            self.pop_path()


#==============================================================================
# Primitive Validators
#==============================================================================

def validate_name(value: Any) -> bool:
    """Check if value is a valid variable name"""
    return isinstance(value, str) and NAME_PATTERN.match(value) is not None


def validate_int(value: Any) -> bool:
    """Check if value is an integer (bools are rejected)"""
    return isinstance(value, int) and not isinstance(value, bool)


#==============================================================================
# Expression Validation
#==============================================================================

def _check_name(state: ValidationState, value: Any) -> bool:
    if not validate_name(value):
        state.add_error("Variable name must be an identifier", value)
        return False
    return True


def _validate_expr(state: ValidationState, value: Any) -> bool:
    if isinstance(value, VarExpr):
        return state.child("name", _check_name, value.name)

    elif isinstance(value, LitExpr):
        if not validate_int(value.value):
            state.push_path("value")
            state.add_error("Literal must be an integer", value.value)
            state.pop_path()
            return False
        return True

    elif isinstance(value, OpExpr):
        valid = True
        if not isinstance(value.op, BinOp):
            state.push_path("op")
            state.add_error("Unknown operator", value.op)
            state.pop_path()
            valid = False
        left_valid = state.child("left", _validate_expr, value.left)
        right_valid = state.child("right", _validate_expr, value.right)
        return valid and left_valid and right_valid

    state.add_error("Expected an expression", value)
    return False


#==============================================================================
# Statement Validation
#==============================================================================

def _validate_stmt(state: ValidationState, value: Any) -> bool:
    if isinstance(value, AssignStmt):
        name_valid = state.child("name", _check_name, value.name)
        return state.child("expr", _validate_expr, value.expr) and name_valid

    elif isinstance(value, IncrStmt):
        return state.child("name", _check_name, value.name)

    elif isinstance(value, IfStmt):
        results = [
            state.child("cond", _validate_expr, value.cond),
            state.child("then_branch", _validate_stmt, value.then_branch),
            state.child("else_branch", _validate_stmt, value.else_branch),
        ]
        return all(results)

    elif isinstance(value, WhileStmt):
        results = [
            state.child("cond", _validate_expr, value.cond),
            state.child("body", _validate_stmt, value.body),
        ]
        return all(results)

    elif isinstance(value, ForStmt):
        results = [
            state.child("init", _validate_stmt, value.init),
            state.child("cond", _validate_expr, value.cond),
            state.child("update", _validate_stmt, value.update),
            state.child("body", _validate_stmt, value.body),
        ]
        return all(results)

    elif isinstance(value, SeqStmt):
        results = [
            state.child("first", _validate_stmt, value.first),
            state.child("then", _validate_stmt, value.then),
        ]
        return all(results)

    elif isinstance(value, SkipStmt):
        return True

    state.add_error("Expected a statement", value)
    return False


def _validate_core_stmt(state: ValidationState, value: Any) -> bool:
    if isinstance(value, CoreAssign):
        name_valid = state.child("name", _check_name, value.name)
        return state.child("expr", _validate_expr, value.expr) and name_valid

    elif isinstance(value, CoreIf):
        results = [
            state.child("cond", _validate_expr, value.cond),
            state.child("then_branch", _validate_core_stmt, value.then_branch),
            state.child("else_branch", _validate_core_stmt, value.else_branch),
        ]
        return all(results)

    elif isinstance(value, CoreWhile):
        results = [
            state.child("cond", _validate_expr, value.cond),
            state.child("body", _validate_core_stmt, value.body),
        ]
        return all(results)

    elif isinstance(value, CoreSeq):
        results = [
            state.child("first", _validate_core_stmt, value.first),
            state.child("then", _validate_core_stmt, value.then),
        ]
        return all(results)

    elif isinstance(value, CoreSkip):
        return True

    state.add_error("Expected a core statement", value)
    return False


#==============================================================================
# Public API
#==============================================================================

def _finish(state: ValidationState, value: Any) -> ValidationResult:
    if state.errors:
        return invalid_result(state.errors)
    return valid_result(value)


def validate_expression(expr: Any) -> ValidationResult:
    """Validate an expression tree"""
    state = ValidationState()
    _validate_expr(state, expr)
    return _finish(state, expr)


def validate_statement(stmt: Any) -> ValidationResult:
    """Validate a statement tree of the full language"""
    state = ValidationState()
    _validate_stmt(state, stmt)
    return _finish(state, stmt)


def validate_core_statement(stmt: Any) -> ValidationResult:
    """Validate a core statement tree"""
    state = ValidationState()
    _validate_core_stmt(state, stmt)
    return _finish(state, stmt)
