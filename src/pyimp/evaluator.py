"""
IMP Evaluator
Implements expression evaluation σ |- e ⇓ n and statement execution ⟨s, σ⟩ ⇓ σ'

This module provides big-step evaluation of integer expressions and
execution of core statements against an immutable environment. Full
statements are desugared before execution.
"""

from __future__ import annotations

import logging
from typing import Optional, Union
from dataclasses import dataclass

from pyimp.types import (
    CoreStatement,
    Expr,
    Statement,
    CoreAssign,
    CoreIf,
    CoreWhile,
    CoreSeq,
)
from pyimp.errors import IMPError, exhaustive
from pyimp.env import EnvLike, ValueEnv, as_value_env
from pyimp.desugar import desugar
from pyimp.domains.core import CORE_NS, create_core_registry
from pyimp.domains.registry import OperatorRegistry

logger = logging.getLogger(__name__)


#==============================================================================
# Evaluation Options
#==============================================================================

@dataclass
class EvalOptions:
    """
    Options for statement execution.

    max_steps is an opt-in diagnostic bound; None leaves loops unbounded.
    """
    max_steps: Optional[int] = None
    trace: bool = False


#==============================================================================
# Evaluation Context
#==============================================================================

@dataclass
class EvalContext:
    """Internal execution state for tracking steps and configuration"""
    steps: int = 0
    max_steps: Optional[int] = None
    trace: bool = False


#==============================================================================
# Evaluator Class
#==============================================================================

class Evaluator:
    """
    Big-step evaluator for IMP expressions and core statements.

    Expression rules:
    - E-Var: σ |- var(x) ⇓ σ(x)            (0 if x is unbound)
    - E-Lit: σ |- lit(n) ⇓ n
    - E-Op:  σ |- e1 ⇓ n1, σ |- e2 ⇓ n2 ⇒ σ |- op(e1, bop, e2) ⇓ n1 bop n2

    Statement rules:
    - S-Assign: ⟨x := e, σ⟩ ⇓ σ[x ↦ n]       where σ |- e ⇓ n
    - S-If:     ⟨if c s1 s2, σ⟩ ⇓ ⟨s1, σ⟩ if c ≠ 0, else ⟨s2, σ⟩
    - S-While:  ⟨while c s, σ⟩ ⇓ σ if c = 0, else ⟨while c s, σ'⟩ where ⟨s, σ⟩ ⇓ σ'
    - S-Seq:    ⟨s1; s2, σ⟩ ⇓ ⟨s2, σ'⟩ where ⟨s1, σ⟩ ⇓ σ'
    - S-Skip:   ⟨skip, σ⟩ ⇓ σ
    """

    def __init__(self, registry: Optional[OperatorRegistry] = None):
        """
        Initialize the evaluator.

        Args:
            registry: Operator registry (defaults to the core registry)
        """
        self._registry = registry if registry is not None else create_core_registry()

    @property
    def registry(self) -> OperatorRegistry:
        """Get the operator registry"""
        return self._registry

    #---------------------------------------------------------------------------
    # Public Evaluation API
    #---------------------------------------------------------------------------

    def evaluate(self, env: EnvLike, expr: Expr) -> int:
        """
        Evaluate an expression: σ |- e ⇓ n

        Args:
            env: Value environment for variable lookups
            expr: Expression to evaluate

        Returns:
            Integer result

        Raises:
            IMPError: DivideByZero if a division has a zero divisor
        """
        return self._eval_expr(as_value_env(env), expr)

    def run(
        self,
        env: EnvLike,
        stmt: CoreStatement,
        options: Optional[EvalOptions] = None,
    ) -> ValueEnv:
        """
        Execute a core statement: ⟨s, σ⟩ ⇓ σ'

        Args:
            env: Initial environment (left unchanged)
            stmt: Core statement to execute
            options: Evaluation options (max_steps, trace)

        Returns:
            Final environment

        Raises:
            IMPError: DivideByZero, or NonTermination when max_steps is exceeded
        """
        opts = options or EvalOptions()
        state = EvalContext(
            steps=0,
            max_steps=opts.max_steps,
            trace=opts.trace,
        )
        result = self._exec(as_value_env(env), stmt, state)
        if state.trace:
            logger.debug("finished after %d steps: %r", state.steps, result)
        return result

    def execute(
        self,
        env: EnvLike,
        stmt: Statement,
        options: Optional[EvalOptions] = None,
    ) -> ValueEnv:
        """
        Desugar a full statement and execute it.

        Args:
            env: Initial environment (left unchanged)
            stmt: Statement of the full language
            options: Evaluation options (max_steps, trace)

        Returns:
            Final environment
        """
        return self.run(env, desugar(stmt), options)

    #---------------------------------------------------------------------------
    # Expression Evaluation
    #---------------------------------------------------------------------------

    def _eval_expr(self, env: ValueEnv, expr: Expr) -> int:
        kind = getattr(expr, "kind", None)

        if kind == "var":
            return env.lookup(expr.name)
        elif kind == "lit":
            return expr.value
        elif kind == "op":
            left = self._eval_expr(env, expr.left)
            right = self._eval_expr(env, expr.right)
            return self._registry.call(CORE_NS, expr.op.value, left, right)
        else:
            exhaustive(expr)

    #---------------------------------------------------------------------------
    # Statement Execution (Dispatch)
    #---------------------------------------------------------------------------

    def _exec(self, env: ValueEnv, stmt: CoreStatement, state: EvalContext) -> ValueEnv:
        """
        Main statement dispatch based on statement kind.

        Args:
            env: Current environment
            stmt: Core statement
            state: Evaluation context

        Returns:
            Environment after the statement
        """
        self._check_steps(state)

        kind = getattr(stmt, "kind", None)

        if kind == "assign":
            return self._exec_assign(env, stmt, state)
        elif kind == "if":
            return self._exec_if(env, stmt, state)
        elif kind == "while":
            return self._exec_while(env, stmt, state)
        elif kind == "seq":
            return self._exec_seq(env, stmt, state)
        elif kind == "skip":
            return env
        else:
            exhaustive(stmt)

    def _exec_assign(self, env: ValueEnv, stmt: CoreAssign, state: EvalContext) -> ValueEnv:
        value = self._eval_expr(env, stmt.expr)
        if state.trace:
            logger.debug("step %d: %s := %d", state.steps, stmt.name, value)
        return env.extend(stmt.name, value)

    def _exec_if(self, env: ValueEnv, stmt: CoreIf, state: EvalContext) -> ValueEnv:
        cond = self._eval_expr(env, stmt.cond)
        if state.trace:
            logger.debug("step %d: if -> %s", state.steps, "then" if cond != 0 else "else")
        if cond != 0:
            return self._exec(env, stmt.then_branch, state)
        return self._exec(env, stmt.else_branch, state)

    def _exec_while(self, env: ValueEnv, stmt: CoreWhile, state: EvalContext) -> ValueEnv:
        # Re-test after every body run; each test after the first counts as a step.
        iterations = 0
        while self._eval_expr(env, stmt.cond) != 0:
            env = self._exec(env, stmt.body, state)
            iterations += 1
            self._check_steps(state)
        if state.trace:
            logger.debug("step %d: while exited after %d iterations", state.steps, iterations)
        return env

    def _exec_seq(self, env: ValueEnv, stmt: CoreSeq, state: EvalContext) -> ValueEnv:
        # Right-nested chains run as a loop; each nested seq node still counts a step.
        node: CoreStatement = stmt
        while node.kind == "seq":
            env = self._exec(env, node.first, state)
            node = node.then
            if node.kind == "seq":
                self._check_steps(state)
        return self._exec(env, node, state)

    #---------------------------------------------------------------------------
    # Utility Functions
    #---------------------------------------------------------------------------

    def _check_steps(self, state: EvalContext) -> None:
        """
        Count one step and enforce the optional step limit.

        Raises:
            IMPError: NonTermination if max steps exceeded
        """
        state.steps += 1
        if state.max_steps is not None and state.steps > state.max_steps:
            raise IMPError.non_termination(state.max_steps)


#==============================================================================
# Convenience Functions
#==============================================================================

_default_evaluator: Optional[Evaluator] = None


def create_evaluator(registry: Optional[OperatorRegistry] = None) -> Evaluator:
    """
    Create an evaluator instance.

    Args:
        registry: Operator registry (optional, defaults to the core registry)

    Returns:
        New Evaluator instance
    """
    return Evaluator(registry)


def _get_default_evaluator() -> Evaluator:
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = Evaluator()
    return _default_evaluator


def evaluate_expr(env: EnvLike, expr: Expr) -> int:
    """Evaluate a single expression with the core operators"""
    return _get_default_evaluator().evaluate(env, expr)


def run(
    env: EnvLike,
    stmt: CoreStatement,
    options: Optional[EvalOptions] = None,
) -> ValueEnv:
    """Execute a core statement with the core operators"""
    return _get_default_evaluator().run(env, stmt, options)


def execute(
    env: EnvLike,
    stmt: Union[Statement, CoreStatement],
    options: Optional[EvalOptions] = None,
) -> ValueEnv:
    """Desugar and execute a statement: execute(σ, s) = run(σ, desugar(s))"""
    return _get_default_evaluator().execute(env, stmt, options)
