"""
IMP Operator Registry
Central registry for all domain operators

Provides Operator and OperatorRegistry classes for registering and looking up
operators with namespaced names (e.g., "core:plus").
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional
from dataclasses import dataclass

from pyimp.errors import IMPError


# Every operator in the language takes two integers
BINARY = 2


#==============================================================================
# Operator Class
#==============================================================================

@dataclass(frozen=True)
class Operator:
    """
    An operator definition with metadata and implementation.

    Attributes:
        ns: Namespace for the operator (e.g., "core")
        name: Operator name within the namespace
        arity: Number of integer arguments
        impl: Implementation function that takes ints and returns an int
    """
    ns: str
    name: str
    arity: int
    impl: Callable[..., int]

    @property
    def qualified_name(self) -> str:
        """Get the fully qualified operator name (ns:name)"""
        return f"{self.ns}:{self.name}"

    def check_arity(self, arg_count: int) -> bool:
        """Check if argument count matches parameter count"""
        return self.arity == arg_count

    def __str__(self) -> str:
        return f"Operator({self.qualified_name}/{self.arity})"


#==============================================================================
# Operator Registry
#==============================================================================

class OperatorRegistry:
    """
    Registry for operators with namespaced lookup.

    Operators are registered by qualified name (ns:name) and can be looked up
    for execution.
    """

    def __init__(self) -> None:
        """Create an empty operator registry"""
        self._operators: Dict[str, Operator] = {}

    #---------------------------------------------------------------------------
    # Registration
    #---------------------------------------------------------------------------

    def register(self, operator: Operator) -> "OperatorRegistry":
        """
        Register an operator in the registry.

        Args:
            operator: The operator to register

        Returns:
            self for chaining

        Raises:
            ValueError: If an operator with the same qualified name already exists
        """
        key = operator.qualified_name
        if key in self._operators:
            raise ValueError(f"Operator {key} already registered")
        self._operators[key] = operator
        return self

    def register_all(self, operators: List[Operator]) -> "OperatorRegistry":
        """Register multiple operators at once"""
        for operator in operators:
            self.register(operator)
        return self

    #---------------------------------------------------------------------------
    # Lookup
    #---------------------------------------------------------------------------

    def lookup(self, ns: str, name: str) -> Optional[Operator]:
        """
        Look up an operator by namespace and name.

        Returns:
            The operator if found, None otherwise
        """
        return self._operators.get(f"{ns}:{name}")

    def get(self, ns: str, name: str) -> Operator:
        """
        Get an operator, raising an error if not found.

        Raises:
            IMPError: UnknownOperator if the operator is not registered
        """
        operator = self.lookup(ns, name)
        if operator is None:
            raise IMPError.unknown_operator(ns, name)
        return operator

    #---------------------------------------------------------------------------
    # Execution
    #---------------------------------------------------------------------------

    def call(self, ns: str, name: str, *args: int) -> int:
        """
        Execute an operator with the given arguments.

        Args:
            ns: The operator namespace
            name: The operator name
            *args: Argument values

        Returns:
            The result value

        Raises:
            IMPError: If the operator is not registered or fails at runtime
            TypeError: If argument count doesn't match
        """
        operator = self.get(ns, name)

        if not operator.check_arity(len(args)):
            raise TypeError(
                f"Arity error: {ns}:{name} expects {operator.arity} "
                f"arguments, got {len(args)}"
            )

        return operator.impl(*args)

    #---------------------------------------------------------------------------
    # Iteration and Inspection
    #---------------------------------------------------------------------------

    def list_namespace(self, ns: str) -> List[str]:
        """List all operator names in a namespace"""
        prefix = f"{ns}:"
        return [
            key[len(prefix):]
            for key in self._operators
            if key.startswith(prefix)
        ]

    def operators(self) -> List[Operator]:
        """Get all registered operators"""
        return list(self._operators.values())

    def __len__(self) -> int:
        return len(self._operators)

    def __contains__(self, key: str) -> bool:
        return key in self._operators


#==============================================================================
# Operator Builder
#==============================================================================

class OperatorBuilder:
    """
    Builder pattern for constructing operators with a fluent interface.

    Example:
        op = (OperatorBuilder("core", "plus")
              .impl(lambda a, b: a + b)
              .build())
    """

    def __init__(self, ns: str, name: str) -> None:
        self._ns = ns
        self._name = name
        self._arity = BINARY
        self._impl: Optional[Callable[..., int]] = None

    def impl(self, fn: Callable[..., int]) -> "OperatorBuilder":
        """Set the implementation function"""
        self._impl = fn
        return self

    def build(self) -> Operator:
        """
        Build the operator.

        Raises:
            ValueError: If the implementation is missing
        """
        if self._impl is None:
            raise ValueError(f"Operator {self._ns}:{self._name} missing implementation")

        return Operator(
            ns=self._ns,
            name=self._name,
            arity=self._arity,
            impl=self._impl,
        )


#==============================================================================
# Convenience Functions
#==============================================================================

def empty_registry() -> OperatorRegistry:
    """Create an empty operator registry"""
    return OperatorRegistry()


def define_operator(ns: str, name: str) -> OperatorBuilder:
    """Start building an operator definition"""
    return OperatorBuilder(ns, name)
