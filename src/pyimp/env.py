"""
IMP Environment
Value environment for statement execution

This module provides an immutable environment class using the dict.copy()
pattern. Every variable is implicitly bound: names that were never assigned
read as 0.
"""

from __future__ import annotations
from typing import Dict, Iterator, Mapping, Optional, Union


#==============================================================================
# Value Environment (σ)
# Maps variable names to their current integer values
#==============================================================================

DEFAULT_VALUE = 0


class ValueEnv:
    """
    Immutable value environment.

    Uses dict.copy() pattern to ensure immutability - all operations
    return new ValueEnv instances without modifying the original.
    """

    def __init__(self, bindings: Optional[Mapping[str, int]] = None):
        """
        Create a new value environment.

        Args:
            bindings: Initial value bindings (optional)
        """
        self._bindings: Dict[str, int] = dict(bindings) if bindings else {}

    @property
    def bindings(self) -> Dict[str, int]:
        """Return a copy of the bindings to prevent external mutation."""
        return dict(self._bindings)

    def extend(self, name: str, value: int) -> "ValueEnv":
        """
        Extend the environment with a new binding.
        Returns a new ValueEnv without modifying the original.

        Args:
            name: Variable name
            value: Value to bind

        Returns:
            New ValueEnv with the additional binding
        """
        new_bindings = self._bindings.copy()
        new_bindings[name] = value
        return ValueEnv(new_bindings)

    def extend_many(self, bindings: list[tuple[str, int]]) -> "ValueEnv":
        """
        Extend the environment with multiple bindings.
        Returns a new ValueEnv without modifying the original.

        Args:
            bindings: List of (name, value) tuples

        Returns:
            New ValueEnv with the additional bindings
        """
        new_bindings = self._bindings.copy()
        for name, val in bindings:
            new_bindings[name] = val
        return ValueEnv(new_bindings)

    def lookup(self, name: str) -> int:
        """
        Look up a variable in the environment.

        Args:
            name: Variable name to look up

        Returns:
            The bound value, or 0 if the name was never assigned
        """
        return self._bindings.get(name, DEFAULT_VALUE)

    def __getitem__(self, name: str) -> int:
        return self.lookup(name)

    def __contains__(self, name: str) -> bool:
        """Check if a name is explicitly bound in the environment."""
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        """Return the number of explicit bindings."""
        return len(self._bindings)

    def __eq__(self, other: object) -> bool:
        # Equal as total functions: a name bound to 0 matches an unbound one.
        if not isinstance(other, ValueEnv):
            return NotImplemented
        names = self._bindings.keys() | other._bindings.keys()
        return all(self.lookup(name) == other.lookup(name) for name in names)

    def __hash__(self) -> int:
        return hash(frozenset(
            (name, value) for name, value in self._bindings.items() if value != DEFAULT_VALUE
        ))

    def __repr__(self) -> str:
        return f"ValueEnv({self._bindings})"


EnvLike = Union[ValueEnv, Mapping[str, int], None]


def empty_value_env() -> ValueEnv:
    """
    Create an empty value environment.

    Returns:
        New ValueEnv where every variable reads as 0
    """
    return ValueEnv()


def as_value_env(env: EnvLike) -> ValueEnv:
    """Coerce a plain mapping (or None) into a ValueEnv"""
    if isinstance(env, ValueEnv):
        return env
    return ValueEnv(env)
