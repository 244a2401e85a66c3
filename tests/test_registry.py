from __future__ import annotations

import pytest

from pyimp.domains.core import CORE_NS, create_core_registry
from pyimp.domains.registry import BINARY, define_operator, empty_registry
from pyimp.errors import ErrorCodes, IMPError
from pyimp.evaluator import Evaluator
from pyimp.types import BinOp, lit, op


def test_core_registry_covers_every_operator() -> None:
    registry = create_core_registry()
    assert sorted(registry.list_namespace(CORE_NS)) == sorted(b.value for b in BinOp)
    assert len(registry) == len(BinOp)
    assert all(operator.arity == BINARY for operator in registry.operators())
    assert "core:divide" in registry


def test_duplicate_registration_fails() -> None:
    registry = create_core_registry()
    duplicate = define_operator(CORE_NS, "plus").impl(lambda a, b: a + b).build()
    with pytest.raises(ValueError):
        registry.register(duplicate)


def test_builder_requires_impl() -> None:
    with pytest.raises(ValueError):
        define_operator(CORE_NS, "nothing").build()


def test_call_checks_arity() -> None:
    registry = create_core_registry()
    assert registry.call(CORE_NS, "times", 6, 7) == 42
    with pytest.raises(TypeError):
        registry.call(CORE_NS, "times", 6)


def test_missing_operator_is_reported() -> None:
    evaluator = Evaluator(empty_registry())
    with pytest.raises(IMPError) as excinfo:
        evaluator.evaluate({}, op(lit(1), BinOp.PLUS, lit(2)))
    assert excinfo.value.code is ErrorCodes.UNKNOWN_OPERATOR


def test_custom_registry_is_used() -> None:
    registry = empty_registry().register(
        define_operator(CORE_NS, "plus").impl(lambda a, b: a * 10 + b).build()
    )
    assert Evaluator(registry).evaluate({}, op(lit(4), BinOp.PLUS, lit(2))) == 42
