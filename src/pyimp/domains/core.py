"""
IMP Core Domain for Python
Integer arithmetic and comparison operators

Comparisons have no boolean result type: they return 1 for true and 0 for
false, and conditionals treat any nonzero integer as true.
"""

from pyimp.errors import IMPError
from pyimp.types import BinOp
from pyimp.domains.registry import Operator, OperatorRegistry, define_operator


CORE_NS = "core"


def truth(flag: bool) -> int:
    """Encode a Python bool as the language's 0/1 integer"""
    return 1 if flag else 0


#==============================================================================
# Arithmetic Operators
#==============================================================================

plus: Operator = (define_operator(CORE_NS, BinOp.PLUS.value)
                  .impl(lambda a, b: a + b)
                  .build())

minus: Operator = (define_operator(CORE_NS, BinOp.MINUS.value)
                   .impl(lambda a, b: a - b)
                   .build())

times: Operator = (define_operator(CORE_NS, BinOp.TIMES.value)
                   .impl(lambda a, b: a * b)
                   .build())


# divide(int, int) -> int, rounds toward negative infinity
def _divide_impl(a: int, b: int) -> int:
    if b == 0:
        raise IMPError.divide_by_zero(a)
    return a // b


divide: Operator = (define_operator(CORE_NS, BinOp.DIVIDE.value)
                    .impl(_divide_impl)
                    .build())


#==============================================================================
# Comparison Operators
#==============================================================================

gt: Operator = (define_operator(CORE_NS, BinOp.GT.value)
                .impl(lambda a, b: truth(a > b))
                .build())

ge: Operator = (define_operator(CORE_NS, BinOp.GE.value)
                .impl(lambda a, b: truth(a >= b))
                .build())

lt: Operator = (define_operator(CORE_NS, BinOp.LT.value)
                .impl(lambda a, b: truth(a < b))
                .build())

le: Operator = (define_operator(CORE_NS, BinOp.LE.value)
                .impl(lambda a, b: truth(a <= b))
                .build())

eql: Operator = (define_operator(CORE_NS, BinOp.EQL.value)
                 .impl(lambda a, b: truth(a == b))
                 .build())


#==============================================================================
# Registry
#==============================================================================

CORE_OPERATORS = [plus, minus, times, divide, gt, ge, lt, le, eql]


def create_core_registry() -> OperatorRegistry:
    """Create a registry holding every core operator"""
    registry = OperatorRegistry()
    registry.register_all(CORE_OPERATORS)
    return registry
