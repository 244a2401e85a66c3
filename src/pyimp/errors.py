# IMP Error Types
# Error domain for evaluation and validation errors

from __future__ import annotations

from enum import Enum
from typing import Any


#==============================================================================
# Error Codes
#==============================================================================

class ErrorCodes(str, Enum):
    """Error code constants for IMP errors"""

    # Runtime errors
    DIVIDE_BY_ZERO = "DivideByZero"

    # Lookup errors
    UNKNOWN_OPERATOR = "UnknownOperator"

    # Termination errors (only with an explicit step bound)
    NON_TERMINATION = "NonTermination"

    # Validation errors
    VALIDATION_ERROR = "ValidationError"


#==============================================================================
# IMP Error Class
#==============================================================================

class IMPError(Exception):
    """Base exception class for all IMP errors"""

    def __init__(self, code: ErrorCodes, message: str, meta: dict[str, Any] | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to a serialisable representation"""
        result: dict[str, Any] = {
            "kind": "error",
            "code": self.code.value,
        }
        if self.meta is not None:
            result["meta"] = self.meta
        return result

    #---------------------------------------------------------------------------
    # Static factory methods for common errors
    #---------------------------------------------------------------------------

    @staticmethod
    def divide_by_zero(dividend: int | None = None) -> "IMPError":
        """Create a DivideByZero error (the DivisionByZero kind of the language definition)"""
        meta = {"dividend": dividend} if dividend is not None else None
        return IMPError(ErrorCodes.DIVIDE_BY_ZERO, "Division by zero", meta)

    @staticmethod
    def unknown_operator(ns: str, name: str) -> "IMPError":
        """Create an UnknownOperator error"""
        return IMPError(
            ErrorCodes.UNKNOWN_OPERATOR,
            f"Unknown operator: {ns}:{name}",
        )

    @staticmethod
    def non_termination(max_steps: int) -> "IMPError":
        """Create a NonTermination error"""
        return IMPError(
            ErrorCodes.NON_TERMINATION,
            f"Execution did not terminate within {max_steps} steps",
            {"max_steps": max_steps},
        )

    @staticmethod
    def validation(path: str, message: str, value: Any | None = None) -> "IMPError":
        """Create a ValidationError"""
        value_str = f" (value: {value!r})" if value is not None else ""
        return IMPError(
            ErrorCodes.VALIDATION_ERROR,
            f"Validation error at {path}: {message}{value_str}",
        )


#==============================================================================
# Validation Error Types
#==============================================================================

class ValidationError:
    """A single validation error"""

    def __init__(self, path: str, message: str, value: Any | None = None):
        self.path = path
        self.message = message
        self.value = value

    def __repr__(self) -> str:
        return f"ValidationError({self.path!r}, {self.message!r})"


class ValidationResult:
    """Result of a validation operation"""

    def __init__(self, valid: bool, errors: list[ValidationError], value: Any | None = None):
        self.valid = valid
        self.errors = errors
        self.value = value

    def raise_for_errors(self) -> None:
        """Raise the first error as an IMPError if validation failed"""
        if self.valid:
            return
        first = self.errors[0]
        raise IMPError.validation(first.path, first.message, first.value)


def valid_result(value: Any) -> ValidationResult:
    """Create a successful validation result"""
    return ValidationResult(valid=True, errors=[], value=value)


def invalid_result(errors: list[ValidationError]) -> ValidationResult:
    """Create a failed validation result"""
    return ValidationResult(valid=False, errors=errors)


#==============================================================================
# Exhaustiveness Checking
#==============================================================================

def exhaustive(value: Any) -> None:
    """
    Asserts that a value is unreachable, ensuring exhaustive handling.
    Use in the final else branch of a dispatch over node kinds.

    Raises:
        AssertionError: If called (indicating unhandled case)
    """
    raise AssertionError(f"Unexpected value: {value!r}")
