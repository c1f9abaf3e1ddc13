"""
Matrix exceptions.

Defines the closed set of failures raised by the matrix core. The CLI turns
any of them into a one-line message and a non-zero exit status.
"""

from typing import Any, Dict, Optional


class MatrixError(Exception):
    """Base exception for matrix errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ParseError(MatrixError):
    """Raised when a token is not a valid number for the element type"""

    def __init__(
        self,
        token: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.token = token
        self.line = line
        self.column = column
        self.reason = reason

        message = f"Invalid number {token!r}"
        if line is not None:
            message += f" at line {line}"
            if column is not None:
                message += f", column {column}"
        if reason:
            message += f": {reason}"

        super().__init__(
            message=message,
            details={"token": token, "line": line, "column": column, "reason": reason}
        )


class DimensionError(MatrixError):
    """Raised for structural mismatches between rows or operands"""

    def __init__(self, message: str, expected: Any = None, actual: Any = None):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message=message,
            details={"expected": expected, "actual": actual}
        )


class NumberTypeError(MatrixError):
    """Raised for unknown or mixed element types"""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(
            message=message or f"Unknown number type {name!r}",
            details={"number_type": name}
        )


class NumericOverflowError(MatrixError):
    """Raised when an integer result does not fit the element type"""

    def __init__(self, value: int, number_type: str):
        self.value = value
        self.number_type = number_type
        super().__init__(
            message=f"Arithmetic overflow: {value} does not fit in {number_type}",
            details={"value": value, "number_type": number_type}
        )
