"""
Number types for matrix elements.

A number type bundles everything the matrix operations need from an element
type: a zero value, checked addition and multiplication, a column mean,
parsing from a text token and formatting back to text.

Provided types:
- i32: 32-bit signed integer (the default)
- i64: 64-bit signed integer
- f64: double precision float
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from decimal import Decimal
from functools import reduce
from typing import Any, ClassVar, Iterable, Sequence

import numpy as np

from ..core.errors import NumberTypeError, NumericOverflowError, ParseError


class NumberType(ABC):
    """
    Numeric capability interface for matrix elements.

    Subclasses must implement:
    - parse: Convert a text token to a value
    - coerce: Convert a Python/NumPy value to a value
    - mean: Mean of a non-empty sequence of values
    - format: Render a value as text
    """

    name: ClassVar[str]
    numpy_dtype: ClassVar[Any]

    @property
    @abstractmethod
    def zero(self) -> Any:
        """Additive identity."""
        pass

    @abstractmethod
    def parse(self, token: str) -> Any:
        """
        Parse a single whitespace-free token.

        Raises:
            ParseError: If the token is not a valid number of this type
        """
        pass

    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """Convert an already numeric value (or a string token) to this type."""
        pass

    @abstractmethod
    def mean(self, values: Sequence[Any]) -> Any:
        """Mean of a non-empty sequence."""
        pass

    @abstractmethod
    def format(self, value: Any) -> str:
        """Render a value as text."""
        pass

    def check(self, value: Any) -> Any:
        """Validate an arithmetic result (no-op unless overridden)."""
        return value

    def add(self, lhs: Any, rhs: Any) -> Any:
        return self.check(lhs + rhs)

    def multiply(self, lhs: Any, rhs: Any) -> Any:
        return self.check(lhs * rhs)

    def sum(self, values: Iterable[Any]) -> Any:
        """Sum values left to right starting from zero."""
        return reduce(self.add, values, self.zero)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class IntegerType(NumberType):
    """Fixed-width signed integer with checked arithmetic."""

    _TOKEN_RE = re.compile(r"[+-]?[0-9]+")

    def __init__(self, name: str, bits: int, numpy_dtype: Any):
        self.name = name
        self.bits = bits
        self.numpy_dtype = numpy_dtype
        self.min_value = -(2 ** (bits - 1))
        self.max_value = 2 ** (bits - 1) - 1

    @property
    def zero(self) -> int:
        return 0

    def parse(self, token: str) -> int:
        if not self._TOKEN_RE.fullmatch(token):
            raise ParseError(token, reason="invalid digit found in string")

        negative = token.startswith("-")
        digits = token.lstrip("+-").lstrip("0") or "0"
        # Out of range long before int() would hit the interpreter's digit limit
        if len(digits) > len(str(self.max_value)):
            size = "small" if negative else "large"
            raise ParseError(token, reason=f"number too {size} to fit in target type")

        value = -int(digits) if negative else int(digits)
        if value > self.max_value:
            raise ParseError(token, reason="number too large to fit in target type")
        if value < self.min_value:
            raise ParseError(token, reason="number too small to fit in target type")
        return value

    def coerce(self, value: Any) -> int:
        if isinstance(value, str):
            return self.parse(value.strip())
        if isinstance(value, (bool, np.bool_)):
            raise ParseError(repr(value), reason=f"booleans are not {self.name} values")
        if isinstance(value, (int, np.integer)):
            value = int(value)
        elif isinstance(value, (float, np.floating)) and float(value).is_integer():
            value = int(value)
        else:
            raise ParseError(repr(value), reason=f"not an integer value for {self.name}")

        if not self.min_value <= value <= self.max_value:
            raise ParseError(str(value), reason=f"out of range for {self.name}")
        return value

    def check(self, value: int) -> int:
        if not self.min_value <= value <= self.max_value:
            raise NumericOverflowError(value, self.name)
        return value

    def mean(self, values: Sequence[int]) -> int:
        # Accumulate unchecked, then divide truncating toward zero
        total = sum(values)
        quotient = abs(total) // len(values)
        return self.check(quotient if total >= 0 else -quotient)

    def format(self, value: int) -> str:
        return str(value)


class FloatType(NumberType):
    """IEEE 754 double precision float."""

    name = "f64"
    numpy_dtype = np.float64

    @property
    def zero(self) -> float:
        return 0.0

    def parse(self, token: str) -> float:
        if "_" in token:
            raise ParseError(token, reason="invalid float literal")
        try:
            return float(token)
        except ValueError as exc:
            raise ParseError(token, reason="invalid float literal") from exc

    def coerce(self, value: Any) -> float:
        if isinstance(value, str):
            return self.parse(value.strip())
        if isinstance(value, (bool, np.bool_)):
            raise ParseError(repr(value), reason="booleans are not f64 values")
        if isinstance(value, (int, float, np.integer, np.floating)):
            return float(value)
        raise ParseError(repr(value), reason="not a real number")

    def mean(self, values: Sequence[float]) -> float:
        return self.sum(values) / len(values)

    def format(self, value: float) -> str:
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if value.is_integer():
            text = str(int(value))
            # Keep the sign of negative zero
            return "-0" if text == "0" and math.copysign(1.0, value) < 0 else text
        # Shortest round-trip digits, always in positional notation
        return format(Decimal(repr(value)), "f")


INT32 = IntegerType("i32", 32, np.int32)
INT64 = IntegerType("i64", 64, np.int64)
FLOAT64 = FloatType()

NUMBER_TYPES: dict[str, NumberType] = {
    INT32.name: INT32,
    INT64.name: INT64,
    FLOAT64.name: FLOAT64,
}

DEFAULT_NUMBER_TYPE = INT32.name


def get_number_type(number_type: NumberType | str | None = None) -> NumberType:
    """
    Look up a number type by name.

    Args:
        number_type: A name ("i32", "i64", "f64"), a NumberType, or None for the default

    Raises:
        NumberTypeError: If the name is unknown
    """
    if number_type is None:
        return NUMBER_TYPES[DEFAULT_NUMBER_TYPE]
    if isinstance(number_type, NumberType):
        return number_type
    try:
        return NUMBER_TYPES[number_type]
    except KeyError:
        raise NumberTypeError(str(number_type)) from None
