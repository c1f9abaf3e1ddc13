"""
matrixops.math - Matrix value type and number types

- Matrix: immutable dense row-major matrix
- Number types: i32 (default), i64, f64
- Standalone functions for the CLI: parse, format, dims, transpose, add,
  dot, column_means, format_vector
"""

from .matrix import (
    Matrix,
    add,
    column_means,
    dims,
    dot,
    format,
    format_vector,
    parse,
    transpose,
)
from .numeric import (
    DEFAULT_NUMBER_TYPE,
    FLOAT64,
    INT32,
    INT64,
    NUMBER_TYPES,
    FloatType,
    IntegerType,
    NumberType,
    get_number_type,
)

__all__ = [
    "Matrix",
    "parse",
    "format",
    "format_vector",
    "dims",
    "transpose",
    "add",
    "dot",
    "column_means",
    "NumberType",
    "IntegerType",
    "FloatType",
    "INT32",
    "INT64",
    "FLOAT64",
    "NUMBER_TYPES",
    "DEFAULT_NUMBER_TYPE",
    "get_number_type",
]
