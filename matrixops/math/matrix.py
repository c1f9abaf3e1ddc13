"""
Dense row-major Matrix value type.

A Matrix is an immutable rectangular grid of numbers. Element (r, c) lives at
index ``r * num_cols + c`` of a flat tuple. Every operation returns a new
Matrix; nothing is modified in place.

Text layout (input and output): one row per line, values separated by
whitespace on input and by tabs on output.
"""

from __future__ import annotations

from itertools import chain
from typing import Any, Iterable, Iterator, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.errors import DimensionError, NumberTypeError, ParseError
from ..core.logging import get_logger
from .numeric import DEFAULT_NUMBER_TYPE, NumberType, get_number_type

logger = get_logger(__name__)


class Matrix(BaseModel):
    """
    Matrix of numbers stored in row-major order.

    Construct with from_1d(), from_2d(), from_text() or empty().
    """

    model_config = ConfigDict(frozen=True)

    num_rows: int = Field(default=0, ge=0)
    num_cols: int = Field(default=0, ge=0)
    data: tuple[Any, ...] = Field(default_factory=tuple)
    number_type: str = DEFAULT_NUMBER_TYPE

    @model_validator(mode="after")
    def check_storage(self) -> Matrix:
        get_number_type(self.number_type)
        if len(self.data) != self.num_rows * self.num_cols:
            raise DimensionError(
                f"Storage holds {len(self.data)} values, "
                f"expected {self.num_rows}x{self.num_cols}",
                expected=self.num_rows * self.num_cols,
                actual=len(self.data),
            )
        return self

    # Construction

    @classmethod
    def empty(cls, number_type: NumberType | str | None = None) -> Matrix:
        """Return the 0x0 matrix."""
        return cls(
            num_rows=0,
            num_cols=0,
            data=(),
            number_type=get_number_type(number_type).name,
        )

    @classmethod
    def from_1d(
        cls,
        num_rows: int,
        data: Iterable[Any],
        number_type: NumberType | str | None = None,
    ) -> Matrix:
        """
        Build a matrix from a row count and flat row-major values.

        Args:
            num_rows: Number of rows (must be positive)
            data: Flat values; the length must be a multiple of num_rows
            number_type: Element type name or instance (default i32)

        Raises:
            DimensionError: If num_rows is zero or does not divide len(data)
        """
        ntype = get_number_type(number_type)
        values = tuple(ntype.coerce(value) for value in data)

        if num_rows <= 0:
            raise DimensionError(
                f"Row count must be positive, got {num_rows}",
                expected="num_rows > 0",
                actual=num_rows,
            )

        modulo = len(values) % num_rows
        if modulo != 0:
            raise DimensionError(
                f"Heterogeneous row length: {len(values)}%{num_rows}=={modulo}!=0",
                expected=0,
                actual=modulo,
            )

        return cls(
            num_rows=num_rows,
            num_cols=len(values) // num_rows,
            data=values,
            number_type=ntype.name,
        )

    @classmethod
    def from_2d(
        cls,
        rows: Iterable[Iterable[Any]] | np.ndarray,
        number_type: NumberType | str | None = None,
    ) -> Matrix:
        """
        Build a matrix from a sequence of rows (or a 2-D NumPy array).

        Raises:
            DimensionError: If the rows do not all have the same length
        """
        ntype = get_number_type(number_type)

        if isinstance(rows, np.ndarray):
            if rows.ndim != 2:
                raise DimensionError(
                    f"Expected a 2-D array, got {rows.ndim} dimension(s)",
                    expected=2,
                    actual=rows.ndim,
                )
            rows = rows.tolist()

        normalized = [list(row) for row in rows]
        if not normalized:
            return cls.empty(ntype)

        num_cols = len(normalized[0])
        for index, row in enumerate(normalized):
            if len(row) != num_cols:
                raise DimensionError(
                    f"Heterogeneous row length: row {index} has {len(row)} "
                    f"values, expected {num_cols}",
                    expected=num_cols,
                    actual=len(row),
                )

        return cls(
            num_rows=len(normalized),
            num_cols=num_cols,
            data=tuple(ntype.coerce(value) for value in chain.from_iterable(normalized)),
            number_type=ntype.name,
        )

    @classmethod
    def from_text(
        cls,
        text: str,
        number_type: NumberType | str | None = None,
        skip_blank_lines: bool = True,
    ) -> Matrix:
        """
        Parse whitespace separated values, one row per line.

        Args:
            text: Matrix text
            number_type: Element type name or instance (default i32)
            skip_blank_lines: Ignore whitespace-only lines. When False a blank
                line is an empty row, which makes non-empty input ragged.

        Raises:
            ParseError: If a token is not a valid number
            DimensionError: If lines hold different numbers of values
        """
        ntype = get_number_type(number_type)

        # Lines end at "\n" (optionally "\r\n") only; other breaks separate tokens
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()

        rows: list[list[Any]] = []
        for line_number, line in enumerate(lines, start=1):
            tokens = line.removesuffix("\r").split()
            if not tokens and skip_blank_lines:
                continue

            row = []
            for column, token in enumerate(tokens, start=1):
                try:
                    row.append(ntype.parse(token))
                except ParseError as exc:
                    raise ParseError(
                        token, line=line_number, column=column, reason=exc.reason
                    ) from exc
            rows.append(row)

        matrix = cls.from_2d(rows, ntype)
        logger.debug("Parsed %dx%d %s matrix", matrix.num_rows, matrix.num_cols, ntype.name)
        return matrix

    # Accessors

    @property
    def element_type(self) -> NumberType:
        return get_number_type(self.number_type)

    @property
    def shape(self) -> tuple[int, int]:
        """Get matrix dimensions (rows, cols)."""
        return (self.num_rows, self.num_cols)

    def dims(self) -> tuple[int, int]:
        return self.shape

    def is_empty(self) -> bool:
        return not self.data

    def rows(self) -> Iterator[tuple[Any, ...]]:
        """Yield each row as a tuple."""
        if self.num_cols == 0:
            for _ in range(self.num_rows):
                yield ()
            return

        for start in range(0, len(self.data), self.num_cols):
            yield self.data[start:start + self.num_cols]

    def __getitem__(self, index: tuple[int, int] | int) -> Any:
        """Get element by (row, col) or a whole row by index."""
        if isinstance(index, tuple):
            row, col = index
            if not (0 <= row < self.num_rows and 0 <= col < self.num_cols):
                raise IndexError(f"Index ({row}, {col}) out of range for {self.num_rows}x{self.num_cols} matrix")
            return self.data[row * self.num_cols + col]

        if not 0 <= index < self.num_rows:
            raise IndexError(f"Row index {index} out of range")
        start = index * self.num_cols
        return self.data[start:start + self.num_cols]

    def to_python(self) -> list[list[Any]]:
        """Convert to Python nested list."""
        return [list(row) for row in self.rows()]

    def to_numpy(self) -> np.ndarray:
        """Convert to NumPy array of the element type's dtype."""
        return np.array(self.data, dtype=self.element_type.numpy_dtype).reshape(self.shape)

    # Operations

    def transpose(self) -> Matrix:
        """Return a new matrix with rows and columns swapped."""
        data = chain.from_iterable(
            self.data[col::self.num_cols] for col in range(self.num_cols)
        )
        return Matrix(
            num_rows=self.num_cols,
            num_cols=self.num_rows,
            data=tuple(data),
            number_type=self.number_type,
        )

    def add(self, other: Matrix) -> Matrix:
        """
        Elementwise sum.

        Raises:
            DimensionError: If the shapes differ
        """
        ntype = self._common_type(other)
        if self.shape != other.shape:
            raise DimensionError(
                f"Incompatible dimensions ({self.num_rows}x{self.num_cols} "
                f"vs. {other.num_rows}x{other.num_cols})",
                expected=self.shape,
                actual=other.shape,
            )

        return Matrix(
            num_rows=self.num_rows,
            num_cols=self.num_cols,
            data=tuple(map(ntype.add, self.data, other.data)),
            number_type=self.number_type,
        )

    def dot(self, other: Matrix) -> Matrix:
        """
        Matrix product.

        Each result element is the left-to-right sum of pairwise products of
        a row of self and a row of other's transpose.

        Raises:
            DimensionError: If self.num_cols != other.num_rows
        """
        ntype = self._common_type(other)
        if self.num_cols != other.num_rows:
            raise DimensionError(
                f"Incompatible dimensions ({self.num_cols} != {other.num_rows})",
                expected=self.num_cols,
                actual=other.num_rows,
            )

        other_columns = list(other.transpose().rows())
        data = [
            ntype.sum(map(ntype.multiply, row, column))
            for row in self.rows()
            for column in other_columns
        ]

        return Matrix(
            num_rows=self.num_rows,
            num_cols=other.num_cols,
            data=tuple(data),
            number_type=self.number_type,
        )

    def column_means(self) -> list[Any]:
        """
        Mean of each column, in column order.

        Integer means truncate toward zero. A matrix without columns has no
        means.

        Raises:
            DimensionError: If there are columns but no rows to average
        """
        if self.num_cols == 0:
            return []
        if self.num_rows == 0:
            raise DimensionError(
                f"Cannot average columns of a matrix with no rows (0x{self.num_cols})",
                expected="num_rows > 0",
                actual=0,
            )

        ntype = self.element_type
        return [ntype.mean(column) for column in self.transpose().rows()]

    def _common_type(self, other: Matrix) -> NumberType:
        if self.number_type != other.number_type:
            raise NumberTypeError(
                other.number_type,
                message=f"Cannot combine {self.number_type} and {other.number_type} matrices",
            )
        return self.element_type

    # Text output

    def to_text(self) -> str:
        """Tab separated values, one newline-terminated line per row."""
        ntype = self.element_type
        return "".join(
            "\t".join(ntype.format(value) for value in row) + "\n"
            for row in self.rows()
        )

    def __str__(self) -> str:
        return self.to_text()

    # Operators

    def __add__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.add(other)
        return NotImplemented

    def __matmul__(self, other: Any) -> Matrix:
        if isinstance(other, Matrix):
            return self.dot(other)
        return NotImplemented


# Standalone functions

def parse(
    text: str,
    number_type: NumberType | str | None = None,
    skip_blank_lines: bool = True,
) -> Matrix:
    """Parse matrix text. See Matrix.from_text."""
    return Matrix.from_text(text, number_type, skip_blank_lines=skip_blank_lines)


def dims(matrix: Matrix) -> tuple[int, int]:
    return matrix.dims()


def transpose(matrix: Matrix) -> Matrix:
    return matrix.transpose()


def add(lhs: Matrix, rhs: Matrix) -> Matrix:
    return lhs.add(rhs)


def dot(lhs: Matrix, rhs: Matrix) -> Matrix:
    return lhs.dot(rhs)


def column_means(matrix: Matrix) -> list[Any]:
    return matrix.column_means()


def format_vector(values: Sequence[Any], number_type: NumberType | str | None = None) -> str:
    """Tab separated values on a single line, without a trailing newline."""
    ntype = get_number_type(number_type)
    return "\t".join(ntype.format(value) for value in values)


def format(matrix: Matrix) -> str:
    """Render a matrix as text. See Matrix.to_text."""
    return matrix.to_text()
