"""A small dense matrix with Gauss-Jordan inversion and determinant."""

from __future__ import annotations

import numbers
from typing import Any, Iterable, List, Sequence, Tuple, Union

Index = Union[int, Tuple[int, int]]


class NotInvertibleMatrixError(ArithmeticError):
    """The matrix is not square or is singular, so it has no inverse."""


class IncompatibleMatrixError(ValueError):
    """The shapes of two matrices do not fit the operation."""


class NotSquareMatrixError(ValueError):
    """The operation needs a square matrix."""


def _format_element(value: Any) -> str:
    if isinstance(value, float):
        return format(value, "g")
    return str(value)


class DMatrix:
    """A ``rows`` x ``columns`` matrix of numbers, zero-filled.

    Dimensions below one are raised to one. ``m[i, j]`` reads or writes an
    element; ``m[i]`` reads a row as a tuple or replaces it from a sequence.
    """

    def __init__(self, rows: int = 0, columns: int = 0) -> None:
        rows = max(rows, 1)
        columns = max(columns, 1)
        self._data: List[List[Any]] = [[0] * columns for _ in range(rows)]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]]) -> DMatrix:
        """A matrix holding the given rows, which must all have the same length."""
        data = [list(row) for row in rows]
        if not data or not data[0]:
            raise ValueError("a matrix needs at least one row and one column")
        if any(len(row) != len(data[0]) for row in data):
            raise ValueError("all rows must have the same length")
        matrix = cls(len(data), len(data[0]))
        matrix._data = data
        return matrix

    @classmethod
    def identity(cls, n: int) -> DMatrix:
        """The ``n`` x ``n`` identity matrix."""
        matrix = cls(n, n)
        for i in range(matrix.rows):
            matrix._data[i][i] = 1
        return matrix

    @property
    def rows(self) -> int:
        return len(self._data)

    @property
    def columns(self) -> int:
        return len(self._data[0])

    def __getitem__(self, index: Index) -> Any:
        if isinstance(index, tuple):
            i, j = index
            return self._data[i][j]
        return tuple(self._data[index])

    def __setitem__(self, index: Index, value: Any) -> None:
        if isinstance(index, tuple):
            i, j = index
            self._data[i][j] = value
            return
        row = list(value)
        if len(row) != self.columns:
            raise ValueError(f"row of length {len(row)} in a matrix with {self.columns} columns")
        self._data[index] = row

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def _copy_rows(self) -> List[List[Any]]:
        return [row[:] for row in self._data]

    def det(self) -> Any:
        """The determinant, by Gaussian elimination."""
        if self.rows != self.columns:
            raise NotSquareMatrixError(f"{self.rows}x{self.columns} matrix is not square")
        a = self._copy_rows()
        n = self.rows
        d: Any = 1
        for i in range(n):
            k = next((k for k in range(i, n) if a[k][i] != 0), None)
            if k is None:
                return 0
            val = a[k][i]
            a[k] = [v / val for v in a[k]]
            d = d * val
            if k != i:
                a[k], a[i] = a[i], a[k]
                d = -d
            for j in range(i + 1, n):
                tmp = a[j][i]
                if tmp != 0:
                    a[j] = [x - tmp * y for x, y in zip(a[j], a[i])]
        return d

    def inv(self) -> DMatrix:
        """The inverse, by Gauss-Jordan elimination."""
        if self.rows != self.columns:
            raise NotInvertibleMatrixError(f"{self.rows}x{self.columns} matrix is not square")
        n = self.rows
        a = self._copy_rows()
        b = DMatrix.identity(n)._data
        for i in range(n):
            k = next((k for k in range(i, n) if a[k][i] != 0), None)
            if k is None:
                raise NotInvertibleMatrixError("matrix is singular")
            val = a[k][i]
            a[k] = [v / val for v in a[k]]
            b[k] = [v / val for v in b[k]]
            if k != i:
                a[k], a[i] = a[i], a[k]
                b[k], b[i] = b[i], b[k]
            for j in range(n):
                if j != i:
                    tmp = a[j][i]
                    a[j] = [x - tmp * y for x, y in zip(a[j], a[i])]
                    b[j] = [x - tmp * y for x, y in zip(b[j], b[i])]
        result = DMatrix(n, n)
        result._data = b
        return result

    def transpose(self) -> DMatrix:
        """The transposed matrix."""
        result = DMatrix(self.columns, self.rows)
        result._data = [list(column) for column in zip(*self._data)]
        return result

    def __mul__(self, other: Any) -> DMatrix:
        if isinstance(other, DMatrix):
            if self.columns != other.rows:
                raise IncompatibleMatrixError(
                    f"cannot multiply {self.rows}x{self.columns} by {other.rows}x{other.columns}"
                )
            columns = list(zip(*other._data))
            result = DMatrix(self.rows, other.columns)
            result._data = [
                [sum((x * y for x, y in zip(row, column)), 0) for column in columns]
                for row in self._data
            ]
            return result
        if isinstance(other, numbers.Number):
            result = DMatrix(self.rows, self.columns)
            result._data = [[v * other for v in row] for row in self._data]
            return result
        return NotImplemented

    def __rmul__(self, other: Any) -> DMatrix:
        if isinstance(other, numbers.Number):
            return self * other
        return NotImplemented

    def _elementwise(self, other: DMatrix, op: str) -> DMatrix:
        if self.rows != other.rows or self.columns != other.columns:
            raise IncompatibleMatrixError(
                f"cannot {op} {self.rows}x{self.columns} and {other.rows}x{other.columns}"
            )
        result = DMatrix(self.rows, self.columns)
        if op == "add":
            result._data = [[x + y for x, y in zip(r, s)] for r, s in zip(self._data, other._data)]
        else:
            result._data = [[x - y for x, y in zip(r, s)] for r, s in zip(self._data, other._data)]
        return result

    def __add__(self, other: Any) -> DMatrix:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._elementwise(other, "add")

    def __sub__(self, other: Any) -> DMatrix:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._elementwise(other, "subtract")

    def __str__(self) -> str:
        rows = ("{" + ",".join(_format_element(v) for v in row) + "}" for row in self._data)
        return "{" + ",".join(rows) + "}"

    def __repr__(self) -> str:
        return f"DMatrix({self})"