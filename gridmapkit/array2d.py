"""A dense two-dimensional array of cells with bounds checking."""

from __future__ import annotations

import copy
from enum import IntFlag
from typing import Callable, Generic, List, TypeVar

Cell = TypeVar("Cell")


class AccessibilityState(IntFlag):
    """How a cell of a grid can be reached."""

    OUTSIDE = 0x0
    INSIDE = 0x1
    ALLOCATED = 0x2


class Array2D(Generic[Cell]):
    """A grid of ``xsize`` by ``ysize`` cells, each made by ``factory``.

    A grid with a non-positive dimension is empty in both dimensions.
    """

    patch_magnitude = 0

    def __init__(self, xsize: int = 0, ysize: int = 0, factory: Callable[[], Cell] = float) -> None:
        self._factory = factory
        if xsize > 0 and ysize > 0:
            self._xsize, self._ysize = xsize, ysize
        else:
            self._xsize = self._ysize = 0
        self._cells: List[List[Cell]] = self._blank(self._xsize, self._ysize)

    def _blank(self, xsize: int, ysize: int) -> List[List[Cell]]:
        return [[self._factory() for _ in range(ysize)] for _ in range(xsize)]

    @property
    def xsize(self) -> int:
        return self._xsize

    @property
    def ysize(self) -> int:
        return self._ysize

    @property
    def factory(self) -> Callable[[], Cell]:
        return self._factory

    def clear(self) -> None:
        """Drop every cell, leaving an empty grid."""
        self._cells = []
        self._xsize = self._ysize = 0

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Reshape the grid to the index window [xmin, xmax) x [ymin, ymax).

        Cells that fall inside both the old grid and the window keep their
        values, shifted so that (xmin, ymin) becomes the new origin.
        """
        xsize, ysize = xmax - xmin, ymax - ymin
        if xsize < 0 or ysize < 0:
            raise ValueError(f"invalid window [{xmin}, {xmax}) x [{ymin}, {ymax})")
        cells = self._blank(xsize, ysize)
        for x in range(max(xmin, 0), min(xmax, self._xsize)):
            column = self._cells[x]
            target = cells[x - xmin]
            for y in range(max(ymin, 0), min(ymax, self._ysize)):
                target[y - ymin] = column[y]
        self._cells = cells
        self._xsize, self._ysize = xsize, ysize

    def is_inside(self, x: int, y: int) -> bool:
        """Whether (x, y) indexes a cell of the grid."""
        return 0 <= x < self._xsize and 0 <= y < self._ysize

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) outside a {self._xsize}x{self._ysize} grid")

    def cell(self, x: int, y: int) -> Cell:
        """The cell at (x, y)."""
        self._check(x, y)
        return self._cells[x][y]

    def set_cell(self, x: int, y: int, value: Cell) -> None:
        """Store ``value`` at (x, y)."""
        self._check(x, y)
        self._cells[x][y] = value

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        """Inside cells of a dense grid are always allocated."""
        if self.is_inside(x, y):
            return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
        return AccessibilityState.OUTSIDE

    def copy(self) -> Array2D[Cell]:
        """An independent grid holding copies of the cells."""
        clone: Array2D[Cell] = Array2D(0, 0, self._factory)
        clone._xsize, clone._ysize = self._xsize, self._ysize
        clone._cells = [[copy.copy(cell) for cell in column] for column in self._cells]
        return clone