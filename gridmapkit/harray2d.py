"""A two-dimensional array split into lazily allocated square patches."""

from __future__ import annotations

from typing import Callable, FrozenSet, Generic, Iterable, Optional, Tuple

from .array2d import AccessibilityState, Array2D, Cell

IntPair = Tuple[int, int]


class HierarchicalArray2D(Generic[Cell]):
    """A grid of ``xsize`` by ``ysize`` cells stored in patches of side ``2**patch_magnitude``.

    Patches are created on first write. Copies share their patches until the
    patches of an active area are detached with :meth:`alloc_active_area`.
    The dimensions ``xsize``/``ysize`` and :meth:`is_inside` count patches.
    """

    def __init__(
        self,
        xsize: int,
        ysize: int,
        patch_magnitude: int = 5,
        factory: Callable[[], Cell] = float,
    ) -> None:
        self._patch_magnitude = patch_magnitude
        self._factory = factory
        self._patches: Array2D[Optional[Array2D[Cell]]] = Array2D(
            xsize >> patch_magnitude, ysize >> patch_magnitude, factory=lambda: None
        )
        self._active_area: set[IntPair] = set()

    @property
    def xsize(self) -> int:
        return self._patches.xsize

    @property
    def ysize(self) -> int:
        return self._patches.ysize

    @property
    def patch_magnitude(self) -> int:
        return self._patch_magnitude

    @property
    def patch_size(self) -> int:
        return 1 << self._patch_magnitude

    @property
    def active_area(self) -> FrozenSet[IntPair]:
        return frozenset(self._active_area)

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Reshape the patch grid to [xmin, xmax) x [ymin, ymax), in patch units."""
        self._patches.resize(xmin, ymin, xmax, ymax)

    def is_inside(self, x: int, y: int) -> bool:
        """Whether the patch (x, y) lies inside the grid of patches."""
        return self._patches.is_inside(x, y)

    def patch_indexes(self, x: int, y: int) -> IntPair:
        """The patch holding cell (x, y); (-1, -1) for negative coordinates."""
        if x >= 0 and y >= 0:
            return x >> self._patch_magnitude, y >> self._patch_magnitude
        return -1, -1

    def _local(self, x: int, y: int, px: int, py: int) -> IntPair:
        return x - (px << self._patch_magnitude), y - (py << self._patch_magnitude)

    def _writable_patch(self, x: int, y: int) -> Tuple[Array2D[Cell], IntPair]:
        px, py = self.patch_indexes(x, y)
        if not self._patches.is_inside(px, py):
            raise IndexError(f"cell ({x}, {y}) outside the patch grid")
        patch = self._patches.cell(px, py)
        if patch is None:
            patch = self.create_patch((x, y))
            self._patches.set_cell(px, py, patch)
        return patch, self._local(x, y, px, py)

    def cell(self, x: int, y: int) -> Cell:
        """The cell at (x, y), allocating its patch if needed."""
        patch, (lx, ly) = self._writable_patch(x, y)
        return patch.cell(lx, ly)

    def peek(self, x: int, y: int) -> Cell:
        """The cell at (x, y) without allocating; its patch must exist."""
        if not self.is_allocated(x, y):
            raise IndexError(f"cell ({x}, {y}) is not allocated")
        px, py = self.patch_indexes(x, y)
        lx, ly = self._local(x, y, px, py)
        return self._patches.cell(px, py).cell(lx, ly)

    def set_cell(self, x: int, y: int, value: Cell) -> None:
        """Store ``value`` at (x, y), allocating its patch if needed."""
        patch, (lx, ly) = self._writable_patch(x, y)
        patch.set_cell(lx, ly, value)

    def is_allocated(self, x: int, y: int) -> bool:
        """Whether the patch holding cell (x, y) exists."""
        px, py = self.patch_indexes(x, y)
        return self._patches.is_inside(px, py) and self._patches.cell(px, py) is not None

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        """Whether cell (x, y) is inside the grid and whether it is allocated."""
        if self.is_inside(*self.patch_indexes(x, y)):
            if self.is_allocated(x, y):
                return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
            return AccessibilityState.INSIDE
        return AccessibilityState.OUTSIDE

    def set_active_area(self, points: Iterable[IntPair], patch_coords: bool = False) -> None:
        """Replace the active area with the patches of ``points``."""
        if patch_coords:
            self._active_area = {(int(x), int(y)) for x, y in points}
        else:
            self._active_area = {self.patch_indexes(x, y) for x, y in points}

    def alloc_active_area(self) -> None:
        """Give every active patch a private copy, creating missing ones."""
        for px, py in self._active_area:
            patch = self._patches.cell(px, py)
            fresh = self.create_patch((px, py)) if patch is None else patch.copy()
            self._patches.set_cell(px, py, fresh)

    def create_patch(self, p: IntPair) -> Array2D[Cell]:
        """A new, default-filled patch."""
        side = 1 << self._patch_magnitude
        return Array2D(side, side, self._factory)

    def copy(self) -> HierarchicalArray2D[Cell]:
        """A grid sharing this grid's patches, with an empty active area."""
        clone: HierarchicalArray2D[Cell] = HierarchicalArray2D(
            0, 0, self._patch_magnitude, self._factory
        )
        clone._patches.resize(0, 0, self.xsize, self.ysize)
        for px in range(self.xsize):
            for py in range(self.ysize):
                clone._patches.set_cell(px, py, self._patches.cell(px, py))
        return clone