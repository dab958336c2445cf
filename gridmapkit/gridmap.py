"""A grid map placing a cell storage in world coordinates."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Tuple, Union

from .array2d import AccessibilityState, Array2D
from .point import OrientedPoint, Point

MapIndex = Tuple[int, int]
WorldPoint = Union[Point, OrientedPoint]
Address = Union[MapIndex, WorldPoint]
StorageFactory = Callable[[int, int], Any]


def _c_round(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(0.5 - value)


def _dense_storage(xsize: int, ysize: int) -> Array2D[float]:
    return Array2D(xsize, ysize, float)


class GridMap:
    """A storage of cells covering the world window [xmin, xmax] x [ymin, ymax].

    Cells are addressed either by an ``(ix, iy)`` tuple of map indexes or by a
    :class:`Point`/:class:`OrientedPoint` in world coordinates. Reading an
    unallocated cell with :meth:`peek` gives the shared ``unknown`` value.
    """

    def __init__(
        self,
        center: WorldPoint,
        xmin: float,
        ymin: float,
        xmax: float,
        ymax: float,
        delta: float,
        storage_factory: Optional[StorageFactory] = None,
        unknown: Any = -1.0,
    ) -> None:
        self._setup(center, xmax - xmin, ymax - ymin, delta, storage_factory, unknown)
        self._size_x2 = _c_round((self._center.x - xmin) / delta)
        self._size_y2 = _c_round((self._center.y - ymin) / delta)

    def _setup(
        self,
        center: WorldPoint,
        world_size_x: float,
        world_size_y: float,
        delta: float,
        storage_factory: Optional[StorageFactory],
        unknown: Any,
    ) -> None:
        factory = storage_factory or _dense_storage
        self._storage = factory(math.ceil(world_size_x / delta), math.ceil(world_size_y / delta))
        self._center = Point(center.x, center.y)
        self._world_size_x = world_size_x
        self._world_size_y = world_size_y
        self._delta = delta
        self._unknown = unknown
        self._size_x2 = 0
        self._size_y2 = 0
        self._update_map_size()

    def _update_map_size(self) -> None:
        shift = self._storage.patch_magnitude
        self._map_size_x = self._storage.xsize << shift
        self._map_size_y = self._storage.ysize << shift

    @property
    def center(self) -> Point:
        return self._center

    @property
    def world_size_x(self) -> float:
        return self._world_size_x

    @property
    def world_size_y(self) -> float:
        return self._world_size_y

    @property
    def map_size_x(self) -> int:
        return self._map_size_x

    @property
    def map_size_y(self) -> int:
        return self._map_size_y

    @property
    def delta(self) -> float:
        return self._delta

    @property
    def resolution(self) -> float:
        return self._delta

    @property
    def storage(self) -> Any:
        return self._storage

    @property
    def unknown(self) -> Any:
        return self._unknown

    def _reshape(self, imin: MapIndex, imax: MapIndex, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        side = 1 << self._storage.patch_magnitude
        pxmin = math.floor(imin[0] / side)
        pxmax = math.ceil(imax[0] / side)
        pymin = math.floor(imin[1] / side)
        pymax = math.ceil(imax[1] / side)
        self._storage.resize(pxmin, pymin, pxmax, pymax)
        self._update_map_size()
        self._world_size_x = xmax - xmin
        self._world_size_y = ymax - ymin
        self._size_x2 -= pxmin * side
        self._size_y2 -= pymin * side

    def resize(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Reshape the map to the given world window, keeping known cells."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        self._reshape(imin, imax, xmin, ymin, xmax, ymax)

    def grow(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Enlarge the map so that it also covers the given world window."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        if self.is_inside(imin) and self.is_inside(imax):
            return
        imin = (min(imin[0], 0), min(imin[1], 0))
        imax = (max(imax[0], self._map_size_x - 1), max(imax[1], self._map_size_y - 1))
        self._reshape(imin, imax, xmin, ymin, xmax, ymax)

    def world2map(self, p: WorldPoint) -> MapIndex:
        """The map index of the world point ``p``."""
        return (
            _c_round((p.x - self._center.x) / self._delta) + self._size_x2,
            _c_round((p.y - self._center.y) / self._delta) + self._size_y2,
        )

    def map2world(self, p: MapIndex) -> Point:
        """The world position of the map index ``p``."""
        ix, iy = p
        return Point((ix - self._size_x2) * self._delta, (iy - self._size_y2) * self._delta) + self._center

    def get_size(self) -> Tuple[float, float, float, float]:
        """World coordinates (xmin, ymin, xmax, ymax) of the first and last cell."""
        low = self.map2world((0, 0))
        high = self.map2world((self._map_size_x - 1, self._map_size_y - 1))
        return low.x, low.y, high.x, high.y

    def _index(self, p: Address) -> MapIndex:
        if isinstance(p, (Point, OrientedPoint)):
            return self.world2map(p)
        ix, iy = p
        return int(ix), int(iy)

    def is_inside(self, p: Address) -> bool:
        """Whether the addressed cell lies inside the map."""
        return bool(self._storage.cell_state(*self._index(p)) & AccessibilityState.INSIDE)

    def _inside_index(self, p: Address) -> MapIndex:
        index = self._index(p)
        if not self._storage.cell_state(*index) & AccessibilityState.INSIDE:
            raise IndexError(f"cell {index} outside the map")
        return index

    def cell(self, p: Address) -> Any:
        """The addressed cell, which must be inside the map; allocates it if needed."""
        return self._storage.cell(*self._inside_index(p))

    def peek(self, p: Address) -> Any:
        """The addressed cell if allocated, otherwise the unknown value."""
        index = self._index(p)
        if self._storage.cell_state(*index) & AccessibilityState.ALLOCATED:
            return self._storage.cell(*index)
        return self._unknown

    def set_cell(self, p: Address, value: Any) -> None:
        """Store ``value`` in the addressed cell, which must be inside the map."""
        self._storage.set_cell(*self._inside_index(p), value)

    def to_double_array(self, convert: Callable[[Any], float] = float) -> Array2D[float]:
        """The map as a dense array of numbers; the last row and column are left out."""
        array: Array2D[float] = Array2D(self._map_size_x - 1, self._map_size_y - 1, float)
        for x in range(self._map_size_x - 1):
            for y in range(self._map_size_y - 1):
                array.set_cell(x, y, convert(self.peek((x, y))))
        return array

    def to_double_map(self, convert: Callable[[Any], float] = float) -> GridMap:
        """A dense numeric map with the same resolution and cell indexes."""
        pmin = self.map2world((0, 0))
        pmax = self.map2world((self._map_size_x - 1, self._map_size_y - 1))
        extent = pmax - pmin
        plain = double_map((pmax + pmin) * 0.5, extent.x, extent.y, self._delta)
        for x in range(self._map_size_x - 1):
            for y in range(self._map_size_y - 1):
                plain.set_cell((x, y), convert(self.peek((x, y))))
        return plain


def map_from_world_size(
    center: WorldPoint,
    world_size_x: float,
    world_size_y: float,
    delta: float,
    storage_factory: Optional[StorageFactory] = None,
    unknown: Any = -1.0,
) -> GridMap:
    """A map of the given world size whose centre sits in the middle cell."""
    grid = GridMap.__new__(GridMap)
    grid._setup(center, world_size_x, world_size_y, delta, storage_factory, unknown)
    grid._size_x2 = grid.map_size_x >> 1
    grid._size_y2 = grid.map_size_y >> 1
    return grid


def double_map(center: WorldPoint, world_size_x: float, world_size_y: float, delta: float) -> GridMap:
    """A dense map of numbers with unknown value -1."""
    return map_from_world_size(center, world_size_x, world_size_y, delta)