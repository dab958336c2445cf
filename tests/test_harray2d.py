import pytest

from gridmapkit.array2d import AccessibilityState
from gridmapkit.harray2d import HierarchicalArray2D


def test_dimensions_count_patches():
    grid = HierarchicalArray2D(64, 32, 4)
    assert grid.xsize == 64 >> 4
    assert grid.ysize == 32 >> 4
    assert grid.patch_magnitude == 4
    assert grid.patch_size == 1 << 4


def test_default_patch_magnitude():
    grid = HierarchicalArray2D(64, 64)
    assert grid.patch_magnitude == 5


def test_patch_indexes():
    grid = HierarchicalArray2D(64, 64, 4)
    assert grid.patch_indexes(17, 3) == (17 >> 4, 3 >> 4)
    assert grid.patch_indexes(-1, 3) == (-1, -1)
    assert grid.patch_indexes(3, -5) == (-1, -1)


def test_cells_start_unallocated():
    grid = HierarchicalArray2D(32, 32, 4)
    assert not grid.is_allocated(5, 5)
    assert grid.cell_state(5, 5) == AccessibilityState.INSIDE
    assert grid.cell_state(40, 5) == AccessibilityState.OUTSIDE
    assert grid.cell_state(-1, 5) == AccessibilityState.OUTSIDE


def test_cell_allocates_patch():
    grid = HierarchicalArray2D(32, 32, 4)
    assert grid.cell(5, 5) == float()
    assert grid.is_allocated(5, 5)
    assert grid.is_allocated(0, 15)
    assert not grid.is_allocated(16, 0)
    assert grid.cell_state(5, 5) == AccessibilityState.INSIDE | AccessibilityState.ALLOCATED


def test_set_cell_and_peek_roundtrip():
    grid = HierarchicalArray2D(32, 32, 4)
    grid.set_cell(20, 3, 2.5)
    assert grid.peek(20, 3) == 2.5
    assert grid.cell(20, 3) == 2.5


def test_peek_unallocated_raises():
    grid = HierarchicalArray2D(32, 32, 4)
    with pytest.raises(IndexError):
        grid.peek(1, 1)


@pytest.mark.parametrize("x,y", [(32, 0), (0, 32), (-1, 0)])
def test_cell_outside_raises(x, y):
    grid = HierarchicalArray2D(32, 32, 4)
    with pytest.raises(IndexError):
        grid.cell(x, y)
    with pytest.raises(IndexError):
        grid.set_cell(x, y, 1.0)


def test_copy_shares_patches_until_detached():
    grid = HierarchicalArray2D(32, 32, 4)
    grid.set_cell(1, 1, 5.0)
    clone = grid.copy()
    assert clone.cell(1, 1) == 5.0
    grid.set_cell(1, 2, 6.0)
    assert clone.cell(1, 2) == 6.0
    clone.set_active_area([(1, 1)])
    clone.alloc_active_area()
    clone.set_cell(1, 1, 7.0)
    assert grid.cell(1, 1) == 5.0
    assert clone.cell(1, 1) == 7.0


def test_copy_has_empty_active_area():
    grid = HierarchicalArray2D(32, 32, 4)
    grid.set_active_area([(1, 1)])
    assert grid.copy().active_area == frozenset()


def test_set_active_area_coordinates():
    grid = HierarchicalArray2D(64, 64, 4)
    grid.set_active_area([(17, 40)])
    assert grid.active_area == {grid.patch_indexes(17, 40)}
    grid.set_active_area([(2, 3)], patch_coords=True)
    assert grid.active_area == {(2, 3)}


def test_alloc_active_area_creates_missing_patches():
    grid = HierarchicalArray2D(64, 64, 4)
    grid.set_active_area([(1, 2)], patch_coords=True)
    grid.alloc_active_area()
    assert grid.is_allocated(1 << 4, 2 << 4)
    assert not grid.is_allocated(0, 0)


def test_resize_shifts_patches():
    grid = HierarchicalArray2D(32, 32, 4)
    grid.set_cell(20, 20, 3.0)
    grid.resize(-1, -1, 2, 2)
    assert grid.xsize == 2 - (-1)
    assert grid.ysize == 2 - (-1)
    assert grid.cell(20 + 16, 20 + 16) == 3.0
    assert not grid.is_allocated(0, 0)


def test_create_patch_has_patch_side():
    grid = HierarchicalArray2D(32, 32, 3, factory=list)
    patch = grid.create_patch((0, 0))
    assert (patch.xsize, patch.ysize) == (grid.patch_size, grid.patch_size)
    assert patch.cell(0, 0) == []