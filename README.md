# gridmapkit

Building blocks for grid-based SLAM in Python: 2-D pose geometry, relative
movements, Gaussian pose statistics, dense and patch-based occupancy grids,
scan-matcher cells, a small matrix type, Parzen-window smoothing, particle
filter resampling, single ICP steps and a hill-climbing pose optimizer.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `gridmapkit.point` | Immutable `Point` and `OrientedPoint`; `normalize_angle`, `absolute_sum`, `absolute_difference`, `point_min`, `point_max`, `interpolate`, `euclidian_dist`, `radial_sort_key` |
| `gridmapkit.movement` | `FSRMovement` (forward, sideward, rotate) with `compose`, `inverted`, `move`; `compose_moves`, `move_point`, `move_between_points`, `invert_move`, `frame_transformation` |
| `gridmapkit.gaussian` | `sample_gaussian`, `eval_gaussian`, `eval_log_gaussian`, `sample_uniform_int`, `sample_uniform_double`; `Covariance3`, `EigenCovariance3`, `eigen_covariance`, `Gaussian3`, `compute_gaussian_from_samples` |
| `gridmapkit.array2d` | `AccessibilityState` flags and the dense `Array2D` grid |
| `gridmapkit.harray2d` | `HierarchicalArray2D`, a grid split into lazily created square patches with an active area |
| `gridmapkit.gridmap` | `GridMap` placing a storage in world coordinates (`world2map`, `map2world`, `resize`, `grow`, `cell`, `peek`, `set_cell`, `to_double_array`, `to_double_map`); `map_from_world_size`, `double_map` |
| `gridmapkit.smmap` | `PointAccumulator` occupancy cells and `scan_matcher_map` |
| `gridmapkit.dmatrix` | `DMatrix` with `det`, `inv`, `transpose`, `+`, `-`, `*`; `NotInvertibleMatrixError`, `IncompatibleMatrixError`, `NotSquareMatrixError` |
| `gridmapkit.datasmoother` | `DataSmoother`, a Gaussian-kernel density over weighted 1-D samples, with sampling, integration and comparison to a normal; `DataPoint`, `gauss` |
| `gridmapkit.boundingbox` | `OrientedBoundingBox` aligned with the covariance eigenvectors of a point set |
| `gridmapkit.pgm` | `write_pgm` writing a matrix as a binary P5 image |
| `gridmapkit.memusage` | `memory_usage` and `print_memory_usage` reading `VmData`/`VmSize` from a process status file |
| `gridmapkit.particlefilter` | `to_normal_form`, `to_log_form`, `resample_indexes`, `repeat_indexes`, `neff`, `normalize`, `rle`; `UniformResampler`, `Evolver`, `AuxiliaryEvolver` |
| `gridmapkit.icp` | `icp_step` and `icp_nonlinear_step` for point-pair alignment |
| `gridmapkit.optimizer` | `OptimizerParams`, `Move` and `Optimizer`, a pose search driven by a likelihood function you supply |

## Examples

Pose arithmetic:

```python
import math
from gridmapkit.point import OrientedPoint, absolute_sum, absolute_difference

robot = OrientedPoint(1.0, 2.0, math.pi / 2)
step = OrientedPoint(1.0, 0.0, 0.0)
moved = absolute_sum(robot, step)          # one metre forward along the heading
back = absolute_difference(moved, robot)   # the step again, in the robot frame
```

Relative moves:

```python
from gridmapkit.movement import move_between_points
from gridmapkit.point import OrientedPoint

move = move_between_points(OrientedPoint(0, 0, 0), OrientedPoint(1, 1, 0))
target = move.move(OrientedPoint(0, 0, 0))
undo = move.inverted()
```

A scan-matcher grid map. `cell` creates the cell's patch when needed;
`peek` returns the map's unknown value for cells not yet allocated:

```python
from gridmapkit.point import Point
from gridmapkit.smmap import scan_matcher_map

grid = scan_matcher_map(Point(0.0, 0.0), -10.0, -10.0, 10.0, 10.0, 0.05)
cell = grid.cell(grid.world2map(Point(1.0, 1.0)))
cell.update(True, Point(1.0, 1.0))
print(float(cell), cell.mean())
```

Particle resampling:

```python
from gridmapkit.particlefilter import neff, resample_indexes

weights = [0.1, 0.2, 0.7]
print(neff(weights))
print(resample_indexes(weights, 3))
```

Pose search with your own scoring function:

```python
from gridmapkit.optimizer import Optimizer, OptimizerParams
from gridmapkit.point import OrientedPoint

def likelihood(local_map, reading, pose, max_range):
    return -((pose.x - 1.0) ** 2 + pose.y ** 2 + pose.theta ** 2)

optimizer = Optimizer(OptimizerParams(), likelihood)
best = optimizer.gradient_descent(None, OrientedPoint(0.0, 0.0, 0.0))
```

## What it does not do

gridmapkit is a library of parts. It has no complete mapping pipeline: there
is no scan matcher that scores laser readings against a map, no motion model,
no particle filter loop that ties these parts together, no reader for sensor
log files and no command-line program. `Optimizer` and the evolvers only call
the likelihood and evolution functions you pass to them.