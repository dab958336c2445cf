"""Pose geometry, occupancy grids, Gaussian statistics and particle filter tools for grid-based SLAM."""

__version__ = "0.1.0"