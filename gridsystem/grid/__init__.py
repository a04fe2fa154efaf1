"""
Grid geometry module exports.
"""

from gridsystem.grid.grid import Grid
from gridsystem.grid.grid_map import DEFAULT_SCALING_INTERVAL, GridMap

__all__ = [
    "Grid",
    "GridMap",
    "DEFAULT_SCALING_INTERVAL",
]
