"""
Responsive grid systems: column grids mapped to breakpoints and the
per-breakpoint declarations of the objects laid out on them.
"""

from gridsystem.error_handling.exceptions import (
    DuplicateEntityError,
    GridSystemError,
    InvalidConfigurationError,
    NotFoundError,
    OverlappingRangeError,
)
from gridsystem.grid import Grid, GridMap
from gridsystem.styles import ObjectMap, StyleObject
from gridsystem.system import GridSystem, GridSystemFactory, GridSystemRepository

__version__ = "0.1.0"

__all__ = [
    "Grid",
    "GridMap",
    "StyleObject",
    "ObjectMap",
    "GridSystem",
    "GridSystemRepository",
    "GridSystemFactory",
    "GridSystemError",
    "InvalidConfigurationError",
    "DuplicateEntityError",
    "OverlappingRangeError",
    "NotFoundError",
]
