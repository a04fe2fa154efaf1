"""
Grid system aggregate, registry and factory exports.
"""

from gridsystem.system.factory import GridSystemFactory, complete_grid_properties
from gridsystem.system.grid_system import (
    DEFAULT_MAX_FONT_SIZE,
    DEFAULT_MIN_FONT_SIZE,
    GridSystem,
)
from gridsystem.system.repository import (
    CONFIG_OUTPUT_KEY,
    CONFIG_TEMPLATE_KEY,
    GridSystemRepository,
)

__all__ = [
    "GridSystem",
    "GridSystemRepository",
    "GridSystemFactory",
    "complete_grid_properties",
    "DEFAULT_MIN_FONT_SIZE",
    "DEFAULT_MAX_FONT_SIZE",
    "CONFIG_TEMPLATE_KEY",
    "CONFIG_OUTPUT_KEY",
]
