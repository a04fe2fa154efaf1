"""
Read-only template data built from a grid system.
"""

from typing import Any, Dict, List, Optional

from gridsystem.config.settings import get_settings
from gridsystem.core.types import normalize_number
from gridsystem.grid.grid_map import GridMap
from gridsystem.styles.object_map import EMULATE_KEY, HIDE_KEY
from gridsystem.system.grid_system import GridSystem

GRID_CLASS_PREFIX = ".grid-"
CONTAINER_CLASS = ".container"

# Visually hides an element while keeping it available to screen readers.
HIDDEN_DECLARATIONS: Dict[str, str] = {
    "position": "absolute !important",
    "border": "0 !important",
    "padding": "0 !important",
    "height": "1px !important",
    "width": "1px !important",
    "clip": "rect(0 0 0 0)",
    "margin": "-1px !important",
    "overflow": "hidden",
}

LAST_COL_DECLARATIONS: Dict[str, str] = {"margin-right": "0"}


def px(value: float) -> str:
    return f"{normalize_number(value)}px"


def grid_class(column: int) -> str:
    return f"{GRID_CLASS_PREFIX}{column}"


def build_template_context(
    grid_system: GridSystem, base_font_size: Optional[float] = None
) -> Dict[str, Any]:
    """
    Collect everything a template needs to render a grid system.

    Args:
        grid_system: The grid system to describe
        base_font_size: Pixels per em for em-based ranges (defaults to settings)

    Returns:
        Plain data: system attributes, one entry per grid map in width order,
        the objects and the helper declaration sets
    """
    if base_font_size is None:
        base_font_size = get_settings().base_font_size

    max_unit_count = grid_system.max_unit_count()

    return {
        "name": grid_system.name,
        "min_font_size": grid_system.min_font_size,
        "max_font_size": grid_system.max_font_size,
        "base_font_size": normalize_number(base_font_size),
        "max_unit_count": max_unit_count,
        "grid_classes": [grid_class(i) for i in range(1, max_unit_count + 1)],
        "grids": [
            _grid_map_context(grid_system, grid_map, base_font_size)
            for grid_map in grid_system.grid_maps
        ],
        "objects": [
            {
                "selector": object_map.selector,
                "base_declarations": object_map.style_object.base_declarations,
            }
            for object_map in grid_system.object_maps
        ],
        "hidden_declarations": dict(HIDDEN_DECLARATIONS),
        "last_col_declarations": dict(LAST_COL_DECLARATIONS),
    }


def _grid_map_context(
    grid_system: GridSystem, grid_map: GridMap, base_font_size: float
) -> Dict[str, Any]:
    grid = grid_map.grid
    emulators = grid_system.column_emulators(grid_map)

    col_styles: List[Dict[str, Any]] = []
    container_col_styles: List[Dict[str, Any]] = []
    for column in range(1, grid.unit_count + 1):
        emulating = [obj.selector for obj in grid_system.column_emulators(grid_map, column)]
        col_styles.append({
            "selectors": [grid_class(column)] + emulating,
            "declarations": {"width": px(grid.width_of_units(column, False))},
        })
        container_col_styles.append({
            "selectors": [f"{CONTAINER_CLASS}{grid_class(column)}"],
            "declarations": {"width": px(grid.width_of_units(column, True))},
        })

    object_styles = {}
    for object_map in grid_system.object_maps:
        if object_map.has_declarations(grid_map):
            declarations = object_map.get_declarations(grid_map)
            declarations.pop(EMULATE_KEY, None)
            declarations.pop(HIDE_KEY, None)
            object_styles[object_map.selector] = declarations

    context = grid_map.to_dict(base_font_size)
    context.update({
        "grid": grid.to_dict(),
        "additional_cols": [obj.selector for obj in emulators],
        "col_styles": col_styles,
        "container_col_styles": container_col_styles,
        "hidden": [obj.selector for obj in grid_system.hidden_objects(grid_map)],
        "object_styles": object_styles,
    })
    return context
