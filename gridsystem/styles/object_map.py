"""
Per-breakpoint declarations for one styleable object.
"""

from typing import Any, Dict, Iterable, Mapping, Tuple

from gridsystem.core.expressions import ExpressionEvaluator
from gridsystem.error_handling.exceptions import (
    DuplicateEntityError,
    InvalidConfigurationError,
    NotFoundError,
)
from gridsystem.grid.grid import Grid
from gridsystem.grid.grid_map import GridMap
from gridsystem.monitoring.logger import get_logger
from gridsystem.styles.style_object import StyleObject

logger = get_logger(__name__)

EMULATE_KEY = "emulate"
HIDE_KEY = "hide"


def grid_variables(grid: Grid) -> Dict[str, Any]:
    """
    Variables a declaration value may reference for the given grid.

    Args:
        grid: Grid supplying the values

    Returns:
        Variable name (without sigil) to pixel value
    """
    variables: Dict[str, Any] = {
        "padding-width": grid.padding_width,
        "gutter-width": grid.gutter_width,
        "unit-width": grid.unit_width,
    }
    for index in range(1, grid.unit_count + 1):
        variables[f"unit-{index}-width"] = grid.width_of_units(index, False)
        variables[f"unit-{index}-size"] = grid.width_of_units(index, True)
    return variables


class ObjectMap:
    """
    How one style object is displayed across several grid maps.

    The grid maps are fixed at construction. Declarations are added per grid
    map, with ``$``-variable expressions resolved against that map's grid at
    add time. An ``emulate`` declaration (value: a unit index) makes the object
    behave like that grid column; a ``hide`` declaration hides it.
    """

    def __init__(self, style_object: StyleObject, grid_maps: Iterable[GridMap]) -> None:
        """
        Initialize an object map.

        Args:
            style_object: The object being mapped
            grid_maps: Grid maps the object can receive declarations for

        Raises:
            InvalidConfigurationError: If an entry isn't a GridMap
            DuplicateEntityError: If the same GridMap is given more than once
        """
        if not isinstance(style_object, StyleObject):
            raise InvalidConfigurationError(
                f"Expected a StyleObject, got {type(style_object).__name__}",
                expected="StyleObject",
                received=type(style_object).__name__,
            )

        self._object = style_object
        self._grid_maps: Dict[str, GridMap] = {}
        self._mapping: Dict[str, Dict[str, Any]] = {}
        self._evaluators: Dict[str, ExpressionEvaluator] = {}

        for index, grid_map in enumerate(grid_maps):
            if not isinstance(grid_map, GridMap):
                raise InvalidConfigurationError(
                    f"The grid map at grid_maps[{index}] is not a GridMap "
                    f"(got {type(grid_map).__name__})",
                    expected="GridMap",
                    received=type(grid_map).__name__,
                )
            if grid_map.id in self._grid_maps:
                raise DuplicateEntityError(
                    f"The same GridMap cannot be provided more than once "
                    f"(grid_maps[{index}], id {grid_map.id})",
                    entity_type="GridMap",
                    key=grid_map.id,
                )
            self._grid_maps[grid_map.id] = grid_map

    @property
    def style_object(self) -> StyleObject:
        return self._object

    @property
    def selector(self) -> str:
        return self._object.selector

    @property
    def grid_maps(self) -> Tuple[GridMap, ...]:
        return tuple(self._grid_maps.values())

    def add_declarations(self, grid_map: GridMap, declarations: Mapping[str, Any]) -> None:
        """
        Add declarations for one grid map, merging over earlier ones.

        Args:
            grid_map: One of the grid maps given to the constructor
            declarations: Property to value; ``$`` expressions are resolved now

        Raises:
            InvalidConfigurationError: If the grid map isn't part of this object map
                or a value can't be resolved
        """
        if not self._is_mapped(grid_map):
            raise InvalidConfigurationError(
                f"The grid map you provided declarations for doesn't exist in the "
                f"object map for '{self.selector}'. Grid maps to use must be "
                "provided to the constructor",
                expected=list(self._grid_maps),
                received=getattr(grid_map, "id", grid_map),
            )

        evaluator = self._evaluator_for(grid_map)
        resolved = {
            prop: evaluator.resolve(prop, value) for prop, value in declarations.items()
        }

        self._mapping.setdefault(grid_map.id, {}).update(resolved)
        logger.debug(
            f"Added {len(resolved)} declarations to '{self.selector}'",
            extra={"selector": self.selector, "grid_map": grid_map.id},
        )

    def get_declarations(self, grid_map: GridMap) -> Dict[str, Any]:
        """
        Get the accumulated declarations for a grid map.

        Raises:
            NotFoundError: If declarations were never added for that grid map
        """
        key = getattr(grid_map, "id", None)
        if key not in self._mapping:
            raise NotFoundError(
                f"No declarations were added to the object map for '{self.selector}' "
                "for the grid map requested",
                entity_type="declarations",
                key=key,
            )
        return dict(self._mapping[key])

    def has_declarations(self, grid_map: GridMap) -> bool:
        """Whether declarations were ever added for the grid map (even empty ones)."""
        return getattr(grid_map, "id", None) in self._mapping

    def _is_mapped(self, grid_map: Any) -> bool:
        return isinstance(grid_map, GridMap) and self._grid_maps.get(grid_map.id) is grid_map

    def _evaluator_for(self, grid_map: GridMap) -> ExpressionEvaluator:
        evaluator = self._evaluators.get(grid_map.id)
        if evaluator is None:
            evaluator = ExpressionEvaluator(grid_variables(grid_map.grid))
            self._evaluators[grid_map.id] = evaluator
        return evaluator

    def __repr__(self) -> str:
        return f"ObjectMap({self.selector!r}, grid_maps={len(self._grid_maps)})"
