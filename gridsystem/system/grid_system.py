"""
The validated aggregate of grid maps and object maps for one named layout system.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from gridsystem.core.types import normalize_number, upper_bound
from gridsystem.error_handling.exceptions import (
    DuplicateEntityError,
    InvalidConfigurationError,
    NotFoundError,
    OverlappingRangeError,
)
from gridsystem.grid.grid_map import GridMap
from gridsystem.monitoring.logger import get_logger
from gridsystem.styles.object_map import EMULATE_KEY, HIDE_KEY, ObjectMap
from gridsystem.styles.style_object import StyleObject

logger = get_logger(__name__)

DEFAULT_MIN_FONT_SIZE = 14
DEFAULT_MAX_FONT_SIZE = 22

_COLUMN_EMULATORS = "column_emulators"
_HIDDEN_OBJECTS = "hidden_objects"


class GridSystem:
    """
    A named set of non-overlapping grid maps and uniquely selected object maps.

    Object maps are unique by selector; grid map width ranges never overlap
    (touching endpoints are fine). The column-emulator and hidden-object queries
    are cached per grid map and the caches are dropped whenever an object map
    or a grid map is added.

    Not safe for concurrent mutation and query.
    """

    def __init__(
        self,
        name: str,
        min_font_size: Optional[float] = DEFAULT_MIN_FONT_SIZE,
        max_font_size: Optional[float] = DEFAULT_MAX_FONT_SIZE,
        object_maps: Iterable[ObjectMap] = (),
        grid_maps: Iterable[GridMap] = (),
    ) -> None:
        """
        Initialize a grid system.

        Args:
            name: System name (e.g. "main site grid system")
            min_font_size: Smallest base font size allowed, in pixels; None for the default
            max_font_size: Largest base font size allowed, in pixels; None for the default
            object_maps: Object maps to add
            grid_maps: Grid maps to add

        Raises:
            InvalidConfigurationError: If the name is empty or the font sizes are inverted
        """
        name = str(name).strip() if name is not None else ""
        if not name:
            raise InvalidConfigurationError(
                "A grid system needs a non-empty name",
                expected="non-empty string",
                received=name,
            )

        self._name = name
        self._min_font_size = self._font_size("min_font_size", min_font_size, DEFAULT_MIN_FONT_SIZE)
        self._max_font_size = self._font_size("max_font_size", max_font_size, DEFAULT_MAX_FONT_SIZE)

        if self._max_font_size < self._min_font_size:
            raise InvalidConfigurationError(
                f"The grid system's max_font_size ({self._max_font_size}) can't be "
                f"less than its min_font_size ({self._min_font_size})",
                expected=f"max_font_size >= {self._min_font_size}",
                received=self._max_font_size,
            )

        self._object_maps: Dict[str, ObjectMap] = {}
        self._grid_maps: List[GridMap] = []
        self._cache: Dict[str, Dict[str, List[StyleObject]]] = {
            _COLUMN_EMULATORS: {},
            _HIDDEN_OBJECTS: {},
        }

        self.set_object_maps(object_maps)
        self.set_grid_maps(grid_maps)

    @staticmethod
    def _font_size(label: str, value: Any, default: float) -> float:
        if value is None:
            return default
        try:
            size = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidConfigurationError(
                f"{label} must be a number, got {value!r}",
                expected="number > 0",
                received=value,
                cause=exc,
            ) from exc
        if size <= 0:
            raise InvalidConfigurationError(
                f"{label} must be positive, got {value!r}",
                expected="number > 0",
                received=value,
            )
        return normalize_number(size)

    @property
    def name(self) -> str:
        return self._name

    @property
    def min_font_size(self) -> float:
        return self._min_font_size

    @property
    def max_font_size(self) -> float:
        return self._max_font_size

    @property
    def object_maps(self) -> Tuple[ObjectMap, ...]:
        return tuple(self._object_maps.values())

    @property
    def grid_maps(self) -> Tuple[GridMap, ...]:
        """Grid maps ordered by minimum width."""
        return tuple(self._grid_maps)

    # ------------------------------------------------------------------ #
    # Object maps
    # ------------------------------------------------------------------ #
    def set_object_maps(self, object_maps: Iterable[ObjectMap]) -> None:
        """Replace all object maps, adding them one by one; restores the old set on failure."""
        previous = self._object_maps
        self._object_maps = {}
        try:
            for object_map in object_maps:
                self.add_object_map(object_map)
        except Exception:
            self._object_maps = previous
            raise
        finally:
            self._invalidate_caches()

    def add_object_map(self, object_map: ObjectMap) -> None:
        """
        Add an object map.

        Raises:
            InvalidConfigurationError: If the argument isn't an ObjectMap
            DuplicateEntityError: If an object map for the same selector exists
        """
        if not isinstance(object_map, ObjectMap):
            raise InvalidConfigurationError(
                f"Expected an ObjectMap, got {type(object_map).__name__}",
                expected="ObjectMap",
                received=type(object_map).__name__,
            )

        selector = object_map.selector
        if selector in self._object_maps:
            raise DuplicateEntityError(
                f"An object map for the object with selector '{selector}' already "
                f"exists in grid system '{self._name}'",
                entity_type="ObjectMap",
                key=selector,
            )

        self._object_maps[selector] = object_map
        self._invalidate_caches()
        logger.debug(
            f"Added object map '{selector}' to grid system '{self._name}'",
            extra={"grid_system": self._name, "selector": selector},
        )

    def get_object_map(self, selector: str) -> ObjectMap:
        """
        Get the object map for a selector.

        Raises:
            NotFoundError: If no object map has that selector
        """
        key = str(selector).strip()
        if key not in self._object_maps:
            raise NotFoundError(
                f"Grid system '{self._name}' has no object map for selector '{key}'",
                entity_type="ObjectMap",
                key=key,
            )
        return self._object_maps[key]

    # ------------------------------------------------------------------ #
    # Grid maps
    # ------------------------------------------------------------------ #
    def set_grid_maps(self, grid_maps: Iterable[GridMap]) -> None:
        """Replace all grid maps, adding them one by one; restores the old set on failure."""
        previous = self._grid_maps
        self._grid_maps = []
        try:
            for grid_map in grid_maps:
                self.add_grid_map(grid_map)
        except Exception:
            self._grid_maps = previous
            raise
        finally:
            self._invalidate_caches()

    def add_grid_map(self, grid_map: GridMap) -> None:
        """
        Add a grid map.

        Raises:
            InvalidConfigurationError: If the argument isn't a GridMap
            DuplicateEntityError: If this very grid map was already added
            OverlappingRangeError: If its width range intersects an existing map's range
        """
        if not isinstance(grid_map, GridMap):
            raise InvalidConfigurationError(
                f"Expected a GridMap, got {type(grid_map).__name__}",
                expected="GridMap",
                received=type(grid_map).__name__,
            )

        for existing in self._grid_maps:
            if existing is grid_map:
                raise DuplicateEntityError(
                    f"GridMap {grid_map.id} was already added to grid system '{self._name}'",
                    entity_type="GridMap",
                    key=grid_map.id,
                )
            if grid_map.overlaps(existing):
                raise OverlappingRangeError(
                    f"A GridMap already exists in grid system '{self._name}' that covers "
                    f"this map's widths: [{grid_map.min_width}, {grid_map.max_width}] "
                    f"overlaps [{existing.min_width}, {existing.max_width}]",
                    new_range=grid_map.width_range,
                    existing_range=existing.width_range,
                )

        self._grid_maps.append(grid_map)
        self._grid_maps.sort(key=lambda m: (m.min_width, upper_bound(m.max_width)))
        # Cached query results cover grid map changes too, not only object map changes.
        self._invalidate_caches()
        logger.debug(
            f"Added grid map [{grid_map.min_width}, {grid_map.max_width}] "
            f"to grid system '{self._name}'",
            extra={"grid_system": self._name, "grid_map": grid_map.id},
        )

    def get_grid_map(self, grid_map_id: str) -> GridMap:
        """
        Get a grid map by id.

        Raises:
            NotFoundError: If no grid map has that id
        """
        for grid_map in self._grid_maps:
            if grid_map.id == grid_map_id:
                return grid_map
        raise NotFoundError(
            f"Grid system '{self._name}' has no grid map with id '{grid_map_id}'",
            entity_type="GridMap",
            key=grid_map_id,
        )

    def grid_map_for_width(self, width: float) -> Optional[GridMap]:
        """The grid map active at a viewport width, if any."""
        for grid_map in self._grid_maps:
            if grid_map.contains_width(width):
                return grid_map
        return None

    def max_unit_count(self) -> int:
        """Number of units in the grid with the most units; 0 without grid maps."""
        return max((m.grid.unit_count for m in self._grid_maps), default=0)

    # ------------------------------------------------------------------ #
    # Derived queries
    # ------------------------------------------------------------------ #
    def column_emulators(
        self, grid_map: GridMap, column: Optional[Any] = None
    ) -> List[StyleObject]:
        """
        Get objects that, at the given grid map, emulate grid columns.

        Args:
            grid_map: Grid map whose declarations to check
            column: Only return objects emulating this column (1-indexed)

        Returns:
            Style objects in the order their object maps were added
        """
        emulators = self._cached(_COLUMN_EMULATORS, grid_map, EMULATE_KEY)
        if column is None:
            return list(emulators)

        wanted = str(column).strip()
        return [
            obj for obj in emulators
            if str(self._object_maps[obj.selector].get_declarations(grid_map)[EMULATE_KEY]).strip()
            == wanted
        ]

    def hidden_objects(self, grid_map: GridMap) -> List[StyleObject]:
        """Get objects hidden at the given grid map."""
        return list(self._cached(_HIDDEN_OBJECTS, grid_map, HIDE_KEY))

    def _cached(self, cache_name: str, grid_map: GridMap, declaration: str) -> List[StyleObject]:
        cache = self._cache[cache_name]
        if grid_map.id not in cache:
            cache[grid_map.id] = self._objects_with_declaration(grid_map, declaration)
        return cache[grid_map.id]

    def _objects_with_declaration(self, grid_map: GridMap, declaration: str) -> List[StyleObject]:
        """Objects whose declarations for the grid map include the given property."""
        result = []
        for object_map in self._object_maps.values():
            if not object_map.has_declarations(grid_map):
                continue
            if declaration in object_map.get_declarations(grid_map):
                result.append(object_map.style_object)
        return result

    def _invalidate_caches(self) -> None:
        """Drop cached query results; they are rebuilt lazily by the next query."""
        for cache in self._cache.values():
            cache.clear()

    def __repr__(self) -> str:
        return (
            f"GridSystem({self._name!r}, grid_maps={len(self._grid_maps)}, "
            f"object_maps={len(self._object_maps)})"
        )
