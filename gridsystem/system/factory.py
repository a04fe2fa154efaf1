"""
Builds grid systems and repositories from definition records.
"""

import math
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ValidationError

from gridsystem.config.definitions import (
    GridDefinition,
    GridSystemDefinition,
    ObjectDefinition,
)
from gridsystem.config.settings import Settings, get_settings
from gridsystem.core.types import OutputConfig, normalize_number
from gridsystem.error_handling.exceptions import (
    DuplicateEntityError,
    InvalidConfigurationError,
)
from gridsystem.grid.grid import Grid
from gridsystem.grid.grid_map import GridMap
from gridsystem.monitoring.logger import get_logger
from gridsystem.styles.object_map import ObjectMap
from gridsystem.styles.style_object import StyleObject
from gridsystem.system.grid_system import GridSystem
from gridsystem.system.repository import GridSystemRepository

logger = get_logger(__name__)

DefinitionInput = Union[GridSystemDefinition, Mapping[str, Any]]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def complete_grid_properties(definition: GridDefinition) -> Dict[str, Any]:
    """
    Turn a grid definition into Grid constructor arguments.

    In measure-relative mode the gutter and padding are percentages of the
    measure width, and the unit width is whatever the measure leaves over for
    each of its units. Gutter and padding are rounded to whole pixels; the
    unit width is floored when the padding was rounded up and ceiled otherwise.

    Args:
        definition: Validated grid definition

    Returns:
        Keyword arguments for Grid
    """
    properties: Dict[str, Any] = {
        "unit_count": definition.unit_count,
        "measure_unit_count": definition.measure_unit_count,
        "gutter_width": definition.gutter_width,
        "padding_width": definition.padding_width,
        "text_size": definition.text_size,
        "unit_width": definition.unit_width,
        "total_width": definition.total_width,
        "margin": definition.margin,
        "is_one_col": definition.is_one_col,
    }

    if definition.is_measure_relative:
        measure_width = definition.measure_width
        measure_units = definition.measure_unit_count
        gutter_width = definition.gutter_percentage * measure_width
        padding_width = definition.padding_percentage * measure_width

        total_padding = measure_units * padding_width * 2
        total_gutters = (measure_units - 1) * gutter_width
        unit_width = (measure_width - total_padding - total_gutters) / measure_units

        rounded_padding = _round_half_up(padding_width)
        properties["gutter_width"] = _round_half_up(gutter_width)
        properties["padding_width"] = rounded_padding
        properties["unit_width"] = (
            math.floor(unit_width) if padding_width < rounded_padding else math.ceil(unit_width)
        )

    return {
        key: normalize_number(value) for key, value in properties.items()
    }


class GridSystemFactory:
    """
    Creates grid systems from definition records.

    Reading and locating configuration files is left to the caller; the
    factory only sees already-parsed mappings or definition models.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """
        Initialize the factory.

        Args:
            settings: Supplies default font sizes and scaling interval
        """
        self.settings = settings or get_settings()

    def build_repository(
        self,
        definitions: Iterable[DefinitionInput],
        repository: Optional[GridSystemRepository] = None,
    ) -> GridSystemRepository:
        """
        Build every grid system and register it with its output config.

        Args:
            definitions: One record per grid system
            repository: Repository to fill; a new one if omitted

        Returns:
            The filled repository
        """
        repository = repository if repository is not None else GridSystemRepository()

        for definition in definitions:
            grid_system, output_config = self.build_grid_system(definition)
            repository.add_grid_system(grid_system)
            repository.set_grid_system_config(grid_system, output_config)

        logger.info(f"Built repository with {len(repository)} grid system(s)")
        return repository

    def build_grid_system(self, definition: DefinitionInput) -> Tuple[GridSystem, OutputConfig]:
        """
        Build one grid system.

        Args:
            definition: Grid system record

        Returns:
            The grid system and its output config

        Raises:
            InvalidConfigurationError: If the record is malformed or contradictory
        """
        definition = self._validate(GridSystemDefinition, definition)

        min_font_size = definition.min_font_size
        if min_font_size is None:
            min_font_size = self.settings.default_min_font_size
        max_font_size = definition.max_font_size
        if max_font_size is None:
            max_font_size = self.settings.default_max_font_size

        grid_system = GridSystem(definition.name, min_font_size, max_font_size)

        grid_maps: Dict[str, GridMap] = {}
        for index, grid_definition in enumerate(definition.grids):
            grid_id = grid_definition.id if grid_definition.id is not None else str(index)
            if grid_id in grid_maps:
                raise DuplicateEntityError(
                    f"Grid id '{grid_id}' is used more than once in grid system "
                    f"'{definition.name}'",
                    entity_type="GridDefinition",
                    key=grid_id,
                )
            grid_maps[grid_id] = self._build_grid_map(grid_definition)

        self._close_open_ranges(grid_maps.values())
        grid_system.set_grid_maps(grid_maps.values())

        for object_definition in definition.objects:
            grid_system.add_object_map(
                self._build_object_map(object_definition, grid_maps)
            )

        output_config = OutputConfig(
            template=definition.template, output_path=definition.output_path
        )

        logger.info(
            f"Built grid system '{grid_system.name}' with {len(grid_system.grid_maps)} "
            f"grid map(s) and {len(grid_system.object_maps)} object map(s)",
            extra={"grid_system": grid_system.name},
        )
        return grid_system, output_config

    def _build_grid_map(self, definition: GridDefinition) -> GridMap:
        grid = Grid(**complete_grid_properties(definition))
        scaling_interval = definition.scaling_interval or self.settings.default_scaling_interval()
        return GridMap(grid, definition.criteria(), scaling_interval)

    @staticmethod
    def _close_open_ranges(grid_maps: Iterable[GridMap]) -> None:
        """Cap each unbounded grid map, except the widest, where the next one starts."""
        ordered = sorted(grid_maps, key=lambda m: m.min_width)
        for current, following in zip(ordered, ordered[1:]):
            if current.max_width is None and following.min_width > current.min_width:
                current.set_properties({"max_width": following.min_width})
                logger.debug(
                    f"Capped open grid map range at {following.min_width}, "
                    f"where grid map {following.id} starts",
                    extra={"grid_map": current.id},
                )

    def _build_object_map(
        self, definition: ObjectDefinition, grid_maps: Mapping[str, GridMap]
    ) -> ObjectMap:
        selector = definition.resolved_selector()
        object_map = ObjectMap(StyleObject(selector), grid_maps.values())

        for declaration_set in definition.declaration_sets:
            if declaration_set.base:
                object_map.style_object.set_base_declarations(declaration_set.declarations)
                continue

            grid_map = grid_maps.get(declaration_set.grid)
            if grid_map is None:
                raise InvalidConfigurationError(
                    f"Declarations for '{selector}' target unknown grid "
                    f"'{declaration_set.grid}'",
                    expected=sorted(grid_maps),
                    received=declaration_set.grid,
                )
            object_map.add_declarations(grid_map, declaration_set.declarations)

        return object_map

    @staticmethod
    def _validate(model: type, data: Any) -> Any:
        """Validate raw input into a definition model, re-raising pydantic errors."""
        if isinstance(data, model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump()
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise InvalidConfigurationError(
                f"Invalid {model.__name__}: {exc.error_count()} validation error(s)",
                expected=model.__name__,
                received=data,
                details={"errors": exc.errors(include_url=False, include_context=False)},
                cause=exc,
            ) from exc
