"""
Name-keyed registry of grid systems and their output configuration.
"""

from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import ValidationError

from gridsystem.core.types import OutputConfig
from gridsystem.error_handling.exceptions import InvalidConfigurationError, NotFoundError
from gridsystem.monitoring.logger import get_logger
from gridsystem.system.grid_system import GridSystem

logger = get_logger(__name__)

CONFIG_TEMPLATE_KEY = "template"
CONFIG_OUTPUT_KEY = "output_path"


class GridSystemRepository:
    """Stores grid systems by name. Owned and passed around by the caller."""

    def __init__(self, grid_systems: Iterable[GridSystem] = ()) -> None:
        self._grid_systems: Dict[str, GridSystem] = {}
        self._configs: Dict[str, OutputConfig] = {}
        self.set_grid_systems(grid_systems)

    def add_grid_system(self, grid_system: GridSystem) -> None:
        """Register a grid system, replacing any system with the same name."""
        if not isinstance(grid_system, GridSystem):
            raise InvalidConfigurationError(
                f"Expected a GridSystem, got {type(grid_system).__name__}",
                expected="GridSystem",
                received=type(grid_system).__name__,
            )

        name = grid_system.name
        if name in self._grid_systems and self._grid_systems[name] is not grid_system:
            logger.warning(
                f"Replacing grid system '{name}' in repository",
                extra={"grid_system": name},
            )
            self._configs.pop(name, None)

        self._grid_systems[name] = grid_system

    def set_grid_systems(self, grid_systems: Iterable[GridSystem]) -> None:
        """Replace every registered grid system."""
        self._grid_systems = {}
        self._configs = {}
        for grid_system in grid_systems:
            self.add_grid_system(grid_system)

    def get_grid_system(self, name: str) -> GridSystem:
        """
        Get a grid system by name.

        Raises:
            NotFoundError: If no grid system has that name
        """
        if name not in self._grid_systems:
            raise NotFoundError(
                f"No grid system named '{name}' is registered",
                entity_type="GridSystem",
                key=name,
            )
        return self._grid_systems[name]

    @property
    def grid_systems(self) -> Dict[str, GridSystem]:
        return dict(self._grid_systems)

    def names(self) -> List[str]:
        return list(self._grid_systems)

    def __contains__(self, name: object) -> bool:
        return name in self._grid_systems

    def __len__(self) -> int:
        return len(self._grid_systems)

    def set_grid_system_config(
        self,
        grid_system: GridSystem,
        config: Union[OutputConfig, Mapping[str, Any]],
    ) -> None:
        """
        Store the template and output path for a registered grid system.

        Args:
            grid_system: A grid system in this repository
            config: Exactly the keys ``template`` and ``output_path``

        Raises:
            NotFoundError: If the grid system isn't registered
            InvalidConfigurationError: If config has missing or extra keys
        """
        name = grid_system.name
        if self._grid_systems.get(name) is not grid_system:
            raise NotFoundError(
                f"Grid system '{name}' must be added to the repository before its config is set",
                entity_type="GridSystem",
                key=name,
            )

        if not isinstance(config, OutputConfig):
            try:
                config = OutputConfig.model_validate(dict(config))
            except (TypeError, ValueError, ValidationError) as exc:
                raise InvalidConfigurationError(
                    f"Config for grid system '{name}' must have the keys, and only the keys, "
                    f"'{CONFIG_TEMPLATE_KEY}' and '{CONFIG_OUTPUT_KEY}'",
                    expected=[CONFIG_TEMPLATE_KEY, CONFIG_OUTPUT_KEY],
                    received=sorted(config) if isinstance(config, Mapping) else config,
                    cause=exc,
                ) from exc

        self._configs[name] = config

    def get_grid_system_config(self, grid_system: Union[GridSystem, str]) -> OutputConfig:
        """
        Get the output config for a grid system or grid system name.

        Raises:
            NotFoundError: If no config was stored for it
        """
        name = grid_system.name if isinstance(grid_system, GridSystem) else grid_system
        if name not in self._configs:
            raise NotFoundError(
                f"No output config is stored for grid system '{name}'",
                entity_type="OutputConfig",
                key=name,
            )
        return self._configs[name]
