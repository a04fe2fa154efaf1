"""
Produces a grid system's output from its data and a template.
"""

from typing import Dict, Optional, Tuple

from gridsystem.core.interfaces import TemplateRenderer
from gridsystem.monitoring.logger import get_logger
from gridsystem.rendering.context import build_template_context
from gridsystem.system.grid_system import GridSystem
from gridsystem.system.repository import GridSystemRepository

logger = get_logger(__name__)


class GridController:
    """
    Renders grid systems through an injected template engine.

    Writing the rendered text to the configured output path is left to the
    caller (e.g. a build step iterating over generate_all()).
    """

    def __init__(
        self, renderer: TemplateRenderer, base_font_size: Optional[float] = None
    ) -> None:
        """
        Initialize the controller.

        Args:
            renderer: Template engine adapter
            base_font_size: Pixels per em passed to the template context
        """
        self.renderer = renderer
        self.base_font_size = base_font_size

    def generate(self, grid_system: GridSystem, template: str) -> str:
        """
        Render one grid system.

        Args:
            grid_system: Grid system with all its data
            template: Template identifier understood by the renderer

        Returns:
            Rendered output
        """
        context = build_template_context(grid_system, self.base_font_size)
        logger.debug(
            f"Rendering grid system '{grid_system.name}' with template '{template}'",
            extra={"grid_system": grid_system.name, "template": template},
        )
        return self.renderer.render(template, {"grid_system": context})

    def generate_all(self, repository: GridSystemRepository) -> Dict[str, Tuple[str, str]]:
        """
        Render every grid system in a repository with its configured template.

        Returns:
            Grid system name to (output path, rendered output)
        """
        results: Dict[str, Tuple[str, str]] = {}
        for name, grid_system in repository.grid_systems.items():
            config = repository.get_grid_system_config(grid_system)
            results[name] = (config.output_path, self.generate(grid_system, config.template))

        logger.info(f"Rendered {len(results)} grid system(s)")
        return results
