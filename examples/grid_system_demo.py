#!/usr/bin/env python3
"""
Demonstration of building and rendering a grid system.

This script shows how definition records, the factory and the controller work
together. The renderer here writes plain CSS by hand; a real build would plug
in a template engine.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gridsystem.config.settings import get_settings
from gridsystem.core.interfaces import TemplateRenderer
from gridsystem.monitoring.logger import setup_logging
from gridsystem.rendering.controller import GridController
from gridsystem.system.factory import GridSystemFactory


DEFINITIONS = [
    {
        "name": "main site grid system",
        "min-text-size": 14,
        "max-text-size": 22,
        "template": "css",
        "output-path": "demo_output/grid.css",
        "grids": [
            {
                "id": "narrow",
                "unit-count": 4,
                "measure-unit-count": 4,
                "start-text-size": 16,
                "measure-width": 640,
                "gutter-percentage": 0.03125,
                "padding-percentage": 0.015625,
                "min-width": 0,
            },
            {
                "id": "wide",
                "unit-count": 8,
                "measure-unit-count": 5,
                "start-text-size": 16,
                "gutter-width": 10,
                "padding-width": 5,
                "unit-width": 95,
                "min-width": 700,
                "scaling-interval": {"method": "absolute-pixels", "amount": 40},
            },
        ],
        "objects": [
            {
                "kind": "role",
                "name": "sidebar",
                "declaration-sets": [
                    {"base": True, "declarations": {"float": "left"}},
                    {"grid": "narrow", "declarations": {"hide": True}},
                    {"grid": "wide", "declarations": {"emulate": 2}},
                ],
            },
            {
                "kind": "surrounding",
                "selector": "body > main",
                "declaration-sets": [
                    {"grid": "wide", "declarations": {"margin-left": "$unit-width + $gutter-width"}},
                ],
            },
        ],
    },
]


class PlainCSSRenderer(TemplateRenderer):
    """Writes the template context out as CSS with media queries."""

    def render(self, template: str, context: Dict[str, Any]) -> str:
        grid_system = context["grid_system"]
        lines: List[str] = [f"/* {grid_system['name']} */"]

        for obj in grid_system["objects"]:
            if obj["base_declarations"]:
                lines.extend(self._rule([obj["selector"]], obj["base_declarations"]))

        for grid in grid_system["grids"]:
            query = f"(min-width: {grid['min_width_em']}em)"
            if grid["max_width_em"] is not None:
                query += f" and (max-width: {grid['max_width_em']}em)"
            lines.append(f"@media {query} {{")
            for style in grid["col_styles"]:
                lines.extend(self._rule(style["selectors"], style["declarations"], "  "))
            if grid["hidden"]:
                lines.extend(self._rule(grid["hidden"], grid_system["hidden_declarations"], "  "))
            for selector, declarations in grid["object_styles"].items():
                if declarations:
                    lines.extend(self._rule([selector], declarations, "  "))
            lines.append("}")

        return "\n".join(lines) + "\n"

    @staticmethod
    def _rule(selectors: List[str], declarations: Dict[str, Any], indent: str = "") -> List[str]:
        lines = [f"{indent}{', '.join(selectors)} {{"]
        for prop, value in declarations.items():
            if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
                value = f"{value}px"
            lines.append(f"{indent}  {prop}: {value};")
        lines.append(f"{indent}}}")
        return lines


def main():
    """Run grid system demonstration."""
    settings = get_settings()
    setup_logging()

    print("Grid System Demonstration")
    print("=" * 50)
    print(f"Base font size: {settings.base_font_size}px")
    print()

    print("1. Building repository from definitions...")
    repository = GridSystemFactory(settings).build_repository(DEFINITIONS)
    for name in repository.names():
        grid_system = repository.get_grid_system(name)
        print(f"   - {name}: {len(grid_system.grid_maps)} grid maps, "
              f"{len(grid_system.object_maps)} objects")
        for grid_map in grid_system.grid_maps:
            grid = grid_map.grid
            print(f"     [{grid_map.min_width}, {grid_map.max_width}] "
                  f"{grid.unit_count} units of {grid.unit_width}px")
    print()

    print("2. Rendering...")
    controller = GridController(PlainCSSRenderer(), settings.base_font_size)
    for name, (output_path, text) in controller.generate_all(repository).items():
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        print(f"   - Saved {name}: {path}")

    print()
    print("Demonstration complete!")


if __name__ == "__main__":
    main()
