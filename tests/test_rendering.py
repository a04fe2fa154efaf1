"""
Unit tests for template context building and the grid controller.
"""

from typing import Any, Dict, List, Tuple

import pytest

from gridsystem.core.interfaces import TemplateRenderer
from gridsystem.error_handling.exceptions import NotFoundError
from gridsystem.grid.grid import Grid
from gridsystem.grid.grid_map import GridMap
from gridsystem.rendering.context import (
    HIDDEN_DECLARATIONS,
    LAST_COL_DECLARATIONS,
    build_template_context,
    grid_class,
    px,
)
from gridsystem.rendering.controller import GridController
from gridsystem.styles.object_map import ObjectMap
from gridsystem.styles.style_object import StyleObject
from gridsystem.system.grid_system import GridSystem
from gridsystem.system.repository import GridSystemRepository


class RecordingRenderer(TemplateRenderer):
    """Renderer that records its calls and returns a fixed string."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def render(self, template: str, context: Dict[str, Any]) -> str:
        self.calls.append((template, context))
        return f"rendered {context['grid_system']['name']} with {template}"


@pytest.fixture()
def grid_system() -> GridSystem:
    small = GridMap(Grid(4, 4, 10, 5, 12, 60), {"maxWidth": 400})
    large = GridMap(Grid(8, 5, 10, 5, 12, 95), {"minWidth": 400})

    sidebar = ObjectMap(StyleObject(".sidebar", {"float": "left"}), [small, large])
    sidebar.add_declarations(large, {"emulate": 2, "color": "red"})
    sidebar.add_declarations(small, {"hide": True})

    content = ObjectMap(StyleObject(".content"), [small, large])
    content.add_declarations(large, {"margin-left": "$unit-1-size"})

    return GridSystem("main", 14, 22, [sidebar, content], [large, small])


class TestHelpers:
    """Tests for formatting helpers."""

    @pytest.mark.parametrize("value, expected", [(210, "210px"), (92.5, "92.5px"), (95.0, "95px")])
    def test_px(self, value, expected):
        assert px(value) == expected

    def test_grid_class(self):
        assert grid_class(3) == ".grid-3"


class TestBuildTemplateContext:
    """Tests for build_template_context."""

    def test_system_attributes(self, grid_system):
        """Test top-level system data."""
        context = build_template_context(grid_system, 16)

        assert context["name"] == "main"
        assert context["min_font_size"] == 14
        assert context["max_font_size"] == 22
        assert context["base_font_size"] == 16
        assert context["max_unit_count"] == 8
        assert context["grid_classes"][0] == ".grid-1"
        assert context["grid_classes"][-1] == ".grid-8"
        assert context["hidden_declarations"] == HIDDEN_DECLARATIONS
        assert context["last_col_declarations"] == LAST_COL_DECLARATIONS

    def test_grids_in_width_order(self, grid_system):
        """Test grid map entries follow width order with em edges."""
        small, large = build_template_context(grid_system, 16)["grids"]

        assert small["max_width"] == 400
        assert small["max_width_em"] == 25
        assert large["min_width_em"] == 25
        assert large["max_width_em"] is None
        assert large["grid"]["unit_count"] == 8

    def test_column_styles(self, grid_system):
        """Test per-column widths include emulating objects."""
        large = build_template_context(grid_system, 16)["grids"][1]

        assert large["additional_cols"] == [".sidebar"]
        assert large["col_styles"][1] == {
            "selectors": [".grid-2", ".sidebar"],
            "declarations": {"width": "210px"},
        }
        assert large["col_styles"][0]["selectors"] == [".grid-1"]
        assert large["container_col_styles"][1] == {
            "selectors": [".container.grid-2"],
            "declarations": {"width": "220px"},
        }
        assert len(large["col_styles"]) == 8

    def test_hidden_and_object_styles(self, grid_system):
        """Test hidden selectors and object declarations without control keys."""
        small, large = build_template_context(grid_system, 16)["grids"]

        assert small["hidden"] == [".sidebar"]
        assert small["object_styles"] == {".sidebar": {}}
        assert large["hidden"] == []
        assert large["object_styles"] == {
            ".sidebar": {"color": "red"},
            ".content": {"margin-left": 105},
        }

    def test_objects(self, grid_system):
        """Test objects carry their base declarations."""
        objects = build_template_context(grid_system, 16)["objects"]
        assert objects == [
            {"selector": ".sidebar", "base_declarations": {"float": "left"}},
            {"selector": ".content", "base_declarations": {}},
        ]

    def test_empty_grid_system(self):
        """Test a system without maps still renders."""
        context = build_template_context(GridSystem("empty"), 16)

        assert context["max_unit_count"] == 0
        assert context["grid_classes"] == []
        assert context["grids"] == []


class TestGridController:
    """Tests for GridController."""

    def test_generate(self, grid_system):
        """Test the renderer receives the template and system context."""
        renderer = RecordingRenderer()
        controller = GridController(renderer, base_font_size=16)

        output = controller.generate(grid_system, "grid.css.j2")

        assert output == "rendered main with grid.css.j2"
        template, context = renderer.calls[0]
        assert template == "grid.css.j2"
        assert context["grid_system"]["max_unit_count"] == 8

    def test_generate_all(self, grid_system):
        """Test every configured system is rendered to its output path."""
        repository = GridSystemRepository([grid_system])
        repository.set_grid_system_config(
            grid_system, {"template": "grid.css.j2", "output_path": "build/grid.css"}
        )

        results = GridController(RecordingRenderer(), 16).generate_all(repository)

        assert results == {"main": ("build/grid.css", "rendered main with grid.css.j2")}

    def test_generate_all_requires_config(self, grid_system):
        """Test systems without output config can't be rendered in bulk."""
        repository = GridSystemRepository([grid_system])

        with pytest.raises(NotFoundError):
            GridController(RecordingRenderer(), 16).generate_all(repository)
