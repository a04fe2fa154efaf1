"""
Unit tests for grid map ranges and scaling intervals.
"""

import pytest

from gridsystem.core.types import RangeCriteria, ScalingInterval, ScalingMethod
from gridsystem.error_handling.exceptions import InvalidConfigurationError
from gridsystem.grid.grid import Grid
from gridsystem.grid.grid_map import DEFAULT_SCALING_INTERVAL, GridMap


@pytest.fixture()
def grid() -> Grid:
    """An 800px grid designed at 10px text."""
    return Grid(8, 8, 0, 0, 10, 100)


class TestGridMapProperties:
    """Tests for GridMap range resolution."""

    @pytest.mark.parametrize(
        "criteria, min_width, min_text_size, max_width, max_text_size",
        [
            ({}, 0, 0, None, None),
            ({"minWidth": 400}, 400, 5, None, None),
            ({"min_width": 400}, 400, 5, None, None),
            ({"minWidth": 500, "minTextSize": 6.25}, 500, 6.25, None, None),
            ({"maxTextSize": "6.25"}, 0, 0, 500, 6.25),
            ({"maxTextSize": 11.173}, 0, 0, 894, 11.173),
            ({"maxWidth": 800}, 0, 0, 800, 10),
            ({"min_text_size": 5, "max_text_size": 10}, 400, 5, 800, 10),
        ],
    )
    def test_valid_criteria(self, grid, criteria, min_width, min_text_size, max_width, max_text_size):
        """Test each edge is filled from whichever value was given."""
        grid_map = GridMap(grid, criteria)

        assert grid_map.min_width == min_width
        assert grid_map.min_text_size == min_text_size
        assert grid_map.max_width == max_width
        assert grid_map.max_text_size == max_text_size

    @pytest.mark.parametrize(
        "criteria",
        [
            {"maxWidth": 800, "maxTextSize": 9},
            {"minWidth": 500, "minTextSize": 6.2},
            {"minwidth": 500},
            {"minWidth": -1},
            {"maxTextSize": "large"},
        ],
    )
    def test_invalid_criteria(self, grid, criteria):
        """Test mismatched, unknown or malformed criteria are rejected."""
        with pytest.raises(InvalidConfigurationError):
            GridMap(grid, criteria)

    def test_mismatch_message(self, grid):
        """Test the mismatch error names the disagreeing values."""
        with pytest.raises(InvalidConfigurationError, match="don't match"):
            GridMap(grid, {"maxWidth": 800, "maxTextSize": 9})

    def test_criteria_must_be_mapping(self, grid):
        """Test non-mapping criteria are rejected."""
        with pytest.raises(InvalidConfigurationError, match="must be a mapping"):
            GridMap(grid, [("minWidth", 400)])

    def test_accepts_model(self, grid):
        """Test a parsed RangeCriteria is accepted directly."""
        grid_map = GridMap(grid, RangeCriteria(min_width=400))
        assert grid_map.min_text_size == 5

    def test_overwrite_same_edge(self, grid):
        """Test a later value replaces the earlier one on the same edge."""
        grid_map = GridMap(grid, {"minWidth": 200})
        grid_map.set_properties({"minWidth": 600})
        assert grid_map.min_width == 600

        grid_map = GridMap(grid, {"maxWidth": 1000})
        grid_map.set_properties({"maxTextSize": 10})
        assert grid_map.max_width == 800

    def test_other_edge_kept(self, grid):
        """Test setting one edge keeps the other."""
        grid_map = GridMap(grid, {"minWidth": 200})
        grid_map.set_properties({"maxWidth": 800})

        assert grid_map.min_width == 200
        assert grid_map.max_width == 800

    def test_failed_update_leaves_state(self, grid):
        """Test nothing is stored when one edge fails to validate."""
        grid_map = GridMap(grid, {"minWidth": 200, "maxWidth": 600})

        with pytest.raises(InvalidConfigurationError):
            grid_map.set_properties({"minWidth": 400, "maxWidth": 800, "maxTextSize": 9})

        assert grid_map.width_range == (200, 600)

    @pytest.mark.parametrize(
        "criteria",
        [
            {"minWidth": 900, "maxWidth": 300},
            {"minTextSize": 8, "maxTextSize": 6},
            {"minWidth": 500, "maxTextSize": 5},
        ],
    )
    def test_inverted_range_rejected(self, grid, criteria):
        """Test a maximum below the minimum is rejected."""
        with pytest.raises(InvalidConfigurationError, match="inverted") as exc:
            GridMap(grid, criteria)

        assert exc.value.expected.startswith("max_width >= ")

    def test_cumulative_inverted_range_rejected(self, grid):
        """Test a new minimum can't pass the maximum already set."""
        grid_map = GridMap(grid, {"maxWidth": 600})

        with pytest.raises(InvalidConfigurationError, match="inverted"):
            grid_map.set_properties({"minWidth": 900})

        assert grid_map.width_range == (0, 600)

    def test_empty_range_allowed(self, grid):
        """Test the minimum may equal the maximum."""
        assert GridMap(grid, {"minWidth": 400, "maxWidth": 400}).width_range == (400, 400)

    @pytest.mark.parametrize(
        "criteria",
        [
            {},
            {"minWidth": 400},
            {"maxTextSize": 11.173},
            {"minWidth": 500, "minTextSize": 6.25, "maxWidth": 800},
            {"min_text_size": 5.5, "max_text_size": 13.3},
        ],
    )
    def test_set_properties_idempotent(self, grid, criteria):
        """Test applying the same criteria twice gives the same range as once."""
        once = GridMap(grid, criteria)
        twice = GridMap(grid, criteria)
        twice.set_properties(criteria)

        assert twice.width_range == once.width_range
        assert twice.min_text_size == once.min_text_size
        assert twice.max_text_size == once.max_text_size

    def test_width_text_size_conversion(self, grid):
        """Test both directions of the width/text size relation."""
        grid_map = GridMap(grid)

        assert grid_map.width_at_text_size(5) == 400
        assert grid_map.width_at_text_size(11.173) == 894
        assert grid_map.text_size_at_width(400) == 5

    @pytest.mark.parametrize("size", [0.5, 1, 5, 10, 11.173, 13.3, 16, 22.75, 100])
    def test_text_size_round_trip(self, grid, size):
        """Test converting a text size to a width and back stays within one pixel."""
        grid_map = GridMap(grid)

        assert abs(grid_map.text_size_at_width(grid_map.width_at_text_size(size)) - size) <= 1

    def test_unique_ids(self, grid):
        """Test every grid map gets its own id."""
        assert GridMap(grid).id != GridMap(grid).id


class TestGridMapRanges:
    """Tests for range membership and overlap."""

    def test_contains_width(self, grid):
        """Test the maximum is exclusive."""
        grid_map = GridMap(grid, {"minWidth": 300, "maxWidth": 500})

        assert grid_map.contains_width(300)
        assert grid_map.contains_width(499)
        assert not grid_map.contains_width(500)
        assert not grid_map.contains_width(299)

    def test_unbounded_contains_width(self, grid):
        """Test an open maximum contains every larger width."""
        grid_map = GridMap(grid, {"minWidth": 300})
        assert grid_map.contains_width(100000)

    @pytest.mark.parametrize(
        "first, second, expected",
        [
            ({"minWidth": 300, "maxWidth": 500}, {"minWidth": 400, "maxWidth": 900}, True),
            ({"minWidth": 300, "maxWidth": 500}, {"minWidth": 500, "maxWidth": 900}, False),
            ({"minWidth": 300, "maxWidth": 500}, {"minWidth": 900}, False),
            ({"minWidth": 300}, {"minWidth": 900, "maxWidth": 1200}, True),
            ({}, {"minWidth": 0, "maxWidth": 10}, True),
        ],
    )
    def test_overlaps(self, grid, first, second, expected):
        """Test range intersection is symmetric and ignores touching edges."""
        a = GridMap(grid, first)
        b = GridMap(grid, second)

        assert a.overlaps(b) is expected
        assert b.overlaps(a) is expected

    def test_to_dict(self, grid):
        """Test the renderer mapping carries px and em edges."""
        data = GridMap(grid, {"minWidth": 320, "maxWidth": 800}).to_dict(16)

        assert data["min_width_em"] == 20
        assert data["max_width_em"] == 50
        assert data["scaling_interval"] == {"method": "font-pixels", "amount": 1.0}

    def test_to_dict_open_range(self, grid):
        """Test an unbounded maximum stays None in em too."""
        data = GridMap(grid).to_dict()
        assert data["max_width"] is None
        assert data["max_width_em"] is None


class TestScalingInterval:
    """Tests for GridMap scaling intervals."""

    def test_default(self, grid):
        """Test the default is one font pixel."""
        grid_map = GridMap(grid)

        assert grid_map.scaling_interval == DEFAULT_SCALING_INTERVAL
        assert grid_map.scaling_interval.method == ScalingMethod.FONT_PIXELS
        assert grid_map.scaling_interval.amount == 1

    @pytest.mark.parametrize(
        "interval",
        [
            {"method": "absolute-pixels", "amount": 20},
            {"method": "font-pixels", "amount": 0.5},
            ScalingInterval(method=ScalingMethod.ABSOLUTE_PIXELS, amount=50),
        ],
    )
    def test_valid(self, grid, interval):
        """Test mappings and models are accepted."""
        grid_map = GridMap(grid, scaling_interval=interval)
        assert isinstance(grid_map.scaling_interval, ScalingInterval)

    @pytest.mark.parametrize(
        "interval",
        [
            {"maxWidth": 300},
            {"method": "invalid method", "amount": 1},
            {"amount": 1},
            {},
            {"method": "font-pixels", "amount": "invalid amount"},
            {"method": "font-pixels", "amount": 0},
            "font-pixels",
        ],
    )
    def test_invalid(self, grid, interval):
        """Test malformed intervals are rejected."""
        grid_map = GridMap(grid)
        with pytest.raises(InvalidConfigurationError):
            grid_map.set_scaling_interval(interval)
