"""
Geometry of one fixed column layout.
"""

from typing import Any, Dict, Optional

from gridsystem.core.types import is_number, normalize_number
from gridsystem.error_handling.exceptions import InvalidConfigurationError


class Grid:
    """A rigid column grid: units separated by gutters, padded inside, with an outer margin.

    Exactly one of ``unit_width`` and ``total_width`` may be omitted; it is
    derived from the other so that::

        total_width == unit_count * unit_width
                       + unit_count * 2 * padding_width
                       + (unit_count - 1) * gutter_width
                       + 2 * margin

    Instances are immutable.
    """

    def __init__(
        self,
        unit_count: int,
        measure_unit_count: int,
        gutter_width: float,
        padding_width: float,
        text_size: float,
        unit_width: Optional[float] = None,
        total_width: Optional[float] = None,
        margin: float = 0,
        is_one_col: Optional[bool] = None,
    ) -> None:
        """
        Initialize a grid.

        Args:
            unit_count: Number of units in the grid
            measure_unit_count: Units spanned by the ideal measure at text_size
            gutter_width: Width of each gutter in pixels
            padding_width: Padding inside each unit, on both sides, in pixels
            text_size: Base font size the geometry was designed for
            unit_width: Width of one unit, excluding gutter and padding
            total_width: Width of the whole grid including margins
            margin: Outer margin applied symmetrically
            is_one_col: Whether units usually render as a single column; guessed if None

        Raises:
            InvalidConfigurationError: If the geometry is incomplete or contradictory
        """
        self._validate_count("unit_count", unit_count)
        self._validate_count("measure_unit_count", measure_unit_count)
        self._validate_length("gutter_width", gutter_width)
        self._validate_length("padding_width", padding_width)
        self._validate_length("margin", margin)
        if not is_number(text_size) or text_size <= 0:
            raise InvalidConfigurationError(
                f"text_size must be a positive number, got {text_size!r}",
                expected="number > 0",
                received=text_size,
            )

        if measure_unit_count > unit_count:
            raise InvalidConfigurationError(
                f"measure_unit_count ({measure_unit_count}) cannot be bigger than "
                f"unit_count ({unit_count}): the measure cannot occupy more units "
                "than the whole grid",
                expected=f"measure_unit_count <= {unit_count}",
                received=measure_unit_count,
            )

        if unit_width is None and total_width is None:
            raise InvalidConfigurationError(
                "You must provide either a unit_width or a total_width",
                expected="unit_width or total_width",
                received=None,
            )

        self._unit_count = unit_count
        self._measure_unit_count = measure_unit_count
        self._gutter_width = gutter_width
        self._padding_width = padding_width
        self._text_size = text_size
        self._margin = margin

        if unit_width is not None:
            self._validate_length("unit_width", unit_width)
            expected_total = normalize_number(
                unit_count * unit_width + self._fixed_width()
            )
            if total_width is not None and total_width != expected_total:
                raise InvalidConfigurationError(
                    f"total_width ({total_width}) differs from the width derived from "
                    f"unit_width ({unit_width}), unit count, gutter, padding and margin "
                    f"({expected_total}). Set only one of unit_width and total_width; "
                    "the other is filled in automatically",
                    expected=expected_total,
                    received=total_width,
                )
            self._unit_width = unit_width
            self._total_width = expected_total
        else:
            self._validate_length("total_width", total_width)
            derived_unit = (total_width - self._fixed_width()) / unit_count
            if derived_unit < 0:
                raise InvalidConfigurationError(
                    f"total_width ({total_width}) is too small to hold {unit_count} "
                    "units with the given gutter, padding and margin",
                    expected=f"total_width >= {self._fixed_width()}",
                    received=total_width,
                )
            self._unit_width = normalize_number(derived_unit)
            self._total_width = total_width

        if is_one_col is None:
            is_one_col = unit_count == measure_unit_count or unit_count == 1
        self._is_one_col = bool(is_one_col)

    @staticmethod
    def _validate_count(name: str, value: Any) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidConfigurationError(
                f"{name} must be a positive integer, got {value!r}",
                expected="integer >= 1",
                received=value,
            )

    @staticmethod
    def _validate_length(name: str, value: Any) -> None:
        if not is_number(value) or value < 0:
            raise InvalidConfigurationError(
                f"{name} must be a non-negative number, got {value!r}",
                expected="number >= 0",
                received=value,
            )

    def _fixed_width(self) -> float:
        """Width taken by everything except the units themselves."""
        paddings = self._unit_count * 2 * self._padding_width
        gutters = (self._unit_count - 1) * self._gutter_width
        margins = 2 * self._margin
        return paddings + gutters + margins

    @property
    def unit_count(self) -> int:
        return self._unit_count

    @property
    def measure_unit_count(self) -> int:
        return self._measure_unit_count

    @property
    def gutter_width(self) -> float:
        return self._gutter_width

    @property
    def padding_width(self) -> float:
        return self._padding_width

    @property
    def text_size(self) -> float:
        return self._text_size

    @property
    def unit_width(self) -> float:
        return self._unit_width

    @property
    def total_width(self) -> float:
        return self._total_width

    @property
    def margin(self) -> float:
        return self._margin

    @property
    def is_one_col(self) -> bool:
        return self._is_one_col

    def width_of_units(self, count: int, include_outer_padding: bool = False) -> float:
        """
        Get the width spanned by several contiguous units.

        Includes the gutters between the units and the padding around those
        gutters; the padding on the two outer edges only if requested.

        Args:
            count: Number of units
            include_outer_padding: Whether to add the padding at both outer edges

        Returns:
            Width in pixels
        """
        outer = 2 * self._padding_width if include_outer_padding else 0
        width = (
            count * self._unit_width
            + (count - 1) * self._gutter_width
            + (count - 1) * 2 * self._padding_width
            + outer
        )
        return normalize_number(width)

    def to_dict(self) -> Dict[str, Any]:
        """Plain geometry mapping for renderers."""
        return {
            "unit_count": self._unit_count,
            "measure_unit_count": self._measure_unit_count,
            "gutter_width": self._gutter_width,
            "padding_width": self._padding_width,
            "text_size": self._text_size,
            "unit_width": self._unit_width,
            "total_width": self._total_width,
            "margin": self._margin,
            "is_one_col": self._is_one_col,
        }

    def __repr__(self) -> str:
        return (
            f"Grid(unit_count={self._unit_count}, unit_width={self._unit_width}, "
            f"total_width={self._total_width}, text_size={self._text_size})"
        )
