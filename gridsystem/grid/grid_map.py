"""
Activation range and scaling policy for a grid.
"""

import math
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from uuid import uuid4

from pydantic import ValidationError

from gridsystem.core.types import (
    RangeCriteria,
    ScalingInterval,
    ScalingMethod,
    normalize_number,
    upper_bound,
)
from gridsystem.error_handling.exceptions import InvalidConfigurationError
from gridsystem.grid.grid import Grid
from gridsystem.monitoring.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SCALING_INTERVAL = ScalingInterval(method=ScalingMethod.FONT_PIXELS, amount=1)

_EDGES = ("min", "max")


class GridMap:
    """
    Wraps a grid with the widths and text sizes over which it takes effect.

    Widths and text sizes are two views of the same range: at text size ``s``
    the grid is ``s / grid.text_size * grid.total_width`` pixels wide. Either
    may be given for each edge and the other is derived. A maximum of ``None``
    means unbounded.
    """

    def __init__(
        self,
        grid: Grid,
        criteria: Optional[Mapping[str, Any]] = None,
        scaling_interval: Union[ScalingInterval, Mapping[str, Any], None] = None,
    ) -> None:
        """
        Initialize a grid map.

        Args:
            grid: The grid being mapped
            criteria: Partial range, see set_properties()
            scaling_interval: Zoom policy, defaults to one font pixel

        Raises:
            InvalidConfigurationError: If the criteria or scaling interval are invalid
        """
        self._grid = grid
        self._id = uuid4().hex

        self._min_width: Optional[float] = None
        self._max_width: Optional[float] = None
        self._min_text_size: Optional[float] = None
        self._max_text_size: Optional[float] = None
        self._scaling_interval = DEFAULT_SCALING_INTERVAL

        self.set_properties(criteria or {})
        self.set_scaling_interval(
            DEFAULT_SCALING_INTERVAL if scaling_interval is None else scaling_interval
        )

    @property
    def id(self) -> str:
        return self._id

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def min_width(self) -> Optional[float]:
        return self._min_width

    @property
    def max_width(self) -> Optional[float]:
        return self._max_width

    @property
    def min_text_size(self) -> Optional[float]:
        return self._min_text_size

    @property
    def max_text_size(self) -> Optional[float]:
        return self._max_text_size

    @property
    def scaling_interval(self) -> ScalingInterval:
        return self._scaling_interval

    @property
    def width_range(self) -> Tuple[Optional[float], Optional[float]]:
        return self._min_width, self._max_width

    def width_at_text_size(self, size: float) -> int:
        """Width of the scaled grid at the given text size, rounded up to a whole pixel."""
        return math.ceil((size / self._grid.text_size) * self._grid.total_width)

    def text_size_at_width(self, width: float) -> float:
        """Text size at which the scaled grid is exactly the given width."""
        return (width / self._grid.total_width) * self._grid.text_size

    def set_properties(self, criteria: Union[RangeCriteria, Mapping[str, Any]]) -> None:
        """
        Refine the activation range.

        For each edge, a text size and a width may both be given only if they
        agree; if one is given the other is derived; if neither is given the
        current values are kept. A missing minimum defaults to zero. Nothing is
        stored unless both edges validate and the maximum is not below the
        minimum.

        Args:
            criteria: Any of min_width, max_width, min_text_size, max_text_size
                (camelCase spellings are accepted too)

        Raises:
            InvalidConfigurationError: On unknown keys, bad values, a width/text size
                mismatch or an inverted range
        """
        parsed = self._parse_criteria(criteria)
        resolved: Dict[str, Optional[float]] = {
            "min_width": self._min_width,
            "min_text_size": self._min_text_size,
            "max_width": self._max_width,
            "max_text_size": self._max_text_size,
        }

        for edge in _EDGES:
            width_key = f"{edge}_width"
            text_key = f"{edge}_text_size"
            width = getattr(parsed, width_key)
            text_size = getattr(parsed, text_key)

            if width is not None and text_size is not None:
                implied = self.text_size_at_width(width)
                if implied != text_size:
                    raise InvalidConfigurationError(
                        f"The criteria included both {width_key} and {text_key}, but they "
                        f"don't match. At the {width_key} provided ({normalize_number(width)}) "
                        f"the text size would be {implied}, not {text_size} "
                        f"(the {text_key} provided)",
                        expected={text_key: implied},
                        received={width_key: width, text_key: text_size},
                    )
                resolved[width_key] = normalize_number(width)
                resolved[text_key] = normalize_number(text_size)
            elif text_size is not None:
                resolved[text_key] = normalize_number(text_size)
                resolved[width_key] = self.width_at_text_size(text_size)
            elif width is not None:
                resolved[width_key] = normalize_number(width)
                resolved[text_key] = normalize_number(self.text_size_at_width(width))

        if resolved["min_width"] is None:
            resolved["min_width"] = 0
            resolved["min_text_size"] = 0

        if resolved["max_width"] is not None and resolved["max_width"] < resolved["min_width"]:
            raise InvalidConfigurationError(
                f"The resulting range is inverted: max_width ({resolved['max_width']}) "
                f"is less than min_width ({resolved['min_width']})",
                expected=f"max_width >= {resolved['min_width']}",
                received={"min_width": resolved["min_width"], "max_width": resolved["max_width"]},
            )

        self._min_width = resolved["min_width"]
        self._min_text_size = resolved["min_text_size"]
        self._max_width = resolved["max_width"]
        self._max_text_size = resolved["max_text_size"]

        logger.debug(
            f"Grid map {self._id} range set to [{self._min_width}, {self._max_width}]",
            extra={"grid_map": self._id},
        )

    @staticmethod
    def _parse_criteria(criteria: Union[RangeCriteria, Mapping[str, Any]]) -> RangeCriteria:
        if isinstance(criteria, RangeCriteria):
            return criteria
        if not isinstance(criteria, Mapping):
            raise InvalidConfigurationError(
                f"Criteria must be a mapping, got {type(criteria).__name__}",
                expected="mapping",
                received=criteria,
            )
        try:
            return RangeCriteria.model_validate(dict(criteria))
        except ValidationError as exc:
            raise InvalidConfigurationError(
                f"Invalid range criteria: {dict(criteria)}",
                expected=["min_width", "max_width", "min_text_size", "max_text_size"],
                received=sorted(criteria),
                details={"errors": exc.errors(include_url=False)},
                cause=exc,
            ) from exc

    def set_scaling_interval(
        self, scaling_interval: Union[ScalingInterval, Mapping[str, Any]]
    ) -> None:
        """
        Set how often the grid zooms within its range.

        Args:
            scaling_interval: ``{"method": "absolute-pixels" | "font-pixels", "amount": number}``

        Raises:
            InvalidConfigurationError: When the interval is malformed
        """
        if isinstance(scaling_interval, ScalingInterval):
            self._scaling_interval = scaling_interval
            return

        if not isinstance(scaling_interval, Mapping):
            raise InvalidConfigurationError(
                f"Scaling interval must be a mapping, got {type(scaling_interval).__name__}",
                expected={"method": [m.value for m in ScalingMethod], "amount": "number > 0"},
                received=scaling_interval,
            )
        try:
            self._scaling_interval = ScalingInterval.model_validate(dict(scaling_interval))
        except ValidationError as exc:
            raise InvalidConfigurationError(
                f"The scaling interval provided is invalid: {dict(scaling_interval)}",
                expected={"method": [m.value for m in ScalingMethod], "amount": "number > 0"},
                received=dict(scaling_interval),
                details={"errors": exc.errors(include_url=False)},
                cause=exc,
            ) from exc

    def contains_width(self, width: float) -> bool:
        """Whether a viewport width falls inside this map's range (max exclusive)."""
        return self._min_width <= width < upper_bound(self._max_width)

    def overlaps(self, other: "GridMap") -> bool:
        """Whether two ranges intersect; touching endpoints don't count."""
        return (
            upper_bound(self._max_width) > other.min_width
            and self._min_width < upper_bound(other.max_width)
        )

    def to_dict(self, base_font_size: float = 16) -> Dict[str, Any]:
        """
        Range and scaling data for renderers.

        Args:
            base_font_size: Pixels per em used for the em-based range values

        Returns:
            Mapping with pixel and em range edges
        """
        def em(value: Optional[float]) -> Optional[float]:
            return None if value is None else normalize_number(value / base_font_size)

        return {
            "id": self._id,
            "min_width": self._min_width,
            "max_width": self._max_width,
            "min_width_em": em(self._min_width),
            "max_width_em": em(self._max_width),
            "min_text_size": self._min_text_size,
            "max_text_size": self._max_text_size,
            "scaling_interval": self._scaling_interval.model_dump(mode="json"),
        }

    def __repr__(self) -> str:
        return f"GridMap(id={self._id!r}, min_width={self._min_width}, max_width={self._max_width})"
