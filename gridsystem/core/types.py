"""
Shared value types for the grid system core.
"""

import math
from enum import Enum
from numbers import Number
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ScalingMethod(str, Enum):
    """How a grid map zooms between its range edges."""

    ABSOLUTE_PIXELS = "absolute-pixels"  # zoom every N viewport pixels
    FONT_PIXELS = "font-pixels"  # zoom every N pixels of base font size


class ScalingInterval(BaseModel):
    """How frequently another zoom step is added within a grid map's range."""

    model_config = ConfigDict(frozen=True)

    method: ScalingMethod
    amount: float = Field(..., gt=0, description="Interval size in pixels")


class RangeCriteria(BaseModel):
    """Partial activation range for a grid map.

    Each edge may be given as a width, a text size, both, or neither.
    """

    model_config = ConfigDict(extra="forbid")

    min_width: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("min_width", "minWidth")
    )
    max_width: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("max_width", "maxWidth")
    )
    min_text_size: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("min_text_size", "minTextSize")
    )
    max_text_size: Optional[float] = Field(
        None, ge=0, validation_alias=AliasChoices("max_text_size", "maxTextSize")
    )


class OutputConfig(BaseModel):
    """Where and with which template a grid system is rendered."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    template: str
    output_path: str


def is_number(value: Any) -> bool:
    """True for real numbers, excluding booleans."""
    return isinstance(value, Number) and not isinstance(value, bool)


def normalize_number(value: Any) -> Any:
    """Collapse whole-number floats to int so 95.0 is stored as 95."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def upper_bound(value: Optional[float]) -> float:
    """Treat an unbounded (None) maximum as positive infinity."""
    return math.inf if value is None else value
