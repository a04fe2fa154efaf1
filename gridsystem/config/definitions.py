"""
Record models for grid system definitions.

These describe the primitive attribute maps a configuration loader hands to
the factory, one GridSystemDefinition per grid system. Field names may be
given in snake_case, kebab-case or camelCase.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    AliasGenerator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from gridsystem.core.types import ScalingInterval

ROLE_SELECTOR_PREFIX = ".as-"


def _field_aliases(field_name: str) -> AliasChoices:
    return AliasChoices(field_name, field_name.replace("_", "-"), to_camel(field_name))


_DEFINITION_CONFIG = ConfigDict(
    extra="forbid",
    alias_generator=AliasGenerator(validation_alias=_field_aliases),
)


class ObjectKind(str, Enum):
    """Kinds of styled entity a definition can describe."""

    ROLE = "role"
    OBJECT = "object"
    SURROUNDING = "surrounding"


class GridDefinition(BaseModel):
    """One grid plus the activation criteria for its grid map."""

    model_config = _DEFINITION_CONFIG

    id: Optional[str] = Field(None, description="Identifier declaration sets refer to")
    unit_count: int = Field(..., ge=1)
    measure_unit_count: int = Field(..., ge=1)
    text_size: float = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices(
            "text_size", "text-size", "textSize",
            "start_text_size", "start-text-size", "startTextSize",
        ),
    )
    gutter_width: Optional[float] = Field(None, ge=0)
    padding_width: Optional[float] = Field(None, ge=0)
    unit_width: Optional[float] = Field(None, ge=0)
    total_width: Optional[float] = Field(None, ge=0)
    margin: float = Field(0, ge=0)
    is_one_col: Optional[bool] = None

    # Measure-relative mode
    measure_width: Optional[float] = Field(None, gt=0)
    gutter_percentage: Optional[float] = Field(None, ge=0)
    padding_percentage: Optional[float] = Field(None, ge=0)

    # Grid map criteria
    min_width: Optional[float] = Field(None, ge=0)
    max_width: Optional[float] = Field(None, ge=0)
    min_text_size: Optional[float] = Field(None, ge=0)
    max_text_size: Optional[float] = Field(None, ge=0)
    scaling_interval: Optional[ScalingInterval] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        """Grid ids may be written as numbers."""
        return None if value is None else str(value)

    @property
    def is_measure_relative(self) -> bool:
        return self.measure_width is not None

    @model_validator(mode="after")
    def check_geometry_mode(self) -> "GridDefinition":
        """Require either explicit gutter/padding widths or a complete measure-relative definition."""
        if self.is_measure_relative:
            if self.gutter_percentage is None or self.padding_percentage is None:
                raise ValueError(
                    "measure_width requires gutter_percentage and padding_percentage"
                )
            if self.unit_width is not None or self.total_width is not None:
                raise ValueError(
                    "measure_width cannot be combined with unit_width or total_width"
                )
        elif self.gutter_width is None or self.padding_width is None:
            raise ValueError(
                "gutter_width and padding_width are required unless measure_width is given"
            )
        return self

    def criteria(self) -> Dict[str, float]:
        """Grid map criteria; without a minimum the grid starts at its own text size."""
        criteria = {
            key: value
            for key, value in (
                ("min_width", self.min_width),
                ("max_width", self.max_width),
                ("min_text_size", self.min_text_size),
                ("max_text_size", self.max_text_size),
            )
            if value is not None
        }
        if self.min_width is None and self.min_text_size is None:
            criteria["min_text_size"] = self.text_size
        return criteria


class DeclarationSet(BaseModel):
    """Declarations that are either an object's base set or tied to one grid."""

    model_config = _DEFINITION_CONFIG

    base: bool = False
    grid: Optional[str] = None
    declarations: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("grid", mode="before")
    @classmethod
    def coerce_grid(cls, value: Any) -> Any:
        """Grid ids may be written as numbers."""
        return None if value is None else str(value)

    @model_validator(mode="after")
    def check_target(self) -> "DeclarationSet":
        """A declaration set targets the base declarations or exactly one grid."""
        if self.base and self.grid is not None:
            raise ValueError("A declaration set cannot be both base and tied to a grid")
        if not self.base and self.grid is None:
            raise ValueError("A declaration set must be marked base or name a grid")
        return self


class ObjectDefinition(BaseModel):
    """A role, object or surrounding and its declaration sets."""

    model_config = _DEFINITION_CONFIG

    kind: ObjectKind = ObjectKind.OBJECT
    name: Optional[str] = None
    selector: Optional[str] = None
    declaration_sets: List[DeclarationSet] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_identity(self) -> "ObjectDefinition":
        """Roles are named; objects and surroundings carry a literal selector."""
        if self.kind is ObjectKind.ROLE:
            if not (self.name or "").strip():
                raise ValueError("A role needs a name")
        elif not (self.selector or "").strip():
            raise ValueError(f"An {self.kind.value} needs a selector")
        return self

    def resolved_selector(self) -> str:
        if self.kind is ObjectKind.ROLE:
            return f"{ROLE_SELECTOR_PREFIX}{self.name.strip()}"
        return self.selector.strip()


class GridSystemDefinition(BaseModel):
    """Everything needed to build one grid system."""

    model_config = _DEFINITION_CONFIG

    name: str = Field(..., min_length=1)
    min_font_size: Optional[float] = Field(
        None,
        gt=0,
        validation_alias=AliasChoices(
            "min_font_size", "min-font-size", "minFontSize", "min-text-size"
        ),
    )
    max_font_size: Optional[float] = Field(
        None,
        gt=0,
        validation_alias=AliasChoices(
            "max_font_size", "max-font-size", "maxFontSize", "max-text-size"
        ),
    )
    template: str = ""
    output_path: str = ""
    grids: List[GridDefinition] = Field(default_factory=list)
    objects: List[ObjectDefinition] = Field(default_factory=list)
