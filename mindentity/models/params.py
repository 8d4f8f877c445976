"""Generation parameters.

``ArtworkConfig`` accepts snake_case names and the camelCase names used by
existing callers (``gridSize``, ``halfShapesChance`` ...). Validation errors
surface as :class:`~mindentity.errors.ConfigurationError`.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from mindentity.engine.constants import GLYPH_GRID_SIZE
from mindentity.errors import ConfigurationError
from mindentity.utils.color import is_valid_color

Mode = Literal["none", "letter", "string"]
CornerStyle = Literal["circle", "approx", "hand"]


class ArtworkConfig(BaseModel):
    """All inputs of one generation call, with their documented defaults."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    width: int = Field(default=1024, ge=1, le=4096)
    height: int = Field(default=1024, ge=1, le=4096)
    grid_size: int = Field(default=8, ge=2, le=50)
    background_color: str = "#ffffff"
    foreground_color: str = "#000000"
    transparent: bool = False
    gap: float = Field(default=10.0, ge=0)
    margin: float = Field(default=100.0, ge=0)
    white_space: float = Field(default=20.0, ge=0, le=100)
    half_shapes_chance: float = Field(default=4.0, ge=0, le=100)
    node_shapes_chance: float = Field(default=4.0, ge=0, le=100)
    square_radius: float = Field(default=12.0, ge=0, le=100)
    cross_radius: float = Field(default=6.0, ge=0, le=100)
    circle_radius: float = Field(default=4.0, ge=0, le=100)
    corner_style: CornerStyle = "circle"
    mode: Mode = "none"
    input: str | None = None
    offset_x: int = 0
    offset_y: int = 0
    offsets_rows: tuple[int, ...] | None = Field(default=None, min_length=1)
    offsets_cols: tuple[int, ...] | None = Field(default=None, min_length=1)
    seed: str | int | float | None = None
    # Legacy behaviour draws random values for masked cells too; opting out
    # changes every artwork rendered with a mask.
    skip_excluded_draws: bool = False

    @field_validator("background_color", "foreground_color")
    @classmethod
    def _check_color(cls, value: str) -> str:
        if not is_valid_color(value):
            raise ValueError(f"unparseable color: {value!r}")
        return value

    @field_validator("seed")
    @classmethod
    def _check_seed(cls, value: str | int | float | None) -> str | int | float | None:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"seed must be a finite number, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_letter_input(self) -> ArtworkConfig:
        if self.mode == "letter" and self.input and len(self.input) != 1:
            raise ValueError("input for letter mode must be a single character")
        return self

    @model_validator(mode="after")
    def _check_cell_size(self) -> ArtworkConfig:
        size = self.effective_grid_size
        for axis, extent in (("width", self.width), ("height", self.height)):
            if extent - self.margin * 2 - (size - 1) * self.gap <= 0:
                raise ValueError(f"{axis} leaves no room for {size} cells after margin and gap")
        return self

    @property
    def effective_grid_size(self) -> int:
        """Grid size actually laid out; glyph modes force an 8x8 grid."""
        return GLYPH_GRID_SIZE if self.mode in ("letter", "string") else self.grid_size

    def row_offsets(self) -> tuple[int, ...]:
        return self.offsets_rows or (0,) * self.effective_grid_size

    def column_offsets(self) -> tuple[int, ...]:
        return self.offsets_cols or (0,) * self.effective_grid_size


def _format_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "config"
    return f"{location}: {error.get('msg', 'invalid value')}"


def build_config(params: ArtworkConfig | Mapping[str, Any] | None = None, **overrides: Any) -> ArtworkConfig:
    """Validate parameters into an :class:`ArtworkConfig`.

    Raises :class:`ConfigurationError` listing every rejected field; values are
    never clamped.
    """
    if isinstance(params, ArtworkConfig) and not overrides:
        return params
    data: dict[str, Any] = {}
    if isinstance(params, ArtworkConfig):
        data.update(params.model_dump(exclude_unset=True))
    elif params is not None:
        data.update(params)
    data.update(overrides)

    try:
        return ArtworkConfig.model_validate(data)
    except ValidationError as exc:
        errors = [_format_error(err) for err in exc.errors()]
        raise ConfigurationError("invalid artwork parameters: " + "; ".join(errors), errors) from exc


def validate_params(params: Mapping[str, Any]) -> tuple[bool, list[str]]:
    """Non-raising check: ``(valid, errors)``."""
    try:
        build_config(params)
    except ConfigurationError as exc:
        return False, exc.errors
    return True, []
