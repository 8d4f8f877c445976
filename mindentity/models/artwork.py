"""Artwork output model: the structured result of a generation call."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from mindentity.svg.path_data import path_bounds

ShapeKind = Literal["rect", "circle", "path"]

# Provenance keys recording the originating grid box of every emitted shape.
PROVENANCE_KEYS = ("data-x", "data-y", "data-width", "data-height")


class GradientStop(BaseModel):
    position: float
    color: str
    opacity: float


class Gradient(BaseModel):
    name: str
    x1: float
    y1: float
    x2: float
    y2: float
    stops: list[GradientStop] = Field(default_factory=list)

    @property
    def url(self) -> str:
        return f"url(#gradient-{self.name})"


class Shape(BaseModel):
    """One drawable: a type tag plus a flat attribute bag with stable string keys."""

    type: ShapeKind
    attributes: dict[str, float | str] = Field(default_factory=dict)

    @property
    def fill(self) -> str | None:
        fill = self.attributes.get("fill")
        return str(fill) if fill is not None else None

    @property
    def provenance(self) -> tuple[float, float, float, float] | None:
        """Originating (x, y, width, height) grid box, when recorded."""
        if not all(key in self.attributes for key in PROVENANCE_KEYS):
            return None
        return tuple(float(self.attributes[key]) for key in PROVENANCE_KEYS)  # type: ignore[return-value]

    def bounds(self) -> tuple[float, float, float, float]:
        """Geometric (xmin, ymin, xmax, ymax) of the drawn outline."""
        attrs = self.attributes
        if self.type == "rect":
            x, y = float(attrs["x"]), float(attrs["y"])
            return (x, y, x + float(attrs["width"]), y + float(attrs["height"]))
        if self.type == "circle":
            cx, cy, r = float(attrs["cx"]), float(attrs["cy"]), float(attrs["r"])
            return (cx - r, cy - r, cx + r, cy + r)
        return path_bounds(str(attrs["d"]))


class Artwork(BaseModel):
    """Complete output of one generation call."""

    width: float
    height: float
    background_color: str
    shapes: list[Shape] = Field(default_factory=list)
    gradients: list[Gradient] = Field(default_factory=list)
    gradient_color: str = ""
    seed: str | int | float

    def gradient_for(self, fill: str) -> Gradient | None:
        """Resolve a ``url(#gradient-...)`` fill against the gradient list."""
        for gradient in self.gradients:
            if gradient.url == fill:
                return gradient
        return None
