"""Shape builder registry: every primitive type maps to one builder function.

Usage:
    @shape_builder(type=ShapeType.SQUARE, description="Rounded rectangle")
    def build_square(request: ShapeRequest) -> Shape:
        ...

Adding a new primitive look = one decorated function. ``create_shape`` falls
back to a plain rectangle for types without a builder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from mindentity.engine.primitives import ShapeType

if TYPE_CHECKING:
    from mindentity.engine.shapes import ShapeRequest
    from mindentity.models.artwork import Shape

logger = logging.getLogger(__name__)


@dataclass
class ShapeBuilderSpec:
    type: ShapeType
    fn: Callable[["ShapeRequest"], "Shape"]
    description: str = ""


class ShapeBuilderRegistry:
    """Registry of shape builders keyed by primitive type."""

    def __init__(self) -> None:
        self._builders: dict[ShapeType, ShapeBuilderSpec] = {}

    def register(self, spec: ShapeBuilderSpec) -> None:
        if spec.type in self._builders:
            raise ValueError(f"Duplicate shape builder for {spec.type.value}")
        self._builders[spec.type] = spec
        logger.debug("Registered shape builder %s", spec.type.value)

    def get(self, shape_type: ShapeType) -> ShapeBuilderSpec:
        return self._builders[shape_type]

    def find(self, shape_type: ShapeType) -> ShapeBuilderSpec | None:
        return self._builders.get(shape_type)

    def all(self) -> list[ShapeBuilderSpec]:
        return sorted(self._builders.values(), key=lambda s: s.type.value)

    @property
    def count(self) -> int:
        return len(self._builders)


# Module-level singleton
_registry = ShapeBuilderRegistry()


def get_registry() -> ShapeBuilderRegistry:
    return _registry


def shape_builder(*, type: ShapeType, description: str = ""):
    """Decorator to register a shape builder function."""

    def decorator(fn: Callable[["ShapeRequest"], "Shape"]):
        _registry.register(ShapeBuilderSpec(type=type, fn=fn, description=description))
        return fn

    return decorator
