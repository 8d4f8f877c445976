"""Mindentity procedural generation engine."""

from mindentity.engine.registry import shape_builder, get_registry
from mindentity.engine.context import GenerationContext
from mindentity.engine.pipeline import CompositionPipeline

__all__ = [
    "shape_builder",
    "get_registry",
    "GenerationContext",
    "CompositionPipeline",
]
