"""Mindentity: deterministic generative identity artwork."""

from mindentity.engine.pipeline import generate, generate_many
from mindentity.engine.rng import DeterministicSource, generate_seed, seed_from_string
from mindentity.errors import (
    ConfigurationError,
    GeometryConstructionError,
    MaskParseWarning,
    MindentityError,
    RandomnessError,
)
from mindentity.models.artwork import Artwork, Gradient, Shape
from mindentity.models.params import ArtworkConfig, build_config, validate_params

__version__ = "0.1.0"

__all__ = [
    "generate",
    "generate_many",
    "DeterministicSource",
    "generate_seed",
    "seed_from_string",
    "ArtworkConfig",
    "build_config",
    "validate_params",
    "Artwork",
    "Gradient",
    "Shape",
    "MindentityError",
    "ConfigurationError",
    "RandomnessError",
    "GeometryConstructionError",
    "MaskParseWarning",
]
