"""Error taxonomy for artwork generation."""

from __future__ import annotations


class MindentityError(Exception):
    """Base class for every error raised by the generator."""


class ConfigurationError(MindentityError, ValueError):
    """Parameters were rejected before generation started."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [message])


class RandomnessError(MindentityError, ValueError):
    """A random selection was asked to pick from an empty or zero-weight set."""


class GeometryConstructionError(MindentityError, ValueError):
    """Path data could not be parsed, or is not the polygon an operation needs."""


class MaskParseWarning(UserWarning):
    """An exclusion mask was malformed and has been replaced by the empty mask."""


class ColorParseWarning(UserWarning):
    """A colour string could not be parsed and fell back to opaque black."""
