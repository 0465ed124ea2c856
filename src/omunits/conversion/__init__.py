"""Unit and scale conversion."""

from .cache import ConversionCache, Transform
from .engine import EXPONENTIATION_REDUCTION_OFFSET, ConversionEngine

__all__ = [
    "ConversionCache",
    "ConversionEngine",
    "EXPONENTIATION_REDUCTION_OFFSET",
    "Transform",
]
