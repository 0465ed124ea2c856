"""Exception taxonomy for unit and scale creation, lookup and conversion."""

from __future__ import annotations

from typing import Any, Optional


class OMError(Exception):
    """Base class for all errors raised by omunits."""


class ConversionError(OMError):
    """Raised when a value cannot be converted between two units or scales.

    The offending operands are kept on the exception; the underlying cause, if
    any, is available through ``__cause__``.
    """

    def __init__(self, message: str, source: Any = None, target: Any = None) -> None:
        super().__init__(message)
        self.source = source
        self.target = target


class UnitConversionError(ConversionError):
    """Raised when a value cannot be converted from one unit to another."""


class ScaleConversionError(ConversionError):
    """Raised when a value cannot be converted from one scale to another."""


class UnitOrScaleCreationError(OMError):
    """Raised when a unit, scale or unit set cannot be created."""


class NotFoundError(OMError, LookupError):
    """Raised when no unit or scale is registered under an identifier."""

    def __init__(self, message: str, identifier: Optional[str] = None) -> None:
        super().__init__(message)
        self.identifier = identifier


__all__ = [
    "OMError",
    "ConversionError",
    "UnitConversionError",
    "ScaleConversionError",
    "UnitOrScaleCreationError",
    "NotFoundError",
]
