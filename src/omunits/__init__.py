"""omunits - unit and scale algebra with cached conversions."""

from .conversion import ConversionEngine
from .core import (
    BaseUnit,
    Dimension,
    Naming,
    Prefix,
    PrefixedUnit,
    Scale,
    SingularUnit,
    Unit,
    UnitDivision,
    UnitExponentiation,
    UnitMultiple,
    UnitMultiplication,
)
from .errors import (
    ConversionError,
    NotFoundError,
    ScaleConversionError,
    UnitConversionError,
    UnitOrScaleCreationError,
)
from .registry import UnitAndScaleRegistry
from .version import __version__

__all__ = [
    "ConversionEngine",
    "UnitAndScaleRegistry",
    "Dimension",
    "Naming",
    "Prefix",
    "Scale",
    "Unit",
    "BaseUnit",
    "SingularUnit",
    "PrefixedUnit",
    "UnitMultiple",
    "UnitMultiplication",
    "UnitDivision",
    "UnitExponentiation",
    "ConversionError",
    "UnitConversionError",
    "ScaleConversionError",
    "UnitOrScaleCreationError",
    "NotFoundError",
    "__version__",
]
