"""Core value types: dimensions, prefixes, names, units and scales."""

from .dimensions import Dimension, DimensionalError
from .naming import Naming
from .prefixes import Prefix
from .scales import Scale
from .units import (
    BaseUnit,
    PrefixedUnit,
    SingularUnit,
    Unit,
    UnitDivision,
    UnitExponentiation,
    UnitMultiple,
    UnitMultiplication,
)

__all__ = [
    "Dimension",
    "DimensionalError",
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
]
