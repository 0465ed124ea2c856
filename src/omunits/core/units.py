"""Unit algebra: a closed set of unit variants and their derived dimensions.

Every unit is one of seven variants:

``BaseUnit``
    Root of a dimension; its dimension is intrinsic.
``SingularUnit``
    Defined as ``definition_factor`` times ``definition_unit``. Without a
    definition unit it acts as a root, like a base unit.
``PrefixedUnit``
    A base or singular unit with a :class:`~omunits.core.prefixes.Prefix`.
``UnitMultiple``
    An arbitrary scalar multiple of any unit.
``UnitMultiplication`` / ``UnitDivision`` / ``UnitExponentiation``
    Compound units built from other units.

A unit's dimension is always derived from its constituents at construction
time. Units compare equal when their identifiers match or, failing that, when
they have the same variant and equal constituents (multiplication is
commutative). Hashes are structural, so equal trees land in the same bucket.
"""

from __future__ import annotations

import math
import numbers
import uuid
from dataclasses import dataclass, field
from typing import Optional, Union, assert_never

from .dimensions import DIMENSIONLESS, Dimension
from .naming import Naming
from .prefixes import Prefix


def new_identifier() -> str:
    """Generate an identifier for an anonymously created unit or scale."""

    return f"urn:uuid:{uuid.uuid4()}"


def _check_factor(label: str, value: float, *, allow_zero: bool = False) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"{label} must be a number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{label} must be finite, got {value}")
    if value == 0.0 and not allow_zero:
        raise ValueError(f"{label} must be non-zero")
    return value


def _check_unit(label: str, value: object) -> None:
    if not isinstance(value, _UnitNode):
        raise TypeError(f"{label} must be a unit, got {type(value).__name__}")


@dataclass(frozen=True, eq=False, repr=False)
class _UnitNode:
    identifier: str = field(default_factory=new_identifier, kw_only=True)
    naming: Naming = field(default_factory=Naming, kw_only=True)
    _dimension: Dimension = field(init=False, repr=False)
    _hash: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        unit: Unit = self  # type: ignore[assignment]
        object.__setattr__(self, "_dimension", derive_dimension(unit))
        object.__setattr__(self, "_hash", structural_hash(unit))

    @property
    def dimension(self) -> Dimension:
        return self._dimension

    @property
    def name(self) -> Optional[str]:
        return self.naming.name

    @property
    def symbol(self) -> Optional[str]:
        return self.naming.symbol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _UnitNode):
            return NotImplemented
        if self is other or self.identifier == other.identifier:
            return True
        return same_structure(self, other)  # type: ignore[arg-type]

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return describe(self)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {describe(self)}>"  # type: ignore[arg-type]


@dataclass(frozen=True, eq=False, repr=False)
class BaseUnit(_UnitNode):
    base_dimension: Dimension = DIMENSIONLESS

    def __post_init__(self) -> None:
        if not isinstance(self.base_dimension, Dimension):
            raise TypeError("Base unit dimension must be a Dimension")
        super().__post_init__()


@dataclass(frozen=True, eq=False, repr=False)
class SingularUnit(_UnitNode):
    definition_unit: Optional["Unit"] = None
    definition_factor: float = 1.0
    intrinsic_dimension: Dimension = DIMENSIONLESS

    def __post_init__(self) -> None:
        if self.definition_unit is not None:
            _check_unit("Definition unit", self.definition_unit)
        object.__setattr__(
            self, "definition_factor", _check_factor("Definition factor", self.definition_factor)
        )
        if not isinstance(self.intrinsic_dimension, Dimension):
            raise TypeError("Singular unit dimension must be a Dimension")
        super().__post_init__()


@dataclass(frozen=True, eq=False, repr=False)
class PrefixedUnit(_UnitNode):
    base_unit: Union[BaseUnit, SingularUnit] = None  # type: ignore[assignment]
    prefix: Prefix = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if not isinstance(self.base_unit, (BaseUnit, SingularUnit)):
            raise TypeError(
                "A prefix can only be attached to a base or singular unit, "
                f"got {type(self.base_unit).__name__}"
            )
        if not isinstance(self.prefix, Prefix):
            raise TypeError(f"Prefix must be a Prefix, got {type(self.prefix).__name__}")
        super().__post_init__()

    @property
    def factor(self) -> float:
        return self.prefix.factor


@dataclass(frozen=True, eq=False, repr=False)
class UnitMultiple(_UnitNode):
    unit: "Unit" = None  # type: ignore[assignment]
    factor: float = 1.0

    def __post_init__(self) -> None:
        _check_unit("Multiplied unit", self.unit)
        object.__setattr__(self, "factor", _check_factor("Multiple factor", self.factor))
        super().__post_init__()


@dataclass(frozen=True, eq=False, repr=False)
class UnitMultiplication(_UnitNode):
    term1: "Unit" = None  # type: ignore[assignment]
    term2: "Unit" = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        _check_unit("First term", self.term1)
        _check_unit("Second term", self.term2)
        super().__post_init__()


@dataclass(frozen=True, eq=False, repr=False)
class UnitDivision(_UnitNode):
    numerator: "Unit" = None  # type: ignore[assignment]
    denominator: "Unit" = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        _check_unit("Numerator", self.numerator)
        _check_unit("Denominator", self.denominator)
        super().__post_init__()


@dataclass(frozen=True, eq=False, repr=False)
class UnitExponentiation(_UnitNode):
    base: "Unit" = None  # type: ignore[assignment]
    exponent: float = 1.0

    def __post_init__(self) -> None:
        _check_unit("Base", self.base)
        object.__setattr__(
            self, "exponent", _check_factor("Exponent", self.exponent, allow_zero=True)
        )
        super().__post_init__()


Unit = Union[
    BaseUnit,
    SingularUnit,
    PrefixedUnit,
    UnitMultiple,
    UnitMultiplication,
    UnitDivision,
    UnitExponentiation,
]

UNIT_TYPES = (
    BaseUnit,
    SingularUnit,
    PrefixedUnit,
    UnitMultiple,
    UnitMultiplication,
    UnitDivision,
    UnitExponentiation,
)


def is_unit(value: object) -> bool:
    return isinstance(value, UNIT_TYPES)


def derive_dimension(unit: Unit) -> Dimension:
    """Compose the dimension of ``unit`` from its constituents."""

    match unit:
        case BaseUnit():
            return unit.base_dimension
        case SingularUnit():
            if unit.definition_unit is None:
                return unit.intrinsic_dimension
            return unit.definition_unit.dimension
        case PrefixedUnit():
            return unit.base_unit.dimension
        case UnitMultiple():
            return unit.unit.dimension
        case UnitMultiplication():
            return unit.term1.dimension * unit.term2.dimension
        case UnitDivision():
            return unit.numerator.dimension / unit.denominator.dimension
        case UnitExponentiation():
            return unit.base.dimension ** unit.exponent
        case _:
            assert_never(unit)


def structural_hash(unit: Unit) -> int:
    match unit:
        case BaseUnit():
            return hash(("base", unit.base_dimension))
        case SingularUnit():
            if unit.definition_unit is None:
                return hash(("singular", unit.identifier))
            return hash(("singular", unit.definition_unit, unit.definition_factor))
        case PrefixedUnit():
            return hash(("prefixed", unit.base_unit, unit.prefix))
        case UnitMultiple():
            return hash(("multiple", unit.unit, unit.factor))
        case UnitMultiplication():
            return hash(("multiplication", frozenset((hash(unit.term1), hash(unit.term2)))))
        case UnitDivision():
            return hash(("division", unit.numerator, unit.denominator))
        case UnitExponentiation():
            return hash(("exponentiation", unit.base, unit.exponent))
        case _:
            assert_never(unit)


def same_structure(left: Unit, right: Unit) -> bool:
    """Return ``True`` when two units are the same variant with equal constituents.

    Singular units without a definition unit have no structure to compare and
    are only equal to themselves.
    """

    match left:
        case BaseUnit():
            return isinstance(right, BaseUnit) and left.base_dimension == right.base_dimension
        case SingularUnit():
            return (
                isinstance(right, SingularUnit)
                and left.definition_unit is not None
                and right.definition_unit is not None
                and left.definition_unit == right.definition_unit
                and left.definition_factor == right.definition_factor
            )
        case PrefixedUnit():
            return (
                isinstance(right, PrefixedUnit)
                and left.prefix == right.prefix
                and left.base_unit == right.base_unit
            )
        case UnitMultiple():
            return (
                isinstance(right, UnitMultiple)
                and left.factor == right.factor
                and left.unit == right.unit
            )
        case UnitMultiplication():
            if not isinstance(right, UnitMultiplication):
                return False
            if left.term1 == right.term1 and left.term2 == right.term2:
                return True
            return left.term1 == right.term2 and left.term2 == right.term1
        case UnitDivision():
            return (
                isinstance(right, UnitDivision)
                and left.numerator == right.numerator
                and left.denominator == right.denominator
            )
        case UnitExponentiation():
            return (
                isinstance(right, UnitExponentiation)
                and left.exponent == right.exponent
                and left.base == right.base
            )
        case _:
            assert_never(left)


def _format_number(value: float) -> str:
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return f"{value:g}"


def describe(unit: Unit) -> str:
    """Human readable label: the symbol if set, else one built from the constituents."""

    if unit.naming.symbol:
        return unit.naming.symbol
    match unit:
        case BaseUnit():
            return unit.naming.name or f"[{unit.base_dimension}]"
        case SingularUnit():
            if unit.naming.name:
                return unit.naming.name
            if unit.definition_unit is None:
                return unit.identifier
            if unit.definition_factor == 1.0:
                return describe(unit.definition_unit)
            return f"{_format_number(unit.definition_factor)}·{describe(unit.definition_unit)}"
        case PrefixedUnit():
            return f"{unit.prefix.symbol}{describe(unit.base_unit)}"
        case UnitMultiple():
            return f"{_format_number(unit.factor)}·{describe(unit.unit)}"
        case UnitMultiplication():
            return f"{_wrap(unit.term1)}·{_wrap(unit.term2)}"
        case UnitDivision():
            return f"{_wrap(unit.numerator)}/{_wrap(unit.denominator)}"
        case UnitExponentiation():
            return f"{_wrap(unit.base)}^{_format_number(unit.exponent)}"
        case _:
            assert_never(unit)


def _wrap(unit: Unit) -> str:
    text = describe(unit)
    if unit.naming.symbol is None and isinstance(unit, (UnitMultiplication, UnitDivision)):
        return f"({text})"
    return text


__all__ = [
    "Unit",
    "UNIT_TYPES",
    "BaseUnit",
    "SingularUnit",
    "PrefixedUnit",
    "UnitMultiple",
    "UnitMultiplication",
    "UnitDivision",
    "UnitExponentiation",
    "derive_dimension",
    "describe",
    "is_unit",
    "new_identifier",
    "same_structure",
]
