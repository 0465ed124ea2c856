"""Dimensional bookkeeping for units and scales.

This module models physical dimensions as rational exponent vectors over the
seven SI base quantities (length, mass, time, electric current, temperature,
amount of substance, luminous intensity). The :class:`Dimension` type is closed
under multiplication, division and exponentiation, which mirrors how compound
units derive their dimension from their constituents.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Mapping, Tuple


class DimensionalError(Exception):
    """Raised when a dimensional operation is invalid."""


_BASE_FIELDS: Tuple[str, ...] = (
    "length",
    "mass",
    "time",
    "current",
    "temperature",
    "amount",
    "luminosity",
)

BASE_SYMBOLS: Tuple[str, ...] = ("L", "M", "T", "I", "Θ", "N", "J")

_SYMBOL_TO_FIELD: Dict[str, str] = dict(zip(BASE_SYMBOLS, _BASE_FIELDS))


def to_exponent(value: float | int | str | Fraction) -> Fraction:
    """Coerce ``value`` to a rational exponent."""

    if isinstance(value, bool):
        raise DimensionalError("Dimension exponent cannot be a boolean")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value, 1)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise DimensionalError(f"Dimension exponent must be finite, got {value}")
        return Fraction(value).limit_denominator(10_000)
    try:
        return Fraction(value)
    except (TypeError, ValueError) as exc:
        raise DimensionalError(f"Cannot use {value!r} as a dimension exponent") from exc


@dataclass(frozen=True)
class Dimension:
    """Physical dimension as rational exponents of the SI base quantities.

    Two dimensions are equal iff all exponents are equal. Instances are
    hashable and therefore usable as index keys.
    """

    length: Fraction = Fraction(0)
    mass: Fraction = Fraction(0)
    time: Fraction = Fraction(0)
    current: Fraction = Fraction(0)
    temperature: Fraction = Fraction(0)
    amount: Fraction = Fraction(0)
    luminosity: Fraction = Fraction(0)

    def __post_init__(self) -> None:
        for field in _BASE_FIELDS:
            object.__setattr__(self, field, to_exponent(getattr(self, field)))

    # -- Core algebra -----------------------------------------------------
    def __mul__(self, other: Dimension) -> Dimension:
        """Multiply two dimensions by adding their exponent vectors."""
        if not isinstance(other, Dimension):
            raise DimensionalError(f"Cannot multiply Dimension by {type(other)}")

        return Dimension(*[a + b for a, b in zip(self.as_tuple(), other.as_tuple())])

    def __truediv__(self, other: Dimension) -> Dimension:
        """Divide two dimensions by subtracting exponent vectors."""
        if not isinstance(other, Dimension):
            raise DimensionalError(f"Cannot divide Dimension by {type(other)}")

        return Dimension(*[a - b for a, b in zip(self.as_tuple(), other.as_tuple())])

    def __pow__(self, exponent: float | int | Fraction) -> Dimension:
        """Raise the dimension to a (rational) power."""
        power = to_exponent(exponent)
        return Dimension(*[value * power for value in self.as_tuple()])

    compose_multiply = __mul__
    compose_divide = __truediv__
    compose_power = __pow__

    # -- Helpers ----------------------------------------------------------
    def as_tuple(self) -> Tuple[Fraction, ...]:
        return tuple(getattr(self, field) for field in _BASE_FIELDS)

    def as_dict(self) -> Dict[str, Fraction]:
        """Return the non-zero exponents keyed by base-dimension symbol."""
        return {
            symbol: power
            for symbol, power in zip(BASE_SYMBOLS, self.as_tuple())
            if power != 0
        }

    @classmethod
    def from_mapping(cls, exponents: Mapping[str, float | int | Fraction]) -> Dimension:
        """Build a dimension from ``{"L": 1, "T": -1}`` or ``{"length": 1}``."""
        values: Dict[str, Fraction] = {}
        for key, power in exponents.items():
            field = _SYMBOL_TO_FIELD.get(key, key)
            if field not in _BASE_FIELDS:
                raise DimensionalError(f"Unknown base dimension '{key}'")
            values[field] = to_exponent(power)
        return cls(**values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def is_dimensionless(self) -> bool:
        """Return ``True`` when all exponents are zero."""
        return all(value == 0 for value in self.as_tuple())

    @classmethod
    def dimensionless(cls) -> Dimension:
        return cls()

    def __str__(self) -> str:
        if self.is_dimensionless():
            return "dimensionless"

        parts = []
        for symbol, power in zip(BASE_SYMBOLS, self.as_tuple()):
            if power == 0:
                continue
            if power == 1:
                parts.append(symbol)
            else:
                parts.append(f"{symbol}^{power}")
        return " * ".join(parts)


DIMENSIONLESS = Dimension.dimensionless()
LENGTH = Dimension(length=1)
MASS = Dimension(mass=1)
TIME = Dimension(time=1)
CURRENT = Dimension(current=1)
TEMPERATURE = Dimension(temperature=1)
AMOUNT = Dimension(amount=1)
LUMINOSITY = Dimension(luminosity=1)

AREA = LENGTH**2
VOLUME = LENGTH**3
FREQUENCY = DIMENSIONLESS / TIME
VELOCITY = LENGTH / TIME
ACCELERATION = LENGTH / (TIME**2)
FORCE = MASS * ACCELERATION
PRESSURE = FORCE / AREA
ENERGY = FORCE * LENGTH
POWER = ENERGY / TIME
CHARGE = CURRENT * TIME
VOLTAGE = POWER / CURRENT
RESISTANCE = VOLTAGE / CURRENT


__all__ = [
    "BASE_SYMBOLS",
    "Dimension",
    "DimensionalError",
    "to_exponent",
    "DIMENSIONLESS",
    "LENGTH",
    "MASS",
    "TIME",
    "CURRENT",
    "TEMPERATURE",
    "AMOUNT",
    "LUMINOSITY",
    "AREA",
    "VOLUME",
    "FREQUENCY",
    "VELOCITY",
    "ACCELERATION",
    "FORCE",
    "PRESSURE",
    "ENERGY",
    "POWER",
    "CHARGE",
    "VOLTAGE",
    "RESISTANCE",
]
