"""Measures (value + unit) and points (value + scale).

Arithmetic on measures produces compound units through the registry; because
those units are created anonymously the registry hands back an existing
instance whenever an equal tree is already known.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from omunits.conversion.engine import ConversionEngine
from omunits.core.scales import Scale
from omunits.core.units import Unit, describe
from omunits.registry import UnitAndScaleRegistry


@dataclass(frozen=True)
class Measure:
    value: float
    unit: Unit

    def __str__(self) -> str:
        return f"{self.value:g} {describe(self.unit)}"


@dataclass(frozen=True)
class Point:
    value: float
    scale: Scale

    def __str__(self) -> str:
        return f"{self.value:g} {self.scale}"


class MeasureAlgebra:
    """Arithmetic and conversion of measures and points."""

    def __init__(self, registry: UnitAndScaleRegistry, engine: ConversionEngine) -> None:
        self.registry = registry
        self.engine = engine

    def to(self, measure: Measure, unit: Unit) -> Measure:
        return Measure(self.engine.convert_unit(measure.value, measure.unit, unit), unit)

    def to_scale(self, point: Point, scale: Scale) -> Point:
        return Point(self.engine.convert_scale(point.value, point.scale, scale), scale)

    def multiply(self, left: Measure, right: Measure) -> Measure:
        unit = self.registry.create_unit_multiplication(left.unit, right.unit)
        return Measure(left.value * right.value, unit)

    def divide(self, left: Measure, right: Measure) -> Measure:
        unit = self.registry.create_unit_division(left.unit, right.unit)
        return Measure(left.value / right.value, unit)

    def power(self, measure: Measure, exponent: float) -> Measure:
        value = math.pow(measure.value, exponent)
        return Measure(value, self.registry.create_unit_exponentiation(measure.unit, exponent))

    def scale_by(self, measure: Measure, factor: float) -> Measure:
        return Measure(measure.value * factor, measure.unit)

    def add(self, left: Measure, right: Measure) -> Measure:
        """Sum expressed in the unit of ``left``."""
        return Measure(left.value + self._aligned(right, left.unit), left.unit)

    def subtract(self, left: Measure, right: Measure) -> Measure:
        return Measure(left.value - self._aligned(right, left.unit), left.unit)

    def difference(self, left: Point, right: Point) -> Measure:
        """Distance between two points, in the unit of ``left``'s scale."""
        other = self.engine.convert_scale(right.value, right.scale, left.scale)
        return Measure(left.value - other, left.scale.unit)

    def _aligned(self, measure: Measure, unit: Unit) -> float:
        if measure.unit is unit:
            return measure.value
        return self.engine.convert_unit(measure.value, measure.unit, unit)


__all__ = ["Measure", "MeasureAlgebra", "Point"]
