"""Conversion of numeric values between units and between scales.

Both operands are reduced independently to a transform relative to the root
of their definition tree; the two reductions are then composed into the
source-to-target transform, which is cached for the pair. Requests for the
reverse pair are answered by inverting the cached transform.
"""

from __future__ import annotations

import math
from typing import Optional, assert_never

import numpy as np

from omunits.config import EngineSettings
from omunits.core.scales import Scale
from omunits.core.units import (
    BaseUnit,
    PrefixedUnit,
    SingularUnit,
    Unit,
    UnitDivision,
    UnitExponentiation,
    UnitMultiple,
    UnitMultiplication,
)
from omunits.errors import ConversionError, ScaleConversionError, UnitConversionError
from omunits.observability import log_event

from .cache import ConversionCache, Transform

# Offset produced when reducing an exponentiation. Unit transforms are composed
# from factors only, so it never reaches a converted value.
EXPONENTIATION_REDUCTION_OFFSET = 1.0


class ConversionEngine:
    """Resolve, cache and apply unit and scale transforms.

    Cached transforms are keyed by identifier only. Identifiers are unique
    within one registry, so use one engine per registry: an engine shared by
    registries that define the same identifier differently returns whichever
    transform it resolved first.
    """

    def __init__(self, settings: Optional[EngineSettings] = None) -> None:
        self.settings = settings or EngineSettings.from_env()
        self.unit_cache = ConversionCache(store_inverse=self.settings.cache_inverse)
        self.scale_cache = ConversionCache(store_inverse=self.settings.cache_inverse)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def convert_unit(self, value: float, source: Unit, target: Unit) -> float:
        """Convert ``value`` expressed in ``source`` to ``target``.

        Raises :class:`UnitConversionError` when an operand is missing, the
        dimensions differ or either unit cannot be reduced.
        """
        return self._unit_transform(source, target).convert(value)

    def convert_scale(self, value: float, source: Scale, target: Scale) -> float:
        """Convert a value located on ``source`` to its location on ``target``."""
        return self._scale_transform(source, target).convert(value)

    def convert_unit_array(self, values, source: Unit, target: Unit) -> np.ndarray:
        transform = self._unit_transform(source, target)
        return transform.convert(np.asarray(values, dtype=np.float64))

    def convert_scale_array(self, values, source: Scale, target: Scale) -> np.ndarray:
        transform = self._scale_transform(source, target)
        return transform.convert(np.asarray(values, dtype=np.float64))

    # ------------------------------------------------------------------
    # Reduction
    # ------------------------------------------------------------------
    def reduce_unit(self, unit: Unit) -> Transform:
        """Transform from ``unit`` to the root unit(s) of its definition tree."""
        return self._reduce_unit(unit, 1.0)

    def _reduce_unit(self, unit: Unit, factor: float) -> Transform:
        match unit:
            case BaseUnit():
                return Transform(factor, 0.0)
            case SingularUnit():
                if unit.definition_unit is None:
                    return Transform(factor, 0.0)
                return self._reduce_unit(unit.definition_unit, factor * unit.definition_factor)
            case PrefixedUnit():
                return self._reduce_unit(unit.base_unit, factor * unit.prefix.factor)
            case UnitMultiple():
                return self._reduce_unit(unit.unit, factor * unit.factor)
            case UnitMultiplication():
                term1 = self._reduce_unit(unit.term1, 1.0).factor
                term2 = self._reduce_unit(unit.term2, 1.0).factor
                return Transform(factor * term1 * term2, 0.0)
            case UnitDivision():
                numerator = self._reduce_unit(unit.numerator, 1.0).factor
                denominator = self._reduce_unit(unit.denominator, 1.0).factor
                return Transform(factor * numerator / denominator, 0.0)
            case UnitExponentiation():
                base = self._reduce_unit(unit.base, 1.0).factor
                return Transform(
                    factor * math.pow(base, unit.exponent), EXPONENTIATION_REDUCTION_OFFSET
                )
            case _:
                assert_never(unit)

    def reduce_scale(self, scale: Scale) -> Transform:
        """Transform from ``scale`` to the base scale of its definition chain."""
        factor, offset = 1.0, 0.0
        for step in scale.definition_chain():
            if step.definition_scale is None:
                break
            factor = factor * step.definition_factor
            offset = offset * step.definition_factor + step.definition_offset
        return Transform(factor, offset)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def _unit_transform(self, source: Unit, target: Unit) -> Transform:
        if source is None:
            raise UnitConversionError(
                "Could not convert value because the source unit is missing.", source, target
            )
        if target is None:
            raise UnitConversionError(
                f"Could not convert value in '{source}' because the target unit is missing.",
                source,
                target,
            )
        try:
            return self.unit_cache.get_or_compute(
                source.identifier, target.identifier, lambda: self._resolve_units(source, target)
            )
        except ConversionError:
            raise
        except Exception as exc:
            raise UnitConversionError(
                f"Could not convert from unit '{source}' to '{target}'.", source, target
            ) from exc

    def _resolve_units(self, source: Unit, target: Unit) -> Transform:
        if source.dimension != target.dimension:
            raise UnitConversionError(
                f"Could not convert from unit '{source}' to unit '{target}' because their "
                f"dimensions differ ({source.dimension} vs {target.dimension}).",
                source,
                target,
            )
        to_base_source = self.reduce_unit(source)
        to_base_target = self.reduce_unit(target)
        transform = Transform(to_base_source.factor / to_base_target.factor, 0.0)
        self._resolved("unit", source, target, transform)
        return transform

    def _scale_transform(self, source: Scale, target: Scale) -> Transform:
        if source is None:
            raise ScaleConversionError(
                "Could not convert value because the source scale is missing.", source, target
            )
        if target is None:
            raise ScaleConversionError(
                f"Could not convert value on '{source}' because the target scale is missing.",
                source,
                target,
            )
        try:
            return self.scale_cache.get_or_compute(
                source.identifier, target.identifier, lambda: self._resolve_scales(source, target)
            )
        except ConversionError:
            raise
        except Exception as exc:
            raise ScaleConversionError(
                f"Could not convert from scale '{source}' to '{target}'.", source, target
            ) from exc

    def _resolve_scales(self, source: Scale, target: Scale) -> Transform:
        if source.unit.dimension != target.unit.dimension:
            raise ScaleConversionError(
                f"Could not convert from scale '{source}' to scale '{target}' because the "
                f"dimensions of their units differ ({source.unit.dimension} vs "
                f"{target.unit.dimension}).",
                source,
                target,
            )
        if self.settings.scale_require_common_base and source.base_scale() != target.base_scale():
            raise ScaleConversionError(
                f"Could not convert from scale '{source}' to scale '{target}' because they are "
                f"defined on different base scales ('{source.base_scale()}' and "
                f"'{target.base_scale()}').",
                source,
                target,
            )
        to_base_source = self.reduce_scale(source)
        to_base_target = self.reduce_scale(target)
        transform = Transform(
            to_base_source.factor / to_base_target.factor,
            (to_base_source.offset - to_base_target.offset) / to_base_target.factor,
        )
        self._resolved("scale", source, target, transform)
        return transform

    def _resolved(self, kind: str, source, target, transform: Transform) -> None:
        if not self.settings.log_conversions:
            return
        log_event(
            "conversion resolved",
            kind=kind,
            source=source.identifier,
            target=target.identifier,
            factor=transform.factor,
            offset=transform.offset,
        )


__all__ = [
    "ConversionEngine",
    "EXPONENTIATION_REDUCTION_OFFSET",
    "Transform",
]
