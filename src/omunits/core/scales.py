"""Measurement scales: a unit plus an optional affine link to a parent scale."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .dimensions import Dimension
from .naming import Naming
from .units import Unit, describe, is_unit, new_identifier


@dataclass(frozen=True, eq=False, repr=False)
class Scale:
    """A scale on which values of ``unit`` are located.

    A value ``x`` on this scale corresponds to
    ``x * definition_factor + definition_offset`` on ``definition_scale``.
    Without a definition scale this is a base scale. Compatibility with other
    scales is checked when converting, not here.
    """

    unit: Unit
    definition_scale: Optional["Scale"] = None
    definition_factor: float = 1.0
    definition_offset: float = 0.0
    identifier: str = field(default_factory=new_identifier, kw_only=True)
    naming: Naming = field(default_factory=Naming, kw_only=True)

    def __post_init__(self) -> None:
        if not is_unit(self.unit):
            raise TypeError(f"Scale unit must be a unit, got {type(self.unit).__name__}")
        if self.definition_scale is not None and not isinstance(self.definition_scale, Scale):
            raise TypeError(
                f"Definition scale must be a Scale, got {type(self.definition_scale).__name__}"
            )
        for label in ("definition_factor", "definition_offset"):
            value = getattr(self, label)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise TypeError(f"{label} must be a number, got {type(value).__name__}")
            if not math.isfinite(value):
                raise ValueError(f"{label} must be finite, got {value}")
            object.__setattr__(self, label, float(value))
        if self.definition_factor == 0.0:
            raise ValueError("definition_factor must be non-zero")

    @property
    def dimension(self) -> Dimension:
        return self.unit.dimension

    @property
    def is_base_scale(self) -> bool:
        return self.definition_scale is None

    @property
    def name(self) -> Optional[str]:
        return self.naming.name

    @property
    def symbol(self) -> Optional[str]:
        return self.naming.symbol

    def definition_chain(self) -> Iterator["Scale"]:
        """Yield this scale and each definition scale up to the base scale."""
        seen = set()
        scale: Optional[Scale] = self
        while scale is not None:
            if scale.identifier in seen:
                raise ValueError(f"Scale '{scale}' is defined in terms of itself")
            seen.add(scale.identifier)
            yield scale
            scale = scale.definition_scale

    def base_scale(self) -> "Scale":
        *_, root = self.definition_chain()
        return root

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scale):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(("scale", self.identifier))

    def __str__(self) -> str:
        return self.naming.symbol or self.naming.name or f"scale of {describe(self.unit)}"

    def __repr__(self) -> str:
        return f"<Scale {self}>"


__all__ = ["Scale"]
