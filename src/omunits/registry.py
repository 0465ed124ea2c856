"""Registry interning units and scales by identifier and by dimension.

The registry is the single source of truth for the unit universe of a
process. Units created with an identifier, name or symbol are registered as
given. Anonymous units, typically the by-product of arithmetic on measures,
are first compared against the units already known in the same dimension so
structurally identical trees resolve to one canonical instance.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple, TypeVar, Union

from omunits.core.dimensions import Dimension, DimensionalError
from omunits.core.naming import Naming
from omunits.core.prefixes import Prefix
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
    is_unit,
)
from omunits.errors import NotFoundError, UnitOrScaleCreationError
from omunits.observability import log_event, traced

logger = logging.getLogger(__name__)

UnitOrScale = Union[Unit, Scale]
SetT = TypeVar("SetT")
_Snapshot = Tuple[Dict[str, UnitOrScale], Dict[Dimension, List[Unit]]]


class UnitAndScaleRegistry:
    """Thread-safe store of units and scales.

    One lock guards both the identifier map and the dimension index, so the
    scan-then-insert of deduplication is atomic.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_id: Dict[str, UnitOrScale] = {}
        self._by_dimension: Dict[Dimension, List[Unit]] = {}

    # ------------------------------------------------------------------
    # Unit creation
    # ------------------------------------------------------------------
    def create_base_unit(
        self,
        dimension: Dimension,
        *,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> BaseUnit:
        return self._create(
            BaseUnit, name, symbol, identifier, base_dimension=dimension
        )

    def create_singular_unit(
        self,
        definition_unit: Optional[Unit] = None,
        definition_factor: float = 1.0,
        *,
        dimension: Optional[Dimension] = None,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> SingularUnit:
        """Create a unit equal to ``definition_factor`` times ``definition_unit``.

        Without a definition unit the new unit is a root of ``dimension``
        (dimensionless when omitted).
        """
        if is_unit(definition_unit) and dimension is not None:
            if dimension != definition_unit.dimension:
                raise UnitOrScaleCreationError(
                    f"Dimension {dimension} contradicts definition unit "
                    f"'{definition_unit}' ({definition_unit.dimension})"
                )
        extra = {} if dimension is None else {"intrinsic_dimension": dimension}
        return self._create(
            SingularUnit,
            name,
            symbol,
            identifier,
            definition_unit=definition_unit,
            definition_factor=definition_factor,
            **extra,
        )

    def create_prefixed_unit(
        self,
        base_unit: Union[BaseUnit, SingularUnit],
        prefix: Prefix,
        *,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> PrefixedUnit:
        return self._create(
            PrefixedUnit, name, symbol, identifier, base_unit=base_unit, prefix=prefix
        )

    def create_unit_multiple(
        self,
        unit: Unit,
        factor: float,
        *,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> UnitMultiple:
        return self._create(UnitMultiple, name, symbol, identifier, unit=unit, factor=factor)

    def create_unit_multiplication(
        self,
        unit1: Unit,
        unit2: Unit,
        *,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> UnitMultiplication:
        return self._create(
            UnitMultiplication, name, symbol, identifier, term1=unit1, term2=unit2
        )

    def create_unit_division(
        self,
        numerator: Unit,
        denominator: Unit,
        *,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> UnitDivision:
        return self._create(
            UnitDivision, name, symbol, identifier, numerator=numerator, denominator=denominator
        )

    def create_unit_exponentiation(
        self,
        base: Unit,
        exponent: float,
        *,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> UnitExponentiation:
        return self._create(
            UnitExponentiation, name, symbol, identifier, base=base, exponent=exponent
        )

    def _create(self, kind, name, symbol, identifier, **fields):
        naming = Naming(name=name, symbol=symbol)
        if identifier is not None:
            fields["identifier"] = identifier
        try:
            unit = kind(naming=naming, **fields)
        except (TypeError, ValueError, DimensionalError) as exc:
            raise UnitOrScaleCreationError(f"Could not create {kind.__name__}: {exc}") from exc

        anonymous = identifier is None and name is None and symbol is None
        with self._lock:
            if anonymous:
                existing = self._structural_match(unit)
                if existing is not None:
                    logger.debug("Reusing %r for anonymous %s", existing, kind.__name__)
                    return existing
            self._register_unit(unit)
        return unit

    def _structural_match(self, unit: Unit) -> Optional[Unit]:
        for candidate in self._by_dimension.get(unit.dimension, ()):
            if candidate == unit:
                return candidate
        return None

    # ------------------------------------------------------------------
    # Scale creation
    # ------------------------------------------------------------------
    def create_scale(
        self,
        unit: Unit,
        definition_scale: Optional[Scale] = None,
        definition_offset: float = 0.0,
        definition_factor: float = 1.0,
        *,
        name: Optional[str] = None,
        symbol: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> Scale:
        """Create a scale; a value ``x`` on it equals ``x * factor + offset`` on its definition scale."""
        fields = {} if identifier is None else {"identifier": identifier}
        try:
            scale = Scale(
                unit,
                definition_scale,
                definition_factor,
                definition_offset,
                naming=Naming(name=name, symbol=symbol),
                **fields,
            )
        except (TypeError, ValueError) as exc:
            raise UnitOrScaleCreationError(f"Could not create scale: {exc}") from exc
        with self._lock:
            self._register_scale(scale)
        return scale

    # ------------------------------------------------------------------
    # Registration of prebuilt instances
    # ------------------------------------------------------------------
    def add_unit(self, unit: Unit) -> Unit:
        """Register a prebuilt unit; re-adding the same instance is a no-op."""
        if not is_unit(unit):
            raise UnitOrScaleCreationError(f"Not a unit: {unit!r}")
        with self._lock:
            if self._by_id.get(unit.identifier) is not unit:
                self._register_unit(unit)
        return unit

    def add_scale(self, scale: Scale) -> Scale:
        """Register a prebuilt scale; re-adding the same instance is a no-op."""
        if not isinstance(scale, Scale):
            raise UnitOrScaleCreationError(f"Not a scale: {scale!r}")
        with self._lock:
            if self._by_id.get(scale.identifier) is not scale:
                self._register_scale(scale)
        return scale

    def add_unit_and_scale_set(self, loader: Callable[["UnitAndScaleRegistry"], SetT]) -> SetT:
        """Run ``loader`` against this registry and return whatever it builds.

        A loader is any callable that creates or adds units and scales through
        the registry passed to it. The install is all or nothing: if the loader
        raises, everything it registered is removed again.
        """
        label = getattr(loader, "__name__", repr(loader))
        with self._lock, traced("unit-set"):
            snapshot = self._snapshot()
            try:
                unit_set = loader(self)
            except UnitOrScaleCreationError:
                self._restore(snapshot)
                raise
            except Exception as exc:
                self._restore(snapshot)
                raise UnitOrScaleCreationError(f"Could not add unit set {label}: {exc}") from exc
            log_event("unit set registered", unit_set=label, added=len(self) - len(snapshot[0]))
        return unit_set

    def _snapshot(self) -> _Snapshot:
        by_dimension = {dimension: list(units) for dimension, units in self._by_dimension.items()}
        return dict(self._by_id), by_dimension

    def _restore(self, snapshot: _Snapshot) -> None:
        self._by_id, self._by_dimension = snapshot
        logger.debug("Rolled back registry to %d units and scales", len(self._by_id))

    def _register_unit(self, unit: Unit) -> None:
        self._claim_identifier(unit)
        self._by_dimension.setdefault(unit.dimension, []).append(unit)

    def _register_scale(self, scale: Scale) -> None:
        self._claim_identifier(scale)

    def _claim_identifier(self, item: UnitOrScale) -> None:
        if item.identifier in self._by_id:
            raise UnitOrScaleCreationError(
                f"Identifier '{item.identifier}' is already registered "
                f"to {self._by_id[item.identifier]!r}"
            )
        self._by_id[item.identifier] = item

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get_unit_or_scale(self, identifier: str) -> UnitOrScale:
        with self._lock:
            item = self._by_id.get(identifier)
        if item is None:
            raise NotFoundError(
                f"No unit or scale registered as '{identifier}'; this registry has no "
                "data source to create units or scales from unknown identifiers.",
                identifier,
            )
        return item

    get = get_unit_or_scale

    def get_unit(self, identifier: str) -> Unit:
        item = self.get_unit_or_scale(identifier)
        if not is_unit(item):
            raise NotFoundError(f"'{identifier}' is a scale, not a unit", identifier)
        return item

    def get_scale(self, identifier: str) -> Scale:
        item = self.get_unit_or_scale(identifier)
        if not isinstance(item, Scale):
            raise NotFoundError(f"'{identifier}' is a unit, not a scale", identifier)
        return item

    def units_in_dimension(self, dimension: Dimension) -> List[Unit]:
        with self._lock:
            return list(self._by_dimension.get(dimension, ()))

    def find(self, label: str) -> List[UnitOrScale]:
        """Units and scales whose identifier, name, alternative name or symbol is ``label``."""
        with self._lock:
            items = list(self._by_id.values())
        return [item for item in items if item.identifier == label or item.naming.matches(label)]

    def units(self) -> List[Unit]:
        with self._lock:
            return [item for item in self._by_id.values() if is_unit(item)]

    def scales(self) -> List[Scale]:
        with self._lock:
            return [item for item in self._by_id.values() if isinstance(item, Scale)]

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._by_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)


__all__ = ["UnitAndScaleRegistry", "UnitOrScale"]
