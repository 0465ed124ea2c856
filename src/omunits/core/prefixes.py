"""Decimal and binary unit prefixes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Prefix:
    """A named multiplier such as ``kilo`` (``k``, 1e3)."""

    name: str
    symbol: str
    factor: float

    def __post_init__(self) -> None:
        if not self.factor or self.factor != self.factor:
            raise ValueError(f"Prefix factor must be a non-zero number, got {self.factor}")

    def __str__(self) -> str:
        return self.symbol


YOTTA = Prefix("yotta", "Y", 1e24)
ZETTA = Prefix("zetta", "Z", 1e21)
EXA = Prefix("exa", "E", 1e18)
PETA = Prefix("peta", "P", 1e15)
TERA = Prefix("tera", "T", 1e12)
GIGA = Prefix("giga", "G", 1e9)
MEGA = Prefix("mega", "M", 1e6)
KILO = Prefix("kilo", "k", 1e3)
HECTO = Prefix("hecto", "h", 1e2)
DECA = Prefix("deca", "da", 1e1)
DECI = Prefix("deci", "d", 1e-1)
CENTI = Prefix("centi", "c", 1e-2)
MILLI = Prefix("milli", "m", 1e-3)
MICRO = Prefix("micro", "µ", 1e-6)
NANO = Prefix("nano", "n", 1e-9)
PICO = Prefix("pico", "p", 1e-12)
FEMTO = Prefix("femto", "f", 1e-15)
ATTO = Prefix("atto", "a", 1e-18)
ZEPTO = Prefix("zepto", "z", 1e-21)
YOCTO = Prefix("yocto", "y", 1e-24)

DECIMAL_PREFIXES: Tuple[Prefix, ...] = (
    YOTTA, ZETTA, EXA, PETA, TERA, GIGA, MEGA, KILO, HECTO, DECA,
    DECI, CENTI, MILLI, MICRO, NANO, PICO, FEMTO, ATTO, ZEPTO, YOCTO,
)

KIBI = Prefix("kibi", "Ki", 2.0**10)
MEBI = Prefix("mebi", "Mi", 2.0**20)
GIBI = Prefix("gibi", "Gi", 2.0**30)
TEBI = Prefix("tebi", "Ti", 2.0**40)
PEBI = Prefix("pebi", "Pi", 2.0**50)
EXBI = Prefix("exbi", "Ei", 2.0**60)
ZEBI = Prefix("zebi", "Zi", 2.0**70)
YOBI = Prefix("yobi", "Yi", 2.0**80)

BINARY_PREFIXES: Tuple[Prefix, ...] = (KIBI, MEBI, GIBI, TEBI, PEBI, EXBI, ZEBI, YOBI)

# JEDEC memory prefixes reuse the decimal symbols with powers of two.
JEDEC_KILO = Prefix("kilo", "K", 2.0**10)
JEDEC_MEGA = Prefix("mega", "M", 2.0**20)
JEDEC_GIGA = Prefix("giga", "G", 2.0**30)

JEDEC_PREFIXES: Tuple[Prefix, ...] = (JEDEC_KILO, JEDEC_MEGA, JEDEC_GIGA)

_BY_SYMBOL: Dict[str, Prefix] = {p.symbol: p for p in (*DECIMAL_PREFIXES, *BINARY_PREFIXES)}
_BY_SYMBOL["u"] = MICRO


def prefix_by_symbol(symbol: str) -> Prefix:
    """Return the decimal or IEC binary prefix with ``symbol``."""
    try:
        return _BY_SYMBOL[symbol]
    except KeyError as exc:
        raise KeyError(f"Unknown prefix symbol '{symbol}'") from exc


__all__ = [
    "Prefix",
    "DECIMAL_PREFIXES",
    "BINARY_PREFIXES",
    "JEDEC_PREFIXES",
    "prefix_by_symbol",
    "YOTTA", "ZETTA", "EXA", "PETA", "TERA", "GIGA", "MEGA", "KILO", "HECTO", "DECA",
    "DECI", "CENTI", "MILLI", "MICRO", "NANO", "PICO", "FEMTO", "ATTO", "ZEPTO", "YOCTO",
    "KIBI", "MEBI", "GIBI", "TEBI", "PEBI", "EXBI", "ZEBI", "YOBI",
    "JEDEC_KILO", "JEDEC_MEGA", "JEDEC_GIGA",
]
