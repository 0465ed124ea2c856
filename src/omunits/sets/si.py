"""SI units, common non-SI units and temperature scales."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from omunits.core import dimensions as dims
from omunits.core import prefixes
from omunits.core.scales import Scale
from omunits.core.units import Unit
from omunits.registry import UnitAndScaleRegistry

NAMESPACE = "om"


def om_id(name: str) -> str:
    """Identifier used for units and scales of this set."""
    return f"{NAMESPACE}:{name.replace(' ', '-')}"


@dataclass
class SIUnitSet:
    """Named handles on the units and scales installed by :func:`install_si`."""

    units: Dict[str, Unit] = field(default_factory=dict)
    scales: Dict[str, Scale] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Unit | Scale:
        if key in self.units:
            return self.units[key]
        return self.scales[key]

    def __contains__(self, key: object) -> bool:
        return key in self.units or key in self.scales

    def all_units(self) -> List[Unit]:
        return list(self.units.values())

    def all_scales(self) -> List[Scale]:
        return list(self.scales.values())


def install_si(registry: UnitAndScaleRegistry) -> SIUnitSet:
    """Create the SI set in ``registry``; pass to ``add_unit_and_scale_set``."""

    s = SIUnitSet()
    u = s.units

    def base(name: str, symbol: str, dimension: dims.Dimension) -> Unit:
        u[name] = registry.create_base_unit(
            dimension, name=name, symbol=symbol, identifier=om_id(name)
        )
        return u[name]

    def singular(name: str, symbol: str, definition: Unit, factor: float = 1.0) -> Unit:
        u[name] = registry.create_singular_unit(
            definition, factor, name=name, symbol=symbol, identifier=om_id(name)
        )
        return u[name]

    def prefixed(name: str, symbol: str, unit: Unit, prefix: prefixes.Prefix) -> Unit:
        u[name] = registry.create_prefixed_unit(
            unit, prefix, name=name, symbol=symbol, identifier=om_id(name)
        )
        return u[name]

    def power(name: str, symbol: str, unit: Unit, exponent: float) -> Unit:
        u[name] = registry.create_unit_exponentiation(
            unit, exponent, name=name, symbol=symbol, identifier=om_id(name)
        )
        return u[name]

    def per(name: str, symbol: str, numerator: Unit, denominator: Unit) -> Unit:
        u[name] = registry.create_unit_division(
            numerator, denominator, name=name, symbol=symbol, identifier=om_id(name)
        )
        return u[name]

    def times(name: str, symbol: str, left: Unit, right: Unit) -> Unit:
        u[name] = registry.create_unit_multiplication(
            left, right, name=name, symbol=symbol, identifier=om_id(name)
        )
        return u[name]

    # -- Base units ---------------------------------------------------------
    metre = base("metre", "m", dims.LENGTH)
    metre.naming.add_alternative_name("meter", "en")
    metre.naming.set_name("meter", "nl")
    kilogram = base("kilogram", "kg", dims.MASS)
    second = base("second", "s", dims.TIME)
    second.naming.add_alternative_symbol("sec")
    ampere = base("ampere", "A", dims.CURRENT)
    kelvin = base("kelvin", "K", dims.TEMPERATURE)
    base("mole", "mol", dims.AMOUNT)
    base("candela", "cd", dims.LUMINOSITY)

    # -- Length, mass, time -------------------------------------------------
    prefixed("kilometre", "km", metre, prefixes.KILO)
    centimetre = prefixed("centimetre", "cm", metre, prefixes.CENTI)
    prefixed("millimetre", "mm", metre, prefixes.MILLI)
    prefixed("micrometre", "µm", metre, prefixes.MICRO)
    inch = singular("inch", "in", centimetre, 2.54)
    foot = singular("foot", "ft", inch, 12.0)
    yard = singular("yard", "yd", foot, 3.0)
    singular("mile", "mi", yard, 1760.0)

    gram = singular("gram", "g", kilogram, 1e-3)
    prefixed("milligram", "mg", gram, prefixes.MILLI)
    singular("tonne", "t", kilogram, 1000.0)
    singular("pound", "lb", kilogram, 0.45359237)

    prefixed("millisecond", "ms", second, prefixes.MILLI)
    minute = singular("minute", "min", second, 60.0)
    hour = singular("hour", "h", minute, 60.0)
    singular("day", "d", hour, 24.0)

    # -- Geometry and kinematics -------------------------------------------
    square_metre = power("square metre", "m²", metre, 2)
    cubic_metre = power("cubic metre", "m³", metre, 3)
    litre = singular("litre", "L", cubic_metre, 1e-3)
    litre.naming.add_alternative_symbol("l")
    litre.naming.add_alternative_name("liter", "en")
    prefixed("millilitre", "mL", litre, prefixes.MILLI)
    per("metre per second", "m/s", metre, second)
    per("kilometre per hour", "km/h", u["kilometre"], hour)
    second_squared = power("second squared", "s²", second, 2)
    metre_per_second_squared = per("metre per second squared", "m/s²", metre, second_squared)

    # -- Derived SI units ---------------------------------------------------
    newton = singular(
        "newton", "N", registry.create_unit_multiplication(kilogram, metre_per_second_squared)
    )
    joule = singular("joule", "J", registry.create_unit_multiplication(newton, metre))
    watt = singular("watt", "W", registry.create_unit_division(joule, second))
    pascal = singular("pascal", "Pa", registry.create_unit_division(newton, square_metre))
    singular("hertz", "Hz", registry.create_unit_exponentiation(second, -1))
    singular("coulomb", "C", registry.create_unit_multiplication(ampere, second))
    volt = singular("volt", "V", registry.create_unit_division(watt, ampere))
    singular("ohm", "Ω", registry.create_unit_division(volt, ampere))
    times("newton metre", "N·m", newton, metre)

    prefixed("kilojoule", "kJ", joule, prefixes.KILO)
    kilowatt = prefixed("kilowatt", "kW", watt, prefixes.KILO)
    prefixed("kilopascal", "kPa", pascal, prefixes.KILO)
    singular("bar", "bar", pascal, 1e5)
    times("kilowatt hour", "kWh", kilowatt, hour)

    # -- Temperature --------------------------------------------------------
    degree_celsius = singular("degree Celsius", "°C", kelvin)
    degree_fahrenheit = singular("degree Fahrenheit", "°F", kelvin, 5.0 / 9.0)
    degree_rankine = singular("degree Rankine", "°R", kelvin, 5.0 / 9.0)

    def scale(name: str, symbol: str, unit: Unit, definition=None, offset=0.0, factor=1.0) -> Scale:
        s.scales[name] = registry.create_scale(
            unit, definition, offset, factor, name=name, symbol=symbol, identifier=om_id(name)
        )
        return s.scales[name]

    kelvin_scale = scale("Kelvin scale", "K", kelvin)
    celsius_scale = scale("Celsius scale", "°C", degree_celsius, kelvin_scale, 273.15)
    scale(
        "Fahrenheit scale", "°F", degree_fahrenheit, celsius_scale, -160.0 / 9.0, 5.0 / 9.0
    )
    scale("Rankine scale", "°R", degree_rankine, kelvin_scale, 0.0, 5.0 / 9.0)

    return s


__all__ = ["SIUnitSet", "install_si", "om_id"]
