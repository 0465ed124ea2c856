"""Conversion engine behaviour: scenarios, algebraic properties, caching and failures."""

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from omunits.config import EngineSettings
from omunits.conversion import EXPONENTIATION_REDUCTION_OFFSET, ConversionEngine
from omunits.core.dimensions import LENGTH, TEMPERATURE, TIME
from omunits.errors import ConversionError, ScaleConversionError, UnitConversionError
from omunits.observability import bind_trace_id, reset_trace_id
from omunits.registry import UnitAndScaleRegistry


class CountingEngine(ConversionEngine):
    """Engine that records how often a unit is reduced."""

    def __init__(self, settings=None):
        super().__init__(settings or EngineSettings())
        self.reductions = 0

    def reduce_unit(self, unit):
        self.reductions += 1
        return super().reduce_unit(unit)


@pytest.fixture()
def lengths(registry):
    metre = registry.create_base_unit(LENGTH, name="metre", symbol="m", identifier="test:metre")
    km = registry.create_singular_unit(
        metre, 1000.0, name="kilometre", symbol="km", identifier="test:kilometre"
    )
    return metre, km


@pytest.fixture()
def temperature_scales(registry):
    kelvin = registry.create_base_unit(TEMPERATURE, name="kelvin", symbol="K")
    celsius_unit = registry.create_singular_unit(kelvin, name="degree Celsius", symbol="°C")
    kelvin_scale = registry.create_scale(kelvin, name="Kelvin scale")
    celsius = registry.create_scale(celsius_unit, kelvin_scale, 273.15, 1.0, name="Celsius scale")
    return kelvin_scale, celsius


# -- Scenarios ---------------------------------------------------------------


def test_kilometre_to_metre(engine, lengths):
    metre, km = lengths
    assert engine.convert_unit(5, km, metre) == 5000


def test_metre_to_kilometre(engine, lengths):
    metre, km = lengths
    assert math.isclose(engine.convert_unit(5000, metre, km), 5)


def test_celsius_and_kelvin(engine, temperature_scales):
    kelvin_scale, celsius = temperature_scales
    assert engine.convert_scale(0, celsius, kelvin_scale) == 273.15
    assert engine.convert_scale(273.15, kelvin_scale, celsius) == 0


def test_metre_per_second_to_kilometre_per_hour(engine, si):
    assert math.isclose(
        engine.convert_unit(1, si["metre per second"], si["kilometre per hour"]), 3.6
    )


def test_different_trees_share_a_dimension(registry, si):
    newton_metre = registry.create_unit_multiplication(si["newton"], si["metre"])
    assert newton_metre.dimension == si["joule"].dimension
    assert newton_metre != si["joule"]


def test_equal_dimension_units_convert(engine, si):
    value = engine.convert_unit(1.0, si["kilowatt hour"], si["joule"])
    assert math.isclose(value, 3.6e6)
    assert math.isclose(engine.convert_unit(1.0, si["newton metre"], si["joule"]), 1.0)


# -- Properties -------------------------------------------------------------


def test_identity(engine, si):
    for unit in si.all_units():
        assert engine.convert_unit(42.5, unit, unit) == 42.5


@pytest.mark.parametrize(
    "source, target",
    [
        ("mile", "millimetre"),
        ("pound", "gram"),
        ("day", "millisecond"),
        ("litre", "cubic metre"),
        ("bar", "kilopascal"),
        ("kilowatt hour", "kilojoule"),
    ],
)
def test_round_trip(engine, si, source, target):
    there = engine.convert_unit(12.75, si[source], si[target])
    back = engine.convert_unit(there, si[target], si[source])
    assert math.isclose(back, 12.75, rel_tol=1e-9)


def test_scale_identity(engine, si):
    for scale in si.all_scales():
        assert engine.convert_scale(-17.5, scale, scale) == -17.5


@pytest.mark.parametrize(
    "source, target",
    [
        ("Fahrenheit scale", "Kelvin scale"),
        ("Celsius scale", "Rankine scale"),
        ("Rankine scale", "Fahrenheit scale"),
    ],
)
def test_scale_round_trip(engine, si, source, target):
    there = engine.convert_scale(98.6, si[source], si[target])
    back = engine.convert_scale(there, si[target], si[source])
    assert math.isclose(back, 98.6, rel_tol=1e-9)


def test_transitivity(engine, si):
    direct = engine.convert_unit(3.0, si["mile"], si["centimetre"])
    via_foot = engine.convert_unit(
        engine.convert_unit(3.0, si["mile"], si["foot"]), si["foot"], si["centimetre"]
    )
    assert math.isclose(direct, via_foot, rel_tol=1e-9)
    assert math.isclose(direct, 3 * 160934.4, rel_tol=1e-9)


def test_dimension_guard(engine, si):
    with pytest.raises(UnitConversionError) as excinfo:
        engine.convert_unit(1.0, si["metre"], si["kilogram"])
    assert excinfo.value.source is si["metre"]
    assert excinfo.value.target is si["kilogram"]
    assert "dimensions differ" in str(excinfo.value)


def test_missing_operands(engine, si):
    with pytest.raises(UnitConversionError):
        engine.convert_unit(1.0, None, si["metre"])
    with pytest.raises(UnitConversionError):
        engine.convert_unit(1.0, si["metre"], None)
    with pytest.raises(ScaleConversionError):
        engine.convert_scale(1.0, None, si["Kelvin scale"])


# -- Caching ----------------------------------------------------------------


def test_transform_is_reused(si):
    engine = CountingEngine()
    first = engine.convert_unit(7.0, si["mile"], si["metre"])
    assert engine.reductions == 2
    second = engine.convert_unit(7.0, si["mile"], si["metre"])
    assert first == second
    assert engine.reductions == 2
    engine.convert_unit(first, si["metre"], si["mile"])
    assert engine.reductions == 2
    assert engine.unit_cache.hits == 2


def test_reverse_transform_is_cached_by_default(engine, si):
    engine.convert_unit(1.0, si["hour"], si["second"])
    engine.convert_unit(1.0, si["second"], si["hour"])
    assert (si["second"].identifier, si["hour"].identifier) in engine.unit_cache
    assert len(engine.unit_cache) == 2


def test_reverse_transform_not_cached_when_disabled(si):
    engine = ConversionEngine(EngineSettings(cache_inverse=False))
    engine.convert_unit(1.0, si["hour"], si["second"])
    assert math.isclose(engine.convert_unit(3600.0, si["second"], si["hour"]), 1.0)
    assert len(engine.unit_cache) == 1


def test_concurrent_conversions_resolve_once(si):
    engine = CountingEngine()

    def convert(value):
        return engine.convert_unit(value, si["kilometre"], si["inch"])

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(convert, range(200)))

    assert engine.reductions == 2
    assert results[10] == engine.convert_unit(10, si["kilometre"], si["inch"])


# -- Failures ---------------------------------------------------------------


def test_reduction_failure_is_wrapped(engine, registry, si):
    negative = registry.create_unit_multiple(si["metre"], -2.0)
    root = registry.create_unit_exponentiation(negative, 0.5)
    target = registry.create_unit_exponentiation(si["metre"], 0.5)
    with pytest.raises(UnitConversionError) as excinfo:
        engine.convert_unit(1.0, root, target)
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.source is root
    assert len(engine.unit_cache) == 0


def test_malformed_scale_chain_is_wrapped(engine, registry, si):
    first = registry.create_scale(si["kelvin"])
    second = registry.create_scale(si["kelvin"], first)
    object.__setattr__(first, "definition_scale", second)
    with pytest.raises(ScaleConversionError) as excinfo:
        engine.convert_scale(1.0, second, si["Kelvin scale"])
    assert isinstance(excinfo.value.__cause__, ValueError)


# -- Exponentiation ----------------------------------------------------------


def test_exponentiation_offset_does_not_reach_values(engine, registry, si):
    square_centimetre = registry.create_unit_exponentiation(si["centimetre"], 2)
    assert engine.reduce_unit(si["square metre"]).offset == EXPONENTIATION_REDUCTION_OFFSET
    assert math.isclose(engine.convert_unit(1.0, si["square metre"], square_centimetre), 1e4)
    assert math.isclose(engine.convert_unit(2.0, si["litre"], si["cubic metre"]), 2e-3)


def test_exponentiation_keeps_accumulated_factor(engine, registry, si):
    scaled = registry.create_unit_multiple(si["square metre"], 3.0)
    assert math.isclose(engine.reduce_unit(scaled).factor, 3.0)
    per_second = registry.create_unit_exponentiation(si["millisecond"], -1)
    assert math.isclose(engine.convert_unit(1.0, per_second, si["hertz"]), 1000.0)


# -- Scales -----------------------------------------------------------------


def test_fahrenheit_and_rankine(engine, si):
    fahrenheit, celsius = si["Fahrenheit scale"], si["Celsius scale"]
    kelvin, rankine = si["Kelvin scale"], si["Rankine scale"]
    assert math.isclose(engine.convert_scale(212.0, fahrenheit, celsius), 100.0)
    assert math.isclose(engine.convert_scale(32.0, fahrenheit, kelvin), 273.15)
    assert math.isclose(engine.convert_scale(-40.0, celsius, fahrenheit), -40.0)
    assert math.isclose(engine.convert_scale(491.67, rankine, kelvin), 273.15)
    assert math.isclose(engine.convert_scale(0.0, rankine, fahrenheit), -459.67)


def test_reduce_scale_composes_chain(engine, si):
    transform = engine.reduce_scale(si["Fahrenheit scale"])
    assert math.isclose(transform.factor, 5 / 9)
    assert math.isclose(transform.offset, 273.15 - 160 / 9)
    assert engine.reduce_scale(si["Kelvin scale"]).factor == 1.0


def test_scales_on_unrelated_bases_are_refused(engine, registry, si):
    other = registry.create_scale(si["kelvin"], name="other base")
    with pytest.raises(ScaleConversionError) as excinfo:
        engine.convert_scale(10.0, si["Kelvin scale"], other)
    assert "different base scales" in str(excinfo.value)


def test_common_base_check_can_be_disabled(registry, si):
    engine = ConversionEngine(EngineSettings(scale_require_common_base=False))
    other = registry.create_scale(si["kelvin"], name="other base")
    assert engine.convert_scale(10.0, si["Kelvin scale"], other) == 10.0


def test_scale_dimension_guard(engine, registry, si):
    clock = registry.create_scale(si["second"])
    with pytest.raises(ConversionError):
        engine.convert_scale(1.0, clock, si["Kelvin scale"])
    assert clock.dimension == TIME


# -- Arrays, settings and logging --------------------------------------------


def test_array_conversion(engine, si):
    result = engine.convert_unit_array([1, 2, 3], si["kilometre"], si["metre"])
    np.testing.assert_allclose(result, [1000.0, 2000.0, 3000.0])
    temps = engine.convert_scale_array(
        np.array([0.0, 100.0]), si["Celsius scale"], si["Fahrenheit scale"]
    )
    np.testing.assert_allclose(temps, [32.0, 212.0])


def test_settings_from_environment(monkeypatch, si):
    monkeypatch.setenv("OMU_CACHE_INVERSE", "false")
    monkeypatch.setenv("OMU_SCALE_REQUIRE_COMMON_BASE", "0")
    engine = ConversionEngine()
    assert engine.settings.cache_inverse is False
    assert engine.settings.scale_require_common_base is False
    assert engine.settings.log_conversions is True


def test_resolved_conversions_are_logged(engine, si, caplog):
    caplog.set_level(logging.INFO, logger="omunits")
    token = bind_trace_id("trace-123")
    try:
        engine.convert_unit(1.0, si["foot"], si["metre"])
        engine.convert_unit(2.0, si["foot"], si["metre"])
    finally:
        reset_trace_id(token)

    payloads = [
        getattr(record, "payload", {})
        for record in caplog.records
        if record.getMessage() == "conversion resolved"
    ]
    assert len(payloads) == 1
    assert payloads[0]["kind"] == "unit"
    assert payloads[0]["source"] == si["foot"].identifier
    assert payloads[0]["trace_id"] == "trace-123"
    assert math.isclose(payloads[0]["factor"], 0.3048)


def test_logging_can_be_disabled(si, caplog):
    engine = ConversionEngine(EngineSettings(log_conversions=False))
    caplog.set_level(logging.INFO, logger="omunits")
    engine.convert_unit(1.0, si["foot"], si["metre"])
    assert not [r for r in caplog.records if r.getMessage() == "conversion resolved"]


def test_one_engine_per_registry(registry):
    other = UnitAndScaleRegistry()
    results = []
    for target, factor in ((registry, 1000.0), (other, 1609.344)):
        metre = target.create_base_unit(LENGTH, identifier="x:metre")
        long_unit = target.create_unit_multiple(metre, factor, identifier="x:long")
        results.append(ConversionEngine(EngineSettings()).convert_unit(1.0, long_unit, metre))
    assert results == [1000.0, 1609.344]
