"""Tests for dimensional analysis primitives."""

from fractions import Fraction

import pytest

from omunits.core.dimensions import (
    ACCELERATION,
    DIMENSIONLESS,
    ENERGY,
    FORCE,
    FREQUENCY,
    LENGTH,
    MASS,
    POWER,
    TIME,
    VELOCITY,
    Dimension,
    DimensionalError,
)


def test_dimension_creation():
    length = Dimension(length=1)
    assert length.length == 1
    assert not length.is_dimensionless()


def test_dimension_multiplication():
    result = LENGTH * TIME
    assert result.length == 1
    assert result.time == 1


def test_dimension_division():
    result = LENGTH / TIME
    assert result == VELOCITY


def test_dimension_power():
    area = LENGTH**2
    assert area.length == 2
    assert area.mass == 0


def test_fractional_power_is_exact():
    root = LENGTH**0.5
    assert root.length == Fraction(1, 2)
    assert root * root == LENGTH


def test_derived_dimensions():
    assert FORCE == MASS * ACCELERATION
    assert ENERGY == FORCE * LENGTH
    assert POWER == ENERGY / TIME
    assert FREQUENCY == TIME**-1


def test_dimensionless():
    assert DIMENSIONLESS.is_dimensionless()
    assert (LENGTH / LENGTH) == DIMENSIONLESS
    assert str(DIMENSIONLESS) == "dimensionless"


def test_equal_dimensions_share_hash():
    assert hash(MASS * LENGTH / TIME**2) == hash(FORCE)
    index = {FORCE: "force"}
    assert index[Dimension(length=1, mass=1, time=-2)] == "force"


def test_from_mapping_accepts_symbols_and_fields():
    assert Dimension.from_mapping({"L": 1, "T": -1}) == VELOCITY
    assert Dimension.from_mapping({"mass": 1}) == MASS
    with pytest.raises(DimensionalError):
        Dimension.from_mapping({"X": 1})


def test_as_dict_and_str():
    assert VELOCITY.as_dict() == {"L": 1, "T": -1}
    assert str(VELOCITY) == "L * T^-1"


def test_invalid_operands():
    with pytest.raises(DimensionalError):
        LENGTH * 2
    with pytest.raises(DimensionalError):
        Dimension(length=True)
    with pytest.raises(DimensionalError):
        LENGTH ** float("nan")
