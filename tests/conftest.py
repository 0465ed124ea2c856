"""Shared fixtures: an empty registry, the SI set installed in it, and an engine."""

import pytest

from omunits.config import EngineSettings
from omunits.conversion import ConversionEngine
from omunits.registry import UnitAndScaleRegistry
from omunits.sets import install_si


@pytest.fixture()
def registry():
    return UnitAndScaleRegistry()


@pytest.fixture()
def si(registry):
    return registry.add_unit_and_scale_set(install_si)


@pytest.fixture()
def engine():
    return ConversionEngine(EngineSettings())
