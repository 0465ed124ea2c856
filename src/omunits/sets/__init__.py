"""Prebuilt unit and scale sets, installed with ``registry.add_unit_and_scale_set``."""

from .si import SIUnitSet, install_si

__all__ = ["SIUnitSet", "install_si"]
