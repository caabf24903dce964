"""Consist file encodings: reader contracts plus the STF and TOML readers."""

from __future__ import annotations

from consist_formats.formats.base import ConsistReader, VehicleReader
from consist_formats.formats.simis import SimisConsistReader, SimisVehicleReader
from consist_formats.formats.toml_format import TomlConsistReader, TomlVehicleReader

__all__ = [
    "ConsistReader",
    "VehicleReader",
    "SimisConsistReader",
    "SimisVehicleReader",
    "TomlConsistReader",
    "TomlVehicleReader",
]
